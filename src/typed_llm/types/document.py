"""
Documents that can be embedded in a prompt template.

Documents are converted to content parts when the request is assembled.
Validation happens at conversion time so an invalid document fails the
request that uses it, with a typed ``ValidationError``.
"""

from __future__ import annotations

import base64
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field

from typed_llm.errors import ValidationError
from typed_llm.types.content import (
    SUPPORTED_AUDIO_FORMATS,
    AudioPart,
    ImagePart,
    TextPart,
)

DEFAULT_IMAGE_MIME_TYPE = "image/*"


class TextDocument(BaseModel):
    """A block of text inserted into the prompt as its own part."""

    model_config = ConfigDict(frozen=True)

    text: str

    def to_part(self) -> TextPart:
        return TextPart(text=self.text)


class ImageDocument(BaseModel):
    """An image, either by URL or as raw bytes.

    Examples:
        >>> ImageDocument.from_url("https://example.com/cat.png")
        >>> ImageDocument.from_bytes(png_bytes, "image/png")
    """

    model_config = ConfigDict(frozen=True)

    url: str | None = Field(default=None, description="Absolute image URL")
    data: bytes | None = Field(default=None, description="Raw image bytes")
    mime_type: str | None = Field(default=None, description="MIME type of data")

    @classmethod
    def from_url(cls, url: str) -> ImageDocument:
        return cls(url=url)

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str | None = None) -> ImageDocument:
        return cls(data=data, mime_type=mime_type)

    @classmethod
    def from_file(cls, path: str | Path, mime_type: str | None = None) -> ImageDocument:
        """Load an image from a local file."""
        file_path = Path(path)
        return cls(data=file_path.read_bytes(), mime_type=mime_type)

    def to_part(self) -> ImagePart:
        """Convert to an image content part.

        Raises:
            ValidationError: If neither or both of url/data are set, or the
                URL is not absolute
        """
        if (self.url is None) == (self.data is None):
            raise ValidationError(
                "Image document needs exactly one of url or data",
                field="image",
            )
        if self.url is not None:
            return ImagePart(url=_absolute_url(self.url))

        encoded = base64.standard_b64encode(self.data).decode("ascii")
        mime_type = self.mime_type or DEFAULT_IMAGE_MIME_TYPE
        return ImagePart(url=f"data:{mime_type};base64,{encoded}")


class AudioDocument(BaseModel):
    """An audio clip; ``metadata["format"]`` must be ``mp3`` or ``wav``."""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(description="Raw audio bytes")
    metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str | Path, format: str) -> AudioDocument:
        file_path = Path(path)
        return cls(data=file_path.read_bytes(), metadata={"format": format})

    def to_part(self) -> AudioPart:
        """Convert to an audio content part.

        Raises:
            ValidationError: If the format is missing or unsupported
        """
        fmt = self.metadata.get("format")
        if fmt is None:
            raise ValidationError(
                "Audio document metadata must specify a format",
                field="audio.metadata.format",
                expected=list(SUPPORTED_AUDIO_FORMATS),
            )
        if fmt not in SUPPORTED_AUDIO_FORMATS:
            raise ValidationError(
                f"Unsupported audio format: {fmt!r}",
                field="audio.metadata.format",
                expected=list(SUPPORTED_AUDIO_FORMATS),
                actual=fmt,
            )
        encoded = base64.standard_b64encode(self.data).decode("ascii")
        return AudioPart(format=fmt, base64_data=encoded)


Document = TextDocument | ImageDocument | AudioDocument

DOCUMENT_TYPES = (TextDocument, ImageDocument, AudioDocument)


def _absolute_url(url: str) -> str:
    parsed = urlparse(url)
    if parsed.scheme == "data" and parsed.path:
        return url
    if parsed.scheme in ("http", "https") and parsed.netloc:
        return url
    raise ValidationError(
        f"Image URL must be absolute: {url!r}",
        field="image.url",
        actual=url,
    )
