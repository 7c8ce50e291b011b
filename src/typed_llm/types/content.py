"""
Message content parts for multimodal chat requests.

Each part renders to the chat completions wire format:
- TextPart -> {"type": "text", "text": ...}
- ImagePart -> {"type": "image_url", "image_url": {"url": ...}}
- AudioPart -> {"type": "input_audio", "input_audio": {"data": ..., "format": ...}}
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

AudioFormat = Literal["mp3", "wav"]

SUPPORTED_AUDIO_FORMATS: tuple[str, ...] = ("mp3", "wav")


class TextPart(BaseModel):
    """Plain text segment."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str = Field(description="Text content")

    def to_wire(self) -> dict[str, Any]:
        return {"type": "text", "text": self.text}


class ImagePart(BaseModel):
    """Image referenced by an absolute URL or a base64 data URL."""

    model_config = ConfigDict(frozen=True)

    type: Literal["image"] = "image"
    url: str = Field(description="Absolute URL or data URL of the image")

    def to_wire(self) -> dict[str, Any]:
        return {"type": "image_url", "image_url": {"url": self.url}}


class AudioPart(BaseModel):
    """Inline base64 audio clip."""

    model_config = ConfigDict(frozen=True)

    type: Literal["audio"] = "audio"
    format: AudioFormat = Field(description="Audio container format")
    base64_data: str = Field(description="Base64 encoded audio bytes")

    def to_wire(self) -> dict[str, Any]:
        return {
            "type": "input_audio",
            "input_audio": {"data": self.base64_data, "format": self.format},
        }


DocumentContentPart = Annotated[
    Union[TextPart, ImagePart, AudioPart],
    Field(discriminator="type"),
]
