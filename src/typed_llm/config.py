"""
Client configuration.

Connection settings for the chat completions endpoint. Values can be set
explicitly or read from ``TYPED_LLM_*`` environment variables.
"""

from __future__ import annotations

import os
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from typed_llm.errors import ValidationError

AuthStyle = Literal["bearer", "api-key"]

_DEFAULT_TIMEOUT = 60.0
_DEFAULT_MAX_TOKENS = 1024
_TRUE_VALUES = {"1", "true", "yes", "on"}


class ClientConfig(BaseModel):
    """Settings for ``StructuredClient``.

    Attributes:
        base_url: Endpoint base URL (e.g. ``https://api.openai.com/v1`` or an
            Azure deployment URL)
        api_key: API key; resolved from the environment when unset
        model: Model name sent in the payload (omit for Azure deployments)
        auth_style: ``bearer`` (Authorization header) or ``api-key`` header
        api_version: Sent as the ``api-version`` query parameter when set
        chat_path: Path of the chat completions endpoint
        timeout: Request timeout in seconds
        temperature: Default sampling temperature
        max_tokens: Default completion token limit
        verbose: Log outbound message content at DEBUG level
    """

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(description="Endpoint base URL")
    api_key: str | None = Field(default=None, repr=False)
    model: str | None = None
    auth_style: AuthStyle = "bearer"
    api_version: str | None = None
    chat_path: str = "/chat/completions"
    timeout: float = Field(default=_DEFAULT_TIMEOUT, gt=0)
    temperature: float = Field(default=0.0, ge=0.0, le=2.0)
    max_tokens: int = Field(default=_DEFAULT_MAX_TOKENS, gt=0)
    verbose: bool = False

    @classmethod
    def from_env(cls, prefix: str = "TYPED_LLM_") -> ClientConfig:
        """Build configuration from environment variables.

        Reads ``{prefix}BASE_URL``, ``API_KEY``, ``MODEL``, ``AUTH_STYLE``,
        ``API_VERSION``, ``TIMEOUT_SECS`` and ``VERBOSE``.

        Raises:
            ValidationError: If the base URL is missing or a value is invalid
        """
        base_url = os.getenv(f"{prefix}BASE_URL")
        if not base_url:
            raise ValidationError(
                f"{prefix}BASE_URL is not set",
                field=f"{prefix}BASE_URL",
            )

        values: dict[str, object] = {"base_url": base_url}
        optional = {
            "api_key": "API_KEY",
            "model": "MODEL",
            "auth_style": "AUTH_STYLE",
            "api_version": "API_VERSION",
        }
        for name, suffix in optional.items():
            env_value = os.getenv(f"{prefix}{suffix}")
            if env_value:
                values[name] = env_value

        timeout = os.getenv(f"{prefix}TIMEOUT_SECS")
        if timeout:
            try:
                values["timeout"] = float(timeout)
            except ValueError as e:
                raise ValidationError(
                    f"Invalid {prefix}TIMEOUT_SECS: {timeout!r}",
                    field=f"{prefix}TIMEOUT_SECS",
                    actual=timeout,
                ) from e

        verbose = os.getenv(f"{prefix}VERBOSE")
        if verbose:
            values["verbose"] = verbose.strip().lower() in _TRUE_VALUES

        try:
            return cls.model_validate(values)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid client configuration: {e.error_count()} error(s)",
                field=prefix.rstrip("_"),
                actual=str(e),
            ) from e
