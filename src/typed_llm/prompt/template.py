"""
Prompt templates of interleaved literal text and embedded values.

A template is an ordered sequence of parts. Literal strings and scalar
values become text; documents (and sequences of documents) become their
own content parts.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from typed_llm.errors import ValidationError


@dataclass(frozen=True)
class PromptTemplate:
    """An immutable prompt template.

    Examples:
        >>> PromptTemplate.of("Summarize ", doc, " in ", 3, " bullet points")
        >>> PromptTemplate.interleave(["Describe ", " briefly"], [image])
    """

    parts: tuple[Any, ...]

    @classmethod
    def of(cls, *parts: Any) -> PromptTemplate:
        """Create a template from parts given in order.

        Strings are literal text; any other value is embedded.
        """
        return cls(parts=tuple(parts))

    @classmethod
    def interleave(
        cls,
        strings: Sequence[str],
        values: Sequence[Any] = (),
    ) -> PromptTemplate:
        """Create a template from literal strings with values between them.

        Args:
            strings: Literal text segments; one more than ``values``
            values: Values embedded between consecutive strings

        Raises:
            ValidationError: If the segment counts do not interleave
        """
        if len(strings) != len(values) + 1:
            raise ValidationError(
                "Template needs exactly one more string than values",
                field="strings",
                expected=len(values) + 1,
                actual=len(strings),
            )
        parts: list[Any] = []
        for text, value in zip(strings, values):
            parts.append(text)
            parts.append(value)
        parts.append(strings[-1])
        return cls(parts=tuple(parts))

    @classmethod
    def coerce(cls, template: PromptTemplate | str | Sequence[Any]) -> PromptTemplate:
        """Accept a template, a plain string, or a sequence of parts."""
        if isinstance(template, PromptTemplate):
            return template
        if isinstance(template, str):
            return cls.of(template)
        return cls.of(*template)
