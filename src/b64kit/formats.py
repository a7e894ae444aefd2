"""Shared types for the classifier and codec chain.

- FormatKind: the four concrete encodings the engine understands.
- Selector: FormatKind plus ``auto``, using the external spellings
  ``auto | base64 | url | hex | text``.
- DetectionResult / ConversionOutcome: immutable results built fresh per call.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class FormatKind(str, Enum):
    BASE64 = "base64"
    URL = "url"
    HEX = "hex"
    TEXT = "text"

    @property
    def display_name(self) -> str:
        return DISPLAY_NAMES[self]


DISPLAY_NAMES: dict[FormatKind, str] = {
    FormatKind.BASE64: "Base64",
    FormatKind.URL: "URL Encoded",
    FormatKind.HEX: "Hexadecimal",
    FormatKind.TEXT: "Plain Text",
}

UNKNOWN_NAME = "Unknown"


class Selector(str, Enum):
    AUTO = "auto"
    BASE64 = "base64"
    URL = "url"
    HEX = "hex"
    TEXT = "text"

    @property
    def format_kind(self) -> FormatKind | None:
        if self is Selector.AUTO:
            return None
        return FormatKind(self.value)

    @classmethod
    def parse(cls, value: str | Selector | FormatKind) -> Selector:
        """Accept a Selector, a FormatKind, or a case-insensitive spelling."""
        if isinstance(value, Selector):
            return value
        if isinstance(value, FormatKind):
            return cls(value.value)
        key = str(value).strip().lower()
        try:
            return cls(key)
        except ValueError:
            choices = ", ".join(s.value for s in cls)
            raise ValueError(f"Unsupported format '{value}'. Choose from {choices}.") from None


class ErrorKind(str, Enum):
    INVALID_FORMAT_OR_CORRUPT_DATA = "invalid_format_or_corrupt_data"

    @property
    def message(self) -> str:
        return "Invalid format or corrupted data"


class InvalidFormatError(ValueError):
    """Raised by a transform when its input is not valid for the format."""

    def __init__(self, reason: str = "") -> None:
        self.kind = ErrorKind.INVALID_FORMAT_OR_CORRUPT_DATA
        self.reason = reason
        super().__init__(self.kind.message)


class InputTooLargeError(ValueError):
    """Raised before conversion when the input exceeds the configured limit."""

    def __init__(self, length: int, limit: int) -> None:
        self.length = length
        self.limit = limit
        super().__init__(f"Input has {length} characters; limit is {limit}.")


@dataclass(frozen=True)
class DetectionResult:
    format: FormatKind | None
    confidence: str

    @property
    def name(self) -> str:
        return self.format.display_name if self.format else UNKNOWN_NAME

    @property
    def label(self) -> str:
        return f"{self.name} ({self.confidence})"

    def to_dict(self) -> dict[str, Any]:
        return {
            "format": self.format.value if self.format else None,
            "name": self.name,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class ConversionOutcome:
    result_text: str = ""
    resolved_format: FormatKind | None = None
    detection_label: str | None = None
    error: ErrorKind | None = None

    @classmethod
    def empty(cls) -> ConversionOutcome:
        return cls()

    @classmethod
    def failure(
        cls, kind: ErrorKind = ErrorKind.INVALID_FORMAT_OR_CORRUPT_DATA
    ) -> ConversionOutcome:
        # A failure never carries a partial result or a detection label.
        return cls(error=kind)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def is_empty(self) -> bool:
        return self.ok and self.resolved_format is None

    @property
    def message(self) -> str | None:
        return self.error.message if self.error else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "result_text": self.result_text,
            "resolved_format": self.resolved_format.value if self.resolved_format else None,
            "detection_label": self.detection_label,
            "error": self.error.value if self.error else None,
            "message": self.message,
        }
