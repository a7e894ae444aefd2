"""Detect and convert Base64, URL-encoded, hex, and plain text."""

from b64kit.classifier import classify
from b64kit.codec import convert
from b64kit.formats import (
    ConversionOutcome,
    DetectionResult,
    ErrorKind,
    FormatKind,
    InputTooLargeError,
    InvalidFormatError,
    Selector,
)

__all__ = [
    "classify",
    "convert",
    "ConversionOutcome",
    "DetectionResult",
    "ErrorKind",
    "FormatKind",
    "InputTooLargeError",
    "InvalidFormatError",
    "Selector",
]

__version__ = "0.1.0"
