"""Rule-based format classifier.

Rules are checked in a fixed order and the first match wins:
- Base64: whitespace-stripped text uses the standard alphabet with at most two
  ``=`` pads and its length is a multiple of 4.
- URL encoded: raw text contains ``%`` and only URL-safe punctuation.
- Hexadecimal: whitespace-stripped text is hex digits of even length.
- Plain text: everything else.

Confidence labels are fixed tags per rule, not computed statistics. Plain text
outranks hex and URL; that ordering is kept as-is.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from b64kit.formats import DetectionResult, FormatKind

logger = logging.getLogger(__name__)

# U+FEFF counts as whitespace so a BOM-prefixed paste still classifies.
WHITESPACE_RE = re.compile(r"[\s\ufeff]+")
BASE64_RE = re.compile(r"[A-Za-z0-9+/]*={0,2}")
URL_ENCODED_RE = re.compile(r"[A-Za-z0-9%._~:/?#\[\]@!$&'()*+,;=-]*")
HEX_RE = re.compile(r"[0-9A-Fa-f]+")

CONFIDENCE: dict[FormatKind | None, str] = {
    None: "0%",
    FormatKind.BASE64: "95%",
    FormatKind.URL: "85%",
    FormatKind.HEX: "80%",
    FormatKind.TEXT: "90%",
}


def is_blank(text: str) -> bool:
    return not strip_whitespace(text)


def strip_whitespace(text: str) -> str:
    return WHITESPACE_RE.sub("", text)


def looks_like_base64(text: str) -> bool:
    compact = strip_whitespace(text)
    return BASE64_RE.fullmatch(compact) is not None and len(compact) % 4 == 0


def looks_like_url_encoded(text: str) -> bool:
    return "%" in text and URL_ENCODED_RE.fullmatch(text) is not None


def looks_like_hex(text: str) -> bool:
    compact = strip_whitespace(text)
    return HEX_RE.fullmatch(compact) is not None and len(compact) % 2 == 0


RULES: tuple[tuple[FormatKind, Callable[[str], bool]], ...] = (
    (FormatKind.BASE64, looks_like_base64),
    (FormatKind.URL, looks_like_url_encoded),
    (FormatKind.HEX, looks_like_hex),
)


def _result(fmt: FormatKind | None) -> DetectionResult:
    return DetectionResult(format=fmt, confidence=CONFIDENCE[fmt])


def classify(text: str) -> DetectionResult:
    """Return the best-guess format for ``text``."""
    if is_blank(text):
        return _result(None)
    for fmt, rule in RULES:
        if rule(text):
            logger.debug("classified %d chars as %s", len(text), fmt.value)
            return _result(fmt)
    logger.debug("no encoding rule matched %d chars; falling back to plain text", len(text))
    return _result(FormatKind.TEXT)
