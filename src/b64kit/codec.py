"""Codec chain: run the transform that matches a detected or selected format.

Base64, URL and hex inputs are decoded to UTF-8 text. Plain text goes the
other way and is encoded to Base64. Every failure collapses into one
``InvalidFormatError`` so callers see a single flat error.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from urllib.parse import unquote

from b64kit.classifier import HEX_RE, classify, is_blank, strip_whitespace
from b64kit.formats import (
    ConversionOutcome,
    FormatKind,
    InputTooLargeError,
    InvalidFormatError,
    Selector,
)

logger = logging.getLogger(__name__)

# A '%' not followed by two hex digits is a malformed escape.
BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _utf8(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidFormatError(f"decoded bytes are not UTF-8: {exc.reason}") from exc


def decode_base64(text: str) -> str:
    """Decode standard-alphabet, padded Base64 (whitespace ignored) to UTF-8 text."""
    compact = strip_whitespace(text)
    try:
        data = base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidFormatError(f"bad base64: {exc}") from exc
    return _utf8(data)


def decode_url(text: str) -> str:
    """Percent-decode to UTF-8 text. ``+`` is left alone."""
    if BAD_ESCAPE_RE.search(text):
        raise InvalidFormatError("malformed percent escape")
    try:
        return unquote(text, encoding="utf-8", errors="strict")
    except UnicodeDecodeError as exc:
        raise InvalidFormatError(f"decoded bytes are not UTF-8: {exc.reason}") from exc


def decode_hex(text: str) -> str:
    compact = strip_whitespace(text)
    if compact and HEX_RE.fullmatch(compact) is None:
        raise InvalidFormatError("non-hex character")
    if len(compact) % 2:
        raise InvalidFormatError("odd number of hex digits")
    return _utf8(bytes.fromhex(compact))


def encode_text(text: str) -> str:
    """UTF-8 encode ``text`` and return its padded Base64 form."""
    try:
        data = text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidFormatError(f"text is not encodable as UTF-8: {exc.reason}") from exc
    return base64.b64encode(data).decode("ascii")


def transform(text: str, fmt: FormatKind) -> str:
    """Apply the per-format action. Plain text encodes; everything else decodes."""
    if fmt is FormatKind.BASE64:
        return decode_base64(text)
    if fmt is FormatKind.URL:
        return decode_url(text)
    if fmt is FormatKind.HEX:
        return decode_hex(text)
    if fmt is FormatKind.TEXT:
        return encode_text(text)
    raise ValueError(f"Unhandled format: {fmt!r}")


def convert(
    text: str,
    selector: Selector | FormatKind | str = Selector.AUTO,
    *,
    max_chars: int | None = None,
) -> ConversionOutcome:
    """Convert ``text`` according to ``selector`` and return the outcome.

    ``auto`` runs the classifier first and labels the outcome with its
    confidence; an explicit selector skips it and labels the outcome as manual.
    Whitespace-only input produces the empty outcome.
    """
    sel = Selector.parse(selector)
    if max_chars is not None and len(text) > max_chars:
        raise InputTooLargeError(len(text), max_chars)
    if is_blank(text):
        return ConversionOutcome.empty()

    if sel is Selector.AUTO:
        detection = classify(text)
        fmt = detection.format or FormatKind.TEXT
        label = detection.label
    else:
        fmt = sel.format_kind or FormatKind.TEXT
        label = f"{fmt.display_name} (manual)"

    try:
        result = transform(text, fmt)
    except InvalidFormatError as exc:
        logger.debug("%s transform failed: %s", fmt.value, exc.reason)
        return ConversionOutcome.failure(exc.kind)
    return ConversionOutcome(result_text=result, resolved_format=fmt, detection_label=label)
