"""Percent-encoding with the component rules browsers use."""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import quote, unquote_to_bytes

from contour_engine.core.models import CodecMode, UrlEncodeResult

# Characters left alone when encoding a URI component.
_COMPONENT_SAFE = "-_.!~*'()"

_ESCAPE = re.compile(r"%[0-9A-Fa-f]{2}")
_BROKEN_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def encode_component(text: str) -> str:
    return quote(text, safe=_COMPONENT_SAFE)


def decode_component(text: str) -> str:
    """Strict decoding: malformed escapes and invalid UTF-8 raise ``ValueError``."""
    if _BROKEN_ESCAPE.search(text):
        raise ValueError("malformed percent escape")
    return unquote_to_bytes(text).decode("utf-8")


def encode_url(text: str) -> UrlEncodeResult:
    if not text.strip():
        return UrlEncodeResult(input=text, encoded="", decoded="", mode="encode", is_partial=True)
    try:
        encoded = encode_component(text)
    except UnicodeEncodeError:
        return UrlEncodeResult(input=text, encoded="", decoded=text, mode="encode", error="Failed to encode")
    return UrlEncodeResult(input=text, encoded=encoded, decoded=text, mode="encode")


def decode_url(text: str) -> UrlEncodeResult:
    if not text.strip():
        return UrlEncodeResult(input=text, encoded="", decoded="", mode="decode", is_partial=True)
    try:
        decoded = decode_component(text)
    except ValueError:
        return UrlEncodeResult(
            input=text, encoded=text, decoded="", mode="decode", error="Invalid URL-encoded string"
        )
    return UrlEncodeResult(input=text, encoded=text, decoded=decoded, mode="decode")


def process_url(text: str, mode: CodecMode) -> UrlEncodeResult:
    return encode_url(text) if mode == "encode" else decode_url(text)


def detect_url_encoded(text: str) -> Optional[UrlEncodeResult]:
    trimmed = text.strip()
    if not trimmed or not _ESCAPE.search(trimmed):
        return None
    result = decode_url(trimmed)
    return None if result.error else result


__all__ = [
    "decode_component",
    "decode_url",
    "detect_url_encoded",
    "encode_component",
    "encode_url",
    "process_url",
]
