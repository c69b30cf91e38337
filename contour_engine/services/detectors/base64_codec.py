"""Base64 encoding and decoding of UTF-8 text."""

from __future__ import annotations

import base64
import binascii
import re
from typing import Optional

from contour_engine.core.models import Base64Result, CodecMode

MIN_AUTODETECT_LENGTH = 8

_BASE64 = re.compile(r"^[A-Za-z0-9+/]+={0,2}$")


def is_base64(text: str) -> bool:
    return len(text) >= 4 and len(text) % 4 == 0 and bool(_BASE64.match(text))


def encode_base64(text: str) -> Base64Result:
    if not text.strip():
        return Base64Result(input=text, encoded="", decoded="", mode="encode", is_partial=True)
    try:
        encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
    except UnicodeEncodeError:
        return Base64Result(input=text, encoded="", decoded=text, mode="encode", error="Failed to encode")
    return Base64Result(input=text, encoded=encoded, decoded=text, mode="encode")


def decode_base64(text: str) -> Base64Result:
    if not text.strip():
        return Base64Result(input=text, encoded="", decoded="", mode="decode", is_partial=True)
    try:
        decoded = base64.b64decode(text, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return Base64Result(
            input=text, encoded=text, decoded="", mode="decode", error="Invalid Base64 string"
        )
    return Base64Result(input=text, encoded=text, decoded=decoded, mode="decode")


def process_base64(text: str, mode: CodecMode) -> Base64Result:
    return encode_base64(text) if mode == "encode" else decode_base64(text)


def detect_base64(text: str) -> Optional[Base64Result]:
    """Auto-decode only strings that are unambiguously base64 text."""
    trimmed = text.strip()
    if len(trimmed) < MIN_AUTODETECT_LENGTH or not is_base64(trimmed):
        return None
    result = decode_base64(trimmed)
    return None if result.error else result


__all__ = ["decode_base64", "detect_base64", "encode_base64", "is_base64", "process_base64"]
