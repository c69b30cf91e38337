"""Message digests of typed text."""

from __future__ import annotations

import hashlib

from contour_engine.core.models import HashResult

ALGORITHMS = ("md5", "sha1", "sha256", "sha512")


def create_hash_result(text: str) -> HashResult:
    """MD5, SHA-1, SHA-256 and SHA-512 of the UTF-8 bytes of ``text``."""
    if not text.strip():
        return HashResult(input=text, is_partial=True)
    try:
        data = text.encode("utf-8")
    except UnicodeEncodeError:
        return HashResult(input=text, error="Failed to generate hashes")
    digests = {name: hashlib.new(name, data).hexdigest() for name in ALGORITHMS}
    return HashResult(input=text, **digests)


__all__ = ["ALGORITHMS", "create_hash_result"]
