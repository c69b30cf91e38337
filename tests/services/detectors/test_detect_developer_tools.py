"""Tests for the JSON, Base64, URL, hash and regex modules."""

from contour_engine.services.detectors import regex_tester
from contour_engine.services.detectors.base64_codec import (
    decode_base64,
    detect_base64,
    encode_base64,
    is_base64,
    process_base64,
)
from contour_engine.services.detectors.hashing import create_hash_result
from contour_engine.services.detectors.json_format import count_keys, detect_json, format_json, json_depth
from contour_engine.services.detectors.url_codec import (
    decode_url,
    detect_url_encoded,
    encode_component,
    encode_url,
    process_url,
)


def test_format_json_valid():
    """Valid JSON is pretty-printed, minified and measured."""
    result = format_json('{ "a": {"b": [1, 2]}, "c": "é" }')
    assert result.is_valid is True
    assert result.minified == '{"a":{"b":[1,2]},"c":"é"}'
    assert result.formatted.startswith('{\n  "a": {\n    "b": [')
    assert result.key_count == 3
    assert result.depth == 3


def test_format_json_invalid():
    """Parse errors are reported and the input echoed."""
    result = format_json('{"a":}')
    assert result.is_valid is False
    assert result.error
    assert result.formatted == '{"a":}'
    nan = format_json("[NaN]")
    assert nan.is_valid is False
    assert nan.error == "Unexpected token NaN in JSON"


def test_json_helpers_and_detection():
    """Only bracketed input with a closing bracket is detected."""
    assert count_keys([{"a": 1}, {"b": {"c": 2}}]) == 3
    assert json_depth({}) == 0
    assert detect_json("{hello") is None
    assert detect_json("hello {}") is None
    detected = detect_json("[1, 2]")
    assert detected is not None and detected.is_valid
    assert format_json("  ").is_partial is True


def test_base64_round_trip_and_errors():
    """Encoding and decoding handle UTF-8 and reject malformed input."""
    assert encode_base64("hello").encoded == "aGVsbG8="
    assert decode_base64("aGVsbG8=").decoded == "hello"
    assert process_base64("héllo", "encode").output == "aMOpbGxv"
    bad = decode_base64("not base64!")
    assert bad.error == "Invalid Base64 string"
    assert bad.is_partial is False
    assert encode_base64("").is_partial is True


def test_base64_detection():
    """Only long, well-formed base64 that decodes to text is detected."""
    assert is_base64("aGVsbG8=")
    assert not is_base64("abc")
    detected = detect_base64("aGVsbG8gd29ybGQ=")
    assert detected is not None and detected.decoded == "hello world"
    assert detect_base64("abcd") is None
    assert detect_base64("password") is None


def test_url_encoding():
    """Component encoding escapes reserved characters."""
    assert encode_component("hello world & more") == "hello%20world%20%26%20more"
    assert encode_component("it's (fine)!") == "it's%20(fine)!"
    assert encode_url("a/b?c=d").encoded == "a%2Fb%3Fc%3Dd"
    assert process_url("%E4%BD%A0", "decode").output == "你"


def test_url_decoding_is_strict():
    """Broken escapes and invalid UTF-8 are errors."""
    assert decode_url("50%off").error == "Invalid URL-encoded string"
    assert decode_url("%E4%BD").error == "Invalid URL-encoded string"
    assert detect_url_encoded("hello%20world") is not None
    assert detect_url_encoded("100%") is None
    assert detect_url_encoded("hello world") is None


def test_hash_digests():
    """All four digests are computed for non-blank text."""
    result = create_hash_result("abc")
    assert result.md5 == "900150983cd24fb0d6963f7d28e17f72"
    assert result.sha1 == "a9993e364706816aba3e25717850c26c9cd0d89d"
    assert result.sha256 == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    assert result.sha512 is not None and len(result.sha512) == 128
    assert create_hash_result("   ").is_partial is True


def test_regex_matches():
    """All matches are returned with positions."""
    result = regex_tester.test_regex(r"\d+", "a1b22")
    assert result.is_valid is True
    assert [(m.match, m.index, m.length) for m in result.matches] == [("1", 1, 1), ("22", 3, 2)]
    assert result.match_count == 2
    assert result.matches[0].groups is None


def test_regex_named_groups_and_flags():
    """Named groups are captured and flags change matching."""
    result = regex_tester.test_regex(r"(?P<year>\d{4})-(?P<month>\d{2})", "on 2026-10 we ship")
    assert result.matches[0].groups == {"year": "2026", "month": "10"}
    assert regex_tester.test_regex("b", "ABC", "i").match_count == 1
    assert regex_tester.test_regex("b", "ABC", "g").match_count == 0


def test_regex_errors_and_partials():
    """Bad patterns or flags are errors; missing input is partial."""
    bad = regex_tester.test_regex("(", "x")
    assert bad.is_valid is False and bad.error
    flag = regex_tester.test_regex("a", "a", "x")
    assert flag.error == "Invalid flag 'x'"
    assert regex_tester.test_regex("", "abc").is_partial is True
    assert regex_tester.test_regex("a", "").is_partial is True


def test_regex_presets_match_their_samples():
    """Every preset finds at least two matches in its sample."""
    for preset in regex_tester.REGEX_PRESETS:
        assert regex_tester.test_regex(preset.pattern, preset.test).match_count >= 2


ROUND_TRIP_SAMPLES = [
    "plain ascii",
    "héllo wörld",
    "🎉 party 🥳",
    "你好，世界",
    "こんにちは",
    "line one\nline two\ttabbed",
    "a+b=c & d/e?f#g%h",
    "Здравствуйте",
]


def test_base64_decode_inverts_encode():
    """Decoding an encoded string gives back the original text."""
    for sample in ROUND_TRIP_SAMPLES:
        encoded = encode_base64(sample)
        assert encoded.error is None
        assert decode_base64(encoded.encoded).decoded == sample


def test_url_decode_inverts_encode():
    for sample in ROUND_TRIP_SAMPLES:
        encoded = encode_url(sample)
        assert encoded.error is None
        assert decode_url(encoded.encoded).decoded == sample
