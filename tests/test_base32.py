from __future__ import annotations

import base64
import logging

import pytest

from totptool import base32
from totptool.trace import Trace

RFC_SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


def test_decode_rfc_secret() -> None:
    assert base32.decode(RFC_SECRET) == b"12345678901234567890"


def test_decode_empty_and_none() -> None:
    assert base32.decode("") == b""
    assert base32.decode(None) == b""


@pytest.mark.parametrize("src", ["=", "====", "!!!", " GEZD", "\n", "1", "8"])
def test_decode_only_invalid_characters_yields_nothing(src: str) -> None:
    assert base32.decode(src) == b""


def test_decode_stops_at_first_invalid_character() -> None:
    assert base32.decode("GEZD\n") == b"12"
    assert base32.decode("GEZD GNBV") == b"12"
    assert base32.decode("GEZD=GNBV") == b"12"


def test_decode_is_case_sensitive_by_default() -> None:
    assert base32.decode("gezd") == b""
    assert base32.decode("GEzd") == b"1"


def test_decode_casefold_accepts_lowercase() -> None:
    assert base32.decode(RFC_SECRET.lower(), casefold=True) == b"12345678901234567890"


def test_decode_padded_input() -> None:
    assert base32.decode("NBUQ====") == b"hi"
    assert base32.decode("NBSWY3DP") == b"hello"


@pytest.mark.parametrize("symbols,expected", [(1, 0), (2, 1), (3, 1), (4, 2), (5, 3), (6, 3), (7, 4), (8, 5), (9, 5)])
def test_decode_partial_group_byte_count(symbols: int, expected: int) -> None:
    assert len(base32.decode("B" * symbols)) == expected


def test_decode_canonical_length_matches_symbol_count() -> None:
    for size in (1, 2, 3, 4, 5, 10, 20, 33):
        data = bytes(range(100, 100 + size))
        text = base64.b32encode(data).decode("ascii")
        key = base32.decode(text)
        assert key == data
        assert len(key) == 5 * len(text.rstrip("=")) // 8


def test_decode_respects_max_len() -> None:
    assert base32.decode(RFC_SECRET, max_len=4) == b"1234"
    assert base32.decode(RFC_SECRET, max_len=0) == b""
    assert len(base32.decode("A" * 200)) == base32.MAX_KEY_LEN


def test_decode_negative_max_len() -> None:
    with pytest.raises(ValueError):
        base32.decode(RFC_SECRET, max_len=-1)


def test_decode_dumps_key_at_verbosity_two(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="totptool")
    base32.decode("GEZD", trace=Trace(1))
    assert not caplog.records
    base32.decode("GEZD", trace=Trace(2))
    assert [r.getMessage() for r in caplog.records] == ["Key: 3132"]


def test_decode_casefold_only_folds_ascii() -> None:
    # dotless i and long s upper-case to I and S outside ASCII
    assert base32.decode("ıııı", casefold=True) == b""
    assert base32.decode("ſſ", casefold=True) == b""
    assert base32.decode("geı", casefold=True) == b"1"


def test_decode_accepts_explicit_none_trace() -> None:
    assert base32.decode("GEZD", trace=None) == b"12"
