""" Unit tests for the prefix primitive and symbol sets. """

import pytest

from radix_trie.prefix import (BYTE_SYMBOLS, get_symbols, longest_common_prefix, prefix_byte_length, TEXT_SYMBOLS,
                               ValidationError)


@pytest.mark.parametrize("a, b, expected", [
    ("abab",   "abba",   ("ab", 2)),
    ("test",   "tester", ("test", 4)),
    ("tester", "test",   ("test", 4)),
    ("same",   "same",   ("same", 4)),
    ("x",      "y",      ("", 0)),
    ("",       "abc",    ("", 0)),
    ("abc",    "",       ("", 0)),
    ("ðomum",  "ðomulus", ("ðomu", 4)),
    (b"abab",  b"abba",  (b"ab", 2)),
])
def test_longest_common_prefix(a, b, expected) -> None:
    assert longest_common_prefix(a, b) == expected


def test_text_prefix_never_splits_characters() -> None:
    """ "ð" and "ñ" share a lead byte in UTF-8, but as text they have nothing in common. """
    assert longest_common_prefix("ðx", "ñx") == ("", 0)
    assert longest_common_prefix("ðx".encode(), "ñx".encode()) == (b"\xc3", 1)
    prefix, n = longest_common_prefix("日本語", "日本")
    assert n == 2
    assert prefix_byte_length(prefix) == 6
    assert prefix_byte_length(b"\xc3") == 1


def test_text_symbols() -> None:
    assert TEXT_SYMBOLS.convert("abc") == "abc"
    assert TEXT_SYMBOLS.convert("ðom".encode('utf-8')) == "ðom"
    assert TEXT_SYMBOLS.convert(bytearray(b"ab")) == "ab"
    assert TEXT_SYMBOLS.convert("") == ""
    for bad in [b"\xff\xfe", "lone \ud800 surrogate", 5, None, ("a",)]:
        with pytest.raises(ValidationError):
            TEXT_SYMBOLS.convert(bad)
        assert TEXT_SYMBOLS.try_convert(bad) is None
    with pytest.raises(ValidationError):
        TEXT_SYMBOLS.validate("")


def test_byte_symbols() -> None:
    assert BYTE_SYMBOLS.convert(b"\xff") == b"\xff"
    assert BYTE_SYMBOLS.convert("ð") == b"\xc3\xb0"
    assert BYTE_SYMBOLS.convert(bytearray(b"x")) == b"x"
    for bad in ["\udfff", 1.5]:
        with pytest.raises(ValidationError):
            BYTE_SYMBOLS.convert(bad)
    with pytest.raises(ValidationError):
        BYTE_SYMBOLS.validate(b"")


def test_get_symbols() -> None:
    assert get_symbols("text") is TEXT_SYMBOLS
    assert get_symbols("bytes") is BYTE_SYMBOLS
    with pytest.raises(ValueError):
        get_symbols("nibbles")
