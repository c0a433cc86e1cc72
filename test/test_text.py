"""Tests for the title sanitization helpers."""

from __future__ import annotations

import logging

from ticketdir.naming import text


def test_strip_punctuation_deletes_without_substituting():
    assert text.strip_punctuation("Hello,World!") == "HelloWorld"


def test_unicode_class_covers_symbols_dashes_and_underscore():
    assert text.strip_punctuation("a—b_c|d<e>f«g»h$i") == "abcdefghi"


def test_unicode_class_keeps_letters_digits_and_whitespace():
    assert text.strip_punctuation("Été 2024\tok") == "Été 2024\tok"


def test_ascii_class_keeps_non_ascii_punctuation():
    assert text.strip_punctuation("a—b, c", text.ASCII) == "a—b c"


def test_literal_class_strips_only_given_characters():
    assert text.strip_punctuation("a!b,c", "!") == "ab,c"


def test_collapse_whitespace_handles_tabs_newlines_and_nbsp():
    assert text.collapse_whitespace(" a \t\n b  c ") == "a b c"


def test_strip_path_illegal():
    assert text.strip_path_illegal('a/b\\c:d*e?f"g<h>i|j\x00k') == "abcdefghijk"


def test_to_text_none_is_empty():
    assert text.to_text(None) == ""


def test_to_text_decodes_utf8_bytes():
    assert text.to_text("äè".encode("utf-8")) == "äè"


def test_to_text_keeps_undecodable_bytes(caplog):
    with caplog.at_level(logging.WARNING, logger="ticketdir.naming.text"):
        assert text.to_text(b"Caf\xe9 Bar") == "Café Bar"
    assert "not valid UTF-8" in caplog.text


def test_sanitize_order_of_steps():
    assert text.sanitize("  Hello ,  World !! ") == "hello_world"


def test_sanitize_normalizes_decomposed_characters():
    assert text.sanitize("Cafe\u0301") == text.sanitize("Caf\u00e9") == "caf\u00e9"


def test_sanitize_without_lowercase():
    assert text.sanitize("Hello World", lowercase=False) == "Hello_World"


def test_sanitize_custom_word_separator():
    assert text.sanitize("one two  three", word_separator="-") == "one-two-three"


def test_lower_is_idempotent():
    for value in ("ÄÖÜ", "İstanbul", "ΣΊΣΥΦΟΣ", "straße"):
        once = text.lower(value)
        assert text.lower(once) == once
