from __future__ import annotations

import logging
import re
import string
import unicodedata
from typing import Any, Callable

logger = logging.getLogger("ticketdir.naming.text")

# Named punctuation classes accepted by strip_punctuation()
UNICODE = "unicode"
ASCII = "ascii"

_ASCII_PUNCTUATION = frozenset(string.punctuation)
# Separators and characters refused by common filesystems
_PATH_ILLEGAL = frozenset('/\\<>:"|?*')
_WHITESPACE_RE = re.compile(r"\s+")


def to_text(value: Any) -> str:
    """Coerce a title-like value to text.

    ``None`` becomes the empty string. Bytes are decoded as UTF-8; bytes that
    are not valid UTF-8 are decoded one byte per character so that the
    offending characters are kept as they are instead of failing the ticket.
    """
    if value is None:
        return ""
    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as e:
            logger.warning(f"Title is not valid UTF-8, keeping raw characters: {e}")
            return bytes(value).decode("latin-1")
    return str(value)


def normalize(text: str) -> str:
    """Compose characters (NFC) so equivalent titles sanitize identically."""
    return unicodedata.normalize("NFC", text)


def trim(text: str) -> str:
    return text.strip()


def is_unicode_punctuation(ch: str) -> bool:
    """True for punctuation, symbols and control/format characters.

    Whitespace is never punctuation: it is handled by collapse_whitespace().
    """
    if ch.isspace():
        return False
    return unicodedata.category(ch)[0] in ("P", "S", "C")


def punctuation_predicate(punctuation: str) -> Callable[[str], bool]:
    """Return the membership test for a punctuation class.

    ``"unicode"`` and ``"ascii"`` name the built-in classes; any other string
    is taken literally as the set of characters to strip.
    """
    if punctuation == UNICODE:
        return is_unicode_punctuation
    if punctuation == ASCII:
        return _ASCII_PUNCTUATION.__contains__
    return frozenset(punctuation).__contains__


def strip_punctuation(text: str, punctuation: str = UNICODE) -> str:
    """Delete every character of the punctuation class (no substitution)."""
    is_punct = punctuation_predicate(punctuation)
    return "".join(ch for ch in text if not is_punct(ch))


def collapse_whitespace(text: str) -> str:
    """Turn every whitespace run into a single space and drop it at both ends."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def replace_all(text: str, old: str, new: str) -> str:
    return text.replace(old, new)


def lower(text: str) -> str:
    return text.lower()


def is_path_illegal(ch: str) -> bool:
    return ch in _PATH_ILLEGAL or unicodedata.category(ch) == "Cc"


def strip_path_illegal(text: str) -> str:
    """Delete path separators, reserved characters and control characters."""
    return "".join(ch for ch in text if not is_path_illegal(ch))


def sanitize(
    value: Any,
    punctuation: str = UNICODE,
    word_separator: str = "_",
    lowercase: bool = True,
) -> str:
    """Turn free-form title text into a filesystem-safe token.

    The steps run in a fixed order: trim, strip punctuation, collapse
    whitespace, join words with ``word_separator``, lowercase. Punctuation
    must go before whitespace is collapsed, otherwise removing a lone symbol
    between two spaces would leave a doubled separator behind.
    """
    text = normalize(to_text(value))
    text = trim(text)
    text = strip_punctuation(text, punctuation)
    text = collapse_whitespace(text)
    text = replace_all(text, " ", word_separator)
    if lowercase:
        text = lower(text)
    return strip_path_illegal(text)
