"""String helpers: splitting, trimming, searching, replacing and a character feeder."""

from __future__ import annotations

import os
import re
from typing import Iterable, List, Mapping, Optional

__all__ = [
    "StringFeeder",
    "split",
    "split_spaces",
    "diff_index",
    "trim",
    "lstrip",
    "rstrip",
    "index_of",
    "last_index_of",
    "ascii_lower",
    "ascii_upper",
    "starts_with_any",
    "matches_any",
    "substring",
    "replace",
    "replace_many",
    "expand_envs",
]

# The characters the C locale treats as white space.
_WHITESPACE = " \t\n\v\f\r"

_UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_LOWER = "abcdefghijklmnopqrstuvwxyz"
_TO_LOWER = str.maketrans(_UPPER, _LOWER)
_TO_UPPER = str.maketrans(_LOWER, _UPPER)

_ENV_REFERENCE = re.compile(r"\$([A-Za-z0-9_]*)")


def split(text: str, delim: str) -> List[str]:
    """Split ``text`` at each occurrence of ``delim``, dropping empty parts.

    An empty delimiter never matches, so the whole (non-empty) text is the
    only part.  A text made only of delimiters gives an empty list.
    """
    if not delim:
        return [text] if text else []
    return [part for part in text.split(delim) if part]


def split_spaces(text: str) -> List[str]:
    """Split ``text`` on runs of one or more space characters."""
    return [part for part in text.split(" ") if part]


def diff_index(a: str, b: str) -> int:
    """Index of the first character at which ``a`` and ``b`` differ.

    When one string is a prefix of the other, that is the shorter length.
    """
    for i, (x, y) in enumerate(zip(a, b)):
        if x != y:
            return i
    return min(len(a), len(b))


def trim(text: str) -> str:
    """Remove white space from both ends."""
    return text.strip(_WHITESPACE)


def lstrip(text: str) -> str:
    """Remove white space from the start."""
    return text.lstrip(_WHITESPACE)


def rstrip(text: str) -> str:
    """Remove white space from the end."""
    return text.rstrip(_WHITESPACE)


def index_of(haystack: str, needle: str) -> int:
    """Index of the first occurrence of ``needle``, or -1."""
    return haystack.find(needle)


def last_index_of(haystack: str, needle: str) -> int:
    """Index of the last occurrence of ``needle``, or -1."""
    return haystack.rfind(needle)


def ascii_lower(text: str) -> str:
    """Lower-case the ASCII letters A-Z only."""
    return text.translate(_TO_LOWER)


def ascii_upper(text: str) -> str:
    """Upper-case the ASCII letters a-z only."""
    return text.translate(_TO_UPPER)


def starts_with_any(haystack: str, needles: Iterable[str]) -> bool:
    """True if ``haystack`` starts with any of ``needles``; "" matches anything."""
    return any(haystack.startswith(needle) for needle in needles)


def matches_any(haystack: str, needles: Iterable[str]) -> bool:
    """True if ``haystack`` equals any of ``needles``."""
    return any(haystack == needle for needle in needles)


def substring(text: str, start: int, end: int = -1) -> str:
    """Characters ``start`` through ``end - 1``; a negative ``end`` means the text's end."""
    length = len(text)
    if not 0 <= start <= length:
        raise IndexError(f"start index {start} out of range for length {length}")
    if end < 0:
        end = length
    elif not start <= end <= length:
        raise IndexError(f"end index {end} out of range {start}..{length}")
    return text[start:end]


def replace(haystack: str, needle: str, replacement: str) -> str:
    """Replace every occurrence of ``needle``, scanning left to right.

    An empty needle matches only an empty haystack.
    """
    if not needle:
        return replacement if not haystack else haystack
    return haystack.replace(needle, replacement)


def replace_many(haystack: str, *args: str) -> str:
    """Apply ``replace`` for each (needle, replacement) pair in turn."""
    if len(args) % 2:
        raise ValueError("replace_many needs needle/replacement pairs")
    result = haystack
    for needle, replacement in zip(args[::2], args[1::2]):
        result = replace(result, needle, replacement)
    return result


def expand_envs(text: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Replace each ``$NAME`` with its environment value.

    Names are made of letters, digits and underscores.  An unset variable
    expands to nothing.  ``environ`` defaults to the process environment.
    """
    env = os.environ if environ is None else environ
    return _ENV_REFERENCE.sub(lambda m: env.get(m.group(1), ""), text)


class StringFeeder:
    """Walks through a string one character at a time, tracking line and column.

    ``line`` starts at 1 and grows with each newline consumed; ``column``
    counts the characters consumed since the last newline.
    """

    def __init__(self, text: str):
        self.text = str(text)
        self.pos = 0
        self.line = 1
        self.column = 0

    def has_next(self) -> bool:
        """True while at least one character remains."""
        return self.pos < len(self.text)

    def next(self) -> str:
        """Consume and return the next character."""
        if not self.has_next():
            raise IndexError("no characters left to read")
        c = self.text[self.pos]
        self.pos += 1
        if c == "\n":
            self.line += 1
            self.column = 0
        else:
            self.column += 1
        return c

    def next_length(self, length: int) -> str:
        """Consume up to ``length`` characters and return them."""
        if length < 0:
            raise ValueError("length must be non-negative")
        count = min(length, len(self.text) - self.pos)
        return "".join(self.next() for _ in range(count))

    def peek(self) -> str:
        """The next character without consuming it, or "" at the end."""
        return self.text[self.pos:self.pos + 1]

    def peek_length(self, length: int) -> str:
        """Up to ``length`` upcoming characters without consuming them."""
        if length < 0:
            raise ValueError("length must be non-negative")
        return self.text[self.pos:self.pos + length]

    def starts_with(self, prefix: str) -> bool:
        """True if the remaining text starts with ``prefix``."""
        return self.text.startswith(prefix, self.pos)

    def require(self, expected: str) -> None:
        """Consume ``expected`` exactly, raising ValueError on any mismatch."""
        for want in expected:
            if not self.has_next():
                raise ValueError(f"expected {want!r} but reached the end of the text")
            got = self.next()
            if got != want:
                raise ValueError(
                    f"expected {want!r} but found {got!r} at line {self.line}, "
                    f"column {self.column}"
                )