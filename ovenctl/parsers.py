"""Small text parsers used by the command line."""

from __future__ import annotations

import re

_DECIMAL = re.compile(r"[ \t\n\v\f\r]*([+-]?)([0-9]+)")
_HEXADECIMAL = re.compile(r"0x([0-9a-fA-F]+)")
_UINT32_MAX = 0xFFFFFFFF


def contains_template(text: str, template: str) -> bool:
    """Check whether ``template`` occurs in ``text``; ``*`` matches any character.

    Leading ``*`` characters of the template are ignored.  After a mismatch the
    comparison restarts at the next character of ``text``.
    """
    pattern = template.lstrip("*")
    if not pattern:
        return False
    matched = 0
    for char in text:
        if pattern[matched] == "*" or char == pattern[matched]:
            matched += 1
            if matched == len(pattern):
                return True
        else:
            matched = 0
    return False


def tokenize(text: str, delimiters: str, max_tokens: int) -> list[str]:
    """Split ``text`` at any of ``delimiters``, dropping empty tokens.

    At most ``max_tokens`` tokens are returned; the rest of the text is ignored.
    """
    if max_tokens < 1:
        raise ValueError("max_tokens must be at least 1")
    tokens: list[str] = []
    current: list[str] = []
    for char in text:
        if char in delimiters:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(char)
    if current:
        tokens.append("".join(current))
    return tokens[:max_tokens]


def parse_number(text: str) -> int:
    """Parse a decimal or ``0x``-prefixed hexadecimal number as a signed 32-bit value.

    Values beyond 32 bits saturate to all ones; an empty string parses as zero.
    """
    if text == "":
        return 0
    if text.startswith("0x"):
        match = _HEXADECIMAL.fullmatch(text)
        if match is None:
            raise ValueError(f"invalid hexadecimal number: {text!r}")
        negative = False
        magnitude = int(match.group(1), 16)
    else:
        match = _DECIMAL.fullmatch(text)
        if match is None:
            raise ValueError(f"invalid decimal number: {text!r}")
        negative = match.group(1) == "-"
        magnitude = int(match.group(2), 10)

    if magnitude > _UINT32_MAX:
        value = _UINT32_MAX
    elif negative:
        value = (-magnitude) & _UINT32_MAX
    else:
        value = magnitude
    return value - (1 << 32) if value >= (1 << 31) else value