"""Lenient JSON reader for hand-written webjar metadata.

Webjar descriptors (especially the ``<requirejs>`` block embedded in legacy
pom files) are often JavaScript object literals rather than JSON: unquoted
keys, single-quoted strings, comments and trailing commas all occur in the
wild. ``loads`` rewrites such text into strict JSON and hands it to
:mod:`json`.
"""

from __future__ import annotations

import json
from typing import Any, List

_BARE_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_$.+-"
)
_WHITESPACE = " \t\r\n\f\v\ufeff"


def _is_bare(ch: str) -> bool:
    return ch in _BARE_CHARS or ch.isalnum()


class LenientJsonError(ValueError):
    """Raised when text cannot be read even with the relaxed grammar."""


def _skip_comment(text: str, i: int) -> int:
    """Return the index after the comment starting at ``i`` (or ``i``)."""
    if text.startswith("//", i):
        end = text.find("\n", i)
        return len(text) if end == -1 else end + 1
    if text.startswith("/*", i):
        end = text.find("*/", i + 2)
        if end == -1:
            raise LenientJsonError(f"Unterminated comment at offset {i}")
        return end + 2
    return i


def _skip_insignificant(text: str, i: int) -> int:
    while i < len(text):
        if text[i] in _WHITESPACE:
            i += 1
            continue
        nxt = _skip_comment(text, i)
        if nxt == i:
            break
        i = nxt
    return i


def _read_double_quoted(text: str, i: int) -> int:
    """Return the index just past the closing quote of the string at ``i``."""
    j = i + 1
    while j < len(text):
        ch = text[j]
        if ch == "\\":
            j += 2
            continue
        if ch == '"':
            return j + 1
        j += 1
    raise LenientJsonError(f"Unterminated string at offset {i}")


def _convert_single_quoted(text: str, i: int, out: List[str]) -> int:
    """Append the single-quoted string at ``i`` as a JSON string."""
    j = i + 1
    buf = ['"']
    while j < len(text):
        ch = text[j]
        if ch == "\\" and j + 1 < len(text):
            nxt = text[j + 1]
            # \' is not a JSON escape
            buf.append("'" if nxt == "'" else ch + nxt)
            j += 2
            continue
        if ch == "'":
            buf.append('"')
            out.append("".join(buf))
            return j + 1
        buf.append('\\"' if ch == '"' else ch)
        j += 1
    raise LenientJsonError(f"Unterminated string at offset {i}")


def _drop_trailing_comma(out: List[str]) -> None:
    while out and not out[-1].strip():
        out.pop()
    if out and out[-1] == ",":
        out.pop()


def to_strict_json(text: str) -> str:
    """Rewrite lenient JSON ``text`` into strict JSON text."""
    out: List[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in _WHITESPACE:
            i += 1
        elif ch == "/" and (text.startswith("//", i) or text.startswith("/*", i)):
            i = _skip_comment(text, i)
        elif ch == '"':
            end = _read_double_quoted(text, i)
            out.append(text[i:end])
            i = end
        elif ch == "'":
            i = _convert_single_quoted(text, i, out)
        elif ch in "}]":
            _drop_trailing_comma(out)
            out.append(ch)
            i += 1
        elif ch in "{[:,":
            out.append(ch)
            i += 1
        elif _is_bare(ch):
            j = i
            while j < n and _is_bare(text[j]):
                j += 1
            token = text[i:j]
            after = _skip_insignificant(text, j)
            if after < n and text[after] == ":":
                out.append(json.dumps(token))
            else:
                # keep adjacent values apart so "[1 2]" still fails
                out.append(" " + token)
            i = j
        else:
            raise LenientJsonError(f"Unexpected character {ch!r} at offset {i}")
    return "".join(out)


def loads(text: str) -> Any:
    """Parse lenient JSON ``text`` into Python objects.

    Raises:
        LenientJsonError: when the text is empty or not parseable.
    """
    if text is None or not text.strip():
        raise LenientJsonError("No content to parse")
    strict = to_strict_json(text)
    try:
        return json.loads(strict, strict=False)
    except json.JSONDecodeError as exc:
        raise LenientJsonError(str(exc)) from exc
