"""Reader and printer for the small literal subset used in package headers.

Handles lists, strings, symbols, integers, floats and the ``'x`` quote
shorthand.  Anything else (vectors, reader macros) is a parse error.
"""

from __future__ import annotations

import re
from typing import Any

_DELIMITERS = frozenset(" \t\r\n\f()\"';")
_INTEGER_RE = re.compile(r"[+-]?\d+\.?\Z")
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.\d+(?:e[+-]?\d+)?|\d+e[+-]?\d+)\Z", re.IGNORECASE)
_STRING_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "f": "\f", "e": "\x1b", "a": "\x07"}
_UNSUPPORTED = frozenset("[]#`,?")


class SexpParseError(ValueError):
    """Raised when text is not a readable literal."""


class Symbol(str):
    """A bare Lisp symbol; distinct from a string with the same characters."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Symbol({str(self)!r})"


NIL = Symbol("nil")


def is_truthy(value: Any) -> bool:
    """Lisp truthiness: only ``nil`` and the empty list are false."""
    if isinstance(value, Symbol):
        return value != NIL
    if isinstance(value, list):
        return bool(value)
    return True


class _Reader:
    def __init__(self, text: str, pos: int) -> None:
        self.text = text
        self.pos = pos

    def skip_whitespace(self) -> None:
        text = self.text
        while self.pos < len(text):
            ch = text[self.pos]
            if ch in " \t\r\n\f":
                self.pos += 1
            elif ch == ";":
                end = text.find("\n", self.pos)
                self.pos = len(text) if end == -1 else end + 1
            else:
                break

    def read(self) -> Any:
        self.skip_whitespace()
        if self.pos >= len(self.text):
            raise SexpParseError("End of file during parsing")
        ch = self.text[self.pos]
        if ch == "(":
            self.pos += 1
            return self._read_list()
        if ch == ")":
            raise SexpParseError("Invalid read syntax: )")
        if ch == '"':
            self.pos += 1
            return self._read_string()
        if ch == "'":
            self.pos += 1
            return [Symbol("quote"), self.read()]
        if ch in _UNSUPPORTED:
            raise SexpParseError(f"Invalid read syntax: {ch}")
        return self._read_atom()

    def _read_list(self) -> list[Any]:
        items: list[Any] = []
        while True:
            self.skip_whitespace()
            if self.pos >= len(self.text):
                raise SexpParseError("End of file during parsing")
            if self.text[self.pos] == ")":
                self.pos += 1
                return items
            items.append(self.read())

    def _read_string(self) -> str:
        chars: list[str] = []
        text = self.text
        while self.pos < len(text):
            ch = text[self.pos]
            self.pos += 1
            if ch == '"':
                return "".join(chars)
            if ch == "\\":
                if self.pos >= len(text):
                    break
                escaped = text[self.pos]
                self.pos += 1
                if escaped == "\n":
                    continue
                chars.append(_STRING_ESCAPES.get(escaped, escaped))
            else:
                chars.append(ch)
        raise SexpParseError("End of file during parsing")

    def _read_atom(self) -> Any:
        start = self.pos
        chars: list[str] = []
        text = self.text
        while self.pos < len(text) and text[self.pos] not in _DELIMITERS:
            ch = text[self.pos]
            if ch == "\\" and self.pos + 1 < len(text):
                chars.append(text[self.pos + 1])
                self.pos += 2
                continue
            chars.append(ch)
            self.pos += 1
        token = "".join(chars)
        raw = text[start : self.pos]
        if raw == ".":
            # Dotted pairs are not valid in a dependency list.
            raise SexpParseError("Invalid read syntax: .")
        if raw == token:
            if _INTEGER_RE.match(token):
                return int(token.rstrip("."))
            if _FLOAT_RE.match(token):
                return float(token)
        return Symbol(token)


def read_from_string(text: str, start: int = 0) -> tuple[Any, int]:
    """Read one literal from *text* beginning at *start*.

    Returns the value and the offset just past it, like Emacs'
    ``read-from-string``.  Raises ``SexpParseError`` on malformed input.
    """
    reader = _Reader(text, start)
    value = reader.read()
    return value, reader.pos


def format_sexp(value: Any) -> str:
    """Print *value* the way ``prin1`` would."""
    if isinstance(value, Symbol):
        if not value:
            return "##"
        return "".join("\\" + ch if ch in _DELIMITERS or ch == "\\" else ch for ch in value)
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(value, list):
        if len(value) == 2 and isinstance(value[0], Symbol) and value[0] == "quote":
            return "'" + format_sexp(value[1])
        if not value:
            return "nil"
        return "(" + " ".join(format_sexp(item) for item in value) + ")"
    if isinstance(value, float):
        return repr(value)
    return str(value)
