"""Pure simulation of Emacs file-local variable resolution.

Emacs reads file-local variables from two places: the ``-*- ... -*-``
property line at the top of the file, and a ``Local Variables:`` block near
the end.  The loader only honours ``lexical-binding`` from the first line, so
a declaration anywhere else silently has no effect.  This module reproduces
the lookup on the text alone, without touching any editor state.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from elpkgcheck.models.diagnostics import Diagnostic, Severity
from elpkgcheck.parser.sexp import SexpParseError, is_truthy, read_from_string
from elpkgcheck.parser.source import SourceText

LEXICAL_BINDING = "lexical-binding"

# Emacs only looks this far back from the end (after the last page break).
_LOCAL_VARIABLES_SEARCH_LIMIT = 3000

_PROP_LINE_RE = re.compile(r"-\*-(?P<body>.*?)-\*-")
_LOCAL_VARIABLES_RE = re.compile(r"^(?P<prefix>.*?)Local Variables:(?P<suffix>.*)$", re.IGNORECASE)
_ENTRY_RE = re.compile(r"(?P<var>[^\s:]+)[ \t]*:[ \t]*(?P<value>.*)$")


class LocalVariablesError(ValueError):
    """Raised when a local-variables specification is malformed."""


@dataclass(frozen=True)
class LocalVariable:
    name: str
    value: Any
    line: int
    column: int


@dataclass
class LocalVariables:
    """Variables found in the property line and the trailing block."""

    prop_line: list[LocalVariable] = field(default_factory=list)
    prop_line_number: int | None = None
    trailing: list[LocalVariable] = field(default_factory=list)

    def resolved(self) -> dict[str, Any]:
        """Variable values in the order Emacs applies them (trailing wins)."""
        values: dict[str, Any] = {}
        for var in [*self.prop_line, *self.trailing]:
            values[var.name] = var.value
        return values


@dataclass(frozen=True)
class LexicalBindingInfo:
    declared_on_first_line: bool = False
    first_line_value: bool = False
    line: int = 1
    column: int = 1
    found_in_trailing_block: bool = False
    resolved_value: bool = False


def resolve_local_variables(source: SourceText) -> LocalVariables:
    """Collect file-local variables from *source*.

    Raises ``LocalVariablesError`` or ``SexpParseError`` on malformed input.
    """
    result = LocalVariables()
    prop_line = _prop_line_number(source)
    if prop_line is not None:
        result.prop_line = _parse_prop_line(source, prop_line)
        if result.prop_line:
            result.prop_line_number = prop_line
    result.trailing = _parse_trailing_block(source)
    return result


def _prop_line_number(source: SourceText) -> int | None:
    """Line holding ``-*-`` settings: line 1, or line 2 after a ``#!`` line."""
    if source.line(1).startswith("#!"):
        return 2 if source.line_count >= 2 else None
    return 1


def _parse_prop_line(source: SourceText, line_no: int) -> list[LocalVariable]:
    line = source.line(line_no)
    match = _PROP_LINE_RE.search(line)
    if match is None:
        return []
    body = match.group("body")
    if ":" not in body:
        # "-*- emacs-lisp -*-" names only the major mode.
        return []
    body_start = match.start("body")
    variables: list[LocalVariable] = []
    pos = 0
    while pos < len(body):
        while pos < len(body) and body[pos] in " \t;":
            pos += 1
        if pos >= len(body):
            break
        colon = body.find(":", pos)
        if colon == -1:
            raise LocalVariablesError(f"Malformed mode-line: {body.strip()!r}")
        name = body[pos:colon].strip()
        if not name or any(ch.isspace() for ch in name):
            raise LocalVariablesError(f"Malformed mode-line: {body.strip()!r}")
        value, end = read_from_string(body, colon + 1)
        variables.append(
            LocalVariable(
                name=name,
                value=value,
                line=line_no,
                column=body_start + pos + 1,
            )
        )
        pos = end
    return variables


def _parse_trailing_block(source: SourceText) -> list[LocalVariable]:
    text = source.text
    search_start = max(0, len(text) - _LOCAL_VARIABLES_SEARCH_LIMIT)
    page_break = text.rfind("\f", search_start)
    if page_break != -1:
        search_start = page_break
    start_line = source.line_of(search_start)
    last_line = source.line_count
    if last_line > 1 and source.line(last_line) == "":
        last_line -= 1

    header_line: int | None = None
    prefix = suffix = ""
    for line_no in range(start_line, last_line + 1):
        match = _LOCAL_VARIABLES_RE.match(source.line(line_no))
        if match is not None:
            header_line = line_no
            prefix = match.group("prefix")
            suffix = match.group("suffix").rstrip()
            break
    if header_line is None:
        return []

    terminator = re.compile(
        "^" + re.escape(prefix) + r"[ \t]*End:[ \t]*" + re.escape(suffix) + r"[ \t\r]*$",
        re.IGNORECASE,
    )
    end_line = next(
        (n for n in range(header_line + 1, last_line + 1) if terminator.match(source.line(n))),
        None,
    )
    # Without a terminator Emacs ignores the block entirely.
    if end_line is None:
        return []

    variables: list[LocalVariable] = []
    for line_no in range(header_line + 1, end_line):
        line = source.line(line_no).rstrip("\r")
        if not line.startswith(prefix):
            raise LocalVariablesError("Local variables entry is missing the prefix")
        content = line[len(prefix) :]
        if suffix:
            stripped = content.rstrip()
            if not stripped.endswith(suffix):
                raise LocalVariablesError("Local variables entry is missing the suffix")
            content = stripped[: -len(suffix)]
        entry = content.strip()
        if not entry:
            continue
        entry_match = _ENTRY_RE.match(entry)
        if entry_match is None:
            raise LocalVariablesError(f"Malformed local variable line: {entry!r}")
        name = entry_match.group("var")
        value, _ = read_from_string(entry_match.group("value"))
        variables.append(
            LocalVariable(
                name=name,
                value=value,
                line=line_no,
                column=len(prefix) + content.index(name) + 1,
            )
        )
    return variables


class LexicalBindingDetector:
    """Reports where (and whether) ``lexical-binding`` is declared."""

    def __init__(self, source: SourceText) -> None:
        self._source = source

    def detect(self) -> LexicalBindingInfo:
        """Run the simulation; propagates parse errors to the caller."""
        variables = resolve_local_variables(self._source)
        first_line = None
        if variables.prop_line_number == 1:
            first_line = next((v for v in variables.prop_line if v.name == LEXICAL_BINDING), None)
        trailing = any(v.name == LEXICAL_BINDING for v in variables.trailing)
        resolved = variables.resolved()
        return LexicalBindingInfo(
            declared_on_first_line=first_line is not None,
            first_line_value=first_line is not None and is_truthy(first_line.value),
            line=first_line.line if first_line else 1,
            column=first_line.column if first_line else 1,
            found_in_trailing_block=trailing,
            resolved_value=LEXICAL_BINDING in resolved and is_truthy(resolved[LEXICAL_BINDING]),
        )

    def check_placement(self, diagnostics: list[Diagnostic]) -> LexicalBindingInfo:
        """Append a placement error when lexical-binding is not on line 1.

        Failures of the simulation itself become a single error at (1, 1)
        and an empty ``LexicalBindingInfo`` is returned.
        """
        try:
            info = self.detect()
        except (LocalVariablesError, SexpParseError) as exc:
            diagnostics.append(
                Diagnostic(
                    line=1,
                    column=1,
                    severity=Severity.ERROR,
                    message=f"Error while resolving file-local variables: {exc}",
                )
            )
            return LexicalBindingInfo()
        if info.found_in_trailing_block or (
            info.resolved_value and not info.declared_on_first_line
        ):
            diagnostics.append(
                Diagnostic(
                    line=1,
                    column=1,
                    severity=Severity.ERROR,
                    message="lexical-binding must be set on the first line.",
                )
            )
        return info
