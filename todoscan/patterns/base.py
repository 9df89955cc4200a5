from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

from ..core.errors import PatternCompileError
from ..core.models import MarkerMatch, MarkerType

NO_DESCRIPTION = "No description"

# A configured marker pattern: either the bare pattern string (type sniffed
# from its source text) or a mapping with "pattern" and an explicit "type".
MarkerPatternSpec = Union[str, dict]


@dataclass(frozen=True)
class MarkerPattern:
    regex: re.Pattern
    marker_type: MarkerType


def _compile(pattern: str) -> re.Pattern:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise PatternCompileError(pattern, str(exc)) from exc


def _compile_marker(spec: MarkerPatternSpec) -> MarkerPattern:
    if isinstance(spec, str):
        regex = _compile(spec)
        return MarkerPattern(regex, MarkerType.from_pattern(spec))
    source = spec.get("pattern")
    if not isinstance(source, str):
        raise PatternCompileError(str(spec), "marker pattern table needs a 'pattern' string")
    regex = _compile(source)
    type_name = spec.get("type")
    if type_name is None:
        return MarkerPattern(regex, MarkerType.from_pattern(source))
    try:
        return MarkerPattern(regex, MarkerType.from_name(str(type_name)))
    except ValueError as exc:
        raise PatternCompileError(source, str(exc)) from exc


def _byte_offset(line: str, index: int) -> int:
    return len(line[:index].encode("utf-8"))


def describe(match: re.Match) -> str:
    if match.re.groups >= 1:
        group = (match.group(1) or "").strip()
        if group:
            return group
    whole = match.group(0).strip()
    return whole or NO_DESCRIPTION


class PatternSet:
    """
    The three compiled pattern families used by the scanner.

    Everything is compiled up front; a bad pattern raises
    ``PatternCompileError`` and no instance is produced.
    """

    def __init__(
        self,
        comment_prefixes: Iterable[str],
        todo_patterns: Iterable[MarkerPatternSpec],
        function_patterns: Iterable[str],
    ) -> None:
        self._comment_patterns: Tuple[re.Pattern, ...] = tuple(_compile(p) for p in comment_prefixes)
        self._marker_patterns: Tuple[MarkerPattern, ...] = tuple(_compile_marker(p) for p in todo_patterns)
        self._function_patterns: Tuple[re.Pattern, ...] = tuple(_compile(p) for p in function_patterns)

    @classmethod
    def from_config(cls, config) -> "PatternSet":
        return cls(config.comment_prefixes, config.todo_patterns, config.function_patterns)

    @property
    def marker_patterns(self) -> Tuple[MarkerPattern, ...]:
        return self._marker_patterns

    @property
    def function_patterns(self) -> Tuple[re.Pattern, ...]:
        return self._function_patterns

    def is_comment(self, line: str) -> bool:
        return any(rx.search(line) for rx in self._comment_patterns)

    def classify_line(self, line: str) -> List[MarkerMatch]:
        """Return one match per marker pattern that hits a comment line.

        Non-comment lines never produce matches, even if they contain a
        marker keyword (e.g. inside a string literal).
        """
        if not self.is_comment(line):
            return []
        matches: List[MarkerMatch] = []
        for pattern in self._marker_patterns:
            m = pattern.regex.search(line)
            if m is None:
                continue
            matches.append(
                MarkerMatch(
                    marker_type=pattern.marker_type,
                    column_start=_byte_offset(line, m.start()),
                    column_end=_byte_offset(line, m.end()),
                    description=describe(m),
                )
            )
        return matches

    def match_declaration(self, line: str) -> Optional[str]:
        """Name captured by the first declaration pattern that yields one."""
        for rx in self._function_patterns:
            m = rx.search(line)
            if m is None:
                continue
            for name in m.groups():
                if name and _is_identifier(name):
                    return name
        return None


def _is_identifier(name: str) -> bool:
    return all(c.isalnum() or c == "_" for c in name)

