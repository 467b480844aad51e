"""Source storage and location handles for Boba diagnostics.

Every AST node and every error carries a `Location`: a character range
inside a buffer that was stored in a `SourceCache`. The cache hands out
opaque `CacheId` values and later turns a location back into readable
text for error reports.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Tuple


_CACHE_COUNTER = itertools.count()


class CacheId(NamedTuple):
    """Handle to one buffer stored in one particular `SourceCache`."""
    cache: int
    index: int


@dataclass(frozen=True)
class Location:
    """A range of characters inside a cached source buffer."""
    source: Optional[CacheId]
    start: int
    end: int

    def to(self, other: 'Location') -> 'Location':
        """Span from the start of this location to the end of `other`."""
        return Location(self.source, self.start, other.end)

    def __repr__(self) -> str:
        return f"Location({self.start}..{self.end})"


@dataclass
class CacheEntry:
    id: CacheId
    label: str
    text: str

    def slice(self, location: Location) -> str:
        return self.text[location.start:location.end]

    def line_col(self, offset: int) -> Tuple[int, int]:
        """Return the 1-based line and column of a character offset."""
        offset = max(0, min(offset, len(self.text)))
        line = self.text.count('\n', 0, offset) + 1
        line_start = self.text.rfind('\n', 0, offset) + 1
        return line, offset - line_start + 1

    def line_text(self, line: int) -> str:
        lines = self.text.split('\n')
        if 1 <= line <= len(lines):
            return lines[line - 1].rstrip('\r')
        return ''


class SourceCache:
    """Stores program text keyed by `CacheId`."""

    def __init__(self):
        self.cache_id = next(_CACHE_COUNTER)
        self.entries: List[CacheEntry] = []

    def store(self, label: str, text: str) -> CacheEntry:
        entry = CacheEntry(CacheId(self.cache_id, len(self.entries)), label, text)
        self.entries.append(entry)
        return entry

    def load(self, id: Optional[CacheId]) -> Optional[CacheEntry]:
        if id is None or id.cache != self.cache_id:
            return None
        if 0 <= id.index < len(self.entries):
            return self.entries[id.index]
        return None

    def __getitem__(self, id: CacheId) -> CacheEntry:
        entry = self.load(id)
        if entry is None:
            raise KeyError(f"invalid cache id {id}")
        return entry

    def render(self, error) -> str:
        """Render a `BobaError` as a plain text diagnostic.

        The report names the error code and title, points at the
        offending line and underlines the error's location with carets.
        Errors whose location is not in this cache are rendered without
        the source excerpt.
        """
        header = f"error[{error.code}]: {error.title}"
        location = error.location
        entry = self.load(location.source) if location is not None else None
        if entry is None:
            return f"{header}\n  {error.message}"
        line, col = entry.line_col(location.start)
        text = entry.line_text(line)
        gutter = ' ' * len(str(line))
        # underline stops at the end of the first line of the span
        width = max(1, min(location.end - location.start, len(text) - col + 1))
        lines = [
            header,
            f"{gutter}--> {entry.label}:{line}:{col}",
            f"{gutter} |",
            f"{line} | {text}",
            f"{gutter} | {' ' * (col - 1)}{'^' * width} {error.message}",
        ]
        return '\n'.join(lines)
