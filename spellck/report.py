"""
Misspelling Report
==================
Orders recorded misspellings for presentation and renders them as text
or JSON.

Entries are sorted by position (span start, span end, node id) so results
from one region of a file are contiguous and the output is reproducible.
"""

import bisect
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .engine import MisspellingRecord
from .tree import Position

__version__ = "1.0.0"


@dataclass(frozen=True)
class ReportEntry:
    """The misspelled words found at one position."""
    position: Position
    words: Tuple[str, ...]

    @property
    def message(self) -> str:
        noun = "word" if len(self.words) == 1 else "words"
        return f"misspelled {noun}: {', '.join(self.words)}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'position': self.position.to_dict(),
            'words': list(self.words),
            'message': self.message,
        }


def assemble(record: MisspellingRecord) -> List[ReportEntry]:
    """Entries of ``record`` in ascending position order."""
    return [ReportEntry(position, tuple(words))
            for position, words in sorted(record.items(), key=lambda item: item[0])]


class SourceMap:
    """Resolves character offsets of one source text to lines and columns."""

    def __init__(self, text: str, path: str = "<source>"):
        self.text = text
        self.path = path
        self._line_starts = [0]
        for i, c in enumerate(text):
            if c == '\n':
                self._line_starts.append(i + 1)

    def line_col(self, offset: int) -> Tuple[int, int]:
        """1-based line and column of ``offset``."""
        offset = max(0, min(offset, len(self.text)))
        index = bisect.bisect_right(self._line_starts, offset) - 1
        return index + 1, offset - self._line_starts[index] + 1

    def line(self, line_no: int) -> str:
        """Text of the 1-based line ``line_no``, without its newline."""
        if line_no < 1 or line_no > len(self._line_starts):
            return ""
        start = self._line_starts[line_no - 1]
        end = self.text.find('\n', start)
        return self.text[start:] if end == -1 else self.text[start:end]

    def describe(self, position: Position) -> str:
        """``path:line:col`` for the start of ``position``."""
        line, col = self.line_col(position.span.start)
        return f"{self.path}:{line}:{col}"


def render_text(entries: List[ReportEntry], source_map: Optional[SourceMap] = None,
                show_source_line: bool = True) -> str:
    """
    One line per entry, ``location: misspelled words: a, b``, followed by
    the first source line of the span when a source map is available.
    """
    lines = []
    for entry in entries:
        if source_map is None:
            location = f"{entry.position.span.start}..{entry.position.span.end}"
        else:
            location = source_map.describe(entry.position)
        lines.append(f"{location}: {entry.message}")

        if source_map is not None and show_source_line and source_map.text:
            line_no, _ = source_map.line_col(entry.position.span.start)
            lines.append(f"{location}: {source_map.line(line_no)}")
    return '\n'.join(lines)


def render_json(entries: List[ReportEntry], source_map: Optional[SourceMap] = None) -> str:
    """JSON array of entries, with line and column when a source map is given."""
    data = []
    for entry in entries:
        item = entry.to_dict()
        if source_map is not None:
            line, col = source_map.line_col(entry.position.span.start)
            item['path'] = source_map.path
            item['line'] = line
            item['column'] = col
        data.append(item)
    return json.dumps(data, indent=2, ensure_ascii=False)
