"""
Declaration Tree Loader
=======================
Decodes the JSON form of a declaration tree produced by a front end.

Document layout::

    {
      "path": "src/lib.rs",          # optional, for locations
      "source": "...",               # optional source text
      "root": {
        "kind": "crate",
        "docs": [{"text": "Crate docs", "span": [0, 12]}],
        "extra_words": ["frobnicate"],
        "children": [
          {"kind": "function", "name": "recieve", "span": [30, 52],
           "exported": true}
        ]
      }
    }

Spans are ``[start, end]`` or ``{"start": .., "end": ..}``; a doc comment may
be a bare string, taking its node's span. Nodes without an ``id`` are
numbered in depth-first pre-order.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Union

from .config_logging import TreeFormatError, get_logger, handle_errors
from .report import SourceMap
from .tree import Crate, DocComment, Node, NodeKind, Span

__version__ = "1.0.0"

_logger = get_logger('loader')


class ExportSet:
    """Export oracle backed by a set of node ids."""

    __slots__ = ('_ids',)

    def __init__(self, ids: Iterable[int] = ()):
        self._ids: FrozenSet[int] = frozenset(ids)

    def __call__(self, node_id: int) -> bool:
        return node_id in self._ids

    def __contains__(self, node_id: int) -> bool:
        return node_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:
        return f"ExportSet({sorted(self._ids)})"


@dataclass
class LoadedTree:
    """A decoded tree with its export oracle and optional source map."""
    root: Crate
    exported: ExportSet
    source_map: Optional[SourceMap] = None


class _Decoder:
    def __init__(self):
        self.next_id = 0
        self.seen_ids = set()
        self.exported = set()

    def span(self, raw: Any, where: str) -> Span:
        if raw is None:
            return Span()
        try:
            if isinstance(raw, dict):
                return Span(int(raw['start']), int(raw['end']))
            start, end = raw
            return Span(int(start), int(end))
        except (KeyError, TypeError, ValueError) as e:
            raise TreeFormatError(f"bad span {raw!r}: {e}", node=where) from e

    def docs(self, raw: Any, default_span: Span, where: str) -> List[DocComment]:
        if raw is None:
            return []
        if isinstance(raw, str):
            raw = [raw]
        docs = []
        for item in raw:
            if isinstance(item, str):
                docs.append(DocComment(item, default_span))
            elif isinstance(item, dict) and isinstance(item.get('text'), str):
                span = self.span(item['span'], where) if 'span' in item else default_span
                docs.append(DocComment(item['text'], span))
            else:
                raise TreeFormatError(f"bad doc comment {item!r}", node=where)
        return docs

    def optional_str(self, raw: Dict[str, Any], key: str, where: str) -> Optional[str]:
        value = raw.get(key)
        if value is not None and not isinstance(value, str):
            raise TreeFormatError(f"`{key}` must be a string, got {value!r}", node=where)
        return value

    def word_list(self, raw: Any, where: str) -> List[str]:
        if raw is None:
            return []
        if not isinstance(raw, list) or not all(isinstance(w, str) for w in raw):
            raise TreeFormatError(f"`extra_words` must be a list of strings, got {raw!r}", node=where)
        return list(raw)

    def node(self, raw: Any, path: str) -> Node:
        if not isinstance(raw, dict):
            raise TreeFormatError(f"expected an object, got {type(raw).__name__}", node=path)

        try:
            kind = NodeKind(raw.get('kind'))
        except ValueError as e:
            raise TreeFormatError(f"unknown node kind {raw.get('kind')!r}", node=path) from e

        node_id = raw.get('id', self.next_id)
        if not isinstance(node_id, int) or isinstance(node_id, bool):
            raise TreeFormatError(f"node id must be an integer, got {node_id!r}", node=path)
        if node_id in self.seen_ids:
            raise TreeFormatError(f"duplicate node id {node_id}", node=path)
        self.seen_ids.add(node_id)
        self.next_id = max(self.next_id, node_id + 1)

        name = self.optional_str(raw, 'name', path)
        where = f"{path}/{name}" if name else path
        span = self.span(raw.get('span'), where)

        fields: Dict[str, Any] = dict(
            kind=kind,
            id=node_id,
            name=name,
            span=span,
            docs=self.docs(raw.get('docs'), span, where),
            trait_name=self.optional_str(raw, 'trait', where),
            provided=bool(raw.get('provided', False)),
            alias=self.optional_str(raw, 'alias', where),
        )

        if raw.get('exported', False):
            self.exported.add(node_id)

        if kind is NodeKind.CRATE:
            node = Crate(extra_words=self.word_list(raw.get('extra_words'), where), **fields)
        else:
            node = Node(**fields)

        children = raw.get('children', [])
        if not isinstance(children, list):
            raise TreeFormatError("children must be a list", node=where)
        node.children = [self.node(child, f"{where}[{i}]") for i, child in enumerate(children)]
        return node


def load_tree(data: Dict[str, Any], base_dir: Optional[Path] = None) -> LoadedTree:
    """Decode an already-parsed tree document."""
    if not isinstance(data, dict) or 'root' not in data:
        raise TreeFormatError("document has no `root`")

    decoder = _Decoder()
    root = decoder.node(data['root'], 'root')
    if not isinstance(root, Crate):
        raise TreeFormatError(f"root must be a crate, got {root.kind.value}", node='root')

    path = data.get('path')
    source = data.get('source')
    if source is None and path and base_dir is not None:
        candidate = base_dir / path
        if candidate.is_file():
            source = candidate.read_text(encoding='utf-8')

    source_map = None
    if source is not None or path:
        source_map = SourceMap(source or "", path or "<source>")

    _logger.debug("Decoded tree", nodes=len(decoder.seen_ids), exported=len(decoder.exported))
    return LoadedTree(root, ExportSet(decoder.exported), source_map)


@handle_errors(TreeFormatError)
def load_tree_file(path: Union[str, Path]) -> LoadedTree:
    """Read and decode a JSON tree file."""
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    return load_tree(data, base_dir=path.parent)
