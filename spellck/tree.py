"""
Declaration Tree Model
======================
The item-level view of a program that spellck checks: modules, types,
functions, traits, impl blocks and their documentation.

Everything below item granularity (bodies, expressions, patterns, type
expressions, generics) is not represented. Every node exposes its name as a
plain string.
"""

from enum import Enum
from typing import List, Dict, Any, Optional, Iterator
from dataclasses import dataclass, field

__version__ = "1.0.0"


class NodeKind(Enum):
    """Closed set of declaration kinds."""
    CRATE = "crate"
    MODULE = "module"
    STRUCT = "struct"
    UNION = "union"
    ENUM = "enum"
    VARIANT = "variant"
    FIELD = "field"
    FUNCTION = "function"
    CONSTANT = "constant"      # const and static items
    TYPE_ALIAS = "type_alias"
    TRAIT = "trait"
    TRAIT_MEMBER = "trait_member"
    IMPL = "impl"
    IMPL_MEMBER = "impl_member"
    FOREIGN_BLOCK = "foreign_block"
    FOREIGN_ITEM = "foreign_item"
    USE = "use"


@dataclass(frozen=True, order=True)
class Span:
    """Half-open range of character offsets into the source text."""
    start: int = 0
    end: int = 0

    def __post_init__(self):
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid span {self.start}..{self.end}")

    def to_dict(self) -> Dict[str, int]:
        return {'start': self.start, 'end': self.end}


@dataclass(frozen=True, order=True)
class Position:
    """
    One checkable location: a span plus the id of the node it belongs to.

    Ordered by ``(span.start, span.end, node_id)``; the node id only breaks
    ties between coinciding spans.
    """
    span: Span
    node_id: int

    @classmethod
    def of(cls, start: int, end: int, node_id: int) -> 'Position':
        return cls(Span(start, end), node_id)

    def to_dict(self) -> Dict[str, int]:
        return {'start': self.span.start, 'end': self.span.end, 'node_id': self.node_id}


@dataclass
class DocComment:
    """A documentation string attached to a node, with its own span."""
    text: str
    span: Span = field(default_factory=Span)


@dataclass
class Node:
    """
    A declaration in the tree.

    ``trait_name`` is only meaningful for IMPL nodes (``impl Trait for T``),
    ``provided`` for TRAIT_MEMBER nodes (has a default body) and ``alias``
    for USE nodes (``use path as alias``).
    """
    kind: NodeKind
    id: int = 0
    name: Optional[str] = None
    span: Span = field(default_factory=Span)
    docs: List[DocComment] = field(default_factory=list)
    children: List['Node'] = field(default_factory=list)
    trait_name: Optional[str] = None
    provided: bool = False
    alias: Optional[str] = None

    @property
    def is_trait_impl(self) -> bool:
        return self.kind is NodeKind.IMPL and self.trait_name is not None

    def walk(self) -> Iterator['Node']:
        """Depth-first pre-order iteration over this node and its descendants."""
        yield self
        for child in self.children:
            yield from child.walk()

    def position(self) -> Position:
        return Position(self.span, self.id)


@dataclass
class Crate(Node):
    """
    Root of a declaration tree.

    ``extra_words`` are words the crate itself declares as correct, merged
    into the dictionary for this tree only.
    """
    kind: NodeKind = NodeKind.CRATE
    extra_words: List[str] = field(default_factory=list)
