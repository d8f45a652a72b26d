"""
Traversal Policy
================
Decides, per declaration, whether its name and documentation are checked
and whether the walk continues into its children.

Only what is visible to the outside world is checked: exported items, their
documentation, and the documentation of trait implementations. Containers
are entered even when private, since they may hold items exported through
another path.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .tree import Node, NodeKind

__version__ = "1.0.0"


class Mode(Enum):
    """What may be checked below the current node."""
    NORMAL = "normal"
    DOC_ONLY = "doc_only"  # names are dictated elsewhere; only docs are checked


@dataclass(frozen=True)
class Decision:
    check_name: bool
    check_docs: bool
    recurse: bool
    child_mode: Mode = Mode.NORMAL


SKIP = Decision(check_name=False, check_docs=False, recurse=False)

# Entered even when not exported.
CONTAINER_KINDS = frozenset({
    NodeKind.MODULE,
    NodeKind.STRUCT,
    NodeKind.UNION,
    NodeKind.ENUM,
    NodeKind.FOREIGN_BLOCK,
    NodeKind.IMPL,
})

# Visibility declared per member, inside an enclosing item.
MEMBER_KINDS = frozenset({
    NodeKind.VARIANT,
    NodeKind.FIELD,
    NodeKind.IMPL_MEMBER,
})


def _item(exported: bool, mode: Mode) -> Decision:
    """General exported-item rule, no recursion."""
    if not exported:
        return SKIP
    return Decision(check_name=mode is Mode.NORMAL, check_docs=True, recurse=False)


def _crate(node: Node, exported: bool, mode: Mode) -> Decision:
    return Decision(check_name=False, check_docs=True, recurse=True)


def _container(node: Node, exported: bool, mode: Mode) -> Decision:
    own = _item(exported, mode)
    return Decision(own.check_name, own.check_docs, recurse=True)


def _foreign_block(node: Node, exported: bool, mode: Mode) -> Decision:
    # foreign item names come from the external linkage
    return Decision(check_name=False, check_docs=exported, recurse=True,
                    child_mode=Mode.DOC_ONLY)


def _impl(node: Node, exported: bool, mode: Mode) -> Decision:
    # `impl Trait for T`: member names come from the trait
    child_mode = Mode.DOC_ONLY if node.is_trait_impl else Mode.NORMAL
    return Decision(check_name=False, check_docs=exported, recurse=True,
                    child_mode=child_mode)


def _trait(node: Node, exported: bool, mode: Mode) -> Decision:
    if not exported:
        return SKIP
    return Decision(check_name=mode is Mode.NORMAL, check_docs=True, recurse=True)


def _trait_member(node: Node, exported: bool, mode: Mode) -> Decision:
    # only reached through an exported trait, whose visibility it shares
    return Decision(check_name=mode is Mode.NORMAL, check_docs=True, recurse=False)


def _leaf(node: Node, exported: bool, mode: Mode) -> Decision:
    return _item(exported, mode)


def _impl_member(node: Node, exported: bool, mode: Mode) -> Decision:
    # members of a trait impl have no visibility of their own
    if mode is Mode.DOC_ONLY:
        return Decision(check_name=False, check_docs=True, recurse=False)
    return _item(exported, mode)


def _use(node: Node, exported: bool, mode: Mode) -> Decision:
    # a plain re-export repeats a name chosen elsewhere
    decision = _item(exported, mode)
    if decision.check_name and node.alias is None:
        return Decision(check_name=False, check_docs=True, recurse=False)
    return decision


_RULES: Dict[NodeKind, Callable[[Node, bool, Mode], Decision]] = {
    NodeKind.CRATE: _crate,
    NodeKind.MODULE: _container,
    NodeKind.STRUCT: _container,
    NodeKind.UNION: _container,
    NodeKind.ENUM: _container,
    NodeKind.VARIANT: _leaf,
    NodeKind.FIELD: _leaf,
    NodeKind.FUNCTION: _leaf,
    NodeKind.CONSTANT: _leaf,
    NodeKind.TYPE_ALIAS: _leaf,
    NodeKind.TRAIT: _trait,
    NodeKind.TRAIT_MEMBER: _trait_member,
    NodeKind.IMPL: _impl,
    NodeKind.IMPL_MEMBER: _impl_member,
    NodeKind.FOREIGN_BLOCK: _foreign_block,
    NodeKind.FOREIGN_ITEM: _leaf,
    NodeKind.USE: _use,
}

_unhandled = set(NodeKind) - set(_RULES)
if _unhandled:
    raise RuntimeError(f"no traversal rule for {sorted(k.value for k in _unhandled)}")


class TraversalPolicy:
    """
    Traversal rules for every node kind.

    Args:
        inherit_visibility: When True, a variant, field or impl member only
            counts as exported if its enclosing item is exported too. When
            False (default) the export oracle's answer for the member alone
            decides.
    """

    def __init__(self, inherit_visibility: bool = False):
        self.inherit_visibility = inherit_visibility

    def is_exported(self, node: Node, own_exported: bool, parent_exported: bool) -> bool:
        """Effective export status of ``node``."""
        if self.inherit_visibility and node.kind in MEMBER_KINDS:
            return own_exported and parent_exported
        return own_exported

    def decide(self, node: Node, exported: bool, mode: Mode = Mode.NORMAL) -> Decision:
        """What to check at ``node`` and how to continue below it."""
        return _RULES[node.kind](node, exported, mode)

    @staticmethod
    def checked_name(node: Node) -> Optional[str]:
        """The author-chosen name of ``node``, if it has one."""
        if node.kind is NodeKind.USE:
            return node.alias
        return node.name
