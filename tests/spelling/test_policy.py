"""
Tests for the Traversal Policy
==============================
Tests for which declarations are checked and where the walk continues.
"""

import pytest

from spellck.policy import (
    CONTAINER_KINDS, Decision, Mode, SKIP, TraversalPolicy,
)
from spellck.tree import Crate, Node, NodeKind


@pytest.fixture
def policy() -> TraversalPolicy:
    return TraversalPolicy()


def node(kind: NodeKind, **kwargs) -> Node:
    return Node(kind=kind, name=kwargs.pop('name', 'thing'), **kwargs)


class TestCrate:
    """Tests for the crate root rule."""

    def test_always_docs_and_recurse(self, policy):
        """Test the root is checked whatever the oracle says."""
        decision = policy.decide(Crate(), exported=False)
        assert decision == Decision(check_name=False, check_docs=True, recurse=True,
                                    child_mode=Mode.NORMAL)


class TestContainers:
    """Tests for modules, structs, unions and enums."""

    @pytest.mark.parametrize("kind", [NodeKind.MODULE, NodeKind.STRUCT,
                                      NodeKind.UNION, NodeKind.ENUM])
    def test_exported(self, policy, kind):
        """Test exported containers check name and docs and recurse."""
        decision = policy.decide(node(kind), exported=True)
        assert decision.check_name and decision.check_docs and decision.recurse
        assert decision.child_mode is Mode.NORMAL

    @pytest.mark.parametrize("kind", sorted(CONTAINER_KINDS, key=lambda k: k.value))
    def test_private_still_recurses(self, policy, kind):
        """Test private containers are entered but not checked."""
        decision = policy.decide(node(kind), exported=False)
        assert not decision.check_name
        assert not decision.check_docs
        assert decision.recurse


class TestLeafItems:
    """Tests for the general exported-item rule."""

    @pytest.mark.parametrize("kind", [NodeKind.FUNCTION, NodeKind.CONSTANT,
                                      NodeKind.TYPE_ALIAS, NodeKind.VARIANT,
                                      NodeKind.FIELD, NodeKind.IMPL_MEMBER])
    def test_exported(self, policy, kind):
        """Test exported items check name and docs without recursion."""
        decision = policy.decide(node(kind), exported=True)
        assert decision == Decision(check_name=True, check_docs=True, recurse=False)

    @pytest.mark.parametrize("kind", [NodeKind.FUNCTION, NodeKind.CONSTANT,
                                      NodeKind.TYPE_ALIAS, NodeKind.VARIANT,
                                      NodeKind.FIELD, NodeKind.IMPL_MEMBER,
                                      NodeKind.FOREIGN_ITEM, NodeKind.USE])
    def test_private_pruned(self, policy, kind):
        """Test private non-container items are skipped entirely."""
        assert policy.decide(node(kind), exported=False) == SKIP

    def test_doc_only_suppresses_name(self, policy):
        """Test doc-only mode keeps docs but drops the name."""
        decision = policy.decide(node(NodeKind.IMPL_MEMBER), exported=True, mode=Mode.DOC_ONLY)
        assert not decision.check_name
        assert decision.check_docs


class TestImpls:
    """Tests for impl blocks."""

    def test_inherent_impl(self, policy):
        """Test an inherent impl never checks a name and recurses normally."""
        decision = policy.decide(node(NodeKind.IMPL, name=None), exported=True)
        assert not decision.check_name
        assert decision.check_docs
        assert decision.recurse
        assert decision.child_mode is Mode.NORMAL

    def test_trait_impl_switches_to_doc_only(self, policy):
        """Test a trait impl recurses in doc-only mode."""
        impl = node(NodeKind.IMPL, name=None, trait_name="Display")
        decision = policy.decide(impl, exported=False)
        assert decision.recurse
        assert decision.child_mode is Mode.DOC_ONLY

    def test_trait_impl_member_docs_ignore_export(self, policy):
        """Test trait impl members have their docs checked even when unexported."""
        member = node(NodeKind.IMPL_MEMBER)
        decision = policy.decide(member, exported=False, mode=Mode.DOC_ONLY)
        assert decision == Decision(check_name=False, check_docs=True, recurse=False)

    def test_foreign_item_docs_still_gated(self, policy):
        """Test unexported foreign items stay unchecked in doc-only mode."""
        item = policy.decide(node(NodeKind.FOREIGN_ITEM), exported=False, mode=Mode.DOC_ONLY)
        assert item == SKIP


class TestTraits:
    """Tests for trait definitions and members."""

    def test_exported_trait(self, policy):
        """Test an exported trait is checked and entered normally."""
        decision = policy.decide(node(NodeKind.TRAIT), exported=True)
        assert decision == Decision(check_name=True, check_docs=True, recurse=True)

    def test_private_trait_pruned(self, policy):
        """Test a private trait is not entered."""
        assert policy.decide(node(NodeKind.TRAIT), exported=False) == SKIP

    @pytest.mark.parametrize("provided", [False, True])
    def test_members(self, policy, provided):
        """Test required and provided members check name and docs directly."""
        member = node(NodeKind.TRAIT_MEMBER, provided=provided)
        decision = policy.decide(member, exported=False)
        assert decision == Decision(check_name=True, check_docs=True, recurse=False)


class TestForeignAndUse:
    """Tests for foreign blocks and use items."""

    def test_foreign_block_doc_only(self, policy):
        """Test foreign item names are never checked."""
        decision = policy.decide(node(NodeKind.FOREIGN_BLOCK, name=None), exported=True)
        assert decision.recurse
        assert decision.child_mode is Mode.DOC_ONLY
        item = policy.decide(node(NodeKind.FOREIGN_ITEM), exported=True, mode=decision.child_mode)
        assert not item.check_name
        assert item.check_docs

    def test_plain_reexport(self, policy):
        """Test a plain re-export checks docs only."""
        decision = policy.decide(node(NodeKind.USE), exported=True)
        assert not decision.check_name
        assert decision.check_docs

    def test_aliased_reexport(self, policy):
        """Test `use x as alias` checks the alias."""
        use = node(NodeKind.USE, alias="Speling")
        decision = policy.decide(use, exported=True)
        assert decision.check_name
        assert TraversalPolicy.checked_name(use) == "Speling"


class TestVisibility:
    """Tests for member visibility inheritance."""

    def test_own_visibility_by_default(self, policy):
        """Test members ignore the parent's export status by default."""
        field = node(NodeKind.FIELD)
        assert policy.is_exported(field, own_exported=True, parent_exported=False)

    def test_inherited_visibility(self):
        """Test members of unexported items are hidden when inheriting."""
        policy = TraversalPolicy(inherit_visibility=True)
        field = node(NodeKind.FIELD)
        assert not policy.is_exported(field, own_exported=True, parent_exported=False)
        assert policy.is_exported(field, own_exported=True, parent_exported=True)
        assert not policy.is_exported(field, own_exported=False, parent_exported=True)

    def test_inheritance_only_for_members(self):
        """Test items other than members keep their own status."""
        policy = TraversalPolicy(inherit_visibility=True)
        function = node(NodeKind.FUNCTION)
        assert policy.is_exported(function, own_exported=True, parent_exported=False)


class TestCoverage:
    """Tests that every node kind has a rule."""

    @pytest.mark.parametrize("kind", list(NodeKind))
    def test_every_kind_decides(self, policy, kind):
        """Test decide() handles every kind in both modes."""
        for mode in Mode:
            for exported in (True, False):
                assert isinstance(policy.decide(node(kind), exported, mode), Decision)
