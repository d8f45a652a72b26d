"""
Spelling Engine
===============
Walks a declaration tree under the traversal policy and records the
misspelled sub-words of every name and doc comment the policy selects.

Typical use::

    engine = SpellingEngine(dictionary, export_oracle)
    record = engine.analyze(crate)
"""

from typing import Callable, Dict, Iterator, List, Optional, Tuple

from .config_logging import AnalysisCancelled, get_logger
from .dictionary import Dictionary
from .policy import Mode, TraversalPolicy
from .tree import Crate, DocComment, Node, NodeKind, Position
from .words import subwords

__version__ = "1.0.0"

_logger = get_logger('engine')

ExportOracle = Callable[[int], bool]

RESERVED_PREFIX = "__"


class MisspellingRecord:
    """
    Misspelled words indexed by the position at which they occur.

    Words at one position keep their discovery order; a word occurring
    twice in the same doc comment is recorded twice.
    """

    def __init__(self):
        self._entries: Dict[Position, List[str]] = {}

    def add(self, position: Position, word: str):
        self._entries.setdefault(position, []).append(word)

    def get(self, position: Position) -> List[str]:
        return list(self._entries.get(position, ()))

    def items(self) -> Iterator[Tuple[Position, List[str]]]:
        return iter(self._entries.items())

    def positions(self) -> List[Position]:
        return list(self._entries)

    def words(self) -> List[str]:
        """Every recorded word, in discovery order."""
        return [w for words in self._entries.values() for w in words]

    def clear(self):
        self._entries.clear()

    def __contains__(self, position: Position) -> bool:
        return position in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __repr__(self) -> str:
        return f"MisspellingRecord({len(self._entries)} positions)"


class SpellingEngine:
    """
    Keeps track of the reference dictionary and the misspelled words
    through a traversal of a whole tree.

    The dictionary and export oracle are only read. Each ``analyze`` call
    starts a fresh record; the last one stays available as
    ``misspellings``.
    """

    def __init__(self,
                 dictionary: Dictionary,
                 export_oracle: ExportOracle,
                 policy: Optional[TraversalPolicy] = None,
                 reserved_prefix: str = RESERVED_PREFIX,
                 should_cancel: Optional[Callable[[], bool]] = None):
        """
        Args:
            dictionary: Reference words
            export_oracle: Answers whether a node id is publicly exported
            policy: Traversal rules (default: own visibility only)
            reserved_prefix: Identifiers starting with this are never checked
            should_cancel: Polled between top-level items; a True result
                aborts the run with AnalysisCancelled
        """
        self.dictionary = dictionary
        self.export_oracle = export_oracle
        self.policy = policy or TraversalPolicy()
        self.reserved_prefix = reserved_prefix
        self.should_cancel = should_cancel
        self.misspellings = MisspellingRecord()

    def reset(self):
        """Forget the misspellings of the previous run."""
        self.misspellings = MisspellingRecord()

    def check(self, candidate: str, position: Position, identifier: bool = True) -> List[str]:
        """
        Check a string for misspellings, splitting ``foo_bar`` and ``FooBar``
        into ``foo`` & ``bar`` and ``Foo`` & ``Bar``. Incorrect words are
        added to the record at ``position`` and returned.
        """
        # reserved internals, e.g. __init__
        if identifier and self.reserved_prefix and candidate.startswith(self.reserved_prefix):
            return []

        # the whole string is correct, so skip the splitting below
        if self.dictionary.is_known(candidate):
            return []

        wrong = [w for w in subwords(candidate) if not self.dictionary.is_known(w)]
        for word in wrong:
            self.misspellings.add(position, word)
            _logger.debug("Misspelled word", word=word, node_id=position.node_id,
                          start=position.span.start)
        return wrong

    def check_docs(self, docs: List[DocComment], node_id: int):
        """Check each doc comment at its own span."""
        for doc in docs:
            self.check(doc.text, Position(doc.span, node_id), identifier=False)

    def analyze(self, tree: Crate) -> MisspellingRecord:
        """Spell-check a whole tree."""
        self.reset()
        with _logger.log_operation('analyze', root=tree.id):
            self._visit(tree, Mode.NORMAL, parent_exported=True)
            _logger.info("Analysis finished", positions=len(self.misspellings),
                         words=len(self.misspellings.words()))
        return self.misspellings

    def _visit(self, node: Node, mode: Mode, parent_exported: bool):
        own = node.kind is NodeKind.CRATE or self.export_oracle(node.id)
        exported = self.policy.is_exported(node, own, parent_exported)
        decision = self.policy.decide(node, exported, mode)

        if decision.check_name:
            name = self.policy.checked_name(node)
            if name:
                self.check(name, node.position())
        if decision.check_docs:
            self.check_docs(node.docs, node.id)

        if not decision.recurse:
            return
        top_level = node.kind is NodeKind.CRATE
        for child in node.children:
            if top_level and self.should_cancel is not None and self.should_cancel():
                raise AnalysisCancelled(node_id=child.id)
            self._visit(child, decision.child_mode, exported)
