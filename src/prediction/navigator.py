"""
Cursor over the prediction trie.
Tracks where the user has dived to, the prefix built so far and the last
committed word (for bigram context).
"""
import logging
from typing import List, Optional

from .trie import PredictionTrie
from .trie_node import NodeType, TrieNode

logger = logging.getLogger(__name__)

# Visible node counts per density setting
NODE_DENSITY = {
    "minimal": 5,
    "standard": 26,
    "full": 50,
}


class TrieCursor:
    """
    Stateful position inside a PredictionTrie.

    The node pointer and the prefix can drift apart: advancing with a
    symbol that has no matching child still extends the prefix but leaves
    the node where it was. reset() is the way back.
    """

    def __init__(self, trie: PredictionTrie, max_visible_nodes: int = 26):
        self._trie = trie
        self._current_node: TrieNode = trie.root
        self._prefix: List[str] = []
        self._previous_word: Optional[str] = None
        self.max_visible_nodes = max_visible_nodes

    @property
    def trie(self) -> PredictionTrie:
        return self._trie

    @property
    def current_node(self) -> TrieNode:
        return self._current_node

    @property
    def current_prefix(self) -> str:
        return "".join(self._prefix)

    @property
    def depth(self) -> int:
        """How many symbols deep the current word is."""
        return len(self._prefix)

    @property
    def previous_word(self) -> Optional[str]:
        return self._previous_word

    def get_current_nodes(self) -> List[TrieNode]:
        """The candidates to show this frame."""
        if not self._prefix:
            return self._trie.get_top_root_children(self.max_visible_nodes)
        return self._trie.get_predictions(
            self.current_prefix, self.max_visible_nodes, self._previous_word
        )

    def advance(self, symbol: str):
        """Dive into a symbol the user selected."""
        symbol = symbol.lower()
        self._prefix.append(symbol)
        next_node = self._current_node.children.get(symbol)
        if next_node is not None:
            self._current_node = next_node
        else:
            logger.debug("No child %r under prefix %r", symbol, self.current_prefix)

    def advance_concept(self, label: str):
        """Dive into a concept child. The prefix is left untouched."""
        concept = self._current_node.children.get(label)
        if concept is not None and concept.node_type == NodeType.CONCEPT:
            self._current_node = concept

    def is_end_of_word(self) -> bool:
        return self._current_node.node_type == NodeType.WORD_END

    def get_current_word(self) -> Optional[str]:
        if self.is_end_of_word():
            return self._current_node.word
        return None

    def get_top_prediction(self) -> Optional[str]:
        words = self._current_node.get_reachable_words(1)
        return words[0][0] if words else None

    def get_top_predictions(self, n: int = 5) -> List[str]:
        return [word for word, _ in self._current_node.get_reachable_words(n)]

    def has_concept_children(self) -> bool:
        return any(child.is_concept for child in self._current_node.children.values())

    def get_concept_children(self) -> List[TrieNode]:
        return [child for child in self._current_node.children.values() if child.is_concept]

    def reset(self, completed_word: Optional[str] = None):
        """
        Rewind to the root for the next word.
        A completed word is recorded as a bigram after the previous one and
        becomes the new context.
        """
        if completed_word is not None:
            if self._previous_word is not None:
                self._trie.record_bigram(self._previous_word, completed_word)
            self._previous_word = completed_word
        self._current_node = self._trie.root
        self._prefix.clear()

    def full_reset(self):
        """New input session: also forget the bigram context."""
        self._current_node = self._trie.root
        self._prefix.clear()
        self._previous_word = None
