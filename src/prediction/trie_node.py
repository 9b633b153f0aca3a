"""
Nodes of the hybrid prediction trie.
A node is a letter on a word path, a word ending, a concept (emoji/icon)
entry hanging off a word, or the root.
"""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional, Tuple


class NodeType(Enum):
    """Kinds of trie node."""
    ROOT = auto()
    LETTER = auto()
    WORD_END = auto()
    CONCEPT = auto()


@dataclass
class ConceptEntry:
    """One concept of a concept suite, e.g. 'pizza' under 'food'."""
    label: str
    emoji: str
    icon: str
    frequency: int = 0


@dataclass(eq=False)
class TrieNode:
    """A single node in the hybrid trie. Children are owned by their parent."""
    symbol: Optional[str] = None
    node_type: NodeType = NodeType.LETTER
    frequency: int = 0
    word: Optional[str] = None          # Set only for WORD_END
    children: Dict[str, "TrieNode"] = field(default_factory=dict, repr=False)

    # Concept-only fields
    concept_icon: Optional[str] = None
    concept_label: Optional[str] = None
    concept_emoji: Optional[str] = None

    @property
    def key(self) -> str:
        """Key of this node in its parent's child map."""
        if self.symbol is not None:
            return self.symbol
        return self.concept_label or ""

    @property
    def is_concept(self) -> bool:
        return self.node_type == NodeType.CONCEPT

    def display_char(self) -> str:
        """Symbol for letters, first character of the emoji for concepts, else a space."""
        if self.symbol is not None:
            return self.symbol
        if self.concept_emoji:
            return self.concept_emoji[0]
        return " "

    def display_string(self) -> str:
        if self.node_type == NodeType.CONCEPT:
            return self.concept_emoji or self.concept_label or "?"
        return self.symbol or ""

    def subtree_frequency(self) -> int:
        """Own frequency plus the frequency of every descendant."""
        total = self.frequency
        for child in self.children.values():
            total += child.subtree_frequency()
        return total

    def has_words(self) -> bool:
        if self.node_type == NodeType.WORD_END:
            return True
        return any(child.has_words() for child in self.children.values())

    def get_reachable_words(self, max_results: int = 10) -> List[Tuple[str, int]]:
        """
        Words reachable below this node as (word, frequency), most frequent first.

        Collection stops early once twice max_results words are found, so the
        ranking is local to what the depth-first walk saw. Concept subtrees
        are never part of word completion.
        """
        results: List[Tuple[str, int]] = []
        self._collect_words(results, max_results)
        results.sort(key=lambda item: item[1], reverse=True)
        return results[:max_results]

    def _collect_words(self, results: List[Tuple[str, int]], max_results: int):
        if len(results) >= max_results * 2:
            return

        if self.node_type == NodeType.WORD_END and self.word is not None:
            results.append((self.word, self.frequency))

        for child in self.children.values():
            if child.node_type == NodeType.CONCEPT:
                continue
            child._collect_words(results, max_results)
