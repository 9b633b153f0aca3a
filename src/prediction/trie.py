"""
Hybrid prediction trie.
A prefix tree over lowercase words whose word endings can branch into
concept suites (emoji/icon entries). Ranks candidates by blending corpus
frequency, user boosts and bigram context.
"""
import logging
from typing import Dict, Iterable, List, Mapping, Optional

from .trie_node import ConceptEntry, NodeType, TrieNode

logger = logging.getLogger(__name__)

# Weights applied to the adaptive signals when ranking children
USER_BOOST_WEIGHT = 10
BIGRAM_WEIGHT = 5


class PredictionTrie:
    """
    Owns the root node plus two learning tables:
    - user boosts: word -> number of times the user committed it
    - bigram counts: previous word -> {next word -> count}

    Both tables are exported/imported as plain dicts; storage is the
    caller's business.
    """

    def __init__(self):
        self.root = TrieNode(node_type=NodeType.ROOT)
        self._user_boosts: Dict[str, int] = {}
        self._bigram_counts: Dict[str, Dict[str, int]] = {}

    def insert(self, word: str, frequency: int = 1):
        """
        Insert a word with its base frequency.
        Re-inserting overwrites the frequency but keeps existing children.
        Empty words are rejected, they would turn the root into a word end.
        """
        node = self._walk_or_create(word)
        if node is None:
            return
        node.node_type = NodeType.WORD_END
        node.frequency = frequency
        node.word = word.lower()

    def insert_concept_suite(self, trigger_word: str, concepts: Iterable[ConceptEntry]):
        """
        Attach a concept suite to a word, e.g. "food" -> burger, pizza.
        The trigger word is created if missing (its frequency is left alone).
        """
        node = self._walk_or_create(trigger_word)
        if node is None:
            return
        node.node_type = NodeType.WORD_END
        node.word = trigger_word.lower()

        for concept in concepts:
            # Labels share the child map with letters
            if len(concept.label) <= 1:
                logger.warning(
                    "Skipping concept %r under %r: label collides with a letter key",
                    concept.label, trigger_word,
                )
                continue
            node.children[concept.label] = TrieNode(
                symbol=None,
                node_type=NodeType.CONCEPT,
                frequency=concept.frequency,
                concept_icon=concept.icon,
                concept_label=concept.label,
                concept_emoji=concept.emoji,
            )

    def _walk_or_create(self, word: str) -> Optional[TrieNode]:
        if not word:
            logger.warning("Ignoring empty word insert")
            return None
        current = self.root
        for char in word.lower():
            child = current.children.get(char)
            if child is None:
                child = TrieNode(symbol=char, node_type=NodeType.LETTER)
                current.children[char] = child
            current = child
        return current

    def find_node(self, prefix: str) -> Optional[TrieNode]:
        """Node at the end of the prefix path, or None if any step is missing."""
        current = self.root
        for char in prefix.lower():
            current = current.children.get(char)
            if current is None:
                return None
        return current

    def get_predictions(
        self,
        prefix: str,
        max_results: int = 26,
        previous_word: Optional[str] = None,
    ) -> List[TrieNode]:
        """
        Children of the prefix node, best first.

        score = subtree frequency + 10 * user boost + 5 * bigram count
        Boosts only count for children that complete a word. Unknown
        prefixes fall back to the root ranking. Ties keep insertion order.
        """
        node = self.find_node(prefix)
        if node is None:
            return self.get_top_root_children(max_results)

        previous = previous_word.lower() if previous_word else None
        ranked = sorted(
            node.children.values(),
            key=lambda child: self.score(child, previous),
            reverse=True,
        )
        return ranked[:max_results]

    def score(self, node: TrieNode, previous_word: Optional[str] = None) -> int:
        """
        Ranking score of a candidate node in the context of previous_word.

        The base is the subtree frequency, so a WORD_END child also counts
        every word below it and the frequencies of its concept suite.
        This walks the candidate's whole subtree on each call.
        """
        score = node.subtree_frequency()
        if node.word is not None:
            score += USER_BOOST_WEIGHT * self._user_boosts.get(node.word, 0)
            if previous_word:
                followers = self._bigram_counts.get(previous_word, {})
                score += BIGRAM_WEIGHT * followers.get(node.word, 0)
        return score

    def get_top_root_children(self, max_results: int = 26) -> List[TrieNode]:
        """Root children ranked by raw subtree frequency (no boosts, no bigrams)."""
        ranked = sorted(
            self.root.children.values(),
            key=lambda child: child.subtree_frequency(),
            reverse=True,
        )
        return ranked[:max_results]

    def boost_frequency(self, word: str):
        """Record that the user committed a word."""
        key = word.lower()
        self._user_boosts[key] = self._user_boosts.get(key, 0) + 1

    def record_bigram(self, previous_word: str, current_word: str):
        """Record that current_word followed previous_word."""
        prev = previous_word.lower()
        curr = current_word.lower()
        followers = self._bigram_counts.setdefault(prev, {})
        followers[curr] = followers.get(curr, 0) + 1

    def user_boost(self, word: str) -> int:
        return self._user_boosts.get(word.lower(), 0)

    def bigram_count(self, previous_word: str, word: str) -> int:
        return self._bigram_counts.get(previous_word.lower(), {}).get(word.lower(), 0)

    # --- Persistence snapshots ---

    def export_user_data(self) -> Dict[str, int]:
        return dict(self._user_boosts)

    def import_user_data(self, data: Mapping[str, int]):
        """Replace (not merge) the user boost table."""
        self._user_boosts = dict(data)

    def export_bigram_data(self) -> Dict[str, Dict[str, int]]:
        return {prev: dict(followers) for prev, followers in self._bigram_counts.items()}

    def import_bigram_data(self, data: Mapping[str, Mapping[str, int]]):
        """Replace (not merge) the bigram table."""
        self._bigram_counts = {prev: dict(followers) for prev, followers in data.items()}
