"""
Dictionary and concept-suite feeds for the prediction trie.
Loads JSON word lists when available, otherwise installs a small built-in corpus.
"""
import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .trie import PredictionTrie
from .trie_node import ConceptEntry

logger = logging.getLogger(__name__)


FALLBACK_WORDS: List[Tuple[str, int]] = [
    ("the", 100), ("be", 95), ("to", 94), ("of", 93), ("and", 92),
    ("a", 91), ("in", 90), ("that", 89), ("have", 88), ("i", 87),
    ("it", 86), ("for", 85), ("not", 84), ("on", 83), ("with", 82),
    ("he", 81), ("as", 80), ("you", 79), ("do", 78), ("at", 77),
    ("this", 76), ("but", 75), ("his", 74), ("by", 73), ("from", 72),
    ("they", 71), ("we", 70), ("say", 69), ("her", 68), ("she", 67),
    ("or", 66), ("an", 65), ("will", 64), ("my", 63), ("one", 62),
    ("all", 61), ("would", 60), ("there", 59), ("their", 58), ("what", 57),
    ("so", 56), ("up", 55), ("out", 54), ("if", 53), ("about", 52),
    ("who", 51), ("get", 50), ("which", 49), ("go", 48), ("me", 47),
    ("when", 46), ("make", 45), ("can", 44), ("like", 43), ("time", 42),
    ("just", 40), ("him", 39), ("know", 38), ("take", 37),
    ("people", 36), ("into", 35), ("year", 34), ("your", 33), ("good", 32),
    ("some", 31), ("could", 30), ("them", 29), ("see", 28), ("other", 27),
    ("than", 26), ("then", 25), ("now", 24), ("look", 23), ("only", 22),
    ("come", 21), ("its", 20), ("over", 19), ("think", 18), ("also", 17),
    ("back", 16), ("after", 15), ("use", 14), ("two", 13), ("how", 12),
    ("our", 11), ("work", 10), ("first", 9), ("well", 8), ("way", 7),
    ("even", 6), ("new", 5), ("want", 4), ("because", 3), ("any", 2),
    ("these", 1), ("give", 1), ("day", 1), ("most", 1), ("us", 1),
    ("hello", 50), ("hi", 48), ("hey", 45), ("thanks", 40), ("thank", 40),
    ("please", 38), ("sorry", 35), ("yes", 60), ("no", 58), ("okay", 55),
    ("ok", 54), ("sure", 45), ("great", 40), ("love", 50), ("happy", 35),
    ("food", 30), ("eat", 28), ("travel", 25), ("car", 22), ("home", 40),
    ("beach", 20), ("weather", 18), ("music", 25), ("movie", 22), ("game", 20),
]

FALLBACK_CONCEPTS: List[Tuple[str, List[ConceptEntry]]] = [
    ("food", [
        ConceptEntry("burger", "\U0001F354", "Burger", 10),
        ConceptEntry("pizza", "\U0001F355", "Pizza", 9),
        ConceptEntry("apple", "\U0001F34E", "Apple", 8),
        ConceptEntry("taco", "\U0001F32E", "Taco", 7),
        ConceptEntry("sushi", "\U0001F363", "Sushi", 6),
    ]),
    ("travel", [
        ConceptEntry("plane", "✈️", "Plane", 10),
        ConceptEntry("hotel", "\U0001F3E8", "Hotel", 9),
        ConceptEntry("map", "\U0001F5FA️", "Map", 8),
        ConceptEntry("beach_concept", "\U0001F3D6️", "Beach", 7),
        ConceptEntry("car_concept", "\U0001F697", "Car", 6),
    ]),
    ("hello", [
        ConceptEntry("wave", "\U0001F44B", "Wave", 10),
        ConceptEntry("handshake", "\U0001F91D", "Handshake", 9),
        ConceptEntry("smile", "\U0001F60A", "Smile", 8),
    ]),
    ("love", [
        ConceptEntry("heart", "❤️", "Heart", 10),
        ConceptEntry("kiss", "\U0001F618", "Kiss", 9),
        ConceptEntry("hug", "\U0001F917", "Hug", 8),
        ConceptEntry("rose", "\U0001F339", "Rose", 7),
    ]),
    ("weather", [
        ConceptEntry("sun", "☀️", "Sun", 10),
        ConceptEntry("rain", "\U0001F327️", "Rain", 9),
        ConceptEntry("snow", "❄️", "Snow", 8),
        ConceptEntry("storm", "⛈️", "Storm", 7),
    ]),
    ("music", [
        ConceptEntry("notes", "\U0001F3B5", "Notes", 10),
        ConceptEntry("guitar", "\U0001F3B8", "Guitar", 9),
        ConceptEntry("mic", "\U0001F3A4", "Mic", 8),
        ConceptEntry("headphones", "\U0001F3A7", "Headphones", 7),
    ]),
]


def _require_str(value, field_name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{field_name} must be a string, got {type(value).__name__}")
    return value


def read_word_list(path: Path) -> List[Tuple[str, int]]:
    """
    Parse a [{"word": ..., "frequency": ...}] JSON file.
    Raises TypeError/KeyError/ValueError on malformed entries, before
    anything reaches a trie.
    """
    with open(path, 'r', encoding='utf-8') as f:
        entries = json.load(f)
    return [
        (_require_str(entry["word"], "word"), int(entry.get("frequency", 1)))
        for entry in entries
    ]


def read_concept_suites(path: Path) -> List[Tuple[str, List[ConceptEntry]]]:
    """Parse a [{"trigger_word": ..., "concepts": [...]}] JSON file."""
    with open(path, 'r', encoding='utf-8') as f:
        entries = json.load(f)

    suites = []
    for entry in entries:
        trigger = entry.get("trigger_word", entry.get("triggerWord"))
        concepts = [
            ConceptEntry(
                label=_require_str(c["label"], "label"),
                emoji=_require_str(c.get("emoji", ""), "emoji"),
                icon=_require_str(c.get("icon", ""), "icon"),
                frequency=int(c.get("frequency", 0)),
            )
            for c in entry["concepts"]
        ]
        suites.append((_require_str(trigger, "trigger_word"), concepts))
    return suites


def insert_words(trie: PredictionTrie, words: Iterable[Tuple[str, int]]):
    for word, frequency in words:
        trie.insert(word, frequency)


def insert_concept_suites(trie: PredictionTrie, suites: Iterable[Tuple[str, List[ConceptEntry]]]):
    for trigger, concepts in suites:
        trie.insert_concept_suite(trigger, concepts)


def load_dictionary(
    trie: PredictionTrie,
    dictionary_path: Optional[Path] = None,
    concepts_path: Optional[Path] = None,
):
    """
    Fill a trie from JSON feeds.
    A missing or unreadable dictionary installs the built-in word list;
    the same goes for concept suites.
    """
    words = None
    if dictionary_path is not None and Path(dictionary_path).exists():
        try:
            words = read_word_list(Path(dictionary_path))
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Could not read dictionary %s: %s", dictionary_path, e)
    if words is None:
        logger.debug("Using built-in dictionary")
        words = FALLBACK_WORDS
    insert_words(trie, words)

    suites = None
    if concepts_path is not None and Path(concepts_path).exists():
        try:
            suites = read_concept_suites(Path(concepts_path))
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Could not read concept suites %s: %s", concepts_path, e)
    if suites is None:
        suites = FALLBACK_CONCEPTS
    insert_concept_suites(trie, suites)


def build_trie(
    dictionary_path: Optional[Path] = None,
    concepts_path: Optional[Path] = None,
) -> PredictionTrie:
    """Build a fully loaded trie, ready to be swapped in for the live one."""
    trie = PredictionTrie()
    load_dictionary(trie, dictionary_path, concepts_path)
    return trie
