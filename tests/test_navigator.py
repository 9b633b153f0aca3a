import pytest
from prediction.navigator import TrieCursor
from prediction.trie import PredictionTrie
from prediction.trie_node import ConceptEntry, NodeType


@pytest.fixture
def trie():
    trie = PredictionTrie()
    trie.insert("hello", 50)
    trie.insert("help", 30)
    trie.insert("hi", 20)
    return trie


@pytest.fixture
def cursor(trie):
    return TrieCursor(trie)


def test_advance_builds_prefix(cursor):
    assert cursor.current_prefix == ""
    assert cursor.depth == 0

    cursor.advance("h")
    assert cursor.current_prefix == "h"
    assert cursor.depth == 1

    cursor.advance("E")
    assert cursor.current_prefix == "he"
    assert cursor.depth == 2
    assert cursor.current_node.symbol == "e"


def test_end_of_word(cursor):
    cursor.advance("h")
    assert not cursor.is_end_of_word()
    assert cursor.get_current_word() is None

    cursor.advance("i")
    assert cursor.is_end_of_word()
    assert cursor.get_current_word() == "hi"


def test_invalid_advance_keeps_node(cursor):
    cursor.advance("h")
    h_node = cursor.current_node
    cursor.advance("z")
    assert cursor.current_prefix == "hz"
    assert cursor.current_node is h_node


def test_reset_clears_state(cursor):
    cursor.advance("h")
    cursor.advance("e")
    cursor.reset()
    assert cursor.current_prefix == ""
    assert cursor.depth == 0
    assert cursor.current_node is cursor.trie.root


def test_current_nodes_at_root(cursor, trie):
    assert cursor.get_current_nodes() == trie.get_top_root_children(26)


def test_current_nodes_respect_max_visible(trie):
    for word in ["apple", "boat", "cat", "dog"]:
        trie.insert(word, 1)
    cursor = TrieCursor(trie, max_visible_nodes=2)
    assert len(cursor.get_current_nodes()) == 2


def test_current_nodes_use_bigram_context(trie):
    trie.insert("ho", 20)
    trie.record_bigram("say", "ho")
    cursor = TrieCursor(trie)
    cursor.reset("say")
    cursor.advance("h")
    # 'e' subtree (80) still leads, 'o' (20 + 5) now beats 'i' (20)
    assert [node.key for node in cursor.get_current_nodes()] == ["e", "o", "i"]


def test_top_prediction(cursor):
    for symbol in "hel":
        cursor.advance(symbol)
    assert cursor.get_top_prediction() == "hello"


def test_top_predictions_ranked_by_frequency():
    trie = PredictionTrie()
    trie.insert("cat", 30)
    trie.insert("car", 40)
    trie.insert("card", 20)
    trie.insert("care", 25)
    cursor = TrieCursor(trie)
    cursor.advance("c")
    cursor.advance("a")
    assert cursor.get_top_predictions(4) == ["car", "cat", "care", "card"]


def test_top_prediction_none_without_words():
    cursor = TrieCursor(PredictionTrie())
    assert cursor.get_top_prediction() is None
    assert cursor.get_top_predictions(3) == []


def test_reset_with_word_records_bigram(cursor, trie):
    cursor.reset("how")
    assert cursor.previous_word == "how"
    assert trie.export_bigram_data() == {}

    cursor.reset("are")
    assert trie.bigram_count("how", "are") == 1
    assert cursor.previous_word == "are"


def test_full_reset_drops_context(cursor, trie):
    cursor.reset("how")
    cursor.full_reset()
    assert cursor.previous_word is None
    cursor.reset("are")
    assert trie.bigram_count("how", "are") == 0


def test_reset_then_retype_reaches_same_node(cursor):
    for symbol in "help":
        cursor.advance(symbol)
    node = cursor.current_node

    cursor.reset("help")
    for symbol in "help":
        cursor.advance(symbol)
    assert cursor.current_node is node
    assert cursor.get_current_word() == "help"


def test_concepts(trie):
    trie.insert("food", 30)
    trie.insert_concept_suite("food", [
        ConceptEntry("burger", "\U0001F354", "Burger", 10),
        ConceptEntry("pizza", "\U0001F355", "Pizza", 9),
    ])
    cursor = TrieCursor(trie)
    for symbol in "food":
        cursor.advance(symbol)

    assert cursor.has_concept_children()
    assert [c.key for c in cursor.get_concept_children()] == ["burger", "pizza"]
    # Concepts never show up as word completions
    assert cursor.get_top_predictions(5) == ["food"]

    cursor.advance_concept("pizza")
    assert cursor.current_node.node_type == NodeType.CONCEPT
    assert cursor.current_prefix == "food"


def test_advance_concept_unknown_label(cursor):
    cursor.advance("h")
    node = cursor.current_node
    cursor.advance_concept("pizza")
    assert cursor.current_node is node
