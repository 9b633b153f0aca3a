"""
Prediction Module

Hybrid concept trie with frequency, user-boost and bigram ranking.
"""
from .trie_node import TrieNode, NodeType, ConceptEntry
from .trie import PredictionTrie
from .navigator import TrieCursor, NODE_DENSITY
from .dictionary import load_dictionary, build_trie

__all__ = [
    'TrieNode',
    'NodeType',
    'ConceptEntry',
    'PredictionTrie',
    'TrieCursor',
    'NODE_DENSITY',
    'load_dictionary',
    'build_trie',
]
