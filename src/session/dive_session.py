"""
Dive session: wires the trie, cursor, physics and gesture classifier
into one per-frame loop. Rendering is left to the caller, who reads the
frame result and the physics camera state.
"""
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional

import numpy as np

from gesture.classifier import GestureClassifier, PointerAction, Swipe
from gesture.haptics import HapticCallback, HapticEvent
from physics.dive_physics import DivePhysics
from physics.sphere_layout import fibonacci_sphere, find_focused_index
from prediction.dictionary import build_trie
from prediction.navigator import NODE_DENSITY, TrieCursor
from prediction.trie import PredictionTrie
from prediction.trie_node import NodeType, TrieNode
from settings.config import Config

logger = logging.getLogger(__name__)


@dataclass
class DiveFrame:
    """What one step() produced, for the renderer."""
    nodes: List[TrieNode] = field(default_factory=list)
    positions: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))
    focused_index: int = -1
    selected_key: Optional[str] = None


class DiveSession:
    """
    One input session of the dive keyboard.

    Per frame the caller feeds pointer events through on_touch_event() as
    they arrive and calls step(delta_time) once. Committed text comes back
    through on_commit, backspace requests through on_backspace.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        trie: Optional[PredictionTrie] = None,
        on_commit: Optional[Callable[[str], None]] = None,
        on_backspace: Optional[Callable[[], None]] = None,
        on_haptic: Optional[HapticCallback] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self._config = config or Config()
        self._on_commit = on_commit
        self._on_backspace = on_backspace
        self._on_haptic = on_haptic

        if trie is None:
            pred = self._config.prediction
            trie = build_trie(
                Path(pred.dictionary_path) if pred.dictionary_path else None,
                Path(pred.concepts_path) if pred.concepts_path else None,
            )
        self._trie = trie
        self._cursor = self._make_cursor(trie)

        self._physics = DivePhysics(self._config.physics)
        self._classifier = GestureClassifier(
            self._physics,
            on_selected=self._on_node_selected,
            on_word_accepted=self.accept_current_word,
            on_reset=self.reset_input,
            on_haptic=self._haptic,
            config=self._config.gestures,
            clock=clock,
        )

        self._composing: List[str] = []
        self._previous_focus = -1

    def _make_cursor(self, trie: PredictionTrie) -> TrieCursor:
        density = self._config.prediction.node_density
        return TrieCursor(trie, NODE_DENSITY.get(density, NODE_DENSITY["standard"]))

    # --- Accessors ---

    @property
    def trie(self) -> PredictionTrie:
        return self._trie

    @property
    def cursor(self) -> TrieCursor:
        return self._cursor

    @property
    def physics(self) -> DivePhysics:
        return self._physics

    @property
    def classifier(self) -> GestureClassifier:
        return self._classifier

    @property
    def composing_text(self) -> str:
        return "".join(self._composing)

    # --- Lifecycle ---

    def start_input(self):
        """Begin a new input session."""
        self._composing.clear()
        self._cursor.full_reset()
        self._physics.full_reset()
        self._previous_focus = -1

    def replace_trie(self, trie: PredictionTrie):
        """Swap in a fully built trie; the current word is abandoned."""
        self._trie = trie
        self._cursor = self._make_cursor(trie)
        self._composing.clear()
        self._physics.reset()

    # --- Input ---

    def on_touch_event(
        self,
        action: PointerAction,
        x: float = 0.0,
        y: float = 0.0,
        timestamp: Optional[float] = None,
    ) -> Optional[Swipe]:
        return self._classifier.on_touch_event(action, x, y, timestamp)

    def step(self, delta_time: float) -> DiveFrame:
        """Advance one frame: physics, layout, hit test, selection."""
        self._physics.update(delta_time)

        nodes = self._cursor.get_current_nodes()
        positions = fibonacci_sphere(len(nodes), self._physics.radius)

        focused = find_focused_index(self._physics.look_direction(), positions)
        self._physics.set_focused_node(focused)
        if focused != self._previous_focus and focused >= 0:
            self._haptic(HapticEvent.HOVER)
        self._previous_focus = focused

        selected_key = None
        if self._physics.should_select() and 0 <= focused < len(nodes):
            key = nodes[focused].key
            if key:
                selected_key = key
                self._classifier.notify_node_selected(key)
            self._physics.reset()

        self._classifier.poll_pending_selection()

        return DiveFrame(
            nodes=nodes,
            positions=positions,
            focused_index=focused,
            selected_key=selected_key,
        )

    # --- Actions ---

    def _on_node_selected(self, key: str):
        node = self._cursor.current_node.children.get(key)
        if node is not None and node.node_type == NodeType.CONCEPT:
            self._select_concept(node)
            return

        self._composing.append(key)
        self._cursor.advance(key)
        self._haptic(HapticEvent.SELECTION)
        logger.debug("Composing %r", self.composing_text)

    def _select_concept(self, node: TrieNode):
        """A concept commits the word it hangs off followed by its emoji."""
        self._cursor.advance_concept(node.key)
        word = self.composing_text
        symbol = node.concept_emoji or node.concept_label or ""
        self._commit(f"{word} {symbol}".strip())
        self._finish_word(word or None)

    def accept_current_word(self):
        """
        Swipe up: commit the composing text, or the top prediction when it
        extends what was typed.
        """
        if not self._composing:
            return
        typed = self.composing_text
        top = self._cursor.get_top_prediction()
        text = top if top is not None and top.startswith(typed) else typed

        self._commit(text)
        self._finish_word(text)

    def _finish_word(self, word: Optional[str]):
        learning = self._config.prediction.adaptive_learning
        if word and learning:
            self._trie.boost_frequency(word)
        self._composing.clear()
        self._cursor.reset(word if learning else None)
        self._physics.reset()
        self._haptic(HapticEvent.WORD_COMMIT)

    def reset_input(self):
        """Swipe down: drop the composing word, or backspace when there is none."""
        if self._composing:
            self._composing.clear()
            self._cursor.reset()
            self._physics.reset()
        elif self._on_backspace is not None:
            self._on_backspace()
        self._haptic(HapticEvent.RESET)

    def _commit(self, text: str):
        logger.debug("Commit %r", text)
        if self._on_commit is not None and text:
            self._on_commit(text)

    def _haptic(self, event: HapticEvent):
        if self._config.haptics.enabled and self._on_haptic is not None:
            self._on_haptic(event)

    # --- Learning data ---

    def export_user_data(self) -> Dict[str, object]:
        return {
            "boosts": self._trie.export_user_data(),
            "bigrams": self._trie.export_bigram_data(),
        }

    def import_user_data(
        self,
        boosts: Mapping[str, int],
        bigrams: Mapping[str, Mapping[str, int]],
    ):
        self._trie.import_user_data(boosts)
        self._trie.import_bigram_data(bigrams)
