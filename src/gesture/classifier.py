"""
Gesture classification for raw pointer events.
Splits a touch stream into continuous steering (always forwarded to the
physics) and quick vertical swipes (accept word / reset word), and relays
zoom selections coming from the render loop.
"""
import logging
import threading
import time
from enum import Enum, auto
from typing import Callable, Generic, Optional, TypeVar

from physics.dive_physics import DivePhysics
from settings.config import GestureConfig

from .haptics import HapticCallback, HapticEvent

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PointerAction(Enum):
    """Raw pointer event kinds."""
    DOWN = auto()
    MOVE = auto()
    UP = auto()
    CANCEL = auto()


class Swipe(Enum):
    """Recognised directional swipes."""
    UP = auto()     # Accept current prediction
    DOWN = auto()   # Reset current word


class SelectionMailbox(Generic[T]):
    """
    Single-slot, last-write-wins handoff between the render loop and input
    handling. A second put before a take overwrites the first value.
    """

    def __init__(self):
        self._value: Optional[T] = None
        self._lock = threading.Lock()

    def put(self, value: T):
        with self._lock:
            self._value = value

    def take(self) -> Optional[T]:
        """Return and clear the pending value (None if empty)."""
        with self._lock:
            value = self._value
            self._value = None
        return value

    def peek(self) -> Optional[T]:
        with self._lock:
            return self._value


class GestureClassifier:
    """
    Classifies one gesture (down, move*, up | cancel) at a time.

    - Steering: every sample goes to DivePhysics regardless of outcome
    - Swipe up / down: released within max_swipe_time_ms, travelled at
      least min_swipe_distance vertically and mostly vertically
    - A gesture held longer than twice the swipe window is steering for
      the rest of its life
    """

    def __init__(
        self,
        physics: DivePhysics,
        on_selected: Callable[[str], None],
        on_word_accepted: Callable[[], None],
        on_reset: Callable[[], None],
        on_haptic: Optional[HapticCallback] = None,
        config: Optional[GestureConfig] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        """
        Args:
            physics: Engine receiving steering input
            on_selected: Called with the symbol/label of a zoom selection
            on_word_accepted: Called on swipe up
            on_reset: Called on swipe down
            on_haptic: Optional sink for haptic requests
            config: Swipe thresholds
            clock: Monotonic clock in seconds, used when events carry no timestamp
        """
        self._physics = physics
        self._on_selected = on_selected
        self._on_word_accepted = on_word_accepted
        self._on_reset = on_reset
        self._on_haptic = on_haptic
        self._config = config or GestureConfig()
        self._clock = clock

        # Swipe detection state
        self._start_pos = (0.0, 0.0)
        self._start_time = 0.0
        self._is_swipe_candidate = False

        # Written by the render loop, drained here
        self._pending = SelectionMailbox()

    @property
    def is_swipe_candidate(self) -> bool:
        return self._is_swipe_candidate

    @property
    def pending_selection(self) -> Optional[str]:
        return self._pending.peek()

    def on_touch_event(
        self,
        action: PointerAction,
        x: float = 0.0,
        y: float = 0.0,
        timestamp: Optional[float] = None,
    ) -> Optional[Swipe]:
        """Feed one pointer event. Returns the swipe it completed, if any."""
        now = self._clock() if timestamp is None else timestamp

        if action == PointerAction.DOWN:
            self._on_down(x, y, now)
        elif action == PointerAction.MOVE:
            self._on_move(x, y, now)
        elif action == PointerAction.UP:
            return self._on_up(x, y, now)
        elif action == PointerAction.CANCEL:
            self._on_cancel()
        return None

    def _on_down(self, x: float, y: float, now: float):
        self._start_pos = (x, y)
        self._start_time = now
        self._is_swipe_candidate = True
        self._physics.on_touch_down(x, y)

    def _on_move(self, x: float, y: float, now: float):
        # Held too long: this is steering, not a swipe
        if self._elapsed_ms(now) > self._config.max_swipe_time_ms * 2:
            self._is_swipe_candidate = False

        self._physics.on_touch_move(x, y)
        self._drain_pending()

    def _on_up(self, x: float, y: float, now: float) -> Optional[Swipe]:
        elapsed = self._elapsed_ms(now)
        self._physics.on_touch_up(x, y)

        if self._is_swipe_candidate and elapsed <= self._config.max_swipe_time_ms:
            swipe = self._classify(x, y)
            if swipe is not None:
                self._is_swipe_candidate = False
                self._fire_swipe(swipe)
                return swipe

        self._drain_pending()
        self._is_swipe_candidate = False
        return None

    def _on_cancel(self):
        self._physics.on_touch_up(0.0, 0.0)
        self._is_swipe_candidate = False

    def _classify(self, x: float, y: float) -> Optional[Swipe]:
        sx, sy = self._start_pos
        dx = x - sx
        dy = y - sy
        cfg = self._config
        if abs(dy) >= cfg.min_swipe_distance and abs(dy) > abs(dx) * cfg.swipe_direction_ratio:
            # Screen y grows downward
            return Swipe.UP if dy < 0 else Swipe.DOWN
        return None

    def _fire_swipe(self, swipe: Swipe):
        logger.debug("Swipe %s", swipe.name)
        if self._on_haptic is not None:
            self._on_haptic(HapticEvent.SWIPE)
        if swipe == Swipe.UP:
            self._on_word_accepted()
        else:
            self._on_reset()

    def _elapsed_ms(self, now: float) -> float:
        return (now - self._start_time) * 1000.0

    # --- Selection relay ---

    def notify_node_selected(self, symbol: str):
        """Called by the render loop when a candidate crosses the zoom threshold."""
        self._pending.put(symbol)

    def poll_pending_selection(self):
        """Called once per frame so selections arrive even without touch events."""
        self._drain_pending()

    def _drain_pending(self):
        symbol = self._pending.take()
        if symbol is not None:
            logger.debug("Delivering selection %r", symbol)
            self._on_selected(symbol)
