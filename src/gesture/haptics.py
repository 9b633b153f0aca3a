"""
Haptic feedback requests.
The engines only say which feedback should happen; playing it is up to the platform.
"""
from enum import Enum, auto
from typing import Callable


class HapticEvent(Enum):
    """Kinds of haptic feedback the engines can request."""
    HOVER = auto()        # Focus moved onto a candidate
    SELECTION = auto()    # Candidate dived into
    WORD_COMMIT = auto()  # Word committed
    SWIPE = auto()        # Swipe up/down recognised
    RESET = auto()        # Current word cleared


HapticCallback = Callable[[HapticEvent], None]
