"""
Gesture Module

Pointer classification (steering vs. swipes) and selection relay.
"""
from .classifier import GestureClassifier, PointerAction, Swipe, SelectionMailbox
from .haptics import HapticEvent

__all__ = [
    'GestureClassifier',
    'PointerAction',
    'Swipe',
    'SelectionMailbox',
    'HapticEvent',
]
