"""
Session Module

Per-frame orchestration of prediction, physics and gestures.
"""
from .dive_session import DiveSession, DiveFrame

__all__ = [
    'DiveSession',
    'DiveFrame',
]
