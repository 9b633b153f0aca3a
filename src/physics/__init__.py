"""
Physics Module

Camera steering, magnetism/zoom commitment and sphere hit testing.
"""
from .dive_physics import DivePhysics
from .sphere_layout import fibonacci_sphere, find_focused_index, focus_threshold

__all__ = [
    'DivePhysics',
    'fibonacci_sphere',
    'find_focused_index',
    'focus_threshold',
]
