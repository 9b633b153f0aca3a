"""
Candidate placement on the dive sphere and look-direction hit testing.
"""
import math

import numpy as np

GOLDEN_RATIO = (1.0 + math.sqrt(5.0)) / 2.0
GOLDEN_ANGLE = 2.0 * math.pi / GOLDEN_RATIO / GOLDEN_RATIO


def fibonacci_sphere(count: int, radius: float = 1.0) -> np.ndarray:
    """
    Spread `count` points evenly over a sphere (Fibonacci lattice).
    Returns a (count, 3) array; index 0 sits at the top pole.
    """
    if count <= 0:
        return np.zeros((0, 3))

    i = np.arange(count, dtype=float)
    y = 1.0 - (i / max(count - 1, 1)) * 2.0
    ring = np.sqrt(np.clip(1.0 - y * y, 0.0, None))
    theta = GOLDEN_ANGLE * i

    points = np.stack([np.cos(theta) * ring, y, np.sin(theta) * ring], axis=1)
    return points * radius


def focus_threshold(count: int) -> float:
    """Minimum cosine to the look direction; fewer nodes = wider cone."""
    if count <= 5:
        return 0.7
    if count <= 10:
        return 0.78
    if count <= 26:
        return 0.85
    return 0.92


def find_focused_index(look_direction, positions) -> int:
    """
    Index of the candidate closest to the look direction, or -1 if none
    falls inside the focus cone.
    """
    positions = np.asarray(positions, dtype=float)
    if positions.size == 0:
        return -1

    lengths = np.linalg.norm(positions, axis=1)
    valid = lengths >= 1e-3
    if not valid.any():
        return -1

    dots = np.full(len(positions), -np.inf)
    dots[valid] = positions[valid] @ np.asarray(look_direction, dtype=float) / lengths[valid]

    best = int(np.argmax(dots))
    if dots[best] > focus_threshold(len(positions)):
        return best
    return -1
