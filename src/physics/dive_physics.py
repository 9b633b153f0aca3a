"""
Dive physics: the continuous engine behind node selection.
Turns drag input into camera rotation and turns sustained focus on a
candidate into magnetism and zoom until the candidate is selected.
"""
import math
from typing import Optional, Tuple

import numpy as np

from settings.config import PhysicsConfig

POLAR_MIN = 0.1
POLAR_MAX = math.pi - 0.1


class DivePhysics:
    """
    Camera and commitment state, advanced once per frame by update().

    Model:
    - The camera sits at the centre of a sphere of candidates, looking out
    - Drag velocity rotates the look direction (theta around, phi polar)
    - Focus held on a candidate while touching builds magnetism, which
      drives zoom; zoom past the selection threshold selects the candidate
    """

    def __init__(self, config: Optional[PhysicsConfig] = None):
        self._config = config or PhysicsConfig()

        # Camera
        self._theta = 0.0
        self._phi = math.pi / 2
        self._zoom = 0.0
        self._radius = self._config.base_radius

        # Smoothed and raw (per-sample) angular velocity
        self._velocity: Tuple[float, float] = (0.0, 0.0)
        self._raw_velocity: Tuple[float, float] = (0.0, 0.0)

        # Touch
        self._is_touching = False
        self._last_touch: Tuple[float, float] = (0.0, 0.0)

        # Focus / magnetism
        self._focused_index = -1
        self._linger_time = 0.0
        self._magnetism = 0.0

    # --- Read-only state ---

    @property
    def config(self) -> PhysicsConfig:
        return self._config

    @property
    def camera_theta(self) -> float:
        return self._theta

    @property
    def camera_phi(self) -> float:
        return self._phi

    @property
    def velocity(self) -> Tuple[float, float]:
        return self._velocity

    @property
    def is_touching(self) -> bool:
        return self._is_touching

    @property
    def focused_index(self) -> int:
        return self._focused_index

    @property
    def linger_time(self) -> float:
        return self._linger_time

    @property
    def magnetism(self) -> float:
        return self._magnetism

    @property
    def zoom_progress(self) -> float:
        return self._zoom

    @property
    def radius(self) -> float:
        """Effective sphere radius, shrinking as zoom grows."""
        return self._radius

    @property
    def speed(self) -> float:
        vx, vy = self._velocity
        return math.sqrt(vx * vx + vy * vy)

    # --- Frame step ---

    def update(self, delta_time: float):
        """Advance the physics by one frame. Bad or lagging steps are dropped."""
        cfg = self._config
        dt = delta_time
        if not 0.0 < dt <= cfg.max_delta_time:
            return

        # 1. Smooth velocity (EMA)
        alpha = cfg.velocity_smoothing
        vx, vy = self._velocity
        rx, ry = self._raw_velocity
        vx = vx * alpha + rx * (1.0 - alpha)
        vy = vy * alpha + ry * (1.0 - alpha)

        # 2. Friction once released
        if not self._is_touching:
            keep = max(0.0, 1.0 - cfg.friction * dt)
            vx *= keep
            vy *= keep

        # 3. Clamp speed, keep direction
        speed = math.sqrt(vx * vx + vy * vy)
        if speed > cfg.max_angular_velocity:
            scale = cfg.max_angular_velocity / speed
            vx *= scale
            vy *= scale
        self._velocity = (vx, vy)

        # 4. Rotate camera; phi stays off the poles
        self._theta += vx * dt
        self._phi = max(POLAR_MIN, min(POLAR_MAX, self._phi + vy * dt))

        # 5. Magnetism and zoom
        if self._focused_index >= 0 and self._is_touching:
            self._linger_time += dt
            if self._linger_time >= cfg.linger_threshold:
                self._magnetism = min(1.0, self._magnetism + cfg.magnetism_rate * dt)
                self._zoom = min(1.0, self._zoom + cfg.zoom_speed * self._magnetism * dt)
        else:
            self._magnetism = max(0.0, self._magnetism - cfg.magnetism_decay * dt)
            self._zoom = max(0.0, self._zoom - cfg.zoom_decay * dt)
            self._linger_time = 0.0

        # 6. Radius follows zoom
        self._radius = cfg.base_radius * (1.0 - self._zoom * cfg.zoom_radius_shrink)

        # 7. Raw velocity is refilled only by the next move sample
        self._raw_velocity = (0.0, 0.0)

    # --- Touch input ---

    def on_touch_down(self, x: float, y: float):
        self._is_touching = True
        self._last_touch = (x, y)

    def on_touch_move(self, x: float, y: float):
        """Convert the pixel delta since the last sample into angular velocity."""
        if not self._is_touching:
            return
        lx, ly = self._last_touch
        dx = x - lx
        dy = y - ly
        sensitivity = self._config.steering_sensitivity
        # Drag down = look up
        self._raw_velocity = (dx * sensitivity, -dy * sensitivity)
        self._last_touch = (x, y)

    def on_touch_up(self, x: float = 0.0, y: float = 0.0):
        """Release. Velocity is kept so the camera coasts under friction."""
        self._is_touching = False

    # --- Focus & selection ---

    def set_focused_node(self, index: int):
        """Change the focused candidate. Switching target forfeits commitment."""
        if index == self._focused_index:
            return
        self._focused_index = index
        self._linger_time = 0.0
        self._magnetism = 0.0

    def should_select(self) -> bool:
        return self._zoom >= self._config.selection_threshold and self._focused_index >= 0

    # --- Camera geometry ---

    def look_direction(self) -> np.ndarray:
        """Unit vector the camera is looking along."""
        sin_phi = math.sin(self._phi)
        return np.array([
            sin_phi * math.cos(self._theta),
            math.cos(self._phi),
            sin_phi * math.sin(self._theta),
        ])

    def eye_position(self) -> np.ndarray:
        """Camera position: pushed toward the look direction as zoom grows."""
        offset = self._zoom * self._config.base_radius * 0.8
        return self.look_direction() * offset

    # --- Resets ---

    def reset(self):
        """Between words: clear commitment but keep the camera where it is."""
        self._zoom = 0.0
        self._magnetism = 0.0
        self._linger_time = 0.0
        self._focused_index = -1
        self._radius = self._config.base_radius

    def full_reset(self):
        """New input session: also recentre the camera and stop all motion."""
        self.reset()
        self._theta = 0.0
        self._phi = math.pi / 2
        self._velocity = (0.0, 0.0)
        self._raw_velocity = (0.0, 0.0)
