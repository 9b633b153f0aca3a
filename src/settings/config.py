"""
Config loader for the dive keyboard engines.
Loads YAML configuration with dataclass validation.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import logging

import yaml

logger = logging.getLogger(__name__)


@dataclass
class PhysicsConfig:
    steering_sensitivity: float = 0.003  # Radians per pixel of drag
    velocity_smoothing: float = 0.85     # EMA factor (0 = off, 1 = frozen)
    max_angular_velocity: float = 3.0    # rad/s
    friction: float = 4.0                # Linear decay per second once released

    linger_threshold: float = 0.035      # Seconds of focus before magnetism builds
    magnetism_rate: float = 5.0
    magnetism_decay: float = 8.0
    zoom_speed: float = 1.5
    zoom_decay: float = 3.0
    selection_threshold: float = 0.95

    base_radius: float = 2.0
    zoom_radius_shrink: float = 0.7      # Radius fraction lost at full zoom
    max_delta_time: float = 0.1          # Longer steps are dropped (lag spikes)


@dataclass
class GestureConfig:
    min_swipe_distance: float = 100.0    # Pixels
    max_swipe_time_ms: int = 300
    swipe_direction_ratio: float = 1.5   # |dy| must exceed |dx| by this factor


@dataclass
class PredictionConfig:
    dictionary_path: Optional[str] = None
    concepts_path: Optional[str] = None
    node_density: str = "standard"       # "minimal", "standard" or "full"
    adaptive_learning: bool = True       # Boost words the user commits


@dataclass
class HapticsConfig:
    enabled: bool = True


@dataclass
class Config:
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)
    gestures: GestureConfig = field(default_factory=GestureConfig)
    prediction: PredictionConfig = field(default_factory=PredictionConfig)
    haptics: HapticsConfig = field(default_factory=HapticsConfig)


def _dict_to_dataclass(cls, data: dict):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses config.yaml
                    in project root.

    Returns:
        Config dataclass with all settings.
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        return Config()

    try:
        with open(config_path, 'r') as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Could not read config %s, using defaults: %s", config_path, e)
        return Config()

    return Config(
        physics=_dict_to_dataclass(PhysicsConfig, data.get('physics')),
        gestures=_dict_to_dataclass(GestureConfig, data.get('gestures')),
        prediction=_dict_to_dataclass(PredictionConfig, data.get('prediction')),
        haptics=_dict_to_dataclass(HapticsConfig, data.get('haptics')),
    )
