"""
Settings Module

YAML-backed configuration for the dive keyboard engines.
"""
from .config import (
    Config,
    PhysicsConfig,
    GestureConfig,
    PredictionConfig,
    HapticsConfig,
    load_config,
)

__all__ = [
    'Config',
    'PhysicsConfig',
    'GestureConfig',
    'PredictionConfig',
    'HapticsConfig',
    'load_config',
]
