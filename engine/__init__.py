"""
engine/
-------
Playback & session layer.

    from engine import Stepper, Visualization
"""

from engine.stepper  import (
    Stepper,
    StepperState,
    SPEED_PRESETS,
    DELAY_MIN_MS,
    DELAY_MAX_MS,
    DELAY_STEP_MS,
    DEFAULT_DELAY_MS,
)
from engine.recorder import Visualization, Highlight, Progress, RunMetrics

__all__ = [
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "DELAY_MIN_MS",
    "DELAY_MAX_MS",
    "DELAY_STEP_MS",
    "DEFAULT_DELAY_MS",
    "Visualization",
    "Highlight",
    "Progress",
    "RunMetrics",
]
