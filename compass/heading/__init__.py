"""
Heading estimation, calibration monitoring and animation.
"""

from .state import HeadingState, CalibrationMode, CalibrationState
from .estimator import OrientationEstimator
from .calibration import CalibrationMonitor
from .animator import AccelerateInterpolator, HeadingAnimator
from .labels import DirectionLabel, DirectionLabelComposer, direction_glyphs, degree_glyphs
from .engine import HeadingEngine, HeadingTicker

__all__ = [
    "HeadingState", "CalibrationMode", "CalibrationState",
    "OrientationEstimator", "CalibrationMonitor",
    "AccelerateInterpolator", "HeadingAnimator",
    "DirectionLabel", "DirectionLabelComposer", "direction_glyphs", "degree_glyphs",
    "HeadingEngine", "HeadingTicker",
]
