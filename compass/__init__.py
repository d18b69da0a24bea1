"""
Compass heading engine.

This package provides platform-independent implementations of:
- Target heading estimation from accelerometer and magnetometer samples
- Magnetometer calibration monitoring
- Smoothed heading animation and compass-rose labels
- Position readout formatting
"""

__version__ = "1.0.0"
__author__ = "Compass Team"

from .heading import HeadingEngine, HeadingAnimator, CalibrationMonitor, OrientationEstimator
from .sensors import SensorAccuracy, SensorKind, Position
from .config import CompassConfig
from .math import normalize_degree

__all__ = [
    "HeadingEngine",
    "HeadingAnimator",
    "CalibrationMonitor",
    "OrientationEstimator",
    "SensorAccuracy",
    "SensorKind",
    "Position",
    "CompassConfig",
    "normalize_degree"
]
