"""
Sensor and location data handling.
"""

from .samples import SensorAccuracy, SensorKind, SensorSample, SensorCell
from .location import (
    LocationStatus,
    Position,
    LocationTracker,
    format_coordinate,
    format_position,
)

__all__ = [
    "SensorAccuracy", "SensorKind", "SensorSample", "SensorCell",
    "LocationStatus", "Position", "LocationTracker",
    "format_coordinate", "format_position",
]
