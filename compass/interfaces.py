"""
Interfaces for the collaborators of the heading engine.

Hosts implement these for their platform; the simulated platform and the
tests provide in-process versions.
"""

from typing import Callable, Optional

from .sensors.samples import SensorKind
from .sensors.location import LocationStatus, Position

# callback(vector, accuracy): vector is (x, y, z) in device coordinates,
# accuracy a SensorAccuracy or the platform's integer status code
SensorCallback = Callable[..., None]
LocationCallback = Callable[[Optional[Position]], None]
StatusCallback = Callable[[LocationStatus], None]


class SensorSource:
    """Source of periodic accelerometer and magnetometer samples."""

    def has_sensor(self, kind: SensorKind) -> bool:
        """Return True if the platform offers this sensor."""
        raise NotImplementedError

    def subscribe(self, kind: SensorKind, callback: SensorCallback):
        """Start delivering samples of ``kind`` to ``callback``."""
        raise NotImplementedError

    def unsubscribe(self, kind: SensorKind):
        """Stop delivering samples of ``kind``."""
        raise NotImplementedError


class LocationSource:
    """Source of the last known position and periodic position updates."""

    def has_provider(self) -> bool:
        """Return True if any location provider is usable."""
        raise NotImplementedError

    def get_last_known(self) -> Optional[Position]:
        """Return the last known position or None."""
        raise NotImplementedError

    def subscribe(self, min_interval_ms: int, min_distance_m: float,
                  on_location: LocationCallback, on_status: StatusCallback):
        """Start delivering position updates and provider status changes."""
        raise NotImplementedError

    def unsubscribe(self):
        """Stop delivering updates."""
        raise NotImplementedError


class Renderer:
    """Redraws the rotated compass graphic."""

    def set_heading(self, degrees: float):
        """Rotate the compass graphic to ``degrees``."""
        raise NotImplementedError

    def set_direction_label(self, label):
        """Show the compass-rose label. Renderers without a label ignore it."""


class TextSink:
    """Displays the formatted position."""

    def set_location_text(self, text: str):
        raise NotImplementedError


class CalibrationPrompt:
    """Modal prompt asking the user to calibrate the compass."""

    def show_calibration_prompt(self):
        raise NotImplementedError

    def dismiss_calibration_prompt(self):
        raise NotImplementedError
