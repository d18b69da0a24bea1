"""
Location readout: degree/minute/second formatting and tracking of the
platform location source.
"""

import logging
import time
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Dict

from ..math.utils import to_dms
from ..math.constants import LOCATION_MIN_INTERVAL_MS, LOCATION_MIN_DISTANCE_M

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES = {
    "north": "North {}",
    "south": "South {}",
    "east": "East {}",
    "west": "West {}",
    "separator": "    ",
    "getting_location": "Getting location...",
    "cannot_get_location": "Cannot get location",
}

class LocationStatus(IntEnum):
    """Provider status values reported by a location source."""
    OUT_OF_SERVICE = 0
    TEMPORARILY_UNAVAILABLE = 1
    AVAILABLE = 2

@dataclass
class Position:
    """A position fix in decimal degrees."""
    
    latitude: float
    longitude: float
    accuracy: Optional[float] = None   # meters
    
    # Timestamp
    timestamp: Optional[float] = None
    
    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = time.time()
    
    @property
    def is_valid(self) -> bool:
        """Check if the coordinates are in range."""
        return -90 <= self.latitude <= 90 and -180 <= self.longitude <= 180

def format_coordinate(value: float) -> str:
    """Format the absolute value of a coordinate as {deg}°{min}'{sec}"."""
    degrees, minutes, seconds = to_dms(value)
    return f"{degrees}°{minutes}'{seconds}\""

def format_position(position: Optional[Position],
                    templates: Optional[Dict[str, str]] = None) -> str:
    """
    Format a position for the text sink.
    
    Latitude comes first with a north/south word, then longitude with an
    east/west word. Zero counts as north and east.
    
    Args:
        position: Position to format, None while no fix is known
        templates: Overrides for DEFAULT_TEMPLATES entries
        
    Returns:
        Display string
    """
    words = dict(DEFAULT_TEMPLATES)
    if templates:
        words.update(templates)
    
    if position is None:
        return words["getting_location"]
    
    if position.latitude >= 0.0:
        latitude = words["north"].format(format_coordinate(position.latitude))
    else:
        latitude = words["south"].format(format_coordinate(position.latitude))
    
    if position.longitude >= 0.0:
        longitude = words["east"].format(format_coordinate(position.longitude))
    else:
        longitude = words["west"].format(format_coordinate(position.longitude))
    
    return latitude + words["separator"] + longitude

class LocationTracker:
    """
    Keeps the text sink in step with a location source.
    """
    
    def __init__(self, source, text_sink,
                 min_interval_ms: int = LOCATION_MIN_INTERVAL_MS,
                 min_distance_m: float = LOCATION_MIN_DISTANCE_M,
                 templates: Optional[Dict[str, str]] = None):
        """
        Initialize location tracker.
        
        Args:
            source: LocationSource, or None when the platform has none
            text_sink: TextSink receiving the formatted string
            min_interval_ms: Minimum time between updates requested from the source
            min_distance_m: Minimum movement between updates requested from the source
            templates: Overrides for the hemisphere words and placeholders
        """
        self.source = source
        self.text_sink = text_sink
        self.min_interval_ms = min_interval_ms
        self.min_distance_m = min_distance_m
        self.templates = dict(DEFAULT_TEMPLATES)
        if templates:
            self.templates.update(templates)
        
        self.subscribed = False
        self.last_position: Optional[Position] = None
        self.last_text: Optional[str] = None
        
        # Statistics
        self.update_count = 0
    
    @property
    def has_provider(self) -> bool:
        return self.source is not None and self.source.has_provider()
    
    def start(self):
        """Show the last known position and subscribe to updates."""
        if self.subscribed:
            return
        
        if not self.has_provider:
            logger.warning("No location provider available")
            self._show(self.templates["cannot_get_location"])
            return
        
        self.update_location(self.source.get_last_known())
        self.source.subscribe(self.min_interval_ms, self.min_distance_m,
                              self.update_location, self.on_status_changed)
        self.subscribed = True
        logger.info("Location updates requested (%d ms, %.0f m)",
                    self.min_interval_ms, self.min_distance_m)
    
    def stop(self):
        """Unsubscribe from the source. Safe to call more than once."""
        if not self.subscribed:
            return
        self.source.unsubscribe()
        self.subscribed = False
        logger.info("Location updates removed")
    
    def update_location(self, position: Optional[Position]):
        """Format and push a position, or the waiting placeholder for None."""
        self.last_position = position
        self.update_count += 1
        self._show(format_position(position, self.templates))
    
    def on_status_changed(self, status: LocationStatus):
        """Handle a provider status change."""
        if status != LocationStatus.OUT_OF_SERVICE:
            self.update_location(self.source.get_last_known())
        else:
            logger.warning("Location provider out of service")
            self._show(self.templates["cannot_get_location"])
    
    def _show(self, text: str):
        self.last_text = text
        self.text_sink.set_location_text(text)
