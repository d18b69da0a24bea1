"""
Simulated location provider.
"""

import threading
import time
from typing import Callable, Optional

import numpy as np

from compass.interfaces import LocationSource
from compass.sensors.location import LocationStatus, Position

class LocationSimulator(LocationSource):
    """
    Reports a fixed position with GPS-like jitter.
    
    Updates are delivered no faster than the requested minimum interval.
    """
    
    def __init__(self,
                 latitude: float = 39.9042,
                 longitude: float = 116.4074,
                 noise_deg: float = 0.00001,
                 provider_available: bool = True,
                 last_known: bool = True,
                 random_state: Optional[np.random.Generator] = None):
        """
        Args:
            latitude: Base latitude (degrees)
            longitude: Base longitude (degrees)
            noise_deg: Standard deviation of the position jitter (degrees)
            provider_available: Whether a provider exists at all
            last_known: Whether a last known fix is available before the first update
            random_state: Generator for reproducible jitter
        """
        self.latitude = latitude
        self.longitude = longitude
        self.noise_deg = noise_deg
        self.provider_available = provider_available
        self.rng = random_state if random_state is not None else np.random.default_rng()
        
        self.last_position: Optional[Position] = None
        if last_known:
            self.last_position = Position(latitude, longitude)
        
        self.on_location: Optional[Callable] = None
        self.on_status: Optional[Callable] = None
        self._thread: Optional[threading.Thread] = None
        self._stopped = threading.Event()
    
    def has_provider(self) -> bool:
        return self.provider_available
    
    def get_last_known(self) -> Optional[Position]:
        return self.last_position
    
    def subscribe(self, min_interval_ms, min_distance_m, on_location, on_status):
        self.unsubscribe()
        self.on_location = on_location
        self.on_status = on_status
        self._stopped = threading.Event()
        self._thread = threading.Thread(target=self._run,
                                        args=(self._stopped, min_interval_ms / 1000.0),
                                        name="location-simulator", daemon=True)
        self._thread.start()
    
    def unsubscribe(self):
        self._stopped.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=1.0)
        self._thread = None
        self.on_location = None
        self.on_status = None
    
    def next_position(self) -> Position:
        """Draw a jittered fix around the base position."""
        offset = self.rng.normal(scale=self.noise_deg, size=2)
        return Position(
            latitude=self.latitude + offset[0],
            longitude=self.longitude + offset[1],
            accuracy=5.0,
            timestamp=time.time()
        )
    
    def set_status(self, status: LocationStatus):
        """Report a provider status change to the subscriber."""
        if self.on_status is not None:
            self.on_status(status)
    
    def _run(self, stopped: threading.Event, interval_s: float):
        while not stopped.wait(interval_s):
            self.last_position = self.next_position()
            callback = self.on_location
            if callback is not None:
                callback(self.last_position)
