"""
sensor_simulator.py

Synthetic accelerometer and magnetometer for a device lying flat and
turning about its vertical axis. The magnetometer reports the Earth field
(horizontal component towards magnetic north plus a downward vertical
component) in device coordinates, with white noise on both sensors. An
interference window scales the field out of the plausible band so the
calibration prompt can be exercised.
"""

from __future__ import annotations

import math
import threading
import time
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from compass.interfaces import SensorSource
from compass.sensors.samples import SensorAccuracy, SensorKind

GRAVITY_MS2 = 9.80665

def field_vectors(heading_deg: float,
                  horizontal_ut: float = 20.0,
                  vertical_ut: float = 40.0) -> Tuple[np.ndarray, np.ndarray]:
    """
    Noise-free (accelerometer, magnetometer) vectors for a flat device.
    
    Args:
        heading_deg: Bearing of the device y axis, clockwise from magnetic north
        horizontal_ut: Horizontal field strength (uT)
        vertical_ut: Downward field strength (uT)
        
    Returns:
        (accel, mag) in device coordinates
    """
    psi = math.radians(heading_deg)
    accel = np.array([0.0, 0.0, GRAVITY_MS2])
    mag = np.array([
        -horizontal_ut * math.sin(psi),
        horizontal_ut * math.cos(psi),
        -vertical_ut
    ])
    return accel, mag

class SensorSimulator(SensorSource):
    """
    Delivers simulated samples from a background thread.
    
    Parameters:
        rotation_rate_dps: Turn rate of the device (degrees per second).
        initial_heading: Device heading at start (degrees).
        rate_hz: Delivery rate of both sensors.
        accel_noise_std: Accelerometer white noise (m/s^2).
        mag_noise_std: Magnetometer white noise (uT).
        interference: Optional (start_s, end_s, scale) window during which
            the magnetometer is scaled and reported UNRELIABLE.
        available: Sensors this simulated device offers.
        random_state: Generator for reproducible noise.
    """
    
    def __init__(self,
                 rotation_rate_dps: float = 10.0,
                 initial_heading: float = 0.0,
                 rate_hz: float = 50.0,
                 accel_noise_std: float = 0.05,
                 mag_noise_std: float = 0.5,
                 interference: Optional[Tuple[float, float, float]] = None,
                 available=(SensorKind.ACCELEROMETER, SensorKind.MAGNETOMETER),
                 random_state: Optional[np.random.Generator] = None):
        if rate_hz <= 0:
            raise ValueError("rate_hz must be positive")
        
        self.rotation_rate_dps = rotation_rate_dps
        self.initial_heading = initial_heading
        self.rate_hz = rate_hz
        self.accel_noise_std = accel_noise_std
        self.mag_noise_std = mag_noise_std
        self.interference = interference
        self.available = set(available)
        self.rng = random_state if random_state is not None else np.random.default_rng()
        
        self.callbacks: Dict[SensorKind, Callable] = {}
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._stopped = threading.Event()
        self._start_time = time.time()
        
        # Statistics
        self.samples_delivered = 0
    
    def has_sensor(self, kind: SensorKind) -> bool:
        return kind in self.available
    
    def subscribe(self, kind: SensorKind, callback: Callable):
        if kind not in self.available:
            raise ValueError(f"Simulated device has no {kind.value}")
        with self._lock:
            self.callbacks[kind] = callback
        if self._thread is None or not self._thread.is_alive():
            self._start()
    
    def unsubscribe(self, kind: SensorKind):
        with self._lock:
            self.callbacks.pop(kind, None)
            idle = not self.callbacks
        if idle:
            self._stop()
    
    def heading_at(self, elapsed_s: float) -> float:
        """True device heading after ``elapsed_s`` seconds."""
        return (self.initial_heading + self.rotation_rate_dps * elapsed_s) % 360.0
    
    def sample(self, elapsed_s: float):
        """
        Generate one pair of samples.
        
        Returns:
            (accel, mag, mag_accuracy)
        """
        accel, mag = field_vectors(self.heading_at(elapsed_s))
        accel = accel + self.rng.normal(scale=self.accel_noise_std, size=3)
        mag = mag + self.rng.normal(scale=self.mag_noise_std, size=3)
        
        accuracy = SensorAccuracy.HIGH
        if self.interference is not None:
            start, end, scale = self.interference
            if start <= elapsed_s < end:
                mag = mag * scale
                accuracy = SensorAccuracy.UNRELIABLE
        
        return accel, mag, accuracy
    
    def _start(self):
        self._stopped = threading.Event()
        self._start_time = time.time()
        self._thread = threading.Thread(target=self._run, args=(self._stopped,),
                                        name="sensor-simulator", daemon=True)
        self._thread.start()
    
    def _stop(self):
        self._stopped.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=1.0)
        self._thread = None
    
    def _run(self, stopped: threading.Event):
        period = 1.0 / self.rate_hz
        while not stopped.wait(period):
            accel, mag, accuracy = self.sample(time.time() - self._start_time)
            with self._lock:
                callbacks = dict(self.callbacks)
            
            if SensorKind.ACCELEROMETER in callbacks:
                callbacks[SensorKind.ACCELEROMETER](accel, SensorAccuracy.HIGH)
            if SensorKind.MAGNETOMETER in callbacks:
                callbacks[SensorKind.MAGNETOMETER](mag, accuracy)
            self.samples_delivered += 1
