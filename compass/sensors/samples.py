"""
Accelerometer and magnetometer samples shared between sensor callbacks
and the heading tick.
"""

import numpy as np
import threading
import time
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple

class SensorAccuracy(IntEnum):
    """Accuracy status reported with each sample."""
    UNRELIABLE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3

class SensorKind(Enum):
    """Sensors the heading engine subscribes to."""
    ACCELEROMETER = "accelerometer"
    MAGNETOMETER = "magnetometer"

@dataclass
class SensorSample:
    """One 3-axis reading in device coordinates."""
    
    vector: np.ndarray
    accuracy: SensorAccuracy = SensorAccuracy.HIGH
    
    # Timestamp
    timestamp: Optional[float] = None
    
    def __post_init__(self):
        self.vector = np.array(self.vector, dtype=float).reshape(-1)
        if self.vector.shape != (3,):
            raise ValueError("Sensor vector must have 3 components")
        self.accuracy = SensorAccuracy(self.accuracy)
        if self.timestamp is None:
            self.timestamp = time.time()
    
    @property
    def norm(self) -> float:
        """Euclidean norm of the vector."""
        return float(np.linalg.norm(self.vector))

class SensorCell:
    """
    Latest accelerometer and magnetometer samples behind a single lock.
    
    Each slot has one writer, the callback of the matching sensor. The
    heading tick reads both. Holding the cell (``with cell:``) excludes
    ingestion, so a target heading is always computed from samples that
    do not change underneath it.
    """
    
    def __init__(self):
        self._lock = threading.RLock()
        self._accelerometer: Optional[SensorSample] = None
        self._magnetometer: Optional[SensorSample] = None
        
        # Statistics
        self.accelerometer_count = 0
        self.magnetometer_count = 0
    
    def __enter__(self):
        self._lock.acquire()
        return self
    
    def __exit__(self, exc_type, exc, tb):
        self._lock.release()
        return False
    
    def update(self, kind: SensorKind, vector, accuracy=SensorAccuracy.HIGH,
               timestamp: Optional[float] = None) -> SensorSample:
        """
        Store the newest sample for a sensor.
        
        Args:
            kind: Which sensor delivered the sample
            vector: 3-axis reading
            accuracy: Accuracy status of the reading
            timestamp: Sample time, defaults to now
            
        Returns:
            The stored sample
        """
        sample = SensorSample(vector=vector, accuracy=accuracy, timestamp=timestamp)
        with self._lock:
            if kind is SensorKind.ACCELEROMETER:
                self._accelerometer = sample
                self.accelerometer_count += 1
            elif kind is SensorKind.MAGNETOMETER:
                self._magnetometer = sample
                self.magnetometer_count += 1
            else:
                raise ValueError(f"Unknown sensor kind: {kind}")
        return sample
    
    @property
    def accelerometer(self) -> Optional[SensorSample]:
        with self._lock:
            return self._accelerometer
    
    @property
    def magnetometer(self) -> Optional[SensorSample]:
        with self._lock:
            return self._magnetometer
    
    def snapshot(self) -> Tuple[Optional[SensorSample], Optional[SensorSample]]:
        """Return (accelerometer, magnetometer), either may be None."""
        with self._lock:
            return self._accelerometer, self._magnetometer
    
    def clear(self):
        """Forget both samples."""
        with self._lock:
            self._accelerometer = None
            self._magnetometer = None
