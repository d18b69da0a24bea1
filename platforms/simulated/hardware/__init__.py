"""
Simulated sensor and location sources for running without a device.
"""

from .sensor_simulator import SensorSimulator, field_vectors
from .location_simulator import LocationSimulator

__all__ = ["SensorSimulator", "LocationSimulator", "field_vectors"]
