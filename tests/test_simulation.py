#!/usr/bin/env python3
"""
Tests for the simulated platform sources.
"""

import unittest
import time
import numpy as np
import sys
import os

# Add compass package and simulated platform to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'platforms', 'simulated'))

from compass.heading import HeadingEngine, OrientationEstimator, CalibrationMonitor
from compass.sensors import SensorAccuracy, SensorKind, SensorSample
from compass.config import CompassConfig
from compass.math import shortest_delta
from hardware import SensorSimulator, LocationSimulator, field_vectors
from console import ConsoleDisplay

class TestSensorSimulator(unittest.TestCase):
    """Test SensorSimulator class."""
    
    def test_field_is_plausible(self):
        accel, mag = field_vectors(123.0)
        self.assertAlmostEqual(np.linalg.norm(accel), 9.80665)
        self.assertTrue(CalibrationMonitor().is_plausible(SensorSample(mag)))
    
    def test_estimated_heading_matches_device(self):
        estimator = OrientationEstimator()
        for heading in (0.0, 45.0, 170.0, 260.0):
            accel, mag = field_vectors(heading)
            target = estimator.estimate(SensorSample(accel), SensorSample(mag))
            self.assertAlmostEqual(shortest_delta(target, -heading % 360.0), 0.0, places=6)
    
    def test_interference_window(self):
        simulator = SensorSimulator(interference=(1.0, 2.0, 3.0),
                                    random_state=np.random.default_rng(1))
        _, mag, accuracy = simulator.sample(0.5)
        self.assertEqual(accuracy, SensorAccuracy.HIGH)
        
        _, mag, accuracy = simulator.sample(1.5)
        self.assertEqual(accuracy, SensorAccuracy.UNRELIABLE)
        self.assertGreater(np.linalg.norm(mag), 65.0)
    
    def test_heading_at(self):
        simulator = SensorSimulator(rotation_rate_dps=10.0, initial_heading=350.0)
        self.assertAlmostEqual(simulator.heading_at(2.0), 10.0)
    
    def test_unavailable_sensor(self):
        simulator = SensorSimulator(available=(SensorKind.ACCELEROMETER,))
        self.assertFalse(simulator.has_sensor(SensorKind.MAGNETOMETER))
        with self.assertRaises(ValueError):
            simulator.subscribe(SensorKind.MAGNETOMETER, lambda vector, accuracy: None)

class TestLocationSimulator(unittest.TestCase):
    """Test LocationSimulator class."""
    
    def test_last_known(self):
        simulator = LocationSimulator(latitude=1.0, longitude=2.0)
        position = simulator.get_last_known()
        self.assertEqual((position.latitude, position.longitude), (1.0, 2.0))
        self.assertIsNone(LocationSimulator(last_known=False).get_last_known())
    
    def test_jitter(self):
        simulator = LocationSimulator(noise_deg=0.001, random_state=np.random.default_rng(0))
        position = simulator.next_position()
        self.assertAlmostEqual(position.latitude, simulator.latitude, delta=0.01)
        self.assertTrue(position.is_valid)

class TestSimulatedEngine(unittest.TestCase):
    """Run the engine against the simulators."""
    
    def test_display_follows_simulated_device(self):
        sensors = SensorSimulator(rotation_rate_dps=0.0, initial_heading=90.0,
                                  rate_hz=200.0, random_state=np.random.default_rng(5))
        location = LocationSimulator()
        display = ConsoleDisplay()
        engine = HeadingEngine(sensor_source=sensors, location_source=location,
                               renderer=display, text_sink=display, prompt=display,
                               config=CompassConfig.from_dict({"tick_period_ms": 60000}))
        engine.start()
        try:
            deadline = 200
            while engine.sensors.magnetometer is None and deadline:
                time.sleep(0.01)
                deadline -= 1
            self.assertIsNotNone(engine.sensors.magnetometer)
            engine.tick()
        finally:
            engine.stop()
        
        self.assertAlmostEqual(engine.compass_heading, 90.0, delta=5.0)
        self.assertEqual(display.label.directions, ("E",))
        self.assertTrue(display.location_text.startswith("North 39°54'"))
        self.assertIn("Dial:", display.render())

if __name__ == '__main__':
    unittest.main()
