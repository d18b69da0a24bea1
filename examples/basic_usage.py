#!/usr/bin/env python3
"""
Basic usage example of the compass heading engine.

This example drives the engine tick by tick from synthetic samples,
without threads or hardware.
"""

import sys
import os
import numpy as np

# Add compass package to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from compass.heading import HeadingEngine
from compass.sensors import SensorAccuracy

GRAVITY_MS2 = 9.80665

def simulate_device_turn(duration=20.0, dt=0.02, rate_dps=15.0,
                         horizontal_ut=20.0, vertical_ut=40.0):
    """
    Simulate a flat device turning clockwise at a constant rate.
    
    Args:
        duration: Simulation duration in seconds
        dt: Time step in seconds
        rate_dps: Turn rate in degrees per second
        horizontal_ut, vertical_ut: Earth field components (uT)
        
    Yields:
        (t, device_heading, accel, mag) tuples
    """
    accel_noise = 0.05   # m/s²
    mag_noise = 0.5      # uT
    
    t = 0.0
    while t < duration:
        heading = (rate_dps * t) % 360.0
        psi = np.radians(heading)
        
        accel = np.array([0.0, 0.0, GRAVITY_MS2]) + np.random.normal(0, accel_noise, 3)
        mag = np.array([
            -horizontal_ut * np.sin(psi),
            horizontal_ut * np.cos(psi),
            -vertical_ut
        ]) + np.random.normal(0, mag_noise, 3)
        
        yield t, heading, accel, mag
        
        t += dt

class PrintingRenderer:
    """Collects redraws instead of drawing."""
    
    def __init__(self):
        self.heading = 0.0
        self.label = None
    
    def set_heading(self, degrees):
        self.heading = degrees
    
    def set_direction_label(self, label):
        self.label = label

def main():
    """Main example function."""
    print("Compass Heading Engine - Basic Usage Example")
    print("=" * 50)
    
    renderer = PrintingRenderer()
    engine = HeadingEngine(renderer=renderer)
    
    print("Starting simulation (15°/s turn, 20 seconds)...")
    
    last_print_time = -1.0
    print_interval = 2.0
    
    for t, device_heading, accel, mag in simulate_device_turn():
        engine.on_accelerometer(accel, SensorAccuracy.HIGH)
        engine.on_magnetometer(mag, SensorAccuracy.HIGH)
        engine.tick()
        
        if t - last_print_time >= print_interval:
            label = renderer.label.text if renderer.label else "--"
            print(f"t={t:5.1f}s  device {device_heading:6.1f}°  "
                  f"compass {engine.compass_heading:6.1f}°  "
                  f"dial {engine.current_heading:6.1f}° -> {engine.target_heading:6.1f}°  "
                  f"{label}")
            last_print_time = t
    
    stats = engine.get_statistics()
    print("\n=== Final Statistics ===")
    print(f"Ticks: {stats['ticks']}")
    print(f"Redraws: {stats['redraws']}")
    print(f"Calibration mode: {stats['calibration']['mode']}")

if __name__ == "__main__":
    main()
