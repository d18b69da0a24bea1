#!/usr/bin/env python3
"""
Compass application on simulated sensors.
Runs the heading engine against a turning virtual device and prints the
display once per second.
"""

import sys
import os
import time
import signal
import argparse

# Add compass package to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))
sys.path.insert(0, os.path.dirname(__file__))

from compass.config import CompassConfig, setup_logging
from compass.heading import HeadingEngine
from hardware import SensorSimulator, LocationSimulator
from console import ConsoleDisplay

class CompassApp:
    """Compass screen wired to simulated hardware."""
    
    def __init__(self, config_file=None, rotation_rate=10.0, interference=None,
                 no_location=False):
        """Initialize the compass application."""
        
        # Load configuration
        self.config = CompassConfig(config_file)
        setup_logging(self.config)
        
        # Simulated hardware
        self.sensors = SensorSimulator(rotation_rate_dps=rotation_rate,
                                       interference=interference)
        self.location = LocationSimulator(provider_available=not no_location)
        
        # Display and engine
        self.display = ConsoleDisplay()
        self.engine = HeadingEngine(
            sensor_source=self.sensors,
            location_source=self.location,
            renderer=self.display,
            text_sink=self.display,
            prompt=self.display,
            config=self.config
        )
        
        self.running = False
        self.start_time = time.time()
        
        # Setup signal handlers
        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)
        
        print("Compass initialized")
        print(f"Tick: {self.config.tick_period_ms} ms, "
              f"max rotation {self.config.max_rotate_degree}°/tick")
    
    def _signal_handler(self, signum, frame):
        """Handle shutdown signals."""
        print("\nShutdown signal received, stopping compass...")
        self.running = False
    
    def start(self):
        """Start the compass."""
        if self.running:
            print("Compass already running")
            return
        
        self.engine.start()
        self.running = True
        self.start_time = time.time()
        print("Compass started")
    
    def stop(self):
        """Stop the compass."""
        self.running = False
        self.engine.stop()
        print("Compass stopped")
    
    def print_status(self):
        """Print current display state."""
        elapsed = time.time() - self.start_time
        true_heading = self.sensors.heading_at(elapsed)
        print(f"[{elapsed:5.1f}s] {self.display.render(true_heading)}")
    
    def print_statistics(self):
        """Print engine statistics."""
        stats = self.engine.get_statistics()
        print("\n=== Compass Statistics ===")
        print(f"Ticks: {stats['ticks']}, redraws: {stats['redraws']}, "
              f"tick errors: {stats['tick_errors']}")
        print(f"Samples: {stats['accelerometer_samples']} accelerometer, "
              f"{stats['magnetometer_samples']} magnetometer")
        print(f"Estimator: {stats['estimator']['successes']} ok, "
              f"{stats['estimator']['failures']} degenerate")
        print(f"Calibration: mode {stats['calibration']['mode']}, "
              f"{stats['calibration']['transitions']} transitions")

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Compass on simulated sensors")
    parser.add_argument("--config", default=None, help="JSON configuration file")
    parser.add_argument("--duration", type=float, default=0.0,
                        help="Seconds to run, 0 to run until interrupted")
    parser.add_argument("--rotation-rate", type=float, default=10.0,
                        help="Device turn rate in degrees per second")
    parser.add_argument("--interference", type=float, nargs=3, default=None,
                        metavar=("START", "END", "SCALE"),
                        help="Scale the magnetic field between START and END seconds")
    parser.add_argument("--no-location", action="store_true",
                        help="Simulate a device without a location provider")
    return parser.parse_args(argv)

def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    
    print("Compass - simulated sensors")
    print("=" * 50)
    
    app = CompassApp(config_file=args.config,
                     rotation_rate=args.rotation_rate,
                     interference=tuple(args.interference) if args.interference else None,
                     no_location=args.no_location)
    app.start()
    
    try:
        while app.running:
            time.sleep(1.0)
            app.print_status()
            if args.duration and time.time() - app.start_time >= args.duration:
                break
    
    except KeyboardInterrupt:
        print("\nKeyboard interrupt received")
    
    finally:
        app.stop()
        app.print_statistics()
    
    return 0

if __name__ == "__main__":
    sys.exit(main())
