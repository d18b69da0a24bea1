"""
Heading engine: sensor ingestion, calibration monitoring, target heading
estimation and animation on a fixed tick.
"""

import logging
import threading
import time
from typing import Callable, List, Optional

from ..config import CompassConfig
from ..sensors.samples import SensorAccuracy, SensorCell, SensorKind
from ..sensors.location import LocationTracker
from .animator import AccelerateInterpolator, HeadingAnimator
from .calibration import CalibrationMonitor
from .estimator import OrientationEstimator
from .labels import DirectionLabel, DirectionLabelComposer
from .state import CalibrationMode, HeadingState

logger = logging.getLogger(__name__)

class HeadingTicker:
    """
    Periodic driver for the heading tick.
    
    The next pass is scheduled only after the previous one has finished,
    so delays add up under load. ``stop()`` sets a cancellation event that
    ends the wait immediately and prevents any further pass.
    """
    
    def __init__(self, callback: Callable[[], None], period_s: float,
                 name: str = "heading-ticker"):
        if period_s <= 0:
            raise ValueError("Tick period must be positive")
        self.callback = callback
        self.period_s = period_s
        self.name = name
        
        self._thread: Optional[threading.Thread] = None
        self._cancelled = threading.Event()
        
        # Statistics
        self.error_count = 0
    
    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
    
    def start(self):
        """Start ticking. Does nothing if already running."""
        if self.is_running:
            return
        self._cancelled = threading.Event()
        self._thread = threading.Thread(target=self._run, args=(self._cancelled,),
                                        name=self.name, daemon=True)
        self._thread.start()
    
    def stop(self, timeout: float = 2.0):
        """Cancel the ticker and wait for the current pass to finish."""
        thread = self._thread
        self._cancelled.set()
        self._thread = None
        
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)
    
    def _run(self, cancelled: threading.Event):
        while not cancelled.wait(self.period_s):
            try:
                self.callback()
            except Exception:
                self.error_count += 1
                logger.exception("Heading tick failed")

class HeadingEngine:
    """
    Drives the compass display from accelerometer and magnetometer samples.
    
    Sensor callbacks write the latest samples into a lock-guarded cell.
    Every tick, under the same lock, the calibration monitor is advanced and
    the target heading recomputed; then the animator moves the displayed
    heading towards the target and the renderer is updated.
    """
    
    def __init__(self,
                 sensor_source=None,
                 location_source=None,
                 renderer=None,
                 text_sink=None,
                 prompt=None,
                 config: Optional[CompassConfig] = None):
        """
        Initialize the heading engine.
        
        Args:
            sensor_source: SensorSource, None if the platform has no sensors
            location_source: LocationSource, None if the platform has none
            renderer: Renderer for the compass graphic and label
            text_sink: TextSink for the position readout
            prompt: CalibrationPrompt shown while calibration is needed
            config: Engine configuration, defaults if None
        """
        self.config = config or CompassConfig()
        
        self.sensor_source = sensor_source
        self.renderer = renderer
        
        self.sensors = SensorCell()
        self.state = HeadingState()
        self.estimator = OrientationEstimator()
        
        calibration = self.config.calibration
        self.calibration = CalibrationMonitor(
            min_field=calibration["min_field_strength"],
            max_field=calibration["max_field_strength"],
            accurate_limit=calibration["accurate_count"],
            inaccurate_limit=calibration["inaccurate_count"],
            prompt=prompt
        )
        
        self.animator = HeadingAnimator(
            max_rotate=self.config.max_rotate_degree,
            ease_far=self.config.ease_far,
            ease_near=self.config.ease_near,
            interpolator=AccelerateInterpolator(self.config.interpolator_factor),
            epsilon=self.config.convergence_epsilon
        )
        
        self.composer = DirectionLabelComposer(self.config.use_alternate_ordering)
        
        self.location = None
        if text_sink is not None:
            self.location = LocationTracker(
                location_source,
                text_sink,
                min_interval_ms=self.config.location_min_interval_ms,
                min_distance_m=self.config.location_min_distance_m,
                templates=self.config.text
            )
        
        self.ticker = HeadingTicker(self.tick, self.config.tick_period_s)
        
        # Lifecycle
        self.running = False
        self.subscribed_sensors: List[SensorKind] = []
        self.last_label: Optional[DirectionLabel] = None
        
        # Statistics
        self.tick_count = 0
        self.redraw_count = 0
        self.start_time = None
    
    # Properties
    @property
    def current_heading(self) -> float:
        return self.state.current
    
    @property
    def target_heading(self) -> float:
        return self.state.target
    
    @property
    def compass_heading(self) -> float:
        """Bearing the device points to, clockwise from magnetic north."""
        if self.last_label is not None:
            return self.last_label.heading
        return self.composer.compose(self.state.target).heading
    
    @property
    def calibration_mode(self) -> CalibrationMode:
        return self.calibration.mode
    
    @property
    def is_running(self) -> bool:
        return self.running
    
    # Sensor callbacks
    def on_accelerometer(self, vector, accuracy=SensorAccuracy.HIGH):
        self._ingest(SensorKind.ACCELEROMETER, vector, accuracy)
    
    def on_magnetometer(self, vector, accuracy=SensorAccuracy.HIGH):
        self._ingest(SensorKind.MAGNETOMETER, vector, accuracy)
    
    def _ingest(self, kind: SensorKind, vector, accuracy):
        try:
            self.sensors.update(kind, vector, accuracy)
        except ValueError as e:
            logger.warning("Dropped %s sample: %s", kind.value, e)
    
    # Lifecycle
    def start(self):
        """Subscribe to sensors and location, then start ticking."""
        if self.running:
            logger.debug("Heading engine already running")
            return
        
        self._subscribe_sensors()
        
        if self.location is not None:
            self.location.start()
        
        self.running = True
        self.start_time = time.time()
        self.ticker.start()
        logger.info("Heading engine started (tick %d ms)", self.config.tick_period_ms)
    
    def stop(self):
        """Stop ticking and release all subscriptions. Safe to call more than once."""
        if not self.running:
            return
        
        self.running = False
        self.ticker.stop()
        
        for kind in self.subscribed_sensors:
            self.sensor_source.unsubscribe(kind)
        self.subscribed_sensors = []
        
        if self.location is not None:
            self.location.stop()
        
        logger.info("Heading engine stopped")
    
    def _subscribe_sensors(self):
        callbacks = {
            SensorKind.ACCELEROMETER: self.on_accelerometer,
            SensorKind.MAGNETOMETER: self.on_magnetometer,
        }
        
        for kind, callback in callbacks.items():
            if self.sensor_source is None or not self.sensor_source.has_sensor(kind):
                logger.warning("No %s available, heading will not update", kind.value)
                continue
            self.sensor_source.subscribe(kind, callback)
            self.subscribed_sensors.append(kind)
    
    # Tick
    def tick(self) -> bool:
        """
        Run one animation pass.
        
        Returns:
            True if the displayed heading moved
        """
        with self.sensors:
            accelerometer, magnetometer = self.sensors.snapshot()
            self.calibration.update(magnetometer)
            self.estimator.update(self.state, accelerometer, magnetometer)
            target = self.state.target
        
        moved = self.animator.step(self.state)
        if moved:
            self.redraw_count += 1
            if self.renderer is not None:
                self.renderer.set_heading(self.state.current)
        
        label = self.composer.compose(target)
        self.last_label = label
        set_label = getattr(self.renderer, "set_direction_label", None)
        if set_label is not None:
            set_label(label)
        
        self.tick_count += 1
        return moved
    
    def get_statistics(self) -> dict:
        """Get engine statistics."""
        uptime = time.time() - self.start_time if self.start_time else 0.0
        
        return {
            'running': self.running,
            'uptime': uptime,
            'ticks': self.tick_count,
            'redraws': self.redraw_count,
            'tick_errors': self.ticker.error_count,
            'current_heading': self.state.current,
            'target_heading': self.state.target,
            'subscribed_sensors': [kind.value for kind in self.subscribed_sensors],
            'accelerometer_samples': self.sensors.accelerometer_count,
            'magnetometer_samples': self.sensors.magnetometer_count,
            'estimator': self.estimator.get_statistics(),
            'calibration': self.calibration.get_statistics(),
            'animator': self.animator.get_statistics(),
            'location_text': self.location.last_text if self.location else None,
        }
