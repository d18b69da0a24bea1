"""
Heading and calibration state for the heading engine.
"""

from dataclasses import dataclass
from enum import Enum

from ..math.utils import normalize_degree

@dataclass
class HeadingState:
    """
    Displayed and target rotation of the compass graphic.
    
    - current: animated rotation shown on screen, owned by the animator
    - target: rotation computed from the latest samples, owned by the estimator
    
    Both are degrees in [0, 360).
    """
    
    current: float = 0.0
    target: float = 0.0
    
    def __post_init__(self):
        self.current = normalize_degree(self.current)
        self.target = normalize_degree(self.target)
    
    @property
    def converged(self) -> bool:
        return self.current == self.target
    
    def copy(self) -> 'HeadingState':
        """Create a copy of the state."""
        return HeadingState(current=self.current, target=self.target)
    
    def __str__(self) -> str:
        return f"HeadingState(current={self.current:.2f}, target={self.target:.2f})"

class CalibrationMode(Enum):
    NORMAL = "normal"
    CALIBRATING = "calibrating"

@dataclass
class CalibrationState:
    """
    Debounce counters of the calibration monitor.
    
    Only the streak that matters for the current mode is ever nonzero:
    inaccurate_streak while NORMAL, accurate_streak while CALIBRATING.
    """
    
    mode: CalibrationMode = CalibrationMode.NORMAL
    accurate_streak: int = 0
    inaccurate_streak: int = 0
    
    def switch_mode(self, mode: CalibrationMode):
        """Enter ``mode`` and reset both streaks."""
        self.mode = mode
        self.accurate_streak = 0
        self.inaccurate_streak = 0
    
    @property
    def is_calibrating(self) -> bool:
        return self.mode is CalibrationMode.CALIBRATING
