"""
Magnetometer plausibility monitoring with hysteresis.
"""

import logging
from typing import Optional

from ..math.constants import (
    MIN_FIELD_STRENGTH,
    MAX_FIELD_STRENGTH,
    MAX_ACCURATE_COUNT,
    MAX_INACCURATE_COUNT,
)
from ..sensors.samples import SensorAccuracy, SensorSample
from .state import CalibrationMode, CalibrationState

logger = logging.getLogger(__name__)

class CalibrationMonitor:
    """
    Decides whether the compass needs calibrating.
    
    A sample is plausible when the field strength lies in
    [min_field, max_field] and its accuracy is not UNRELIABLE. In NORMAL
    mode, ``inaccurate_limit`` implausible samples in a row switch to
    CALIBRATING; in CALIBRATING mode, ``accurate_limit`` plausible samples
    in a row switch back. Any sample of the other kind restarts the streak.
    """
    
    def __init__(self,
                 min_field: float = MIN_FIELD_STRENGTH,
                 max_field: float = MAX_FIELD_STRENGTH,
                 accurate_limit: int = MAX_ACCURATE_COUNT,
                 inaccurate_limit: int = MAX_INACCURATE_COUNT,
                 prompt=None):
        """
        Initialize calibration monitor.
        
        Args:
            min_field: Lowest plausible field strength (raw magnetometer units)
            max_field: Highest plausible field strength
            accurate_limit: Plausible streak that ends calibration
            inaccurate_limit: Implausible streak that starts calibration
            prompt: Optional CalibrationPrompt shown/dismissed on transitions
        """
        if min_field > max_field:
            raise ValueError("min_field must not exceed max_field")
        if accurate_limit < 1 or inaccurate_limit < 1:
            raise ValueError("Streak limits must be at least 1")
        
        self.min_field = min_field
        self.max_field = max_field
        self.accurate_limit = accurate_limit
        self.inaccurate_limit = inaccurate_limit
        self.prompt = prompt
        
        self.state = CalibrationState()
        
        # Statistics
        self.sample_count = 0
        self.transition_count = 0
    
    @property
    def mode(self) -> CalibrationMode:
        return self.state.mode
    
    def is_plausible(self, sample: SensorSample) -> bool:
        """Check a magnetometer sample against the plausible field band."""
        if sample.accuracy == SensorAccuracy.UNRELIABLE:
            return False
        return self.min_field <= sample.norm <= self.max_field
    
    def update(self, sample: Optional[SensorSample]) -> Optional[CalibrationMode]:
        """
        Feed one magnetometer sample.
        
        Args:
            sample: Latest magnetometer sample, None if none has arrived yet
            
        Returns:
            The new mode if a transition happened, else None
        """
        if sample is None:
            return None
        
        self.sample_count += 1
        plausible = self.is_plausible(sample)
        state = self.state
        
        logger.debug("field strength = %.2f", sample.norm)
        
        if state.mode is CalibrationMode.CALIBRATING:
            if plausible:
                state.accurate_streak += 1
            else:
                state.accurate_streak = 0
            logger.debug("accurate count = %d", state.accurate_streak)
            
            if state.accurate_streak >= self.accurate_limit:
                self._switch_mode(CalibrationMode.NORMAL)
                return CalibrationMode.NORMAL
        else:
            if not plausible:
                state.inaccurate_streak += 1
            else:
                state.inaccurate_streak = 0
            logger.debug("inaccurate count = %d", state.inaccurate_streak)
            
            if state.inaccurate_streak >= self.inaccurate_limit:
                self._switch_mode(CalibrationMode.CALIBRATING)
                return CalibrationMode.CALIBRATING
        
        return None
    
    def _switch_mode(self, mode: CalibrationMode):
        self.state.switch_mode(mode)
        self.transition_count += 1
        logger.info("Compass calibration mode: %s", mode.value)
        
        if self.prompt is None:
            return
        if mode is CalibrationMode.CALIBRATING:
            self.prompt.show_calibration_prompt()
        else:
            self.prompt.dismiss_calibration_prompt()
    
    def reset(self):
        """Return to NORMAL without notifying the prompt."""
        self.state = CalibrationState()
    
    def get_statistics(self) -> dict:
        """Get monitor statistics."""
        return {
            'mode': self.state.mode.value,
            'accurate_streak': self.state.accurate_streak,
            'inaccurate_streak': self.state.inaccurate_streak,
            'samples': self.sample_count,
            'transitions': self.transition_count,
        }
