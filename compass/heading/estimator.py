"""
Target heading from accelerometer and magnetometer samples.
"""

import logging
import math
from typing import Optional

from ..math.utils import (
    normalize_degree,
    rotation_matrix_from_vectors,
    orientation_from_rotation_matrix,
)
from ..sensors.samples import SensorSample
from .state import HeadingState

logger = logging.getLogger(__name__)

class OrientationEstimator:
    """
    Converts the latest accelerometer and magnetometer vectors into the
    rotation of the compass graphic.
    
    The device azimuth grows clockwise, while the graphic has to turn the
    other way to keep north pointing north, so the azimuth is negated.
    No state is carried between calls apart from statistics.
    """
    
    def __init__(self):
        # Statistics
        self.success_count = 0
        self.failure_count = 0
    
    def estimate(self, accelerometer: Optional[SensorSample],
                 magnetometer: Optional[SensorSample]) -> Optional[float]:
        """
        Compute the target heading.
        
        Args:
            accelerometer: Latest accelerometer sample
            magnetometer: Latest magnetometer sample
            
        Returns:
            Target heading in degrees [0, 360), or None if either sample is
            missing or the vectors are degenerate
        """
        if accelerometer is None or magnetometer is None:
            return None
        
        rotation = rotation_matrix_from_vectors(accelerometer.vector, magnetometer.vector)
        if rotation is None:
            return None
        
        azimuth, _, _ = orientation_from_rotation_matrix(rotation)
        return normalize_degree(-math.degrees(azimuth))
    
    def update(self, state: HeadingState,
               accelerometer: Optional[SensorSample],
               magnetometer: Optional[SensorSample]) -> bool:
        """
        Recompute ``state.target`` in place.
        
        On failure the previous target is kept and the failure is logged.
        
        Returns:
            True if the target was recomputed
        """
        if accelerometer is None or magnetometer is None:
            return False
        
        target = self.estimate(accelerometer, magnetometer)
        if target is None:
            self.failure_count += 1
            logger.debug("Rotation matrix not computable, keeping target %.2f", state.target)
            return False
        
        state.target = target
        self.success_count += 1
        logger.debug("target heading = %.2f", target)
        return True
    
    def get_statistics(self) -> dict:
        """Get estimator statistics."""
        return {
            'successes': self.success_count,
            'failures': self.failure_count,
        }
