"""
Mathematical utility functions for heading estimation.
"""

import numpy as np
import math
from typing import Optional, Tuple

from .constants import (
    FULL_CIRCLE_DEG,
    HALF_CIRCLE_DEG,
    NORMALIZE_OFFSET_DEG,
    MIN_HORIZONTAL_NORM,
)

def normalize_degree(degrees: float) -> float:
    """
    Normalize an angle to the [0, 360) range.
    
    Args:
        degrees (float): Angle in degrees
        
    Returns:
        float: Normalized angle in [0, 360)
    """
    result = (degrees + NORMALIZE_OFFSET_DEG) % FULL_CIRCLE_DEG
    # Float modulo can round up to the modulus for tiny negative inputs
    if result >= FULL_CIRCLE_DEG:
        result -= FULL_CIRCLE_DEG
    return result

def shortest_delta(current: float, target: float) -> float:
    """
    Signed rotation from current to target along the shorter path.
    
    Args:
        current (float): Current heading in degrees [0, 360)
        target (float): Target heading in degrees [0, 360)
        
    Returns:
        float: Delta in degrees, never more than 180 in either direction
    """
    to = target
    if to - current > HALF_CIRCLE_DEG:
        to -= FULL_CIRCLE_DEG
    elif to - current < -HALF_CIRCLE_DEG:
        to += FULL_CIRCLE_DEG
    return to - current

def clamp_magnitude(value: float, limit: float) -> float:
    """Clamp value to [-limit, limit] keeping its sign."""
    if abs(value) > limit:
        return limit if value > 0 else -limit
    return value

def rotation_matrix_from_vectors(gravity, geomagnetic) -> Optional[np.ndarray]:
    """
    Compute the rotation matrix from the device frame to the world frame.
    
    Rows of the result are the world East, North and Up axes expressed in
    device coordinates, so ``R @ v_device`` gives ``v_world``.
    
    Args:
        gravity: Accelerometer vector [x, y, z] (device frame)
        geomagnetic: Magnetometer vector [x, y, z] (device frame)
        
    Returns:
        np.ndarray: 3x3 rotation matrix, or None if the inputs are degenerate
    """
    a = np.asarray(gravity, dtype=float)
    e = np.asarray(geomagnetic, dtype=float)
    
    norm_a = np.linalg.norm(a)
    if norm_a == 0.0 or not np.isfinite(norm_a):
        return None
    
    # East axis is perpendicular to both gravity and the magnetic field
    h = np.cross(e, a)
    norm_h = np.linalg.norm(h)
    if norm_h < MIN_HORIZONTAL_NORM or not np.isfinite(norm_h):
        return None
    
    h = h / norm_h
    a = a / norm_a
    m = np.cross(a, h)
    
    return np.vstack([h, m, a])

def orientation_from_rotation_matrix(rotation: np.ndarray) -> Tuple[float, float, float]:
    """
    Extract orientation angles from a rotation matrix.
    
    Args:
        rotation (np.ndarray): 3x3 rotation matrix from rotation_matrix_from_vectors
        
    Returns:
        (azimuth, pitch, roll) in radians; azimuth is the bearing of the
        device y axis, clockwise from magnetic north
    """
    azimuth = math.atan2(rotation[0, 1], rotation[1, 1])
    pitch = math.asin(max(-1.0, min(1.0, -rotation[2, 1])))
    roll = math.atan2(-rotation[2, 0], rotation[2, 2])
    return azimuth, pitch, roll

def to_dms(value: float) -> Tuple[int, int, int]:
    """
    Split a coordinate into whole degrees, minutes and seconds.
    
    The sign is dropped; callers pick the hemisphere word themselves.
    Every part is truncated, never rounded.
    
    Args:
        value (float): Coordinate in decimal degrees
        
    Returns:
        (degrees, minutes, seconds)
    """
    value = abs(value)
    degrees = int(value)
    total_seconds = int((value - degrees) * 3600)
    return degrees, total_seconds // 60, total_seconds % 60
