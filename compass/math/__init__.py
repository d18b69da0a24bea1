"""
Mathematical utilities for heading calculations.
"""

from .utils import (
    normalize_degree,
    shortest_delta,
    clamp_magnitude,
    rotation_matrix_from_vectors,
    orientation_from_rotation_matrix,
    to_dms,
)
from .constants import *

__all__ = [
    "normalize_degree",
    "shortest_delta",
    "clamp_magnitude",
    "rotation_matrix_from_vectors",
    "orientation_from_rotation_matrix",
    "to_dms",
]
