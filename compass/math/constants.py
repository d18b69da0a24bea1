"""
Constants for heading estimation, calibration and animation.
"""

import math

# Conversion factors
DEG_TO_RAD = math.pi / 180.0
RAD_TO_DEG = 180.0 / math.pi

FULL_CIRCLE_DEG = 360.0
HALF_CIRCLE_DEG = 180.0
# Offset added before the modulo so inputs down to -720 stay positive
NORMALIZE_OFFSET_DEG = 720.0

# Animation
TICK_PERIOD_MS = 20            # 50 Hz redraw tick
MAX_ROTATE_DEGREE = 1.0        # Max step per tick before easing
EASE_INPUT_FAR = 0.4           # Interpolator input when beyond the max step
EASE_INPUT_NEAR = 0.3          # Interpolator input when within the max step
INTERPOLATOR_FACTOR = 1.0      # Accelerate interpolator factor (t^(2*factor))
CONVERGENCE_EPSILON_DEG = 1e-3

# Calibration (raw magnetometer units, typically uT)
MIN_FIELD_STRENGTH = 25.0
MAX_FIELD_STRENGTH = 65.0
MAX_ACCURATE_COUNT = 50
MAX_INACCURATE_COUNT = 50

# Rotation matrix: |E x A| below this means free fall, parallel vectors
# or the magnetic pole
MIN_HORIZONTAL_NORM = 0.1

# Location requests
LOCATION_MIN_INTERVAL_MS = 2000
LOCATION_MIN_DISTANCE_M = 10.0
