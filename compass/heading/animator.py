"""
Smooth rotation of the displayed heading towards the target heading.
"""

from ..math.utils import normalize_degree, shortest_delta, clamp_magnitude
from ..math.constants import (
    MAX_ROTATE_DEGREE,
    EASE_INPUT_FAR,
    EASE_INPUT_NEAR,
    INTERPOLATOR_FACTOR,
    CONVERGENCE_EPSILON_DEG,
)
from .state import HeadingState

class AccelerateInterpolator:
    """
    Easing curve that starts slowly and speeds up.
    
    ``interpolate(t) = t ** (2 * factor)``; factor 1.0 gives ``t * t``.
    """
    
    def __init__(self, factor: float = INTERPOLATOR_FACTOR):
        if factor <= 0:
            raise ValueError("Interpolator factor must be positive")
        self.factor = factor
        self._double_factor = 2.0 * factor
    
    def interpolate(self, t: float) -> float:
        if self.factor == 1.0:
            return t * t
        return t ** self._double_factor

class HeadingAnimator:
    """
    Advances the current heading towards the target once per tick.
    
    Each step takes the shorter way round, is clamped to ``max_rotate``
    degrees and then scaled by an eased weight: interpolate(ease_far) when
    the target is further than ``max_rotate`` away, interpolate(ease_near)
    otherwise.
    """
    
    def __init__(self,
                 max_rotate: float = MAX_ROTATE_DEGREE,
                 ease_far: float = EASE_INPUT_FAR,
                 ease_near: float = EASE_INPUT_NEAR,
                 interpolator: AccelerateInterpolator = None,
                 epsilon: float = CONVERGENCE_EPSILON_DEG):
        """
        Initialize heading animator.
        
        Args:
            max_rotate: Largest step per tick before easing (degrees)
            ease_far: Interpolator input used when far from the target
            ease_near: Interpolator input used when near the target
            interpolator: Easing curve, AccelerateInterpolator() by default
            epsilon: Distance (degrees) at which the heading snaps to the target
        """
        if max_rotate <= 0:
            raise ValueError("max_rotate must be positive")
        if epsilon < 0:
            raise ValueError("epsilon must not be negative")
        
        self.max_rotate = max_rotate
        self.ease_far = ease_far
        self.ease_near = ease_near
        self.interpolator = interpolator or AccelerateInterpolator()
        self.epsilon = epsilon
        
        # Statistics
        self.step_count = 0
        self.snap_count = 0
    
    def next_heading(self, current: float, target: float) -> float:
        """
        Heading after one tick, without touching any state.
        
        Args:
            current: Current heading in degrees [0, 360)
            target: Target heading in degrees [0, 360)
            
        Returns:
            New current heading in degrees [0, 360)
        """
        if current == target:
            return current
        
        delta = shortest_delta(current, target)
        if abs(delta) <= self.epsilon:
            return target
        
        step = clamp_magnitude(delta, self.max_rotate)
        ease = self.ease_far if abs(delta) > self.max_rotate else self.ease_near
        return normalize_degree(current + step * self.interpolator.interpolate(ease))
    
    def step(self, state: HeadingState) -> bool:
        """
        Advance ``state.current`` one tick towards ``state.target``.
        
        Returns:
            True if the current heading changed and needs a redraw
        """
        if state.current == state.target:
            return False
        
        new_heading = self.next_heading(state.current, state.target)
        if new_heading == state.target:
            self.snap_count += 1
        
        changed = new_heading != state.current
        state.current = new_heading
        self.step_count += 1
        return changed
    
    def get_statistics(self) -> dict:
        """Get animator statistics."""
        return {
            'steps': self.step_count,
            'snaps': self.snap_count,
        }
