#!/usr/bin/env python3
"""
Unit tests for heading estimation, calibration monitoring and animation.
"""

import unittest
import math
import numpy as np
import sys
import os

# Add compass package to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from compass.heading import (
    AccelerateInterpolator,
    CalibrationMode,
    CalibrationMonitor,
    HeadingAnimator,
    HeadingState,
    OrientationEstimator,
)
from compass.math import shortest_delta
from compass.sensors import SensorAccuracy, SensorSample

def flat_samples(heading_deg, horizontal=20.0, vertical=40.0):
    """Accelerometer and magnetometer samples of a flat device."""
    psi = math.radians(heading_deg)
    accel = SensorSample([0.0, 0.0, 9.81])
    mag = SensorSample([-horizontal * math.sin(psi), horizontal * math.cos(psi), -vertical])
    return accel, mag

class FakePrompt:
    def __init__(self):
        self.shown = 0
        self.dismissed = 0
    
    def show_calibration_prompt(self):
        self.shown += 1
    
    def dismiss_calibration_prompt(self):
        self.dismissed += 1

class TestHeadingState(unittest.TestCase):
    """Test HeadingState class."""
    
    def test_defaults(self):
        state = HeadingState()
        self.assertEqual(state.current, 0.0)
        self.assertEqual(state.target, 0.0)
        self.assertTrue(state.converged)
    
    def test_normalized_on_creation(self):
        state = HeadingState(current=-30, target=370)
        self.assertAlmostEqual(state.current, 330)
        self.assertAlmostEqual(state.target, 10)
    
    def test_copy(self):
        original = HeadingState(current=10, target=20)
        copy = original.copy()
        copy.current = 50
        self.assertEqual(original.current, 10)

class TestOrientationEstimator(unittest.TestCase):
    """Test OrientationEstimator class."""
    
    def setUp(self):
        self.estimator = OrientationEstimator()
    
    def test_reference_pair(self):
        """Gravity on z and field on x gives a target of 90."""
        accel = SensorSample([0, 0, 10])
        mag = SensorSample([30, 0, 0])
        
        self.assertAlmostEqual(self.estimator.estimate(accel, mag), 90.0)
        # Deterministic
        self.assertEqual(self.estimator.estimate(accel, mag),
                         self.estimator.estimate(accel, mag))
    
    def test_target_is_negated_heading(self):
        for heading in (0.0, 30.0, 90.0, 200.0, 315.0):
            accel, mag = flat_samples(heading)
            target = self.estimator.estimate(accel, mag)
            self.assertAlmostEqual(shortest_delta(target, (360.0 - heading) % 360.0), 0.0)
    
    def test_update_sets_target(self):
        state = HeadingState()
        accel, mag = flat_samples(30.0)
        
        self.assertTrue(self.estimator.update(state, accel, mag))
        self.assertAlmostEqual(state.target, 330.0)
        self.assertEqual(self.estimator.success_count, 1)
    
    def test_degenerate_keeps_target(self):
        """Parallel vectors leave the previous target untouched."""
        state = HeadingState(target=123.0)
        accel = SensorSample([0, 0, 10])
        mag = SensorSample([0, 0, 30])
        
        self.assertFalse(self.estimator.update(state, accel, mag))
        self.assertEqual(state.target, 123.0)
        self.assertEqual(self.estimator.failure_count, 1)
    
    def test_missing_sample(self):
        """A missing sensor keeps the target and is not counted as a failure."""
        state = HeadingState(target=45.0)
        accel, _ = flat_samples(0.0)
        
        self.assertIsNone(self.estimator.estimate(accel, None))
        self.assertFalse(self.estimator.update(state, accel, None))
        self.assertEqual(state.target, 45.0)
        self.assertEqual(self.estimator.failure_count, 0)

class TestCalibrationMonitor(unittest.TestCase):
    """Test CalibrationMonitor class."""
    
    def setUp(self):
        self.prompt = FakePrompt()
        self.monitor = CalibrationMonitor(prompt=self.prompt)
        self.good = SensorSample([30, 30, 0], SensorAccuracy.HIGH)        # ~42.4
        self.strong = SensorSample([100, 0, 0], SensorAccuracy.HIGH)
        self.unreliable = SensorSample([30, 30, 0], SensorAccuracy.UNRELIABLE)
    
    def feed(self, sample, count):
        transitions = []
        for _ in range(count):
            mode = self.monitor.update(sample)
            if mode is not None:
                transitions.append(mode)
        return transitions
    
    def test_initial_state(self):
        self.assertEqual(self.monitor.mode, CalibrationMode.NORMAL)
        self.assertEqual(self.monitor.state.accurate_streak, 0)
        self.assertEqual(self.monitor.state.inaccurate_streak, 0)
    
    def test_plausibility_band(self):
        """Band edges are plausible, values outside are not."""
        self.assertTrue(self.monitor.is_plausible(SensorSample([25, 0, 0])))
        self.assertTrue(self.monitor.is_plausible(SensorSample([65, 0, 0])))
        self.assertFalse(self.monitor.is_plausible(SensorSample([24.9, 0, 0])))
        self.assertFalse(self.monitor.is_plausible(SensorSample([65.1, 0, 0])))
    
    def test_unreliable_is_implausible(self):
        self.assertFalse(self.monitor.is_plausible(self.unreliable))
        for accuracy in (SensorAccuracy.LOW, SensorAccuracy.MEDIUM, SensorAccuracy.HIGH):
            self.assertTrue(self.monitor.is_plausible(SensorSample([30, 30, 0], accuracy)))
    
    def test_enter_calibration_after_50(self):
        self.assertEqual(self.feed(self.strong, 49), [])
        self.assertEqual(self.monitor.state.inaccurate_streak, 49)
        self.assertEqual(self.prompt.shown, 0)
        
        self.assertEqual(self.feed(self.strong, 1), [CalibrationMode.CALIBRATING])
        self.assertEqual(self.monitor.mode, CalibrationMode.CALIBRATING)
        self.assertEqual(self.monitor.state.inaccurate_streak, 0)
        self.assertEqual(self.monitor.state.accurate_streak, 0)
        self.assertEqual(self.prompt.shown, 1)
    
    def test_transition_happens_once(self):
        transitions = self.feed(self.strong, 200)
        self.assertEqual(transitions, [CalibrationMode.CALIBRATING])
        self.assertEqual(self.monitor.transition_count, 1)
        self.assertEqual(self.prompt.shown, 1)
    
    def test_plausible_sample_resets_streak(self):
        self.feed(self.strong, 49)
        self.feed(self.good, 1)
        self.assertEqual(self.monitor.state.inaccurate_streak, 0)
        
        self.assertEqual(self.feed(self.strong, 49), [])
        self.assertEqual(self.monitor.mode, CalibrationMode.NORMAL)
        self.assertEqual(self.feed(self.strong, 1), [CalibrationMode.CALIBRATING])
    
    def test_unreliable_counts_as_inaccurate(self):
        self.assertEqual(self.feed(self.unreliable, 50), [CalibrationMode.CALIBRATING])
    
    def test_leave_calibration_after_50(self):
        self.feed(self.strong, 50)
        
        self.assertEqual(self.feed(self.good, 49), [])
        self.assertEqual(self.monitor.state.accurate_streak, 49)
        self.assertEqual(self.prompt.dismissed, 0)
        
        self.assertEqual(self.feed(self.good, 1), [CalibrationMode.NORMAL])
        self.assertEqual(self.monitor.state.accurate_streak, 0)
        self.assertEqual(self.monitor.state.inaccurate_streak, 0)
        self.assertEqual(self.prompt.dismissed, 1)
    
    def test_implausible_resets_accurate_streak(self):
        self.feed(self.strong, 50)
        self.feed(self.good, 49)
        self.feed(self.unreliable, 1)
        self.assertEqual(self.monitor.state.accurate_streak, 0)
        
        self.assertEqual(self.feed(self.good, 49), [])
        self.assertEqual(self.monitor.mode, CalibrationMode.CALIBRATING)
    
    def test_one_streak_at_a_time(self):
        samples = [self.good, self.strong, self.unreliable] * 40 + [self.strong] * 60 + [self.good] * 30
        for sample in samples:
            self.monitor.update(sample)
            state = self.monitor.state
            self.assertFalse(state.accurate_streak and state.inaccurate_streak)
    
    def test_no_sample(self):
        """Without a magnetometer the monitor stays put."""
        for _ in range(100):
            self.assertIsNone(self.monitor.update(None))
        self.assertEqual(self.monitor.mode, CalibrationMode.NORMAL)
        self.assertEqual(self.monitor.sample_count, 0)
    
    def test_without_prompt(self):
        monitor = CalibrationMonitor()
        for _ in range(50):
            monitor.update(self.strong)
        self.assertEqual(monitor.mode, CalibrationMode.CALIBRATING)
    
    def test_invalid_configuration(self):
        with self.assertRaises(ValueError):
            CalibrationMonitor(min_field=70, max_field=60)
        with self.assertRaises(ValueError):
            CalibrationMonitor(accurate_limit=0)

class TestAccelerateInterpolator(unittest.TestCase):
    """Test AccelerateInterpolator class."""
    
    def test_default_is_square(self):
        interpolator = AccelerateInterpolator()
        self.assertAlmostEqual(interpolator.interpolate(0.4), 0.16)
        self.assertAlmostEqual(interpolator.interpolate(0.3), 0.09)
        self.assertEqual(interpolator.interpolate(0.0), 0.0)
        self.assertEqual(interpolator.interpolate(1.0), 1.0)
    
    def test_factor(self):
        interpolator = AccelerateInterpolator(2.0)
        self.assertAlmostEqual(interpolator.interpolate(0.5), 0.0625)
    
    def test_invalid_factor(self):
        with self.assertRaises(ValueError):
            AccelerateInterpolator(0.0)

class TestHeadingAnimator(unittest.TestCase):
    """Test HeadingAnimator class."""
    
    def setUp(self):
        self.animator = HeadingAnimator()
    
    def test_far_step(self):
        """Far from the target the clamped step is eased by interpolate(0.4)."""
        self.assertAlmostEqual(self.animator.next_heading(0.0, 90.0), 0.16)
        self.assertAlmostEqual(self.animator.next_heading(90.0, 0.0), 89.84)
    
    def test_near_step(self):
        """Within the max rate the delta is eased by interpolate(0.3)."""
        self.assertAlmostEqual(self.animator.next_heading(0.0, 0.5), 0.045)
        self.assertAlmostEqual(self.animator.next_heading(0.5, 0.0), 0.455)
    
    def test_shortest_path(self):
        """350 -> 10 moves forward through 0."""
        self.assertAlmostEqual(self.animator.next_heading(350.0, 10.0), 350.16)
        self.assertAlmostEqual(self.animator.next_heading(10.0, 350.0), 9.84)
    
    def test_wraps_past_zero(self):
        self.assertAlmostEqual(self.animator.next_heading(359.95, 10.0), 0.11)
        self.assertAlmostEqual(self.animator.next_heading(0.1, 359.9), 0.082)
    
    def test_step_bounded(self):
        """No tick moves more than the max rate, eased or not."""
        rng = np.random.default_rng(42)
        far_limit = 1.0 * AccelerateInterpolator().interpolate(0.4)
        for current, target in rng.uniform(0, 360, size=(1000, 2)):
            new_heading = self.animator.next_heading(current, target)
            moved = abs(shortest_delta(current, new_heading))
            self.assertLessEqual(moved, 1.0)
            self.assertLessEqual(moved, far_limit + 1e-9)
            self.assertGreaterEqual(new_heading, 0.0)
            self.assertLess(new_heading, 360.0)
    
    def test_moves_towards_target(self):
        rng = np.random.default_rng(3)
        for current, target in rng.uniform(0, 360, size=(200, 2)):
            before = abs(shortest_delta(current, target))
            after = abs(shortest_delta(self.animator.next_heading(current, target), target))
            self.assertLess(after, before)
    
    def test_converged_state_is_untouched(self):
        state = HeadingState(current=42.0, target=42.0)
        self.assertFalse(self.animator.step(state))
        self.assertEqual(state.current, 42.0)
    
    def test_snaps_within_epsilon(self):
        state = HeadingState(current=10.0, target=10.0005)
        self.assertTrue(self.animator.step(state))
        self.assertEqual(state.current, state.target)
        self.assertFalse(self.animator.step(state))
    
    def test_converges_to_estimated_target(self):
        """From 0 the heading reaches the estimated target in bounded ticks."""
        estimator = OrientationEstimator()
        state = HeadingState()
        estimator.update(state, SensorSample([0, 0, 10]), SensorSample([30, 0, 0]))
        self.assertAlmostEqual(state.target, 90.0)
        
        far_rate = 1.0 * AccelerateInterpolator().interpolate(0.4)
        max_ticks = int(90.0 / far_rate) + 200
        
        ticks = 0
        while abs(shortest_delta(state.current, state.target)) >= 0.01:
            self.animator.step(state)
            ticks += 1
            self.assertLessEqual(ticks, max_ticks)
        
        # Slow tracking only starts inside the last degree
        self.assertGreaterEqual(ticks, int(89.0 / far_rate))
        
        while self.animator.step(state):
            ticks += 1
            self.assertLessEqual(ticks, max_ticks)
        self.assertEqual(state.current, state.target)
    
    def test_invalid_configuration(self):
        with self.assertRaises(ValueError):
            HeadingAnimator(max_rotate=0.0)
        with self.assertRaises(ValueError):
            HeadingAnimator(epsilon=-1.0)

if __name__ == '__main__':
    unittest.main()
