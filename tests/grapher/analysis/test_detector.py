"""
Tests for curve feature detection.
"""

import math

import pytest

from grapher.analysis import (
    DEFAULT_VIEW_WINDOW,
    CurveFeatureDetector,
    DetectionThresholds,
    FeatureSet,
    HorizontalAsymptote,
    VerticalAsymptote,
    ViewWindow,
    detect_features,
)
from grapher.expr import compile_expression


def detect(expression: str, window: ViewWindow = DEFAULT_VIEW_WINDOW) -> FeatureSet:
    return detect_features(compile_expression(expression), window)


class TestVerticalAsymptotes:
    """Tests for pole detection."""

    def test_reciprocal_has_asymptote_at_zero(self):
        features = detect("1/x")
        assert len(features.vertical) == 1
        assert abs(features.vertical[0].x) < 0.4

    def test_shifted_reciprocal(self):
        features = detect("1/(x-2)")
        assert len(features.vertical) == 1
        assert features.vertical[0].x == pytest.approx(2.0)

    def test_large_values_without_undefined_sample(self):
        # The pole sits between samples, so only the magnitude check sees it
        def f(x):
            return None if x == 0.0003 else 1 / (x - 0.0003)

        features = detect_features(f, DEFAULT_VIEW_WINDOW)
        assert len(features.vertical) == 1
        assert abs(features.vertical[0].x) < 0.05

    def test_tangent_pole_in_centered_window(self):
        window = ViewWindow(x_min=math.pi / 2 - 5, x_max=math.pi / 2 + 5, y_min=-10, y_max=10)
        features = detect("tan(x)", window)
        assert any(abs(a.x - math.pi / 2) < 0.05 for a in features.vertical)

    def test_polynomial_has_no_features(self):
        features = detect("x^2")
        assert features.is_empty()
        assert features.complete


class TestHoles:
    """Tests for removable discontinuity detection."""

    def test_cancelled_factor_is_a_hole(self):
        features = detect("(x^2-1)/(x-1)")
        assert len(features.holes) == 1
        hole = features.holes[0]
        assert hole.x == pytest.approx(1.0, abs=0.02)
        assert hole.y == pytest.approx(2.0, abs=0.05)

    def test_hole_is_not_a_vertical_asymptote(self):
        features = detect("(x^2-1)/(x-1)")
        assert not any(abs(a.x - 1.0) < 0.5 for a in features.vertical)

    def test_far_off_screen_hole_is_dropped(self):
        # (x^2-1)/(x-1) + 500 has its hole at y = 502, beyond 5 heights
        features = detect("(x^2-1)/(x-1) + 500")
        assert features.holes == ()


class TestHorizontalAsymptotes:
    """Tests for far-field probing."""

    def test_reciprocal_tends_to_zero(self):
        features = detect("1/x")
        assert len(features.horizontal) == 1
        assert abs(features.horizontal[0].y) < 0.01

    def test_distinct_tails_are_both_reported(self):
        features = detect("atan(x)")
        ys = sorted(a.y for a in features.horizontal)
        assert len(ys) == 2
        assert ys[0] == pytest.approx(-math.pi / 2, abs=0.02)
        assert ys[1] == pytest.approx(math.pi / 2, abs=0.02)

    def test_constant_is_reported_once(self):
        features = detect("3")
        assert features.horizontal == (HorizontalAsymptote(y=3.0),)

    def test_large_tails_are_ignored(self):
        assert detect("x^3").horizontal == ()

    def test_one_defined_tail_is_enough(self):
        features = detect("sqrt(x)")
        assert features.horizontal == (HorizontalAsymptote(y=math.sqrt(110.0)),)


class TestDetectionPass:
    """Tests for the pass as a whole."""

    def test_is_deterministic(self):
        expr = compile_expression("1/(x-2) + (x^2-1)/(x-1)")
        first = detect_features(expr, DEFAULT_VIEW_WINDOW)
        second = detect_features(expr, DEFAULT_VIEW_WINDOW)
        assert first == second

    def test_accepts_plain_callable(self):
        features = detect_features(lambda x: None if x == 0 else 1 / x, DEFAULT_VIEW_WINDOW)
        assert features.vertical == (VerticalAsymptote(x=0.0),)

    def test_never_raises_for_undefined_everywhere(self):
        features = detect("y + 1")
        assert features.is_empty()

    def test_cancel_before_start(self):
        features = detect_features(
            compile_expression("1/x"), DEFAULT_VIEW_WINDOW, should_cancel=lambda: True
        )
        assert not features.complete
        assert features.is_empty()

    def test_cancel_midway_keeps_partial_results(self):
        calls = []

        def should_cancel():
            calls.append(None)
            return len(calls) > 800

        features = detect_features(
            compile_expression("1/x"), DEFAULT_VIEW_WINDOW, should_cancel=should_cancel
        )
        assert not features.complete
        assert len(features.vertical) == 1
        assert features.horizontal == ()

    def test_custom_sample_count(self):
        thresholds = DetectionThresholds(samples=200)
        detector = CurveFeatureDetector(compile_expression("1/x"), DEFAULT_VIEW_WINDOW, thresholds)
        features = detector.detect()
        assert len(features.vertical) == 1
