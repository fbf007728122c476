"""
Tests for asymptote deduplication.
"""

from grapher.analysis import (
    DEFAULT_VIEW_WINDOW,
    DetectionThresholds,
    Hole,
    HorizontalAsymptote,
    VerticalAsymptote,
    ViewWindow,
    dedup_asymptotes,
    is_duplicate,
)


class TestIsDuplicate:
    def test_close_vertical_asymptotes(self):
        assert is_duplicate(VerticalAsymptote(0.999), VerticalAsymptote(1.001), DEFAULT_VIEW_WINDOW)

    def test_vertical_distance_scales_with_width(self):
        a, b = VerticalAsymptote(0.0), VerticalAsymptote(0.5)
        assert not is_duplicate(a, b, DEFAULT_VIEW_WINDOW)
        wide = ViewWindow(x_min=-100, x_max=100, y_min=-10, y_max=10)
        assert is_duplicate(a, b, wide)

    def test_horizontal_distance_is_absolute(self):
        assert is_duplicate(HorizontalAsymptote(1.0), HorizontalAsymptote(1.4), DEFAULT_VIEW_WINDOW)
        assert not is_duplicate(
            HorizontalAsymptote(1.0), HorizontalAsymptote(1.6), DEFAULT_VIEW_WINDOW
        )

    def test_different_kinds_never_collide(self):
        assert not is_duplicate(VerticalAsymptote(1.0), HorizontalAsymptote(1.0), DEFAULT_VIEW_WINDOW)
        assert not is_duplicate(Hole(1.0, 1.0), Hole(1.0, 1.0), DEFAULT_VIEW_WINDOW)

    def test_custom_thresholds(self):
        thresholds = DetectionThresholds(horizontal_dedup_distance=2.0)
        assert is_duplicate(
            HorizontalAsymptote(1.0), HorizontalAsymptote(2.5), DEFAULT_VIEW_WINDOW, thresholds
        )


class TestDedupAsymptotes:
    def test_keeps_first_of_each_cluster(self):
        features = [
            VerticalAsymptote(0.999),
            VerticalAsymptote(1.001),
            HorizontalAsymptote(0.0),
            VerticalAsymptote(3.0),
            HorizontalAsymptote(0.2),
        ]
        assert dedup_asymptotes(features, DEFAULT_VIEW_WINDOW) == [
            VerticalAsymptote(0.999),
            HorizontalAsymptote(0.0),
            VerticalAsymptote(3.0),
        ]

    def test_greedy_chain_compares_against_kept_only(self):
        # 0.45 is close to 0.25, but 0.25 was dropped as a duplicate of 0.0
        features = [VerticalAsymptote(0.0), VerticalAsymptote(0.25), VerticalAsymptote(0.45)]
        assert dedup_asymptotes(features, DEFAULT_VIEW_WINDOW) == [
            VerticalAsymptote(0.0),
            VerticalAsymptote(0.45),
        ]

    def test_empty_input(self):
        assert dedup_asymptotes([], DEFAULT_VIEW_WINDOW) == []
