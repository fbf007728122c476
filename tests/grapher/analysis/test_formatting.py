"""
Tests for feature descriptions and badges.
"""

import pytest

from grapher.analysis import (
    EMPTY_FEATURE_SET,
    FeatureSet,
    Hole,
    HorizontalAsymptote,
    VerticalAsymptote,
    describe_feature,
    describe_features,
    summarize_features,
)


class TestDescribeFeature:
    def test_vertical(self):
        assert describe_feature(VerticalAsymptote(0.0)) == "V.A. at x = 0.000"

    def test_horizontal(self):
        assert describe_feature(HorizontalAsymptote(-0.00909)) == "H.A. at y = -0.009"

    def test_hole(self):
        assert describe_feature(Hole(1.0, 2.0)) == "Hole at (1.000, 2.000)"

    def test_precision(self):
        assert describe_feature(VerticalAsymptote(1.23456), precision=1) == "V.A. at x = 1.2"

    def test_rejects_other_values(self):
        with pytest.raises(TypeError):
            describe_feature("x = 0")  # type: ignore[arg-type]


class TestDescribeFeatures:
    def test_orders_by_kind(self):
        features = FeatureSet(
            asymptotes=(HorizontalAsymptote(0.0), VerticalAsymptote(2.0)),
            holes=(Hole(1.0, 2.0),),
        )
        assert describe_features(features) == [
            "V.A. at x = 2.000",
            "H.A. at y = 0.000",
            "Hole at (1.000, 2.000)",
        ]


class TestSummarizeFeatures:
    def test_empty(self):
        assert summarize_features(EMPTY_FEATURE_SET) == []

    def test_counts(self):
        features = FeatureSet(
            asymptotes=(VerticalAsymptote(0.0), VerticalAsymptote(3.0), HorizontalAsymptote(0.0)),
            holes=(Hole(1.0, 2.0),),
        )
        assert summarize_features(features) == ["2 V.A.", "1 H.A.", "1 Hole"]

    def test_plural_holes(self):
        features = FeatureSet(holes=(Hole(1.0, 2.0), Hole(4.0, 1.0)))
        assert summarize_features(features) == ["2 Holes"]
