"""
Curve analysis: feature detection, deduplication and plot sampling.
"""

from .dedup import dedup_asymptotes, is_duplicate
from .detector import (
    CancelCheck,
    CurveFeatureDetector,
    PointEvaluator,
    as_point_evaluator,
    detect_features,
)
from .features import (
    DEFAULT_VIEW_WINDOW,
    EMPTY_FEATURE_SET,
    Asymptote,
    Feature,
    FeatureKind,
    FeatureSet,
    Hole,
    HorizontalAsymptote,
    VerticalAsymptote,
    ViewWindow,
)
from .formatting import describe_feature, describe_features, summarize_features
from .sampling import CurveSegment, sample_curve
from .thresholds import (
    DEFAULT_DETECTION_THRESHOLDS,
    DetectionThresholds,
    detection_thresholds_from_dict,
    load_detection_thresholds,
)

__all__ = [
    # Features
    "Feature",
    "FeatureKind",
    "Asymptote",
    "VerticalAsymptote",
    "HorizontalAsymptote",
    "Hole",
    "FeatureSet",
    "EMPTY_FEATURE_SET",
    "ViewWindow",
    "DEFAULT_VIEW_WINDOW",
    # Thresholds
    "DetectionThresholds",
    "DEFAULT_DETECTION_THRESHOLDS",
    "detection_thresholds_from_dict",
    "load_detection_thresholds",
    # Detection
    "PointEvaluator",
    "CancelCheck",
    "CurveFeatureDetector",
    "as_point_evaluator",
    "detect_features",
    "dedup_asymptotes",
    "is_duplicate",
    # Sampling
    "CurveSegment",
    "sample_curve",
    # Formatting
    "describe_feature",
    "describe_features",
    "summarize_features",
]
