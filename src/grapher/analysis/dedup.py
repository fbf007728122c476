"""
Feature deduplication.

The sampling scan reports the same asymptote from several neighbouring
samples; this collapses them to the first occurrence.
"""

from typing import Iterable, List

from .features import Feature, HorizontalAsymptote, VerticalAsymptote, ViewWindow
from .thresholds import DEFAULT_DETECTION_THRESHOLDS, DetectionThresholds


def is_duplicate(
    a: Feature,
    b: Feature,
    window: ViewWindow,
    thresholds: DetectionThresholds = DEFAULT_DETECTION_THRESHOLDS,
) -> bool:
    """Checks if two features of the same kind are close enough to merge."""
    if isinstance(a, VerticalAsymptote) and isinstance(b, VerticalAsymptote):
        return abs(a.x - b.x) < window.width * thresholds.vertical_dedup_width_ratio

    if isinstance(a, HorizontalAsymptote) and isinstance(b, HorizontalAsymptote):
        return abs(a.y - b.y) < thresholds.horizontal_dedup_distance

    return False


def dedup_asymptotes(
    features: Iterable[Feature],
    window: ViewWindow,
    thresholds: DetectionThresholds = DEFAULT_DETECTION_THRESHOLDS,
) -> List[Feature]:
    """
    Greedy single pass: keeps a feature unless it duplicates one already
    kept. Order of the kept features is preserved.
    """
    unique: List[Feature] = []

    for feature in features:
        if not any(is_duplicate(kept, feature, window, thresholds) for kept in unique):
            unique.append(feature)

    return unique
