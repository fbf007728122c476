"""
Human readable feature descriptions for summary panels.
"""

from typing import List

from .features import Feature, FeatureSet, Hole, HorizontalAsymptote, VerticalAsymptote


def describe_feature(feature: Feature, precision: int = 3) -> str:
    """Returns e.g. "V.A. at x = 0.000" or "Hole at (1.000, 2.000)"."""
    if isinstance(feature, VerticalAsymptote):
        return f"V.A. at x = {feature.x:.{precision}f}"

    if isinstance(feature, HorizontalAsymptote):
        return f"H.A. at y = {feature.y:.{precision}f}"

    if isinstance(feature, Hole):
        return f"Hole at ({feature.x:.{precision}f}, {feature.y:.{precision}f})"

    raise TypeError(f"Not a curve feature: {feature!r}")


def describe_features(features: FeatureSet, precision: int = 3) -> List[str]:
    """Describes vertical asymptotes, then horizontal ones, then holes."""
    ordered: List[Feature] = [*features.vertical, *features.horizontal, *features.holes]
    return [describe_feature(f, precision) for f in ordered]


def summarize_features(features: FeatureSet) -> List[str]:
    """Returns count badges such as "2 V.A.", "1 H.A." and "3 Holes"."""
    badges: List[str] = []

    if features.vertical:
        badges.append(f"{len(features.vertical)} V.A.")
    if features.horizontal:
        badges.append(f"{len(features.horizontal)} H.A.")
    if features.holes:
        count = len(features.holes)
        badges.append(f"{count} Hole{'s' if count > 1 else ''}")

    return badges
