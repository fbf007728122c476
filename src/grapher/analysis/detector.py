"""
Curve feature detection.

Scans an evaluator across the view window and infers vertical asymptotes,
removable holes and horizontal asymptotes from local value jumps and sign
changes alone. There is no symbolic analysis: the result is what a person
looking at the plot would infer, not a proof.

For every sample center x the evaluator is read at x - step/2, x and
x + step/2 (y1, y2, y3):

- y2 undefined, neighbours defined: a sign flip or a jump of more than
  1.5 window heights is a vertical asymptote; a jump under half a height is
  a hole at the neighbours' average, unless that average is off-screen by
  more than 5 heights.
- all three defined, |y2| above 100 heights and a sign flip on either side:
  a vertical asymptote the undefined check missed (tan(x) sampled near,
  but not on, its pole).

Horizontal asymptotes are probed 100 units beyond each window edge.
"""

import logging
from typing import Callable, List, Optional, Union

from ..expr import CompiledExpression
from .dedup import dedup_asymptotes
from .features import (
    Asymptote,
    FeatureSet,
    Hole,
    HorizontalAsymptote,
    VerticalAsymptote,
    ViewWindow,
)
from .thresholds import DEFAULT_DETECTION_THRESHOLDS, DetectionThresholds

logger = logging.getLogger(__name__)

# Maps x to f(x), or None where f is undefined.
PointEvaluator = Callable[[float], Optional[float]]

CancelCheck = Callable[[], bool]


def as_point_evaluator(evaluator: Union[CompiledExpression, PointEvaluator]) -> PointEvaluator:
    """Accepts a compiled expression or a plain x -> Optional[float] callable."""
    if isinstance(evaluator, CompiledExpression):
        return evaluator.evaluate_at
    return evaluator


def _opposite_signs(a: float, b: float) -> bool:
    return (a > 0 and b < 0) or (a < 0 and b > 0)


class CurveFeatureDetector:
    """Detects asymptotes and holes of one evaluator in one window."""

    def __init__(
        self,
        evaluator: Union[CompiledExpression, PointEvaluator],
        window: ViewWindow,
        thresholds: DetectionThresholds = DEFAULT_DETECTION_THRESHOLDS,
    ):
        self._f = as_point_evaluator(evaluator)
        self._window = window
        self._thresholds = thresholds

    def detect(self, should_cancel: Optional[CancelCheck] = None) -> FeatureSet:
        """
        Runs a full detection pass.

        ``should_cancel`` is polled between sample steps; once it returns
        True the scan stops and the features found so far are returned with
        ``complete=False``.
        """
        asymptotes: List[Asymptote] = []
        holes: List[Hole] = []

        complete = self._scan(asymptotes, holes, should_cancel)
        if complete:
            asymptotes.extend(self._detect_horizontal())
        else:
            logger.debug(
                "feature_detection_cancelled",
                extra={"asymptotes": len(asymptotes), "holes": len(holes)},
            )

        unique = dedup_asymptotes(asymptotes, self._window, self._thresholds)

        logger.debug(
            "feature_detection_completed",
            extra={
                "raw_asymptotes": len(asymptotes),
                "asymptotes": len(unique),
                "holes": len(holes),
                "complete": complete,
            },
        )

        return FeatureSet(asymptotes=tuple(unique), holes=tuple(holes), complete=complete)

    def _scan(
        self,
        asymptotes: List[Asymptote],
        holes: List[Hole],
        should_cancel: Optional[CancelCheck],
    ) -> bool:
        window = self._window
        t = self._thresholds
        height = window.height
        step = window.width / t.samples

        for i in range(t.samples):
            if should_cancel is not None and should_cancel():
                return False

            x = window.x_min + i * step
            y1 = self._f(x - step * 0.5)
            y2 = self._f(x)
            y3 = self._f(x + step * 0.5)

            if y2 is None and y1 is not None and y3 is not None:
                jump = abs(y3 - y1)
                if _opposite_signs(y1, y3) or jump > height * t.jump_height_ratio:
                    asymptotes.append(VerticalAsymptote(x=x))
                elif jump < height * t.hole_jump_height_ratio:
                    average = (y1 + y3) / 2
                    if abs(average) < abs(height) * t.hole_max_height_ratio:
                        holes.append(Hole(x=x, y=average))

            if y1 is not None and y2 is not None and y3 is not None:
                if abs(y2) > abs(height) * t.blowup_height_ratio:
                    if _opposite_signs(y1, y2) or _opposite_signs(y2, y3):
                        asymptotes.append(VerticalAsymptote(x=x))

        return True

    def _detect_horizontal(self) -> List[HorizontalAsymptote]:
        t = self._thresholds
        left = self._f(self._window.x_min - t.far_field_offset)
        right = self._f(self._window.x_max + t.far_field_offset)

        found: List[HorizontalAsymptote] = []

        if left is not None and abs(left) < t.far_field_max_value:
            found.append(HorizontalAsymptote(y=left))

        # Both tails converging to one value is reported once
        if (
            right is not None
            and abs(right) < t.far_field_max_value
            and abs(right - (left or 0)) > t.far_field_min_separation
        ):
            found.append(HorizontalAsymptote(y=right))

        return found


def detect_features(
    evaluator: Union[CompiledExpression, PointEvaluator],
    window: ViewWindow,
    thresholds: DetectionThresholds = DEFAULT_DETECTION_THRESHOLDS,
    should_cancel: Optional[CancelCheck] = None,
) -> FeatureSet:
    """
    Detects vertical asymptotes, holes and horizontal asymptotes.

    Args:
        evaluator: A compiled expression or an x -> Optional[float] callable
        window: The view window to scan
        thresholds: Optional detection thresholds
        should_cancel: Optional callable polled between sample steps

    Returns:
        The deduplicated feature set
    """
    return CurveFeatureDetector(evaluator, window, thresholds).detect(should_cancel)
