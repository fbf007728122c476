"""
Curve sampling for plotting.

Produces the polyline segments a renderer draws for one function. A segment
ends at an undefined sample or where consecutive values jump by more than
half the window height, so a line is never drawn across an asymptote.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from ..expr import CompiledExpression
from .detector import PointEvaluator, as_point_evaluator
from .features import ViewWindow

Point = Tuple[float, float]

# Points this far (as a fraction of the window height) above or below the
# window are still emitted so lines leave the frame cleanly.
OVERDRAW_HEIGHT_RATIO = 0.05

# A jump larger than this fraction of the window height breaks the line.
JUMP_HEIGHT_RATIO = 0.5


@dataclass(frozen=True)
class CurveSegment:
    """A run of points to be joined by straight lines."""

    points: Tuple[Point, ...]

    def __len__(self) -> int:
        return len(self.points)


def sample_curve(
    evaluator: Union[CompiledExpression, PointEvaluator],
    window: ViewWindow,
    samples: int = 1000,
) -> List[CurveSegment]:
    """
    Samples the evaluator at ``samples + 1`` evenly spaced x values across
    the window and splits the result into drawable segments.
    """
    if samples < 1:
        raise ValueError(f"samples must be at least 1, got {samples}")

    f = as_point_evaluator(evaluator)
    margin = window.height * OVERDRAW_HEIGHT_RATIO
    low = window.y_min - margin
    high = window.y_max + margin
    max_jump = window.height * JUMP_HEIGHT_RATIO

    segments: List[CurveSegment] = []
    current: List[Point] = []
    previous_y: Optional[float] = None

    def flush() -> None:
        if current:
            segments.append(CurveSegment(points=tuple(current)))
            current.clear()

    for i in range(samples + 1):
        x = window.x_min + (i / samples) * window.width
        y = f(x)

        if y is None:
            flush()
            previous_y = None
            continue

        if previous_y is not None and abs(y - previous_y) > max_jump:
            flush()

        if low <= y <= high:
            current.append((x, y))

        previous_y = y

    flush()
    return segments
