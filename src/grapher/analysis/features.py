"""
Curve features and the view window they are detected in.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Literal, Tuple, Union

FeatureKind = Literal["vertical", "horizontal", "hole"]


@dataclass(frozen=True)
class ViewWindow:
    """The visible coordinate rectangle supplied by the rendering layer."""

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    def __post_init__(self) -> None:
        for name in ("x_min", "x_max", "y_min", "y_max"):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"ViewWindow.{name} must be finite, got {getattr(self, name)}")
        if not self.x_min < self.x_max:
            raise ValueError(f"ViewWindow requires x_min < x_max, got {self.x_min} >= {self.x_max}")
        if not self.y_min < self.y_max:
            raise ValueError(f"ViewWindow requires y_min < y_max, got {self.y_min} >= {self.y_max}")

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    def contains(self, x: float, y: float) -> bool:
        return self.x_min <= x <= self.x_max and self.y_min <= y <= self.y_max


DEFAULT_VIEW_WINDOW = ViewWindow(x_min=-10.0, x_max=10.0, y_min=-10.0, y_max=10.0)


@dataclass(frozen=True)
class VerticalAsymptote:
    x: float

    @property
    def kind(self) -> Literal["vertical"]:
        return "vertical"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind, "x": self.x}


@dataclass(frozen=True)
class HorizontalAsymptote:
    y: float

    @property
    def kind(self) -> Literal["horizontal"]:
        return "horizontal"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind, "y": self.y}


@dataclass(frozen=True)
class Hole:
    """A removable discontinuity."""

    x: float
    y: float

    @property
    def kind(self) -> Literal["hole"]:
        return "hole"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind, "x": self.x, "y": self.y}


Asymptote = Union[VerticalAsymptote, HorizontalAsymptote]

Feature = Union[VerticalAsymptote, HorizontalAsymptote, Hole]


@dataclass(frozen=True)
class FeatureSet:
    """
    Result of one detection pass.

    ``complete`` is False when the pass was cancelled before scanning the
    whole window; the features it holds are still fully formed.
    """

    asymptotes: Tuple[Asymptote, ...] = ()
    holes: Tuple[Hole, ...] = ()
    complete: bool = True

    @property
    def vertical(self) -> Tuple[VerticalAsymptote, ...]:
        return tuple(a for a in self.asymptotes if isinstance(a, VerticalAsymptote))

    @property
    def horizontal(self) -> Tuple[HorizontalAsymptote, ...]:
        return tuple(a for a in self.asymptotes if isinstance(a, HorizontalAsymptote))

    def is_empty(self) -> bool:
        return not self.asymptotes and not self.holes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "asymptotes": [a.to_dict() for a in self.asymptotes],
            "holes": [h.to_dict() for h in self.holes],
            "complete": self.complete,
        }


EMPTY_FEATURE_SET = FeatureSet()
