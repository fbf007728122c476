"""
Heuristic thresholds for curve feature detection.

The multipliers are empirical: they approximate what a person glancing at a
plot would call an asymptote or a hole. Range multipliers are applied to the
view window height, the vertical dedup fraction to its width.
"""

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Union

import yaml


@dataclass(frozen=True)
class DetectionThresholds:
    """Detection thresholds configuration."""

    # Number of sample steps across the window width
    samples: int = 1000

    # Undefined point with |y3 - y1| above this many heights is an asymptote
    jump_height_ratio: float = 1.5

    # Undefined point with |y3 - y1| below this many heights may be a hole
    hole_jump_height_ratio: float = 0.5

    # Holes whose |y| exceeds this many heights are dropped
    hole_max_height_ratio: float = 5.0

    # Defined point with |y| above this many heights plus a sign change
    # is an asymptote
    blowup_height_ratio: float = 100.0

    # Distance beyond the window edges to probe for horizontal asymptotes
    far_field_offset: float = 100.0

    # Far-field values at or above this magnitude are not asymptotes
    far_field_max_value: float = 1000.0

    # Right-side horizontal asymptote must differ from the left by more
    far_field_min_separation: float = 0.1

    # Vertical asymptotes closer than this fraction of the width are merged
    vertical_dedup_width_ratio: float = 0.02

    # Horizontal asymptotes closer than this (absolute y) are merged
    horizontal_dedup_distance: float = 0.5

    def __post_init__(self) -> None:
        # YAML and JSON may spell a count as 1000.0
        if isinstance(self.samples, bool) or not float(self.samples).is_integer():
            raise ValueError(
                f"DetectionThresholds.samples must be a whole number, got {self.samples!r}"
            )
        object.__setattr__(self, "samples", int(self.samples))

        for f in fields(self):
            value = getattr(self, f.name)
            if value <= 0:
                raise ValueError(f"DetectionThresholds.{f.name} must be positive, got {value}")


DEFAULT_DETECTION_THRESHOLDS = DetectionThresholds()


def detection_thresholds_from_dict(data: Mapping[str, Any]) -> DetectionThresholds:
    """Builds thresholds from a mapping, rejecting unknown keys."""
    known = {f.name for f in fields(DetectionThresholds)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown detection threshold(s): {', '.join(unknown)}")
    return DetectionThresholds(**dict(data))


def load_detection_thresholds(path: Union[str, Path]) -> DetectionThresholds:
    """
    Loads thresholds from a YAML (.yaml/.yml) or JSON file.

    Missing keys keep their defaults.
    """
    file_path = Path(path)
    content = file_path.read_text(encoding="utf-8")

    if file_path.suffix.lower() == ".json":
        data = json.loads(content)
    else:
        data = yaml.safe_load(content)

    if data is None:
        return DEFAULT_DETECTION_THRESHOLDS
    if not isinstance(data, dict):
        raise ValueError(f"Detection config must be a mapping: {file_path}")

    return detection_thresholds_from_dict(data)
