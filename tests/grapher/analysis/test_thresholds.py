"""
Tests for detection threshold configuration.
"""

import json

import pytest

from grapher.analysis import (
    DEFAULT_DETECTION_THRESHOLDS,
    DetectionThresholds,
    detection_thresholds_from_dict,
    load_detection_thresholds,
)


class TestDetectionThresholds:
    def test_defaults(self):
        t = DEFAULT_DETECTION_THRESHOLDS
        assert t.samples == 1000
        assert t.jump_height_ratio == 1.5
        assert t.hole_jump_height_ratio == 0.5
        assert t.hole_max_height_ratio == 5.0
        assert t.blowup_height_ratio == 100.0
        assert t.far_field_offset == 100.0
        assert t.far_field_max_value == 1000.0
        assert t.far_field_min_separation == 0.1
        assert t.vertical_dedup_width_ratio == 0.02
        assert t.horizontal_dedup_distance == 0.5

    @pytest.mark.parametrize("field", ["samples", "jump_height_ratio", "far_field_offset"])
    def test_rejects_non_positive_values(self, field):
        with pytest.raises(ValueError, match=field):
            DetectionThresholds(**{field: 0})

    def test_integral_float_samples_become_int(self):
        t = DetectionThresholds(samples=1000.0)
        assert t.samples == 1000
        assert isinstance(t.samples, int)

    @pytest.mark.parametrize("samples", [1000.5, True, float("inf")])
    def test_rejects_fractional_samples(self, samples):
        with pytest.raises(ValueError, match="samples"):
            DetectionThresholds(samples=samples)

    def test_from_dict_overrides_defaults(self):
        t = detection_thresholds_from_dict({"samples": 500})
        assert t.samples == 500
        assert t.jump_height_ratio == 1.5

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(ValueError, match="nonsense"):
            detection_thresholds_from_dict({"nonsense": 1})


class TestLoadDetectionThresholds:
    def test_loads_yaml(self, tmp_path):
        path = tmp_path / "detection.yaml"
        path.write_text("samples: 2000\nblowup_height_ratio: 50\n", encoding="utf-8")
        t = load_detection_thresholds(path)
        assert t.samples == 2000
        assert t.blowup_height_ratio == 50

    def test_loads_json(self, tmp_path):
        path = tmp_path / "detection.json"
        path.write_text(json.dumps({"horizontal_dedup_distance": 1.0}), encoding="utf-8")
        assert load_detection_thresholds(str(path)).horizontal_dedup_distance == 1.0

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "detection.yml"
        path.write_text("", encoding="utf-8")
        assert load_detection_thresholds(path) == DEFAULT_DETECTION_THRESHOLDS

    def test_rejects_non_mapping(self, tmp_path):
        path = tmp_path / "detection.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_detection_thresholds(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_detection_thresholds(tmp_path / "missing.yaml")
