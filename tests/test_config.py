"""Tests for configuration loading and the typed getters."""

import json
from pathlib import Path

import pytest

from depusage.config import (
    DEFAULT_EXCLUDES,
    DEFAULT_INCLUDES,
    default_config,
    get_analysis_excludes,
    get_analysis_includes,
    get_risk_config,
    get_usage_example_cap,
    get_workers,
    load_config,
    save_config,
)
from depusage.errors import ConfigError


class TestLoadSave:
    """Tests for load_config and save_config."""

    def test_round_trip(self, tmp_path: Path):
        path = tmp_path / "config.json"
        save_config(default_config(), path)

        assert load_config(path) == default_config()

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "config.json"
        path.write_text("{broken")

        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config(path)

    def test_non_object(self, tmp_path: Path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps(["a"]))

        with pytest.raises(ConfigError):
            load_config(path)


class TestGetters:
    """Tests for config getters."""

    def test_defaults_for_empty_config(self):
        assert get_analysis_includes({}) == DEFAULT_INCLUDES
        assert get_analysis_excludes({}) == DEFAULT_EXCLUDES
        assert get_workers({}) == 1
        assert get_usage_example_cap({}) == 10

    def test_values_from_config(self):
        config = {
            "analysis": {
                "include": ["src/**"],
                "exclude": [],
                "workers": 4,
                "usage_example_cap": 3,
            }
        }

        assert get_analysis_includes(config) == ["src/**"]
        assert get_analysis_excludes(config) == []
        assert get_workers(config) == 4
        assert get_usage_example_cap(config) == 3

    @pytest.mark.parametrize("workers", [0, -1, "4", 1.5])
    def test_invalid_workers(self, workers):
        with pytest.raises(ConfigError, match="workers"):
            get_workers({"analysis": {"workers": workers}})

    def test_invalid_example_cap(self):
        with pytest.raises(ConfigError, match="usage_example_cap"):
            get_usage_example_cap({"analysis": {"usage_example_cap": -1}})


class TestRiskConfig:
    """Tests for get_risk_config."""

    def test_defaults(self):
        risk = get_risk_config({})

        assert risk.usage_weight == 1.0
        assert risk.symbol_weight == 2.0
        assert risk.complexity_weight == 0.5
        assert risk.low_threshold == 5.0
        assert risk.medium_threshold == 15.0

    def test_default_config_matches_defaults(self):
        assert get_risk_config(default_config()) == get_risk_config({})

    def test_partial_override(self):
        risk = get_risk_config({"risk": {"weights": {"symbol": 3}, "thresholds": {"medium": 20}}})

        assert risk.symbol_weight == 3.0
        assert risk.usage_weight == 1.0
        assert risk.medium_threshold == 20.0

    def test_non_numeric_weight(self):
        with pytest.raises(ConfigError, match="Invalid risk configuration"):
            get_risk_config({"risk": {"weights": {"usage": "heavy"}}})

    def test_inverted_thresholds(self):
        with pytest.raises(ConfigError, match="thresholds"):
            get_risk_config({"risk": {"thresholds": {"low": 20, "medium": 10}}})
