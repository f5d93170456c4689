"""Configuration loading and saving for depusage."""

import json
from pathlib import Path

from depusage.analysis.aggregator import DEFAULT_USAGE_EXAMPLE_CAP
from depusage.analysis.scoring import RiskConfig
from depusage.errors import ConfigError

DEFAULT_INCLUDES = [
    "**/*.js",
    "**/*.jsx",
    "**/*.mjs",
    "**/*.cjs",
    "**/*.ts",
    "**/*.tsx",
    "**/*.mts",
    "**/*.cts",
]

DEFAULT_EXCLUDES = [
    "**/*.min.js",
    "**/*.d.ts",
    "**/__tests__/**",
    "**/*.test.*",
    "**/*.spec.*",
]


def default_config() -> dict:
    """Build the configuration written by `depusage init`."""
    risk = RiskConfig()
    return {
        "version": "1.0",
        "analysis": {
            "include": list(DEFAULT_INCLUDES),
            "exclude": list(DEFAULT_EXCLUDES),
            "workers": 1,
            "usage_example_cap": DEFAULT_USAGE_EXAMPLE_CAP,
        },
        "risk": {
            "weights": {
                "usage": risk.usage_weight,
                "symbol": risk.symbol_weight,
                "complexity": risk.complexity_weight,
            },
            "thresholds": {
                "low": risk.low_threshold,
                "medium": risk.medium_threshold,
            },
        },
    }


def load_config(config_path: Path) -> dict:
    """Load a depusage config.json file."""
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigError(f"{config_path} must contain a JSON object")
    return config


def save_config(config: dict, config_path: Path) -> None:
    """Save configuration to config.json."""
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)


def get_analysis_includes(config: dict) -> list[str]:
    """Get include patterns from config."""
    return config.get("analysis", {}).get("include", list(DEFAULT_INCLUDES))


def get_analysis_excludes(config: dict) -> list[str]:
    """Get exclude patterns from config."""
    return config.get("analysis", {}).get("exclude", list(DEFAULT_EXCLUDES))


def get_workers(config: dict) -> int:
    """Get the number of extraction threads."""
    workers = config.get("analysis", {}).get("workers", 1)
    if not isinstance(workers, int) or workers < 1:
        raise ConfigError(f"analysis.workers must be a positive integer, got {workers!r}")
    return workers


def get_usage_example_cap(config: dict) -> int:
    """Get the per-file cap on stored usage examples."""
    cap = config.get("analysis", {}).get("usage_example_cap", DEFAULT_USAGE_EXAMPLE_CAP)
    if not isinstance(cap, int) or cap < 0:
        raise ConfigError(f"analysis.usage_example_cap must be a non-negative integer, got {cap!r}")
    return cap


def get_risk_config(config: dict) -> RiskConfig:
    """Build the risk scoring configuration, falling back to defaults."""
    risk = config.get("risk", {})
    weights = risk.get("weights", {})
    thresholds = risk.get("thresholds", {})
    defaults = RiskConfig()

    try:
        risk_config = RiskConfig(
            usage_weight=float(weights.get("usage", defaults.usage_weight)),
            symbol_weight=float(weights.get("symbol", defaults.symbol_weight)),
            complexity_weight=float(weights.get("complexity", defaults.complexity_weight)),
            low_threshold=float(thresholds.get("low", defaults.low_threshold)),
            medium_threshold=float(thresholds.get("medium", defaults.medium_threshold)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid risk configuration: {e}") from e

    if risk_config.low_threshold > risk_config.medium_threshold:
        raise ConfigError("risk.thresholds.low must not exceed risk.thresholds.medium")
    return risk_config
