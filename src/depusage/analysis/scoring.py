"""Migration risk scoring for package usage records."""

from dataclasses import dataclass

from depusage.models.usage import MigrationRisk, PackageUsageRecord


@dataclass
class RiskConfig:
    """Weights and thresholds for migration risk scoring.

    The defaults are heuristics carried over unchanged; they are meant to be
    tuned from the config file rather than treated as derived values.
    """

    usage_weight: float = 1.0  # Per recorded call site
    symbol_weight: float = 2.0  # Per distinct symbol touched
    complexity_weight: float = 0.5  # Per point of accumulated complexity

    low_threshold: float = 5.0  # risk <= low_threshold -> low
    medium_threshold: float = 15.0  # risk <= medium_threshold -> medium, above -> high


class RiskScorer:
    """
    Derive a migration risk level from aggregated usage.

    risk = usages * usage_weight
         + distinct symbols * symbol_weight
         + complexity * complexity_weight
    """

    def __init__(self, config: RiskConfig | None = None) -> None:
        self.config = config or RiskConfig()

    def risk_value(self, record: PackageUsageRecord) -> float:
        """Numeric risk for a record."""
        return (
            len(record.usage_nodes) * self.config.usage_weight
            + len(record.exported_symbols) * self.config.symbol_weight
            + record.complexity_score * self.config.complexity_weight
        )

    def score(self, record: PackageUsageRecord) -> MigrationRisk:
        """Classify a record into low, medium or high risk."""
        return classify_risk(self.risk_value(record), self.config)

    def explain(self, record: PackageUsageRecord) -> list[str]:
        """Human-readable breakdown of how a record's risk was reached."""
        reasons = [
            f"{len(record.usage_nodes)} call sites x {self.config.usage_weight:g}",
            f"{len(record.exported_symbols)} distinct symbols x {self.config.symbol_weight:g}",
            f"complexity {record.complexity_score} x {self.config.complexity_weight:g}",
        ]
        value = self.risk_value(record)
        reasons.append(f"Total risk {value:g}: {classify_risk(value, self.config).value}")
        return reasons


def classify_risk(value: float, config: RiskConfig | None = None) -> MigrationRisk:
    """Classify a numeric risk value into a risk level."""
    config = config or RiskConfig()
    if value <= config.low_threshold:
        return MigrationRisk.LOW
    if value <= config.medium_threshold:
        return MigrationRisk.MEDIUM
    return MigrationRisk.HIGH
