"""Health score presentation models."""

from dataclasses import dataclass
from enum import StrEnum


class ScoreBand(StrEnum):
    """Coarse category for a health score."""

    HEALTHY = "healthy"
    MODERATE = "moderate"
    HIGH_RISK = "high_risk"


SCORE_BAND_LABELS = {
    ScoreBand.HEALTHY: "Healthy Choice",
    ScoreBand.MODERATE: "Moderate Risk",
    ScoreBand.HIGH_RISK: "High Risk",
}


@dataclass(frozen=True)
class NutrientAlert:
    """A nutrient that exceeds one of the user's personal limits."""

    type: str
    message: str
    severity: str
