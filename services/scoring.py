"""Risk level calculation, severity bands and year-over-year change.

Impact and likelihood are both scored 1-5, so a risk level is an integer
between 1 and 25. Range checks belong to the request schemas; the functions
here accept whatever they are given.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class RiskBand(str, Enum):
    UNASSESSED = "unassessed"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# inclusive upper bounds, checked in order; anything above 16 is critical
BAND_THRESHOLDS = [
    (4, RiskBand.LOW),
    (9, RiskBand.MEDIUM),
    (16, RiskBand.HIGH),
]

BAND_LABELS = {
    RiskBand.UNASSESSED: "Unassessed",
    RiskBand.LOW: "Low Risk",
    RiskBand.MEDIUM: "Medium Risk",
    RiskBand.HIGH: "High Risk",
    RiskBand.CRITICAL: "Critical Risk",
}

BAND_COLORS = {
    RiskBand.UNASSESSED: "#9CA3AF",
    RiskBand.LOW: "#22C55E",
    RiskBand.MEDIUM: "#EAB308",
    RiskBand.HIGH: "#F97316",
    RiskBand.CRITICAL: "#EF4444",
}

INCREASED = "increased"
DECREASED = "decreased"
NO_CHANGE = "no change"


def calculate_risk_level(impact: int, likelihood: int) -> int:
    return impact * likelihood


def classify_risk_level(level: Optional[int]) -> RiskBand:
    """Map a risk level to its severity band.

    ``None`` and ``0`` mean the risk was never scored and classify as
    ``UNASSESSED``, which is not the same thing as ``LOW``.
    """
    if not level:
        return RiskBand.UNASSESSED

    for upper, band in BAND_THRESHOLDS:
        if level <= upper:
            return band
    return RiskBand.CRITICAL


def risk_label(level: Optional[int]) -> str:
    return BAND_LABELS[classify_risk_level(level)]


@dataclass(frozen=True)
class RiskChange:
    delta: int
    direction: str
    has_prior: bool


def risk_change(current: Optional[int], prior: Optional[int]) -> RiskChange:
    """Compare a current score against the prior-year one.

    Missing values count as 0, so a risk with no prior score reports the
    whole current level as an increase. ``has_prior`` lets callers tell a
    brand-new risk apart from one that genuinely did not move.
    """
    delta = (current or 0) - (prior or 0)

    if delta > 0:
        direction = INCREASED
    elif delta < 0:
        direction = DECREASED
    else:
        direction = NO_CHANGE

    return RiskChange(delta=delta, direction=direction, has_prior=prior is not None)
