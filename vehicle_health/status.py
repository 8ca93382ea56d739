"""Health status tiers for subsystem and overall scores."""

from enum import Enum


class HealthStatus(Enum):
    """Health classification. Lower value = more urgent."""

    CRITICAL = 1
    ATTENTION = 2
    GOOD = 3
    EXCELLENT = 4

    @property
    def label(self) -> str:
        return self.name.lower()

    @property
    def needs_service(self) -> bool:
        return self in (HealthStatus.CRITICAL, HealthStatus.ATTENTION)


# Lower bound (inclusive) of each tier, checked best-first
STATUS_THRESHOLDS = (
    (85, HealthStatus.EXCELLENT),
    (70, HealthStatus.GOOD),
    (50, HealthStatus.ATTENTION),
)


def classify_score(score: float) -> HealthStatus:
    """Map a 0-100 score to its status tier."""
    for threshold, status in STATUS_THRESHOLDS:
        if score >= threshold:
            return status
    return HealthStatus.CRITICAL
