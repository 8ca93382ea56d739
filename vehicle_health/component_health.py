"""ComponentHealth dataclass for a scored vehicle subsystem."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .status import HealthStatus


@dataclass(frozen=True)
class ComponentHealth:
    """Calculated health of one subsystem."""

    name: str
    score: int
    status: HealthStatus
    last_service_date: Optional[str] = None
    last_service_miles: Optional[float] = None
    next_service_miles: Optional[float] = None
    next_service_date: Optional[str] = None
    recommendations: Tuple[str, ...] = ()
    service_count: int = 0
    continuous: bool = False  # Fuel-style subsystem with no service interval

    @property
    def is_critical(self) -> bool:
        return self.status == HealthStatus.CRITICAL

    @property
    def needs_attention(self) -> bool:
        return self.status == HealthStatus.ATTENTION

    @property
    def last_service(self) -> str:
        """Last-service marker: 'date @ distance', either part, or unknown."""
        parts = []
        if self.last_service_date:
            parts.append(self.last_service_date)
        if self.last_service_miles is not None and not self.continuous:
            parts.append(f"{self.last_service_miles:,.0f}")
        if parts:
            return " @ ".join(parts)
        return "No data" if self.continuous else "Unknown"

    @property
    def next_service(self) -> str:
        """Next-service marker: due distance, due date, or monitor note."""
        if self.continuous:
            return "Monitor continuously"
        if self.next_service_miles is not None:
            return f"{self.next_service_miles:,.0f}"
        if self.next_service_date:
            return self.next_service_date
        return "Unknown"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "score": self.score,
            "status": self.status.label,
            "lastService": self.last_service,
            "nextService": self.next_service,
            "lastServiceDate": self.last_service_date,
            "lastServiceMiles": self.last_service_miles,
            "nextServiceMiles": self.next_service_miles,
            "nextServiceDate": self.next_service_date,
            "serviceCount": self.service_count,
            "recommendations": list(self.recommendations),
        }
