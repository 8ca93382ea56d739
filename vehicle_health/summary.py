"""Service history summary statistics."""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, Optional

from .calculations import parse_date
from .config import EngineConfig
from .scoring import matching_services
from .service_record import ServiceRecord


@dataclass(frozen=True)
class ServiceSummary:
    """Totals over a vehicle's service history."""

    total_services: int
    total_cost: float
    last_service_date: Optional[str] = None
    counts_by_subsystem: Dict[str, int] = field(default_factory=dict)


def summarize_services(
    records: Iterable[ServiceRecord], config: Optional[EngineConfig] = None
) -> ServiceSummary:
    """Count, cost and most recent date of services, plus per-subsystem counts."""
    config = config or EngineConfig()
    records = list(records)
    dated = [parse_date(r.service_date) for r in records if r.service_date]
    last: Optional[date] = max(dated) if dated else None
    counts = {
        rule.name: len(matching_services(records, rule.keywords))
        for rule in config.subsystems
        if rule.keywords
    }
    return ServiceSummary(
        total_services=len(records),
        total_cost=sum(r.cost or 0 for r in records),
        last_service_date=last.isoformat() if last else None,
        counts_by_subsystem=counts,
    )
