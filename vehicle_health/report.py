"""Vehicle health report: overall score, status, and alert lists."""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .calculations import round_score
from .component_health import ComponentHealth
from .config import EngineConfig
from .fuel import FuelEconomy
from .scoring import score_subsystems
from .service_record import ServiceRecord
from .status import HealthStatus, classify_score
from .vehicle import Vehicle


@dataclass(frozen=True)
class VehicleHealthReport:
    """Complete health picture of one vehicle at one point in time."""

    vehicle_id: str
    as_of_date: str
    overall_score: int
    overall_status: HealthStatus
    components: Tuple[ComponentHealth, ...]
    critical_issues: Tuple[str, ...] = ()
    upcoming_maintenance: Tuple[str, ...] = ()

    def get_component(self, name: str) -> Optional[ComponentHealth]:
        """Find a component by name (case-insensitive)."""
        for component in self.components:
            if component.name.lower() == name.lower():
                return component
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vehicleId": self.vehicle_id,
            "asOfDate": self.as_of_date,
            "overallScore": self.overall_score,
            "overallStatus": self.overall_status.label,
            "components": [c.to_dict() for c in self.components],
            "criticalIssues": list(self.critical_issues),
            "upcomingMaintenance": list(self.upcoming_maintenance),
        }


def overall_score(components: Sequence[ComponentHealth]) -> int:
    """Unweighted mean of the (already rounded) component scores."""
    if not components:
        return 0
    return round_score(sum(c.score for c in components) / len(components))


def critical_issues(components: Iterable[ComponentHealth]) -> List[str]:
    return [f"{c.name} requires immediate attention" for c in components if c.is_critical]


def upcoming_maintenance(components: Iterable[ComponentHealth]) -> List[str]:
    return [f"{c.name} service needed soon" for c in components if c.needs_attention]


def build_report(
    vehicle_id: str, as_of: date, components: Sequence[ComponentHealth]
) -> VehicleHealthReport:
    """Aggregate scored components into a report."""
    score = overall_score(components)
    return VehicleHealthReport(
        vehicle_id=vehicle_id,
        as_of_date=as_of.isoformat(),
        overall_score=score,
        overall_status=classify_score(score),
        components=tuple(components),
        critical_issues=tuple(critical_issues(components)),
        upcoming_maintenance=tuple(upcoming_maintenance(components)),
    )


def compute_vehicle_health(
    vehicle: Vehicle,
    service_records: Iterable[ServiceRecord],
    fuel: Optional[FuelEconomy],
    current_date: date,
    config: Optional[EngineConfig] = None,
) -> VehicleHealthReport:
    """
    Score every subsystem of a vehicle and aggregate the results.

    Service records and fill-ups belonging to other vehicles are ignored.
    `fuel` may be None when no fill-ups exist; the fuel system then scores
    neutral.
    """
    config = config or EngineConfig()
    records = [r for r in service_records if r.vehicle_id == vehicle.id]
    if fuel is not None:
        fuel = fuel.for_vehicle(vehicle.id)
    components = score_subsystems(vehicle, records, fuel, current_date, config)
    return build_report(vehicle.id, current_date, components)
