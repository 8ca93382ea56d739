"""Fuel economy calculator: per-fill-up efficiency and vehicle aggregates."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .calculations import efficiency_spread, iso_date, parse_date
from .fillup import EfficiencyPoint, FillupRecord

logger = logging.getLogger(__name__)

DEFAULT_PLAUSIBILITY_CEILING = 100.0
DEFAULT_RECENT_WINDOW = 10


def _fill_day(record: FillupRecord) -> date:
    """Sort key for fill-ups; undated records sort first."""
    return parse_date(record.fill_date) or date.min


def derive_efficiency(
    previous: FillupRecord,
    current: FillupRecord,
    plausibility_ceiling: float = DEFAULT_PLAUSIBILITY_CEILING,
) -> Optional[float]:
    """
    Efficiency for the interval ending at `current`.

    Only full-to-full intervals count. Results that are non-positive or
    above the plausibility ceiling point at an odometer typo or unit
    mismatch and are discarded.
    """
    if not (previous.is_full_tank and current.is_full_tank):
        return None
    if current.odometer is None or previous.odometer is None:
        return None
    if not current.fuel_amount or current.fuel_amount <= 0:
        logger.debug(
            "Skipping fill-up on %s: non-positive fuel amount %r",
            current.fill_date,
            current.fuel_amount,
        )
        return None

    efficiency = (current.odometer - previous.odometer) / current.fuel_amount
    if efficiency <= 0 or efficiency > plausibility_ceiling:
        logger.debug(
            "Discarding implausible efficiency %.2f for fill-up on %s",
            efficiency,
            current.fill_date,
        )
        return None
    return efficiency


def partition_by_vehicle(
    fillups: Iterable[FillupRecord],
) -> Dict[str, List[FillupRecord]]:
    """Group fill-ups by vehicle id, keeping first-seen vehicle order."""
    partitions: Dict[str, List[FillupRecord]] = {}
    for record in fillups:
        partitions.setdefault(record.vehicle_id, []).append(record)
    return partitions


def annotate_fillups(
    fillups: Iterable[FillupRecord],
    plausibility_ceiling: float = DEFAULT_PLAUSIBILITY_CEILING,
) -> List[EfficiencyPoint]:
    """
    Attach derived efficiency to each fill-up.

    Records are partitioned by vehicle and stable-sorted by fill date
    within each partition; the first record of a partition never gets a
    value.
    """
    points: List[EfficiencyPoint] = []
    for records in partition_by_vehicle(fillups).values():
        ordered = sorted(records, key=_fill_day)
        previous = None
        for record in ordered:
            efficiency = None
            if previous is not None:
                efficiency = derive_efficiency(previous, record, plausibility_ceiling)
            points.append(EfficiencyPoint(record=record, efficiency=efficiency))
            previous = record
    return points


@dataclass(frozen=True)
class FuelEconomy:
    """Annotated fill-ups plus vehicle-level fuel aggregates."""

    annotated: Tuple[EfficiencyPoint, ...]
    mean_efficiency: Optional[float]
    total_spend: float
    fill_count: int
    last_fill_date: Optional[str] = None

    @property
    def efficiencies(self) -> List[float]:
        """Defined efficiency samples in chronological order."""
        return [p.efficiency for p in self.annotated if p.efficiency is not None]

    @property
    def has_samples(self) -> bool:
        return self.mean_efficiency is not None

    def recent(self, n: int = DEFAULT_RECENT_WINDOW) -> List[EfficiencyPoint]:
        """Last n fill-ups, newest first. Same-day fill-ups keep input order."""
        newest_first = sorted(
            self.annotated, key=lambda p: _fill_day(p.record), reverse=True
        )
        return newest_first[:n]

    def consistency(
        self, n: int = DEFAULT_RECENT_WINDOW, min_samples: int = 3
    ) -> Optional[float]:
        """Standard deviation of the defined samples among the last n fill-ups."""
        samples = [p.efficiency for p in self.recent(n) if p.efficiency is not None]
        return efficiency_spread(samples, min_samples)

    def efficiency_trend(self) -> List[Tuple[date, float]]:
        """(fill day, efficiency) pairs for defined samples, oldest first."""
        trend = [
            (_fill_day(p.record), p.efficiency)
            for p in self.annotated
            if p.efficiency is not None
        ]
        return sorted(trend, key=lambda item: item[0])

    def month_to_date(self, as_of: date) -> Tuple[int, float]:
        """Fill-up count and spend from the 1st of as_of's month through as_of."""
        month_start = as_of.replace(day=1)
        in_month = [
            p.record
            for p in self.annotated
            if month_start <= _fill_day(p.record) <= as_of
        ]
        return len(in_month), sum(r.total_cost or 0 for r in in_month)

    def for_vehicle(self, vehicle_id: str) -> "FuelEconomy":
        """Aggregates recomputed over one vehicle's fill-ups only."""
        return _summarize(
            p for p in self.annotated if p.record.vehicle_id == vehicle_id
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "meanEfficiency": self.mean_efficiency,
            "totalSpend": self.total_spend,
            "fillCount": self.fill_count,
            "lastFillDate": self.last_fill_date,
            "fillups": [
                {
                    "vehicleId": p.record.vehicle_id,
                    "fillDate": iso_date(p.record.fill_date),
                    "odometer": p.record.odometer,
                    "fuelAmount": p.record.fuel_amount,
                    "isFullTank": p.record.is_full_tank,
                    "totalCost": p.record.total_cost,
                    "efficiency": p.efficiency,
                }
                for p in self.annotated
            ],
        }


def compute_fuel_efficiency(
    fillups: Iterable[FillupRecord],
    plausibility_ceiling: float = DEFAULT_PLAUSIBILITY_CEILING,
) -> FuelEconomy:
    """Derive per-fill-up efficiency and aggregate mean, spend and count."""
    return _summarize(annotate_fillups(list(fillups), plausibility_ceiling))


def _summarize(points: Iterable[EfficiencyPoint]) -> FuelEconomy:
    points = tuple(points)
    samples = [p.efficiency for p in points if p.efficiency is not None]
    mean_efficiency = sum(samples) / len(samples) if samples else None
    total_spend = sum(p.record.total_cost or 0 for p in points)

    dated = [d for d in (parse_date(p.record.fill_date) for p in points) if d]
    last_fill_date = max(dated).isoformat() if dated else None

    return FuelEconomy(
        annotated=points,
        mean_efficiency=mean_efficiency,
        total_spend=total_spend,
        fill_count=len(points),
        last_fill_date=last_fill_date,
    )


def fuel_efficiency_by_vehicle(
    fillups: Iterable[FillupRecord],
    plausibility_ceiling: float = DEFAULT_PLAUSIBILITY_CEILING,
) -> Dict[str, FuelEconomy]:
    """One FuelEconomy per vehicle id."""
    return {
        vehicle_id: compute_fuel_efficiency(records, plausibility_ceiling)
        for vehicle_id, records in partition_by_vehicle(fillups).items()
    }
