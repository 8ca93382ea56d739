"""FillupRecord class and derived efficiency points."""

from dataclasses import dataclass
from typing import Optional


class FillupRecord:
    """A single refueling event."""

    def __init__(
        self,
        vehicle_id: str,
        fill_date: str,
        odometer: float,
        fuel_amount: float,
        is_full_tank: bool = True,
        price_per_unit: Optional[float] = None,
        total_cost: Optional[float] = None,
        fuel_unit: Optional[str] = None,
        fuel_grade: Optional[str] = None,
        station: Optional[str] = None,
        notes: Optional[str] = None,
    ):
        self.vehicle_id = vehicle_id
        self.fill_date = fill_date
        self.odometer = odometer
        self.fuel_amount = fuel_amount
        self.is_full_tank = bool(is_full_tank)
        self.price_per_unit = price_per_unit
        self.total_cost = total_cost
        self.fuel_unit = fuel_unit
        self.fuel_grade = fuel_grade
        self.station = station
        self.notes = notes


@dataclass(frozen=True)
class EfficiencyPoint:
    """A fill-up paired with the efficiency derived for it, if any."""

    record: FillupRecord
    efficiency: Optional[float] = None

    @property
    def has_efficiency(self) -> bool:
        return self.efficiency is not None
