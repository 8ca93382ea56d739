"""YAML loading utilities for vehicle records."""

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .fillup import FillupRecord
from .service_record import ServiceRecord
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


@dataclass
class VehicleData:
    """A vehicle together with its fill-up and service logs."""

    vehicle: Vehicle
    fillups: List[FillupRecord] = field(default_factory=list)
    services: List[ServiceRecord] = field(default_factory=list)
    categories: Dict[str, str] = field(default_factory=dict)


def _date_str(value: Any) -> Optional[str]:
    """YAML may hand back unquoted dates as date objects."""
    if value is None:
        return None
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _parse_vehicle(dct: Dict[str, Any], default_id: str) -> Vehicle:
    return Vehicle(
        str(dct.get("id") or default_id),
        dct["make"],
        dct["model"],
        dct.get("year"),
        dct.get("trim"),
        dct.get("currentOdometer"),
        dct.get("odometerUnit"),
        dct.get("fuelType"),
        dct.get("nickname"),
    )


def _parse_fillup(dct: Dict[str, Any], vehicle_id: str) -> FillupRecord:
    return FillupRecord(
        str(dct.get("vehicleId") or vehicle_id),
        _date_str(dct["fillDate"]),
        dct["odometer"],
        dct["fuelAmount"],
        dct.get("isFullTank", True),
        dct.get("pricePerUnit"),
        dct.get("totalCost"),
        dct.get("fuelUnit"),
        dct.get("fuelGrade"),
        dct.get("station"),
        dct.get("notes"),
    )


def _resolve_category(dct: Dict[str, Any], categories: Dict[str, str]) -> Optional[str]:
    """Category name given inline, or looked up in the catalog by id."""
    if dct.get("category"):
        return dct["category"]
    category_id = dct.get("categoryId")
    if category_id is None:
        return None
    name = categories.get(str(category_id))
    if name is None:
        logger.debug("Unknown maintenance category id %r", category_id)
    return name


def _parse_service(
    dct: Dict[str, Any], vehicle_id: str, categories: Dict[str, str]
) -> ServiceRecord:
    return ServiceRecord(
        str(dct.get("vehicleId") or vehicle_id),
        _resolve_category(dct, categories),
        _date_str(dct["serviceDate"]),
        dct.get("odometer"),
        dct.get("cost"),
        dct.get("provider"),
        dct.get("isDiy", False),
        dct.get("notes"),
    )


def parse_vehicle_data(data: Dict[str, Any], default_id: str = "vehicle") -> VehicleData:
    """Build VehicleData from a parsed YAML document (camelCase keys)."""
    vehicle = _parse_vehicle(data["vehicle"], default_id)
    categories = {str(k): v for k, v in (data.get("categories") or {}).items()}
    fillups = [_parse_fillup(d, vehicle.id) for d in data.get("fillups") or []]
    services = [
        _parse_service(d, vehicle.id, categories) for d in data.get("services") or []
    ]
    return VehicleData(vehicle, fillups, services, categories)


def load_vehicle_data(filename: Union[str, Path]) -> VehicleData:
    """Load a vehicle and its logs from a YAML file."""
    with open(filename, "rb") as fp:
        data = yaml.load(fp, Loader=yaml.SafeLoader)
    return parse_vehicle_data(data, default_id=Path(filename).stem)
