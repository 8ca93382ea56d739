"""
Vehicle condition analytics.

This package turns fill-up and service logs into health figures:
- HealthStatus: Score tiers (EXCELLENT, GOOD, ATTENTION, CRITICAL)
- Vehicle, FillupRecord, ServiceRecord: Input records
- FuelEconomy: Derived efficiency and fuel aggregates
- ComponentHealth: Scored subsystem
- VehicleHealthReport: Overall score, status and alerts
- EngineConfig: Subsystem keyword table, intervals and tunables
"""

from .status import HealthStatus, classify_score
from .vehicle import Vehicle
from .fillup import FillupRecord, EfficiencyPoint
from .service_record import ServiceRecord
from .component_health import ComponentHealth
from .config import EngineConfig, SubsystemRule, ConfigError, load_config
from .fuel import FuelEconomy, compute_fuel_efficiency, fuel_efficiency_by_vehicle
from .report import VehicleHealthReport, compute_vehicle_health
from .summary import ServiceSummary, summarize_services
from .loader import VehicleData, load_vehicle_data

__all__ = [
    "HealthStatus",
    "classify_score",
    "Vehicle",
    "FillupRecord",
    "EfficiencyPoint",
    "ServiceRecord",
    "ComponentHealth",
    "EngineConfig",
    "SubsystemRule",
    "ConfigError",
    "load_config",
    "FuelEconomy",
    "compute_fuel_efficiency",
    "fuel_efficiency_by_vehicle",
    "VehicleHealthReport",
    "compute_vehicle_health",
    "ServiceSummary",
    "summarize_services",
    "VehicleData",
    "load_vehicle_data",
]
