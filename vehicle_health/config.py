"""Engine configuration: subsystem keyword table, intervals and tunables."""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml
from jsonschema import validate, ValidationError

DISTANCE = "distance"
TIME = "time"
FUEL = "fuel"


class ConfigError(ValueError):
    """Raised when an engine config file is invalid."""


@dataclass(frozen=True)
class SubsystemRule:
    """How one subsystem is matched against service history and scored."""

    name: str
    basis: str
    keywords: Tuple[str, ...] = ()
    interval: float = 0
    due_text: str = ""
    overdue_text: str = ""
    advice: Tuple[str, ...] = ()


DEFAULT_SUBSYSTEMS: Tuple[SubsystemRule, ...] = (
    SubsystemRule(
        name="Engine",
        basis=DISTANCE,
        keywords=("oil", "filter", "spark"),
        interval=5000,
        due_text="Oil change due in {remaining:,.0f} {unit}",
        overdue_text="Oil change overdue",
        advice=(
            "Check air filter condition",
            "Inspect spark plugs if over 30,000 {unit}",
        ),
    ),
    SubsystemRule(
        name="Transmission",
        basis=DISTANCE,
        keywords=("transmission",),
        interval=30000,
        due_text="Transmission service due in {remaining:,.0f} {unit}",
        overdue_text="Transmission service overdue",
        advice=(
            "Check transmission fluid level and color",
            "Listen for unusual shifting sounds",
        ),
    ),
    SubsystemRule(
        name="Brakes",
        basis=DISTANCE,
        keywords=("brake",),
        interval=25000,
        due_text="Brake inspection due in {remaining:,.0f} {unit}",
        overdue_text="Brake inspection overdue",
        advice=(
            "Check brake pad thickness",
            "Inspect brake fluid level and color",
            "Listen for squealing or grinding sounds",
        ),
    ),
    SubsystemRule(
        name="Tires",
        basis=DISTANCE,
        keywords=("tire", "rotation"),
        interval=7500,
        due_text="Tire rotation due in {remaining:,.0f} {unit}",
        overdue_text="Tire rotation overdue",
        advice=(
            "Check tire pressure monthly",
            "Inspect tread depth and wear patterns",
            "Check for sidewall damage or bulges",
        ),
    ),
    SubsystemRule(
        name="Electrical",
        basis=TIME,
        keywords=("battery", "electrical", "alternator"),
        interval=36,
        due_text="Battery good for {remaining:.0f} more months",
        overdue_text="Battery replacement may be needed",
        advice=(
            "Test battery voltage regularly",
            "Check alternator charging rate",
            "Inspect electrical connections for corrosion",
        ),
    ),
    SubsystemRule(name="Fuel System", basis=FUEL),
)


@dataclass(frozen=True)
class EngineConfig:
    """Tunables for the fuel calculator and condition scorer."""

    subsystems: Tuple[SubsystemRule, ...] = DEFAULT_SUBSYSTEMS
    plausibility_ceiling: float = 100
    recent_window: int = 10
    neutral_fuel_score: float = 75
    baseline_efficiency: float = 35
    baseline_decline_per_year: float = 0.5
    baseline_floor: float = 20
    consistency_min_samples: int = 3
    consistency_bonus_max: float = 10

    @property
    def subsystem_names(self) -> List[str]:
        return [rule.name for rule in self.subsystems]

    def get_subsystem(self, name: str) -> Optional[SubsystemRule]:
        """Find a subsystem rule by name (case-insensitive)."""
        for rule in self.subsystems:
            if rule.name.lower() == name.lower():
                return rule
        return None


CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "plausibilityCeiling": {"type": "number", "exclusiveMinimum": 0},
        "recentWindow": {"type": "integer", "minimum": 1},
        "neutralFuelScore": {"type": "number", "minimum": 0, "maximum": 100},
        "fuelBaseline": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "base": {"type": "number"},
                "perYear": {"type": "number"},
                "floor": {"type": "number", "exclusiveMinimum": 0},
            },
        },
        "consistency": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "minSamples": {"type": "integer", "minimum": 2},
                "bonusMax": {"type": "number", "minimum": 0},
            },
        },
        "subsystems": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "additionalProperties": False,
                "properties": {
                    "keywords": {"type": "array", "items": {"type": "string"}},
                    "interval": {"type": "number", "exclusiveMinimum": 0},
                },
            },
        },
    },
}


def _apply_subsystem_overrides(
    subsystems: Tuple[SubsystemRule, ...], overrides: Dict[str, Dict[str, Any]]
) -> Tuple[SubsystemRule, ...]:
    """Return subsystem rules with keyword/interval overrides applied."""
    by_name = {rule.name.lower(): rule for rule in subsystems}
    for name, values in overrides.items():
        rule = by_name.get(name.lower())
        if rule is None:
            raise ConfigError(f"Unknown subsystem '{name}'")
        if rule.basis == FUEL:
            raise ConfigError(f"Subsystem '{rule.name}' has no interval or keywords")
        changes: Dict[str, Any] = {}
        if "keywords" in values:
            changes["keywords"] = tuple(values["keywords"])
        if "interval" in values:
            changes["interval"] = values["interval"]
        by_name[name.lower()] = replace(rule, **changes)
    return tuple(by_name[rule.name.lower()] for rule in subsystems)


def config_from_dict(data: Optional[Dict[str, Any]]) -> EngineConfig:
    """Build an EngineConfig from a parsed config document (camelCase keys)."""
    data = data or {}
    try:
        validate(instance=data, schema=CONFIG_SCHEMA)
    except ValidationError as e:
        raise ConfigError(f"Invalid engine config: {e.message}") from e

    config = EngineConfig()
    changes: Dict[str, Any] = {}
    if "plausibilityCeiling" in data:
        changes["plausibility_ceiling"] = data["plausibilityCeiling"]
    if "recentWindow" in data:
        changes["recent_window"] = data["recentWindow"]
    if "neutralFuelScore" in data:
        changes["neutral_fuel_score"] = data["neutralFuelScore"]

    baseline = data.get("fuelBaseline") or {}
    if "base" in baseline:
        changes["baseline_efficiency"] = baseline["base"]
    if "perYear" in baseline:
        changes["baseline_decline_per_year"] = baseline["perYear"]
    if "floor" in baseline:
        changes["baseline_floor"] = baseline["floor"]

    consistency = data.get("consistency") or {}
    if "minSamples" in consistency:
        changes["consistency_min_samples"] = consistency["minSamples"]
    if "bonusMax" in consistency:
        changes["consistency_bonus_max"] = consistency["bonusMax"]

    if data.get("subsystems"):
        changes["subsystems"] = _apply_subsystem_overrides(
            config.subsystems, data["subsystems"]
        )
    return replace(config, **changes)


def load_config(filename: Union[str, Path]) -> EngineConfig:
    """Load engine tunables from a YAML file."""
    with open(filename, "r") as fp:
        data = yaml.safe_load(fp)
    if data is not None and not isinstance(data, dict):
        raise ConfigError("Engine config must be a mapping")
    return config_from_dict(data)
