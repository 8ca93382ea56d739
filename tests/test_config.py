#!/usr/bin/env python3
"""Tests for engine configuration loading."""

from datetime import date

import pytest

from vehicle_health import (
    ConfigError,
    EngineConfig,
    ServiceRecord,
    Vehicle,
    compute_vehicle_health,
    load_config,
)
from vehicle_health.config import config_from_dict


class TestDefaults:
    """Tests for the default subsystem table."""

    def test_subsystem_order(self):
        assert EngineConfig().subsystem_names == [
            "Engine",
            "Transmission",
            "Brakes",
            "Tires",
            "Electrical",
            "Fuel System",
        ]

    def test_intervals_and_keywords(self):
        config = EngineConfig()
        assert config.get_subsystem("engine").interval == 5000
        assert config.get_subsystem("engine").keywords == ("oil", "filter", "spark")
        assert config.get_subsystem("Transmission").interval == 30000
        assert config.get_subsystem("Brakes").interval == 25000
        assert config.get_subsystem("Tires").interval == 7500
        assert config.get_subsystem("Electrical").interval == 36
        assert config.get_subsystem("Fuel System").keywords == ()

    def test_tunables(self):
        config = EngineConfig()
        assert config.plausibility_ceiling == 100
        assert config.recent_window == 10
        assert config.neutral_fuel_score == 75

    def test_unknown_subsystem(self):
        assert EngineConfig().get_subsystem("Suspension") is None


class TestConfigFromDict:
    """Tests for building a config from a parsed document."""

    def test_empty_document_gives_defaults(self):
        assert config_from_dict(None) == EngineConfig()
        assert config_from_dict({}) == EngineConfig()

    def test_overrides(self):
        config = config_from_dict(
            {
                "plausibilityCeiling": 60,
                "recentWindow": 5,
                "neutralFuelScore": 50,
                "fuelBaseline": {"base": 40, "perYear": 1, "floor": 15},
                "consistency": {"minSamples": 4, "bonusMax": 5},
            }
        )
        assert config.plausibility_ceiling == 60
        assert config.recent_window == 5
        assert config.neutral_fuel_score == 50
        assert config.baseline_efficiency == 40
        assert config.baseline_decline_per_year == 1
        assert config.baseline_floor == 15
        assert config.consistency_min_samples == 4
        assert config.consistency_bonus_max == 5

    def test_subsystem_overrides_keep_order(self):
        config = config_from_dict(
            {"subsystems": {"brakes": {"keywords": ["brake", "pad"], "interval": 20000}}}
        )
        brakes = config.get_subsystem("Brakes")
        assert brakes.keywords == ("brake", "pad")
        assert brakes.interval == 20000
        assert brakes.overdue_text == "Brake inspection overdue"
        assert config.subsystem_names[2] == "Brakes"

    def test_unknown_subsystem_rejected(self):
        with pytest.raises(ConfigError, match="Unknown subsystem"):
            config_from_dict({"subsystems": {"Suspension": {"interval": 10000}}})

    def test_fuel_system_not_overridable(self):
        with pytest.raises(ConfigError):
            config_from_dict({"subsystems": {"Fuel System": {"interval": 10}}})

    def test_schema_violation(self):
        with pytest.raises(ConfigError, match="Invalid engine config"):
            config_from_dict({"recentWindow": 0})
        with pytest.raises(ConfigError):
            config_from_dict({"unknownKey": 1})

    def test_config_error_is_value_error(self):
        assert issubclass(ConfigError, ValueError)


class TestLoadConfig:
    """Tests for load_config from YAML."""

    def test_loads_yaml(self, tmp_path):
        path = tmp_path / "engine.yaml"
        path.write_text(
            """
plausibilityCeiling: 80
subsystems:
  Engine:
    interval: 7500
"""
        )
        config = load_config(path)
        assert config.plausibility_ceiling == 80
        assert config.get_subsystem("Engine").interval == 7500

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "engine.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_keyword_override_changes_matching(self, tmp_path):
        """Taxonomy changes live in config, not in scoring code."""
        path = tmp_path / "engine.yaml"
        path.write_text(
            """
subsystems:
  Brakes:
    keywords: [brake, pad]
"""
        )
        config = load_config(path)
        vehicle = Vehicle("v1", "Subaru", "BRZ", current_odometer=50000)
        services = [ServiceRecord("v1", "Pad Replacement", "2025-01-01", 50000)]
        report = compute_vehicle_health(
            vehicle, services, None, date(2025, 6, 1), config
        )
        assert report.get_component("Brakes").score == 100
