#!/usr/bin/env python3
"""Tests for the health CLI formatting helpers and commands."""

import json

import pytest

from health import (
    format_cost,
    format_efficiency,
    format_miles,
    main,
    make_component_table,
    make_fuel_table,
    make_service_table,
    truncate,
)
from vehicle_health import (
    ComponentHealth,
    EfficiencyPoint,
    FillupRecord,
    HealthStatus,
    ServiceRecord,
)

VEHICLE_YAML = """
vehicle:
  id: brz
  make: Subaru
  model: BRZ
  year: 2015
  currentOdometer: 50000

fillups:
  - fillDate: '2025-05-01'
    odometer: 49000
    fuelAmount: 10
    totalCost: 40
  - fillDate: '2025-05-15'
    odometer: 49300
    fuelAmount: 10
    totalCost: 38

services:
  - category: Oil Change
    serviceDate: '2025-01-15'
    odometer: 46000
    cost: 65
"""


@pytest.fixture
def vehicle_file(tmp_path):
    path = tmp_path / "brz.yaml"
    path.write_text(VEHICLE_YAML)
    return path


class TestFormatters:
    """Tests for format helpers."""

    def test_format_miles(self):
        assert format_miles(50000) == "50,000"
        assert format_miles(0) == "0"
        assert format_miles(None) == "-"

    def test_format_cost(self):
        assert format_cost(75.50) == "$75.50"
        assert format_cost(None) == "-"

    def test_format_efficiency(self):
        assert format_efficiency(30.476) == "30.5"
        assert format_efficiency(None) == "-"

    def test_truncate(self):
        assert truncate(None) == "-"
        assert truncate("short") == "short"
        assert truncate("this is a very long note", max_len=15) == "this is a ve..."


class TestTables:
    """Tests for table row builders."""

    def test_component_table(self):
        c = ComponentHealth(
            name="Engine",
            score=20,
            status=HealthStatus.CRITICAL,
            last_service_date="2025-01-15",
            last_service_miles=46000,
            next_service_miles=51000,
        )
        assert make_component_table([c]) == [
            ["Engine", "20", "critical", "2025-01-15 @ 46,000", "51,000"]
        ]

    def test_fuel_table(self):
        record = FillupRecord("v1", "2025-01-10", 10300, 12, total_cost=42.0)
        rows = make_fuel_table([EfficiencyPoint(record, 25.0)])
        assert rows == [["2025-01-10", "10,300", "12.00", "yes", "$42.00", "25.0"]]

    def test_service_table(self):
        records = [
            ServiceRecord("v1", "Oil Change", "2025-01-15", 46000, 65.0, is_diy=True),
            ServiceRecord("v1", None, "2024-01-01"),
        ]
        rows = make_service_table(records)
        assert rows[0] == ["2025-01-15", "46,000", "Oil Change", "self", "$65.00", "-"]
        assert rows[1][2] == "-"
        assert rows[1][3] == "-"


class TestMain:
    """Tests for CLI command dispatch."""

    def test_report(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "--as-of", "2025-06-01", "report"]) == 0
        out = capsys.readouterr().out
        assert "2015 Subaru BRZ" in out
        assert "Overall health:" in out
        assert "Engine requires immediate attention" in out

    def test_report_details(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "--as-of", "2025-06-01", "report", "--details"]) == 0
        assert "Oil change due in 1,000 miles" in capsys.readouterr().out

    def test_report_json(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "--as-of", "2025-06-01", "report", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["vehicleId"] == "brz"
        assert data["asOfDate"] == "2025-06-01"
        assert data["components"][0]["score"] == 20

    def test_fuel(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "--as-of", "2025-05-20", "fuel"]) == 0
        out = capsys.readouterr().out
        assert "Average efficiency: 30.0" in out
        assert "This month: 2 fill-ups, $78.00" in out

    def test_fuel_json(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "fuel", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["meanEfficiency"] == pytest.approx(30.0)

    def test_services_filtered(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "services", "--category", "OIL"]) == 0
        out = capsys.readouterr().out
        assert "Showing: 1 (filtered)" in out
        assert "Total cost: $65.00" in out

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.yaml"), "report"]) == 1
        assert "File not found" in capsys.readouterr().out

    def test_invalid_as_of(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "--as-of", "June", "report"]) == 1
        assert "Invalid date" in capsys.readouterr().out

    def test_bad_config(self, vehicle_file, tmp_path, capsys):
        config = tmp_path / "engine.yaml"
        config.write_text("recentWindow: 0\n")
        assert main([str(vehicle_file), "--config", str(config), "report"]) == 1
        assert "Could not load config" in capsys.readouterr().out

    def test_config_applied(self, vehicle_file, tmp_path, capsys):
        config = tmp_path / "engine.yaml"
        config.write_text("subsystems:\n  Engine:\n    interval: 10000\n")
        args = [str(vehicle_file), "--config", str(config), "--as-of", "2025-06-01"]
        assert main(args + ["report", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["components"][0]["score"] == 60
