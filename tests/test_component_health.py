#!/usr/bin/env python3
"""Tests for ComponentHealth dataclass."""

from vehicle_health import ComponentHealth, HealthStatus


class TestComponentHealth:
    """Tests for ComponentHealth markers and flags."""

    def test_is_critical(self):
        c = ComponentHealth(name="Engine", score=10, status=HealthStatus.CRITICAL)
        assert c.is_critical is True
        assert c.needs_attention is False

    def test_needs_attention(self):
        c = ComponentHealth(name="Engine", score=60, status=HealthStatus.ATTENTION)
        assert c.is_critical is False
        assert c.needs_attention is True

    def test_last_service_marker(self):
        c = ComponentHealth(
            name="Engine",
            score=20,
            status=HealthStatus.CRITICAL,
            last_service_date="2025-01-15",
            last_service_miles=46000,
        )
        assert c.last_service == "2025-01-15 @ 46,000"

    def test_unknown_markers(self):
        c = ComponentHealth(name="Engine", score=0, status=HealthStatus.CRITICAL)
        assert c.last_service == "Unknown"
        assert c.next_service == "Unknown"

    def test_next_service_prefers_distance(self):
        c = ComponentHealth(
            name="Tires",
            score=0,
            status=HealthStatus.CRITICAL,
            next_service_miles=57500,
        )
        assert c.next_service == "57,500"
        dated = ComponentHealth(
            name="Electrical",
            score=0,
            status=HealthStatus.CRITICAL,
            next_service_date="2028-06-01",
        )
        assert dated.next_service == "2028-06-01"

    def test_continuous_markers(self):
        c = ComponentHealth(
            name="Fuel System", score=75, status=HealthStatus.GOOD, continuous=True
        )
        assert c.last_service == "No data"
        assert c.next_service == "Monitor continuously"

    def test_to_dict(self):
        c = ComponentHealth(
            name="Engine",
            score=20,
            status=HealthStatus.CRITICAL,
            recommendations=("Oil change due in 1,000 miles",),
        )
        data = c.to_dict()
        assert data["status"] == "critical"
        assert data["recommendations"] == ["Oil change due in 1,000 miles"]
