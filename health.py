#!/usr/bin/env python3
"""
Unified CLI for vehicle condition analytics.

Commands:
  report    - Show subsystem health scores, overall status and alerts
  fuel      - Show fill-ups with derived efficiency and fuel totals
  services  - Show service history with summary totals
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional

import yaml
from tabulate import tabulate

from vehicle_health import (
    ComponentHealth,
    ConfigError,
    EfficiencyPoint,
    EngineConfig,
    ServiceRecord,
    compute_fuel_efficiency,
    compute_vehicle_health,
    load_config,
    load_vehicle_data,
    summarize_services,
)
from vehicle_health.calculations import parse_date

logger = logging.getLogger(__name__)

# =============================================================================
# Formatting helpers
# =============================================================================


def format_miles(miles: Optional[float]) -> str:
    """Format distance for display."""
    return f"{miles:,.0f}" if miles is not None else "-"


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"${cost:,.2f}" if cost is not None else "-"


def format_efficiency(value: Optional[float]) -> str:
    """Format an efficiency figure for display."""
    return f"{value:.1f}" if value is not None else "-"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


# =============================================================================
# Report command
# =============================================================================


def make_component_table(components: Iterable[ComponentHealth]) -> List[List[str]]:
    """Convert component health list to table rows."""
    return [
        [
            c.name,
            str(c.score),
            c.status.label,
            c.last_service,
            c.next_service,
        ]
        for c in components
    ]


def cmd_report(args, config: EngineConfig, as_of: date):
    """Show subsystem health scores, overall status and alerts."""
    data = load_vehicle_data(args.vehicle_file)
    fuel = compute_fuel_efficiency(data.fillups, config.plausibility_ceiling)
    report = compute_vehicle_health(data.vehicle, data.services, fuel, as_of, config)

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
        return 0

    print(f"Vehicle: {data.vehicle.name}")
    print(
        f"Current odometer: {format_miles(data.vehicle.current_distance)} "
        f"{data.vehicle.odometer_unit} (as of {report.as_of_date})"
    )
    print(
        f"Overall health: {report.overall_score} ({report.overall_status.label.upper()})"
    )
    print()

    headers = ["Subsystem", "Score", "Status", "Last Service", "Next Service"]
    print(
        tabulate(
            make_component_table(report.components), headers=headers, tablefmt="simple"
        )
    )
    print()

    if report.critical_issues:
        print("CRITICAL:")
        for issue in report.critical_issues:
            print(f"  {issue}")
        print()

    if report.upcoming_maintenance:
        print("UPCOMING:")
        for item in report.upcoming_maintenance:
            print(f"  {item}")
        print()

    if args.details:
        for component in report.components:
            print(f"{component.name}:")
            for line in component.recommendations:
                print(f"  - {line}")
        print()

    return 0


# =============================================================================
# Fuel command
# =============================================================================


def make_fuel_table(points: Iterable[EfficiencyPoint]) -> List[List[str]]:
    """Convert annotated fill-ups to table rows."""
    rows = []
    for point in points:
        record = point.record
        rows.append(
            [
                record.fill_date,
                format_miles(record.odometer),
                f"{record.fuel_amount:.2f}",
                "yes" if record.is_full_tank else "no",
                format_cost(record.total_cost),
                format_efficiency(point.efficiency),
            ]
        )
    return rows


def cmd_fuel(args, config: EngineConfig, as_of: date):
    """Show fill-ups with derived efficiency and fuel totals."""
    data = load_vehicle_data(args.vehicle_file)
    fuel = compute_fuel_efficiency(data.fillups, config.plausibility_ceiling)

    if args.json:
        print(json.dumps(fuel.to_dict(), indent=2))
        return 0

    month_count, month_cost = fuel.month_to_date(as_of)
    spread = fuel.consistency(config.recent_window, config.consistency_min_samples)

    print(f"Vehicle: {data.vehicle.name}")
    print(f"Fill-ups: {fuel.fill_count}")
    print(f"Average efficiency: {format_efficiency(fuel.mean_efficiency)}")
    if spread is not None:
        print(f"Recent spread (std dev): {spread:.2f}")
    print(f"Total spend: {format_cost(fuel.total_spend)}")
    print(f"This month: {month_count} fill-ups, {format_cost(month_cost)}")
    if fuel.last_fill_date:
        print(f"Last fill-up: {fuel.last_fill_date}")
    print()

    if not fuel.annotated:
        print("No fill-ups found.")
        return 0

    points = list(fuel.annotated)
    if not args.asc:
        points.reverse()
    headers = ["Date", "Odometer", "Fuel", "Full", "Cost", "Efficiency"]
    print(tabulate(make_fuel_table(points), headers=headers, tablefmt="simple"))

    return 0


# =============================================================================
# Services command
# =============================================================================


def make_service_table(records: Iterable[ServiceRecord]) -> List[List[str]]:
    """Convert service records to table rows."""
    return [
        [
            r.service_date,
            format_miles(r.odometer),
            r.category or "-",
            r.provider or ("self" if r.is_diy else "-"),
            format_cost(r.cost),
            truncate(r.notes),
        ]
        for r in records
    ]


def cmd_services(args, config: EngineConfig, as_of: date):
    """Show service history with summary totals."""
    data = load_vehicle_data(args.vehicle_file)
    records = sorted(
        data.services,
        key=lambda r: parse_date(r.service_date) or date.min,
        reverse=not args.asc,
    )

    if args.category:
        needle = args.category.lower()
        records = [r for r in records if r.category and needle in r.category.lower()]

    summary = summarize_services(records, config)

    print(f"Vehicle: {data.vehicle.name}")
    print(f"Total services: {len(data.services)}")
    if args.category:
        print(f"Showing: {summary.total_services} (filtered)")
    if summary.last_service_date:
        print(f"Last service: {summary.last_service_date}")
    if summary.total_cost > 0:
        print(f"Total cost: {format_cost(summary.total_cost)}")
    counted = [f"{name} {n}" for name, n in summary.counts_by_subsystem.items() if n]
    if counted:
        print(f"By subsystem: {', '.join(counted)}")
    print()

    if not records:
        print("No service records found.")
        return 0

    headers = ["Date", "Odometer", "Category", "Performed By", "Cost", "Notes"]
    print(tabulate(make_service_table(records), headers=headers, tablefmt="simple"))

    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vehicle condition analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s vehicles/brz.yaml report
  %(prog)s vehicles/brz.yaml report --details --as-of 2025-06-01
  %(prog)s vehicles/brz.yaml report --json
  %(prog)s vehicles/brz.yaml --config engine.yaml report
  %(prog)s vehicles/brz.yaml fuel
  %(prog)s vehicles/brz.yaml services --category oil
""",
    )
    parser.add_argument(
        "vehicle_file",
        type=Path,
        help="Path to vehicle YAML file",
    )
    parser.add_argument(
        "--as-of",
        type=str,
        help="Evaluate as of this date, YYYY-MM-DD (default: today)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Engine config YAML overriding intervals and keywords",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log discarded samples and default substitutions",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    report_parser = subparsers.add_parser(
        "report", help="Show subsystem health scores and alerts"
    )
    report_parser.add_argument(
        "--details",
        action="store_true",
        help="Show recommendations for each subsystem",
    )
    report_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON",
    )

    fuel_parser = subparsers.add_parser(
        "fuel", help="Show fill-ups with derived efficiency"
    )
    fuel_parser.add_argument(
        "--asc",
        action="store_true",
        help="Oldest first instead of newest first",
    )
    fuel_parser.add_argument(
        "--json",
        action="store_true",
        help="Print fuel aggregates as JSON",
    )

    services_parser = subparsers.add_parser(
        "services", help="Show service history"
    )
    services_parser.add_argument(
        "--category",
        type=str,
        help="Filter to categories containing text (case-insensitive, e.g. 'oil')",
    )
    services_parser.add_argument(
        "--asc",
        action="store_true",
        help="Sort ascending instead of descending",
    )

    return parser


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.vehicle_file.exists():
        print(f"Error: File not found: {args.vehicle_file}")
        return 1

    try:
        as_of = date.fromisoformat(args.as_of) if args.as_of else date.today()
    except ValueError:
        print(f"Error: Invalid date '{args.as_of}' (expected YYYY-MM-DD)")
        return 1

    config = EngineConfig()
    if args.config:
        try:
            config = load_config(args.config)
        except (OSError, yaml.YAMLError, ConfigError) as e:
            print(f"Error: Could not load config {args.config}: {e}")
            return 1
        logger.debug("Loaded engine config from %s", args.config)

    if args.command == "report":
        return cmd_report(args, config, as_of)
    elif args.command == "fuel":
        return cmd_fuel(args, config, as_of)
    elif args.command == "services":
        return cmd_services(args, config, as_of)

    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
