"""
Subsystem health scorers.

Distance and time subsystems decay linearly from 100 at service to 0 at
one full interval. With no matching service on record the elapsed
amount defaults to the full interval, so unknown history scores as due.
The fuel system instead defaults to a neutral score, since missing fuel
data says nothing about mechanical neglect.
"""

import logging
from datetime import date
from typing import Iterable, List, Optional

from .calculations import (
    calc_next_service_date,
    calc_next_service_miles,
    clamp_score,
    expected_efficiency,
    interval_score,
    iso_date,
    months_between,
    parse_date,
    round_score,
)
from .component_health import ComponentHealth
from .config import DISTANCE, FUEL, TIME, EngineConfig, SubsystemRule
from .fuel import FuelEconomy
from .service_record import ServiceRecord
from .status import classify_score
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


def matching_services(
    records: Iterable[ServiceRecord], keywords: Iterable[str]
) -> List[ServiceRecord]:
    """Service records whose category contains any keyword."""
    keywords = list(keywords)
    return [r for r in records if r.matches(keywords)]


def find_last_service(
    records: Iterable[ServiceRecord], keywords: Iterable[str]
) -> Optional[ServiceRecord]:
    """Most recent matching service by service date (not odometer)."""
    matching = matching_services(records, keywords)
    if not matching:
        return None
    return max(matching, key=lambda r: parse_date(r.service_date) or date.min)


def _gap_text(rule: SubsystemRule, elapsed: float, remaining: float, unit: str) -> str:
    if elapsed > rule.interval:
        return rule.overdue_text
    return rule.due_text.format(remaining=remaining, unit=unit)


def score_distance_subsystem(
    rule: SubsystemRule,
    records: List[ServiceRecord],
    current_miles: float,
    unit: str = "miles",
) -> ComponentHealth:
    """Score a subsystem serviced on a distance interval."""
    matching = matching_services(records, rule.keywords)
    last = find_last_service(matching, rule.keywords)
    last_miles = last.odometer if last is not None else None

    if last_miles is not None:
        elapsed = current_miles - last_miles
    else:
        logger.debug("No %s service with odometer on record; assuming due", rule.name)
        elapsed = rule.interval

    raw = clamp_score(interval_score(elapsed, rule.interval))
    recommendations = [_gap_text(rule, elapsed, rule.interval - elapsed, unit)]
    recommendations.extend(advice.format(unit=unit) for advice in rule.advice)

    return ComponentHealth(
        name=rule.name,
        score=round_score(raw),
        status=classify_score(raw),
        last_service_date=iso_date(last.service_date) if last is not None else None,
        last_service_miles=last_miles,
        next_service_miles=calc_next_service_miles(
            last_miles, rule.interval, current_miles
        ),
        recommendations=tuple(recommendations),
        service_count=len(matching),
    )


def score_time_subsystem(
    rule: SubsystemRule,
    records: List[ServiceRecord],
    current_date: date,
    unit: str = "miles",
) -> ComponentHealth:
    """Score a subsystem serviced on a month interval."""
    matching = matching_services(records, rule.keywords)
    last = find_last_service(matching, rule.keywords)
    last_date = parse_date(last.service_date) if last is not None else None

    if last_date is not None:
        elapsed = months_between(last_date, current_date)
    else:
        logger.debug("No dated %s service on record; assuming due", rule.name)
        elapsed = rule.interval

    raw = clamp_score(interval_score(elapsed, rule.interval))
    remaining = round_score(rule.interval - elapsed)
    recommendations = [_gap_text(rule, elapsed, remaining, unit)]
    recommendations.extend(advice.format(unit=unit) for advice in rule.advice)

    return ComponentHealth(
        name=rule.name,
        score=round_score(raw),
        status=classify_score(raw),
        last_service_date=iso_date(last.service_date) if last is not None else None,
        last_service_miles=last.odometer if last is not None else None,
        next_service_date=calc_next_service_date(
            last_date, rule.interval, current_date
        ).isoformat(),
        recommendations=tuple(recommendations),
        service_count=len(matching),
    )


def score_fuel_system(
    rule: SubsystemRule,
    fuel: Optional[FuelEconomy],
    vehicle: Vehicle,
    current_date: date,
    config: EngineConfig,
) -> ComponentHealth:
    """
    Score the fuel system from fuel economy aggregates.

    The mean efficiency is compared with an age-based baseline, then a
    consistency bonus (smaller spread over the recent window, bigger
    bonus) is added and the total capped at 100.
    """
    expected = expected_efficiency(
        vehicle.age_years(current_date),
        base=config.baseline_efficiency,
        per_year=config.baseline_decline_per_year,
        floor=config.baseline_floor,
    )
    mean = fuel.mean_efficiency if fuel is not None else None

    if mean is not None and mean > 0:
        ratio = mean / expected * 100
        base_score = min(100.0, ratio)
    else:
        ratio = None
        base_score = config.neutral_fuel_score

    bonus = 0.0
    recent = fuel.recent(config.recent_window) if fuel is not None else []
    if fuel is not None:
        spread = fuel.consistency(
            config.recent_window, config.consistency_min_samples
        )
        if spread is not None:
            bonus = max(0.0, config.consistency_bonus_max - spread)

    raw = clamp_score(base_score + bonus)
    recommendations = (
        f"Current avg efficiency: {mean:.1f}" if ratio is not None
        else "Current avg efficiency: N/A",
        f"Expected efficiency: {expected:.1f}",
        f"Fill-ups analyzed: {len(recent)}",
        f"Efficiency: {ratio:.0f}%" if ratio is not None else "Efficiency: N/A",
    )

    return ComponentHealth(
        name=rule.name,
        score=round_score(raw),
        status=classify_score(raw),
        last_service_date=iso_date(recent[0].record.fill_date) if recent else None,
        recommendations=recommendations,
        service_count=len(recent),
        continuous=True,
    )


def score_subsystems(
    vehicle: Vehicle,
    service_records: List[ServiceRecord],
    fuel: Optional[FuelEconomy],
    current_date: date,
    config: EngineConfig,
) -> List[ComponentHealth]:
    """Score every configured subsystem, in configured order."""
    current_miles = vehicle.current_distance
    unit = vehicle.odometer_unit
    results = []
    for rule in config.subsystems:
        if rule.basis == DISTANCE:
            results.append(
                score_distance_subsystem(rule, service_records, current_miles, unit)
            )
        elif rule.basis == TIME:
            results.append(
                score_time_subsystem(rule, service_records, current_date, unit)
            )
        elif rule.basis == FUEL:
            results.append(
                score_fuel_system(rule, fuel, vehicle, current_date, config)
            )
        else:
            raise ValueError(f"Unknown scoring basis '{rule.basis}' for {rule.name}")
    return results
