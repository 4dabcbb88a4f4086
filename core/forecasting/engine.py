"""
Production Forecasting Engine

Turns the ordered production events into:
- a running trend series: smoothed pace (SES), required pace and cumulative
  average per product for every elapsed hour
- a final metrics snapshot per product: demand, remaining, required pace,
  status, projected hours, viability and projected final output

Smoothed pace is a one-sided exponential moving average:
    ses_1 = q_1
    ses_i = ALPHA * q_i + (1 - ALPHA) * ses_(i-1)

Status classification against the planned pace:
- CRITICAL: required > planned * 1.5
- WARNING:  required > planned
- OK:       otherwise

Every zero denominator resolves to 0. The only exception is the hours needed
by a product with work left and a zero pace, reported as the 999-hour
infeasibility sentinel.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Sequence, Tuple

from .models import (
    AlertStatus,
    ForecastResult,
    ProductDefinition,
    ProductionEvent,
    ProductMetrics,
    ProjectionState,
    ScheduleConfig,
    TrendPoint,
)
from .production_log import ProductionLog
from .sequencer import flatten_production_log

logger = logging.getLogger(__name__)

SMOOTHING_ALPHA = 0.2
CRITICAL_PACE_MULTIPLIER = 1.5
INFEASIBLE_HOURS = 999.0


def round_one_decimal(value: float) -> float:
    """Round half away from zero on the exact binary value (0.25 -> 0.3)"""
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def smooth(previous: float, quantity: float, is_first: bool) -> float:
    """One step of the SES recurrence"""
    if is_first:
        return float(quantity)
    return SMOOTHING_ALPHA * quantity + (1 - SMOOTHING_ALPHA) * previous


def required_pace(remaining: float, remaining_hours: float) -> float:
    """Pace needed to finish `remaining` in `remaining_hours`, 0 when no hours are left"""
    if remaining_hours > 0:
        return remaining / remaining_hours
    return 0.0


def classify_status(required_target: float, planned_target: float) -> AlertStatus:
    """
    Classify required pace against planned pace.

    Examples:
        >>> classify_status(151, 100)
        <AlertStatus.CRITICAL: 'CRITICAL'>
        >>> classify_status(101, 100)
        <AlertStatus.WARNING: 'WARNING'>
        >>> classify_status(100, 100)
        <AlertStatus.OK: 'OK'>
    """
    if required_target > planned_target * CRITICAL_PACE_MULTIPLIER:
        return AlertStatus.CRITICAL
    if required_target > planned_target:
        return AlertStatus.WARNING
    return AlertStatus.OK


def project_hours_needed(remaining: float, projection_rate: float) -> Tuple[float, ProjectionState]:
    """
    Hours a product needs to clear its remaining demand at `projection_rate`.

    Returns:
        (hours_needed, state): 0 / NOT_APPLICABLE when nothing remains,
        999 / INFEASIBLE when work remains at a zero pace, otherwise
        remaining / rate / FINITE
    """
    if remaining <= 0:
        return 0.0, ProjectionState.NOT_APPLICABLE
    if projection_rate > 0:
        return remaining / projection_rate, ProjectionState.FINITE
    return INFEASIBLE_HOURS, ProjectionState.INFEASIBLE


def compute_forecast(
    schedule: ScheduleConfig,
    products: Sequence[ProductDefinition],
    events: Sequence[ProductionEvent]
) -> ForecastResult:
    """
    Run the trend pass over ordered events and build the final snapshot.

    Args:
        schedule: Planned schedule (denominator for all pace projections)
        products: Tracked products
        events: Events in chronological order, as from flatten_production_log

    Returns:
        ForecastResult with one trend point per event and one metrics record
        per product
    """
    total_planned_hours = schedule.total_planned_hours
    demands = {p.product_id: p.total_demand(total_planned_hours) for p in products}

    cumulative: Dict[str, float] = {p.product_id: 0.0 for p in products}
    ses: Dict[str, float] = {p.product_id: 0.0 for p in products}
    trend: List[TrendPoint] = []

    for elapsed, event in enumerate(events, start=1):
        remaining_hours = max(0, total_planned_hours - elapsed)
        point = TrendPoint(elapsed_index=elapsed)

        for product in products:
            pid = product.product_id
            quantity = event.quantity(pid)
            cumulative[pid] += quantity
            ses[pid] = smooth(ses[pid], quantity, is_first=(elapsed == 1))

            remaining = max(0.0, demands[pid] - (cumulative[pid] + product.extra_production))

            point.ses[product.name] = round_one_decimal(ses[pid])
            point.required[product.name] = round_one_decimal(required_pace(remaining, remaining_hours))
            point.average[product.name] = round_one_decimal(cumulative[pid] / elapsed)

        trend.append(point)

    logged_hours = len(events)
    remaining_hours = max(0, total_planned_hours - logged_hours)

    metrics = [
        _snapshot_metrics(
            product,
            demands[product.product_id],
            cumulative[product.product_id],
            ses[product.product_id],
            logged_hours,
            remaining_hours
        )
        for product in products
    ]

    alerting = sum(1 for m in metrics if m.is_alerting)
    logger.info(
        f"Forecast computed: {logged_hours}/{total_planned_hours} hours logged, "
        f"{len(metrics)} products, {alerting} alerting"
    )

    return ForecastResult(
        trend=trend,
        metrics=metrics,
        logged_hours=logged_hours,
        total_planned_hours=total_planned_hours
    )


def _snapshot_metrics(
    product: ProductDefinition,
    total_demand: float,
    logged_completed: float,
    ses_rate: float,
    logged_hours: int,
    remaining_hours: int
) -> ProductMetrics:
    completed = logged_completed + product.extra_production
    remaining = max(0.0, total_demand - completed)
    required_target = required_pace(remaining, remaining_hours)

    projection_rate = ses_rate if logged_hours > 0 else product.planned_target_per_hour
    hours_needed, projection_state = project_hours_needed(remaining, projection_rate)
    hours_gap = hours_needed - remaining_hours
    is_viable = projection_state != ProjectionState.INFEASIBLE and hours_gap <= 0

    status = classify_status(required_target, product.planned_target_per_hour)

    logger.debug(
        f"{product.name}: completed={completed}, remaining={remaining}, "
        f"required={required_target:.2f}/h, ses={ses_rate:.2f}/h, status={status.value}, "
        f"gap={hours_gap:.1f}h ({projection_state.value})"
    )

    return ProductMetrics(
        product_id=product.product_id,
        name=product.name,
        total_demand=total_demand,
        completed=completed,
        extra_completed=product.extra_production,
        remaining=remaining,
        required_target_per_hour=required_target,
        planned_target=product.planned_target_per_hour,
        status=status,
        is_manual_demand=product.is_manual_demand,
        avg_per_hour=completed / max(1, logged_hours),
        ses_rate=ses_rate,
        hours_needed=hours_needed,
        projection_state=projection_state,
        estimated_hours_gap=hours_gap,
        is_viable=is_viable,
        estimated_final_output=completed + projection_rate * remaining_hours
    )


def forecast_production(
    schedule: ScheduleConfig,
    products: Sequence[ProductDefinition],
    log: ProductionLog
) -> ForecastResult:
    """Flatten the log and run the forecast in one call"""
    events = flatten_production_log(log, [p.product_id for p in products])
    return compute_forecast(schedule, products, events)
