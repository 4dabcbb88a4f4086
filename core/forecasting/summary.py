"""
Plant Summary and Hourly History

Aggregates over the engine output for dashboard cards and the report, plus the
per-hour history table (output, efficiency against planned pace, idle hours).
"""

import logging
from dataclasses import dataclass
from typing import Dict, Sequence

import pandas as pd

from .engine import round_one_decimal
from .models import AlertStatus, ForecastResult, ProductDefinition, ProductionEvent

logger = logging.getLogger(__name__)


@dataclass
class PlantSummary:
    """Plant-wide KPIs derived from one forecast"""
    ok_count: int
    warning_count: int
    critical_count: int
    health_score: float
    total_demand: float
    total_completed: float
    global_progress_percent: float
    elapsed_progress_percent: float
    average_ses: float
    logged_hours: int
    remaining_hours: int

    @property
    def overall_status(self) -> AlertStatus:
        return AlertStatus.CRITICAL if self.critical_count > 0 else AlertStatus.OK

    def to_dict(self) -> Dict[str, object]:
        return {
            'ok_count': self.ok_count,
            'warning_count': self.warning_count,
            'critical_count': self.critical_count,
            'health_score': self.health_score,
            'total_demand': self.total_demand,
            'total_completed': self.total_completed,
            'global_progress_percent': self.global_progress_percent,
            'elapsed_progress_percent': self.elapsed_progress_percent,
            'average_ses': self.average_ses,
            'logged_hours': self.logged_hours,
            'remaining_hours': self.remaining_hours,
            'overall_status': self.overall_status.value,
        }


def summarize_plant(result: ForecastResult) -> PlantSummary:
    """
    Aggregate product metrics into plant-wide KPIs.

    - health_score: 100 minus an equal share per critical product
    - global_progress_percent: completed / demand (0 when demand is 0)
    - elapsed_progress_percent: logged hours / planned hours (0 when nothing is planned)
    - average_ses: mean smoothed pace across products
    """
    metrics = result.metrics
    product_count = len(metrics)

    ok_count = sum(1 for m in metrics if m.status == AlertStatus.OK)
    warning_count = sum(1 for m in metrics if m.status == AlertStatus.WARNING)
    critical_count = sum(1 for m in metrics if m.status == AlertStatus.CRITICAL)

    total_demand = sum(m.total_demand for m in metrics)
    total_completed = sum(m.completed for m in metrics)

    if total_demand > 0:
        global_progress = (total_completed / total_demand) * 100
    else:
        global_progress = 0.0

    if result.total_planned_hours > 0:
        elapsed_progress = (result.logged_hours / result.total_planned_hours) * 100
    else:
        elapsed_progress = 0.0

    return PlantSummary(
        ok_count=ok_count,
        warning_count=warning_count,
        critical_count=critical_count,
        health_score=100 - critical_count * (100 / max(1, product_count)),
        total_demand=total_demand,
        total_completed=total_completed,
        global_progress_percent=global_progress,
        elapsed_progress_percent=elapsed_progress,
        average_ses=sum(m.ses_rate for m in metrics) / max(1, product_count),
        logged_hours=result.logged_hours,
        remaining_hours=result.remaining_hours
    )


def efficiency_percent(quantity: float, planned_target: float) -> float:
    """Output as a percentage of planned pace (target floored at 1)"""
    return round_one_decimal((quantity / max(1, planned_target)) * 100)


def build_hourly_history(
    events: Sequence[ProductionEvent],
    products: Sequence[ProductDefinition]
) -> pd.DataFrame:
    """
    One row per logged hour with output and efficiency per product.

    Columns: elapsed_index, day, shift, hour, time_label, then for each product
    '<name>' (quantity) and '<name> %' (efficiency against planned pace).
    """
    columns = ['elapsed_index', 'day', 'shift', 'hour', 'time_label']
    for product in products:
        columns.extend([product.name, f"{product.name} %"])

    rows = []
    for event in events:
        row = {
            'elapsed_index': event.elapsed_index,
            'day': event.day,
            'shift': event.shift,
            'hour': event.hour,
            'time_label': event.slot_label,
        }
        for product in products:
            quantity = event.quantity(product.product_id)
            row[product.name] = quantity
            row[f"{product.name} %"] = efficiency_percent(quantity, product.planned_target_per_hour)
        rows.append(row)

    return pd.DataFrame(rows, columns=columns)


def count_idle_hours(
    events: Sequence[ProductionEvent],
    products: Sequence[ProductDefinition]
) -> Dict[str, int]:
    """Number of logged hours with zero output, per product id"""
    idle = {
        product.product_id: sum(1 for e in events if e.quantity(product.product_id) == 0)
        for product in products
    }
    if any(idle.values()):
        logger.info(f"Idle hours per product: {idle}")
    return idle
