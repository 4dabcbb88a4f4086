"""
Formatting Utilities

Display helpers for the dashboard and the downloadable production report.
"""

import io
import logging
import math
from datetime import datetime
from typing import Optional

import pandas as pd
import pytz

from core.forecasting.models import ForecastResult, ProductMetrics, ProjectionState

logger = logging.getLogger(__name__)


def format_quantity(value: float) -> str:
    """Thousands-separated whole units (1234.6 -> '1,235')"""
    return f"{value:,.0f}"


def format_rate(value: float) -> str:
    """Units per hour with one decimal"""
    return f"{value:.1f}/h"


def format_hours_gap(metric: ProductMetrics) -> str:
    """
    Describe how late a product will finish at its current pace.

    Returns:
        'INFEASIBLE' when the pace is zero with work left, '+<gap>h' when late,
        'ON TRACK' otherwise
    """
    if metric.projection_state == ProjectionState.INFEASIBLE:
        return "INFEASIBLE"
    if metric.estimated_hours_gap > 0:
        return f"+{metric.estimated_hours_gap:.1f}h"
    return "ON TRACK"


def format_demand_input(value: Optional[float]) -> str:
    """Text for the manual-demand box: blank for none, no exponent notation"""
    if value is None:
        return ""
    if float(value).is_integer():
        return f"{value:.0f}"
    return str(value)


def parse_demand_input(text: str) -> Optional[float]:
    """
    Parse the manual-demand box.

    Returns:
        None for a blank box, otherwise the demand (int when whole)

    Raises:
        ValueError: If the text is not a finite non-negative number
    """
    text = text.strip()
    if not text:
        return None
    value = float(text)
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"Manual demand must be a finite non-negative number, got {text!r}")
    return int(value) if value.is_integer() else value


def completion_percent(metric: ProductMetrics) -> float:
    """Completed share of demand in percent, 0 when demand is 0"""
    if metric.total_demand <= 0:
        return 0.0
    return (metric.completed / metric.total_demand) * 100


def build_report_frame(result: ForecastResult) -> pd.DataFrame:
    """
    Report table with one row per product and human-readable columns.

    Args:
        result: Forecast to report on

    Returns:
        DataFrame ready for display or CSV export
    """
    rows = []
    for m in result.metrics:
        rows.append({
            'Product': m.name,
            'Status': m.status.value,
            'Total Demand': m.total_demand,
            'Manual Demand': m.is_manual_demand,
            'Completed': m.completed,
            'Extra Production': m.extra_completed,
            'Remaining': m.remaining,
            'Completion (%)': round(completion_percent(m), 1),
            'Planned Pace (/h)': m.planned_target,
            'Required Pace (/h)': round(m.required_target_per_hour, 1),
            'Smoothed Pace (/h)': round(m.ses_rate, 1),
            'Average Pace (/h)': round(m.avg_per_hour, 1),
            'Hours Gap': format_hours_gap(m),
            'Viable': m.is_viable,
            'Projected Final Output': round(m.estimated_final_output, 1),
        })
    return pd.DataFrame(rows)


def frame_to_csv(df: pd.DataFrame) -> str:
    """Serialize a DataFrame to CSV text"""
    csv_buffer = io.StringIO()
    df.to_csv(csv_buffer, index=False)
    return csv_buffer.getvalue()


def report_filename(prefix: str, timezone: str, now: Optional[datetime] = None) -> str:
    """
    Report file name stamped with the current date in `timezone`.

    Args:
        prefix: File name prefix
        timezone: pytz timezone name
        now: Optional aware or naive (UTC) datetime, defaults to current time

    Returns:
        '<prefix>_<YYYY-MM-DD>.csv'
    """
    tz = pytz.timezone(timezone)
    if now is None:
        now = datetime.now(pytz.UTC)
    elif now.tzinfo is None:
        now = pytz.UTC.localize(now)
    local_date = now.astimezone(tz).strftime("%Y-%m-%d")
    return f"{prefix}_{local_date}.csv"
