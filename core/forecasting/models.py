"""
Production Forecasting Models

Schedule, product and derived metric containers used by the sequencer and the
forecasting engine:
- ScheduleConfig: days and hours per day for the two shifts
- ProductDefinition: one tracked product line and its planned pace
- ProductionEvent: one logged hour in plant-wide chronological order
- TrendPoint / ProductMetrics / ForecastResult: engine output
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

import pandas as pd

SHIFTS = (1, 2)


class AlertStatus(str, Enum):
    """Pace classification of a product against its planned target."""
    OK = "OK"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


class ProjectionState(str, Enum):
    """Outcome of projecting the hours a product still needs."""
    FINITE = "finite"                  # remaining / projection rate
    INFEASIBLE = "infeasible"          # work remains but the pace is zero
    NOT_APPLICABLE = "not_applicable"  # nothing left to produce


@dataclass(frozen=True)
class ScheduleConfig:
    """
    Planned schedule for a run.

    Shift 1 runs `days_a` days of `hours_a` hours, shift 2 runs `days_b` days
    of `hours_b` hours. The total drives every pace projection.
    """
    days_a: int
    hours_a: int
    days_b: int = 0
    hours_b: int = 0

    def __post_init__(self):
        """Validate schedule dimensions"""
        for name in ("days_a", "hours_a", "days_b", "hours_b"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    @property
    def total_planned_hours(self) -> int:
        """Plant hours available across both shifts"""
        return self.days_a * self.hours_a + self.days_b * self.hours_b

    def days_for_shift(self, shift: int) -> int:
        return self.days_a if shift == 1 else self.days_b

    def hours_for_shift(self, shift: int) -> int:
        return self.hours_a if shift == 1 else self.hours_b

    def contains_slot(self, day: int, shift: int, hour: int) -> bool:
        """Check if (day, shift, hour) is inside the planned schedule"""
        if shift not in SHIFTS:
            return False
        return 1 <= day <= self.days_for_shift(shift) and 1 <= hour <= self.hours_for_shift(shift)


@dataclass(frozen=True)
class ProductDefinition:
    """A tracked product line."""
    product_id: str
    name: str
    planned_target_per_hour: float
    manual_total_demand: Optional[float] = None
    extra_production: float = 0

    def __post_init__(self):
        """Validate pace, demand and extra output"""
        for label, value in (
            ("Planned target", self.planned_target_per_hour),
            ("Manual demand", self.manual_total_demand),
            ("Extra production", self.extra_production),
        ):
            if value is None:
                continue
            # NaN passes a plain `< 0` check
            if not math.isfinite(value) or value < 0:
                raise ValueError(
                    f"{label} for '{self.name}' must be a finite non-negative number, got {value}"
                )

    @property
    def is_manual_demand(self) -> bool:
        return self.manual_total_demand is not None

    def total_demand(self, total_planned_hours: int) -> float:
        """Manual override if present, otherwise planned hours x planned pace"""
        if self.manual_total_demand is not None:
            return self.manual_total_demand
        return total_planned_hours * self.planned_target_per_hour


@dataclass(frozen=True)
class ProductionEvent:
    """One logged hour, ranked in plant-wide chronological order."""
    day: int
    shift: int
    hour: int
    elapsed_index: int
    quantities: Dict[str, int] = field(default_factory=dict)

    @property
    def slot_label(self) -> str:
        return f"D{self.day}-T{self.shift}-H{self.hour}"

    def quantity(self, product_id: str) -> int:
        return self.quantities.get(product_id, 0)


@dataclass
class TrendPoint:
    """Per-product pace values emitted for one elapsed hour (rounded to 0.1)."""
    elapsed_index: int
    ses: Dict[str, float] = field(default_factory=dict)
    required: Dict[str, float] = field(default_factory=dict)
    average: Dict[str, float] = field(default_factory=dict)

    @property
    def time_label(self) -> str:
        return f"H{self.elapsed_index}"

    def to_dict(self) -> Dict[str, object]:
        """Flatten to chart-friendly keys: '<name>_SES', '<name>_Meta', '<name>_Avg'"""
        row: Dict[str, object] = {'timeLabel': self.time_label}
        for name, value in self.ses.items():
            row[f"{name}_SES"] = value
            row[f"{name}_Meta"] = self.required[name]
            row[f"{name}_Avg"] = self.average[name]
        return row


@dataclass
class ProductMetrics:
    """Final status and forecast for one product"""
    product_id: str
    name: str
    total_demand: float
    completed: float
    extra_completed: float
    remaining: float
    required_target_per_hour: float
    planned_target: float
    status: AlertStatus
    is_manual_demand: bool
    avg_per_hour: float
    ses_rate: float
    hours_needed: float
    projection_state: ProjectionState
    estimated_hours_gap: float
    is_viable: bool
    estimated_final_output: float

    @property
    def is_alerting(self) -> bool:
        return self.status != AlertStatus.OK

    def to_dict(self) -> Dict[str, object]:
        """Convert to dictionary for tables and export"""
        return {
            'product_id': self.product_id,
            'name': self.name,
            'total_demand': self.total_demand,
            'completed': self.completed,
            'extra_completed': self.extra_completed,
            'remaining': self.remaining,
            'required_target_per_hour': self.required_target_per_hour,
            'planned_target': self.planned_target,
            'status': self.status.value,
            'is_manual_demand': self.is_manual_demand,
            'avg_per_hour': self.avg_per_hour,
            'ses_rate': self.ses_rate,
            'hours_needed': self.hours_needed,
            'projection_state': self.projection_state.value,
            'estimated_hours_gap': self.estimated_hours_gap,
            'is_viable': self.is_viable,
            'estimated_final_output': self.estimated_final_output,
        }


@dataclass
class ForecastResult:
    """Trend series plus metrics snapshot from one engine pass."""
    trend: List[TrendPoint]
    metrics: List[ProductMetrics]
    logged_hours: int
    total_planned_hours: int

    @property
    def remaining_hours(self) -> int:
        """Planned hours not yet logged (negative when logging overran the plan)"""
        return self.total_planned_hours - self.logged_hours

    def metrics_for(self, product_id: str) -> ProductMetrics:
        for metric in self.metrics:
            if metric.product_id == product_id:
                return metric
        raise KeyError(f"No metrics for product '{product_id}'")

    def trend_frame(self) -> pd.DataFrame:
        """Trend series as a DataFrame, one row per elapsed hour"""
        return pd.DataFrame([point.to_dict() for point in self.trend])

    def metrics_frame(self) -> pd.DataFrame:
        """Metrics snapshot as a DataFrame, one row per product"""
        return pd.DataFrame([metric.to_dict() for metric in self.metrics])
