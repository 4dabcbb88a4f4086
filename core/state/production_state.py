"""
Production State

Everything one tracking run holds: the schedule, the products, the hourly log
and the data-entry cursor. Edit operations replace exactly one field and leave
the rest untouched.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, List, Mapping, Optional, Tuple

from core.forecasting.engine import forecast_production
from core.forecasting.models import (
    ForecastResult,
    ProductDefinition,
    ScheduleConfig,
    SHIFTS,
)
from core.forecasting.production_log import ProductionLog, validate_hourly_entry

logger = logging.getLogger(__name__)

SCHEDULE_DIMENSIONS = ("days_a", "hours_a", "days_b", "hours_b")

Slot = Tuple[int, int, int]


def next_slot(schedule: ScheduleConfig, day: int, shift: int, hour: int) -> Optional[Slot]:
    """
    Slot that follows (day, shift, hour) in data-entry order.

    Past the last hour of a shift the hour resets to 1: shift 1 moves on to
    shift 2 of the same day when that day has a shift 2, otherwise entry moves
    to shift 1 of the next day.

    Returns:
        (day, shift, hour), or None when the schedule has no such slot
    """
    next_day, next_shift, next_hour = day, shift, hour + 1

    if next_hour > schedule.hours_for_shift(shift):
        next_hour = 1
        if shift == 1 and day <= schedule.days_b:
            next_shift = 2
        else:
            next_shift = 1
            next_day = day + 1

    if next_day > schedule.days_for_shift(next_shift):
        return None
    return next_day, next_shift, next_hour


def _check_slot(day: int, shift: int, hour: int) -> None:
    if shift not in SHIFTS:
        raise ValueError(f"Invalid shift: {shift}. Must be one of {SHIFTS}")
    if day < 1 or hour < 1:
        raise ValueError(f"Day and hour are 1-based, got day={day}, hour={hour}")


@dataclass
class ProductionState:
    """
    Mutable state of a tracking run.

    The schedule and product definitions are immutable values; edits swap in
    a new value for the one field being changed.
    """
    schedule: ScheduleConfig
    products: List[ProductDefinition] = field(default_factory=list)
    log: ProductionLog = field(default_factory=ProductionLog)
    selected_day: int = 1
    selected_shift: int = 1
    selected_hour: int = 1

    def __post_init__(self):
        ids = [p.product_id for p in self.products]
        duplicates = sorted({pid for pid in ids if ids.count(pid) > 1})
        if duplicates:
            raise ValueError(f"Duplicate product ids: {duplicates}")
        _check_slot(self.selected_day, self.selected_shift, self.selected_hour)

    @property
    def product_ids(self) -> List[str]:
        return [p.product_id for p in self.products]

    @property
    def selection(self) -> Slot:
        return self.selected_day, self.selected_shift, self.selected_hour

    def get_product(self, product_id: str) -> ProductDefinition:
        for product in self.products:
            if product.product_id == product_id:
                return product
        raise KeyError(f"Unknown product: '{product_id}'")

    # ------------------------------------------------------------------
    # Edit operations
    # ------------------------------------------------------------------

    def _replace_product(self, product_id: str, **changes) -> ProductDefinition:
        current = self.get_product(product_id)
        updated = replace(current, **changes)
        self.products = [updated if p.product_id == product_id else p for p in self.products]
        logger.info(f"Updated product '{product_id}': {changes}")
        return updated

    def set_planned_target(self, product_id: str, planned_target_per_hour: float) -> ProductDefinition:
        return self._replace_product(product_id, planned_target_per_hour=planned_target_per_hour)

    def set_manual_demand(self, product_id: str, manual_total_demand: Optional[float]) -> ProductDefinition:
        """Set the demand override; None restores the schedule-derived demand"""
        return self._replace_product(product_id, manual_total_demand=manual_total_demand)

    def set_extra_production(self, product_id: str, extra_production: float) -> ProductDefinition:
        return self._replace_product(product_id, extra_production=extra_production)

    def set_schedule_dimension(self, dimension: str, value: int) -> ScheduleConfig:
        """
        Replace one schedule dimension ('days_a', 'hours_a', 'days_b', 'hours_b').

        Hours already logged outside the new bounds are kept; they still count
        as elapsed hours.
        """
        if dimension not in SCHEDULE_DIMENSIONS:
            raise KeyError(
                f"Unknown schedule dimension: '{dimension}'. "
                f"Valid options: {SCHEDULE_DIMENSIONS}"
            )
        self.schedule = replace(self.schedule, **{dimension: value})
        logger.info(
            f"Schedule {dimension} set to {value} "
            f"(planned hours: {self.schedule.total_planned_hours})"
        )
        return self.schedule

    # ------------------------------------------------------------------
    # Data entry
    # ------------------------------------------------------------------

    def log_hour(self, day: int, shift: int, hour: int, raw: Mapping[str, Any]) -> None:
        """
        Validate operator input and upsert the whole hour.

        Raises:
            InvalidEntryError: If any quantity is missing, non-numeric or negative
            ValueError: If the slot is outside the schedule
        """
        quantities = validate_hourly_entry(raw, self.product_ids)
        if not self.schedule.contains_slot(day, shift, hour):
            logger.warning(f"Rejected entry for D{day}-T{shift}-H{hour}: outside the schedule")
            raise ValueError(
                f"Slot day={day}, shift={shift}, hour={hour} is outside the schedule"
            )
        self.log.record_hour(day, shift, hour, quantities)
        logger.info(f"Logged D{day}-T{shift}-H{hour}: {quantities}")

    def select(self, day: int, shift: int, hour: int) -> None:
        _check_slot(day, shift, hour)
        self.selected_day, self.selected_shift, self.selected_hour = day, shift, hour

    def advance_selection(self) -> bool:
        """Move the cursor to the next slot; returns False at the end of the schedule"""
        following = next_slot(self.schedule, *self.selection)
        if following is None:
            return False
        self.select(*following)
        return True

    def submit_hour(self, raw: Mapping[str, Any]) -> bool:
        """Log the selected hour, then advance the cursor"""
        self.log_hour(self.selected_day, self.selected_shift, self.selected_hour, raw)
        return self.advance_selection()

    def entry_defaults(self) -> dict:
        """Previously logged values for the selected hour, as text for input widgets"""
        logged = self.log.get_hour(*self.selection)
        if logged is None:
            return {pid: "" for pid in self.product_ids}
        return {pid: str(logged[pid]) if pid in logged else "" for pid in self.product_ids}

    def forecast(self) -> ForecastResult:
        return forecast_production(self.schedule, self.products, self.log)
