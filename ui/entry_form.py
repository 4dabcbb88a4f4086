"""
Data Entry UI Component

Hourly entry grid for the selected slot, product adjustments and schedule
edits. All writes go through ProductionState operations.
"""

import streamlit as st
import logging

from core.errors import InvalidEntryError
from core.forecasting.models import ForecastResult
from core.state.production_state import ProductionState, SCHEDULE_DIMENSIONS
from ui.log_display import ActivityLog
from ui.metrics_display import render_product_card
from utils.formatting import format_demand_input, parse_demand_input

logger = logging.getLogger(__name__)

DIMENSION_LABELS = {
    "days_a": "Shift 1 Days",
    "hours_a": "Shift 1 Hours/Day",
    "days_b": "Shift 2 Days",
    "hours_b": "Shift 2 Hours/Day",
}


SLOT_WIDGET_KEYS = ("entry_day", "entry_shift", "entry_hour")
SYNCED_SELECTION_KEY = "entry_synced_selection"


def _push_selection_to_widgets(state: ProductionState):
    """
    Copy the cursor into the selector widgets when it moved outside them
    (submit, import, reset) or the widgets were cleared. Keyed widgets ignore
    `value=` once they hold a session value, so the cursor is written through
    session state before the widgets render.
    """
    widgets_present = all(key in st.session_state for key in SLOT_WIDGET_KEYS)
    if widgets_present and st.session_state.get(SYNCED_SELECTION_KEY) == state.selection:
        return
    for key, value in zip(SLOT_WIDGET_KEYS, state.selection):
        st.session_state[key] = value
    st.session_state[SYNCED_SELECTION_KEY] = state.selection


def render_slot_selector(state: ProductionState):
    """Day / shift / hour pickers bound to the state's cursor"""
    _push_selection_to_widgets(state)
    col1, col2, col3 = st.columns(3)

    with col1:
        shift = st.radio("Shift", options=[1, 2], horizontal=True, key="entry_shift")
    max_day = max(1, state.schedule.days_for_shift(shift))
    max_hour = max(1, state.schedule.hours_for_shift(shift))
    # Bounds follow the chosen shift
    st.session_state["entry_day"] = min(st.session_state["entry_day"], max_day)
    st.session_state["entry_hour"] = min(st.session_state["entry_hour"], max_hour)
    with col2:
        day = st.number_input("Day", min_value=1, max_value=max_day, step=1, key="entry_day")
    with col3:
        hour = st.number_input("Hour", min_value=1, max_value=max_hour, step=1, key="entry_hour")

    if (int(day), shift, int(hour)) != state.selection:
        state.select(int(day), shift, int(hour))
    st.session_state[SYNCED_SELECTION_KEY] = state.selection


def render_entry_form(state: ProductionState, activity_log: ActivityLog):
    """
    Render the hourly entry grid for the selected slot.

    Submitting replaces the whole hour and advances the cursor to the next
    slot in the schedule.
    """
    st.subheader("⌨️ Hourly Entry")

    if state.schedule.total_planned_hours == 0:
        st.warning("The schedule has no planned hours. Adjust it below before logging.")
        return

    render_slot_selector(state)
    day, shift, hour = state.selection
    defaults = state.entry_defaults()

    if state.log.is_logged(day, shift, hour):
        st.caption(f"D{day}-T{shift}-H{hour} already logged; submitting replaces it.")

    with st.form(key=f"entry_form_{day}_{shift}_{hour}"):
        columns = st.columns(max(1, len(state.products)))
        raw = {}
        for column, product in zip(columns, state.products):
            with column:
                raw[product.product_id] = st.text_input(
                    product.name,
                    value=defaults[product.product_id],
                    key=f"entry_{product.product_id}_{day}_{shift}_{hour}"
                )
        submitted = st.form_submit_button("Log Hour", type="primary", use_container_width=True)

    if submitted:
        try:
            advanced = state.submit_hour(raw)
        except InvalidEntryError as e:
            st.error(f"❌ Invalid values for: {', '.join(e.invalid)}")
            activity_log.add_error(str(e))
            return
        except ValueError as e:
            st.error(f"❌ {e}")
            activity_log.add_error(str(e))
            return

        activity_log.add_success(f"Logged D{day}-T{shift}-H{hour}")
        if not advanced:
            activity_log.add_info("Reached the last slot of the schedule")
        st.rerun()


def render_adjustments(state: ProductionState, result: ForecastResult, activity_log: ActivityLog):
    """Per-product monitoring cards with target, demand and extra output edits"""
    st.subheader("🎯 Product Monitoring")

    for product in state.products:
        render_product_card(result.metrics_for(product.product_id))

        # Keys carry the stored values so an import or reset re-seeds the widgets
        with st.expander(f"Adjust {product.name}", expanded=False):
            col1, col2, col3 = st.columns(3)
            with col1:
                target = st.number_input(
                    "Planned Pace (/h)", min_value=0.0,
                    value=float(product.planned_target_per_hour), step=1.0,
                    key=f"target_{product.product_id}_{product.planned_target_per_hour}"
                )
            with col2:
                demand_text = st.text_input(
                    "Manual Total Demand (blank = planned)",
                    value=format_demand_input(product.manual_total_demand),
                    key=f"demand_{product.product_id}_{product.manual_total_demand}"
                )
            with col3:
                extra = st.number_input(
                    "Extra Production", min_value=0,
                    value=int(product.extra_production), step=1,
                    key=f"extra_{product.product_id}_{product.extra_production}"
                )

            if st.button("Save", key=f"save_{product.product_id}"):
                try:
                    manual = parse_demand_input(demand_text)
                except ValueError:
                    st.error("❌ Manual demand must be a non-negative number")
                    return
                if target != product.planned_target_per_hour:
                    state.set_planned_target(product.product_id, target)
                if manual != product.manual_total_demand:
                    state.set_manual_demand(product.product_id, manual)
                if extra != product.extra_production:
                    state.set_extra_production(product.product_id, extra)
                activity_log.add_info(f"Adjusted {product.name}")
                st.rerun()
        st.divider()


def render_schedule_editor(state: ProductionState, activity_log: ActivityLog):
    """Edit one schedule dimension at a time"""
    with st.expander("🗓️ Schedule", expanded=False):
        st.caption(f"Planned hours: {state.schedule.total_planned_hours}")
        columns = st.columns(len(SCHEDULE_DIMENSIONS))
        for column, dimension in zip(columns, SCHEDULE_DIMENSIONS):
            current = getattr(state.schedule, dimension)
            with column:
                value = st.number_input(
                    DIMENSION_LABELS[dimension], min_value=0,
                    value=current, step=1, key=f"schedule_{dimension}_{current}"
                )
            if value != current:
                state.set_schedule_dimension(dimension, int(value))
                activity_log.add_info(f"{DIMENSION_LABELS[dimension]} set to {int(value)}")
                st.rerun()
