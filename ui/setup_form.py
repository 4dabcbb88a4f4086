"""
Setup Form UI Component

Collects the schedule and product lines that start a new tracking run.
"""

import streamlit as st
import logging
from typing import Optional

from config import Config
from core.forecasting.models import ProductDefinition, ScheduleConfig
from core.state.production_state import ProductionState

logger = logging.getLogger(__name__)


def render_setup_form() -> Optional[ProductionState]:
    """
    Render the run setup form.

    Returns:
        A fresh ProductionState when the form is submitted, otherwise None
    """
    st.header("⚙️ New Production Run")

    with st.form(key="setup_form"):
        st.markdown("**Schedule**")
        col1, col2, col3, col4 = st.columns(4)
        with col1:
            days_a = st.number_input("Shift 1 Days", min_value=0, value=Config.DEFAULT_DAYS_SHIFT1, step=1)
        with col2:
            hours_a = st.number_input("Shift 1 Hours/Day", min_value=0, value=Config.DEFAULT_HOURS_SHIFT1, step=1)
        with col3:
            days_b = st.number_input("Shift 2 Days", min_value=0, value=Config.DEFAULT_DAYS_SHIFT2, step=1)
        with col4:
            hours_b = st.number_input("Shift 2 Hours/Day", min_value=0, value=Config.DEFAULT_HOURS_SHIFT2, step=1)

        st.markdown("**Products**")
        products = []
        for index, (default_name, default_target) in enumerate(Config.DEFAULT_PRODUCTS, start=1):
            col1, col2 = st.columns([2, 1])
            with col1:
                name = st.text_input(f"Product {index}", value=default_name, key=f"setup_name_{index}")
            with col2:
                target = st.number_input("Planned Pace (/h)", min_value=0, value=default_target,
                                         step=1, key=f"setup_target_{index}")
            if name.strip():
                products.append(ProductDefinition(
                    product_id=str(index),
                    name=name.strip(),
                    planned_target_per_hour=target
                ))

        submitted = st.form_submit_button("Start Run", type="primary", use_container_width=True)

    if not submitted:
        return None

    schedule = ScheduleConfig(int(days_a), int(hours_a), int(days_b), int(hours_b))
    logger.info(
        f"Starting run: {schedule.total_planned_hours} planned hours, {len(products)} products"
    )
    return ProductionState(schedule=schedule, products=products)
