"""
Metrics Display Functions

UI components for the executive view, the hourly history and the report.
"""

import streamlit as st
import pandas as pd
import logging
from typing import Dict, Sequence

from core.forecasting.models import AlertStatus, ForecastResult, ProductDefinition, ProductMetrics
from core.forecasting.summary import PlantSummary
from ui.charts import (
    build_efficiency_figure,
    build_pace_figure,
    build_trend_figure,
    build_volume_figure,
)
from utils.formatting import (
    build_report_frame,
    completion_percent,
    format_hours_gap,
    format_quantity,
    format_rate,
    frame_to_csv,
)

logger = logging.getLogger(__name__)

STATUS_ICONS = {
    AlertStatus.OK: "🟢",
    AlertStatus.WARNING: "🟡",
    AlertStatus.CRITICAL: "🔴",
}


def render_kpi_cards(summary: PlantSummary):
    """
    Display plant-wide KPIs in four columns.

    Shows overall status, hours left in the schedule, demand progress and
    total completed output.
    """
    col1, col2, col3, col4 = st.columns(4)

    with col1:
        if summary.overall_status == AlertStatus.CRITICAL:
            st.error(f"**Overall Status:** Critical ({summary.critical_count})")
        else:
            st.success("**Overall Status:** Stable")
        st.metric("Health Score", f"{summary.health_score:.0f}%")

    with col2:
        st.metric("Hours Remaining", f"{summary.remaining_hours}h")
        st.caption(f"{summary.elapsed_progress_percent:.1f}% of planned hours logged")

    with col3:
        st.metric("Demand Progress", f"{summary.global_progress_percent:.1f}%")
        st.caption(f"Avg smoothed pace: {summary.average_ses:.1f}/h")

    with col4:
        st.metric("Completed", format_quantity(summary.total_completed))
        st.caption(f"of {format_quantity(summary.total_demand)} demanded")


def render_alert_list(metrics: Sequence[ProductMetrics]):
    """List products whose required pace exceeds the planned pace"""
    alerting = [m for m in metrics if m.is_alerting]

    if not alerting:
        st.success("✅ All products on planned pace")
        return

    st.warning(f"⚠️ **{len(alerting)} product(s) need attention:**")
    for m in sorted(alerting, key=lambda x: x.status != AlertStatus.CRITICAL):
        st.text(
            f"  {STATUS_ICONS[m.status]} {m.name}: needs {format_rate(m.required_target_per_hour)} "
            f"vs planned {format_rate(m.planned_target)} (gap {format_hours_gap(m)})"
        )


def render_product_card(metric: ProductMetrics):
    """One row of per-product monitoring metrics"""
    st.markdown(f"**{STATUS_ICONS[metric.status]} {metric.name}**"
                + (" · manual demand" if metric.is_manual_demand else ""))

    col1, col2, col3, col4, col5 = st.columns(5)
    with col1:
        st.metric("Completed", format_quantity(metric.completed),
                  delta=f"+{format_quantity(metric.extra_completed)} extra" if metric.extra_completed else None,
                  delta_color="off")
    with col2:
        st.metric("Remaining", format_quantity(metric.remaining))
    with col3:
        st.metric("Required Pace", format_rate(metric.required_target_per_hour))
    with col4:
        st.metric("Smoothed Pace", format_rate(metric.ses_rate))
    with col5:
        st.metric("Hours Gap", format_hours_gap(metric))

    st.progress(min(1.0, completion_percent(metric) / 100))


def render_executive_view(result: ForecastResult, summary: PlantSummary):
    """
    Executive dashboard: KPIs, alerts, per-product pace trend and the
    volume / pace comparison charts.
    """
    render_kpi_cards(summary)
    st.divider()
    render_alert_list(result.metrics)

    if not result.metrics:
        st.info("No products configured")
        return

    st.divider()
    st.subheader("📈 Pace Trend")
    names = [m.name for m in result.metrics]
    selected_name = st.selectbox("Product", names, key="trend_product")

    if result.trend:
        st.plotly_chart(build_trend_figure(result, selected_name), use_container_width=True)
    else:
        st.info("No hours logged yet")

    col1, col2 = st.columns(2)
    with col1:
        st.markdown("**Volume**")
        st.plotly_chart(build_volume_figure(result.metrics), use_container_width=True)
    with col2:
        st.markdown("**Smoothed vs Required Pace**")
        st.plotly_chart(build_pace_figure(result.metrics), use_container_width=True)


def render_history_view(
    history_df: pd.DataFrame,
    idle_hours: Dict[str, int],
    products: Sequence[ProductDefinition]
):
    """Hourly history: idle-hour counts, efficiency chart and the raw table"""
    st.subheader("⏸️ Idle Hours (zero output)")
    if products:
        columns = st.columns(len(products))
        for column, product in zip(columns, products):
            with column:
                st.metric(product.name, f"{idle_hours.get(product.product_id, 0)}h")

    if history_df.empty:
        st.info("No hours logged yet")
        return

    st.subheader("📊 Efficiency vs Planned Pace")
    st.plotly_chart(build_efficiency_figure(history_df, products), use_container_width=True)

    with st.expander("📋 Hourly Log", expanded=False):
        st.dataframe(history_df, use_container_width=True, hide_index=True)


def render_report(result: ForecastResult, summary: PlantSummary, file_name: str):
    """Production report table with CSV download"""
    st.subheader("🧾 Production Report")

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("OK", summary.ok_count)
    with col2:
        st.metric("Warning", summary.warning_count)
    with col3:
        st.metric("Critical", summary.critical_count)

    report_df = build_report_frame(result)
    st.dataframe(report_df, use_container_width=True, hide_index=True)

    st.download_button(
        label="📥 Download Report (CSV)",
        data=frame_to_csv(report_df),
        file_name=file_name,
        mime="text/csv"
    )
