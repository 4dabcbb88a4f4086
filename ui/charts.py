"""
Chart Builders

Plotly figures for the dashboard. Kept free of Streamlit so they can be built
and inspected outside the app.
"""

import logging
from typing import Sequence

import pandas as pd
import plotly.graph_objects as go

from core.forecasting.models import AlertStatus, ForecastResult, ProductDefinition, ProductMetrics

logger = logging.getLogger(__name__)

STATUS_COLORS = {
    AlertStatus.OK: '#28a745',        # Green
    AlertStatus.WARNING: '#ffc107',   # Yellow
    AlertStatus.CRITICAL: '#dc3545',  # Red
}

PRODUCT_COLORS = ['#3b82f6', '#10b981', '#f59e0b', '#ef4444', '#8b5cf6', '#ec4899', '#06b6d4']


def build_trend_figure(result: ForecastResult, product_name: str) -> go.Figure:
    """
    Smoothed pace, required pace and cumulative average for one product,
    one point per elapsed hour.
    """
    x_values = [point.time_label for point in result.trend]

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=x_values,
        y=[point.ses.get(product_name) for point in result.trend],
        name='SES',
        mode='lines+markers',
        line=dict(color='#3b82f6', width=3),
        hovertemplate='%{x}<br>%{y:.1f}/h smoothed<extra></extra>'
    ))
    fig.add_trace(go.Scatter(
        x=x_values,
        y=[point.required.get(product_name) for point in result.trend],
        name='Meta',
        mode='lines',
        line=dict(color='#dc3545', dash='dash'),
        hovertemplate='%{x}<br>%{y:.1f}/h required<extra></extra>'
    ))
    fig.add_trace(go.Scatter(
        x=x_values,
        y=[point.average.get(product_name) for point in result.trend],
        name='Avg',
        mode='lines',
        line=dict(color='#6c757d', dash='dot'),
        hovertemplate='%{x}<br>%{y:.1f}/h average<extra></extra>'
    ))

    fig.update_layout(
        title=f"{product_name}: pace trend",
        xaxis_title='Elapsed hour',
        yaxis_title='Units per hour',
        height=400,
        hovermode='x unified',
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1)
    )
    return fig


def build_volume_figure(metrics: Sequence[ProductMetrics]) -> go.Figure:
    """Stacked completed vs remaining units per product"""
    names = [m.name for m in metrics]

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=names,
        y=[m.completed for m in metrics],
        name='Completed',
        marker_color='#28a745',
        hovertemplate='%{x}<br>%{y:,.0f} completed<extra></extra>'
    ))
    fig.add_trace(go.Bar(
        x=names,
        y=[m.remaining for m in metrics],
        name='Remaining',
        marker_color='#6c757d',
        hovertemplate='%{x}<br>%{y:,.0f} remaining<extra></extra>'
    ))
    fig.update_layout(
        barmode='stack',
        yaxis_title='Units',
        height=350,
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1)
    )
    return fig


def build_pace_figure(metrics: Sequence[ProductMetrics]) -> go.Figure:
    """Smoothed pace next to required pace, bars colored by status"""
    names = [m.name for m in metrics]

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=names,
        y=[round(m.ses_rate, 1) for m in metrics],
        name='Smoothed Pace',
        marker_color=[STATUS_COLORS[m.status] for m in metrics],
    ))
    fig.add_trace(go.Bar(
        x=names,
        y=[round(m.required_target_per_hour, 1) for m in metrics],
        name='Required Pace',
        marker_color='#343a40',
    ))
    fig.update_layout(
        barmode='group',
        yaxis_title='Units per hour',
        height=350,
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1)
    )
    return fig


def build_efficiency_figure(
    history_df: pd.DataFrame,
    products: Sequence[ProductDefinition]
) -> go.Figure:
    """Per-hour efficiency against planned pace, one line per product"""
    fig = go.Figure()

    if history_df.empty:
        logger.debug("No hourly history to chart")
        return fig

    for i, product in enumerate(products):
        column = f"{product.name} %"
        if column not in history_df.columns:
            continue
        fig.add_trace(go.Scatter(
            x=history_df['time_label'],
            y=history_df[column],
            name=product.name,
            mode='lines+markers',
            line=dict(color=PRODUCT_COLORS[i % len(PRODUCT_COLORS)]),
        ))

    fig.add_hline(y=100, line_dash='dash', line_color='#6c757d')
    fig.update_layout(
        xaxis_title='Logged hour',
        yaxis_title='Efficiency (%)',
        height=400,
        hovermode='x unified',
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1)
    )
    return fig
