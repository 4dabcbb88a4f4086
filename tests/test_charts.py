from core.forecasting.engine import forecast_production
from core.forecasting.sequencer import flatten_production_log
from core.forecasting.summary import build_hourly_history
from ui.charts import (
    build_efficiency_figure,
    build_pace_figure,
    build_trend_figure,
    build_volume_figure,
)


def test_trend_figure_has_three_series(schedule, products, sparse_log):
    result = forecast_production(schedule, products, sparse_log)

    fig = build_trend_figure(result, "Beta")

    assert [trace.name for trace in fig.data] == ["SES", "Meta", "Avg"]
    assert list(fig.data[0].x) == ["H1", "H2", "H3", "H4"]
    assert fig.data[0].y[0] == 5.0


def test_bar_figures_one_bar_per_product(schedule, products, sparse_log):
    result = forecast_production(schedule, products, sparse_log)

    volume = build_volume_figure(result.metrics)
    pace = build_pace_figure(result.metrics)

    assert [trace.name for trace in volume.data] == ["Completed", "Remaining"]
    assert list(volume.data[0].x) == ["Alpha", "Beta"]
    assert list(volume.data[0].y) == [37, 11]
    assert [trace.name for trace in pace.data] == ["Smoothed Pace", "Required Pace"]


def test_efficiency_figure(products, sparse_log):
    events = flatten_production_log(sparse_log, [p.product_id for p in products])

    fig = build_efficiency_figure(build_hourly_history(events, products), products)

    assert [trace.name for trace in fig.data] == ["Alpha", "Beta"]
    assert list(fig.data[1].y) == [100.0, 80.0, 0.0, 40.0]


def test_efficiency_figure_empty_history(products):
    fig = build_efficiency_figure(build_hourly_history([], products), products)

    assert len(fig.data) == 0
