from datetime import datetime

import pytest
import pytz

from core.forecasting.engine import compute_forecast, forecast_production
from core.forecasting.models import ProductDefinition, ProductionEvent, ScheduleConfig
from utils.formatting import (
    build_report_frame,
    format_demand_input,
    format_hours_gap,
    format_quantity,
    frame_to_csv,
    parse_demand_input,
    report_filename,
)


def test_format_hours_gap_cases():
    schedule = ScheduleConfig(days_a=1, hours_a=4)
    products = [
        ProductDefinition("late", "Late", planned_target_per_hour=10),
        ProductDefinition("stuck", "Stuck", planned_target_per_hour=10),
        ProductDefinition("fine", "Fine", planned_target_per_hour=10, manual_total_demand=10),
    ]
    events = [
        ProductionEvent(day=1, shift=1, hour=h, elapsed_index=h,
                        quantities={"late": 5, "stuck": 0, "fine": 10})
        for h in (1, 2)
    ]

    result = compute_forecast(schedule, products, events)

    assert format_hours_gap(result.metrics_for("late")) == "+4.0h"
    assert format_hours_gap(result.metrics_for("stuck")) == "INFEASIBLE"
    assert format_hours_gap(result.metrics_for("fine")) == "ON TRACK"


def test_format_quantity():
    assert format_quantity(1234.6) == "1,235"


def test_report_frame(schedule, products, sparse_log):
    report = build_report_frame(forecast_production(schedule, products, sparse_log))

    assert list(report["Product"]) == ["Alpha", "Beta"]
    assert list(report["Completed"]) == [37, 11]
    assert "Projected Final Output" in report.columns

    csv_text = frame_to_csv(report)
    assert csv_text.splitlines()[0].startswith("Product,Status,Total Demand")
    assert len(csv_text.splitlines()) == 3


def test_report_filename_uses_local_date():
    # 23:30 UTC is already the next day in Copenhagen
    now = pytz.UTC.localize(datetime(2024, 3, 1, 23, 30))

    assert report_filename("run", "Europe/Copenhagen", now) == "run_2024-03-02.csv"
    assert report_filename("run", "UTC", now) == "run_2024-03-01.csv"


def test_report_filename_treats_naive_as_utc():
    assert report_filename("run", "America/New_York", datetime(2024, 3, 1, 2, 0)) == "run_2024-02-29.csv"


@pytest.mark.parametrize("value, text", [
    (None, ""),
    (1_000_000, "1000000"),
    (1e6, "1000000"),
    (500.5, "500.5"),
    (0, "0"),
])
def test_demand_input_text(value, text):
    assert format_demand_input(value) == text
    assert parse_demand_input(text) == value


@pytest.mark.parametrize("text", ["abc", "-5", "nan", "inf"])
def test_parse_demand_input_rejects(text):
    with pytest.raises(ValueError):
        parse_demand_input(text)


def test_parse_demand_input_accepts_exponent_and_whitespace():
    assert parse_demand_input(" 1e+06 ") == 1_000_000
