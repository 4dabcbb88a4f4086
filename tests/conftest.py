import pytest

from core.forecasting.models import ProductDefinition, ScheduleConfig
from core.forecasting.production_log import ProductionLog
from core.state.production_state import ProductionState


@pytest.fixture
def schedule():
    # 2 days x 4h on shift 1, 1 day x 3h on shift 2 -> 11 planned hours
    return ScheduleConfig(days_a=2, hours_a=4, days_b=1, hours_b=3)


@pytest.fixture
def products():
    return [
        ProductDefinition(product_id="a", name="Alpha", planned_target_per_hour=10),
        ProductDefinition(product_id="b", name="Beta", planned_target_per_hour=5),
    ]


@pytest.fixture
def state(schedule, products):
    return ProductionState(schedule=schedule, products=list(products))


@pytest.fixture
def sparse_log():
    log = ProductionLog()
    # Inserted out of order on purpose
    log.record_hour(2, 1, 1, {"a": 7, "b": 2})
    log.record_hour(1, 2, 1, {"a": 9})
    log.record_hour(1, 1, 3, {"a": 11, "b": 4})
    log.record_hour(1, 1, 1, {"a": 10, "b": 5})
    return log
