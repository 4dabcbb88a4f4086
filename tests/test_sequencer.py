from core.forecasting.production_log import ProductionLog
from core.forecasting.sequencer import flatten_production_log


def test_events_follow_day_shift_hour_order(sparse_log):
    events = flatten_production_log(sparse_log, ["a", "b"])

    assert [(e.day, e.shift, e.hour) for e in events] == [
        (1, 1, 1),
        (1, 1, 3),
        (1, 2, 1),
        (2, 1, 1),
    ]


def test_elapsed_index_matches_position(sparse_log):
    events = flatten_production_log(sparse_log, ["a", "b"])

    assert [e.elapsed_index for e in events] == [1, 2, 3, 4]


def test_shift_one_precedes_shift_two_regardless_of_hour():
    log = ProductionLog()
    log.record_hour(1, 2, 1, {"a": 1})
    log.record_hour(1, 1, 8, {"a": 2})

    events = flatten_production_log(log, ["a"])

    assert [(e.shift, e.hour) for e in events] == [(1, 8), (2, 1)]


def test_missing_products_default_to_zero_and_unknown_are_dropped():
    log = ProductionLog()
    log.record_hour(1, 1, 1, {"a": 3, "ghost": 40})

    (event,) = flatten_production_log(log, ["a", "b"])

    assert event.quantities == {"a": 3, "b": 0}


def test_all_zero_hour_still_counts():
    log = ProductionLog()
    log.record_hour(1, 1, 1, {"a": 0})
    log.record_hour(1, 1, 5, {"a": 4})

    events = flatten_production_log(log, ["a"])

    assert len(events) == 2
    assert events[0].quantities == {"a": 0}


def test_empty_log_yields_no_events():
    assert flatten_production_log(ProductionLog(), ["a"]) == []


def test_flattening_is_deterministic(sparse_log):
    first = flatten_production_log(sparse_log, ["a", "b"])
    second = flatten_production_log(sparse_log.copy(), ["a", "b"])

    assert first == second
