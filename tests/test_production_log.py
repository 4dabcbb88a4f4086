import pytest

from core.errors import InvalidEntryError
from core.forecasting.production_log import ProductionLog, validate_hourly_entry


def test_record_hour_replaces_whole_entry():
    log = ProductionLog()
    log.record_hour(1, 1, 1, {"a": 5, "b": 3})
    log.record_hour(1, 1, 1, {"a": 8})

    assert log.get_hour(1, 1, 1) == {"a": 8}
    assert log.quantity(1, 1, 1, "b") == 0


def test_missing_slot_is_not_logged():
    log = ProductionLog()
    log.record_hour(1, 1, 1, {"a": 0})

    assert log.is_logged(1, 1, 1)
    assert not log.is_logged(1, 1, 2)
    assert log.get_hour(1, 1, 2) is None
    assert log.quantity(1, 1, 2, "a") == 0


def test_get_hour_returns_copy():
    log = ProductionLog()
    log.record_hour(1, 1, 1, {"a": 5})
    log.get_hour(1, 1, 1)["a"] = 99

    assert log.quantity(1, 1, 1, "a") == 5


@pytest.mark.parametrize("day, shift, hour", [(0, 1, 1), (1, 3, 1), (1, 1, 0)])
def test_record_hour_rejects_bad_slot(day, shift, hour):
    with pytest.raises(ValueError):
        ProductionLog().record_hour(day, shift, hour, {"a": 1})


@pytest.mark.parametrize("quantity", [-1, 2.5, "3", True])
def test_record_hour_rejects_bad_quantity(quantity):
    with pytest.raises(ValueError):
        ProductionLog().record_hour(1, 1, 1, {"a": quantity})


def test_nested_conversion(sparse_log):
    nested = sparse_log.to_nested()

    assert nested["1"]["shift1"]["1"] == {"a": 10, "b": 5}
    assert nested["1"]["shift2"]["1"] == {"a": 9}
    assert nested["2"]["shift2"] == {}
    assert ProductionLog.from_nested(nested) == sparse_log


def test_from_nested_accepts_missing_shift_keys():
    log = ProductionLog.from_nested({"3": {"shift2": {"2": {"x": 4}}}})

    assert len(log) == 1
    assert log.quantity(3, 2, 2, "x") == 4


@pytest.mark.parametrize("data", [
    [],
    {"one": {"shift1": {}}},
    {"1": {"shift1": {"h": {"a": 1}}}},
    {"1": {"shift1": {"1": {"a": -4}}}},
    {"1": {"shift1": {"1": [1, 2]}}},
    {"1": "shift1"},
])
def test_from_nested_rejects_malformed(data):
    with pytest.raises(ValueError):
        ProductionLog.from_nested(data)


def test_validate_hourly_entry_parses_values():
    quantities = validate_hourly_entry({"a": " 12 ", "b": 0, "c": 4.0}, ["a", "b", "c"])

    assert quantities == {"a": 12, "b": 0, "c": 4}


def test_validate_hourly_entry_ignores_unknown_products():
    assert validate_hourly_entry({"a": "1", "zzz": "abc"}, ["a"]) == {"a": 1}


def test_validate_hourly_entry_reports_every_invalid_product():
    with pytest.raises(InvalidEntryError) as exc_info:
        validate_hourly_entry({"a": "-3", "b": "x", "c": "7"}, ["a", "b", "c", "d"])

    assert set(exc_info.value.invalid) == {"a", "b", "d"}
    assert isinstance(exc_info.value, ValueError)
