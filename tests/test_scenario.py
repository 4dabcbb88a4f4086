import json

import pytest

from core.errors import ScenarioImportError
from core.scenario.serialization import export_scenario, import_scenario, scenario_to_dict


def test_export_import_restores_state(state):
    state.set_manual_demand("a", 70)
    state.set_extra_production("b", 3)
    state.submit_hour({"a": "10", "b": "5"})
    state.submit_hour({"a": "8", "b": "0"})

    restored = import_scenario(export_scenario(state))

    assert restored.schedule == state.schedule
    assert restored.products == state.products
    assert restored.log == state.log
    assert restored.selection == (1, 1, 3)
    assert restored.forecast() == state.forecast()


def test_export_shape(state):
    state.set_manual_demand("a", 70)
    state.log_hour(1, 2, 1, {"a": 1, "b": 2})

    payload = scenario_to_dict(state)

    assert payload["daysShift1"] == 2
    assert payload["hoursShift2"] == 3
    assert payload["models"][0] == {
        "id": "a", "name": "Alpha", "plannedTargetPerHour": 10, "manualTotalDemand": 70
    }
    # No optional fields for untouched products
    assert payload["models"][1] == {"id": "b", "name": "Beta", "plannedTargetPerHour": 5}
    assert payload["productionData"] == {
        "1": {"shift1": {}, "shift2": {"1": {"a": 1, "b": 2}}}
    }


def test_import_original_payload_shape():
    text = json.dumps({
        "daysShift1": 5, "daysShift2": 3, "hoursShift1": 8, "hoursShift2": 8,
        "models": [
            {"id": 1, "name": "Model A", "plannedTargetPerHour": 100,
             "manualTotalDemand": 500, "extraProduction": 20},
            {"id": 2, "name": "Model B", "plannedTargetPerHour": 80},
        ],
        "productionData": {"1": {"shift1": {"1": {"1": 95, "2": 70}}, "shift2": {}}},
        "selectedDay": 1, "selectedShift": 1, "selectedHour": 2,
    })

    state = import_scenario(text)

    assert state.schedule.total_planned_hours == 64
    assert state.product_ids == ["1", "2"]
    assert state.get_product("1").manual_total_demand == 500
    assert state.get_product("1").extra_production == 20
    assert state.log.get_hour(1, 1, 1) == {"1": 95, "2": 70}
    assert state.selection == (1, 1, 2)


def test_import_defaults_for_optional_fields():
    state = import_scenario('{"models": [], "productionData": {}}')

    assert state.schedule.total_planned_hours == 0
    assert state.products == []
    assert len(state.log) == 0
    assert state.selection == (1, 1, 1)


@pytest.mark.parametrize("payload, field", [
    ({"productionData": {}}, "models"),
    ({"models": []}, "productionData"),
    ({"models": None, "productionData": {}}, "models"),
])
def test_import_rejects_missing_required_fields(payload, field):
    with pytest.raises(ScenarioImportError) as excinfo:
        import_scenario(json.dumps(payload))

    assert excinfo.value.field == field


@pytest.mark.parametrize("text", [
    "not json",
    "[1, 2, 3]",
    '"a string"',
    '{"models": {"id": "a"}, "productionData": {}}',
    '{"models": [{"name": "no id"}], "productionData": {}}',
    '{"models": [{"id": "a", "plannedTargetPerHour": "ten"}], "productionData": {}}',
    '{"models": [{"id": "a", "plannedTargetPerHour": -1}], "productionData": {}}',
    '{"models": [], "productionData": {"0": {"shift1": {}}}}',
    '{"models": [], "productionData": {"1": {"shift1": {"1": {"a": -4}}}}}',
    '{"models": [], "productionData": {}, "daysShift1": "five"}',
    '{"models": [], "productionData": {}, "selectedShift": 3}',
    '{"models": [{"id": "a", "plannedTargetPerHour": 1}, {"id": "a", "plannedTargetPerHour": 2}], '
    '"productionData": {}}',
    '{"models": [{"id": "a", "plannedTargetPerHour": NaN}], "productionData": {}}',
    '{"models": [{"id": "a", "plannedTargetPerHour": 1, "extraProduction": Infinity}], "productionData": {}}',
    '{"models": [{"id": "a", "plannedTargetPerHour": 1, "manualTotalDemand": -Infinity}], "productionData": {}}',
    '{"models": [], "productionData": {}, "daysShift1": NaN}',
    '{"models": [], "productionData": {}, "selectedDay": 0}',
    '{"models": [], "productionData": {}, "selectedDay": 1, "selectedHour": -3}',
])
def test_import_rejects_malformed_payloads(text):
    with pytest.raises(ScenarioImportError):
        import_scenario(text)
