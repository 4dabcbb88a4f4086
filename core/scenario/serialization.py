"""
Scenario Import / Export

Round-trips a ProductionState through JSON text. The payload shape:

    {
      "daysShift1": 5, "daysShift2": 3, "hoursShift1": 8, "hoursShift2": 8,
      "models": [{"id": "1", "name": "Model A", "plannedTargetPerHour": 100,
                  "manualTotalDemand": 500, "extraProduction": 20}],
      "productionData": {"1": {"shift1": {"1": {"1": 95}}, "shift2": {}}},
      "selectedDay": 1, "selectedShift": 1, "selectedHour": 2
    }

`models` and `productionData` are required. Import always builds a new state,
so a rejected payload leaves the caller's state untouched.
"""

import json
import logging
import math
from typing import Any, Dict, List, Mapping

from core.errors import ScenarioImportError
from core.forecasting.models import ProductDefinition, ScheduleConfig
from core.forecasting.production_log import ProductionLog
from core.state.production_state import ProductionState

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("models", "productionData")

SCHEDULE_FIELDS = {
    "daysShift1": "days_a",
    "hoursShift1": "hours_a",
    "daysShift2": "days_b",
    "hoursShift2": "hours_b",
}


def scenario_to_dict(state: ProductionState) -> Dict[str, Any]:
    """Serializable dictionary for a state"""
    payload: Dict[str, Any] = {
        key: getattr(state.schedule, attr) for key, attr in SCHEDULE_FIELDS.items()
    }
    payload["models"] = [_product_to_dict(p) for p in state.products]
    payload["productionData"] = state.log.to_nested()
    payload["selectedDay"] = state.selected_day
    payload["selectedShift"] = state.selected_shift
    payload["selectedHour"] = state.selected_hour
    return payload


def export_scenario(state: ProductionState) -> str:
    """Full state as indented JSON text"""
    return json.dumps(scenario_to_dict(state), indent=2, ensure_ascii=False)


def _product_to_dict(product: ProductDefinition) -> Dict[str, Any]:
    model: Dict[str, Any] = {
        "id": product.product_id,
        "name": product.name,
        "plannedTargetPerHour": product.planned_target_per_hour,
    }
    if product.manual_total_demand is not None:
        model["manualTotalDemand"] = product.manual_total_demand
    if product.extra_production:
        model["extraProduction"] = product.extra_production
    return model


def import_scenario(text: str) -> ProductionState:
    """
    Parse scenario JSON text into a new ProductionState.

    Raises:
        ScenarioImportError: If the text is not JSON, not an object, lacks a
            required field, or holds malformed values
    """
    try:
        payload = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning(f"Scenario import rejected: not valid JSON ({e})")
        raise ScenarioImportError(f"Scenario is not valid JSON: {e}") from e

    return scenario_from_dict(payload)


def scenario_from_dict(payload: Any) -> ProductionState:
    """Build a ProductionState from an already-parsed payload"""
    if not isinstance(payload, Mapping):
        raise ScenarioImportError("Scenario must be a JSON object")

    missing = [name for name in REQUIRED_FIELDS if payload.get(name) is None]
    if missing:
        logger.warning(f"Scenario import rejected: missing fields {missing}")
        raise ScenarioImportError(
            f"Scenario is missing required fields: {missing}",
            field=missing[0]
        )

    try:
        schedule = ScheduleConfig(**{
            attr: _as_int(payload.get(key, 0), key) for key, attr in SCHEDULE_FIELDS.items()
        })
        products = _parse_models(payload["models"])
        log = ProductionLog.from_nested(payload["productionData"])
        state = ProductionState(
            schedule=schedule,
            products=products,
            log=log,
            selected_day=_as_int(payload.get("selectedDay", 1), "selectedDay"),
            selected_shift=_as_int(payload.get("selectedShift", 1), "selectedShift"),
            selected_hour=_as_int(payload.get("selectedHour", 1), "selectedHour"),
        )
    except ScenarioImportError:
        raise
    except (ValueError, TypeError, KeyError) as e:
        logger.warning(f"Scenario import rejected: {e}")
        raise ScenarioImportError(f"Invalid scenario: {e}") from e

    logger.info(
        f"Scenario imported: {len(state.products)} products, "
        f"{len(state.log)} logged hours, {schedule.total_planned_hours} planned hours"
    )
    return state


def _parse_models(models: Any) -> List[ProductDefinition]:
    if not isinstance(models, list):
        raise ScenarioImportError("'models' must be a list", field="models")

    products = []
    for index, model in enumerate(models):
        if not isinstance(model, Mapping):
            raise ScenarioImportError(f"Model #{index + 1} must be an object", field="models")
        if "id" not in model or "plannedTargetPerHour" not in model:
            raise ScenarioImportError(
                f"Model #{index + 1} needs 'id' and 'plannedTargetPerHour'",
                field="models"
            )
        manual = model.get("manualTotalDemand")
        products.append(ProductDefinition(
            product_id=str(model["id"]),
            name=str(model.get("name", model["id"])),
            planned_target_per_hour=_as_number(model["plannedTargetPerHour"], "plannedTargetPerHour"),
            manual_total_demand=None if manual is None else _as_number(manual, "manualTotalDemand"),
            extra_production=_as_number(model.get("extraProduction", 0) or 0, "extraProduction"),
        ))
    return products


def _as_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"'{name}' must be an integer, got {value!r}")
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if not isinstance(value, int):
        raise ValueError(f"'{name}' must be an integer, got {value!r}")
    return value


def _as_number(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"'{name}' must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValueError(f"'{name}' must be finite, got {value!r}")
    return value
