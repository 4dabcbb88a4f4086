"""
Production Log

Sparse store of hourly production counts keyed by (day, shift, hour).

A missing key means the hour has not been logged yet; it is never read as a
zero-output hour. Logging an hour replaces its whole quantity map.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple

from core.errors import InvalidEntryError
from .models import SHIFTS

logger = logging.getLogger(__name__)

SlotKey = Tuple[int, int, int]


def validate_hourly_entry(raw: Mapping[str, Any], product_ids: Iterable[str]) -> Dict[str, int]:
    """
    Validate operator input for one hour.

    Every product needs a value that parses as a non-negative integer. Values
    may be ints or numeric strings (surrounding whitespace is ignored).

    Args:
        raw: Mapping of product_id -> entered value
        product_ids: Products that must be present in the entry

    Returns:
        Dict of product_id -> quantity

    Raises:
        InvalidEntryError: If any product is missing, non-numeric or negative
    """
    quantities: Dict[str, int] = {}
    invalid: Dict[str, str] = {}

    for product_id in product_ids:
        value = raw.get(product_id)
        quantity = _parse_quantity(value)
        if quantity is None:
            invalid[product_id] = "" if value is None else str(value)
        else:
            quantities[product_id] = quantity

    if invalid:
        logger.warning(f"Rejected hourly entry, invalid values: {invalid}")
        raise InvalidEntryError(invalid)

    return quantities


def _parse_quantity(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            value = int(text)
        except ValueError:
            return None
    if not isinstance(value, int) or value < 0:
        return None
    return value


class ProductionLog:
    """Hourly production counts keyed by (day, shift, hour)."""

    def __init__(self, entries: Optional[Mapping[SlotKey, Mapping[str, int]]] = None):
        self._entries: Dict[SlotKey, Dict[str, int]] = {}
        for (day, shift, hour), quantities in (entries or {}).items():
            self.record_hour(day, shift, hour, quantities)

    def record_hour(self, day: int, shift: int, hour: int, quantities: Mapping[str, int]) -> None:
        """
        Upsert one hour. The previous quantity map for the slot is replaced,
        not merged.
        """
        if shift not in SHIFTS:
            raise ValueError(f"Invalid shift: {shift}. Must be one of {SHIFTS}")
        if day < 1 or hour < 1:
            raise ValueError(f"Day and hour are 1-based, got day={day}, hour={hour}")
        for product_id, quantity in quantities.items():
            if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
                raise ValueError(
                    f"Quantity for '{product_id}' must be a non-negative integer, got {quantity!r}"
                )
        self._entries[(day, shift, hour)] = dict(quantities)

    def get_hour(self, day: int, shift: int, hour: int) -> Optional[Dict[str, int]]:
        """Quantity map for a slot, or None if the hour was never logged"""
        entry = self._entries.get((day, shift, hour))
        return dict(entry) if entry is not None else None

    def quantity(self, day: int, shift: int, hour: int, product_id: str) -> int:
        """Logged quantity for one product, 0 when the slot or product is missing"""
        return self._entries.get((day, shift, hour), {}).get(product_id, 0)

    def is_logged(self, day: int, shift: int, hour: int) -> bool:
        return (day, shift, hour) in self._entries

    def items(self) -> Iterator[Tuple[SlotKey, Dict[str, int]]]:
        for key, quantities in self._entries.items():
            yield key, dict(quantities)

    def copy(self) -> "ProductionLog":
        return ProductionLog(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProductionLog):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"ProductionLog(logged_hours={len(self._entries)})"

    # ------------------------------------------------------------------
    # Nested scenario shape: {day: {"shift1": {hour: {id: qty}}, "shift2": {...}}}
    # ------------------------------------------------------------------

    @classmethod
    def from_nested(cls, data: Mapping[Any, Any]) -> "ProductionLog":
        """
        Build a log from the nested day -> shift -> hour mapping used by
        scenario files. Day and hour keys may be strings (JSON object keys).

        Raises:
            ValueError: If keys or quantities are malformed
        """
        if not isinstance(data, Mapping):
            raise ValueError("Production data must be a mapping of day -> shifts")

        log = cls()
        for day_key, day_data in data.items():
            day = _parse_index(day_key, "day")
            if not isinstance(day_data, Mapping):
                raise ValueError(f"Day {day} must map shift keys to hours")
            for shift in SHIFTS:
                shift_data = day_data.get(f"shift{shift}", {})
                if not isinstance(shift_data, Mapping):
                    raise ValueError(f"Day {day} shift {shift} must map hours to quantities")
                for hour_key, quantities in shift_data.items():
                    hour = _parse_index(hour_key, "hour")
                    if not isinstance(quantities, Mapping):
                        raise ValueError(f"Day {day} shift {shift} hour {hour} must map products to quantities")
                    log.record_hour(day, shift, hour, {str(pid): qty for pid, qty in quantities.items()})
        return log

    def to_nested(self) -> Dict[str, Dict[str, Dict[str, Dict[str, int]]]]:
        """Inverse of from_nested with string keys, ready for JSON"""
        nested: Dict[str, Dict[str, Dict[str, Dict[str, int]]]] = {}
        for (day, shift, hour), quantities in sorted(self._entries.items()):
            day_data = nested.setdefault(str(day), {"shift1": {}, "shift2": {}})
            day_data[f"shift{shift}"][str(hour)] = dict(quantities)
        return nested


def _parse_index(key: Any, label: str) -> int:
    try:
        value = int(key)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {label} key: {key!r}")
    if isinstance(key, bool) or value < 1:
        raise ValueError(f"Invalid {label} key: {key!r}")
    return value
