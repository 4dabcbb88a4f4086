"""
Log Sequencing

Flattens the sparse production log into plant-wide chronological order.
"""

import logging
from typing import Iterable, List

from .models import ProductionEvent
from .production_log import ProductionLog

logger = logging.getLogger(__name__)


def flatten_production_log(log: ProductionLog, product_ids: Iterable[str]) -> List[ProductionEvent]:
    """
    Turn logged hours into an ordered list of production events.

    Events are sorted by (day, shift, hour), so all of shift 1 precedes shift 2
    within a day regardless of hour numbers. Only logged hours produce events;
    a logged hour whose quantities are all zero still counts. Each event
    carries a quantity for every known product, defaulting to 0, and drops
    identifiers outside the known set.

    Args:
        log: Production log to flatten
        product_ids: Known product identifiers

    Returns:
        Events with elapsed_index equal to their 1-based position
    """
    product_ids = list(product_ids)

    events = []
    for elapsed_index, ((day, shift, hour), logged) in enumerate(
        sorted(log.items(), key=lambda item: item[0]),
        start=1
    ):
        quantities = {pid: logged.get(pid, 0) for pid in product_ids}
        events.append(ProductionEvent(
            day=day,
            shift=shift,
            hour=hour,
            elapsed_index=elapsed_index,
            quantities=quantities
        ))

    logger.debug(f"Flattened production log into {len(events)} events")
    return events
