"""Per-date estimate number sequence backed by the local state store."""

import logging
from datetime import date, datetime

from estimator.application.interfaces import LocalStateStore

logger = logging.getLogger(__name__)

ESTIMATE_NUMBERS_KEY = "estimateNumbers"


def _date_prefix(value: str | date) -> str:
    if isinstance(value, date):
        return value.strftime("%Y%m%d")
    try:
        return datetime.strptime(value[:10], "%Y-%m-%d").strftime("%Y%m%d")
    except ValueError:
        return "".join(ch for ch in value if ch.isdigit())[:8]


class EstimateNumberGenerator:
    """Issues ``YYYYMMDD-NNN`` numbers, counting per calendar date.

    The counter map is read, incremented and written back without any
    locking: two editors sharing one store can issue the same number.
    """

    def __init__(self, store: LocalStateStore):
        self._store = store

    def _counters(self) -> dict[str, int]:
        raw = self._store.read(ESTIMATE_NUMBERS_KEY, {})
        if not isinstance(raw, dict):
            return {}
        return {k: v for k, v in raw.items() if isinstance(v, int) and not isinstance(v, bool)}

    def next_number(self, on: str | date) -> str:
        prefix = _date_prefix(on)
        counters = self._counters()
        count = counters.get(prefix, 0) + 1
        counters[prefix] = count
        self._store.write(ESTIMATE_NUMBERS_KEY, counters)
        logger.debug("Issued estimate number %s-%03d", prefix, count)
        return f"{prefix}-{count:03d}"
