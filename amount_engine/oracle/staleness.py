"""Staleness checks for oracle price readings."""

from amount_engine.models.common import unix_now
from amount_engine.models.oracle import PriceReading


def is_price_stale(
    reading: PriceReading, max_age_seconds: int, now: int | None = None
) -> bool:
    """Check if a reading is older than ``max_age_seconds``.

    A reading without an update time is treated as stale.
    """
    if now is None:
        now = unix_now()
    if reading.updated_at is None:
        return True
    return now - reading.updated_at > max_age_seconds


def price_age_seconds(reading: PriceReading, now: int | None = None) -> float:
    """Age of a reading in seconds, ``inf`` when the feed gives no timestamp."""
    if now is None:
        now = unix_now()
    if reading.updated_at is None:
        return float("inf")
    return float(now - reading.updated_at)
