"""Price feed registry: resolves oracle references and validates readings."""

import logging
from collections.abc import Callable

from amount_engine.calc.decimals import MAX_DECIMALS
from amount_engine.models.common import Address, normalize_address
from amount_engine.models.errors import OracleReadInvalid
from amount_engine.models.oracle import PriceFeed, PriceReading
from amount_engine.oracle.staleness import is_price_stale, price_age_seconds

logger = logging.getLogger(__name__)


class StaticPriceFeed:
    """Feed that always returns the same reading. Used for offline quotes."""

    def __init__(self, answer: int, decimals: int, updated_at: int | None = None):
        self.reading = PriceReading(answer=answer, decimals=decimals, updated_at=updated_at)

    def latest_price(self) -> PriceReading:
        return self.reading


class PriceFeedRegistry:
    def __init__(
        self,
        feeds: dict[Address, PriceFeed] | None = None,
        max_age_seconds: int | None = None,
        factory: Callable[[Address], PriceFeed] | None = None,
    ):
        self._feeds: dict[Address, PriceFeed] = {}
        self.max_age_seconds = max_age_seconds
        self._factory = factory
        for address, feed in (feeds or {}).items():
            self.register(address, feed)

    def register(self, address: Address, feed: PriceFeed) -> None:
        self._feeds[normalize_address(address)] = feed

    def __contains__(self, address: object) -> bool:
        try:
            return normalize_address(address) in self._feeds
        except ValueError:
            return False

    def feed_for(self, address: Address) -> PriceFeed:
        """Registered feed for ``address``, built by the factory on first use."""
        key = normalize_address(address)
        feed = self._feeds.get(key)
        if feed is not None:
            return feed
        if self._factory is not None:
            feed = self._factory(key)
            self._feeds[key] = feed
            return feed
        raise OracleReadInvalid(f"No price feed for oracle {key}")

    def read(self, address: Address, now: int | None = None) -> PriceReading:
        """Read and validate the latest price of ``address``.

        Raises OracleReadInvalid for an unknown oracle, a failing feed, a
        non-positive answer, out-of-range decimals, or (when a maximum age
        is configured) a reading whose update time is too old. Readings
        without an update time are not age-checked.
        """
        feed = self.feed_for(address)
        try:
            reading = feed.latest_price()
        except OracleReadInvalid:
            raise
        except Exception as e:
            logger.error("Oracle read failed for %s: %s", address, e)
            raise OracleReadInvalid(f"Oracle read failed for {address}: {e}") from e

        if reading.answer <= 0:
            logger.error("Oracle %s returned non-positive price %d", address, reading.answer)
            raise OracleReadInvalid(
                f"Oracle {address} returned non-positive price {reading.answer}"
            )
        if reading.decimals < 0 or reading.decimals > MAX_DECIMALS:
            raise OracleReadInvalid(
                f"Oracle {address} returned invalid decimals {reading.decimals}"
            )
        if (
            self.max_age_seconds is not None
            and reading.updated_at is not None
            and is_price_stale(reading, self.max_age_seconds, now)
        ):
            logger.error(
                "Oracle %s price is stale (age=%.0fs, max_age=%ds)",
                address, price_age_seconds(reading, now), self.max_age_seconds,
            )
            raise OracleReadInvalid(f"Oracle {address} price is stale")
        return reading
