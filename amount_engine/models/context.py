"""Per-call host state injected into the dispatcher and strategies."""

from dataclasses import dataclass, field

from amount_engine.models.common import Address
from amount_engine.models.oracle import PriceReading
from amount_engine.oracle.feeds import PriceFeedRegistry


@dataclass(frozen=True)
class FillContext:
    timestamp: int
    feeds: PriceFeedRegistry = field(default_factory=PriceFeedRegistry)

    def read_price(self, oracle: Address) -> PriceReading:
        return self.feeds.read(oracle, now=self.timestamp)
