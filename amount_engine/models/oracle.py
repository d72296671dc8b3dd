"""Oracle read-contract models."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class PriceReading:
    answer: int
    decimals: int
    updated_at: int | None = None


class PriceFeed(Protocol):
    def latest_price(self) -> PriceReading: ...
