"""Strategy kinds and their decoded parameter blocks."""

from dataclasses import dataclass
from enum import StrEnum

from amount_engine.models.common import Address, Amount, normalize_address

WINDOW_BITS = 128
WINDOW_MASK = (1 << WINDOW_BITS) - 1


class StrategyKind(StrEnum):
    CHUNKED_UNLOCK = "chunked-unlock"
    LINEAR_DECAY = "linear-decay"
    WHITELIST = "whitelist"
    HYBRID = "hybrid"
    MULTI_PHASE = "multi-phase"
    MULTI_PHASE_PRICE = "multi-phase-price"


@dataclass(frozen=True)
class TimeWindow:
    start: int
    end: int

    def pack(self) -> int:
        return (self.start << WINDOW_BITS) | self.end

    @classmethod
    def unpack(cls, packed: int) -> "TimeWindow":
        return cls(start=packed >> WINDOW_BITS, end=packed & WINDOW_MASK)

    def contains(self, value: int) -> bool:
        return self.start <= value < self.end


@dataclass(frozen=True)
class ChunkedUnlockParams:
    start: int
    interval: int
    chunk_size: Amount
    oracle: Address
    give_decimals: int
    receive_decimals: int
    total_cap: Amount | None = None  # None: capped by the order's making amount


@dataclass(frozen=True)
class LinearDecayParams:
    window: TimeWindow
    counter_start: Amount
    counter_end: Amount


@dataclass(frozen=True)
class WhitelistParams:
    fixed_rate: int
    allowed_takers: frozenset[Address]
    give_decimals: int
    receive_decimals: int

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "allowed_takers",
            frozenset(normalize_address(t) for t in self.allowed_takers),
        )


@dataclass(frozen=True)
class HybridParams:
    switch_time: int
    twap_start_price: int
    twap_end_price: int
    twap_window: TimeWindow
    dutch_start_price: int
    dutch_end_price: int
    dutch_window: TimeWindow


StrategyParams = ChunkedUnlockParams | LinearDecayParams | WhitelistParams | HybridParams
