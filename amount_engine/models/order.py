"""Order and fill-request models."""

from dataclasses import dataclass
from enum import StrEnum

from amount_engine.models.common import Address, Amount, normalize_address


class FillSide(StrEnum):
    MAKING = "making"  # amount is in give-asset units, answer is a receive amount
    TAKING = "taking"  # amount is in receive-asset units, answer is a give amount


@dataclass(frozen=True)
class Order:
    maker_asset: Address
    taker_asset: Address
    making_amount: Amount
    taking_amount: Amount
    maker: Address
    making_amount_data: bytes = b""
    taking_amount_data: bytes = b""

    def __post_init__(self) -> None:
        if self.making_amount <= 0:
            raise ValueError(f"making_amount must be positive, got {self.making_amount}")
        if self.taking_amount < 0:
            raise ValueError(f"taking_amount must be >= 0, got {self.taking_amount}")
        object.__setattr__(self, "maker_asset", normalize_address(self.maker_asset))
        object.__setattr__(self, "taker_asset", normalize_address(self.taker_asset))
        object.__setattr__(self, "maker", normalize_address(self.maker))


@dataclass(frozen=True)
class FillRequest:
    amount: Amount
    side: FillSide
    taker: Address
    already_filled: Amount = 0

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError(f"amount must be >= 0, got {self.amount}")
        if self.already_filled < 0:
            raise ValueError(f"already_filled must be >= 0, got {self.already_filled}")
        object.__setattr__(self, "taker", normalize_address(self.taker))
