"""Strategy registry: strategy kinds, their quoters, and on-wire references."""

from collections.abc import Callable

from amount_engine.models.common import Address, Amount, normalize_address
from amount_engine.models.context import FillContext
from amount_engine.models.errors import UnknownStrategy
from amount_engine.models.order import FillRequest, Order
from amount_engine.models.strategy import StrategyKind, StrategyParams
from amount_engine.strategies import chunked_unlock, hybrid, linear_decay, whitelist

Quoter = Callable[[Order, StrategyParams, FillRequest, FillContext], Amount]

QUOTERS: dict[StrategyKind, Quoter] = {
    StrategyKind.CHUNKED_UNLOCK: chunked_unlock.quote,
    StrategyKind.LINEAR_DECAY: linear_decay.quote,
    StrategyKind.WHITELIST: whitelist.quote,
    StrategyKind.HYBRID: hybrid.quote,
}


def quoter_for(kind: StrategyKind) -> Quoter:
    quoter = QUOTERS.get(kind)
    if quoter is None:
        raise UnknownStrategy(str(kind))
    return quoter


class StrategyRegistry:
    """Two-way map between on-wire strategy addresses and strategy kinds."""

    def __init__(self, addresses: dict[Address, StrategyKind] | None = None):
        self._kinds: dict[Address, StrategyKind] = {}
        self._addresses: dict[StrategyKind, Address] = {}
        for address, kind in (addresses or {}).items():
            self.register(address, kind)

    def register(self, address: Address, kind: StrategyKind) -> None:
        addr = normalize_address(address)
        self._kinds[addr] = StrategyKind(kind)
        self._addresses.setdefault(StrategyKind(kind), addr)

    def resolve(self, address: Address) -> StrategyKind:
        kind = self._kinds.get(normalize_address(address))
        if kind is None:
            raise UnknownStrategy(address)
        return kind

    def address_of(self, kind: StrategyKind) -> Address:
        address = self._addresses.get(kind)
        if address is None:
            raise UnknownStrategy(str(kind))
        return address

    def __len__(self) -> int:
        return len(self._kinds)
