"""Amount calculator: the two entry points the settlement engine calls.

``get_taking_amount`` answers "how much receive-asset for this much of the
order", ``get_making_amount`` answers the reverse. Both read the calculator
reference at the head of the amount data and either run a single strategy
or dispatch through a phase list.
"""

import logging
from collections.abc import Callable

from amount_engine.codec.extra_data import decode_phase_list, decode_strategy, split_amount_data
from amount_engine.config.schema import EngineConfig
from amount_engine.dispatch.phase_selector import PhaseSelector, validate_phase_list
from amount_engine.models.common import Address, Amount, unix_now
from amount_engine.models.context import FillContext
from amount_engine.models.order import FillRequest, FillSide, Order
from amount_engine.models.phase import PHASE_LIST_AXES, AxisMode, PhaseList
from amount_engine.oracle.feeds import PriceFeedRegistry, StaticPriceFeed
from amount_engine.oracle.rpc_feed import RpcPriceFeed
from amount_engine.strategies.registry import StrategyRegistry, quoter_for

logger = logging.getLogger(__name__)


class AmountCalculator:
    def __init__(
        self,
        registry: StrategyRegistry,
        feeds: PriceFeedRegistry | None = None,
        axis_decimals: int = 18,
        validate_phase_lists: bool = True,
        clock: Callable[[], int] = unix_now,
    ):
        self.registry = registry
        self.feeds = feeds if feeds is not None else PriceFeedRegistry()
        self.selector = PhaseSelector(axis_decimals=axis_decimals)
        self.validate_phase_lists = validate_phase_lists
        self.clock = clock

    @classmethod
    def from_config(cls, config: EngineConfig) -> "AmountCalculator":
        registry = StrategyRegistry({s.address: s.kind for s in config.strategies})

        factory = None
        if config.oracle.rpc_url:
            rpc_url = config.oracle.rpc_url
            timeout = config.oracle.timeout_seconds

            def factory(address: Address) -> RpcPriceFeed:
                return RpcPriceFeed(rpc_url, address, timeout=timeout)

        feeds = PriceFeedRegistry(
            {f.address: StaticPriceFeed(f.answer, f.decimals) for f in config.feeds},
            max_age_seconds=config.oracle.max_price_age_seconds,
            factory=factory,
        )
        return cls(
            registry,
            feeds,
            axis_decimals=config.oracle.axis_decimals,
            validate_phase_lists=config.validate_phase_lists,
        )

    def decode_phase_list(self, extra_data: bytes, mode: AxisMode = AxisMode.TIME) -> PhaseList:
        phase_list = decode_phase_list(extra_data, self.registry.resolve, mode)
        if self.validate_phase_lists:
            validate_phase_list(phase_list)
        return phase_list

    def quote(
        self,
        order: Order,
        request: FillRequest,
        amount_data: bytes,
        timestamp: int | None = None,
    ) -> Amount:
        calculator, extra_data = split_amount_data(amount_data)
        kind = self.registry.resolve(calculator)
        ctx = FillContext(
            timestamp=self.clock() if timestamp is None else timestamp,
            feeds=self.feeds,
        )

        if kind in PHASE_LIST_AXES:
            phase_list = self.decode_phase_list(extra_data, PHASE_LIST_AXES[kind])
            result = self.selector.select_and_delegate(order, phase_list, request, ctx)
        else:
            params = decode_strategy(kind, extra_data)
            result = quoter_for(kind)(order, params, request, ctx)

        logger.debug(
            "Quote %s %s amount=%d taker=%s at t=%d -> %d",
            kind, request.side, request.amount, request.taker, ctx.timestamp, result,
        )
        return result

    def get_taking_amount(
        self,
        order: Order,
        taker: Address,
        making_amount: Amount,
        remaining_making_amount: Amount | None = None,
        extra_data: bytes | None = None,
        timestamp: int | None = None,
    ) -> Amount:
        request = FillRequest(
            amount=making_amount,
            side=FillSide.MAKING,
            taker=taker,
            already_filled=_already_filled(order, remaining_making_amount),
        )
        data = order.taking_amount_data if extra_data is None else extra_data
        return self.quote(order, request, data, timestamp)

    def get_making_amount(
        self,
        order: Order,
        taker: Address,
        taking_amount: Amount,
        remaining_making_amount: Amount | None = None,
        extra_data: bytes | None = None,
        timestamp: int | None = None,
    ) -> Amount:
        request = FillRequest(
            amount=taking_amount,
            side=FillSide.TAKING,
            taker=taker,
            already_filled=_already_filled(order, remaining_making_amount),
        )
        data = order.making_amount_data if extra_data is None else extra_data
        return self.quote(order, request, data, timestamp)


def _already_filled(order: Order, remaining_making_amount: Amount | None) -> Amount:
    if remaining_making_amount is None:
        return 0
    if remaining_making_amount < 0 or remaining_making_amount > order.making_amount:
        raise ValueError(
            f"remaining_making_amount {remaining_making_amount} outside "
            f"[0, {order.making_amount}]"
        )
    return order.making_amount - remaining_making_amount
