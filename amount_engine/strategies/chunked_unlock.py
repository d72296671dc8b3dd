"""Chunked-unlock (TWAP) strategy.

One chunk of the give-asset unlocks per elapsed interval, up to a total cap.
Counter-amounts are priced from the strategy's own oracle.
"""

import logging

from amount_engine.calc.decimals import convert_at_inverse_price, convert_at_price
from amount_engine.models.common import Amount
from amount_engine.models.context import FillContext
from amount_engine.models.errors import MalformedExtraData, RequestedExceedsUnlocked
from amount_engine.models.order import FillRequest, FillSide, Order
from amount_engine.models.strategy import ChunkedUnlockParams

logger = logging.getLogger(__name__)


def validate(params: ChunkedUnlockParams) -> None:
    if params.interval <= 0:
        raise MalformedExtraData("Chunked unlock interval must be positive")
    if params.chunk_size <= 0:
        raise MalformedExtraData("Chunked unlock chunk size must be positive")


def total_cap(params: ChunkedUnlockParams, order: Order) -> Amount:
    if params.total_cap is not None:
        return params.total_cap
    return order.making_amount


def unlocked(params: ChunkedUnlockParams, timestamp: int, cap: Amount) -> Amount:
    """Give-asset amount released by ``timestamp``. Zero before start."""
    validate(params)
    if timestamp < params.start:
        return 0
    elapsed_intervals = (timestamp - params.start) // params.interval
    return min(elapsed_intervals * params.chunk_size, cap)


def round_down_to_chunk(amount: Amount, chunk_size: Amount) -> Amount:
    return (amount // chunk_size) * chunk_size


def quote(
    order: Order,
    params: ChunkedUnlockParams,
    request: FillRequest,
    ctx: FillContext,
) -> Amount:
    cap = total_cap(params, order)
    available = unlocked(params, ctx.timestamp, cap)
    reading = ctx.read_price(params.oracle)

    if request.side == FillSide.MAKING:
        making = request.amount
    else:
        implied = convert_at_inverse_price(
            request.amount,
            reading.answer,
            reading.decimals,
            params.receive_decimals,
            params.give_decimals,
        )
        making = round_down_to_chunk(implied, params.chunk_size)

    if request.already_filled + making > available:
        logger.info(
            "Chunked unlock rejected: filled=%d requested=%d unlocked=%d",
            request.already_filled, making, available,
        )
        raise RequestedExceedsUnlocked(request.already_filled + making, available)

    if request.side == FillSide.TAKING:
        return making
    return convert_at_price(
        making,
        reading.answer,
        reading.decimals,
        params.give_decimals,
        params.receive_decimals,
    )
