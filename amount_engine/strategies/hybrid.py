"""Hybrid strategy: a rising TWAP price until a switch time, then a Dutch decay."""

from amount_engine.calc.decimals import mul_div
from amount_engine.models.common import Amount
from amount_engine.models.context import FillContext
from amount_engine.models.errors import MalformedExtraData
from amount_engine.models.order import FillRequest, FillSide, Order
from amount_engine.models.strategy import HybridParams, TimeWindow

PRICE_DECIMALS = 18


def _interpolate(start_price: int, end_price: int, window: TimeWindow, timestamp: int) -> int:
    if window.end <= window.start:
        return start_price
    t = min(max(timestamp, window.start), window.end)
    numerator = start_price * (window.end - t) + end_price * (t - window.start)
    return numerator // (window.end - window.start)


def current_price(params: HybridParams, timestamp: int) -> int:
    if timestamp < params.switch_time:
        return _interpolate(
            params.twap_start_price, params.twap_end_price, params.twap_window, timestamp
        )
    return _interpolate(
        params.dutch_start_price, params.dutch_end_price, params.dutch_window, timestamp
    )


def quote(
    order: Order,
    params: HybridParams,
    request: FillRequest,
    ctx: FillContext,
) -> Amount:
    price = current_price(params, ctx.timestamp)
    scale = 10**PRICE_DECIMALS
    if request.side == FillSide.MAKING:
        return mul_div(request.amount, price, scale)
    if price == 0:
        raise MalformedExtraData("Hybrid price is zero; making amount undefined")
    return mul_div(request.amount, scale, price)
