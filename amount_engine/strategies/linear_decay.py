"""Linear-decay (Dutch auction) strategy.

The counter-amount for the whole order moves linearly from ``counter_start``
to ``counter_end`` over the window and applies pro rata to each fill.
"""

from amount_engine.calc.decimals import mul_div
from amount_engine.models.common import Amount
from amount_engine.models.context import FillContext
from amount_engine.models.errors import MalformedExtraData
from amount_engine.models.order import FillRequest, FillSide, Order
from amount_engine.models.strategy import LinearDecayParams


def validate(params: LinearDecayParams) -> None:
    if params.window.end <= params.window.start:
        raise MalformedExtraData(
            f"Decay window end {params.window.end} must be after start {params.window.start}"
        )


def counter_total_scaled(params: LinearDecayParams, timestamp: int) -> tuple[int, int]:
    """Return ``(numerator, duration)`` with counterTotal = numerator / duration.

    Keeping the fraction unreduced lets callers fold the final division into
    their own, so nothing is truncated early.
    """
    validate(params)
    start, end = params.window.start, params.window.end
    t = min(max(timestamp, start), end)
    numerator = params.counter_start * (end - t) + params.counter_end * (t - start)
    return numerator, end - start


def counter_total(params: LinearDecayParams, timestamp: int) -> Amount:
    numerator, duration = counter_total_scaled(params, timestamp)
    return numerator // duration


def quote(
    order: Order,
    params: LinearDecayParams,
    request: FillRequest,
    ctx: FillContext,
) -> Amount:
    numerator, duration = counter_total_scaled(params, ctx.timestamp)
    if request.side == FillSide.MAKING:
        return mul_div(request.amount, numerator, duration * order.making_amount)
    if numerator == 0:
        raise MalformedExtraData("Decay counter-amount is zero; making amount undefined")
    return mul_div(request.amount, duration * order.making_amount, numerator)
