"""Fixed-price strategy restricted to an allow-list of takers."""

import logging

from amount_engine.calc.decimals import convert_at_inverse_price, convert_at_price
from amount_engine.models.common import Amount
from amount_engine.models.context import FillContext
from amount_engine.models.errors import MalformedExtraData, NotAllowedTaker
from amount_engine.models.order import FillRequest, FillSide, Order
from amount_engine.models.strategy import WhitelistParams

logger = logging.getLogger(__name__)

RATE_DECIMALS = 18


def is_allowed(params: WhitelistParams, taker: str) -> bool:
    return taker.lower() in params.allowed_takers


def quote(
    order: Order,
    params: WhitelistParams,
    request: FillRequest,
    ctx: FillContext,
) -> Amount:
    if not is_allowed(params, request.taker):
        logger.info("Taker %s not in allow-list", request.taker)
        raise NotAllowedTaker(request.taker)
    if params.fixed_rate <= 0:
        raise MalformedExtraData("Fixed rate must be positive")

    if request.side == FillSide.MAKING:
        return convert_at_price(
            request.amount,
            params.fixed_rate,
            RATE_DECIMALS,
            params.give_decimals,
            params.receive_decimals,
        )
    return convert_at_inverse_price(
        request.amount,
        params.fixed_rate,
        RATE_DECIMALS,
        params.receive_decimals,
        params.give_decimals,
    )
