"""Reference axis provider: elapsed time or an oracle price."""

import logging

from amount_engine.calc.decimals import normalize
from amount_engine.models.context import FillContext
from amount_engine.models.errors import OracleReadInvalid
from amount_engine.models.oracle import PriceReading
from amount_engine.models.phase import AxisMode, PhaseList

logger = logging.getLogger(__name__)

AXIS_DECIMALS = 18


def current_axis(
    phase_list: PhaseList, ctx: FillContext, axis_decimals: int = AXIS_DECIMALS
) -> int:
    """Return the value phases are selected against.

    TIME mode yields the context timestamp. When the list is flagged
    oracle-required its oracle must still give a valid reading, so a dead
    or stale feed stops the fill. PRICE mode reads the phase list's oracle
    and rescales the answer to ``axis_decimals``.
    """
    if phase_list.mode == AxisMode.TIME:
        if phase_list.oracle_required:
            reading = _read_oracle(phase_list, ctx)
            logger.debug(
                "Oracle %s live for time axis: answer=%d", phase_list.oracle, reading.answer
            )
        return ctx.timestamp

    reading = _read_oracle(phase_list, ctx)
    axis = normalize(reading.answer, reading.decimals, axis_decimals)
    logger.debug(
        "Price axis from %s: answer=%d decimals=%d -> %d",
        phase_list.oracle, reading.answer, reading.decimals, axis,
    )
    return axis


def _read_oracle(phase_list: PhaseList, ctx: FillContext) -> PriceReading:
    if phase_list.oracle is None:
        raise OracleReadInvalid(f"{phase_list.mode} axis requires an oracle but none is set")
    return ctx.read_price(phase_list.oracle)
