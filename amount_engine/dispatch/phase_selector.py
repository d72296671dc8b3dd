"""Phase selector: picks the active phase on the reference axis and delegates."""

import logging

from amount_engine.calc.axis import AXIS_DECIMALS, current_axis
from amount_engine.models.common import Amount
from amount_engine.models.context import FillContext
from amount_engine.models.errors import MalformedPhaseList, NoActivePhase
from amount_engine.models.order import FillRequest, Order
from amount_engine.models.phase import AxisMode, Phase, PhaseList
from amount_engine.strategies.registry import quoter_for

logger = logging.getLogger(__name__)


def validate_phase_list(phase_list: PhaseList) -> None:
    """Reject empty, inverted, unsorted or overlapping phase lists.

    A list that needs an oracle (price axis, or the oracle-required flag)
    must name one.
    """
    if not phase_list.phases:
        raise MalformedPhaseList("Phase list is empty")
    if phase_list.mode == AxisMode.PRICE and phase_list.oracle is None:
        raise MalformedPhaseList("Price-axis phase list has no oracle")
    if phase_list.oracle_required and phase_list.oracle is None:
        raise MalformedPhaseList("Phase list requires an oracle but names none")

    previous: Phase | None = None
    for i, phase in enumerate(phase_list.phases):
        if phase.start >= phase.end:
            raise MalformedPhaseList(
                f"Phase {i} window [{phase.start}, {phase.end}) is empty"
            )
        if previous is not None and phase.start < previous.end:
            raise MalformedPhaseList(
                f"Phase {i} starts at {phase.start} before phase {i - 1} ends at {previous.end}"
            )
        previous = phase


def select_phase(phase_list: PhaseList, axis: int) -> tuple[int, Phase]:
    """Return ``(index, phase)`` of the first phase with start <= axis < end."""
    for i, phase in enumerate(phase_list.phases):
        if phase.window.contains(axis):
            return i, phase
    raise NoActivePhase(axis)


class PhaseSelector:
    def __init__(self, axis_decimals: int = AXIS_DECIMALS):
        self.axis_decimals = axis_decimals

    def select_and_delegate(
        self,
        order: Order,
        phase_list: PhaseList,
        request: FillRequest,
        ctx: FillContext,
    ) -> Amount:
        """Compute the axis, pick the active phase and return its strategy's answer.

        The strategy's result is returned unmodified; any CalculationError it
        raises propagates to the caller.
        """
        axis = current_axis(phase_list, ctx, self.axis_decimals)
        try:
            index, phase = select_phase(phase_list, axis)
        except NoActivePhase:
            logger.info("No active phase: mode=%s axis=%d", phase_list.mode, axis)
            raise

        logger.debug(
            "Phase %d (%s) active for axis=%d window=[%d, %d)",
            index, phase.strategy, axis, phase.start, phase.end,
        )
        quoter = quoter_for(phase.strategy)
        return quoter(order, phase.params, request, ctx)
