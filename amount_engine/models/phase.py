"""Phase and phase-list models."""

from dataclasses import dataclass, field
from enum import StrEnum

from amount_engine.models.common import Address
from amount_engine.models.strategy import StrategyKind, StrategyParams, TimeWindow


class AxisMode(StrEnum):
    TIME = "time"
    PRICE = "price"


# The calculator reference picks the axis; the blob layout is the same for both.
PHASE_LIST_AXES: dict[StrategyKind, AxisMode] = {
    StrategyKind.MULTI_PHASE: AxisMode.TIME,
    StrategyKind.MULTI_PHASE_PRICE: AxisMode.PRICE,
}


@dataclass(frozen=True)
class Phase:
    window: TimeWindow
    strategy: StrategyKind
    params: StrategyParams
    extra_data: bytes = field(default=b"", repr=False)

    @property
    def start(self) -> int:
        return self.window.start

    @property
    def end(self) -> int:
        return self.window.end


@dataclass(frozen=True)
class PhaseList:
    mode: AxisMode
    oracle: Address | None
    phases: tuple[Phase, ...]
    oracle_required: bool = False  # oracle must answer before any phase is quoted
