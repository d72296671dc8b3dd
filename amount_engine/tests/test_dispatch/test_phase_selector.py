"""Tests for phase selection and delegation."""

import pytest

from amount_engine.dispatch.phase_selector import (
    PhaseSelector,
    select_phase,
    validate_phase_list,
)
from amount_engine.models.context import FillContext
from amount_engine.models.errors import (
    MalformedPhaseList,
    NoActivePhase,
    NotAllowedTaker,
    OracleReadInvalid,
)
from amount_engine.models.order import FillRequest, FillSide, Order
from amount_engine.models.phase import AxisMode, Phase, PhaseList
from amount_engine.models.strategy import (
    LinearDecayParams,
    StrategyKind,
    TimeWindow,
    WhitelistParams,
)
from amount_engine.oracle.feeds import PriceFeedRegistry, StaticPriceFeed
from amount_engine.strategies.registry import QUOTERS

ORACLE = "0xfb0a39ae8c44a0e83a1445d4d272294345fa2207"
TAKER = "0x00000000000000000000000000000000000000b2"
OTHER_TAKER = "0x00000000000000000000000000000000000000c3"
N = 1_000


def _decay(start: int, end: int, counter_start: int, counter_end: int) -> Phase:
    return Phase(
        window=TimeWindow(start, end),
        strategy=StrategyKind.LINEAR_DECAY,
        params=LinearDecayParams(TimeWindow(start, end), counter_start, counter_end),
    )


def _whitelist(start: int, end: int, rate: int = 2 * 10**18) -> Phase:
    return Phase(
        window=TimeWindow(start, end),
        strategy=StrategyKind.WHITELIST,
        params=WhitelistParams(rate, frozenset({TAKER}), 18, 18),
    )


@pytest.fixture
def time_phases() -> PhaseList:
    return PhaseList(
        mode=AxisMode.TIME,
        oracle=None,
        phases=(
            _decay(N + 100, N + 200, 100, 100),
            _decay(N + 200, N + 300, 200, 200),
            _decay(N + 300, N + 400, 300, 300),
        ),
    )


@pytest.fixture
def order() -> Order:
    return Order(
        maker_asset="0x6599c6f3e66a5cd86ba7f826ba7d56cc5d3196fa",
        taker_asset="0x1e430ce702c8f7903bf0522eae7faeb32634f1d2",
        making_amount=1_000,
        taking_amount=0,
        maker="0x00000000000000000000000000000000000000a1",
    )


def _request(amount: int = 1_000, taker: str = TAKER) -> FillRequest:
    return FillRequest(amount=amount, side=FillSide.MAKING, taker=taker)


class TestSelectPhase:
    def test_picks_containing_window(self, time_phases):
        assert select_phase(time_phases, N + 150)[0] == 0
        assert select_phase(time_phases, N + 250)[0] == 1
        assert select_phase(time_phases, N + 399)[0] == 2

    def test_boundary_belongs_to_next_phase(self, time_phases):
        assert select_phase(time_phases, N + 200)[0] == 1
        assert select_phase(time_phases, N + 300)[0] == 2

    def test_outside_every_window(self, time_phases):
        for axis in (0, N + 99, N + 400, N + 10**6):
            with pytest.raises(NoActivePhase) as exc:
                select_phase(time_phases, axis)
            assert exc.value.axis == axis

    def test_exactly_one_phase_inside_covered_range(self, time_phases):
        for axis in range(N + 100, N + 400):
            matches = [p for p in time_phases.phases if p.window.contains(axis)]
            assert len(matches) == 1
            assert select_phase(time_phases, axis)[1] is matches[0]

    def test_gap_between_phases(self):
        phase_list = PhaseList(
            mode=AxisMode.TIME,
            oracle=None,
            phases=(_decay(0, 10, 1, 1), _decay(20, 30, 1, 1)),
        )
        with pytest.raises(NoActivePhase):
            select_phase(phase_list, 15)


class TestValidatePhaseList:
    def test_valid(self, time_phases):
        validate_phase_list(time_phases)

    def test_empty(self):
        with pytest.raises(MalformedPhaseList):
            validate_phase_list(PhaseList(AxisMode.TIME, None, ()))

    def test_empty_window(self):
        phase_list = PhaseList(AxisMode.TIME, None, (_whitelist(5, 5),))
        with pytest.raises(MalformedPhaseList):
            validate_phase_list(phase_list)

    def test_overlap(self):
        phase_list = PhaseList(AxisMode.TIME, None, (_whitelist(0, 10), _whitelist(5, 15)))
        with pytest.raises(MalformedPhaseList, match="before phase 0 ends"):
            validate_phase_list(phase_list)

    def test_unsorted(self):
        phase_list = PhaseList(AxisMode.TIME, None, (_whitelist(10, 20), _whitelist(0, 10)))
        with pytest.raises(MalformedPhaseList):
            validate_phase_list(phase_list)

    def test_oracle_required_without_oracle(self):
        phase_list = PhaseList(AxisMode.TIME, None, (_whitelist(0, 10),), oracle_required=True)
        with pytest.raises(MalformedPhaseList, match="requires an oracle"):
            validate_phase_list(phase_list)

    def test_price_mode_without_oracle(self):
        phase_list = PhaseList(AxisMode.PRICE, None, (_whitelist(0, 10),))
        with pytest.raises(MalformedPhaseList):
            validate_phase_list(phase_list)


class TestSelectAndDelegate:
    def test_time_axis(self, order, time_phases):
        selector = PhaseSelector()
        ctx = FillContext(timestamp=N + 250)
        assert selector.select_and_delegate(order, time_phases, _request(), ctx) == 200

    def test_time_axis_next_phase_at_boundary(self, order, time_phases):
        ctx = FillContext(timestamp=N + 300)
        assert PhaseSelector().select_and_delegate(order, time_phases, _request(), ctx) == 300

    def test_no_active_phase(self, order, time_phases):
        with pytest.raises(NoActivePhase):
            PhaseSelector().select_and_delegate(
                order, time_phases, _request(), FillContext(timestamp=N)
            )

    def test_price_axis(self, order):
        phase_list = PhaseList(
            mode=AxisMode.PRICE,
            oracle=ORACLE,
            phases=(
                _whitelist(3_000 * 10**18, 3_500 * 10**18, rate=2 * 10**18),
                _whitelist(3_500 * 10**18, 4_000 * 10**18, rate=3 * 10**18),
            ),
        )
        low = FillContext(
            timestamp=0, feeds=PriceFeedRegistry({ORACLE: StaticPriceFeed(3_200 * 10**8, 8)})
        )
        high = FillContext(
            timestamp=0, feeds=PriceFeedRegistry({ORACLE: StaticPriceFeed(3_600 * 10**8, 8)})
        )
        assert PhaseSelector().select_and_delegate(order, phase_list, _request(10), low) == 20
        assert PhaseSelector().select_and_delegate(order, phase_list, _request(10), high) == 30

    def test_price_axis_custom_decimals(self, order):
        phase_list = PhaseList(
            mode=AxisMode.PRICE,
            oracle=ORACLE,
            phases=(_whitelist(3_000 * 10**8, 3_500 * 10**8),),
        )
        ctx = FillContext(
            timestamp=0, feeds=PriceFeedRegistry({ORACLE: StaticPriceFeed(3_200 * 10**8, 8)})
        )
        selector = PhaseSelector(axis_decimals=8)
        assert selector.select_and_delegate(order, phase_list, _request(10), ctx) == 20

    def test_price_axis_oracle_failure(self, order):
        phase_list = PhaseList(AxisMode.PRICE, ORACLE, (_whitelist(0, 10),))
        with pytest.raises(OracleReadInvalid):
            PhaseSelector().select_and_delegate(
                order, phase_list, _request(), FillContext(timestamp=0)
            )

    def test_strategy_error_propagates(self, order):
        phase_list = PhaseList(AxisMode.TIME, None, (_whitelist(0, 10),))
        with pytest.raises(NotAllowedTaker):
            PhaseSelector().select_and_delegate(
                order, phase_list, _request(taker=OTHER_TAKER), FillContext(timestamp=5)
            )

    def test_strategy_gets_caller_context(self, order, monkeypatch):
        seen = []

        def spy(order, params, request, ctx):
            seen.append(ctx)
            return 1

        monkeypatch.setitem(QUOTERS, StrategyKind.WHITELIST, spy)
        phase_list = PhaseList(AxisMode.TIME, None, (_whitelist(0, 10),))
        ctx = FillContext(timestamp=5)
        assert PhaseSelector().select_and_delegate(order, phase_list, _request(), ctx) == 1
        assert seen == [ctx]

    def test_oracle_required_time_list_reads_oracle(self, order):
        phase_list = PhaseList(AxisMode.TIME, ORACLE, (_whitelist(0, 10),), oracle_required=True)
        live = FillContext(
            timestamp=5, feeds=PriceFeedRegistry({ORACLE: StaticPriceFeed(3_200 * 10**8, 8)})
        )
        assert PhaseSelector().select_and_delegate(order, phase_list, _request(10), live) == 20
        with pytest.raises(OracleReadInvalid):
            PhaseSelector().select_and_delegate(
                order, phase_list, _request(10), FillContext(timestamp=5)
            )
