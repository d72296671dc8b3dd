"""Default strategy calculator deployments recognised on the wire."""

from amount_engine.config.schema import StrategyAddressConfig
from amount_engine.models.strategy import StrategyKind

DEFAULT_STRATEGIES: list[StrategyAddressConfig] = [
    StrategyAddressConfig(
        address="0xaA19aff541ed6eBF528f919592576baB138370DC",
        kind=StrategyKind.MULTI_PHASE,
        label="MultiPhaseAmountCalculator",
    ),
    StrategyAddressConfig(
        address="0x76f18Cc5F9DB41905a285866B9277Ac451F3f75B",
        kind=StrategyKind.CHUNKED_UNLOCK,
        label="TWAPCalculator",
    ),
    StrategyAddressConfig(
        address="0xEAD683c29178d41A511311c1Eb0fce8aD618c3CF",
        kind=StrategyKind.LINEAR_DECAY,
        label="DutchAuctionCalculator",
    ),
]
