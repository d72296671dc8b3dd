"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from amount_engine.models.strategy import StrategyKind

ADDRESS_PATTERN = r"^0x[0-9a-fA-F]{40}$"


class OracleConfig(BaseModel):
    model_config = {"extra": "forbid"}

    rpc_url: str = ""
    timeout_seconds: float = Field(default=10.0, gt=0.0)
    axis_decimals: int = Field(default=18, ge=0, le=77)
    max_price_age_seconds: int | None = Field(default=None, ge=1)


class StrategyAddressConfig(BaseModel):
    model_config = {"extra": "forbid"}

    address: str = Field(pattern=ADDRESS_PATTERN)
    kind: StrategyKind
    label: str = ""


class FeedConfig(BaseModel):
    """A fixed price for an oracle address, used instead of an RPC read."""

    model_config = {"extra": "forbid"}

    address: str = Field(pattern=ADDRESS_PATTERN)
    answer: int = Field(gt=0)
    decimals: int = Field(default=8, ge=0, le=77)


class EngineConfig(BaseModel):
    model_config = {"extra": "forbid"}

    oracle: OracleConfig = OracleConfig()
    strategies: list[StrategyAddressConfig] = []
    feeds: list[FeedConfig] = []
    validate_phase_lists: bool = True
