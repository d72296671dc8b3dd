"""Shared test fixtures."""

from pathlib import Path

import pytest
import yaml

from amount_engine.config.defaults import DEFAULT_STRATEGIES
from amount_engine.config.schema import EngineConfig
from amount_engine.models.strategy import StrategyKind
from amount_engine.strategies.registry import StrategyRegistry

MULTI_PHASE_ADDR = "0x1000000000000000000000000000000000000001"
CHUNKED_ADDR = "0x1000000000000000000000000000000000000002"
DECAY_ADDR = "0x1000000000000000000000000000000000000003"
WHITELIST_ADDR = "0x1000000000000000000000000000000000000004"
HYBRID_ADDR = "0x1000000000000000000000000000000000000005"
MULTI_PHASE_PRICE_ADDR = "0x1000000000000000000000000000000000000006"


@pytest.fixture
def registry() -> StrategyRegistry:
    return StrategyRegistry(
        {
            MULTI_PHASE_ADDR: StrategyKind.MULTI_PHASE,
            CHUNKED_ADDR: StrategyKind.CHUNKED_UNLOCK,
            DECAY_ADDR: StrategyKind.LINEAR_DECAY,
            WHITELIST_ADDR: StrategyKind.WHITELIST,
            HYBRID_ADDR: StrategyKind.HYBRID,
            MULTI_PHASE_PRICE_ADDR: StrategyKind.MULTI_PHASE_PRICE,
        }
    )


@pytest.fixture
def default_config() -> EngineConfig:
    """Return default EngineConfig with default strategies."""
    return EngineConfig(strategies=DEFAULT_STRATEGIES)


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "oracle": {"axis_decimals": 18},
        "validate_phase_lists": True,
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
