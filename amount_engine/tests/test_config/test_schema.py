"""Tests for config schema validation."""

import pytest
from pydantic import ValidationError

from amount_engine.config.schema import (
    EngineConfig,
    FeedConfig,
    OracleConfig,
    StrategyAddressConfig,
)
from amount_engine.models.strategy import StrategyKind


class TestEngineConfig:
    def test_defaults(self):
        config = EngineConfig()
        assert config.oracle.axis_decimals == 18
        assert config.oracle.max_price_age_seconds is None
        assert config.strategies == []
        assert config.validate_phase_lists is True

    def test_extra_fields_rejected(self):
        with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
            EngineConfig(unknown_field="bad")

    def test_nested_extra_fields_rejected(self):
        with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
            OracleConfig(axis_decimals=18, bogus=True)


class TestOracleConfig:
    def test_axis_decimals_bounds(self):
        OracleConfig(axis_decimals=0)
        OracleConfig(axis_decimals=77)
        with pytest.raises(ValidationError):
            OracleConfig(axis_decimals=78)
        with pytest.raises(ValidationError):
            OracleConfig(axis_decimals=-1)

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            OracleConfig(timeout_seconds=0.0)

    def test_max_age_at_least_one_second(self):
        assert OracleConfig(max_price_age_seconds=60).max_price_age_seconds == 60
        with pytest.raises(ValidationError):
            OracleConfig(max_price_age_seconds=0)


class TestStrategyAddressConfig:
    def test_valid(self):
        config = StrategyAddressConfig(
            address="0x76f18Cc5F9DB41905a285866B9277Ac451F3f75B", kind="chunked-unlock"
        )
        assert config.kind == StrategyKind.CHUNKED_UNLOCK

    def test_bad_address(self):
        with pytest.raises(ValidationError):
            StrategyAddressConfig(address="0x1234", kind="whitelist")

    def test_unknown_kind(self):
        with pytest.raises(ValidationError):
            StrategyAddressConfig(
                address="0x1000000000000000000000000000000000000001", kind="limit"
            )


class TestFeedConfig:
    def test_defaults_to_eight_decimals(self):
        config = FeedConfig(address="0x2000000000000000000000000000000000000001", answer=1)
        assert config.decimals == 8

    def test_answer_must_be_positive(self):
        with pytest.raises(ValidationError):
            FeedConfig(address="0x2000000000000000000000000000000000000001", answer=0)
