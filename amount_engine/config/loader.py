"""YAML config loader with runtime get/set."""

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from amount_engine.config.defaults import DEFAULT_STRATEGIES
from amount_engine.config.schema import EngineConfig


def load_config(path: str | Path) -> EngineConfig:
    """Load and validate config from a YAML file.

    If no strategies are specified in the YAML, injects DEFAULT_STRATEGIES.
    """
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if "strategies" not in raw or not raw["strategies"]:
        raw["strategies"] = [s.model_dump() for s in DEFAULT_STRATEGIES]

    return EngineConfig(**raw)


def config_hash(config: EngineConfig) -> str:
    """Compute a deterministic SHA256 hash of the config."""
    data = config.model_dump_json(indent=None)
    return hashlib.sha256(data.encode()).hexdigest()[:16]


def get_config_value(config: EngineConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'oracle.axis_decimals'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(config: EngineConfig, dotted_key: str, value: Any) -> EngineConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new EngineConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        target = target[int(part)] if isinstance(target, list) else target[part]
    # Attempt type coercion for common cases
    old_value = target.get(parts[-1])
    if isinstance(old_value, bool) and isinstance(value, str):
        value = value.lower() in ("1", "true", "yes", "on")
    elif isinstance(old_value, int) and isinstance(value, str):
        value = int(value)
    elif isinstance(old_value, float) and isinstance(value, str):
        value = float(value)
    target[parts[-1]] = value
    return EngineConfig(**data)
