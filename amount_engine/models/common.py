"""Common types and helpers shared across models."""

import time
from typing import TypeAlias

Address: TypeAlias = str
Amount: TypeAlias = int

ZERO_ADDRESS: Address = "0x" + "0" * 40


def normalize_address(address: str) -> Address:
    """Lower-case a hex address so allow-lists and registries compare by value."""
    if not isinstance(address, str):
        raise ValueError(f"address must be a hex string, got {address!r}")
    addr = address.strip().lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr
    if len(addr) != 42:
        raise ValueError(f"address must be 20 bytes, got {address!r}")
    int(addr[2:], 16)
    return addr


def unix_now() -> int:
    return int(time.time())
