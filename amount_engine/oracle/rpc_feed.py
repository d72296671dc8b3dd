"""JSON-RPC reader for Chainlink-style aggregator price feeds."""

import logging

import httpx
from eth_abi import decode
from eth_abi.exceptions import DecodingError

from amount_engine.models.common import Address, normalize_address
from amount_engine.models.errors import OracleReadInvalid
from amount_engine.models.oracle import PriceReading

logger = logging.getLogger(__name__)

LATEST_ROUND_DATA_SELECTOR = "0xfeaf968c"
DECIMALS_SELECTOR = "0x313ce567"


class RpcPriceFeed:
    def __init__(self, rpc_url: str, oracle: Address, timeout: float = 10.0):
        self.rpc_url = rpc_url
        self.oracle = normalize_address(oracle)
        self.timeout = timeout
        self._decimals: int | None = None

    def latest_price(self) -> PriceReading:
        """Read ``latestRoundData()`` and ``decimals()`` from the aggregator.

        The decimals are read once and cached; the answer is read every call.
        """
        if self._decimals is None:
            raw = self._eth_call(DECIMALS_SELECTOR)
            (self._decimals,) = self._decode(["uint8"], raw)
        raw = self._eth_call(LATEST_ROUND_DATA_SELECTOR)
        _round_id, answer, _started_at, updated_at, _answered_in = self._decode(
            ["uint80", "int256", "uint256", "uint256", "uint80"], raw
        )
        return PriceReading(answer=answer, decimals=self._decimals, updated_at=updated_at)

    def _eth_call(self, data: str) -> bytes:
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "eth_call",
            "params": [{"to": self.oracle, "data": data}, "latest"],
        }
        try:
            resp = httpx.post(self.rpc_url, json=payload, timeout=self.timeout)
            resp.raise_for_status()
            body = resp.json()
        except (httpx.HTTPStatusError, httpx.RequestError) as e:
            logger.error("RPC eth_call error for oracle=%s: %s", self.oracle, e)
            raise

        if "error" in body:
            raise OracleReadInvalid(
                f"RPC error from oracle {self.oracle}: {body['error']}"
            )
        result = body.get("result")
        if not isinstance(result, str) or not result.startswith("0x"):
            raise OracleReadInvalid(f"Unexpected RPC result from oracle {self.oracle}")
        return bytes.fromhex(result[2:])

    def _decode(self, types: list[str], raw: bytes) -> tuple:
        try:
            return decode(types, raw)
        except (DecodingError, ValueError) as e:
            raise OracleReadInvalid(
                f"Could not decode oracle {self.oracle} response: {e}"
            ) from e
