"""ABI codec for the strategy parameter blocks and phase lists.

Layouts are bit-exact with what order signers commit to:

    amount data   calculator address (20 raw bytes) ++ extra data
    phase list    (bool oracleRequired, address oracle,
                   (uint256 start, uint256 end, address strategy, bytes data)[])
    chunked       (uint256 start, uint256 interval, uint256 chunk,
                   [uint256 totalCap,] address oracle, uint8 giveDec, uint8 recvDec)
    linear decay  (uint256 (start << 128) | end, uint256 counterStart, uint256 counterEnd)
    whitelist     (uint256 rate, address[] takers, uint8 giveDec, uint8 recvDec)
    hybrid        nine uint256 words, see HybridParams
"""

from collections.abc import Callable

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError, EncodingError

from amount_engine.models.common import ZERO_ADDRESS, Address, normalize_address
from amount_engine.models.errors import MalformedExtraData
from amount_engine.models.phase import AxisMode, Phase, PhaseList
from amount_engine.models.strategy import (
    ChunkedUnlockParams,
    HybridParams,
    LinearDecayParams,
    StrategyKind,
    StrategyParams,
    TimeWindow,
    WhitelistParams,
)

WORD = 32
ADDRESS_BYTES = 20

CHUNKED_TYPES = ["uint256", "uint256", "uint256", "address", "uint8", "uint8"]
CHUNKED_CAPPED_TYPES = ["uint256", "uint256", "uint256", "uint256", "address", "uint8", "uint8"]
LINEAR_DECAY_TYPES = ["uint256", "uint256", "uint256"]
WHITELIST_TYPES = ["uint256", "address[]", "uint8", "uint8"]
HYBRID_TYPES = ["uint256"] * 9
PHASE_LIST_TYPES = ["bool", "address", "(uint256,uint256,address,bytes)[]"]


def _decode(types: list[str], data: bytes, what: str) -> tuple:
    try:
        return decode(types, data)
    except (DecodingError, ValueError, TypeError, OverflowError) as e:
        raise MalformedExtraData(f"Could not decode {what}: {e}") from e


def _encode(types: list[str], values: list, what: str) -> bytes:
    try:
        return encode(types, values)
    except (EncodingError, ValueError, TypeError) as e:
        raise MalformedExtraData(f"Could not encode {what}: {e}") from e


# Amount data


def split_amount_data(data: bytes) -> tuple[Address, bytes]:
    """Split an order's amount data into calculator reference and extra data."""
    if len(data) < ADDRESS_BYTES:
        raise MalformedExtraData(
            f"Amount data is {len(data)} bytes, shorter than a calculator address"
        )
    return "0x" + data[:ADDRESS_BYTES].hex(), bytes(data[ADDRESS_BYTES:])


def build_amount_data(calculator: Address, extra_data: bytes) -> bytes:
    return bytes.fromhex(normalize_address(calculator)[2:]) + extra_data


# Chunked unlock


def decode_chunked_unlock(data: bytes) -> ChunkedUnlockParams:
    """Decode either layout; the capped one is one word longer."""
    if len(data) == len(CHUNKED_CAPPED_TYPES) * WORD:
        start, interval, chunk, cap, oracle, give_dec, recv_dec = _decode(
            CHUNKED_CAPPED_TYPES, data, "chunked unlock data"
        )
    elif len(data) == len(CHUNKED_TYPES) * WORD:
        start, interval, chunk, oracle, give_dec, recv_dec = _decode(
            CHUNKED_TYPES, data, "chunked unlock data"
        )
        cap = None
    else:
        raise MalformedExtraData(f"Chunked unlock data has unexpected length {len(data)}")

    params = ChunkedUnlockParams(
        start=start,
        interval=interval,
        chunk_size=chunk,
        oracle=normalize_address(oracle),
        give_decimals=give_dec,
        receive_decimals=recv_dec,
        total_cap=cap,
    )
    if params.interval == 0 or params.chunk_size == 0:
        raise MalformedExtraData("Chunked unlock interval and chunk size must be non-zero")
    return params


def encode_chunked_unlock(params: ChunkedUnlockParams) -> bytes:
    head = [params.start, params.interval, params.chunk_size]
    tail = [params.oracle, params.give_decimals, params.receive_decimals]
    if params.total_cap is None:
        return _encode(CHUNKED_TYPES, head + tail, "chunked unlock data")
    return _encode(
        CHUNKED_CAPPED_TYPES, head + [params.total_cap] + tail, "chunked unlock data"
    )


# Linear decay


def decode_linear_decay(data: bytes) -> LinearDecayParams:
    if len(data) != len(LINEAR_DECAY_TYPES) * WORD:
        raise MalformedExtraData(f"Linear decay data has unexpected length {len(data)}")
    packed, counter_start, counter_end = _decode(
        LINEAR_DECAY_TYPES, data, "linear decay data"
    )
    window = TimeWindow.unpack(packed)
    if window.end <= window.start:
        raise MalformedExtraData(
            f"Decay window end {window.end} must be after start {window.start}"
        )
    return LinearDecayParams(window=window, counter_start=counter_start, counter_end=counter_end)


def encode_linear_decay(params: LinearDecayParams) -> bytes:
    return _encode(
        LINEAR_DECAY_TYPES,
        [params.window.pack(), params.counter_start, params.counter_end],
        "linear decay data",
    )


# Whitelist


def decode_whitelist(data: bytes) -> WhitelistParams:
    rate, takers, give_dec, recv_dec = _decode(WHITELIST_TYPES, data, "whitelist data")
    if rate == 0:
        raise MalformedExtraData("Whitelist fixed rate must be non-zero")
    return WhitelistParams(
        fixed_rate=rate,
        allowed_takers=frozenset(normalize_address(t) for t in takers),
        give_decimals=give_dec,
        receive_decimals=recv_dec,
    )


def encode_whitelist(params: WhitelistParams) -> bytes:
    return _encode(
        WHITELIST_TYPES,
        [
            params.fixed_rate,
            sorted(params.allowed_takers),
            params.give_decimals,
            params.receive_decimals,
        ],
        "whitelist data",
    )


# Hybrid


def decode_hybrid(data: bytes) -> HybridParams:
    if len(data) != len(HYBRID_TYPES) * WORD:
        raise MalformedExtraData(f"Hybrid data has unexpected length {len(data)}")
    (
        switch_time,
        twap_start_price,
        twap_end_price,
        twap_start,
        twap_end,
        dutch_start_price,
        dutch_end_price,
        dutch_start,
        dutch_end,
    ) = _decode(HYBRID_TYPES, data, "hybrid data")
    return HybridParams(
        switch_time=switch_time,
        twap_start_price=twap_start_price,
        twap_end_price=twap_end_price,
        twap_window=TimeWindow(twap_start, twap_end),
        dutch_start_price=dutch_start_price,
        dutch_end_price=dutch_end_price,
        dutch_window=TimeWindow(dutch_start, dutch_end),
    )


def encode_hybrid(params: HybridParams) -> bytes:
    return _encode(
        HYBRID_TYPES,
        [
            params.switch_time,
            params.twap_start_price,
            params.twap_end_price,
            params.twap_window.start,
            params.twap_window.end,
            params.dutch_start_price,
            params.dutch_end_price,
            params.dutch_window.start,
            params.dutch_window.end,
        ],
        "hybrid data",
    )


DECODERS: dict[StrategyKind, Callable[[bytes], StrategyParams]] = {
    StrategyKind.CHUNKED_UNLOCK: decode_chunked_unlock,
    StrategyKind.LINEAR_DECAY: decode_linear_decay,
    StrategyKind.WHITELIST: decode_whitelist,
    StrategyKind.HYBRID: decode_hybrid,
}

ENCODERS: dict[StrategyKind, Callable] = {
    StrategyKind.CHUNKED_UNLOCK: encode_chunked_unlock,
    StrategyKind.LINEAR_DECAY: encode_linear_decay,
    StrategyKind.WHITELIST: encode_whitelist,
    StrategyKind.HYBRID: encode_hybrid,
}


def decode_strategy(kind: StrategyKind, data: bytes) -> StrategyParams:
    decoder = DECODERS.get(kind)
    if decoder is None:
        raise MalformedExtraData(f"Strategy kind {kind} has no parameter layout")
    return decoder(data)


def encode_strategy(kind: StrategyKind, params: StrategyParams) -> bytes:
    encoder = ENCODERS.get(kind)
    if encoder is None:
        raise MalformedExtraData(f"Strategy kind {kind} has no parameter layout")
    return encoder(params)


# Phase list


def decode_phase_list(
    data: bytes,
    resolve: Callable[[Address], StrategyKind],
    mode: AxisMode = AxisMode.TIME,
) -> PhaseList:
    """Decode a phase list, resolving each strategy reference with ``resolve``.

    The leading flag marks the oracle as required. The axis is not on the
    wire: it comes from the calculator the blob was addressed to.
    Phase order is kept as encoded; validation is the caller's call.
    """
    oracle_required, oracle, entries = _decode(PHASE_LIST_TYPES, data, "phase list")
    phases = []
    for start, end, reference, extra in entries:
        kind = resolve(normalize_address(reference))
        phases.append(
            Phase(
                window=TimeWindow(start, end),
                strategy=kind,
                params=decode_strategy(kind, extra),
                extra_data=bytes(extra),
            )
        )
    oracle_addr = normalize_address(oracle)
    return PhaseList(
        mode=mode,
        oracle=oracle_addr if int(oracle_addr, 16) else None,
        phases=tuple(phases),
        oracle_required=bool(oracle_required),
    )


def encode_phase_list(
    phase_list: PhaseList, reference_for: Callable[[StrategyKind], Address]
) -> bytes:
    entries = []
    for phase in phase_list.phases:
        extra = phase.extra_data or encode_strategy(phase.strategy, phase.params)
        entries.append((phase.start, phase.end, reference_for(phase.strategy), extra))
    oracle = phase_list.oracle or ZERO_ADDRESS
    return _encode(
        PHASE_LIST_TYPES,
        [phase_list.oracle_required, oracle, entries],
        "phase list",
    )
