"""Error taxonomy shared by every strategy and the phase dispatcher.

Every failure aborts the whole fill attempt. ``retryable`` tells the caller
whether the same request can succeed later without changing the order.
"""

from enum import StrEnum


class ErrorKind(StrEnum):
    NO_ACTIVE_PHASE = "NO_ACTIVE_PHASE"
    REQUESTED_EXCEEDS_UNLOCKED = "REQUESTED_EXCEEDS_UNLOCKED"
    NOT_ALLOWED_TAKER = "NOT_ALLOWED_TAKER"
    ORACLE_READ_INVALID = "ORACLE_READ_INVALID"
    MALFORMED_EXTRA_DATA = "MALFORMED_EXTRA_DATA"
    MALFORMED_PHASE_LIST = "MALFORMED_PHASE_LIST"
    UNKNOWN_STRATEGY = "UNKNOWN_STRATEGY"


class CalculationError(Exception):
    kind: ErrorKind = ErrorKind.MALFORMED_EXTRA_DATA
    retryable: bool = False

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.kind.value)
        self.detail = detail


class NoActivePhase(CalculationError):
    kind = ErrorKind.NO_ACTIVE_PHASE

    def __init__(self, axis: int, detail: str = ""):
        super().__init__(detail or f"No active phase for axis {axis}")
        self.axis = axis


class RequestedExceedsUnlocked(CalculationError):
    kind = ErrorKind.REQUESTED_EXCEEDS_UNLOCKED
    retryable = True

    def __init__(self, requested: int, unlocked: int):
        super().__init__(
            f"Requested maker amount exceeds unlocked: {requested} > {unlocked}"
        )
        self.requested = requested
        self.unlocked = unlocked


class NotAllowedTaker(CalculationError):
    kind = ErrorKind.NOT_ALLOWED_TAKER

    def __init__(self, taker: str):
        super().__init__(f"Taker {taker} is not allowed")
        self.taker = taker


class OracleReadInvalid(CalculationError):
    kind = ErrorKind.ORACLE_READ_INVALID


class MalformedExtraData(CalculationError):
    kind = ErrorKind.MALFORMED_EXTRA_DATA


class MalformedPhaseList(MalformedExtraData):
    kind = ErrorKind.MALFORMED_PHASE_LIST


class UnknownStrategy(MalformedExtraData):
    kind = ErrorKind.UNKNOWN_STRATEGY

    def __init__(self, reference: str):
        super().__init__(f"No strategy registered for {reference}")
        self.reference = reference
