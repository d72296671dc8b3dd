"""Fixed-point conversion between assets with different decimal precisions.

All helpers round toward zero. Amounts are never negative on this path, so
floor division is the same thing.
"""

MAX_DECIMALS = 77  # 10**77 is the largest power of ten below 2**256


def _check_decimals(decimals: int) -> None:
    if decimals < 0 or decimals > MAX_DECIMALS:
        raise ValueError(f"decimals must be in [0, {MAX_DECIMALS}], got {decimals}")


def normalize(value: int, from_decimals: int, to_decimals: int) -> int:
    """Rescale ``value`` expressed with ``from_decimals`` to ``to_decimals``.

    Scaling up multiplies by ``10**(to - from)``; scaling down floor-divides
    by ``10**(from - to)``.
    """
    if value < 0:
        raise ValueError(f"value must be >= 0, got {value}")
    _check_decimals(from_decimals)
    _check_decimals(to_decimals)
    if to_decimals >= from_decimals:
        return value * 10 ** (to_decimals - from_decimals)
    return value // 10 ** (from_decimals - to_decimals)


def mul_div(value: int, numerator: int, denominator: int) -> int:
    """Compute ``value * numerator / denominator`` with a single floor."""
    if denominator <= 0:
        raise ValueError(f"denominator must be positive, got {denominator}")
    if value < 0 or numerator < 0:
        raise ValueError("mul_div operands must be >= 0")
    return value * numerator // denominator


def convert_at_price(
    amount: int,
    price: int,
    price_decimals: int,
    from_decimals: int,
    to_decimals: int,
) -> int:
    """Convert ``amount`` of one asset into the other at ``price``.

    ``price`` is quoted as units of the target asset per unit of the source
    asset, with ``price_decimals`` decimals. Everything is multiplied before
    the one division, so the result is exact up to the final floor.
    """
    for d in (price_decimals, from_decimals, to_decimals):
        _check_decimals(d)
    return mul_div(
        amount,
        price * 10**to_decimals,
        10**price_decimals * 10**from_decimals,
    )


def convert_at_inverse_price(
    amount: int,
    price: int,
    price_decimals: int,
    from_decimals: int,
    to_decimals: int,
) -> int:
    """Inverse of :func:`convert_at_price`.

    ``price`` is still quoted as units of the *source* asset per unit of the
    *target* asset, so this divides by it.
    """
    for d in (price_decimals, from_decimals, to_decimals):
        _check_decimals(d)
    if price <= 0:
        raise ValueError(f"price must be positive, got {price}")
    return mul_div(
        amount,
        10**price_decimals * 10**to_decimals,
        price * 10**from_decimals,
    )
