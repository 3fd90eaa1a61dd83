"""
Token unit conversion.

Human amounts are Decimal, on-chain amounts are int in the token's
smallest unit. Floats never enter the conversion.
"""

from decimal import (
    MAX_EMAX,
    MIN_EMIN,
    Decimal,
    Inexact,
    Overflow,
    Underflow,
    localcontext,
)

# ERC-20 amounts are uint256
MAX_TOKEN_UNITS = 2**256 - 1


def to_smallest_unit(amount: Decimal, decimals: int) -> int:
    """
    Scale a human-readable amount to the token's smallest integer unit.

    The scaling runs with the widest exponent range and traps any
    rounding, so no amount is silently rounded, flushed to zero or
    overflowed.

    Args:
        amount: Human-readable amount (e.g. Decimal("1.5"))
        decimals: Token decimal precision

    Returns:
        Integer amount in smallest units

    Raises:
        ValueError: If amount has more fractional digits than decimals
            allows, or does not fit in a uint256
    """
    if decimals < 0:
        raise ValueError(f"Invalid token decimals: {decimals}")

    amount = Decimal(amount)
    if not amount.is_finite():
        raise ValueError(f"Amount {amount} is not a finite number")

    with localcontext() as ctx:
        ctx.prec = 100
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN
        ctx.traps[Inexact] = True
        ctx.traps[Overflow] = True
        ctx.traps[Underflow] = True
        try:
            scaled = amount.scaleb(decimals)
        except (Inexact, Overflow, Underflow):
            raise ValueError(f"Amount {amount} cannot be expressed in token units")

        if scaled != scaled.to_integral_value():
            raise ValueError(
                f"Amount {amount} has more than {decimals} decimal places"
            )
        # Bound the exponent before int() materializes the digits
        if scaled.adjusted() > len(str(MAX_TOKEN_UNITS)):
            raise ValueError(f"Amount {amount} exceeds the token supply range")

    units = int(scaled)
    if abs(units) > MAX_TOKEN_UNITS:
        raise ValueError(f"Amount {amount} exceeds the token supply range")
    return units


def format_units(value: int, decimals: int) -> str:
    """
    Format a smallest-unit integer as a human-readable decimal string.

    Whole amounts keep a trailing ".0" (500 tokens -> "500.0").

    Args:
        value: Amount in smallest units
        decimals: Token decimal precision

    Returns:
        Decimal string
    """
    sign = "-" if value < 0 else ""
    whole, fraction = divmod(abs(value), 10**decimals)
    if decimals == 0:
        return f"{sign}{whole}.0"

    fraction_str = str(fraction).rjust(decimals, "0").rstrip("0") or "0"
    return f"{sign}{whole}.{fraction_str}"
