"""
Fixed-point decimal arithmetic on integers.

Rates are computed by long division into decimal strings instead of
floats. Truncation is exact this way: the integer part of a rate that is
compared against a threshold never depends on binary rounding.
"""

DEFAULT_PRECISION = 12


class DivisionByZero(ZeroDivisionError):
    """Divisor was zero."""

    pass


def divide(dividend: int, divisor: int, precision: int = DEFAULT_PRECISION) -> str:
    """
    Divide two integers into a decimal string.

    Digits after the decimal point are produced one at a time from the
    running remainder, stopping when it reaches zero or after `precision`
    digits. The result is truncated toward zero, never rounded.

    Args:
        dividend: Number to divide
        divisor: Number to divide by
        precision: Maximum number of fractional digits

    Returns:
        Quotient such as "5", "50.5" or "-0.25"

    Raises:
        DivisionByZero: If divisor is 0
    """
    if divisor == 0:
        raise DivisionByZero("division by 0")

    negative = (dividend < 0) != (divisor < 0)
    quotient, remainder = divmod(abs(dividend), abs(divisor))

    digits = []
    while remainder and len(digits) < precision:
        digit, remainder = divmod(remainder * 10, abs(divisor))
        digits.append(str(digit))

    text = str(quotient)
    if digits:
        text += "." + "".join(digits)

    if negative and (quotient or any(d != "0" for d in digits)):
        text = "-" + text

    return text


def integer_part(value: str) -> int:
    """Truncated integer part of a decimal string ("-0.5" gives 0)."""
    return int(value.partition(".")[0])


def is_negative(value: str) -> bool:
    """True if the decimal string is below zero."""
    return value.startswith("-")


def format_decimal(value: str, places: int = 1) -> str:
    """
    Render a decimal string with a fixed number of fractional digits.

    Rounds on the decimal digits themselves, ties to even like printf,
    e.g. "2.26" -> "2.3", "2.25" -> "2.2", "2.35" -> "2.4", "7" -> "7.0".

    Args:
        value: Decimal string as returned by divide()
        places: Number of fractional digits to keep

    Returns:
        Formatted decimal string
    """
    sign = "-" if is_negative(value) else ""
    whole, _, frac = value.lstrip("-").partition(".")
    frac = frac.ljust(places + 1, "0")

    scaled = int(whole + frac[:places])
    dropped = frac[places:]
    if dropped[0] > "5":
        scaled += 1
    elif dropped[0] == "5" and (dropped[1:].strip("0") or scaled % 2):
        scaled += 1

    if scaled == 0:
        sign = ""

    digits = str(scaled).rjust(places + 1, "0")
    if places == 0:
        return sign + digits
    return f"{sign}{digits[:-places]}.{digits[-places:]}"
