"""
Column types shared by the models.

Money is held as a whole number of ten-thousandths in a BIGINT
column. SQLite has no exact decimal storage (Numeric values are
written as floats), while integer columns store and SUM exactly
on every backend.
"""

from decimal import Decimal

from sqlalchemy import BigInteger
from sqlalchemy.types import TypeDecorator

# Decimal places kept for every amount
AMOUNT_SCALE = 4
AMOUNT_PLACES = Decimal(1).scaleb(-AMOUNT_SCALE)

# Exclusive bound on a single amount. 14 integer digits plus the
# 4 decimal places stay well inside a signed 64-bit integer.
MAX_AMOUNT = Decimal(10) ** 14


def fits_amount(amount: Decimal) -> bool:
    """True if amount is finite, below MAX_AMOUNT, and has at most 4 places."""
    if not amount.is_finite() or abs(amount) >= MAX_AMOUNT:
        return False
    return amount == amount.quantize(AMOUNT_PLACES)


class Money(TypeDecorator):
    """Decimal in Python, integer ten-thousandths in the database."""

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        minor = Decimal(value).scaleb(AMOUNT_SCALE)
        if minor != minor.to_integral_value():
            raise ValueError(
                f"{value} has more than {AMOUNT_SCALE} decimal places"
            )
        return int(minor)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        # Postgres returns SUM(bigint) as numeric, SQLite as int
        return Decimal(int(value)).scaleb(-AMOUNT_SCALE)
