import enum
import math
from decimal import Decimal


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


def format_number(value: float) -> str:
    """Shortest round-tripping digits, never in exponent form: 8.0 -> '8', 1e-07 -> '0.0000001'"""
    if math.isnan(value):
        return "NaN"
    elif math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return format(Decimal(repr(value)).normalize(), "f")
