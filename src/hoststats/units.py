"""Memory size unit conversion."""

from enum import IntEnum

# Ratio between two adjacent units
UNIT_FACTOR = 1024


class Unit(IntEnum):
    """Memory size units, ordered by magnitude."""

    BYTES = 0
    KILOBYTES = 1
    MEGABYTES = 2
    GIGABYTES = 3
    TERABYTES = 4


def convert(value: float, from_unit: Unit, to_unit: Unit) -> float:
    """
    Convert a memory size between units.

    Negative values are not validated and convert like any other number.

    Args:
        value: Size expressed in from_unit.
        from_unit: Unit of value.
        to_unit: Unit to express the result in.
    """
    steps = int(from_unit) - int(to_unit)
    if steps >= 0:
        return value * UNIT_FACTOR**steps
    return value / UNIT_FACTOR**-steps
