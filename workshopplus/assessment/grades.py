"""
Helpers for the internal grade scale.

Grades are stored as decimals between 0 and 100 with five decimal places.
Before they are shown they are rescaled to the maximum grade configured in
the workshop and rounded to its display decimals.
"""

from decimal import ROUND_HALF_UP, Decimal

GRADE_PLACES = Decimal('0.00001')
MAX_GRADE = Decimal(100)


def grade_value(value):
    """
    Normalize a grade to the internal precision.

    Args:
        value (int, float, str, Decimal or None): The grade.

    Returns:
        Decimal or None

    Examples:
        >>> grade_value(66.666666666)
        Decimal('66.66667')
        >>> grade_value(None) is None
        True

    """
    if value is None:
        return None
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(GRADE_PLACES, rounding=ROUND_HALF_UP)


def grades_differ(first, second):
    """
    Check whether two grades differ at the internal precision.
    A null grade only equals another null grade.
    """
    if first is None or second is None:
        return first is not second
    return grade_value(first) != grade_value(second)


def clamp_grade(value):
    """Keep a grade within the 0-100 range."""
    value = grade_value(value)
    if value is None:
        return None
    return max(Decimal(0), min(MAX_GRADE, value))


def real_grade_value(value, max_grade, decimals=0):
    """
    Rescale a 0-100 grade to the 0-`max_grade` scale.

    Args:
        value (Decimal or None): The internal grade.
        max_grade (int): The maximum of the target scale.
        decimals (int): Number of decimal places to round to.

    Returns:
        Decimal or None

    Examples:
        >>> real_grade_value(Decimal('50'), 80)
        Decimal('40')
        >>> real_grade_value(Decimal('33.33333'), 20, decimals=2)
        Decimal('6.67')

    """
    if value is None:
        return None
    scaled = Decimal(max_grade) * grade_value(value) / MAX_GRADE
    return scaled.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)
