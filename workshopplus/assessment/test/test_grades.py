"""
Tests for the grade scale helpers.
"""
from decimal import Decimal
from unittest import TestCase

import ddt

from workshopplus.assessment.grades import clamp_grade, grade_value, grades_differ, real_grade_value


@ddt.ddt
class GradeHelpersTest(TestCase):
    """
    Tests for rounding, comparing and rescaling grades.
    """

    @ddt.data(
        (None, None),
        (50, Decimal('50.00000')),
        (66.666666666, Decimal('66.66667')),
        ('12.345678', Decimal('12.34568')),
        (Decimal('0.000001'), Decimal('0.00000')),
    )
    @ddt.unpack
    def test_grade_value(self, value, expected):
        self.assertEqual(grade_value(value), expected)

    @ddt.data(
        (None, None, False),
        (None, 0, True),
        (0, None, True),
        (Decimal('50'), 50.000001, False),
        (Decimal('50'), Decimal('50.0001'), True),
    )
    @ddt.unpack
    def test_grades_differ(self, first, second, expected):
        self.assertEqual(grades_differ(first, second), expected)

    @ddt.data(
        (-5, Decimal('0')),
        (105, Decimal('100')),
        (42.5, Decimal('42.5')),
    )
    @ddt.unpack
    def test_clamp_grade(self, value, expected):
        self.assertEqual(clamp_grade(value), expected)

    @ddt.data(
        (Decimal('50'), 80, 0, Decimal('40')),
        (Decimal('100'), 20, 0, Decimal('20')),
        (Decimal('33.33333'), 20, 2, Decimal('6.67')),
        (Decimal('12.5'), 80, 1, Decimal('10.0')),
        (None, 80, 0, None),
    )
    @ddt.unpack
    def test_real_grade_value(self, value, max_grade, decimals, expected):
        self.assertEqual(real_grade_value(value, max_grade, decimals), expected)
