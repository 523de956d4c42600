"""
The workshop activity and its settings.

NOTE: We've switched to migrations, so if you make any edits to this file, you
need to then generate a matching migration for it using:

    ./manage.py makemigrations assessment

"""

from decimal import Decimal

from django.conf import settings
from django.db import models

from model_utils import Choices
from model_utils.models import TimeStampedModel

from workshopplus.assessment.grades import real_grade_value

__all__ = ['Workshop', 'ReferenceEvaluationSettings']

def default_evaluation():
    """Name of the evaluation strategy new workshops use."""
    return getattr(settings, 'WORKSHOPPLUS_DEFAULT_EVALUATION', 'reference')


class Workshop(TimeStampedModel):
    """
    A peer assessment activity in a course.

    The workshop moves through its phases in order: it is set up by the
    teacher, students submit their work, then assess their peers, the
    teacher evaluates the assessments and finally closes the workshop.
    """
    PHASE = Choices(
        (10, 'setup', 'Setup'),
        (20, 'submission', 'Submission'),
        (30, 'assessment', 'Assessment'),
        (40, 'evaluation', 'Grading evaluation'),
        (50, 'closed', 'Closed'),
    )

    EXAMPLES_MODE = Choices(
        (0, 'voluntary', 'Assessment of example submissions is voluntary'),
        (1, 'before_submission', 'Examples must be assessed before own submission'),
        (2, 'before_assessment', 'Examples are available after own submission and must be assessed before peer assessment'),
    )

    course_id = models.CharField(max_length=255, db_index=True)
    item_id = models.CharField(max_length=255, db_index=True)
    name = models.CharField(max_length=255)

    phase = models.PositiveSmallIntegerField(choices=PHASE, default=PHASE.setup)

    # Maximum grades on the real scale
    grade = models.PositiveIntegerField(default=80)
    grading_grade = models.PositiveIntegerField(default=20)
    grade_decimals = models.PositiveSmallIntegerField(default=0)

    use_examples = models.BooleanField(default=False)
    examples_mode = models.PositiveSmallIntegerField(choices=EXAMPLES_MODE, default=EXAMPLES_MODE.voluntary)

    evaluation = models.CharField(max_length=30, default=default_evaluation)

    class Meta:
        app_label = "assessment"
        unique_together = ('course_id', 'item_id')

    def __str__(self):
        return "{} ({}/{})".format(self.name, self.course_id, self.item_id)

    @classmethod
    def available_phases(cls):
        """Return the phase codes in the order the workshop goes through them."""
        return [code for code, __ in cls.PHASE]

    def real_grade(self, value):
        """Rescale an internal grade to the submission grade scale."""
        return real_grade_value(value, self.grade, self.grade_decimals)

    def real_grading_grade(self, value):
        """Rescale an internal grade to the grading grade scale."""
        return real_grade_value(value, self.grading_grade, self.grade_decimals)

    @property
    def max_real_grade(self):
        return self.real_grade(100)

    @property
    def max_real_grading_grade(self):
        return self.real_grading_grade(100)

    def assessing_examples_allowed(self):
        """
        Check whether example submissions can be assessed in the current phase.

        Returns:
            None if the workshop does not use examples at all, otherwise bool.

        """
        if not self.use_examples:
            return None
        if self.examples_mode == self.EXAMPLES_MODE.voluntary:
            return True
        if self.examples_mode == self.EXAMPLES_MODE.before_submission:
            return self.phase == self.PHASE.submission
        if self.examples_mode == self.EXAMPLES_MODE.before_assessment:
            return self.phase == self.PHASE.assessment
        return False


class ReferenceEvaluationSettings(models.Model):
    """
    How strictly training assessments are compared to the reference assessment.
    """
    COMPARISON = Choices(
        (1, 'very_lax', 'very lax'),
        (2, 'lax_plus', 'lax +'),
        (3, 'lax', 'lax'),
        (4, 'fair_minus', 'fair -'),
        (5, 'fair', 'fair'),
        (6, 'fair_plus', 'fair +'),
        (7, 'strict', 'strict'),
        (8, 'strict_plus', 'strict +'),
        (9, 'very_strict', 'very strict'),
    )

    workshop = models.OneToOneField(Workshop, related_name='reference_settings', on_delete=models.CASCADE)
    comparison = models.PositiveSmallIntegerField(choices=COMPARISON, default=COMPARISON.fair)

    class Meta:
        app_label = "assessment"

    @property
    def factor(self):
        """Points of grading grade lost per point of distance from the reference."""
        return Decimal(self.comparison + 1) / 4
