"""
Evaluation of training assessments against the reference assessment.

Every student's training assessment of an example submission is compared
with the reference assessment the teacher made of the same example. The
closer the two grades, the higher the grading grade.
"""

import logging
import statistics
from decimal import Decimal

from django.db import DatabaseError
from django.db.models import Q

from workshopplus.assessment.batches import process_batches
from workshopplus.assessment.errors import EvaluationError, EvaluationRequestError
from workshopplus.assessment.grades import grade_value, grades_differ
from workshopplus.assessment.helper import normalize_restrict
from workshopplus.assessment.models import Assessment, ReferenceEvaluationSettings
from workshopplus.assessment.serializers import ReferenceEvaluationSettingsSerializer

from .base import EvaluationStrategy

logger = logging.getLogger(__name__)  # pylint: disable=invalid-name


def compare_with_reference(grade, reference_grade, factor):
    """
    Compare a training grade with the reference grade.

    Args:
        grade (Decimal): Grade given by the training assessment.
        reference_grade (Decimal): Grade given by the reference assessment.
        factor (Decimal): Grading grade points lost per point of distance.

    Returns:
        tuple of (grading grade, harshness)

    Example usage:
        >>> compare_with_reference(Decimal('60'), Decimal('80'), Decimal('1.5'))
        (Decimal('70.00000'), Decimal('20.00000'))

    """
    grade = grade_value(grade)
    reference_grade = grade_value(reference_grade)
    distance = abs(grade - reference_grade)
    grading_grade = max(Decimal(0), Decimal(100) - distance * factor)
    return grade_value(grading_grade), grade_value(reference_grade - grade)


class ReferenceEvaluation(EvaluationStrategy):
    """
    Grade training assessments by their distance from the reference assessment.

    Submission grades are the weighted mean of the peer grades.
    """

    def get_settings(self, data=None):
        """
        Load the comparison settings of the workshop, creating the defaults,
        and update them from `data` when given.

        Raises:
            EvaluationRequestError: `data` does not validate.

        """
        instance, __ = ReferenceEvaluationSettings.objects.get_or_create(workshop=self.workshop)
        if data is None:
            return instance

        serializer = ReferenceEvaluationSettingsSerializer(instance, data=data)
        if not serializer.is_valid():
            raise EvaluationRequestError(serializer.errors)
        return serializer.save()

    def update_grading_grades(self, settings=None, restrict=None):
        if settings is None:
            settings = self.get_settings()
        restrict = normalize_restrict(restrict)

        rows = Assessment.objects.filter(
            submission__workshop=self.workshop,
            submission__example=True,
        )
        if restrict is None:
            rows = rows.filter(weight__in=[Assessment.TRAINING_WEIGHT, Assessment.REFERENCE_WEIGHT])
        else:
            rows = rows.filter(
                Q(weight=Assessment.REFERENCE_WEIGHT) |
                Q(weight=Assessment.TRAINING_WEIGHT, reviewer_id__in=restrict)
            )
        # The reference assessment comes first in each example's batch
        rows = rows.order_by('submission_id', '-weight', 'id').values(
            'id', 'submission_id', 'weight', 'grade', 'grading_grade', 'grading_harshness'
        )

        factor = settings.factor
        try:
            examples = process_batches(
                rows.iterator(), 'submission_id',
                lambda batch: self._evaluate_example(batch, factor)
            )
        except DatabaseError as ex:
            msg = "Could not update the grading grades of workshop {}".format(self.workshop.id)
            logger.exception(msg)
            raise EvaluationError(msg) from ex

        logger.info(
            "Evaluated training assessments of %d example submissions in workshop %s",
            examples, self.workshop.id
        )

    def _evaluate_example(self, batch, factor):
        """
        Store the grading grade and harshness of each training assessment of
        one example submission.
        """
        reference = batch[0] if batch[0]['weight'] == Assessment.REFERENCE_WEIGHT else None
        reference_grade = None if reference is None else reference['grade']

        for row in batch:
            if row['weight'] != Assessment.TRAINING_WEIGHT:
                continue
            if reference_grade is None or row['grade'] is None:
                grading_grade, harshness = None, None
            else:
                grading_grade, harshness = compare_with_reference(row['grade'], reference_grade, factor)

            if (grades_differ(grading_grade, row['grading_grade']) or
                    grades_differ(harshness, row['grading_harshness'])):
                Assessment.objects.filter(id=row['id']).update(
                    grading_grade=grading_grade,
                    grading_harshness=harshness,
                )


class MedianReferenceEvaluation(ReferenceEvaluation):
    """
    Reference evaluation of the training assessments, with the median
    of the peer grades as submission grade.
    """

    def submission_grade(self, grades):
        counted = [grade_value(grade) for weight, grade in grades if grade is not None and weight]
        if not counted:
            return None
        return grade_value(statistics.median(counted))
