"""
Base class of the grading evaluation strategies.
"""

from abc import ABC, abstractmethod

from workshopplus.assessment.grades import grade_value


class EvaluationStrategy(ABC):
    """
    Computes submission grades and grading grades for one workshop.
    """

    def __init__(self, workshop):
        self.workshop = workshop

    def submission_grade(self, grades):
        """
        Reduce the grades a submission received to its submission grade.

        The default is the mean of the grades weighted by the assessment
        weight. Assessments without a grade and assessments with a weight of
        zero do not count.

        Args:
            grades (iterable): (weight, grade) pairs, grade may be None.

        Returns:
            Decimal or None if no assessment counts.

        """
        weighted_sum = 0
        weights = 0
        for weight, grade in grades:
            if grade is None or not weight:
                continue
            weighted_sum += grade_value(grade) * weight
            weights += weight
        if weights == 0:
            return None
        return grade_value(weighted_sum / weights)

    def get_settings(self, data=None):
        """
        Return the settings this strategy evaluates with, updating them from `data`.
        Strategies without settings return None.
        """
        return None

    @abstractmethod
    def update_grading_grades(self, settings=None, restrict=None):
        """
        Compute and store the grading grade of the assessments.

        Args:
            settings: The value returned by `get_settings()`, loaded when None.
            restrict (None, str or list): Only update the assessments
                made by these reviewers.

        """
