"""
Aggregated grading grades, one per workshop participant.
"""

from django.db import models

from .workshop import Workshop

__all__ = ['Aggregation']


class Aggregation(models.Model):
    """
    The grade a user receives for the quality of their assessments.

    `grading_grade` is recomputed by every aggregation run. `grading_grade_over`
    is set by the teacher and is never touched by the aggregation.
    """
    workshop = models.ForeignKey(Workshop, related_name='aggregations', on_delete=models.CASCADE)
    user_id = models.CharField(max_length=40, db_index=True)
    grading_grade = models.DecimalField(max_digits=10, decimal_places=5, null=True, blank=True)
    grading_grade_over = models.DecimalField(max_digits=10, decimal_places=5, null=True, blank=True)
    graded_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        app_label = "assessment"
        unique_together = ('workshop', 'user_id')

    def __str__(self):
        return "Aggregation for {} in workshop {}".format(self.user_id, self.workshop_id)

    @property
    def final_grading_grade(self):
        if self.grading_grade_over is not None:
            return self.grading_grade_over
        return self.grading_grade
