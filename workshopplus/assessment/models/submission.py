"""
Submissions to a workshop, including the example submissions
prepared by the teacher for assessment training.
"""

from django.db import models
from django.db.models.functions import Coalesce

from model_utils.models import TimeStampedModel

from .workshop import Workshop

__all__ = ['Submission']


class SubmissionQuerySet(models.QuerySet):
    """
    Shortcuts for the two kinds of submissions a workshop holds.
    """

    def real(self):
        return self.filter(example=False)

    def examples(self):
        return self.filter(example=True)

    def with_effective_grade(self):
        """Annotate the grade that counts: the override if there is one."""
        return self.annotate(effective_grade=Coalesce('grade_over', 'grade'))


class Submission(TimeStampedModel):
    """
    A piece of work submitted to a workshop.

    Real submissions are authored by students, at most one per author.
    Example submissions (`example=True`) are authored by the teacher and
    assessed by students for training.
    """
    workshop = models.ForeignKey(Workshop, related_name='submissions', on_delete=models.CASCADE)
    example = models.BooleanField(default=False, db_index=True)
    author_id = models.CharField(max_length=40, db_index=True)

    title = models.CharField(max_length=255)
    content = models.TextField(blank=True, default="")

    # Aggregated grade from the assessments, 0-100
    grade = models.DecimalField(max_digits=10, decimal_places=5, null=True, blank=True)
    graded_at = models.DateTimeField(null=True, blank=True)

    # Grade set by the teacher, takes precedence over `grade`
    grade_over = models.DecimalField(max_digits=10, decimal_places=5, null=True, blank=True)
    grade_over_by = models.CharField(max_length=40, null=True, blank=True)

    published = models.BooleanField(default=False)

    objects = SubmissionQuerySet.as_manager()

    class Meta:
        app_label = "assessment"
        ordering = ["id"]

    def __str__(self):
        kind = "Example" if self.example else "Submission"
        return '{} "{}" by {}'.format(kind, self.title, self.author_id)

    @property
    def final_grade(self):
        return self.grade if self.grade_over is None else self.grade_over
