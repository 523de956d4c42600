"""
Assessments of workshop submissions.

A single model covers the three kinds of assessment, told apart by weight:

* weight 0: training assessment of an example submission by a student.
* weight 1: on an example submission, the reference assessment made by the teacher.
* weight 1-16: peer assessment of a real submission, weighted in the submission grade.

"""

from django.db import models

from .submission import Submission

__all__ = ['Assessment', 'AssessmentGrade']


class AssessmentQuerySet(models.QuerySet):
    """
    Filters shared by the assessment accessors.
    """

    def of_examples(self):
        return self.filter(submission__example=True)

    def of_real_submissions(self):
        return self.filter(submission__example=False)

    def training(self):
        return self.filter(weight=Assessment.TRAINING_WEIGHT)

    def reference(self):
        return self.filter(weight=Assessment.REFERENCE_WEIGHT)


class Assessment(models.Model):
    """
    The assessment of one submission by one reviewer.

    `grade` is the grade the reviewer gave to the submission. `grading_grade`
    measures how good the assessment itself was, as computed by the grading
    evaluation strategy of the workshop.
    """
    TRAINING_WEIGHT = 0
    REFERENCE_WEIGHT = 1
    MIN_WEIGHT = 0
    MAX_WEIGHT = 16

    submission = models.ForeignKey(Submission, related_name='assessments', on_delete=models.CASCADE)
    reviewer_id = models.CharField(max_length=40, db_index=True)
    weight = models.PositiveSmallIntegerField(default=1)

    created = models.DateTimeField(auto_now_add=True)
    # Not set until the reviewer actually assesses the submission
    assessed_at = models.DateTimeField(null=True, blank=True)

    grade = models.DecimalField(max_digits=10, decimal_places=5, null=True, blank=True)

    grading_grade = models.DecimalField(max_digits=10, decimal_places=5, null=True, blank=True)
    grading_grade_over = models.DecimalField(max_digits=10, decimal_places=5, null=True, blank=True)
    grading_grade_over_by = models.CharField(max_length=40, null=True, blank=True)

    # Reference grade minus the grade given, positive when the reviewer was harsher
    grading_harshness = models.DecimalField(max_digits=10, decimal_places=5, null=True, blank=True)

    feedback_author = models.TextField(blank=True, default="")
    feedback_reviewer = models.TextField(blank=True, default="")

    objects = AssessmentQuerySet.as_manager()

    class Meta:
        app_label = "assessment"
        ordering = ["id"]
        unique_together = ('submission', 'reviewer_id')

    def __str__(self):
        return "Assessment of submission {} by {} (weight {})".format(
            self.submission_id, self.reviewer_id, self.weight
        )

    @property
    def is_reference(self):
        return self.weight == self.REFERENCE_WEIGHT and self.submission.example

    @property
    def is_training(self):
        return self.weight == self.TRAINING_WEIGHT

    @property
    def effective_grading_grade(self):
        if self.grading_grade_over is not None:
            return self.grading_grade_over
        return self.grading_grade

    @classmethod
    def clamp_weight(cls, weight):
        return max(cls.MIN_WEIGHT, min(cls.MAX_WEIGHT, int(weight)))


class AssessmentGrade(models.Model):
    """
    The grade an assessment gave for one dimension of the assessment form.
    """
    assessment = models.ForeignKey(Assessment, related_name='dimension_grades', on_delete=models.CASCADE)
    dimension_id = models.PositiveIntegerField()
    grade = models.DecimalField(max_digits=10, decimal_places=5)
    peer_comment = models.TextField(blank=True, default="")

    class Meta:
        app_label = "assessment"
        unique_together = ('assessment', 'dimension_id')
