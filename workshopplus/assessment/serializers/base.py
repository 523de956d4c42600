"""
Serializers are created to ensure models do not have to be accessed outside the
scope of the workshop APIs.
"""

from rest_framework import serializers

from workshopplus.assessment.models import Aggregation, Assessment, Submission, Workshop

__all__ = [
    'WorkshopSerializer', 'SubmissionSerializer', 'AssessmentSerializer', 'AggregationSerializer',
    'serialize_submissions', 'serialize_assessments',
]


class WorkshopSerializer(serializers.ModelSerializer):
    """Serializer for :class:`Workshop`"""

    class Meta:
        model = Workshop
        fields = (
            'id', 'course_id', 'item_id', 'name', 'phase',
            'grade', 'grading_grade', 'grade_decimals',
            'use_examples', 'examples_mode', 'evaluation',
        )


class SubmissionSerializer(serializers.ModelSerializer):
    """Serializer for :class:`Submission`, without the content."""
    final_grade = serializers.SerializerMethodField()

    class Meta:
        model = Submission
        fields = (
            'id', 'workshop', 'example', 'author_id', 'title',
            'created', 'modified', 'grade', 'graded_at',
            'grade_over', 'grade_over_by', 'published',

            # Computed
            'final_grade',
        )

    def get_final_grade(self, obj):
        effective = getattr(obj, 'effective_grade', None)
        if effective is not None:
            return effective
        return obj.grade if obj.grade_over is None else obj.grade_over


class AssessmentSerializer(serializers.ModelSerializer):
    """Serializer for :class:`Assessment`, with the ids of the assessed submission."""
    author_id = serializers.ReadOnlyField(source='submission.author_id')
    title = serializers.ReadOnlyField(source='submission.title')

    class Meta:
        model = Assessment
        fields = (
            'id', 'submission', 'reviewer_id', 'weight', 'created', 'assessed_at',
            'grade', 'grading_grade', 'grading_grade_over', 'grading_grade_over_by',
            'grading_harshness', 'feedback_author', 'feedback_reviewer',

            # Related
            'author_id', 'title',
        )


class AggregationSerializer(serializers.ModelSerializer):
    """Serializer for :class:`Aggregation`"""

    class Meta:
        model = Aggregation
        fields = ('workshop', 'user_id', 'grading_grade', 'grading_grade_over', 'graded_at')


def serialize_submissions(submissions_qset):
    """Serialize a queryset (or list) of submissions."""
    return [SubmissionSerializer(submission).data for submission in submissions_qset]


def serialize_assessments(assessments_qset):
    """Serialize a queryset (or list) of assessments."""
    return [AssessmentSerializer(assessment).data for assessment in assessments_qset]
