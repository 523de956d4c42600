"""
Validation of the settings a grading evaluation runs with.
"""

from rest_framework import serializers

from workshopplus.assessment.models import ReferenceEvaluationSettings

__all__ = ['ReferenceEvaluationSettingsSerializer']


class ReferenceEvaluationSettingsSerializer(serializers.ModelSerializer):
    """
    Serializer for :class:`ReferenceEvaluationSettings`.

    The comparison level is validated against the available strictness choices.
    """
    comparison = serializers.ChoiceField(
        choices=ReferenceEvaluationSettings.COMPARISON,
        default=ReferenceEvaluationSettings.COMPARISON.fair,
    )

    class Meta:
        model = ReferenceEvaluationSettings
        fields = ('comparison',)
