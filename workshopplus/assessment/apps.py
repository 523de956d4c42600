"""
workshopplus.assessment Django application initialization.
"""

from django.apps import AppConfig


class WorkshopAssessmentConfig(AppConfig):
    """
    Configuration for the workshopplus.assessment Django application.
    """

    name = "workshopplus.assessment"
    label = "assessment"
