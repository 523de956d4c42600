"""
workshopplus Django application initialization.
"""

from django.apps import AppConfig


class WorkshopPlusConfig(AppConfig):
    """
    Configuration for the workshopplus Django application.
    """

    name = "workshopplus"
