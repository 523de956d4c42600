"""
Signals for the workshop API.
See https://docs.djangoproject.com/en/stable/topics/signals/
"""

import django.dispatch

# A workshop moved to another phase.
# Arguments: workshop, previous_phase
phase_switched = django.dispatch.Signal()

# A workshop was closed and its final grades are ready for the gradebook.
# Arguments: workshop, grades (dict mapping user id to a dict of real grades)
grades_published = django.dispatch.Signal()
