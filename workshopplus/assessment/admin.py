"""
Django admin models for workshopplus
"""

from django.contrib import admin

from workshopplus.assessment.models import (
    Aggregation, Assessment, AssessmentGrade, ReferenceEvaluationSettings, Submission, Workshop,
)


class ReferenceEvaluationSettingsInline(admin.StackedInline):
    """
    Django admin model for the reference evaluation settings of a workshop.
    """
    model = ReferenceEvaluationSettings
    extra = 0


class WorkshopAdmin(admin.ModelAdmin):
    """
    Django admin model for Workshops.
    """
    list_display = ('id', 'name', 'course_id', 'item_id', 'phase', 'evaluation')
    list_filter = ('phase', 'evaluation', 'use_examples')
    search_fields = ('id', 'name', 'course_id', 'item_id')
    inlines = (ReferenceEvaluationSettingsInline,)


class SubmissionAdmin(admin.ModelAdmin):
    """
    Django admin model for Submissions.
    """
    list_display = ('id', 'workshop', 'example', 'author_id', 'title', 'grade', 'grade_over', 'published')
    list_filter = ('example', 'published')
    search_fields = ('id', 'author_id', 'title')
    raw_id_fields = ('workshop',)


class AssessmentGradeInline(admin.TabularInline):
    """
    Django admin model for the dimension grades of an assessment.
    """
    model = AssessmentGrade
    extra = 0


class AssessmentAdmin(admin.ModelAdmin):
    """
    Django admin model for Assessments.
    """
    list_display = (
        'id', 'submission', 'reviewer_id', 'weight', 'grade',
        'grading_grade', 'grading_grade_over', 'grading_harshness',
    )
    list_filter = ('weight',)
    search_fields = ('id', 'reviewer_id', 'submission__author_id')
    raw_id_fields = ('submission',)
    readonly_fields = ('grading_grade', 'grading_harshness')
    inlines = (AssessmentGradeInline,)


class AggregationAdmin(admin.ModelAdmin):
    """
    Django admin model for Aggregations.
    """
    list_display = ('id', 'workshop', 'user_id', 'grading_grade', 'grading_grade_over', 'graded_at')
    search_fields = ('id', 'user_id')
    raw_id_fields = ('workshop',)
    readonly_fields = ('grading_grade', 'graded_at')


admin.site.register(Workshop, WorkshopAdmin)
admin.site.register(Submission, SubmissionAdmin)
admin.site.register(Assessment, AssessmentAdmin)
admin.site.register(Aggregation, AggregationAdmin)
