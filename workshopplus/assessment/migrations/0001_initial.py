# pylint: skip-file

from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone
import model_utils.fields

import workshopplus.assessment.models.workshop


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Workshop',
            fields=[
                ('id', models.AutoField(verbose_name='ID', serialize=False, auto_created=True, primary_key=True)),
                ('created', model_utils.fields.AutoCreatedField(default=django.utils.timezone.now, editable=False, verbose_name='created')),
                ('modified', model_utils.fields.AutoLastModifiedField(default=django.utils.timezone.now, editable=False, verbose_name='modified')),
                ('course_id', models.CharField(max_length=255, db_index=True)),
                ('item_id', models.CharField(max_length=255, db_index=True)),
                ('name', models.CharField(max_length=255)),
                ('phase', models.PositiveSmallIntegerField(choices=[(10, 'Setup'), (20, 'Submission'), (30, 'Assessment'), (40, 'Grading evaluation'), (50, 'Closed')], default=10)),
                ('grade', models.PositiveIntegerField(default=80)),
                ('grading_grade', models.PositiveIntegerField(default=20)),
                ('grade_decimals', models.PositiveSmallIntegerField(default=0)),
                ('use_examples', models.BooleanField(default=False)),
                ('examples_mode', models.PositiveSmallIntegerField(choices=[(0, 'Assessment of example submissions is voluntary'), (1, 'Examples must be assessed before own submission'), (2, 'Examples are available after own submission and must be assessed before peer assessment')], default=0)),
                ('evaluation', models.CharField(max_length=30, default=workshopplus.assessment.models.workshop.default_evaluation)),
            ],
            options={
                'unique_together': {('course_id', 'item_id')},
            },
        ),
        migrations.CreateModel(
            name='ReferenceEvaluationSettings',
            fields=[
                ('id', models.AutoField(verbose_name='ID', serialize=False, auto_created=True, primary_key=True)),
                ('comparison', models.PositiveSmallIntegerField(choices=[(1, 'very lax'), (2, 'lax +'), (3, 'lax'), (4, 'fair -'), (5, 'fair'), (6, 'fair +'), (7, 'strict'), (8, 'strict +'), (9, 'very strict')], default=5)),
                ('workshop', models.OneToOneField(related_name='reference_settings', to='assessment.Workshop', on_delete=django.db.models.deletion.CASCADE)),
            ],
        ),
        migrations.CreateModel(
            name='Submission',
            fields=[
                ('id', models.AutoField(verbose_name='ID', serialize=False, auto_created=True, primary_key=True)),
                ('created', model_utils.fields.AutoCreatedField(default=django.utils.timezone.now, editable=False, verbose_name='created')),
                ('modified', model_utils.fields.AutoLastModifiedField(default=django.utils.timezone.now, editable=False, verbose_name='modified')),
                ('example', models.BooleanField(default=False, db_index=True)),
                ('author_id', models.CharField(max_length=40, db_index=True)),
                ('title', models.CharField(max_length=255)),
                ('content', models.TextField(blank=True, default='')),
                ('grade', models.DecimalField(max_digits=10, decimal_places=5, null=True, blank=True)),
                ('graded_at', models.DateTimeField(null=True, blank=True)),
                ('grade_over', models.DecimalField(max_digits=10, decimal_places=5, null=True, blank=True)),
                ('grade_over_by', models.CharField(max_length=40, null=True, blank=True)),
                ('published', models.BooleanField(default=False)),
                ('workshop', models.ForeignKey(related_name='submissions', to='assessment.Workshop', on_delete=django.db.models.deletion.CASCADE)),
            ],
            options={
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='Assessment',
            fields=[
                ('id', models.AutoField(verbose_name='ID', serialize=False, auto_created=True, primary_key=True)),
                ('reviewer_id', models.CharField(max_length=40, db_index=True)),
                ('weight', models.PositiveSmallIntegerField(default=1)),
                ('created', models.DateTimeField(auto_now_add=True)),
                ('assessed_at', models.DateTimeField(null=True, blank=True)),
                ('grade', models.DecimalField(max_digits=10, decimal_places=5, null=True, blank=True)),
                ('grading_grade', models.DecimalField(max_digits=10, decimal_places=5, null=True, blank=True)),
                ('grading_grade_over', models.DecimalField(max_digits=10, decimal_places=5, null=True, blank=True)),
                ('grading_grade_over_by', models.CharField(max_length=40, null=True, blank=True)),
                ('grading_harshness', models.DecimalField(max_digits=10, decimal_places=5, null=True, blank=True)),
                ('feedback_author', models.TextField(blank=True, default='')),
                ('feedback_reviewer', models.TextField(blank=True, default='')),
                ('submission', models.ForeignKey(related_name='assessments', to='assessment.Submission', on_delete=django.db.models.deletion.CASCADE)),
            ],
            options={
                'ordering': ['id'],
                'unique_together': {('submission', 'reviewer_id')},
            },
        ),
        migrations.CreateModel(
            name='AssessmentGrade',
            fields=[
                ('id', models.AutoField(verbose_name='ID', serialize=False, auto_created=True, primary_key=True)),
                ('dimension_id', models.PositiveIntegerField()),
                ('grade', models.DecimalField(max_digits=10, decimal_places=5)),
                ('peer_comment', models.TextField(blank=True, default='')),
                ('assessment', models.ForeignKey(related_name='dimension_grades', to='assessment.Assessment', on_delete=django.db.models.deletion.CASCADE)),
            ],
            options={
                'unique_together': {('assessment', 'dimension_id')},
            },
        ),
        migrations.CreateModel(
            name='Aggregation',
            fields=[
                ('id', models.AutoField(verbose_name='ID', serialize=False, auto_created=True, primary_key=True)),
                ('user_id', models.CharField(max_length=40, db_index=True)),
                ('grading_grade', models.DecimalField(max_digits=10, decimal_places=5, null=True, blank=True)),
                ('grading_grade_over', models.DecimalField(max_digits=10, decimal_places=5, null=True, blank=True)),
                ('graded_at', models.DateTimeField(null=True, blank=True)),
                ('workshop', models.ForeignKey(related_name='aggregations', to='assessment.Workshop', on_delete=django.db.models.deletion.CASCADE)),
            ],
            options={
                'unique_together': {('workshop', 'user_id')},
            },
        ),
    ]
