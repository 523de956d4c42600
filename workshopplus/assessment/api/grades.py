"""
Public interface for computing workshop grades.

Both aggregations read the assessments of the workshop through one
forward-only cursor sorted by the grouping key and reduce the assessments
of each key as soon as the next key starts. Updates are written row by row;
an error half way leaves the keys processed so far updated.
"""

import logging

from django.db import DatabaseError
from django.db.models import OuterRef, Subquery
from django.utils import timezone

from workshopplus.assessment.batches import process_batches
from workshopplus.assessment.errors import WorkshopInternalError, WorkshopRequestError
from workshopplus.assessment.evaluation import get_evaluation
from workshopplus.assessment.grades import grade_value, grades_differ
from workshopplus.assessment.helper import normalize_restrict
from workshopplus.assessment.models import Aggregation, Assessment, Submission, Workshop

logger = logging.getLogger(__name__)  # pylint: disable=invalid-name

REPORT_SORT_FIELDS = ('user_id', 'submission_grade', 'grading_grade')


def aggregate_submission_grades(workshop, restrict=None, evaluation=None):
    """
    Calculate the grade of the submissions and store it when it changed.

    Args:
        workshop (Workshop): The workshop.
        restrict (None, str or list): If None, update the submissions of all
            authors, otherwise only the submissions of the given author(s).
        evaluation (EvaluationStrategy): Reduces the (weight, grade) pairs of
            each submission. Defaults to the strategy of the workshop.

    Returns:
        int: The number of submissions processed.

    Raises:
        WorkshopRequestError: `restrict` is empty.
        WorkshopInternalError

    """
    restrict = normalize_restrict(restrict)
    if evaluation is None:
        evaluation = get_evaluation(workshop)

    # Submissions without assessments come as a single row without grade
    rows = Submission.objects.real().filter(workshop=workshop)
    if restrict is not None:
        rows = rows.filter(author_id__in=restrict)
    rows = rows.order_by('id').values(
        'id', 'grade', 'assessments__weight', 'assessments__grade'
    )

    def process(batch):
        current = batch[0]['grade']
        grade = evaluation.submission_grade(
            (row['assessments__weight'], row['assessments__grade']) for row in batch
        )
        if grades_differ(grade, current):
            Submission.objects.filter(id=batch[0]['id']).update(grade=grade, graded_at=timezone.now())

    try:
        processed = process_batches(rows.iterator(), 'id', process)
    except DatabaseError as ex:
        msg = "Could not aggregate the submission grades of workshop {}".format(workshop.id)
        logger.exception(msg)
        raise WorkshopInternalError(msg) from ex

    logger.info("Aggregated the grades of %d submissions in workshop %s", processed, workshop.id)
    return processed


def aggregate_grading_grades(workshop, restrict=None):
    """
    Calculate the grading grade of the reviewers and store it in their aggregation.

    The grading grade of a reviewer is the mean of the grading grades of their
    assessments of example submissions. The assessment weight is not taken into
    account. Grading grades overridden by the teacher replace the computed ones,
    assessments without grading grade do not count. The override stored on the
    aggregation itself is left untouched.

    Args:
        workshop (Workshop): The workshop.
        restrict (None, str or list): If None, update all reviewers,
            otherwise only the given reviewer(s).

    Returns:
        int: The number of reviewers processed.

    Raises:
        WorkshopRequestError: `restrict` is empty.
        WorkshopInternalError

    """
    restrict = normalize_restrict(restrict)

    aggregations = Aggregation.objects.filter(workshop=workshop, user_id=OuterRef('reviewer_id'))
    rows = Assessment.objects.of_examples().filter(submission__workshop=workshop)
    if restrict is not None:
        rows = rows.filter(reviewer_id__in=restrict)
    rows = rows.annotate(
        aggregation_id=Subquery(aggregations.values('id')[:1]),
        aggregated_grade=Subquery(aggregations.values('grading_grade')[:1]),
    ).order_by('reviewer_id', 'id').values(
        'reviewer_id', 'grading_grade', 'grading_grade_over', 'aggregation_id', 'aggregated_grade'
    )

    def process(batch):
        first = batch[0]
        grade = mean_grading_grade(batch)
        now = timezone.now()
        if first['aggregation_id'] is None:
            Aggregation.objects.create(
                workshop=workshop, user_id=first['reviewer_id'], grading_grade=grade, graded_at=now
            )
        elif grades_differ(grade, first['aggregated_grade']):
            Aggregation.objects.filter(id=first['aggregation_id']).update(grading_grade=grade, graded_at=now)

    try:
        processed = process_batches(rows.iterator(), 'reviewer_id', process)
    except DatabaseError as ex:
        msg = "Could not aggregate the grading grades of workshop {}".format(workshop.id)
        logger.exception(msg)
        raise WorkshopInternalError(msg) from ex

    logger.info("Aggregated the grading grades of %d reviewers in workshop %s", processed, workshop.id)
    return processed


def mean_grading_grade(rows):
    """
    Unweighted mean of the grading grades in `rows`, preferring overrides.

    Returns:
        Decimal, or None if no row has a grading grade.

    """
    total = 0
    count = 0
    for row in rows:
        grade = row['grading_grade_over']
        if grade is None:
            grade = row['grading_grade']
        if grade is None:
            continue
        total += grade_value(grade)
        count += 1
    if count == 0:
        return None
    return grade_value(total / count)


def calculate_grades(workshop, settings=None, restrict=None):
    """
    Evaluate the assessments and aggregate all grades of the workshop.

    Grades can only be calculated while the workshop is in the grading
    evaluation phase.

    Args:
        workshop (Workshop): The workshop.
        settings (dict): Evaluation settings to validate and store before evaluating.
        restrict (None, str or list): Only recalculate the grades of these users.

    Raises:
        WorkshopRequestError: Wrong phase or empty `restrict`.
        EvaluationRequestError: Invalid evaluation settings.
        EvaluationError
        WorkshopInternalError

    """
    if workshop.phase != Workshop.PHASE.evaluation:
        raise WorkshopRequestError(
            "Grades of workshop {} can only be calculated in the grading evaluation phase".format(workshop.id)
        )
    restrict = normalize_restrict(restrict)

    evaluation = get_evaluation(workshop)
    evaluation_settings = evaluation.get_settings(settings)
    evaluation.update_grading_grades(evaluation_settings, restrict)
    aggregate_submission_grades(workshop, restrict, evaluation=evaluation)
    aggregate_grading_grades(workshop, restrict)


def get_grading_report(workshop, user_ids=None, sort_by='user_id', sort_desc=False, page=0, per_page=30):
    """
    Prepare the grades of the workshop participants for a report.

    Participants are the authors of real submissions and the reviewers who
    have an aggregated grading grade. All grades are rescaled to the real scale.

    Args:
        workshop (Workshop): The workshop.
        user_ids (list): Only report these users.
        sort_by (str): One of "user_id", "submission_grade" or "grading_grade".
        sort_desc (bool): Sort in descending order.
        page (int): Zero based page number.
        per_page (int): Number of participants per page.

    Returns:
        dict with keys "grades" (list of participant dicts), "total_count",
        "max_grade" and "max_grading_grade".

    Raises:
        WorkshopRequestError: Unknown sort field.

    """
    if sort_by not in REPORT_SORT_FIELDS:
        raise WorkshopRequestError("Cannot sort the grading report by {}".format(sort_by))

    participants = {}

    def participant(user_id):
        return participants.setdefault(user_id, {
            'user_id': user_id,
            'submission_id': None,
            'submission_title': None,
            'submission_grade': None,
            'submission_grade_over': None,
            'grading_grade': None,
            'received_assessments': [],
            'given_assessments': [],
        })

    for submission in Submission.objects.real().filter(workshop=workshop):
        row = participant(submission.author_id)
        row['submission_id'] = submission.id
        row['submission_title'] = submission.title
        row['submission_grade'] = workshop.real_grade(submission.grade)
        row['submission_grade_over'] = workshop.real_grade(submission.grade_over)

    for aggregation in Aggregation.objects.filter(workshop=workshop):
        participant(aggregation.user_id)['grading_grade'] = workshop.real_grading_grade(
            aggregation.final_grading_grade
        )

    assessments = Assessment.objects.of_real_submissions().select_related('submission').filter(
        submission__workshop=workshop
    ).order_by('-weight', 'id')
    for assessment in assessments:
        info = {
            'assessment_id': assessment.id,
            'submission_id': assessment.submission_id,
            'grade': workshop.real_grade(assessment.grade),
            'grading_grade': workshop.real_grading_grade(assessment.grading_grade),
            'grading_grade_over': workshop.real_grading_grade(assessment.grading_grade_over),
            'weight': assessment.weight,
        }
        author = participants.get(assessment.submission.author_id)
        if author is not None:
            author['received_assessments'].append(dict(info, user_id=assessment.reviewer_id))
        reviewer = participants.get(assessment.reviewer_id)
        if reviewer is not None:
            reviewer['given_assessments'].append(dict(info, user_id=assessment.submission.author_id))

    rows = list(participants.values())
    if user_ids is not None:
        wanted = {str(user_id) for user_id in user_ids}
        rows = [row for row in rows if row['user_id'] in wanted]

    # Participants without the sorted grade go last either way
    graded = [row for row in rows if row[sort_by] is not None]
    ungraded = [row for row in rows if row[sort_by] is None]
    graded.sort(key=lambda row: (row[sort_by], row['user_id']), reverse=sort_desc)
    ungraded.sort(key=lambda row: row['user_id'])
    rows = graded + ungraded

    start = page * per_page
    return {
        'grades': rows[start:start + per_page],
        'total_count': len(rows),
        'max_grade': workshop.max_real_grade,
        'max_grading_grade': workshop.max_real_grading_grade,
    }
