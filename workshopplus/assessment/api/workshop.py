"""
Public interface to the records of a workshop.

* Look up submissions, example submissions and assessments.
* Allocate submissions to reviewers and record the grades they give.
* Move the workshop through its phases.

Read accessors return serialized dicts so that models do not have to be
accessed outside the scope of the workshop APIs.
"""

import logging

from django.db import DatabaseError, transaction
from django.db.models import F, Q
from django.utils import timezone

from workshopplus.assessment.errors import WorkshopInternalError, WorkshopNotFoundError, WorkshopRequestError
from workshopplus.assessment.grades import clamp_grade
from workshopplus.assessment.models import Aggregation, Assessment, Submission, Workshop
from workshopplus.assessment.serializers import (
    AssessmentSerializer, SubmissionSerializer, WorkshopSerializer, serialize_assessments, serialize_submissions,
)
from workshopplus.assessment.signals import grades_published, phase_switched

logger = logging.getLogger(__name__)  # pylint: disable=invalid-name

# Returned by add_allocation() when the reviewer already has the submission allocated
ALLOCATION_EXISTS = -9999

ALL = 'all'


def create_workshop(course_id, item_id, name, **fields):
    """
    Create a workshop in the setup phase.

    Returns:
        Workshop

    Raises:
        WorkshopRequestError: The workshop already exists.
        WorkshopInternalError

    """
    try:
        with transaction.atomic():
            return Workshop.objects.create(course_id=course_id, item_id=item_id, name=name, **fields)
    except DatabaseError as ex:
        if Workshop.objects.filter(course_id=course_id, item_id=item_id).exists():
            raise WorkshopRequestError(
                "A workshop already exists for item {} in course {}".format(item_id, course_id)
            ) from ex
        msg = "Could not create workshop {} in course {}".format(item_id, course_id)
        logger.exception(msg)
        raise WorkshopInternalError(msg) from ex


def get_workshop(workshop_id):
    """
    Retrieve a workshop.

    Raises:
        WorkshopNotFoundError

    """
    try:
        return Workshop.objects.get(id=workshop_id)
    except Workshop.DoesNotExist as ex:
        raise WorkshopNotFoundError("No workshop with id {}".format(workshop_id)) from ex


def serialize_workshop(workshop):
    return WorkshopSerializer(workshop).data


def _author_filter(author_id):
    """
    Build the queryset filter restricting submissions to the given author(s).

    Returns:
        Q, or None when the restriction is empty and nothing can match.

    """
    if author_id == ALL:
        return Q()
    if isinstance(author_id, (str, int)):
        return Q(author_id=str(author_id))
    author_ids = [str(user_id) for user_id in author_id or []]
    if not author_ids:
        return None
    return Q(author_id__in=author_ids)


def get_allocations(workshop):
    """
    List all the allocations in the workshop.
    Assessments of example submissions are ignored.

    Returns:
        list of dicts with keys "id", "submission_id", "reviewer_id" and "author_id".

    """
    return list(
        Assessment.objects.of_real_submissions().filter(
            submission__workshop=workshop
        ).values('id', 'submission_id', 'reviewer_id', author_id=F('submission__author_id'))
    )


def count_submissions(workshop, author_id=ALL):
    """
    Count the submissions that `get_submissions()` returns.

    Args:
        workshop (Workshop): The workshop.
        author_id (str, list or 'all'): Only count the submissions of these authors.

    Returns:
        int

    """
    author_filter = _author_filter(author_id)
    if author_filter is None:
        return 0
    return Submission.objects.real().filter(author_filter, workshop=workshop).count()


def get_submissions(workshop, author_id=ALL, offset=0, limit=None):
    """
    Retrieve the real submissions of the workshop, ordered by author.

    Args:
        workshop (Workshop): The workshop.
        author_id (str, list or 'all'): Only return the submissions of these authors.
        offset (int): Skip this many submissions.
        limit (int): Return at most this many submissions.

    Returns:
        list of dict

    """
    author_filter = _author_filter(author_id)
    if author_filter is None:
        return []
    submissions = Submission.objects.real().with_effective_grade().filter(
        author_filter, workshop=workshop
    ).order_by('author_id', 'id')
    end = None if limit is None else offset + limit
    return serialize_submissions(submissions[offset:end])


def _get_submission(workshop, example, **lookup):
    try:
        return Submission.objects.get(workshop=workshop, example=example, **lookup)
    except Submission.DoesNotExist as ex:
        kind = "example submission" if example else "submission"
        raise WorkshopNotFoundError(
            "No {} matching {} in workshop {}".format(kind, lookup, workshop.id)
        ) from ex


def get_submission_by_id(workshop, submission_id):
    """
    Retrieve a real submission of the workshop.

    Raises:
        WorkshopNotFoundError: The submission does not exist or belongs to another workshop.

    """
    return _get_submission(workshop, False, id=submission_id)


def get_submission_by_author(workshop, author_id):
    """
    Retrieve the submission of the given author, or None.
    """
    if not author_id:
        return None
    return Submission.objects.real().filter(workshop=workshop, author_id=str(author_id)).first()


def get_published_submissions(workshop, order_by='-effective_grade'):
    """
    Retrieve the published submissions with their final grade.

    Returns:
        list of dict

    """
    submissions = Submission.objects.real().with_effective_grade().filter(
        workshop=workshop, published=True
    ).order_by(order_by, 'id')
    return serialize_submissions(submissions)


def get_example_by_id(workshop, example_id):
    """
    Retrieve an example submission of the workshop.

    Raises:
        WorkshopNotFoundError

    """
    return _get_submission(workshop, True, id=example_id)


def _examples_with_assessment(workshop, assessments):
    by_submission = {assessment.submission_id: assessment for assessment in assessments}
    examples = []
    for example in Submission.objects.examples().filter(workshop=workshop).order_by('title', 'id'):
        summary = SubmissionSerializer(example).data
        assessment = by_submission.get(example.id)
        summary['assessment_id'] = None if assessment is None else assessment.id
        summary['assessment_grade'] = None if assessment is None else assessment.grade
        summary['assessment_grading_grade'] = None if assessment is None else assessment.grading_grade
        examples.append(summary)
    return examples


def get_examples_for_manager(workshop):
    """
    List the example submissions with their reference assessment attached.

    Returns:
        list of dict, ordered by title. The keys "assessment_id",
        "assessment_grade" and "assessment_grading_grade" describe the
        reference assessment and are None if there is none yet.

    """
    references = Assessment.objects.of_examples().reference().filter(submission__workshop=workshop)
    return _examples_with_assessment(workshop, references)


def get_examples_for_reviewer(workshop, reviewer_id):
    """
    List the example submissions with the training assessment of the given reviewer.

    Returns:
        list of dict, ordered by title, like `get_examples_for_manager()`.

    """
    if not reviewer_id:
        return []
    training = Assessment.objects.of_examples().training().filter(
        submission__workshop=workshop, reviewer_id=str(reviewer_id)
    )
    return _examples_with_assessment(workshop, training)


def _assessments(workshop):
    return Assessment.objects.select_related('submission').filter(submission__workshop=workshop)


def get_all_assessments(workshop):
    """
    List the assessments of real submissions, ordered by reviewer.
    """
    return serialize_assessments(
        _assessments(workshop).of_real_submissions().order_by('reviewer_id', 'id')
    )


def get_assessment(workshop, assessment_id):
    """
    Retrieve an assessment model of any submission in the workshop.

    Raises:
        WorkshopNotFoundError

    """
    try:
        return _assessments(workshop).get(id=assessment_id)
    except Assessment.DoesNotExist as ex:
        raise WorkshopNotFoundError(
            "No assessment with id {} in workshop {}".format(assessment_id, workshop.id)
        ) from ex


def get_assessment_by_id(workshop, assessment_id):
    """
    Retrieve a serialized assessment.

    Raises:
        WorkshopNotFoundError

    """
    return AssessmentSerializer(get_assessment(workshop, assessment_id)).data


def get_assessment_of_submission_by_user(workshop, submission_id, reviewer_id):
    """
    Retrieve the assessment of a submission by the given reviewer, or None.
    """
    assessment = _assessments(workshop).filter(
        submission_id=submission_id, reviewer_id=str(reviewer_id)
    ).first()
    return None if assessment is None else AssessmentSerializer(assessment).data


def get_assessments_of_submission(workshop, submission_id):
    """
    List the assessments of a submission, ordered by reviewer.
    """
    return serialize_assessments(
        _assessments(workshop).filter(submission_id=submission_id).order_by('reviewer_id', 'id')
    )


def get_assessments_by_reviewer(workshop, reviewer_id):
    """
    List the assessments of real submissions made by the given reviewer.
    """
    return serialize_assessments(
        _assessments(workshop).of_real_submissions().filter(
            reviewer_id=str(reviewer_id)
        ).order_by('submission__title', 'id')
    )


def get_all_grading_grades(workshop):
    """
    List the assessments of example submissions with their grading grades.
    """
    return serialize_assessments(
        _assessments(workshop).of_examples().order_by('reviewer_id', 'id')
    )


def get_all_harshness_scores(workshop):
    """
    List the assessments of example submissions with their grading harshness.

    Returns:
        list of dicts with keys "id", "submission_id", "reviewer_id",
        "grading_harshness" and "title".

    """
    return list(
        _assessments(workshop).of_examples().order_by('reviewer_id', 'id').values(
            'id', 'submission_id', 'reviewer_id', 'grading_harshness', title=F('submission__title')
        )
    )


def add_allocation(submission, reviewer_id, weight=1):
    """
    Allocate a submission to a user for review.

    Args:
        submission (Submission): The submission to allocate.
        reviewer_id (str): The reviewer.
        weight (int): Weight of the new assessment, clamped to 0-16.

    Returns:
        int: The id of the new assessment, or ALLOCATION_EXISTS if the
            reviewer already has this submission allocated.

    Raises:
        WorkshopRequestError: The allocation would add a second reference
            assessment to an example submission.
        WorkshopInternalError

    """
    reviewer_id = str(reviewer_id)
    if Assessment.objects.filter(submission=submission, reviewer_id=reviewer_id).exists():
        return ALLOCATION_EXISTS

    weight = Assessment.clamp_weight(weight)
    if (submission.example and weight == Assessment.REFERENCE_WEIGHT and
            Assessment.objects.filter(submission=submission, weight=Assessment.REFERENCE_WEIGHT).exists()):
        raise WorkshopRequestError(
            "Example submission {} already has a reference assessment".format(submission.id)
        )

    try:
        assessment = Assessment.objects.create(submission=submission, reviewer_id=reviewer_id, weight=weight)
    except DatabaseError as ex:
        msg = "Could not allocate submission {} to reviewer {}".format(submission.id, reviewer_id)
        logger.exception(msg)
        raise WorkshopInternalError(msg) from ex
    return assessment.id


def delete_assessment(assessment_id):
    """
    Delete an assessment or a list of assessments, with their dimension grades.
    """
    if not assessment_id:
        return True
    if isinstance(assessment_id, (list, tuple, set)):
        Assessment.objects.filter(id__in=assessment_id).delete()
    else:
        Assessment.objects.filter(id=assessment_id).delete()
    return True


def delete_submission(submission):
    """
    Remove a submission (real or example) and all its assessments.
    """
    submission_id = submission.id
    assessment_ids = list(submission.assessments.values_list('id', flat=True))
    with transaction.atomic():
        delete_assessment(assessment_ids)
        submission.delete()
    logger.info(
        "Deleted submission %s of workshop %s with %d assessments",
        submission_id, submission.workshop_id, len(assessment_ids)
    )


def set_peer_grade(assessment_id, grade):
    """
    Save the raw grade of an assessment, as computed from the assessment form.

    Args:
        assessment_id (int): The assessment, must exist.
        grade (Decimal or None): Percentual grade from 0 to 100.

    Returns:
        The saved grade, or False if `grade` is None.

    """
    if grade is None:
        return False
    grade = clamp_grade(grade)
    Assessment.objects.filter(id=assessment_id).update(grade=grade, assessed_at=timezone.now())
    return grade


def switch_phase(workshop, new_phase):
    """
    Move the workshop to another phase.

    Closing the workshop publishes the final grades through the
    `grades_published` signal.

    Returns:
        bool: False if the phase is not known.

    """
    if new_phase not in Workshop.available_phases():
        return False

    if new_phase == Workshop.PHASE.closed:
        grades_published.send(sender=Workshop, workshop=workshop, grades=get_final_grades(workshop))

    previous_phase = workshop.phase
    workshop.phase = new_phase
    workshop.save(update_fields=['phase', 'modified'])
    phase_switched.send(sender=Workshop, workshop=workshop, previous_phase=previous_phase)
    logger.info("Workshop %s switched from phase %s to %s", workshop.id, previous_phase, new_phase)
    return True


def get_final_grades(workshop):
    """
    Collect the final real grades of every participant.

    Returns:
        dict mapping user ids to dicts with keys "submission_grade" and "grading_grade".

    """
    grades = {}
    for submission in Submission.objects.real().filter(workshop=workshop):
        final = submission.grade if submission.grade_over is None else submission.grade_over
        grades.setdefault(submission.author_id, {'submission_grade': None, 'grading_grade': None})
        grades[submission.author_id]['submission_grade'] = workshop.real_grade(final)
    for aggregation in Aggregation.objects.filter(workshop=workshop):
        grades.setdefault(aggregation.user_id, {'submission_grade': None, 'grading_grade': None})
        grades[aggregation.user_id]['grading_grade'] = workshop.real_grading_grade(aggregation.final_grading_grade)
    return grades


def reset_assessments(workshop):
    """
    Remove the assessments made by the participants and all aggregations.

    Reference assessments of example submissions are kept; every other
    assessment of an example and all assessments of real submissions go.
    """
    assessment_ids = list(
        Assessment.objects.filter(submission__workshop=workshop).filter(
            Q(submission__example=False) |
            (Q(submission__example=True) & ~Q(weight=Assessment.REFERENCE_WEIGHT))
        ).values_list('id', flat=True)
    )
    with transaction.atomic():
        delete_assessment(assessment_ids)
        Aggregation.objects.filter(workshop=workshop).delete()
    logger.info("Reset %d assessments of workshop %s", len(assessment_ids), workshop.id)
    return True


def assessing_examples_allowed(workshop):
    """
    Check whether the participants may assess example submissions now.

    Returns:
        None if the workshop does not use examples, otherwise bool.

    """
    return workshop.assessing_examples_allowed()
