"""
Public interface for assessment training with example submissions:

* Teachers create example submissions and assess them; this assessment
    is the reference assessment (weight 1) of the example.
* Students assess the examples for practice (training assessments, weight 0)
    and compare their assessment with the reference assessment.

"""

import logging

from django.db import DatabaseError

from workshopplus.assessment.api import workshop as workshop_api
from workshopplus.assessment.errors import (
    ExampleAssessmentConflict, WorkshopInternalError, WorkshopNotFoundError, WorkshopRequestError,
)
from workshopplus.assessment.models import Assessment, Submission
from workshopplus.assessment.serializers import AssessmentSerializer, SubmissionSerializer

logger = logging.getLogger(__name__)  # pylint: disable=invalid-name


def save_example(workshop, author_id, title, content="", example_id=None):
    """
    Create an example submission, or update an existing one.

    Args:
        workshop (Workshop): The workshop the example belongs to.
        author_id (str): The teacher saving the example.
        title (str): Title of the example.
        content (str): Text of the example.
        example_id (int): The example to update, None to create a new one.

    Returns:
        Submission

    Raises:
        WorkshopRequestError: The title is empty.
        WorkshopNotFoundError: `example_id` is not an example of the workshop.
        WorkshopInternalError

    """
    title = (title or "").strip()
    if not title:
        raise WorkshopRequestError("Example submissions must have a title")

    try:
        if example_id is None:
            example = Submission.objects.create(
                workshop=workshop, example=True, author_id=str(author_id), title=title, content=content
            )
            logger.info("Created example submission %s in workshop %s", example.id, workshop.id)
            return example

        example = workshop_api.get_example_by_id(workshop, example_id)
        example.title = title
        example.content = content
        example.save(update_fields=['title', 'content', 'modified'])
        return example
    except DatabaseError as ex:
        msg = "Could not save example submission {} of workshop {}".format(example_id, workshop.id)
        logger.exception(msg)
        raise WorkshopInternalError(msg) from ex


def get_reference_assessment(example):
    """
    Return the reference assessment model of the example, or None.
    """
    return Assessment.objects.reference().filter(submission=example).first()


def reference_assessment_needed(example):
    """
    Check whether the example still lacks a graded reference assessment.
    """
    return not Assessment.objects.reference().filter(submission=example, grade__isnull=False).exists()


def start_reference_assessment(example, manager_id):
    """
    Return the id of the reference assessment of the example, allocating one
    to the manager if there is none yet. There is at most one reference
    assessment per example.

    Raises:
        ExampleAssessmentConflict: The manager already holds a training
            assessment of this example.

    """
    reference = get_reference_assessment(example)
    if reference is not None:
        return reference.id

    assessment_id = workshop_api.add_allocation(example, manager_id, weight=Assessment.REFERENCE_WEIGHT)
    if assessment_id == workshop_api.ALLOCATION_EXISTS:
        raise ExampleAssessmentConflict(
            "User {} already assessed example {} for training".format(manager_id, example.id)
        )
    logger.info("Started reference assessment %s of example %s", assessment_id, example.id)
    return assessment_id


def start_training_assessment(example, reviewer_id):
    """
    Return the id of the reviewer's training assessment of the example,
    allocating one if the reviewer has none yet.

    Raises:
        ExampleAssessmentConflict: The reviewer holds another allocation of the
            example, which probably means they made the reference assessment.

    """
    reviewer_id = str(reviewer_id)
    training = Assessment.objects.training().filter(submission=example, reviewer_id=reviewer_id).first()
    if training is not None:
        return training.id

    assessment_id = workshop_api.add_allocation(example, reviewer_id, weight=Assessment.TRAINING_WEIGHT)
    if assessment_id == workshop_api.ALLOCATION_EXISTS:
        raise ExampleAssessmentConflict(
            "User {} is the author of the reference assessment of example {}".format(reviewer_id, example.id)
        )
    return assessment_id


def compare_example(example, assessment_id):
    """
    Collect an example, its reference assessment and another assessment of
    it so that they can be compared.

    Args:
        example (Submission): The example submission.
        assessment_id (int): The assessment to compare with the reference.

    Returns:
        dict with keys "example", "reference" (None if there is no reference
        assessment yet) and "assessment".

    Raises:
        WorkshopNotFoundError: The assessment does not exist.
        WorkshopRequestError: The assessment is not an assessment of the example.

    """
    try:
        assessment = Assessment.objects.select_related('submission').get(id=assessment_id)
    except Assessment.DoesNotExist as ex:
        raise WorkshopNotFoundError("No assessment with id {}".format(assessment_id)) from ex

    if assessment.submission_id != example.id:
        raise WorkshopRequestError(
            "Assessment {} is not an assessment of example {}".format(assessment_id, example.id)
        )

    reference = get_reference_assessment(example)
    return {
        'example': SubmissionSerializer(example).data,
        'reference': None if reference is None else AssessmentSerializer(reference).data,
        'assessment': AssessmentSerializer(assessment).data,
    }
