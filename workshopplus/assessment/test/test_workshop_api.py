"""
Tests for the workshop record API.
"""
from decimal import Decimal

import ddt
from django.db import DatabaseError
from django.test import TestCase, override_settings
from mock import Mock, patch

from workshopplus.assessment.api import workshop as workshop_api
from workshopplus.assessment.errors import WorkshopInternalError, WorkshopNotFoundError, WorkshopRequestError
from workshopplus.assessment.models import Aggregation, Assessment, AssessmentGrade, Submission, Workshop
from workshopplus.assessment.signals import grades_published, phase_switched
from workshopplus.tests.factories import (
    AggregationFactory, AssessmentFactory, ExampleFactory, SubmissionFactory, WorkshopFactory,
)


class CreateWorkshopTest(TestCase):
    """
    Tests for creating and retrieving workshops.
    """

    def test_create_workshop(self):
        workshop = workshop_api.create_workshop('course', 'item', "Peer review", grade=60)
        self.assertEqual(workshop.phase, Workshop.PHASE.setup)
        self.assertEqual(workshop_api.get_workshop(workshop.id), workshop)

        data = workshop_api.serialize_workshop(workshop)
        self.assertEqual(data['grade'], 60)
        self.assertEqual(data['evaluation'], 'reference')

    @override_settings(WORKSHOPPLUS_DEFAULT_EVALUATION='median')
    def test_default_evaluation_from_settings(self):
        workshop = workshop_api.create_workshop('course', 'item', "Peer review")
        self.assertEqual(Workshop.objects.get(id=workshop.id).evaluation, 'median')

    def test_create_duplicate(self):
        workshop_api.create_workshop('course', 'item', "Peer review")
        with self.assertRaises(WorkshopRequestError):
            workshop_api.create_workshop('course', 'item', "Again")

    def test_workshop_not_found(self):
        with self.assertRaises(WorkshopNotFoundError):
            workshop_api.get_workshop(12345)


@ddt.ddt
class SubmissionAccessTest(TestCase):
    """
    Tests for looking up the submissions of a workshop.
    """

    def setUp(self):
        super().setUp()
        self.workshop = WorkshopFactory()
        self.carol = SubmissionFactory(workshop=self.workshop, author_id='carol', grade=Decimal('40'))
        self.alice = SubmissionFactory(
            workshop=self.workshop, author_id='alice', grade=Decimal('70'), grade_over=Decimal('20')
        )
        self.bob = SubmissionFactory(workshop=self.workshop, author_id='bob', grade=Decimal('90'))
        self.example = ExampleFactory(workshop=self.workshop)
        self.other = SubmissionFactory(author_id='alice')

    @ddt.data(
        (workshop_api.ALL, 3),
        ('alice', 1),
        (['alice', 'bob', 'nobody'], 2),
        ('teacher', 0),
        ([], 0),
        (None, 0),
    )
    @ddt.unpack
    def test_count_submissions(self, author_id, expected):
        self.assertEqual(workshop_api.count_submissions(self.workshop, author_id), expected)

    def test_get_submissions(self):
        submissions = workshop_api.get_submissions(self.workshop)
        self.assertEqual([s['author_id'] for s in submissions], ['alice', 'bob', 'carol'])
        self.assertEqual(submissions[0]['final_grade'], Decimal('20'))
        self.assertEqual(submissions[1]['final_grade'], Decimal('90'))
        self.assertNotIn('content', submissions[0])

    def test_get_submissions_paged(self):
        submissions = workshop_api.get_submissions(self.workshop, offset=1, limit=1)
        self.assertEqual([s['author_id'] for s in submissions], ['bob'])

    def test_get_submissions_empty_restriction(self):
        self.assertEqual(workshop_api.get_submissions(self.workshop, []), [])

    def test_get_submission_by_id(self):
        self.assertEqual(workshop_api.get_submission_by_id(self.workshop, self.bob.id), self.bob)

    def test_get_submission_of_other_workshop(self):
        with self.assertRaises(WorkshopNotFoundError):
            workshop_api.get_submission_by_id(self.workshop, self.other.id)

    def test_example_is_not_a_submission(self):
        with self.assertRaises(WorkshopNotFoundError):
            workshop_api.get_submission_by_id(self.workshop, self.example.id)
        with self.assertRaises(WorkshopNotFoundError):
            workshop_api.get_example_by_id(self.workshop, self.bob.id)
        self.assertEqual(workshop_api.get_example_by_id(self.workshop, self.example.id), self.example)

    def test_get_submission_by_author(self):
        self.assertEqual(workshop_api.get_submission_by_author(self.workshop, 'alice'), self.alice)
        self.assertIsNone(workshop_api.get_submission_by_author(self.workshop, 'teacher'))
        self.assertIsNone(workshop_api.get_submission_by_author(self.workshop, None))

    def test_get_published_submissions(self):
        Submission.objects.filter(id__in=[self.alice.id, self.bob.id, self.carol.id]).update(published=True)
        self.other.published = True
        self.other.save()

        published = workshop_api.get_published_submissions(self.workshop)

        self.assertEqual([s['author_id'] for s in published], ['bob', 'carol', 'alice'])


class ExampleListTest(TestCase):
    """
    Tests for listing example submissions with their assessments.
    """

    def setUp(self):
        super().setUp()
        self.workshop = WorkshopFactory()
        self.first = ExampleFactory(workshop=self.workshop, title="A first example")
        self.second = ExampleFactory(workshop=self.workshop, title="B second example")
        self.reference = AssessmentFactory(
            submission=self.first, reviewer_id='teacher', weight=1, grade=Decimal('80')
        )
        self.training = AssessmentFactory(
            submission=self.first, reviewer_id='alice', weight=0,
            grade=Decimal('60'), grading_grade=Decimal('70'),
        )

    def test_examples_for_manager(self):
        examples = workshop_api.get_examples_for_manager(self.workshop)

        self.assertEqual([e['id'] for e in examples], [self.first.id, self.second.id])
        self.assertEqual(examples[0]['assessment_id'], self.reference.id)
        self.assertEqual(examples[0]['assessment_grade'], Decimal('80'))
        self.assertIsNone(examples[1]['assessment_id'])

    def test_examples_for_reviewer(self):
        examples = workshop_api.get_examples_for_reviewer(self.workshop, 'alice')

        self.assertEqual(examples[0]['assessment_id'], self.training.id)
        self.assertEqual(examples[0]['assessment_grading_grade'], Decimal('70'))
        self.assertIsNone(examples[1]['assessment_grade'])

    def test_examples_for_nobody(self):
        self.assertEqual(workshop_api.get_examples_for_reviewer(self.workshop, None), [])
        examples = workshop_api.get_examples_for_reviewer(self.workshop, 'bob')
        self.assertEqual([e['assessment_id'] for e in examples], [None, None])


class AssessmentAccessTest(TestCase):
    """
    Tests for looking up the assessments of a workshop.
    """

    def setUp(self):
        super().setUp()
        self.workshop = WorkshopFactory()
        self.submission = SubmissionFactory(workshop=self.workshop, author_id='alice', title="Essay")
        self.example = ExampleFactory(workshop=self.workshop, title="Example")
        self.by_bob = AssessmentFactory(submission=self.submission, reviewer_id='bob', weight=2)
        self.by_carol = AssessmentFactory(submission=self.submission, reviewer_id='carol')
        self.training = AssessmentFactory(
            submission=self.example, reviewer_id='bob', weight=0, grading_harshness=Decimal('-5')
        )

    def test_get_all_assessments(self):
        assessments = workshop_api.get_all_assessments(self.workshop)
        self.assertEqual([a['id'] for a in assessments], [self.by_bob.id, self.by_carol.id])
        self.assertEqual(assessments[0]['author_id'], 'alice')
        self.assertEqual(assessments[0]['title'], "Essay")

    def test_get_allocations(self):
        allocations = workshop_api.get_allocations(self.workshop)
        self.assertCountEqual(
            [(a['reviewer_id'], a['author_id']) for a in allocations],
            [('bob', 'alice'), ('carol', 'alice')]
        )

    def test_get_assessment(self):
        self.assertEqual(workshop_api.get_assessment(self.workshop, self.training.id), self.training)
        self.assertEqual(workshop_api.get_assessment_by_id(self.workshop, self.by_bob.id)['weight'], 2)

    def test_assessment_of_other_workshop(self):
        other = AssessmentFactory()
        with self.assertRaises(WorkshopNotFoundError):
            workshop_api.get_assessment_by_id(self.workshop, other.id)

    def test_assessment_of_submission_by_user(self):
        found = workshop_api.get_assessment_of_submission_by_user(self.workshop, self.submission.id, 'carol')
        self.assertEqual(found['id'], self.by_carol.id)
        self.assertIsNone(
            workshop_api.get_assessment_of_submission_by_user(self.workshop, self.submission.id, 'alice')
        )

    def test_assessments_of_submission(self):
        assessments = workshop_api.get_assessments_of_submission(self.workshop, self.submission.id)
        self.assertEqual([a['reviewer_id'] for a in assessments], ['bob', 'carol'])

    def test_assessments_by_reviewer(self):
        assessments = workshop_api.get_assessments_by_reviewer(self.workshop, 'bob')
        self.assertEqual([a['id'] for a in assessments], [self.by_bob.id])

    def test_grading_grades_and_harshness(self):
        grading = workshop_api.get_all_grading_grades(self.workshop)
        self.assertEqual([a['id'] for a in grading], [self.training.id])

        harshness = workshop_api.get_all_harshness_scores(self.workshop)
        self.assertEqual(len(harshness), 1)
        self.assertEqual(harshness[0]['title'], "Example")
        self.assertEqual(harshness[0]['grading_harshness'], Decimal('-5'))


@ddt.ddt
class AllocationTest(TestCase):
    """
    Tests for allocating submissions and recording grades.
    """

    def setUp(self):
        super().setUp()
        self.workshop = WorkshopFactory()
        self.submission = SubmissionFactory(workshop=self.workshop)
        self.example = ExampleFactory(workshop=self.workshop)

    @ddt.data((-3, 0), (0, 0), (1, 1), (16, 16), (40, 16))
    @ddt.unpack
    def test_weight_clamped(self, weight, expected):
        assessment_id = workshop_api.add_allocation(self.submission, 'bob', weight=weight)
        self.assertEqual(Assessment.objects.get(id=assessment_id).weight, expected)

    def test_allocation_exists(self):
        first = workshop_api.add_allocation(self.submission, 'bob')
        self.assertNotEqual(first, workshop_api.ALLOCATION_EXISTS)
        self.assertEqual(workshop_api.add_allocation(self.submission, 'bob', weight=3), workshop_api.ALLOCATION_EXISTS)
        self.assertEqual(Assessment.objects.get(id=first).weight, 1)

    def test_second_reference_rejected(self):
        workshop_api.add_allocation(self.example, 'teacher', weight=Assessment.REFERENCE_WEIGHT)
        with self.assertRaises(WorkshopRequestError):
            workshop_api.add_allocation(self.example, 'assistant', weight=Assessment.REFERENCE_WEIGHT)
        workshop_api.add_allocation(self.example, 'alice', weight=Assessment.TRAINING_WEIGHT)
        self.assertEqual(Assessment.objects.filter(submission=self.example).count(), 2)

    def test_several_peer_assessments_allowed(self):
        workshop_api.add_allocation(self.submission, 'bob')
        workshop_api.add_allocation(self.submission, 'carol')
        self.assertEqual(Assessment.objects.filter(submission=self.submission).count(), 2)

    @patch.object(Assessment.objects, 'create')
    def test_allocation_database_error(self, mock_create):
        mock_create.side_effect = DatabaseError("Bad things happened")
        with self.assertRaises(WorkshopInternalError):
            workshop_api.add_allocation(self.submission, 'bob')

    @ddt.data(
        (Decimal('55.5'), Decimal('55.5')),
        (120, Decimal('100')),
        (-5, Decimal('0')),
    )
    @ddt.unpack
    def test_set_peer_grade(self, grade, expected):
        assessment_id = workshop_api.add_allocation(self.submission, 'bob')

        self.assertEqual(workshop_api.set_peer_grade(assessment_id, grade), expected)

        assessment = Assessment.objects.get(id=assessment_id)
        self.assertEqual(assessment.grade, expected)
        self.assertIsNotNone(assessment.assessed_at)

    def test_set_no_peer_grade(self):
        assessment_id = workshop_api.add_allocation(self.submission, 'bob')
        self.assertFalse(workshop_api.set_peer_grade(assessment_id, None))
        self.assertIsNone(Assessment.objects.get(id=assessment_id).assessed_at)


class DeletionTest(TestCase):
    """
    Tests for deleting submissions and assessments.
    """

    def setUp(self):
        super().setUp()
        self.workshop = WorkshopFactory()
        self.submission = SubmissionFactory(workshop=self.workshop)
        self.assessments = [AssessmentFactory(submission=self.submission) for __ in range(3)]
        AssessmentGrade.objects.create(assessment=self.assessments[0], dimension_id=1, grade=Decimal('5'))

    def test_delete_assessment(self):
        self.assertTrue(workshop_api.delete_assessment(self.assessments[0].id))
        self.assertFalse(AssessmentGrade.objects.exists())
        self.assertEqual(Assessment.objects.count(), 2)

    def test_delete_assessments(self):
        workshop_api.delete_assessment([a.id for a in self.assessments[1:]])
        self.assertEqual(list(Assessment.objects.values_list('id', flat=True)), [self.assessments[0].id])

    def test_delete_nothing(self):
        self.assertTrue(workshop_api.delete_assessment([]))
        self.assertEqual(Assessment.objects.count(), 3)

    def test_delete_submission(self):
        kept = AssessmentFactory()

        workshop_api.delete_submission(self.submission)

        self.assertFalse(Submission.objects.filter(workshop=self.workshop).exists())
        self.assertEqual(list(Assessment.objects.values_list('id', flat=True)), [kept.id])
        self.assertFalse(AssessmentGrade.objects.exists())

    def test_reset_assessments(self):
        example = ExampleFactory(workshop=self.workshop)
        reference = AssessmentFactory(submission=example, reviewer_id='teacher', weight=1)
        AssessmentFactory(submission=example, reviewer_id='alice', weight=0)
        weighted_id = workshop_api.add_allocation(example, 'bob', weight=3)
        AggregationFactory(workshop=self.workshop, user_id='alice')
        other_aggregation = AggregationFactory()

        workshop_api.reset_assessments(self.workshop)

        self.assertEqual(
            list(Assessment.objects.filter(submission__workshop=self.workshop).values_list('id', flat=True)),
            [reference.id]
        )
        self.assertFalse(Assessment.objects.filter(id=weighted_id).exists())
        self.assertEqual(list(Aggregation.objects.values_list('id', flat=True)), [other_aggregation.id])


class SwitchPhaseTest(TestCase):
    """
    Tests for moving a workshop through its phases.
    """

    def setUp(self):
        super().setUp()
        self.workshop = WorkshopFactory(phase=Workshop.PHASE.evaluation, grade=80, grading_grade=20)
        SubmissionFactory(workshop=self.workshop, author_id='alice', grade=Decimal('50'))
        SubmissionFactory(
            workshop=self.workshop, author_id='bob', grade=Decimal('50'), grade_over=Decimal('100')
        )
        AggregationFactory(workshop=self.workshop, user_id='alice', grading_grade=Decimal('75'))
        AggregationFactory(workshop=self.workshop, user_id='teacher', grading_grade=None)

        self.phase_receiver = Mock()
        self.published_receiver = Mock()
        phase_switched.connect(self.phase_receiver, weak=False)
        grades_published.connect(self.published_receiver, weak=False)
        self.addCleanup(phase_switched.disconnect, self.phase_receiver)
        self.addCleanup(grades_published.disconnect, self.published_receiver)

    def test_switch_phase(self):
        self.assertTrue(workshop_api.switch_phase(self.workshop, Workshop.PHASE.assessment))

        self.assertEqual(Workshop.objects.get(id=self.workshop.id).phase, Workshop.PHASE.assessment)
        self.phase_receiver.assert_called_once_with(
            signal=phase_switched, sender=Workshop,
            workshop=self.workshop, previous_phase=Workshop.PHASE.evaluation,
        )
        self.published_receiver.assert_not_called()

    def test_unknown_phase(self):
        self.assertFalse(workshop_api.switch_phase(self.workshop, 45))
        self.assertEqual(Workshop.objects.get(id=self.workshop.id).phase, Workshop.PHASE.evaluation)
        self.phase_receiver.assert_not_called()

    def test_close_publishes_grades(self):
        workshop_api.switch_phase(self.workshop, Workshop.PHASE.closed)

        self.published_receiver.assert_called_once_with(
            signal=grades_published, sender=Workshop, workshop=self.workshop,
            grades={
                'alice': {'submission_grade': Decimal('40'), 'grading_grade': Decimal('15')},
                'bob': {'submission_grade': Decimal('80'), 'grading_grade': None},
                'teacher': {'submission_grade': None, 'grading_grade': None},
            },
        )
        self.assertEqual(Workshop.objects.get(id=self.workshop.id).phase, Workshop.PHASE.closed)


@ddt.ddt
class AssessingExamplesAllowedTest(TestCase):
    """
    Tests for the availability of example submissions.
    """

    @ddt.data(
        (Workshop.EXAMPLES_MODE.voluntary, Workshop.PHASE.setup, True),
        (Workshop.EXAMPLES_MODE.voluntary, Workshop.PHASE.closed, True),
        (Workshop.EXAMPLES_MODE.before_submission, Workshop.PHASE.submission, True),
        (Workshop.EXAMPLES_MODE.before_submission, Workshop.PHASE.assessment, False),
        (Workshop.EXAMPLES_MODE.before_assessment, Workshop.PHASE.submission, False),
        (Workshop.EXAMPLES_MODE.before_assessment, Workshop.PHASE.assessment, True),
    )
    @ddt.unpack
    def test_examples_mode(self, mode, phase, expected):
        workshop = WorkshopFactory(examples_mode=mode, phase=phase)
        self.assertEqual(workshop_api.assessing_examples_allowed(workshop), expected)

    def test_examples_not_used(self):
        workshop = WorkshopFactory(use_examples=False)
        self.assertIsNone(workshop_api.assessing_examples_allowed(workshop))
