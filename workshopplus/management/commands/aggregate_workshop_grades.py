"""
Recalculate the grades of a workshop
"""
import logging

from django.core.management.base import BaseCommand, CommandError

from workshopplus.assessment.api import grades as grades_api
from workshopplus.assessment.api import workshop as workshop_api
from workshopplus.assessment.errors import WorkshopError

log = logging.getLogger(__name__)


class Command(BaseCommand):
    """
    Evaluate the assessments of a workshop and aggregate its grades.
    The workshop must be in the grading evaluation phase.
    """
    help = "Evaluate the assessments of a workshop and aggregate its grades"

    def add_arguments(self, parser):
        """
        Entry point for subclassed commands to add custom arguments.
        """
        parser.add_argument(
            'workshop_id',
            type=int,
            help='Id of the workshop',
        )

        parser.add_argument(
            '--user_id',
            dest='user_ids',
            action='append',
            help='Only recalculate the grades of this user, can be repeated',
        )

        parser.add_argument(
            '--comparison',
            dest='comparison',
            type=int,
            help='Strictness of the comparison with the reference assessment (1-9)',
        )

    def handle(self, *args, **options):
        settings = None
        if options.get('comparison') is not None:
            settings = {'comparison': options['comparison']}

        try:
            workshop = workshop_api.get_workshop(options['workshop_id'])
            grades_api.calculate_grades(workshop, settings=settings, restrict=options.get('user_ids'))
        except WorkshopError as ex:
            raise CommandError(str(ex)) from ex

        log.info(
            "Calculated grades of workshop %s for %s",
            workshop.id, options.get('user_ids') or 'all users'
        )
