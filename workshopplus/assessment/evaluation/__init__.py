"""
Grading evaluation strategies.

A strategy computes the grade of every submission from the grades its
assessments gave it, and the grading grade of every assessment. The Django
setting `WORKSHOPPLUS_EVALUATION_STRATEGIES` maps strategy names to the
dotted path of the implementing class; workshops select a strategy by name.
"""

import importlib
import logging

from django.conf import settings

from workshopplus.assessment.errors import EvaluationLoadError

logger = logging.getLogger(__name__)  # pylint: disable=invalid-name

DEFAULT_EVALUATION_STRATEGIES = {
    'reference': 'workshopplus.assessment.evaluation.reference.ReferenceEvaluation',
    'median': 'workshopplus.assessment.evaluation.reference.MedianReferenceEvaluation',
}


def evaluation_strategies():
    """Return the configured mapping of strategy names to class paths."""
    return getattr(settings, 'WORKSHOPPLUS_EVALUATION_STRATEGIES', DEFAULT_EVALUATION_STRATEGIES)


def load_strategy_class(name):
    """
    Import the class implementing the named strategy.

    Raises:
        EvaluationLoadError

    """
    strategies = evaluation_strategies()
    if name not in strategies:
        raise EvaluationLoadError(name)

    class_path = strategies[name]
    module_path, __, class_name = class_path.rpartition('.')
    try:
        module = importlib.import_module(module_path)
        return getattr(module, class_name)
    except (ImportError, ValueError, AttributeError) as ex:
        logger.exception("Could not load evaluation strategy %s from %s", name, class_path)
        raise EvaluationLoadError(name, class_path) from ex


def get_evaluation(workshop):
    """
    Return an instance of the evaluation strategy the workshop uses.
    """
    return load_strategy_class(workshop.evaluation)(workshop)
