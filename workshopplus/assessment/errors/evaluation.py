"""
Errors for the grading evaluation strategies.
"""
from .base import WorkshopError

__all__ = ['EvaluationError', 'EvaluationRequestError', 'EvaluationLoadError']


class EvaluationError(WorkshopError):
    """
    Error occurred while evaluating grading grades.
    """


class EvaluationRequestError(EvaluationError):
    """
    The evaluation settings given to a strategy are invalid.
    """


class EvaluationLoadError(EvaluationError):
    """
    The evaluation strategy could not be loaded.
    """
    def __init__(self, strategy_name, strategy_path=None):
        if strategy_path is None:
            msg = "No evaluation strategy is registered under the name {}".format(strategy_name)
        else:
            msg = "Could not load evaluation strategy {} from {}".format(
                strategy_name, strategy_path
            )
        super().__init__(msg)
        self.strategy_name = strategy_name
