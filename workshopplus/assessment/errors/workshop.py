"""
Errors for the workshop record and example training APIs.
"""
from .base import WorkshopError

__all__ = [
    'WorkshopRequestError', 'WorkshopNotFoundError', 'WorkshopInternalError',
    'ExampleAssessmentConflict',
]


class WorkshopRequestError(WorkshopError):
    """Error indicating insufficient or incorrect parameters in the request.

    Raised when the request does not contain enough information, or incorrect
    information which does not allow the request to be processed.

    """


class WorkshopNotFoundError(WorkshopRequestError):
    """Error indicating that a requested record does not exist.

    Raised when a workshop, submission or assessment cannot be found within
    the workshop it was requested from.

    """


class WorkshopInternalError(WorkshopError):
    """Error indicating an internal problem independent of API use.

    Raised when an internal error has occurred. This should be independent of
    the actions or parameters given to the API.

    """


class ExampleAssessmentConflict(WorkshopRequestError):
    """
    The reviewer already holds an allocation on the example submission that is
    not a training assessment, usually because they authored the reference
    assessment.
    """
