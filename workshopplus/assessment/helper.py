"""
Small helpers shared by the workshop APIs and the evaluation strategies.
"""

from workshopplus.assessment.errors import WorkshopRequestError


def normalize_restrict(restrict):
    """
    Turn the `restrict` argument of the grade calculations into a list of user ids.

    Args:
        restrict (None, str, int or iterable): None to include every user,
            otherwise a user id or a collection of user ids.

    Returns:
        list of str, or None when every user is included.

    Raises:
        WorkshopRequestError: An empty collection was given.

    """
    if restrict is None:
        return None
    if isinstance(restrict, (str, int)):
        return [str(restrict)]
    restrict = [str(user_id) for user_id in restrict]
    if not restrict:
        raise WorkshopRequestError("Empty value is not a valid parameter here")
    return restrict
