""" Create generic errors that can be shared across the workshop APIs. """

__all__ = ['WorkshopError']


class WorkshopError(Exception):
    """ A generic error for errors that occur in a workshop. """
