"""
Export models from each Python module in this package.
"""
# pylint: disable=W0401

from .workshop import *
from .submission import *
from .assessment import *
from .aggregation import *
