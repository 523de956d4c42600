"""
Initialization Information for Workshop Plus
"""

__version__ = '1.4.2'
