#!/usr/bin/env python
"""
Django command line entry point for Workshop Plus.

    ./manage.py aggregate_workshop_grades <workshop_id>
"""
import os
import sys

if __name__ == "__main__":
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'settings.base')

    if 'test' in sys.argv[1:2]:
        # The test database may already exist on disk; replace it without asking
        import logging
        logging.captureWarnings(True)
        sys.argv.append('--noinput')

    from django.core.management import execute_from_command_line
    execute_from_command_line(sys.argv)
