"""
Celery configuration for the Django application.

Celery runs the background side of the payment pipeline:
- Scheduled sweeps (stale pending transactions, see payments.tasks)
- Periodic schedules are stored in the database by django-celery-beat

This configuration uses Redis as both the message broker and result backend.
Tasks are auto-discovered from all installed Django apps.

Usage:
    # Define a task in any app's tasks.py:
    from celery import shared_task

    @shared_task
    def flag_stale_pending_transactions():
        ...

    # Call the task asynchronously:
    flag_stale_pending_transactions.delay()

For more information, see:
https://docs.celeryq.dev/en/stable/django/first-steps-with-django.html
"""

import os

from celery import Celery

# Set the default Django settings module for the Celery worker
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("config")

# All Celery settings are prefixed with CELERY_ in settings.py
app.config_from_object("django.conf:settings", namespace="CELERY")

# Celery will look for a tasks.py module in each installed app
app.autodiscover_tasks()
