# =============================================================================
# Django Project Configuration Package
# =============================================================================
# Settings, URLs, the WSGI application and the Celery app.
#
# Import Celery app to ensure it's loaded when Django starts, so shared tasks
# bind to it and beat schedules resolve.
# =============================================================================

from config.celery import app as celery_app

__all__ = ("celery_app",)
