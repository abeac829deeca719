"""
Add celery-beat schedule for flagging stale pending transactions.

This migration creates the periodic task schedule for the
flag_stale_pending_transactions task, which runs every hour to queue
transactions left pending past the review window.
"""

from django.db import migrations


def create_periodic_task(apps, schema_editor):
    """Create the periodic task for flagging stale pending transactions."""
    IntervalSchedule = apps.get_model("django_celery_beat", "IntervalSchedule")
    PeriodicTask = apps.get_model("django_celery_beat", "PeriodicTask")

    # Create interval schedule: every hour
    schedule, _ = IntervalSchedule.objects.get_or_create(
        every=1,
        period="hours",
    )

    PeriodicTask.objects.get_or_create(
        name="Flag Stale Pending Transactions",
        defaults={
            "task": "payments.tasks.flag_stale_pending_transactions",
            "interval": schedule,
            "enabled": True,
            "description": (
                "Queues transactions pending longer than PAYU_STALE_PENDING_HOURS "
                "for manual review. Never changes a transaction's status."
            ),
        },
    )


def remove_periodic_task(apps, schema_editor):
    """Remove the periodic task on migration rollback."""
    PeriodicTask = apps.get_model("django_celery_beat", "PeriodicTask")

    PeriodicTask.objects.filter(
        name="Flag Stale Pending Transactions",
    ).delete()


class Migration(migrations.Migration):
    dependencies = [
        ("payments", "0001_initial"),
        ("django_celery_beat", "0019_alter_periodictasks_options"),
    ]

    operations = [
        migrations.RunPython(create_periodic_task, remove_periodic_task),
    ]
