"""Background tasks: cache tag revalidation and interview reminders."""
import logging
from datetime import timedelta

from celery import shared_task
from django.utils import timezone

from portal.utils.cache_utils import bump_tag_version

logger = logging.getLogger(__name__)


def _revalidate_tags_sync(tags):
    bumped = []
    for tag in tags:
        if not tag:
            continue
        bump_tag_version(tag)
        bumped.append(tag)
    logger.debug("Revalidated cache tags: %s", bumped)
    return bumped


@shared_task(bind=True, ignore_result=True)
def revalidate_tags_task(self, tags):
    return _revalidate_tags_sync(tags)


def _send_interview_reminders_sync(within_hours=24):
    """Notify both sides once for approved interviews starting soon."""
    from portal.models import Interview, Notification
    from portal.notifications import notify_candidate, notify_employer

    now = timezone.now()
    window_end = now + timedelta(hours=within_hours)
    upcoming = (
        Interview.objects
        .filter(status=Interview.STATUS_APPROVED, scheduled_at__gt=now, scheduled_at__lte=window_end)
        .select_related('candidate', 'employer')
    )
    sent = 0
    for interview in upcoming:
        action_url = f"/dashboard/interviews?interview={interview.pk}"
        already = Notification.objects.filter(
            notification_type=Notification.TYPE_INTERVIEW_REMINDER,
            action_url=action_url,
        ).exists()
        if already:
            continue
        when = interview.scheduled_at.strftime('%Y-%m-%d %H:%M UTC')
        notify_candidate(
            interview.candidate,
            Notification.TYPE_INTERVIEW_REMINDER,
            'Interview Reminder',
            f"Your interview with {interview.employer.company_name} starts at {when}.",
            action_url=action_url,
        )
        notify_employer(
            interview.employer,
            Notification.TYPE_INTERVIEW_REMINDER,
            'Interview Reminder',
            f"Your interview with {interview.candidate.full_name} starts at {when}.",
            action_url=f"/employer/dashboard?interview={interview.pk}",
        )
        sent += 1
    logger.info("Sent %s interview reminders", sent)
    return sent


@shared_task(bind=True)
def send_interview_reminders_task(self, within_hours=24):
    return _send_interview_reminders_sync(within_hours)
