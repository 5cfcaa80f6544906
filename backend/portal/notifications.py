"""
Notification fan-out and read tracking.
"""
import logging

from portal.exceptions import NotFound
from portal.models import Notification
from portal.revalidation import TAG_NOTIFICATIONS, candidate_tag, employer_tag, revalidate_tags

logger = logging.getLogger(__name__)


def notify_candidate(candidate, notification_type, title, message, action_url=''):
    return Notification.objects.create(
        candidate=candidate,
        notification_type=notification_type,
        title=title,
        message=message,
        action_url=action_url or '',
    )


def notify_employer(employer, notification_type, title, message, action_url=''):
    return Notification.objects.create(
        employer=employer,
        notification_type=notification_type,
        title=title,
        message=message,
        action_url=action_url or '',
    )


def _owned_by(identity):
    """Queryset of the notifications addressed to the identity's principal."""
    if identity.candidate is not None:
        return Notification.objects.filter(candidate=identity.candidate), candidate_tag(identity.candidate.pk)
    if identity.employer is not None:
        return Notification.objects.filter(employer=identity.employer), employer_tag(identity.employer.pk)
    return Notification.objects.none(), None


def mark_notification_read(identity, notification_id):
    """Mark one of the caller's own notifications as read.

    Someone else's notification is reported as missing, not forbidden, so ids
    cannot be probed.
    """
    qs, _ = _owned_by(identity)
    notification = qs.filter(pk=notification_id).first()
    if notification is None:
        raise NotFound('Notification not found.')
    if not notification.read:
        notification.read = True
        notification.save(update_fields=['read'])
    return notification


def mark_all_notifications_read(identity):
    qs, tag = _owned_by(identity)
    updated = qs.filter(read=False).update(read=True)
    if updated:
        # Bulk updates bypass post_save
        revalidate_tags(TAG_NOTIFICATIONS, tag)
    logger.info(
        "Marked %s notifications read for kind=%s principal_id=%s",
        updated, identity.kind, identity.principal.pk
    )
    return updated
