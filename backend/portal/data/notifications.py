from portal.models import Notification
from portal.revalidation import TAG_NOTIFICATIONS, candidate_tag, employer_tag
from portal.serializers import NotificationSerializer
from portal.utils.cache_utils import cached_query


DEFAULT_LIMIT = 50


def _recipient_filter(candidate_id=None, employer_id=None):
    if bool(candidate_id) == bool(employer_id):
        raise ValueError('Exactly one of candidate_id or employer_id is required')
    if candidate_id:
        return {'candidate_id': candidate_id}, candidate_tag(candidate_id)
    return {'employer_id': employer_id}, employer_tag(employer_id)


def get_notifications(candidate_id=None, employer_id=None, unread_only=False, limit=DEFAULT_LIMIT):
    """Newest first notifications for one recipient."""
    lookup, tag = _recipient_filter(candidate_id, employer_id)

    def load():
        qs = Notification.objects.filter(**lookup)
        if unread_only:
            qs = qs.filter(read=False)
        return list(NotificationSerializer(qs[:limit], many=True).data)

    return cached_query('notifications:list', [TAG_NOTIFICATIONS, tag], load,
                        params={**lookup, 'unread': unread_only, 'limit': limit})


def get_unread_count(candidate_id=None, employer_id=None):
    lookup, tag = _recipient_filter(candidate_id, employer_id)
    return cached_query(
        'notifications:unread',
        [TAG_NOTIFICATIONS, tag],
        lambda: Notification.objects.filter(read=False, **lookup).count(),
        params=lookup,
    )
