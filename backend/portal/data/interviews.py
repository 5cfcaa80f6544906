from django.utils import timezone

from portal.models import Interview
from portal.revalidation import TAG_INTERVIEWS, candidate_tag, employer_tag
from portal.serializers import InterviewSerializer
from portal.utils.cache_utils import cached_query


def _base_queryset():
    return Interview.objects.select_related('employer', 'candidate')


def get_candidate_interviews(candidate_id, status=None, upcoming_only=False):
    """Interviews visible to a candidate.

    Pending requests are never returned: a candidate only learns about an
    interview once it has been approved. Asking for ``status='pending'``
    yields an empty list.
    """
    if status == Interview.STATUS_PENDING:
        return []

    def load():
        qs = _base_queryset().filter(candidate_id=candidate_id).exclude(status=Interview.STATUS_PENDING)
        if status:
            qs = qs.filter(status=status)
        if upcoming_only:
            qs = qs.filter(scheduled_at__gte=timezone.now()).order_by('scheduled_at')
        return list(InterviewSerializer(qs, many=True).data)

    params = {'status': status, 'upcoming': upcoming_only}
    if upcoming_only:
        # Upcoming depends on the clock
        return load()
    return cached_query('interviews:candidate', [TAG_INTERVIEWS, candidate_tag(candidate_id)], load,
                        params={'candidate': candidate_id, **params})


def get_employer_interviews(employer_id, status=None):
    def load():
        qs = _base_queryset().filter(employer_id=employer_id)
        if status:
            qs = qs.filter(status=status)
        return list(InterviewSerializer(qs, many=True).data)

    return cached_query('interviews:employer', [TAG_INTERVIEWS, employer_tag(employer_id)], load,
                        params={'employer': employer_id, 'status': status})


def get_pending_interviews():
    """Moderation queue, oldest request first."""
    def load():
        qs = _base_queryset().filter(status=Interview.STATUS_PENDING).order_by('requested_at', 'created_at')
        return list(InterviewSerializer(qs, many=True).data)

    return cached_query('interviews:pending', [TAG_INTERVIEWS], load)
