from django.db.models import Q

from portal.models import Candidate
from portal.revalidation import TAG_CANDIDATES
from portal.serializers import CandidatePublicSerializer
from portal.utils.cache_utils import cached_query


DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def list_candidates(search=None, nationality=None, location=None, min_experience=None,
                    page=1, page_size=DEFAULT_PAGE_SIZE):
    """Active candidates for the public listing, newest first.

    Returns ``{'results': [...], 'total': n, 'page': p, 'page_size': s}``.
    """
    page = max(int(page or 1), 1)
    page_size = min(max(int(page_size or DEFAULT_PAGE_SIZE), 1), MAX_PAGE_SIZE)

    def load():
        qs = Candidate.objects.filter(is_active=True)
        if search:
            qs = qs.filter(
                Q(job_title__icontains=search)
                | Q(first_name__icontains=search)
                | Q(last_name__icontains=search)
                | Q(location__icontains=search)
            )
        if nationality:
            qs = qs.filter(nationality__iexact=nationality)
        if location:
            qs = qs.filter(location__icontains=location)
        if min_experience is not None:
            qs = qs.filter(experience_years__gte=min_experience)
        total = qs.count()
        start = (page - 1) * page_size
        rows = qs[start:start + page_size]
        return {
            'results': list(CandidatePublicSerializer(rows, many=True).data),
            'total': total,
            'page': page,
            'page_size': page_size,
        }

    params = {
        'search': search, 'nationality': nationality, 'location': location,
        'min_experience': min_experience, 'page': page, 'page_size': page_size,
    }
    return cached_query('candidates:list', [TAG_CANDIDATES], load, params=params)
