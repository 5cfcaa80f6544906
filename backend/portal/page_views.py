"""
Locale-prefixed pages.

Pages answer with the JSON payload a front end renders. Protected ones are
guarded by ``area_required``; their data fetches are best-effort and degrade
to empty results instead of failing the page.
"""
import logging

from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.http import Http404, HttpResponse, HttpResponseRedirect, JsonResponse
from django.views.decorators.http import require_http_methods

from portal.data.candidates import list_candidates
from portal.data.interviews import get_candidate_interviews, get_employer_interviews, get_pending_interviews
from portal.data.notifications import get_notifications, get_unread_count
from portal.data.pages import get_page_by_slug
from portal.data.posts import get_post_by_slug, list_published_posts
from portal.decorators import area_required
from portal.identity import KIND_ADMIN, KIND_CANDIDATE, KIND_EMPLOYER, KIND_MODERATOR
from portal.middleware import get_identity
from portal.redirects import current_locale, is_safe_relative_path, url_for_target
from portal.routing import (
    AREA_DASHBOARD,
    AREA_EMPLOYER,
    AREA_MODERATOR,
    TARGET_ADMIN_PENDING,
    TARGET_DASHBOARD,
    TARGET_EMPLOYER_DASHBOARD,
    TARGET_NO_ACCESS,
)
from portal.serializers import CandidateSerializer, EmployerSerializer

logger = logging.getLogger(__name__)

ROBOTS_DISALLOW = ['/api/', '/admin/', '/dashboard/', '/employer/dashboard/', '/next/']

# Where an already logged-in visitor lands
HOME_TARGETS = {
    KIND_CANDIDATE: TARGET_DASHBOARD,
    KIND_EMPLOYER: TARGET_EMPLOYER_DASHBOARD,
    KIND_ADMIN: TARGET_ADMIN_PENDING,
    KIND_MODERATOR: TARGET_ADMIN_PENDING,
}


def _page(name, request, status=200, **data):
    payload = {'page': name, 'locale': current_locale(request), **data}
    return JsonResponse(payload, status=status, encoder=DjangoJSONEncoder)


def _best_effort(fetch, default, what):
    try:
        return fetch()
    except Exception as e:
        logger.error(f"Failed to load {what}: {e}", exc_info=True)
        return default


@require_http_methods(['GET'])
def login_page(request):
    identity = get_identity(request)
    locale = current_locale(request)
    if identity is not None:
        target = HOME_TARGETS.get(identity.kind, TARGET_NO_ACCESS)
        return HttpResponseRedirect(url_for_target(target, locale))
    from_path = request.GET.get('from')
    return _page('login', request, **{'from': from_path if is_safe_relative_path(from_path) else None})


@require_http_methods(['GET'])
def no_access(request):
    return _page(
        'no-access',
        request,
        status=403,
        message='Your account does not have access to this area.',
    )


@require_http_methods(['GET'])
@area_required(AREA_DASHBOARD)
def dashboard(request):
    candidate = get_identity(request).candidate
    return _page(
        'dashboard',
        request,
        candidate=CandidateSerializer(candidate).data,
        upcoming_interviews=_best_effort(
            lambda: get_candidate_interviews(candidate.pk, upcoming_only=True), [], 'upcoming interviews'
        ),
        unread_notifications=_best_effort(
            lambda: get_unread_count(candidate_id=candidate.pk), 0, 'unread notification count'
        ),
    )


@require_http_methods(['GET'])
@area_required(AREA_DASHBOARD)
def dashboard_interviews(request):
    candidate = get_identity(request).candidate
    status_filter = request.GET.get('status') or None
    return _page(
        'dashboard/interviews',
        request,
        interviews=_best_effort(
            lambda: get_candidate_interviews(candidate.pk, status=status_filter), [], 'candidate interviews'
        ),
    )


@require_http_methods(['GET'])
@area_required(AREA_DASHBOARD)
def dashboard_notifications(request):
    candidate = get_identity(request).candidate
    return _page(
        'dashboard/notifications',
        request,
        notifications=_best_effort(
            lambda: get_notifications(candidate_id=candidate.pk), [], 'candidate notifications'
        ),
    )


@require_http_methods(['GET'])
@area_required(AREA_EMPLOYER)
def employer_dashboard(request):
    identity = get_identity(request)
    employer = identity.employer
    if employer is None:
        # Admins may open the employer area without an employer profile
        return _page('employer/dashboard', request, employer=None, interviews=[], notifications=[])
    return _page(
        'employer/dashboard',
        request,
        employer=EmployerSerializer(employer).data,
        interviews=_best_effort(lambda: get_employer_interviews(employer.pk), [], 'employer interviews'),
        notifications=_best_effort(
            lambda: get_notifications(employer_id=employer.pk, limit=10), [], 'employer notifications'
        ),
        unread_notifications=_best_effort(
            lambda: get_unread_count(employer_id=employer.pk), 0, 'unread notification count'
        ),
    )


@require_http_methods(['GET'])
@area_required(AREA_MODERATOR)
def pending_interviews(request):
    return _page(
        'interviews/pending',
        request,
        interviews=_best_effort(get_pending_interviews, [], 'pending interviews'),
    )


@require_http_methods(['GET'])
def blog(request):
    category = request.GET.get('category') or None
    return _page(
        'blog',
        request,
        posts=_best_effort(lambda: list_published_posts(category=category), [], 'posts'),
    )


@require_http_methods(['GET'])
def post_detail(request, slug):
    post = get_post_by_slug(slug)
    if post is None:
        raise Http404('Post not found')
    return _page('post', request, post=post)


@require_http_methods(['GET'])
def candidates(request):
    params = request.GET
    min_experience = params.get('min_experience')
    try:
        min_experience = int(min_experience) if min_experience not in (None, '') else None
        page = int(params.get('page') or 1)
    except ValueError:
        return JsonResponse({'error': 'page and min_experience must be integers'}, status=400)
    empty = {'results': [], 'total': 0, 'page': page}
    listing = _best_effort(
        lambda: list_candidates(
            search=params.get('q') or None,
            nationality=params.get('nationality') or None,
            location=params.get('location') or None,
            min_experience=min_experience,
            page=page,
        ),
        empty,
        'candidates',
    )
    return _page('candidates', request, **listing)


@require_http_methods(['GET'])
def cms_page(request, slug):
    page = get_page_by_slug(slug)
    if page is None:
        raise Http404('Page not found')
    return _page('page', request, content=page)


@require_http_methods(['GET'])
def robots_txt(request):
    lines = ['User-agent: *', 'Allow: /']
    lines += [f'Disallow: {path}' for path in ROBOTS_DISALLOW]
    lines.append('')
    lines.append(f"Sitemap: {settings.SERVER_URL.rstrip('/')}/sitemap.xml")
    return HttpResponse('\n'.join(lines) + '\n', content_type='text/plain')
