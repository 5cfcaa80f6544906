"""
Attach the resolved identity to every request.
"""
import logging

from django.utils.functional import SimpleLazyObject

from portal.identity import resolve_identity
from portal.redirects import redirect_to_target
from portal.routing import RedirectTo, area_for_path, route, split_locale

logger = logging.getLogger(__name__)

_UNRESOLVED = object()


def get_identity(request):
    """Resolve once per request and memoize on the request object."""
    cached = getattr(request, '_cached_identity', _UNRESOLVED)
    if cached is _UNRESOLVED:
        cached = resolve_identity(request)
        request._cached_identity = cached
    return cached


class IdentityMiddleware:
    """
    Sets ``request.identity`` lazily so public pages never pay for the lookup.

    Reading it yields an ``Identity`` or None (anonymous). Use
    ``get_identity(request)`` when an actual None is needed for ``is None``
    checks.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.identity = SimpleLazyObject(lambda: get_identity(request))
        return self.get_response(request)


class AreaGuardMiddleware:
    """
    Applies the role router to every locale-prefixed protected path.

    Paths outside ``/<locale>/`` (the CMS at ``/admin/``, the API, robots and
    the sitemap) are left alone. Allowed requests continue to URL resolution,
    so unrouted paths inside an area still 404 for permitted visitors.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        locale, _ = split_locale(request.path_info)
        area = area_for_path(request.path_info) if locale else None
        if area is not None:
            identity = get_identity(request)
            decision = route(identity.kind if identity is not None else None, area)
            if isinstance(decision, RedirectTo):
                logger.debug(
                    "Guarding %s (kind=%s area=%s) -> %s",
                    request.path, getattr(identity, 'kind', None), area, decision.target
                )
                return redirect_to_target(request, decision.target)
        return self.get_response(request)
