"""
Static role router.

``route(kind, area)`` is a pure lookup: it never touches the request or the
database, so the whole access policy is the ``ROUTES`` table below.
"""
from dataclasses import dataclass
from typing import Optional, Union

from django.conf import settings

from portal.identity import (
    KIND_ADMIN,
    KIND_CANDIDATE,
    KIND_EMPLOYER,
    KIND_MODERATOR,
    KIND_UNKNOWN,
)

AREA_ADMIN = 'admin'
AREA_MODERATOR = 'moderator'
AREA_DASHBOARD = 'dashboard'
AREA_EMPLOYER = 'employer'
AREAS = (AREA_ADMIN, AREA_MODERATOR, AREA_DASHBOARD, AREA_EMPLOYER)

TARGET_LOGIN = 'login'
TARGET_DASHBOARD = 'dashboard'
TARGET_ADMIN_PENDING = 'admin/interviews/pending'
TARGET_CMS = 'admin'
TARGET_EMPLOYER_DASHBOARD = 'employer/dashboard'
TARGET_NO_ACCESS = 'no-access'


@dataclass(frozen=True)
class Allow:
    pass


@dataclass(frozen=True)
class RedirectTo:
    target: str


Decision = Union[Allow, RedirectTo]

ALLOW = Allow()

# kind -> area -> decision; ``None`` is the anonymous visitor
ROUTES = {
    None: {
        AREA_ADMIN: RedirectTo(TARGET_LOGIN),
        AREA_MODERATOR: RedirectTo(TARGET_LOGIN),
        AREA_DASHBOARD: RedirectTo(TARGET_LOGIN),
        AREA_EMPLOYER: RedirectTo(TARGET_LOGIN),
    },
    KIND_CANDIDATE: {
        AREA_ADMIN: RedirectTo(TARGET_DASHBOARD),
        AREA_MODERATOR: RedirectTo(TARGET_DASHBOARD),
        AREA_DASHBOARD: ALLOW,
        AREA_EMPLOYER: RedirectTo(TARGET_DASHBOARD),
    },
    KIND_ADMIN: {
        AREA_ADMIN: ALLOW,
        AREA_MODERATOR: ALLOW,
        AREA_DASHBOARD: RedirectTo(TARGET_ADMIN_PENDING),
        AREA_EMPLOYER: ALLOW,
    },
    KIND_MODERATOR: {
        AREA_ADMIN: RedirectTo(TARGET_CMS),
        AREA_MODERATOR: ALLOW,
        AREA_DASHBOARD: RedirectTo(TARGET_ADMIN_PENDING),
        AREA_EMPLOYER: RedirectTo(TARGET_ADMIN_PENDING),
    },
    KIND_EMPLOYER: {
        AREA_ADMIN: RedirectTo(TARGET_DASHBOARD),
        AREA_MODERATOR: RedirectTo(TARGET_DASHBOARD),
        AREA_DASHBOARD: RedirectTo(TARGET_EMPLOYER_DASHBOARD),
        AREA_EMPLOYER: ALLOW,
    },
    KIND_UNKNOWN: {
        AREA_ADMIN: RedirectTo(TARGET_NO_ACCESS),
        AREA_MODERATOR: RedirectTo(TARGET_NO_ACCESS),
        AREA_DASHBOARD: RedirectTo(TARGET_NO_ACCESS),
        AREA_EMPLOYER: RedirectTo(TARGET_NO_ACCESS),
    },
}


# The moderation queue lives under admin/ but is moderator work
AREA_PREFIX_OVERRIDES = (
    ('admin/interviews', AREA_MODERATOR),
)


def route(kind: Optional[str], area: str) -> Decision:
    if area not in AREAS:
        raise ValueError(f"Unknown area: {area}")
    try:
        return ROUTES[kind][area]
    except KeyError:
        raise ValueError(f"Unknown identity kind: {kind}")


def split_locale(path):
    """Split ``/<locale>/rest`` into ``(locale, '/rest')``; locale may be None."""
    segments = [s for s in (path or '').split('/') if s]
    languages = {code for code, _ in settings.LANGUAGES}
    if segments and segments[0] in languages:
        return segments[0], '/' + '/'.join(segments[1:])
    return None, '/' + '/'.join(segments)


def area_for_path(path) -> Optional[str]:
    """Protected area a path belongs to, or None for public paths."""
    _, rest = split_locale(path)
    rest = rest.strip('/')
    for prefix, area in AREA_PREFIX_OVERRIDES:
        if rest == prefix or rest.startswith(prefix + '/'):
            return area
    first = rest.split('/', 1)[0]
    if first in AREAS:
        return first
    return None
