"""
Session cookie names and lifecycle.

Every principal collection gets its own auth cookie so that a browser can
only ever be logged in as one kind of account at a time. ``rtw-sid`` carries
the single-session id that must match the principal's stored ``session_id``.
"""
from django.conf import settings

from portal.models import COLLECTION_CANDIDATES, COLLECTION_EMPLOYERS, COLLECTION_USERS

COOKIE_PREFIX = 'payload'
SESSION_ID_COOKIE = 'rtw-sid'

# Probe order used by identity resolution
AUTH_COLLECTIONS = (COLLECTION_USERS, COLLECTION_EMPLOYERS, COLLECTION_CANDIDATES)


def get_auth_cookie_name(collection):
    """Cookie name for a collection: the users collection keeps the bare name."""
    if collection not in AUTH_COLLECTIONS:
        raise ValueError(f"Unknown auth collection: {collection}")
    if collection == COLLECTION_USERS:
        return f'{COOKIE_PREFIX}-token'
    return f'{COOKIE_PREFIX}-token-{collection}'


def get_all_auth_cookie_names():
    return [get_auth_cookie_name(collection) for collection in AUTH_COLLECTIONS]


def _cookie_kwargs():
    return {
        'httponly': True,
        'secure': getattr(settings, 'AUTH_COOKIE_SECURE', not settings.DEBUG),
        'samesite': 'Strict',
        'path': '/',
    }


def set_session_cookies(response, collection, token, session_id, max_age=None):
    """Attach the collection's auth cookie and ``rtw-sid`` to a response.

    Cookies of the other collections are cleared first so only one collection
    is ever active.
    """
    if max_age is None:
        max_age = settings.SESSION_TOKEN_MAX_AGE
    active = get_auth_cookie_name(collection)
    for name in get_all_auth_cookie_names():
        if name != active:
            _expire(response, name)
    response.set_cookie(active, token, max_age=max_age, **_cookie_kwargs())
    response.set_cookie(SESSION_ID_COOKIE, session_id, max_age=max_age, **_cookie_kwargs())
    return response


def _expire(response, name):
    response.set_cookie(
        name,
        '',
        max_age=0,
        expires='Thu, 01 Jan 1970 00:00:00 GMT',
        **_cookie_kwargs(),
    )


def clear_auth_cookies(response):
    """Null every collection's auth cookie plus ``rtw-sid``, never a subset."""
    for name in get_all_auth_cookie_names():
        _expire(response, name)
    _expire(response, SESSION_ID_COOKIE)
    return response
