from urllib.parse import urlencode

from django.conf import settings
from django.http import HttpResponseRedirect
from django.utils import translation

from portal.routing import (
    TARGET_ADMIN_PENDING,
    TARGET_CMS,
    TARGET_DASHBOARD,
    TARGET_EMPLOYER_DASHBOARD,
    TARGET_LOGIN,
    TARGET_NO_ACCESS,
    split_locale,
)

LOCALIZED_TARGET_PATHS = {
    TARGET_LOGIN: 'login/',
    TARGET_DASHBOARD: 'dashboard/',
    TARGET_ADMIN_PENDING: 'admin/interviews/pending/',
    TARGET_EMPLOYER_DASHBOARD: 'employer/dashboard/',
    TARGET_NO_ACCESS: 'no-access/',
}

CMS_ROOT = '/admin/'


def current_locale(request=None):
    """Locale from the request path, then the active translation, then the default."""
    if request is not None:
        locale, _ = split_locale(request.path)
        if locale:
            return locale
    language = translation.get_language() or settings.LANGUAGE_CODE
    languages = {code for code, _ in settings.LANGUAGES}
    language = language.split('-')[0]
    return language if language in languages else settings.LANGUAGE_CODE


def url_for_target(target, locale=None, from_path=None):
    if target == TARGET_CMS:
        return CMS_ROOT
    try:
        suffix = LOCALIZED_TARGET_PATHS[target]
    except KeyError:
        raise ValueError(f"Unknown redirect target: {target}")
    url = f"/{locale or settings.LANGUAGE_CODE}/{suffix}"
    if target == TARGET_LOGIN and from_path:
        url = f"{url}?{urlencode({'from': from_path})}"
    return url


def redirect_to_target(request, target):
    return HttpResponseRedirect(
        url_for_target(target, current_locale(request), from_path=request.get_full_path())
    )


def is_safe_relative_path(path):
    """Only same-site relative paths like ``/en/dashboard`` are accepted."""
    if not path or not isinstance(path, str):
        return False
    if not path.startswith('/') or path.startswith('//') or path.startswith('/\\'):
        return False
    return '\n' not in path and '\r' not in path
