import pytest

from portal.identity import KIND_ADMIN, KIND_CANDIDATE, KIND_EMPLOYER, KIND_MODERATOR, KIND_UNKNOWN
from portal.redirects import is_safe_relative_path, url_for_target
from portal.routing import (
    ALLOW,
    AREA_ADMIN,
    AREA_DASHBOARD,
    AREA_EMPLOYER,
    AREA_MODERATOR,
    RedirectTo,
    area_for_path,
    route,
)

LOGIN = RedirectTo('login')
DASHBOARD = RedirectTo('dashboard')
ADMIN_PENDING = RedirectTo('admin/interviews/pending')
CMS = RedirectTo('admin')
EMPLOYER_DASHBOARD = RedirectTo('employer/dashboard')
NO_ACCESS = RedirectTo('no-access')

EXPECTED = [
    # kind, admin/*, moderator/*, dashboard/*, employer/*
    (None, LOGIN, LOGIN, LOGIN, LOGIN),
    (KIND_CANDIDATE, DASHBOARD, DASHBOARD, ALLOW, DASHBOARD),
    (KIND_ADMIN, ALLOW, ALLOW, ADMIN_PENDING, ALLOW),
    (KIND_MODERATOR, CMS, ALLOW, ADMIN_PENDING, ADMIN_PENDING),
    (KIND_EMPLOYER, DASHBOARD, DASHBOARD, EMPLOYER_DASHBOARD, ALLOW),
    (KIND_UNKNOWN, NO_ACCESS, NO_ACCESS, NO_ACCESS, NO_ACCESS),
]


@pytest.mark.parametrize('kind,admin,moderator,dashboard,employer', EXPECTED)
def test_route_matches_policy_table(kind, admin, moderator, dashboard, employer):
    assert route(kind, AREA_ADMIN) == admin
    assert route(kind, AREA_MODERATOR) == moderator
    assert route(kind, AREA_DASHBOARD) == dashboard
    assert route(kind, AREA_EMPLOYER) == employer


def test_route_rejects_unknown_area_and_kind():
    with pytest.raises(ValueError):
        route(KIND_ADMIN, 'billing')
    with pytest.raises(ValueError):
        route('superhero', AREA_ADMIN)


@pytest.mark.parametrize('path,area', [
    ('/en/dashboard/', AREA_DASHBOARD),
    ('/ar/dashboard/interviews/', AREA_DASHBOARD),
    ('/dashboard', AREA_DASHBOARD),
    ('/en/employer/dashboard/', AREA_EMPLOYER),
    ('/en/moderator/interviews/pending/', AREA_MODERATOR),
    ('/en/admin/interviews/pending/', AREA_MODERATOR),
    ('/en/admin/settings/', AREA_ADMIN),
    ('/en/blog/', None),
    ('/', None),
    ('/en/', None),
])
def test_area_for_path(path, area):
    assert area_for_path(path) == area


def test_url_for_target_is_locale_prefixed():
    assert url_for_target('login', 'ar') == '/ar/login/'
    assert url_for_target('login', 'en', from_path='/en/dashboard/') == '/en/login/?from=%2Fen%2Fdashboard%2F'
    assert url_for_target('dashboard', 'en') == '/en/dashboard/'
    assert url_for_target('admin/interviews/pending', 'en') == '/en/admin/interviews/pending/'
    assert url_for_target('employer/dashboard', 'ar') == '/ar/employer/dashboard/'
    assert url_for_target('no-access', 'en') == '/en/no-access/'
    # The CMS lives outside the locale prefix
    assert url_for_target('admin', 'ar') == '/admin/'


@pytest.mark.parametrize('path,safe', [
    ('/en/dashboard/', True),
    ('/', True),
    ('//evil.example.com/', False),
    ('https://evil.example.com/', False),
    ('/\\evil.example.com', False),
    ('', False),
    (None, False),
])
def test_is_safe_relative_path(path, safe):
    assert is_safe_relative_path(path) is safe
