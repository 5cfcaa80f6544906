import pytest
from django.core import signing
from django.test import RequestFactory

from portal.cookies import SESSION_ID_COOKIE, get_auth_cookie_name
from portal.identity import (
    KIND_ADMIN,
    KIND_CANDIDATE,
    KIND_EMPLOYER,
    KIND_MODERATOR,
    KIND_UNKNOWN,
    resolve_identity,
)
from portal.sessions import issue_session_token, verify_session_token
from portal.tests.fixtures import (
    AdminFactory,
    CandidateFactory,
    EmployerFactory,
    ModeratorFactory,
    UserFactory,
)


def _request_with_session(principal, session_id='sid-1', rotate=True, sid_cookie=None):
    if rotate:
        principal.rotate_session_id(session_id)
    request = RequestFactory().get('/en/dashboard/')
    request.COOKIES[get_auth_cookie_name(principal.COLLECTION)] = issue_session_token(principal)
    request.COOKIES[SESSION_ID_COOKIE] = session_id if sid_cookie is None else sid_cookie
    return request


def test_no_cookies_is_anonymous():
    assert resolve_identity(RequestFactory().get('/')) is None


@pytest.mark.django_db
def test_candidate_cookie_resolves_candidate():
    candidate = CandidateFactory()
    identity = resolve_identity(_request_with_session(candidate))
    assert identity.kind == KIND_CANDIDATE
    assert identity.principal == candidate
    assert identity.candidate == candidate
    assert identity.employer is None


@pytest.mark.django_db
def test_employer_cookie_resolves_employer():
    employer = EmployerFactory()
    identity = resolve_identity(_request_with_session(employer))
    assert identity.kind == KIND_EMPLOYER
    assert identity.employer == employer


@pytest.mark.django_db
@pytest.mark.parametrize('factory_cls,kind', [(AdminFactory, KIND_ADMIN), (ModeratorFactory, KIND_MODERATOR)])
def test_staff_roles(factory_cls, kind):
    user = factory_cls()
    identity = resolve_identity(_request_with_session(user))
    assert identity.kind == kind
    assert identity.candidate is None and identity.employer is None
    assert identity.user == user


@pytest.mark.django_db
def test_plain_user_is_linked_to_profile_by_email():
    candidate = CandidateFactory(email='linked@example.com')
    user = UserFactory(email='LINKED@example.com')
    identity = resolve_identity(_request_with_session(user))
    assert identity.kind == KIND_CANDIDATE
    assert identity.principal == candidate
    assert identity.account == user


@pytest.mark.django_db
def test_plain_user_without_profile_is_unknown():
    user = UserFactory()
    identity = resolve_identity(_request_with_session(user))
    assert identity.kind == KIND_UNKNOWN


@pytest.mark.django_db
def test_users_cookie_is_probed_first():
    admin = AdminFactory()
    candidate = CandidateFactory()
    request = _request_with_session(admin, session_id='shared')
    candidate.rotate_session_id('shared')
    request.COOKIES[get_auth_cookie_name('candidates')] = issue_session_token(candidate)
    assert resolve_identity(request).kind == KIND_ADMIN


@pytest.mark.django_db
def test_rotated_session_id_invalidates_cookie():
    candidate = CandidateFactory()
    request = _request_with_session(candidate, session_id='old-sid')
    # Logged in elsewhere
    candidate.rotate_session_id('new-sid')
    assert resolve_identity(request) is None


@pytest.mark.django_db
def test_missing_sid_cookie_is_rejected_when_session_is_stored():
    candidate = CandidateFactory()
    request = _request_with_session(candidate, session_id='sid-9', sid_cookie='')
    assert resolve_identity(request) is None


@pytest.mark.django_db
def test_inactive_principal_is_anonymous():
    employer = EmployerFactory(is_active=False)
    assert resolve_identity(_request_with_session(employer)) is None


@pytest.mark.django_db
def test_tampered_or_foreign_token_is_anonymous():
    employer = EmployerFactory()
    employer.rotate_session_id('sid-1')
    request = RequestFactory().get('/')
    # An employer token presented as a candidate cookie fails the salt check
    request.COOKIES[get_auth_cookie_name('candidates')] = issue_session_token(employer)
    request.COOKIES[SESSION_ID_COOKIE] = 'sid-1'
    assert resolve_identity(request) is None

    request.COOKIES = {get_auth_cookie_name('employers'): 'garbage', SESSION_ID_COOKIE: 'sid-1'}
    assert resolve_identity(request) is None


@pytest.mark.django_db
def test_expired_token_is_rejected():
    candidate = CandidateFactory()
    token = issue_session_token(candidate)
    assert verify_session_token('candidates', token) == candidate
    assert verify_session_token('candidates', token, max_age=-1) is None


@pytest.mark.django_db
def test_token_for_deleted_record_is_rejected():
    candidate = CandidateFactory()
    token = signing.dumps({'id': candidate.pk + 1000}, salt='portal.sessions.candidates')
    assert verify_session_token('candidates', token) is None


@pytest.mark.django_db
def test_backend_errors_are_treated_as_anonymous(monkeypatch):
    candidate = CandidateFactory()
    request = _request_with_session(candidate)

    def boom(*args, **kwargs):
        raise RuntimeError('database unavailable')

    monkeypatch.setattr('portal.identity.verify_session_token', boom)
    assert resolve_identity(request) is None
