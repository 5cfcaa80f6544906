"""
Signed session tokens for the three principal collections.

Tokens are produced with ``django.core.signing`` and salted per collection, so
a token minted for one collection never validates against another.
"""
import logging
import uuid

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core import signing

from portal.cookies import set_session_cookies
from portal.models import (
    COLLECTION_CANDIDATES,
    COLLECTION_EMPLOYERS,
    COLLECTION_USERS,
    Candidate,
    Employer,
)

logger = logging.getLogger(__name__)


def get_collection_model(collection):
    if collection == COLLECTION_USERS:
        return get_user_model()
    if collection == COLLECTION_EMPLOYERS:
        return Employer
    if collection == COLLECTION_CANDIDATES:
        return Candidate
    raise ValueError(f"Unknown auth collection: {collection}")


def _salt(collection):
    return f'portal.sessions.{collection}'


def get_client_ip(request):
    if request is None:
        return None
    remote_addr = request.META.get('REMOTE_ADDR')
    xff = request.META.get('HTTP_X_FORWARDED_FOR')
    if xff:
        remote_addr = xff.split(',')[0].strip()
    return remote_addr


def issue_session_token(principal):
    return signing.dumps({'id': principal.pk}, salt=_salt(principal.COLLECTION))


def verify_session_token(collection, token, max_age=None):
    """Return the active principal a token belongs to, or None.

    Bad signatures, expired tokens, missing and inactive records all come back
    as None.
    """
    if not token:
        return None
    if max_age is None:
        max_age = settings.SESSION_TOKEN_MAX_AGE
    try:
        payload = signing.loads(token, salt=_salt(collection), max_age=max_age)
    except signing.SignatureExpired:
        logger.debug("Expired session token for collection=%s", collection)
        return None
    except signing.BadSignature:
        logger.debug("Bad session token signature for collection=%s", collection)
        return None

    model = get_collection_model(collection)
    principal = model.objects.filter(pk=payload.get('id')).first()
    if principal is None or not principal.is_active:
        return None
    return principal


def authenticate_credentials(collection, email, password):
    """Look up a principal by email and check its password."""
    if not email or not password:
        return None
    model = get_collection_model(collection)
    principal = model.objects.filter(email__iexact=email.strip()).first()
    if principal is None or not principal.is_active:
        return None
    if not principal.check_password(password):
        return None
    return principal


def login_principal(request, response, principal):
    """Rotate the principal's session id and attach fresh cookies to ``response``.

    Rotating the id invalidates any session held by another browser.
    """
    session_id = uuid.uuid4().hex
    principal.rotate_session_id(session_id)
    token = issue_session_token(principal)
    set_session_cookies(response, principal.COLLECTION, token, session_id)
    logger.info(
        "AUTH login_success collection=%s principal_id=%s email=%s ip=%s",
        principal.COLLECTION, principal.pk, principal.email, get_client_ip(request)
    )
    return token


def logout_principal(request, principal):
    """Forget the stored session id so the old cookies stop validating."""
    if principal is None:
        return
    principal.rotate_session_id('')
    logger.info(
        "AUTH logout collection=%s principal_id=%s ip=%s",
        principal.COLLECTION, principal.pk, get_client_ip(request)
    )
