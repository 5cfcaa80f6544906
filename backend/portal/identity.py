"""
Identity resolution from the per-collection session cookies.
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional

from portal.cookies import AUTH_COLLECTIONS, SESSION_ID_COOKIE, get_auth_cookie_name
from portal.models import COLLECTION_USERS, Candidate, Employer, User
from portal.sessions import verify_session_token

logger = logging.getLogger(__name__)

KIND_CANDIDATE = 'candidate'
KIND_EMPLOYER = 'employer'
KIND_ADMIN = 'admin'
KIND_MODERATOR = 'moderator'
# Authenticated user without a role or linked profile
KIND_UNKNOWN = 'unknown'

KINDS = (KIND_CANDIDATE, KIND_EMPLOYER, KIND_ADMIN, KIND_MODERATOR, KIND_UNKNOWN)


@dataclass(frozen=True)
class Identity:
    """Who is making the request.

    ``account`` is the record the session cookie was issued for. ``principal``
    is the record that defines the kind: for a ``users`` account linked to a
    candidate or employer profile it is that profile.
    """
    kind: str
    principal: Any
    account: Any
    collection: str

    @property
    def candidate(self) -> Optional[Candidate]:
        return self.principal if self.kind == KIND_CANDIDATE else None

    @property
    def employer(self) -> Optional[Employer]:
        return self.principal if self.kind == KIND_EMPLOYER else None

    @property
    def user(self) -> Optional[User]:
        return self.account if self.collection == COLLECTION_USERS else None


def _identity_for_user(user):
    if user.role == User.ROLE_ADMIN:
        return Identity(KIND_ADMIN, user, user, COLLECTION_USERS)
    if user.role == User.ROLE_MODERATOR:
        return Identity(KIND_MODERATOR, user, user, COLLECTION_USERS)

    # Plain users are linked to a profile by email
    email = (user.email or '').lower()
    if email:
        candidate = Candidate.objects.filter(email=email, is_active=True).first()
        if candidate is not None:
            return Identity(KIND_CANDIDATE, candidate, user, COLLECTION_USERS)
        employer = Employer.objects.filter(email=email, is_active=True).first()
        if employer is not None:
            return Identity(KIND_EMPLOYER, employer, user, COLLECTION_USERS)
    return Identity(KIND_UNKNOWN, user, user, COLLECTION_USERS)


def identity_for_principal(principal):
    """Build the identity for an already authenticated record."""
    if isinstance(principal, User):
        return _identity_for_user(principal)
    if isinstance(principal, Employer):
        return Identity(KIND_EMPLOYER, principal, principal, principal.COLLECTION)
    if isinstance(principal, Candidate):
        return Identity(KIND_CANDIDATE, principal, principal, principal.COLLECTION)
    raise TypeError(f"Unsupported principal type: {type(principal).__name__}")


def _session_matches(request, principal):
    # An empty stored id means the principal logged out
    stored = principal.session_id
    return bool(stored) and request.COOKIES.get(SESSION_ID_COOKIE) == stored


def resolve_identity(request) -> Optional[Identity]:
    """Resolve the request's identity, or None when nobody is logged in.

    Cookies are probed in the order users, employers, candidates. Any lookup
    failure counts as "not logged in"; nothing is retried.
    """
    for collection in AUTH_COLLECTIONS:
        token = request.COOKIES.get(get_auth_cookie_name(collection))
        if not token:
            continue
        try:
            principal = verify_session_token(collection, token)
            if principal is None:
                continue
            if not _session_matches(request, principal):
                logger.info(
                    "Session id mismatch for collection=%s principal_id=%s; session was rotated or ended",
                    collection, principal.pk
                )
                continue
            return identity_for_principal(principal)
        except Exception as e:
            logger.warning(f"Identity lookup failed for collection {collection}: {e}")
            continue
    return None
