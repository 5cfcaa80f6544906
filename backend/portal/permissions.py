from rest_framework import permissions

from portal.identity import KIND_ADMIN, KIND_CANDIDATE, KIND_EMPLOYER, KIND_MODERATOR


def _kind(request):
    identity = getattr(request, 'auth', None)
    return getattr(identity, 'kind', None)


class IsCandidate(permissions.BasePermission):
    message = 'Only candidates can perform this action.'

    def has_permission(self, request, view):
        return _kind(request) == KIND_CANDIDATE


class IsEmployer(permissions.BasePermission):
    message = 'Only employers can perform this action.'

    def has_permission(self, request, view):
        return _kind(request) == KIND_EMPLOYER


class IsCandidateOrEmployer(permissions.BasePermission):
    message = 'Only candidates or employers can perform this action.'

    def has_permission(self, request, view):
        return _kind(request) in (KIND_CANDIDATE, KIND_EMPLOYER)


class IsAdminOrModerator(permissions.BasePermission):
    """
    Interview moderation is open to admins and moderators alike.
    """
    message = 'Only admins or moderators can perform this action.'

    def has_permission(self, request, view):
        return _kind(request) in (KIND_ADMIN, KIND_MODERATOR)
