"""
API endpoints: session auth, notifications, interview workflow and the
payment provider callback.
"""
import logging

from django.conf import settings
from django.http import HttpResponseRedirect
from django.views.decorators.http import require_http_methods
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from portal import interviews as interview_service
from portal.cookies import clear_auth_cookies
from portal.data.interviews import get_candidate_interviews, get_employer_interviews, get_pending_interviews
from portal.data.notifications import get_notifications, get_unread_count
from portal.identity import KIND_CANDIDATE, identity_for_principal
from portal.middleware import get_identity
from portal.models import Interview
from portal.notifications import mark_all_notifications_read, mark_notification_read
from portal.permissions import IsAdminOrModerator, IsCandidate, IsCandidateOrEmployer, IsEmployer
from portal.purchases import fulfill_purchase_by_payment_id
from portal.redirects import is_safe_relative_path
from portal.serializers import (
    CandidateSerializer,
    EmployerSerializer,
    InterviewApprovalSerializer,
    InterviewRequestSerializer,
    InterviewSerializer,
    LoginSerializer,
    NotificationSerializer,
    UserSerializer,
)
from portal.sessions import authenticate_credentials, get_client_ip, login_principal, logout_principal

logger = logging.getLogger(__name__)


def _identity_payload(identity):
    data = {'kind': identity.kind, 'collection': identity.collection}
    if identity.user is not None:
        data['user'] = UserSerializer(identity.user).data
    if identity.candidate is not None:
        data['candidate'] = CandidateSerializer(identity.candidate).data
    if identity.employer is not None:
        data['employer'] = EmployerSerializer(identity.employer).data
    return data


def _server_url():
    return settings.SERVER_URL.rstrip('/')


# ======================
# Session auth
# ======================

@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """
    POST /api/auth/login

    Request Body:
    {
        "collection": "users" | "employers" | "candidates",
        "email": "user@example.com",
        "password": "..."
    }

    Sets the collection's session cookie plus ``rtw-sid`` and clears the
    other collections' cookies.
    """
    serializer = LoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    collection = serializer.validated_data['collection']
    email = serializer.validated_data['email']

    principal = authenticate_credentials(collection, email, serializer.validated_data['password'])
    if principal is None:
        logger.warning(
            "AUTH login_failed collection=%s email=%s ip=%s", collection, email, get_client_ip(request)
        )
        return Response(
            {'error': 'Invalid email or password.', 'code': 'invalid_credentials'},
            status=status.HTTP_401_UNAUTHORIZED,
        )

    response = Response({'message': 'Login successful'}, status=status.HTTP_200_OK)
    login_principal(request, response, principal)
    response.data.update(_identity_payload(identity_for_principal(principal)))
    return response


@api_view(['POST'])
@permission_classes([AllowAny])
def logout(request):
    """
    POST /api/auth/logout

    Always clears every auth cookie, even when the session was already gone.
    """
    identity = get_identity(request._request)
    if identity is not None:
        logout_principal(request, identity.account)
    response = Response({'success': True, 'message': 'Logout successful.'}, status=status.HTTP_200_OK)
    return clear_auth_cookies(response)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me(request):
    return Response(_identity_payload(request.auth), status=status.HTTP_200_OK)


@require_http_methods(['GET'])
def clear_session(request):
    """
    GET /api/auth/clear-session?next=<path>

    Used when a session turns out to be invalid (e.g. logged in elsewhere).
    """
    next_path = request.GET.get('next') or '/'
    if not is_safe_relative_path(next_path):
        next_path = '/'
    return clear_auth_cookies(HttpResponseRedirect(next_path))


# ======================
# Payments
# ======================

@require_http_methods(['GET'])
def payment_callback(request):
    """
    GET /api/payment/callback?paymentId=...&success=1|0

    Redirect target for MyFatoorah after checkout (both success and error).
    """
    base_url = _server_url()
    payment_id = request.GET.get('paymentId') or request.GET.get('PaymentId')
    if not payment_id:
        return HttpResponseRedirect(f"{base_url}/en/pricing?payment=error&reason=missing_id")

    try:
        result = fulfill_purchase_by_payment_id(payment_id)
    except Exception as e:
        logger.error(f"Payment callback error for payment {payment_id}: {e}", exc_info=True)
        return HttpResponseRedirect(f"{base_url}/en/pricing?payment=error")

    if result.error:
        logger.warning("Payment %s not fulfilled: %s", payment_id, result.error)
    path = result.redirect_path
    url = path if path.startswith('http') else f"{base_url}{path}"
    return HttpResponseRedirect(url)


# ======================
# Notifications
# ======================

@api_view(['GET'])
@permission_classes([IsCandidateOrEmployer])
def notifications_list(request):
    """
    GET /api/notifications?unread=1
    """
    identity = request.auth
    unread_only = request.query_params.get('unread') in ('1', 'true')
    if identity.kind == KIND_CANDIDATE:
        recipient = {'candidate_id': identity.principal.pk}
    else:
        recipient = {'employer_id': identity.principal.pk}
    return Response({
        'results': get_notifications(unread_only=unread_only, **recipient),
        'unread_count': get_unread_count(**recipient),
    }, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsCandidateOrEmployer])
def notification_mark_read(request, notification_id: int):
    notification = mark_notification_read(request.auth, notification_id)
    return Response(NotificationSerializer(notification).data, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsCandidateOrEmployer])
def notifications_mark_all_read(request):
    updated = mark_all_notifications_read(request.auth)
    return Response({'success': True, 'updated': updated}, status=status.HTTP_200_OK)


# ======================
# Interviews
# ======================

@api_view(['GET'])
@permission_classes([IsCandidateOrEmployer])
def interviews_list(request):
    """
    GET /api/interviews?status=approved

    Candidates never receive pending requests.
    """
    identity = request.auth
    status_filter = request.query_params.get('status') or None
    if status_filter and status_filter not in dict(Interview.STATUS_CHOICES):
        return Response(
            {'error': f'Unknown interview status: {status_filter}', 'code': 'bad_request'},
            status=status.HTTP_400_BAD_REQUEST,
        )
    if identity.kind == KIND_CANDIDATE:
        results = get_candidate_interviews(identity.principal.pk, status=status_filter)
    else:
        results = get_employer_interviews(identity.principal.pk, status=status_filter)
    return Response({'results': results}, status=status.HTTP_200_OK)


@api_view(['GET'])
@permission_classes([IsAdminOrModerator])
def interviews_pending(request):
    return Response({'results': get_pending_interviews()}, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsEmployer])
def interview_request(request):
    """
    POST /api/interviews/request

    Request Body:
    {
        "candidate": 12,
        "scheduled_at": "2026-11-01T09:00:00Z",
        "job_position": "Driver",
        ...
    }
    """
    serializer = InterviewRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = dict(serializer.validated_data)
    candidate = data.pop('candidate')
    scheduled_at = data.pop('scheduled_at')
    duration = data.pop('duration_minutes')
    interview = interview_service.request_interview(
        request.auth.principal, candidate, scheduled_at, duration_minutes=duration, **data
    )
    return Response(InterviewSerializer(interview).data, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([IsAdminOrModerator])
def interview_approve(request, interview_id: int):
    """
    POST /api/interviews/<id>/approve

    Optional body overrides: scheduled_at, duration_minutes, meeting_link, notes.
    """
    serializer = InterviewApprovalSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    interview = interview_service.approve_interview(
        interview_id, request.auth.account, **serializer.validated_data
    )
    return Response(InterviewSerializer(interview).data, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsAdminOrModerator])
def interview_reject(request, interview_id: int):
    reason = (request.data.get('reason') or '').strip()
    interview = interview_service.reject_interview(interview_id, request.auth.account, reason=reason)
    return Response(InterviewSerializer(interview).data, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsCandidate])
def interview_accept(request, interview_id: int):
    interview = interview_service.accept_interview(request.auth.principal, interview_id)
    return Response(InterviewSerializer(interview).data, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsCandidate])
def interview_decline(request, interview_id: int):
    reason = (request.data.get('reason') or '').strip()
    interview = interview_service.decline_interview(request.auth.principal, interview_id, reason=reason)
    return Response(InterviewSerializer(interview).data, status=status.HTTP_200_OK)
