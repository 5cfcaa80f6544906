"""
Interview request lifecycle.

An employer requests an interview (``pending``); an admin or moderator
approves it, spending one of the employer's interview credits, or rejects it;
the candidate, who only ever sees approved interviews, then accepts or
declines.
"""
import logging

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from portal.exceptions import Conflict, InsufficientCredits, NotFound
from portal.models import Employer, Interview, Notification
from portal.notifications import notify_candidate, notify_employer

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MINUTES = 30


def _employer_interview_url(interview):
    return f"/employer/dashboard/interviews/{interview.pk}"


def request_interview(employer, candidate, scheduled_at, duration_minutes=DEFAULT_DURATION_MINUTES, **details):
    """Create a pending request. The candidate is not told until approval."""
    interview = Interview(
        employer=employer,
        candidate=candidate,
        scheduled_at=scheduled_at,
        duration_minutes=duration_minutes or DEFAULT_DURATION_MINUTES,
        status=Interview.STATUS_PENDING,
        requested_at=timezone.now(),
        **details,
    )
    interview.full_clean(exclude=['approved_by'])
    interview.save()
    logger.info(
        "Interview request %s created employer_id=%s candidate_id=%s",
        interview.pk, employer.pk, candidate.pk
    )
    return interview


def _get_pending(interview_id):
    interview = (
        Interview.objects.select_for_update()
        .filter(pk=interview_id)
        .first()
    )
    if interview is None:
        raise NotFound('Interview request not found.')
    if interview.status != Interview.STATUS_PENDING:
        raise Conflict('Interview request is not pending approval.')
    return interview


def approve_interview(interview_id, approved_by, scheduled_at=None, duration_minutes=None,
                      meeting_link=None, notes=None):
    """Approve a pending request and spend one employer interview credit."""
    with transaction.atomic():
        interview = _get_pending(interview_id)
        spent = (
            Employer.objects
            .filter(pk=interview.employer_id, interview_credits__gt=0)
            .update(interview_credits=F('interview_credits') - 1)
        )
        if not spent:
            raise InsufficientCredits('Employer has insufficient interview credits.')

        interview.status = Interview.STATUS_APPROVED
        interview.approved_at = timezone.now()
        interview.approved_by = approved_by
        if scheduled_at:
            interview.scheduled_at = scheduled_at
        if duration_minutes:
            interview.duration_minutes = duration_minutes
        if meeting_link:
            interview.meeting_link = meeting_link
        if notes:
            interview.notes = notes
        interview.full_clean()
        interview.save()

        employer = interview.employer
        candidate = interview.candidate
        # The candidate never sees the approval step, only the invitation
        notify_candidate(
            candidate,
            Notification.TYPE_INTERVIEW_REQUEST_APPROVED,
            'New Interview Invitation',
            f"You have received a new interview invitation from {employer.company_name or employer.email}. "
            "Please review and respond.",
            action_url='/dashboard/interviews',
        )
        notify_employer(
            employer,
            Notification.TYPE_INTERVIEW_SCHEDULED,
            'Interview Approved',
            f"Your interview request with {candidate.full_name} has been approved.",
            action_url=_employer_interview_url(interview),
        )

    logger.info(
        "Interview %s approved by user_id=%s employer_id=%s",
        interview.pk, getattr(approved_by, 'pk', None), interview.employer_id
    )
    return interview


def reject_interview(interview_id, rejected_by, reason=''):
    with transaction.atomic():
        interview = _get_pending(interview_id)
        interview.status = Interview.STATUS_REJECTED
        interview.rejection_reason = reason or 'Interview request rejected by moderator.'
        interview.save(update_fields=['status', 'rejection_reason', 'updated_at'])

        notify_employer(
            interview.employer,
            Notification.TYPE_INTERVIEW_REQUEST_REJECTED,
            'Interview Request Rejected',
            f"Your interview request with {interview.candidate.full_name} has been rejected."
            + (f" Reason: {reason}" if reason else ''),
            action_url=_employer_interview_url(interview),
        )

    logger.info(
        "Interview %s rejected by user_id=%s", interview.pk, getattr(rejected_by, 'pk', None)
    )
    return interview


def _get_for_candidate(candidate, interview_id, action):
    interview = Interview.objects.select_related('employer').filter(pk=interview_id).first()
    # Pending requests and other candidates' interviews are invisible
    if (interview is None or interview.candidate_id != candidate.pk
            or interview.status == Interview.STATUS_PENDING):
        raise NotFound('Interview not found.')
    if interview.status != Interview.STATUS_APPROVED:
        raise Conflict(f'Only approved interviews can be {action}.')
    return interview


def accept_interview(candidate, interview_id):
    """Candidate confirms an approved interview; the status stays approved."""
    interview = _get_for_candidate(candidate, interview_id, 'accepted')
    notify_employer(
        interview.employer,
        Notification.TYPE_INTERVIEW_SCHEDULED,
        'Interview Accepted',
        'The candidate has accepted your interview request.',
        action_url=_employer_interview_url(interview),
    )
    logger.info("Interview %s accepted by candidate_id=%s", interview.pk, candidate.pk)
    return interview


def decline_interview(candidate, interview_id, reason=''):
    interview = _get_for_candidate(candidate, interview_id, 'declined')
    interview.status = Interview.STATUS_CANCELLED
    interview.rejection_reason = reason or 'Interview rejected by candidate.'
    interview.save(update_fields=['status', 'rejection_reason', 'updated_at'])
    notify_employer(
        interview.employer,
        Notification.TYPE_INTERVIEW_REQUEST_REJECTED,
        'Interview Rejected',
        'The candidate has rejected your interview request.' + (f" Reason: {reason}" if reason else ''),
        action_url=_employer_interview_url(interview),
    )
    logger.info("Interview %s declined by candidate_id=%s", interview.pk, candidate.pk)
    return interview
