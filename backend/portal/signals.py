import logging

from django.contrib.auth.signals import user_logged_in, user_login_failed, user_logged_out
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from portal.models import Candidate, Interview, Notification, Page, Plan, Post
from portal.revalidation import (
    TAG_CANDIDATES,
    TAG_INTERVIEWS,
    TAG_NOTIFICATIONS,
    TAG_PAGES,
    TAG_PLANS,
    TAG_POSTS,
    candidate_tag,
    employer_tag,
    page_tag,
    post_tag,
    revalidate_tags,
)
from portal.sessions import get_client_ip

logger = logging.getLogger(__name__)


@receiver(user_login_failed)
def log_login_failed(sender, credentials, request=None, **kwargs):
    """Log failed CMS logins."""
    username = None
    if isinstance(credentials, dict):
        username = credentials.get('username') or credentials.get('email')
    user_agent = request.META.get('HTTP_USER_AGENT') if request is not None else None
    logger.warning(
        "AUTH login_failed username=%s ip=%s ua=%s",
        username, get_client_ip(request), user_agent
    )


@receiver(user_logged_in)
def log_user_logged_in(sender, request, user, **kwargs):
    """Log successful CMS logins."""
    logger.info(
        "AUTH login_success user_id=%s username=%s role=%s staff=%s ip=%s",
        getattr(user, 'id', None), getattr(user, 'username', None), getattr(user, 'role', None),
        getattr(user, 'is_staff', None), get_client_ip(request)
    )


@receiver(user_logged_out)
def log_user_logged_out(sender, request, user, **kwargs):
    logger.info(
        "AUTH logout user_id=%s username=%s ip=%s",
        getattr(user, 'id', None), getattr(user, 'username', None), get_client_ip(request)
    )


@receiver([post_save, post_delete], sender=Interview)
def revalidate_interview(sender, instance, **kwargs):
    revalidate_tags(
        TAG_INTERVIEWS,
        candidate_tag(instance.candidate_id),
        employer_tag(instance.employer_id),
    )


@receiver([post_save, post_delete], sender=Notification)
def revalidate_notification(sender, instance, **kwargs):
    tags = [TAG_NOTIFICATIONS]
    if instance.candidate_id:
        tags.append(candidate_tag(instance.candidate_id))
    if instance.employer_id:
        tags.append(employer_tag(instance.employer_id))
    revalidate_tags(*tags)


@receiver([post_save, post_delete], sender=Post)
def revalidate_post(sender, instance, **kwargs):
    revalidate_tags(TAG_POSTS, post_tag(instance.slug))


@receiver([post_save, post_delete], sender=Page)
def revalidate_page(sender, instance, **kwargs):
    revalidate_tags(TAG_PAGES, page_tag(instance.slug))


@receiver([post_save, post_delete], sender=Plan)
def revalidate_plan(sender, instance, **kwargs):
    revalidate_tags(TAG_PLANS)


@receiver([post_save, post_delete], sender=Candidate)
def revalidate_candidate(sender, instance, **kwargs):
    revalidate_tags(TAG_CANDIDATES, candidate_tag(instance.pk))
