"""
Fire-and-forget cache tag invalidation.

Callers never wait for, or fail because of, revalidation: dispatch errors are
logged and dropped.
"""
import logging

from django.db import transaction

logger = logging.getLogger(__name__)

TAG_INTERVIEWS = 'interviews'
TAG_NOTIFICATIONS = 'notifications'
TAG_POSTS = 'posts'
TAG_PAGES = 'pages'
TAG_PLANS = 'plans'
TAG_CANDIDATES = 'candidates'


def candidate_tag(candidate_id):
    return f"candidate:{candidate_id}"


def employer_tag(employer_id):
    return f"employer:{employer_id}"


def post_tag(slug):
    return f"post:{slug}"


def page_tag(slug):
    return f"page:{slug}"


def _dispatch(tags):
    from portal.tasks import revalidate_tags_task
    try:
        revalidate_tags_task.delay(tags)
    except Exception as e:
        logger.warning(f"Failed to dispatch cache revalidation for {tags}: {e}")


def revalidate_tags(*tags):
    """Bump the tags once the current transaction commits.

    Outside a transaction the dispatch happens immediately. A rolled back
    transaction dispatches nothing.
    """
    tags = [t for t in tags if t]
    if not tags:
        return
    transaction.on_commit(lambda: _dispatch(tags))
