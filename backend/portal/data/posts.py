from portal.models import Post
from portal.revalidation import TAG_POSTS, post_tag
from portal.serializers import PostSerializer, PostSummarySerializer
from portal.utils.cache_utils import cached_query


def _published():
    return Post.objects.filter(status=Post.STATUS_PUBLISHED).prefetch_related('categories')


def list_published_posts(category=None, limit=None):
    def load():
        qs = _published()
        if category:
            qs = qs.filter(categories__slug=category)
        if limit:
            qs = qs[:limit]
        return list(PostSummarySerializer(qs, many=True).data)

    return cached_query('posts:list', [TAG_POSTS], load, params={'category': category, 'limit': limit})


def get_post_by_slug(slug):
    """Published post as a dict, or None."""
    def load():
        post = _published().filter(slug=slug).first()
        # Cache misses are stored as {} since None means "not cached"
        return dict(PostSerializer(post).data) if post else {}

    return cached_query('posts:detail', [TAG_POSTS, post_tag(slug)], load, params={'slug': slug}) or None
