from portal.models import Page
from portal.revalidation import TAG_PAGES, page_tag
from portal.serializers import PageSerializer
from portal.utils.cache_utils import cached_query


def get_page_by_slug(slug):
    """Published CMS page as a dict, or None."""
    def load():
        page = Page.objects.filter(status=Page.STATUS_PUBLISHED, slug=slug).first()
        return dict(PageSerializer(page).data) if page else {}

    return cached_query('pages:detail', [TAG_PAGES, page_tag(slug)], load, params={'slug': slug}) or None
