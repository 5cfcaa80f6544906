from django.contrib.sitemaps import Sitemap
from django.urls import reverse

from portal.models import Page, Post


class PostSitemap(Sitemap):
    changefreq = 'weekly'
    priority = 0.6
    i18n = True

    def items(self):
        return Post.objects.filter(status=Post.STATUS_PUBLISHED).order_by('-published_at', 'pk')

    def lastmod(self, obj):
        return obj.updated_at

    def location(self, obj):
        return reverse('post_detail', args=[obj.slug])


class PageSitemap(Sitemap):
    changefreq = 'monthly'
    priority = 0.5
    i18n = True

    def items(self):
        return Page.objects.filter(status=Page.STATUS_PUBLISHED).order_by('slug')

    def lastmod(self, obj):
        return obj.updated_at

    def location(self, obj):
        return reverse('cms_page', args=[obj.slug])


class StaticViewSitemap(Sitemap):
    changefreq = 'daily'
    priority = 0.8
    i18n = True

    def items(self):
        return ['blog', 'candidates']

    def location(self, item):
        return reverse(item)


SITEMAPS = {
    'static': StaticViewSitemap,
    'posts': PostSitemap,
    'pages': PageSitemap,
}
