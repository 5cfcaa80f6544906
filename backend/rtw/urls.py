"""
URL configuration for the Ready to Work project.
"""
from django.conf.urls.i18n import i18n_patterns
from django.contrib import admin
from django.contrib.sitemaps.views import sitemap
from django.urls import include, path

from portal import page_views
from portal.sitemaps import SITEMAPS

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('portal.urls')),
    path('robots.txt', page_views.robots_txt, name='robots_txt'),
    path('sitemap.xml', sitemap, {'sitemaps': SITEMAPS}, name='django.contrib.sitemaps.views.sitemap'),
]

urlpatterns += i18n_patterns(
    path('login/', page_views.login_page, name='login'),
    path('no-access/', page_views.no_access, name='no_access'),
    path('dashboard/', page_views.dashboard, name='dashboard'),
    path('dashboard/interviews/', page_views.dashboard_interviews, name='dashboard_interviews'),
    path('dashboard/notifications/', page_views.dashboard_notifications, name='dashboard_notifications'),
    path('employer/dashboard/', page_views.employer_dashboard, name='employer_dashboard'),
    path('admin/interviews/pending/', page_views.pending_interviews, name='admin_pending_interviews'),
    path('moderator/interviews/pending/', page_views.pending_interviews, name='moderator_pending_interviews'),
    path('blog/', page_views.blog, name='blog'),
    path('posts/<slug:slug>/', page_views.post_detail, name='post_detail'),
    path('candidates/', page_views.candidates, name='candidates'),
    path('<slug:slug>/', page_views.cms_page, name='cms_page'),
    prefix_default_language=True,
)
