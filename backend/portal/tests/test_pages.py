from django.test import TestCase, override_settings

from portal.models import Post
from portal.tests.fixtures import (
    AdminFactory,
    CandidateFactory,
    EmployerFactory,
    InterviewFactory,
    ModeratorFactory,
    NotificationFactory,
    PageFactory,
    PostFactory,
    UserFactory,
    login_client,
)


class ProtectedPageRoutingTests(TestCase):

    def test_anonymous_visitor_is_sent_to_login_with_return_path(self):
        response = self.client.get('/en/dashboard/')
        self.assertRedirects(
            response, '/en/login/?from=%2Fen%2Fdashboard%2F', fetch_redirect_response=False
        )

    def test_login_redirect_keeps_the_locale(self):
        response = self.client.get('/ar/employer/dashboard/')
        self.assertRedirects(
            response, '/ar/login/?from=%2Far%2Femployer%2Fdashboard%2F', fetch_redirect_response=False
        )

    def test_candidate_reaches_dashboard(self):
        candidate = CandidateFactory()
        login_client(self.client, candidate)
        response = self.client.get('/en/dashboard/')
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body['page'], 'dashboard')
        self.assertEqual(body['candidate']['id'], candidate.pk)

    def test_candidate_is_kept_out_of_employer_area(self):
        login_client(self.client, CandidateFactory())
        response = self.client.get('/en/employer/dashboard/')
        self.assertRedirects(response, '/en/dashboard/', fetch_redirect_response=False)

    def test_employer_is_sent_to_employer_dashboard(self):
        login_client(self.client, EmployerFactory())
        response = self.client.get('/ar/dashboard/')
        self.assertRedirects(response, '/ar/employer/dashboard/', fetch_redirect_response=False)

    def test_employer_dashboard_lists_own_interviews(self):
        employer = EmployerFactory()
        InterviewFactory(employer=employer)
        InterviewFactory()
        login_client(self.client, employer)
        response = self.client.get('/en/employer/dashboard/')
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body['employer']['id'], employer.pk)
        self.assertEqual(len(body['interviews']), 1)

    def test_admin_opens_employer_area_without_profile(self):
        login_client(self.client, AdminFactory())
        response = self.client.get('/en/employer/dashboard/')
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json()['employer'])

    def test_staff_dashboard_visit_goes_to_pending_queue(self):
        login_client(self.client, ModeratorFactory())
        response = self.client.get('/en/dashboard/')
        self.assertRedirects(response, '/en/admin/interviews/pending/', fetch_redirect_response=False)

    def test_moderator_and_admin_see_pending_queue(self):
        InterviewFactory()
        for staff in (ModeratorFactory(), AdminFactory()):
            client = login_client(self.client_class(), staff)
            response = client.get('/en/admin/interviews/pending/')
            self.assertEqual(response.status_code, 200)
            self.assertEqual(len(response.json()['interviews']), 1)

    def test_candidate_cannot_open_pending_queue(self):
        login_client(self.client, CandidateFactory())
        response = self.client.get('/en/moderator/interviews/pending/')
        self.assertRedirects(response, '/en/dashboard/', fetch_redirect_response=False)

    def test_unknown_kind_goes_to_no_access(self):
        login_client(self.client, UserFactory())
        response = self.client.get('/en/dashboard/')
        self.assertRedirects(response, '/en/no-access/', fetch_redirect_response=False)
        self.assertEqual(self.client.get('/en/no-access/').status_code, 403)

    def test_candidate_dashboard_hides_pending_interviews(self):
        candidate = CandidateFactory()
        InterviewFactory(candidate=candidate)
        approved = InterviewFactory(candidate=candidate, status='approved')
        NotificationFactory(candidate=candidate)
        login_client(self.client, candidate)

        body = self.client.get('/en/dashboard/interviews/').json()
        self.assertEqual([i['id'] for i in body['interviews']], [approved.pk])
        self.assertEqual(self.client.get('/en/dashboard/').json()['unread_notifications'], 1)


class LoginPageTests(TestCase):

    def test_anonymous_sees_login_with_safe_from(self):
        body = self.client.get('/en/login/', {'from': '/en/dashboard/'}).json()
        self.assertEqual(body['page'], 'login')
        self.assertEqual(body['from'], '/en/dashboard/')

    def test_offsite_from_is_dropped(self):
        body = self.client.get('/en/login/', {'from': '//evil.example.com'}).json()
        self.assertIsNone(body['from'])

    def test_logged_in_visitor_is_sent_home(self):
        login_client(self.client, CandidateFactory())
        response = self.client.get('/ar/login/')
        self.assertRedirects(response, '/ar/dashboard/', fetch_redirect_response=False)


class PublicPageTests(TestCase):

    def test_blog_lists_published_posts_only(self):
        published = PostFactory()
        PostFactory(status=Post.STATUS_DRAFT)
        body = self.client.get('/en/blog/').json()
        self.assertEqual([p['slug'] for p in body['posts']], [published.slug])

    def test_post_detail(self):
        post = PostFactory(slug='hiring-guide')
        response = self.client.get('/en/posts/hiring-guide/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['post']['title'], post.title)

    def test_draft_or_missing_post_is_404(self):
        PostFactory(slug='draft-post', status=Post.STATUS_DRAFT)
        self.assertEqual(self.client.get('/en/posts/draft-post/').status_code, 404)
        self.assertEqual(self.client.get('/en/posts/nope/').status_code, 404)

    def test_cms_page_by_slug(self):
        PageFactory(slug='about')
        response = self.client.get('/ar/about/')
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body['locale'], 'ar')
        self.assertEqual(body['content']['slug'], 'about')

    def test_candidates_listing_filters(self):
        CandidateFactory(experience_years=1)
        senior = CandidateFactory(experience_years=8)
        body = self.client.get('/en/candidates/', {'min_experience': '5'}).json()
        self.assertEqual(body['total'], 1)
        self.assertEqual(body['results'][0]['id'], senior.pk)
        self.assertNotIn('email', body['results'][0])

    def test_candidates_search_matches_name_title_and_city(self):
        match = CandidateFactory(first_name='Layla', job_title='Cook', location='Kampala')
        CandidateFactory(first_name='Omar', job_title='Driver', location='Nairobi')
        for term in ('layla', 'cook', 'KAMPALA'):
            body = self.client.get('/en/candidates/', {'q': term}).json()
            self.assertEqual([r['id'] for r in body['results']], [match.pk], term)

    def test_candidates_listing_rejects_bad_numbers(self):
        response = self.client.get('/en/candidates/', {'page': 'two'})
        self.assertEqual(response.status_code, 400)

    @override_settings(SERVER_URL='https://readytowork.example')
    def test_robots_txt(self):
        response = self.client.get('/robots.txt')
        self.assertEqual(response.status_code, 200)
        text = response.content.decode()
        self.assertTrue(text.startswith('User-agent: *\nAllow: /\n'))
        self.assertIn('Disallow: /api/\n', text)
        self.assertIn('Disallow: /employer/dashboard/\n', text)
        self.assertTrue(text.endswith('\nSitemap: https://readytowork.example/sitemap.xml\n'))

    def test_sitemap_lists_posts_in_every_locale(self):
        PostFactory(slug='hiring-guide')
        PostFactory(slug='secret', status=Post.STATUS_DRAFT)
        response = self.client.get('/sitemap.xml')
        self.assertEqual(response.status_code, 200)
        xml = response.content.decode()
        self.assertIn('/en/posts/hiring-guide/', xml)
        self.assertIn('/ar/posts/hiring-guide/', xml)
        self.assertIn('/en/blog/', xml)
        self.assertNotIn('secret', xml)


class AreaGuardTests(TestCase):
    """Unrouted paths inside a protected area still go through the role router."""

    def test_anonymous_is_sent_to_login_from_any_protected_prefix(self):
        for path in ('/en/admin/', '/en/moderator/', '/en/dashboard/settings/', '/en/employer/'):
            response = self.client.get(path)
            self.assertEqual(response.status_code, 302, path)
            self.assertTrue(response['Location'].startswith('/en/login/?from='), path)

    def test_return_path_survives_the_guard(self):
        response = self.client.get('/ar/dashboard/settings/')
        self.assertRedirects(
            response, '/ar/login/?from=%2Far%2Fdashboard%2Fsettings%2F', fetch_redirect_response=False
        )

    def test_moderator_is_sent_to_cms_from_admin_area(self):
        login_client(self.client, ModeratorFactory())
        response = self.client.get('/en/admin/settings/')
        self.assertRedirects(response, '/admin/', fetch_redirect_response=False)

    def test_moderator_still_reaches_queue_under_admin(self):
        login_client(self.client, ModeratorFactory())
        response = self.client.get('/en/admin/interviews/pending/')
        self.assertEqual(response.status_code, 200)

    def test_candidate_is_sent_to_dashboard_from_unrouted_employer_path(self):
        login_client(self.client, CandidateFactory())
        response = self.client.get('/en/employer/billing/')
        self.assertRedirects(response, '/en/dashboard/', fetch_redirect_response=False)

    def test_allowed_visitor_on_unrouted_path_gets_404(self):
        login_client(self.client, CandidateFactory())
        self.assertEqual(self.client.get('/en/dashboard/settings/').status_code, 404)

    def test_cms_and_public_pages_are_not_guarded(self):
        self.assertEqual(self.client.get('/en/blog/').status_code, 200)
        # Django admin handles its own login
        response = self.client.get('/admin/')
        self.assertTrue(response['Location'].startswith('/admin/login/'))
