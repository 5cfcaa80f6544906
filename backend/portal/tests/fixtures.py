"""
Test fixtures and factories for creating test data.
Uses factory_boy for consistent test data generation.
"""
from datetime import timedelta
from decimal import Decimal

import factory
from factory.django import DjangoModelFactory
from django.contrib.auth.hashers import make_password
from django.utils import timezone

from portal.cookies import SESSION_ID_COOKIE, get_auth_cookie_name
from portal.models import (
    Candidate,
    Category,
    Employer,
    Interview,
    Notification,
    Page,
    Plan,
    Post,
    Purchase,
    User,
)
from portal.sessions import issue_session_token

TEST_PASSWORD = 'Passw0rd!'


class UserFactory(DjangoModelFactory):
    """Factory for back-office users (role defaults to plain user)"""
    class Meta:
        model = User

    username = factory.Sequence(lambda n: f'user{n}')
    email = factory.Sequence(lambda n: f'user{n}@example.com')
    first_name = factory.Faker('first_name')
    last_name = factory.Faker('last_name')
    password = factory.LazyFunction(lambda: make_password(TEST_PASSWORD))
    role = User.ROLE_USER
    is_active = True


class AdminFactory(UserFactory):
    role = User.ROLE_ADMIN


class ModeratorFactory(UserFactory):
    role = User.ROLE_MODERATOR


class PlanFactory(DjangoModelFactory):
    class Meta:
        model = Plan

    slug = factory.Sequence(lambda n: f'plan-{n}')
    title = factory.Sequence(lambda n: f'Plan {n}')
    price = Decimal('350.00')
    interview_credits_granted = 5
    contact_unlock_credits_granted = 1
    basic_filters = True
    nationality_restriction = Plan.NATIONALITY_NONE


class EmployerFactory(DjangoModelFactory):
    """Factory for employer accounts"""
    class Meta:
        model = Employer

    email = factory.Sequence(lambda n: f'employer{n}@example.com')
    password = factory.LazyFunction(lambda: make_password(TEST_PASSWORD))
    company_name = factory.Faker('company')
    responsible_person = factory.Faker('name')
    industry = 'Hospitality'
    interview_credits = 3


class CandidateFactory(DjangoModelFactory):
    """Factory for candidate accounts"""
    class Meta:
        model = Candidate

    email = factory.Sequence(lambda n: f'candidate{n}@example.com')
    password = factory.LazyFunction(lambda: make_password(TEST_PASSWORD))
    first_name = factory.Sequence(lambda n: f'First{n}')
    last_name = factory.Sequence(lambda n: f'Last{n}')
    job_title = 'Driver'
    nationality = 'Saudi'
    location = factory.Faker('city')
    experience_years = 4


class InterviewFactory(DjangoModelFactory):
    class Meta:
        model = Interview

    employer = factory.SubFactory(EmployerFactory)
    candidate = factory.SubFactory(CandidateFactory)
    scheduled_at = factory.LazyFunction(lambda: timezone.now() + timedelta(days=3))
    duration_minutes = 30
    status = Interview.STATUS_PENDING
    requested_at = factory.LazyFunction(timezone.now)
    job_position = factory.Faker('job')


class NotificationFactory(DjangoModelFactory):
    """Candidate notification by default; pass employer=... and candidate=None for employers"""
    class Meta:
        model = Notification

    candidate = factory.SubFactory(CandidateFactory)
    employer = None
    notification_type = Notification.TYPE_SYSTEM
    title = factory.Sequence(lambda n: f'Notification {n}')
    message = factory.Faker('sentence')


class PurchaseFactory(DjangoModelFactory):
    class Meta:
        model = Purchase

    employer = factory.SubFactory(EmployerFactory)
    plan = factory.SubFactory(PlanFactory)
    status = Purchase.STATUS_PENDING


class CategoryFactory(DjangoModelFactory):
    class Meta:
        model = Category

    name = factory.Sequence(lambda n: f'Category {n}')
    slug = factory.Sequence(lambda n: f'category-{n}')


class PostFactory(DjangoModelFactory):
    class Meta:
        model = Post

    title = factory.Sequence(lambda n: f'Post {n}')
    slug = factory.Sequence(lambda n: f'post-{n}')
    description = factory.Faker('sentence')
    content = factory.Faker('text', max_nb_chars=300)
    status = Post.STATUS_PUBLISHED
    published_at = factory.LazyFunction(timezone.now)


class PageFactory(DjangoModelFactory):
    class Meta:
        model = Page

    title = factory.Sequence(lambda n: f'Page {n}')
    slug = factory.Sequence(lambda n: f'page-{n}')
    content = factory.Faker('text', max_nb_chars=300)
    status = Page.STATUS_PUBLISHED
    published_at = factory.LazyFunction(timezone.now)


def login_client(client, principal, session_id=None):
    """Put valid session cookies for ``principal`` on a test client."""
    session_id = session_id or f'sid-{principal.COLLECTION}-{principal.pk}'
    principal.rotate_session_id(session_id)
    client.cookies[get_auth_cookie_name(principal.COLLECTION)] = issue_session_token(principal)
    client.cookies[SESSION_ID_COOKIE] = session_id
    return client
