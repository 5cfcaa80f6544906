# backend/portal/models.py
from django.contrib.auth.hashers import check_password, make_password
from django.contrib.auth.models import AbstractUser
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone


# Collection slugs. Each authenticated principal lives in exactly one of them
# and the session cookie name is derived from the slug.
COLLECTION_USERS = 'users'
COLLECTION_EMPLOYERS = 'employers'
COLLECTION_CANDIDATES = 'candidates'


class SessionPrincipal(models.Model):
    """Fields shared by every record that can hold a session cookie.

    ``session_id`` enforces a single active session per account: it is rotated
    on every login and must match the ``rtw-sid`` cookie for a session token
    to be accepted.
    """
    session_id = models.CharField(max_length=64, blank=True, default='')
    last_login_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        abstract = True

    def rotate_session_id(self, session_id):
        self.session_id = session_id
        if not session_id:
            self.save(update_fields=['session_id'])
            return
        self.last_login_at = timezone.now()
        self.save(update_fields=['session_id', 'last_login_at'])


class User(AbstractUser, SessionPrincipal):
    """Staff and back-office accounts (the ``users`` collection).

    Admin: full CMS access. Moderator: approves/rejects interview requests only,
    no CMS access. The router still sends moderators who open an admin page to
    the CMS root, where Django admin shows its login screen because
    ``is_staff`` stays false for them.

    User: plain account that may be linked to a candidate or employer profile
    by email.
    """
    COLLECTION = COLLECTION_USERS

    ROLE_ADMIN = 'admin'
    ROLE_MODERATOR = 'moderator'
    ROLE_USER = 'user'
    ROLE_CHOICES = [
        (ROLE_ADMIN, 'Admin'),
        (ROLE_MODERATOR, 'Moderator'),
        (ROLE_USER, 'User'),
    ]

    email = models.EmailField(unique=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_USER)
    email_verified = models.BooleanField(default=False)

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.lower()
        # Only admins (or superusers) may enter the CMS
        self.is_staff = self.is_superuser or self.role == self.ROLE_ADMIN
        update_fields = kwargs.get('update_fields')
        if update_fields is not None and 'is_staff' not in update_fields:
            kwargs['update_fields'] = list(update_fields) + ['is_staff']
        return super().save(*args, **kwargs)


class AccountPrincipal(SessionPrincipal):
    """Email/password account stored outside Django's auth user table."""
    email = models.EmailField(unique=True, db_index=True)
    password = models.CharField(max_length=128, blank=True)
    is_active = models.BooleanField(default=True)
    email_verified = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    # DRF permission classes only look at these two attributes
    is_authenticated = True
    is_anonymous = False

    def set_password(self, raw_password):
        self.password = make_password(raw_password)

    def check_password(self, raw_password):
        if not self.password:
            return False
        return check_password(raw_password, self.password)

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.lower()
        return super().save(*args, **kwargs)


class Plan(models.Model):
    NATIONALITY_NONE = 'NONE'
    NATIONALITY_SAUDI = 'SAUDI'
    NATIONALITY_CHOICES = [
        (NATIONALITY_NONE, 'None'),
        (NATIONALITY_SAUDI, 'Saudi Only'),
    ]

    slug = models.SlugField(max_length=80, unique=True)
    title = models.CharField(max_length=120)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    currency = models.CharField(max_length=3, default='SAR')
    interview_credits_granted = models.PositiveIntegerField(default=0)
    contact_unlock_credits_granted = models.PositiveIntegerField(default=0)
    basic_filters = models.BooleanField(default=False)
    nationality_restriction = models.CharField(max_length=10, choices=NATIONALITY_CHOICES, default=NATIONALITY_NONE)
    is_custom = models.BooleanField(default=False, help_text="Custom plans grant no credits and route to the request form")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['price']

    def __str__(self):
        return self.title


class Employer(AccountPrincipal):
    """Companies looking for candidates (the ``employers`` collection)."""
    COLLECTION = COLLECTION_EMPLOYERS

    company_name = models.CharField(max_length=200)
    responsible_person = models.CharField(max_length=200, blank=True)
    phone = models.CharField(max_length=30, blank=True)
    website = models.URLField(blank=True)
    address = models.CharField(max_length=300, blank=True)
    industry = models.CharField(max_length=120, blank=True)
    company_size = models.CharField(max_length=40, blank=True)
    terms_accepted = models.BooleanField(default=False)

    # Wallet
    interview_credits = models.PositiveIntegerField(default=0)
    contact_unlock_credits = models.PositiveIntegerField(default=0)

    # Active features copied from the purchased plan
    active_plan = models.ForeignKey(Plan, on_delete=models.SET_NULL, null=True, blank=True, related_name='employers')
    basic_filters = models.BooleanField(default=False)
    nationality_restriction = models.CharField(
        max_length=10, choices=Plan.NATIONALITY_CHOICES, default=Plan.NATIONALITY_NONE
    )

    class Meta:
        ordering = ['company_name']

    def __str__(self):
        return self.company_name or self.email


class Candidate(AccountPrincipal):
    """Job seekers registered through the wizard (the ``candidates`` collection)."""
    COLLECTION = COLLECTION_CANDIDATES

    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    phone = models.CharField(max_length=30, blank=True)
    job_title = models.CharField(max_length=160, blank=True)
    nationality = models.CharField(max_length=80, blank=True)
    location = models.CharField(max_length=160, blank=True)
    experience_years = models.PositiveSmallIntegerField(default=0)
    availability_date = models.DateField(null=True, blank=True)
    bio = models.TextField(blank=True)
    billing_class = models.CharField(max_length=1, blank=True)
    terms_accepted = models.BooleanField(default=False)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.first_name} {self.last_name}".strip() or self.email

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()


class Interview(models.Model):
    """Interview request from an employer to a candidate.

    Requests start as ``pending`` and are hidden from the candidate until a
    moderator approves them.
    """
    STATUS_PENDING = 'pending'
    STATUS_APPROVED = 'approved'
    STATUS_REJECTED = 'rejected'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_NO_SHOW = 'no_show'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_APPROVED, 'Approved'),
        (STATUS_REJECTED, 'Rejected'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_CANCELLED, 'Cancelled'),
        (STATUS_NO_SHOW, 'No Show'),
    ]

    employer = models.ForeignKey(Employer, on_delete=models.CASCADE, related_name='interviews')
    candidate = models.ForeignKey(Candidate, on_delete=models.CASCADE, related_name='interviews')
    scheduled_at = models.DateTimeField(db_index=True, help_text="Date and time of the interview")
    duration_minutes = models.PositiveIntegerField(default=30, help_text="Duration in minutes (min 15)")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)

    requested_at = models.DateTimeField(null=True, blank=True)
    approved_at = models.DateTimeField(null=True, blank=True)
    approved_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name='approved_interviews'
    )
    rejection_reason = models.TextField(blank=True)

    meeting_link = models.URLField(max_length=500, blank=True)
    notes = models.TextField(blank=True)
    job_position = models.CharField(max_length=200, blank=True)
    job_location = models.CharField(max_length=200, blank=True)
    salary = models.CharField(max_length=100, blank=True)
    accommodation_included = models.BooleanField(default=False)
    transportation = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-scheduled_at']
        indexes = [
            models.Index(fields=['candidate', 'status'], name='interview_candidate_status'),
            models.Index(fields=['employer', 'status'], name='interview_employer_status'),
        ]

    def clean(self):
        if self.duration_minutes is not None and self.duration_minutes < 15:
            raise ValidationError({'duration_minutes': 'Duration must be at least 15 minutes.'})

    def __str__(self):
        return f"Interview #{self.pk} ({self.status})"


class Notification(models.Model):
    """In-app notification addressed to exactly one employer or one candidate."""
    TYPE_INTERVIEW_SCHEDULED = 'interview_scheduled'
    TYPE_INTERVIEW_REMINDER = 'interview_reminder'
    TYPE_INTERVIEW_REQUEST_RECEIVED = 'interview_request_received'
    TYPE_INTERVIEW_REQUEST_APPROVED = 'interview_request_approved'
    TYPE_INTERVIEW_REQUEST_REJECTED = 'interview_request_rejected'
    TYPE_CANDIDATE_APPLIED = 'candidate_applied'
    TYPE_CREDIT_LOW = 'credit_low'
    TYPE_SYSTEM = 'system'
    TYPE_CHOICES = [
        (TYPE_INTERVIEW_SCHEDULED, 'Interview Scheduled'),
        (TYPE_INTERVIEW_REMINDER, 'Interview Reminder'),
        (TYPE_INTERVIEW_REQUEST_RECEIVED, 'Interview Request Received'),
        (TYPE_INTERVIEW_REQUEST_APPROVED, 'Interview Request Approved'),
        (TYPE_INTERVIEW_REQUEST_REJECTED, 'Interview Request Rejected'),
        (TYPE_CANDIDATE_APPLIED, 'Candidate Applied'),
        (TYPE_CREDIT_LOW, 'Credit Low'),
        (TYPE_SYSTEM, 'System'),
    ]

    employer = models.ForeignKey(
        Employer, on_delete=models.CASCADE, null=True, blank=True, related_name='notifications'
    )
    candidate = models.ForeignKey(
        Candidate, on_delete=models.CASCADE, null=True, blank=True, related_name='notifications'
    )
    notification_type = models.CharField(max_length=50, choices=TYPE_CHOICES)
    title = models.CharField(max_length=200)
    message = models.TextField()
    read = models.BooleanField(default=False)
    action_url = models.CharField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['candidate', 'read', '-created_at'], name='notif_candidate_unread'),
            models.Index(fields=['employer', 'read', '-created_at'], name='notif_employer_unread'),
        ]

    def clean(self):
        if not self.employer_id and not self.candidate_id:
            raise ValidationError('Either employer or candidate must be set for a notification')
        if self.employer_id and self.candidate_id:
            raise ValidationError('Notification cannot have both employer and candidate')

    def save(self, *args, **kwargs):
        self.clean()
        return super().save(*args, **kwargs)

    def __str__(self):
        return self.title


class Purchase(models.Model):
    STATUS_PENDING = 'pending'
    STATUS_ACTIVE = 'active'
    STATUS_FAILED = 'failed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_ACTIVE, 'Active'),
        (STATUS_FAILED, 'Failed'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]

    SOURCE_MYFATOORAH = 'myfatoorah'
    SOURCE_MOCK_CHECKOUT = 'mock_checkout'
    SOURCE_ADMIN = 'admin'
    SOURCE_CHOICES = [
        (SOURCE_MYFATOORAH, 'MyFatoorah'),
        (SOURCE_MOCK_CHECKOUT, 'Mock Checkout'),
        (SOURCE_ADMIN, 'Admin'),
    ]

    employer = models.ForeignKey(Employer, on_delete=models.CASCADE, related_name='purchases')
    plan = models.ForeignKey(Plan, on_delete=models.PROTECT, related_name='purchases')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    source = models.CharField(max_length=20, choices=SOURCE_CHOICES, default=SOURCE_MYFATOORAH)

    # Snapshot of credits at purchase time; null falls back to plan entitlements
    interview_credits_granted = models.PositiveIntegerField(null=True, blank=True)
    contact_unlock_credits_granted = models.PositiveIntegerField(null=True, blank=True)

    invoice_id = models.CharField(max_length=64, blank=True)
    payment_id = models.CharField(max_length=64, blank=True, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"Purchase #{self.pk} ({self.status})"


class Category(models.Model):
    name = models.CharField(max_length=120)
    slug = models.SlugField(max_length=140, unique=True)

    class Meta:
        ordering = ['name']
        verbose_name_plural = 'categories'

    def __str__(self):
        return self.name


class PublishableContent(models.Model):
    STATUS_DRAFT = 'draft'
    STATUS_PUBLISHED = 'published'
    STATUS_CHOICES = [
        (STATUS_DRAFT, 'Draft'),
        (STATUS_PUBLISHED, 'Published'),
    ]

    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True)
    description = models.CharField(max_length=500, blank=True, help_text="Meta description")
    content = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_DRAFT, db_index=True)
    published_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def __str__(self):
        return self.title


class Post(PublishableContent):
    author_name = models.CharField(max_length=160, blank=True)
    hero_image_url = models.URLField(blank=True)
    categories = models.ManyToManyField(Category, blank=True, related_name='posts')

    class Meta:
        ordering = ['-published_at', '-created_at']


class Page(PublishableContent):
    class Meta:
        ordering = ['title']
