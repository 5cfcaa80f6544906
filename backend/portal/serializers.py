"""
Serializers for principals, interviews, notifications and CMS content.
"""
from rest_framework import serializers

from portal.models import (
    Candidate, Category, Employer, Interview, Notification, Page, Plan, Post, User,
)
from portal.cookies import AUTH_COLLECTIONS


class LoginSerializer(serializers.Serializer):
    collection = serializers.ChoiceField(choices=AUTH_COLLECTIONS)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate_email(self, value):
        return value.lower()


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'email', 'username', 'first_name', 'last_name', 'role']
        read_only_fields = fields


class PlanSerializer(serializers.ModelSerializer):
    class Meta:
        model = Plan
        fields = [
            'id', 'slug', 'title', 'price', 'currency', 'interview_credits_granted',
            'contact_unlock_credits_granted', 'basic_filters', 'nationality_restriction', 'is_custom',
        ]
        read_only_fields = fields


class EmployerSerializer(serializers.ModelSerializer):
    active_plan = PlanSerializer(read_only=True)

    class Meta:
        model = Employer
        fields = [
            'id', 'email', 'company_name', 'responsible_person', 'phone', 'website', 'industry',
            'company_size', 'interview_credits', 'contact_unlock_credits', 'active_plan',
            'basic_filters', 'nationality_restriction',
        ]
        read_only_fields = fields


class CandidateSerializer(serializers.ModelSerializer):
    full_name = serializers.CharField(read_only=True)

    class Meta:
        model = Candidate
        fields = [
            'id', 'email', 'first_name', 'last_name', 'full_name', 'phone', 'job_title', 'nationality',
            'location', 'experience_years', 'availability_date', 'bio',
        ]
        read_only_fields = fields


class CandidatePublicSerializer(serializers.ModelSerializer):
    """Listing view of a candidate; contact details stay private."""

    class Meta:
        model = Candidate
        fields = [
            'id', 'first_name', 'job_title', 'nationality', 'location', 'experience_years',
            'availability_date',
        ]
        read_only_fields = fields


class InterviewSerializer(serializers.ModelSerializer):
    employer_name = serializers.CharField(source='employer.company_name', read_only=True)
    candidate_name = serializers.CharField(source='candidate.full_name', read_only=True)

    class Meta:
        model = Interview
        fields = [
            'id', 'employer', 'employer_name', 'candidate', 'candidate_name', 'scheduled_at',
            'duration_minutes', 'status', 'requested_at', 'approved_at', 'rejection_reason',
            'meeting_link', 'notes', 'job_position', 'job_location', 'salary',
            'accommodation_included', 'transportation', 'created_at',
        ]
        read_only_fields = fields


class InterviewRequestSerializer(serializers.Serializer):
    """Input for an employer's interview request."""
    candidate = serializers.PrimaryKeyRelatedField(queryset=Candidate.objects.filter(is_active=True))
    scheduled_at = serializers.DateTimeField()
    duration_minutes = serializers.IntegerField(required=False, default=30, min_value=15)
    job_position = serializers.CharField(required=False, allow_blank=True, max_length=200, default='')
    job_location = serializers.CharField(required=False, allow_blank=True, max_length=200, default='')
    salary = serializers.CharField(required=False, allow_blank=True, max_length=100, default='')
    accommodation_included = serializers.BooleanField(required=False, default=False)
    transportation = serializers.BooleanField(required=False, default=False)
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = ['id', 'notification_type', 'title', 'message', 'read', 'action_url', 'created_at']
        read_only_fields = fields


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ['id', 'name', 'slug']


class PostSummarySerializer(serializers.ModelSerializer):
    categories = CategorySerializer(many=True, read_only=True)

    class Meta:
        model = Post
        fields = ['id', 'title', 'slug', 'description', 'author_name', 'hero_image_url', 'categories', 'published_at']
        read_only_fields = fields


class PostSerializer(PostSummarySerializer):
    class Meta(PostSummarySerializer.Meta):
        fields = PostSummarySerializer.Meta.fields + ['content', 'updated_at']
        read_only_fields = fields


class PageSerializer(serializers.ModelSerializer):
    class Meta:
        model = Page
        fields = ['id', 'title', 'slug', 'description', 'content', 'published_at', 'updated_at']
        read_only_fields = fields


class InterviewApprovalSerializer(serializers.Serializer):
    """Optional overrides a moderator may set when approving."""
    scheduled_at = serializers.DateTimeField(required=False)
    duration_minutes = serializers.IntegerField(required=False, min_value=15)
    meeting_link = serializers.URLField(required=False, allow_blank=True, max_length=500)
    notes = serializers.CharField(required=False, allow_blank=True)
