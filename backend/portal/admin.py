from django.contrib import admin, messages
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin
from django.contrib.auth.hashers import identify_hasher

from portal.exceptions import DomainError
from portal.interviews import approve_interview, reject_interview
from portal.models import (
    Candidate, Category, Employer, Interview, Notification, Page, Plan, Post, Purchase, User,
)


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    list_display = ['username', 'email', 'role', 'is_staff', 'is_active', 'last_login_at']
    list_filter = ['role', 'is_staff', 'is_active']
    search_fields = ['username', 'email', 'first_name', 'last_name']
    fieldsets = DjangoUserAdmin.fieldsets + (
        ('Portal', {'fields': ('role', 'email_verified', 'last_login_at')}),
    )
    add_fieldsets = DjangoUserAdmin.add_fieldsets + (
        ('Portal', {'fields': ('email', 'role')}),
    )
    readonly_fields = ['last_login_at']


class PrincipalAdmin(admin.ModelAdmin):
    """Hashes a raw password typed into the password field on save."""
    readonly_fields = ['session_id', 'last_login_at', 'created_at', 'updated_at']

    def save_model(self, request, obj, form, change):
        if 'password' in form.changed_data and obj.password:
            try:
                identify_hasher(obj.password)
            except ValueError:
                obj.set_password(obj.password)
        super().save_model(request, obj, form, change)


@admin.register(Employer)
class EmployerAdmin(PrincipalAdmin):
    list_display = ['company_name', 'email', 'industry', 'interview_credits', 'contact_unlock_credits', 'active_plan', 'is_active']
    list_filter = ['industry', 'active_plan', 'nationality_restriction', 'is_active']
    search_fields = ['company_name', 'email', 'responsible_person']


@admin.register(Candidate)
class CandidateAdmin(PrincipalAdmin):
    list_display = ['email', 'first_name', 'last_name', 'job_title', 'nationality', 'experience_years', 'is_active']
    list_filter = ['nationality', 'is_active']
    search_fields = ['email', 'first_name', 'last_name', 'job_title']


@admin.register(Plan)
class PlanAdmin(admin.ModelAdmin):
    list_display = ['title', 'slug', 'price', 'currency', 'interview_credits_granted', 'contact_unlock_credits_granted', 'is_custom']
    search_fields = ['title', 'slug']
    prepopulated_fields = {'slug': ('title',)}


@admin.register(Purchase)
class PurchaseAdmin(admin.ModelAdmin):
    list_display = ['id', 'employer', 'plan', 'status', 'source', 'payment_id', 'created_at']
    list_filter = ['status', 'source', 'created_at']
    search_fields = ['employer__company_name', 'employer__email', 'payment_id', 'invoice_id']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Interview)
class InterviewAdmin(admin.ModelAdmin):
    list_display = ['id', 'employer', 'candidate', 'scheduled_at', 'status', 'requested_at', 'approved_by']
    list_filter = ['status', 'scheduled_at']
    search_fields = ['employer__company_name', 'candidate__first_name', 'candidate__last_name', 'candidate__email']
    readonly_fields = ['requested_at', 'approved_at', 'approved_by', 'created_at', 'updated_at']
    actions = ['approve_selected', 'reject_selected']

    def _run(self, request, queryset, action, verb):
        done = 0
        for interview in queryset:
            try:
                action(interview.pk, request.user)
                done += 1
            except DomainError as e:
                self.message_user(request, f"Interview #{interview.pk}: {e.detail}", level=messages.ERROR)
        if done:
            self.message_user(request, f"{done} interview request(s) {verb}.", level=messages.SUCCESS)

    @admin.action(description='Approve selected interview requests')
    def approve_selected(self, request, queryset):
        self._run(request, queryset, approve_interview, 'approved')

    @admin.action(description='Reject selected interview requests')
    def reject_selected(self, request, queryset):
        self._run(request, queryset, reject_interview, 'rejected')


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ['title', 'notification_type', 'employer', 'candidate', 'read', 'created_at']
    list_filter = ['notification_type', 'read', 'created_at']
    search_fields = ['title', 'message', 'employer__company_name', 'candidate__email']


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'slug']
    search_fields = ['name']
    prepopulated_fields = {'slug': ('name',)}


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = ['title', 'slug', 'status', 'author_name', 'published_at']
    list_filter = ['status', 'categories']
    search_fields = ['title', 'description', 'content']
    prepopulated_fields = {'slug': ('title',)}
    filter_horizontal = ['categories']


@admin.register(Page)
class PageAdmin(admin.ModelAdmin):
    list_display = ['title', 'slug', 'status', 'published_at']
    list_filter = ['status']
    search_fields = ['title', 'content']
    prepopulated_fields = {'slug': ('title',)}
