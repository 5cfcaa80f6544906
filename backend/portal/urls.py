"""
URL configuration for the portal API.
"""
from django.urls import path

from portal import views

urlpatterns = [
    # Session auth
    path('auth/login', views.login, name='api_login'),
    path('auth/logout', views.logout, name='api_logout'),
    path('auth/me', views.me, name='api_me'),
    path('auth/clear-session', views.clear_session, name='clear_session'),

    # Payments
    path('payment/callback', views.payment_callback, name='payment_callback'),

    # Notifications
    path('notifications', views.notifications_list, name='notifications_list'),
    path('notifications/read-all', views.notifications_mark_all_read, name='notifications_mark_all_read'),
    path('notifications/<int:notification_id>/read', views.notification_mark_read, name='notification_mark_read'),

    # Interviews
    path('interviews', views.interviews_list, name='interviews_list'),
    path('interviews/pending', views.interviews_pending, name='interviews_pending'),
    path('interviews/request', views.interview_request, name='interview_request'),
    path('interviews/<int:interview_id>/approve', views.interview_approve, name='interview_approve'),
    path('interviews/<int:interview_id>/reject', views.interview_reject, name='interview_reject'),
    path('interviews/<int:interview_id>/accept', views.interview_accept, name='interview_accept'),
    path('interviews/<int:interview_id>/decline', views.interview_decline, name='interview_decline'),
]
