"""
POS Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("app-data", views.app_data_view),
    path("reports/<str:name>", views.report_view),
    path("insights/sales-analysis", views.sales_insights_view),
    path("insights/chat", views.chat_view),
    path("auth/session", views.session_view),
    path("auth/sign-in", views.sign_in_view),
    path("auth/sign-out", views.sign_out_view),
    path("auth/verify-license", views.verify_license_view),
]
