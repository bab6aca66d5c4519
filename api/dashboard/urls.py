"""
URL configuration for the administrator dashboard API.
"""

from django.urls import path

from api.dashboard import views

urlpatterns = [
    # Licenses
    path("licenses", views.LicenseListView.as_view(), name="dashboard-licenses"),
    path(
        "licenses/<uuid:license_id>",
        views.LicenseDetailView.as_view(),
        name="dashboard-license-detail",
    ),
    path(
        "licenses/<uuid:license_id>/revoke",
        views.RevokeLicenseView.as_view(),
        name="dashboard-license-revoke",
    ),
    path(
        "licenses/<uuid:license_id>/activate",
        views.ReinstateLicenseView.as_view(),
        name="dashboard-license-activate",
    ),
    # Apps
    path("apps", views.AppListView.as_view(), name="dashboard-apps"),
    path("apps/<uuid:app_id>", views.AppDetailView.as_view(), name="dashboard-app-detail"),
    # Activations
    path("activations", views.ActivationListView.as_view(), name="dashboard-activations"),
    path(
        "activations/stats",
        views.ActivationStatsView.as_view(),
        name="dashboard-activation-stats",
    ),
    path(
        "activations/<uuid:activation_id>",
        views.ActivationDetailView.as_view(),
        name="dashboard-activation-detail",
    ),
    path(
        "activations/<uuid:activation_id>/approve",
        views.ApproveActivationView.as_view(),
        name="dashboard-activation-approve",
    ),
    path(
        "activations/<uuid:activation_id>/revoke",
        views.RevokeActivationView.as_view(),
        name="dashboard-activation-revoke",
    ),
]
