"""
URL configuration for the public license API.
"""

from django.urls import path

from api.v1.license import views

urlpatterns = [
    path("activate", views.ActivateLicenseView.as_view(), name="license-activate"),
    path("validate", views.ValidateActivationView.as_view(), name="license-validate"),
    path("deactivate", views.DeactivateActivationView.as_view(), name="license-deactivate"),
]
