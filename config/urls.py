"""URL configuration for the ShareIt project.

The `urlpatterns` list routes URLs to views. It includes the Django admin,
the application routers provided by each app and the OpenAPI schema.
"""
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore
from drf_spectacular.views import SpectacularAPIView  # type: ignore

urlpatterns = [
    path('admin/', admin.site.urls),
    # Application URLs
    path('bookings/', include('apps.bookings.urls')),
    path('items/', include('apps.items.urls')),
    # API schema
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
]
