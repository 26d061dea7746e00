"""
URL configuration for the citizenscience project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.0/topics/http/urls/
"""
from django.contrib import admin
from django.urls import include, path, register_converter

from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from core.converters import CitizenIdConverter

register_converter(CitizenIdConverter, "citizen")

urlpatterns = [
    path('admin/', admin.site.urls),

    # ── App routes ───────────────────────────────────────────────────
    path('api/auth/', include('accounts.urls')),
    path('api/observations/', include('observations.urls')),
    path('api/rewards/', include('rewards.urls')),
    path('api/core/', include('core.urls')),
    path('gateway/', include('gateway.urls')),

    # ── Swagger / OpenAPI schema ─────────────────────────────────────
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
]
