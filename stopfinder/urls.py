"""
URL configuration for the stopfinder project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.0/topics/http/urls/
"""

from django.contrib import admin
from django.urls import path, include
from django.http import HttpResponse

def health_check(request):
    """Container liveness check: plain "OK", touches neither database nor cache.

    Clients use /api/health/ (JSON) and /api/status/ (dependency checks).
    """
    return HttpResponse("OK", content_type="text/plain")

urlpatterns = [
    path("health/", health_check, name="health_check"),
    path("admin/", admin.site.urls),
    path("api/", include("api.urls")),
]
