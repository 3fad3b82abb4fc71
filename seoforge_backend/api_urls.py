"""
API URL routing for seoforge_backend.
All API endpoints are prefixed with /api/v1/
"""
from django.urls import path, include

from seo import tool_views
from .views import health_check


urlpatterns = [
    # Health check (no auth) - GET /api/v1/health/
    path('health/', health_check, name='health-check'),
    # Dashboard authentication
    path('auth/', include('accounts.urls')),
    # Projects (wizard, SERP analysis, generation, dashboard + reports)
    path('projects/', include('projects.urls')),
    # Stored content
    path('content/', include('seo.urls')),
    # Stateless SEO tools
    path('seo/score/', tool_views.score_content_view, name='seo-score'),
    path('seo/generate/', tool_views.generate_content_view, name='seo-generate'),
    path('seo/keyword-density/', tool_views.keyword_density_view, name='seo-keyword-density'),
    path('seo/serp/', tool_views.serp_analysis_view, name='seo-serp'),
]
