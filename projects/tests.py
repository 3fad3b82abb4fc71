"""
Tests for projects app - Project management, project actions and reports.
"""
import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from projects.reports import build_chart_data, score_trend, summarize_projects


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def user_model():
    return get_user_model()


@pytest.fixture
def create_user(user_model):
    def _create_user(email="test@example.com", password="testpass123"):
        return user_model.objects.create_user(
            email=email,
            username=email,
            password=password
        )
    return _create_user


@pytest.fixture
def authenticated_client(api_client, create_user):
    user = create_user()
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {str(refresh.access_token)}')
    return api_client, user


@pytest.fixture
def create_project(create_user):
    def _create_project(user=None, target_keyword="content marketing", business_type="SaaS", **extra):
        from projects.models import Project
        if user is None:
            user = create_user()
        return Project.objects.create(
            user=user,
            target_keyword=target_keyword,
            business_type=business_type,
            **extra
        )
    return _create_project


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.mark.django_db
class TestProjectManagement:

    def test_list_projects(self, authenticated_client, create_project):
        client, user = authenticated_client
        project = create_project(user=user)

        response = client.get('/api/v1/projects/')
        assert response.status_code == 200
        assert len(response.data['results']) == 1
        assert response.data['results'][0]['target_keyword'] == project.target_keyword

    def test_list_only_own_projects(self, authenticated_client, create_user, create_project):
        client, user = authenticated_client
        create_project(user=user)
        create_project(user=create_user(email="other@example.com"), target_keyword="other")

        response = client.get('/api/v1/projects/')
        assert response.status_code == 200
        assert [p['target_keyword'] for p in response.data['results']] == ['content marketing']

    def test_filter_by_status(self, authenticated_client, create_project):
        client, user = authenticated_client
        create_project(user=user)
        create_project(user=user, target_keyword="paused one", status="Paused")

        response = client.get('/api/v1/projects/', {'status': 'Paused'})
        assert [p['target_keyword'] for p in response.data['results']] == ['paused one']

    def test_create_project_from_wizard(self, authenticated_client):
        client, user = authenticated_client
        response = client.post('/api/v1/projects/', {
            'target_keyword': '  local seo  ',
            'business_type': 'Local Business',
            'website_url': 'https://bakery.example.com',
            'location': 'Austin',
            'tone_of_voice': 'Friendly',
        })
        assert response.status_code == 201
        assert response.data['target_keyword'] == 'local seo'
        assert response.data['name'] == 'local seo'
        assert response.data['display_name'] == 'local seo'
        assert response.data['status'] == 'Active'
        assert response.data['seo_score'] == 0
        assert user.projects.count() == 1

    def test_create_project_requires_keyword(self, authenticated_client):
        client, _ = authenticated_client
        response = client.post('/api/v1/projects/', {
            'target_keyword': '   ',
            'business_type': 'SaaS',
        })
        assert response.status_code == 400
        assert 'target_keyword' in response.data

    def test_create_project_rejects_invalid_business_type(self, authenticated_client):
        client, _ = authenticated_client
        response = client.post('/api/v1/projects/', {
            'target_keyword': 'seo',
            'business_type': 'Spaceship',
        })
        assert response.status_code == 400
        assert 'business_type' in response.data

    def test_create_project_rejects_non_http_url(self, authenticated_client):
        client, _ = authenticated_client
        response = client.post('/api/v1/projects/', {
            'target_keyword': 'seo',
            'business_type': 'SaaS',
            'website_url': 'ftp://files.example.com',
        })
        assert response.status_code == 400
        assert 'website_url' in response.data

    def test_seo_score_is_read_only(self, authenticated_client, create_project):
        client, user = authenticated_client
        project = create_project(user=user)
        response = client.patch(f'/api/v1/projects/{project.id}/', {'seo_score': 99, 'status': 'Paused'})
        assert response.status_code == 200
        project.refresh_from_db()
        assert project.seo_score == 0
        assert project.status == 'Paused'

    def test_cannot_access_other_users_project(self, authenticated_client, create_user, create_project):
        client, _ = authenticated_client
        project = create_project(user=create_user(email="other@example.com"))

        assert client.get(f'/api/v1/projects/{project.id}/').status_code == 404
        assert client.delete(f'/api/v1/projects/{project.id}/').status_code == 404

    def test_delete_project_removes_content(self, authenticated_client, create_project):
        from seo.models import Content
        client, user = authenticated_client
        project = create_project(user=user)
        Content.objects.create(project=project, title="Draft", body="some words here")

        response = client.delete(f'/api/v1/projects/{project.id}/')
        assert response.status_code == 204
        assert Content.objects.count() == 0

    def test_requires_authentication(self, api_client):
        assert api_client.get('/api/v1/projects/').status_code == 401


@pytest.mark.django_db
class TestProjectModel:

    def test_update_seo_score_clamps(self, create_project):
        project = create_project()
        project.update_seo_score(140)
        assert project.seo_score == 100
        project.update_seo_score(-5)
        assert project.seo_score == 0

    def test_record_content_counts_and_scores(self, create_project):
        project = create_project()
        project.record_content(score=64)
        project.record_content()
        project.refresh_from_db()
        assert project.content_count == 2
        assert project.seo_score == 64

    def test_str(self, create_project):
        project = create_project(name="Launch")
        assert str(project) == "Launch (SaaS)"


@pytest.mark.django_db
class TestProjectActions:

    def test_serp_analysis(self, authenticated_client, create_project):
        client, user = authenticated_client
        project = create_project(user=user, target_keyword="seo tools")

        response = client.post(f'/api/v1/projects/{project.id}/serp-analysis/')
        assert response.status_code == 200
        assert response.data['keyword'] == 'seo tools'
        assert len(response.data['results']) == 10
        names = [e['name'] for e in response.data['entities']]
        assert 'seo' in names and 'tools' in names
        assert response.data['entity_count'] == len(response.data['entities'])

    def test_serp_analysis_result_count(self, authenticated_client, create_project):
        client, user = authenticated_client
        project = create_project(user=user)

        response = client.post(f'/api/v1/projects/{project.id}/serp-analysis/', {
            'result_count': 3, 'entity_limit': 2
        })
        assert response.status_code == 200
        assert len(response.data['results']) == 3
        assert len(response.data['entities']) == 2

    def test_website_analysis_needs_url(self, authenticated_client, create_project):
        client, user = authenticated_client
        project = create_project(user=user)

        response = client.post(f'/api/v1/projects/{project.id}/website-analysis/')
        assert response.status_code == 400
        assert 'error' in response.data

    def test_website_analysis(self, authenticated_client, create_project):
        client, user = authenticated_client
        project = create_project(user=user, website_url='https://example.com/blog')

        response = client.post(f'/api/v1/projects/{project.id}/website-analysis/')
        assert response.status_code == 200
        assert response.data['domain'] == 'example.com'
        assert response.data['keyword'] == 'content marketing'
        assert 30 <= response.data['seo_score'] <= 100

    def test_generate_content_preview(self, authenticated_client, create_project):
        from seo.models import Content
        client, user = authenticated_client
        project = create_project(user=user)

        response = client.post(f'/api/v1/projects/{project.id}/generate-content/', {
            'entities': [{'name': 'strategy', 'count': 10}, {'name': 'analytics', 'count': 8}],
        })
        assert response.status_code == 200
        assert response.data['content']['title'].startswith('content marketing for SaaS')
        assert len(response.data['content']['faq_section']) == 6
        assert 0 <= response.data['seo']['score'] <= 100
        assert 'saved_content' not in response.data
        assert Content.objects.count() == 0

    def test_generate_content_and_save(self, authenticated_client, create_project):
        from seo.models import Content
        client, user = authenticated_client
        project = create_project(user=user)

        response = client.post(f'/api/v1/projects/{project.id}/generate-content/', {'save': True})
        assert response.status_code == 201
        content = Content.objects.get(id=response.data['saved_content']['id'])
        assert content.project_id == project.id
        assert content.seo_score == response.data['seo']['score']
        assert content.word_count > 0
        project.refresh_from_db()
        assert project.content_count == 1
        assert project.seo_score == content.seo_score

    def test_update_score(self, authenticated_client, create_project):
        client, user = authenticated_client
        project = create_project(user=user)

        response = client.post(f'/api/v1/projects/{project.id}/update-score/', {'seo_score': 82})
        assert response.status_code == 200
        assert response.data['seo_score'] == 82

    def test_update_score_out_of_range(self, authenticated_client, create_project):
        client, user = authenticated_client
        project = create_project(user=user)

        response = client.post(f'/api/v1/projects/{project.id}/update-score/', {'seo_score': 150})
        assert response.status_code == 400

    def test_dashboard(self, authenticated_client, create_project):
        client, user = authenticated_client
        for score in (80, 60):
            create_project(user=user, target_keyword=f"kw {score}", seo_score=score)

        response = client.get('/api/v1/projects/dashboard/')
        assert response.status_code == 200
        stats = response.data['stats']
        assert stats['total_projects'] == 2
        assert stats['avg_seo_score'] == 70
        assert stats['top_performer']['target_keyword'] == 'kw 80'
        assert stats['improvement_opportunities'] == 1
        assert len(response.data['recent_projects']) == 2

    def test_reports(self, authenticated_client, create_project):
        client, user = authenticated_client
        create_project(user=user, seo_score=50)

        response = client.get('/api/v1/projects/reports/')
        assert response.status_code == 200
        assert response.data['charts']['seo_trends']['series'][0]['data'] == [50]
        assert response.data['charts']['business_type_distribution']['labels'] == ['SaaS']


class TestReports:

    def test_summary_with_no_projects(self):
        stats = summarize_projects([])
        assert stats['total_projects'] == 0
        assert stats['avg_seo_score'] == 0
        assert stats['score_trend'] == 'down'
        assert stats['top_performer'] is None

    def test_summary_from_dicts(self):
        projects = [
            {'id': 1, 'target_keyword': 'a', 'business_type': 'SaaS', 'status': 'Active', 'seo_score': 90},
            {'id': 2, 'target_keyword': 'b', 'business_type': 'Blog', 'status': 'Paused', 'seo_score': 65},
        ]
        stats = summarize_projects(projects, total_content=4)
        assert stats['active_projects'] == 1
        assert stats['total_content'] == 4
        assert stats['avg_seo_score'] == 78
        assert stats['score_trend'] == 'up'
        assert stats['top_performer']['id'] == 1
        assert stats['improvement_opportunities'] == 1

    def test_score_trend_buckets(self):
        assert score_trend(75) == 'up'
        assert score_trend(50) == 'neutral'
        assert score_trend(49.9) == 'down'

    def test_chart_data(self):
        projects = [
            {'target_keyword': 'a very long keyword phrase here', 'business_type': 'SaaS',
             'seo_score': 70, 'content_count': 3},
            {'target_keyword': 'short', 'business_type': 'SaaS', 'seo_score': 40, 'content_count': 1},
        ]
        charts = build_chart_data(projects)
        assert charts['seo_trends']['categories'][0] == 'a very long keyword ...'
        assert charts['content_performance']['series'][0]['data'] == [3, 1]
        assert charts['business_type_distribution'] == {'series': [2], 'labels': ['SaaS']}
