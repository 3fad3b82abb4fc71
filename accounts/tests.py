"""
Tests for accounts app authentication.
"""
import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

User = get_user_model()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def create_user():
    def _create_user(email="test@example.com", password="testpass123", **extra):
        return User.objects.create_user(
            email=email,
            username=email,
            password=password,
            **extra
        )
    return _create_user


@pytest.fixture
def authenticated_client(api_client, create_user):
    user = create_user()
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {str(refresh.access_token)}')
    return api_client, user


@pytest.mark.django_db
class TestAuthentication:

    def test_login_success(self, api_client, create_user):
        user = create_user()
        response = api_client.post('/api/v1/auth/login/', {
            'email': user.email,
            'password': 'testpass123'
        })
        assert response.status_code == 200
        assert 'token' in response.data
        assert 'refresh_token' in response.data
        assert response.data['user']['email'] == user.email

    def test_login_invalid_credentials(self, api_client, create_user):
        create_user()
        response = api_client.post('/api/v1/auth/login/', {
            'email': 'test@example.com',
            'password': 'wrongpassword'
        })
        assert response.status_code == 400

    def test_login_missing_fields(self, api_client):
        response = api_client.post('/api/v1/auth/login/', {
            'email': 'test@example.com'
        })
        assert response.status_code == 400

    def test_register_success(self, api_client):
        response = api_client.post('/api/v1/auth/register/', {
            'email': 'newuser@example.com',
            'password': 'securepass123',
            'name': 'New User'
        })
        assert response.status_code == 201
        assert 'token' in response.data
        user = User.objects.get(email='newuser@example.com')
        assert user.first_name == 'New'
        assert user.last_name == 'User'
        assert response.data['user']['full_name'] == 'New User'

    def test_register_duplicate_email(self, api_client, create_user):
        user = create_user(email='duplicate@example.com')
        response = api_client.post('/api/v1/auth/register/', {
            'email': user.email,
            'password': 'securepass123'
        })
        assert response.status_code == 400
        assert 'email' in response.data

    def test_register_short_password(self, api_client):
        response = api_client.post('/api/v1/auth/register/', {
            'email': 'test@example.com',
            'password': 'short'
        })
        assert response.status_code == 400

    def test_me_endpoint_authenticated(self, authenticated_client):
        client, user = authenticated_client
        response = client.get('/api/v1/auth/me/')
        assert response.status_code == 200
        assert response.data['user']['email'] == user.email
        assert response.data['user']['project_count'] == 0

    def test_me_endpoint_unauthenticated(self, api_client):
        response = api_client.get('/api/v1/auth/me/')
        assert response.status_code == 401

    def test_logout_success(self, authenticated_client):
        client, user = authenticated_client
        refresh = RefreshToken.for_user(user)
        response = client.post('/api/v1/auth/logout/', {
            'refresh_token': str(refresh)
        })
        assert response.status_code == 200

    def test_logout_blacklists_refresh_token(self, authenticated_client):
        client, user = authenticated_client
        refresh = str(RefreshToken.for_user(user))
        client.post('/api/v1/auth/logout/', {'refresh_token': refresh})
        response = client.post('/api/v1/auth/logout/', {'refresh_token': refresh})
        assert response.status_code == 400
        assert response.data['error'] == 'Logout failed'

    def test_logout_with_garbage_token(self, authenticated_client):
        client, _ = authenticated_client
        response = client.post('/api/v1/auth/logout/', {'refresh_token': 'not-a-token'})
        assert response.status_code == 400

    def test_auth_flow_without_csrf_cookie(self):
        client = APIClient(enforce_csrf_checks=True)
        response = client.post('/api/v1/auth/register/', {
            'email': 'token-only@example.com',
            'password': 'securepass123'
        })
        assert response.status_code == 201

        response = client.post('/api/v1/auth/login/', {
            'email': 'token-only@example.com',
            'password': 'securepass123'
        })
        assert response.status_code == 200

        client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['token']}")
        response = client.post('/api/v1/auth/logout/', {'refresh_token': response.data['refresh_token']})
        assert response.status_code == 200

    def test_me_rejects_post(self, authenticated_client):
        client, _ = authenticated_client
        assert client.post('/api/v1/auth/me/').status_code == 405


@pytest.mark.django_db
class TestUserModel:

    def test_str_is_email(self, create_user):
        assert str(create_user(email='a@example.com')) == 'a@example.com'

    def test_full_name_falls_back_to_email(self, create_user):
        user = create_user(email='b@example.com')
        assert user.full_name == 'b@example.com'
        user.first_name = 'Ada'
        assert user.full_name == 'Ada'


@pytest.mark.django_db
class TestHealthCheck:

    def test_health_check_needs_no_auth(self, api_client):
        response = api_client.get('/api/v1/health/')
        assert response.status_code == 200
        assert response.json() == {'status': 'ok', 'service': 'seoforge-backend'}
