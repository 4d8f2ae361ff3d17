import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.members.models import Member


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    """Create and return the fund admin."""
    return get_user_model().objects.create_user(
        username='admin',
        password='TestPass123!',
    )


@pytest.fixture
def admin_client(api_client, admin_user):
    """Return API client authenticated as the admin."""
    refresh = RefreshToken.for_user(admin_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def member(db):
    return Member.objects.create(name='Nguyễn Văn An', nickname='An')


@pytest.fixture
def other_member(db):
    return Member.objects.create(name='Trần Đức Bình')


@pytest.fixture
def inactive_member(db):
    return Member.objects.create(name='Lê Cường', is_active=False)
