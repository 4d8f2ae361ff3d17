import pytest
from datetime import date
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.members.models import Member
from apps.matches.models import Match
from apps.notifications.models import NotificationToken, Notification


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    return get_user_model().objects.create_user(username='admin', password='TestPass123!')


@pytest.fixture
def admin_client(api_client, admin_user):
    """Return API client authenticated as the admin."""
    refresh = RefreshToken.for_user(admin_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def member(db):
    return Member.objects.create(name='Bùi Tiến Dũng', nickname='Dũng')


@pytest.fixture
def match(db):
    return Match.objects.create(date=date(2025, 4, 12), total_amount=250000)


@pytest.fixture
def tokens(member):
    """Two registered devices."""
    return [
        NotificationToken.objects.create(token='token-phone', member=member),
        NotificationToken.objects.create(token='token-laptop'),
    ]


@pytest.fixture
def unread_notification(match):
    return Notification.objects.create(message='Dũng đã thanh toán 125.000đ', match=match)
