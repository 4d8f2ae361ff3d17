import pytest
from datetime import date
from decimal import Decimal
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.members.models import Member
from apps.matches.models import Match, MatchStatus


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
def players(db):
    """Six regular members."""
    return [Member.objects.create(name=f'Cầu thủ {i}') for i in range(1, 7)]


@pytest.fixture
def exempt_member(db):
    return Member.objects.create(name='Thủ môn khách', is_exempt_from_payment=True)


@pytest.fixture
def creditor_member(db):
    return Member.objects.create(name='Chủ sân', is_creditor=True)


@pytest.fixture
def pending_match(db):
    """A match accepting attendance sign-ups."""
    return Match.objects.create(date=date(2025, 3, 1), status=MatchStatus.PENDING)


@pytest.fixture
def two_team_layout(players):
    """60/40 split, three players each."""
    return [
        {
            'code': 'A',
            'name': 'Đội thắng',
            'percent': Decimal('60'),
            'members': [{'member_id': p.id} for p in players[:3]],
        },
        {
            'code': 'B',
            'name': 'Đội thua',
            'percent': Decimal('40'),
            'members': [{'member_id': p.id} for p in players[3:]],
        },
    ]
