import pytest
from datetime import date
from decimal import Decimal
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.members.models import Member
from apps.matches.services import create_match


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
def striker(db):
    return Member.objects.create(name='Trần Quốc Huy', nickname='Huy')


@pytest.fixture
def keeper(db):
    return Member.objects.create(name='Đặng Văn Lâm', nickname='Lâm')


@pytest.fixture
def defender(db):
    return Member.objects.create(name='Quế Ngọc Hải', nickname='Hải')


@pytest.fixture
def played_match(striker, keeper, defender):
    """Published match: striker + keeper in team A, defender in team B."""
    match, _ = create_match(
        date=date(2025, 3, 1),
        total_amount=300000,
        teams=[
            {
                'code': 'A',
                'name': 'Đội A',
                'percent': Decimal('50'),
                'members': [{'member_id': striker.id}, {'member_id': keeper.id}],
            },
            {
                'code': 'B',
                'name': 'Đội B',
                'percent': Decimal('50'),
                'members': [{'member_id': defender.id}],
            },
        ],
    )
    return match
