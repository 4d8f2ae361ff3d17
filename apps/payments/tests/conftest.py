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
def payer(db):
    return Member.objects.create(name='Nguyễn Thanh Tùng', nickname='Tùng')


@pytest.fixture
def teammate(db):
    return Member.objects.create(name='Phan Văn Đức')


@pytest.fixture
def published_match(payer, teammate):
    """Published match: 200000 VND split between two members."""
    match, _ = create_match(
        date=date(2025, 3, 1),
        total_amount=200000,
        teams=[{
            'code': 'A',
            'name': 'Đội A',
            'percent': Decimal('100'),
            'members': [{'member_id': payer.id}, {'member_id': teammate.id}],
        }],
    )
    return match


@pytest.fixture
def payer_share(published_match, payer):
    return published_match.shares.get(member=payer)


@pytest.fixture
def teammate_share(published_match, teammate):
    return published_match.shares.get(member=teammate)


@pytest.fixture
def gateway_link():
    """Fake PayOS response for a created payment link."""
    return {
        'checkoutUrl': 'https://pay.payos.vn/web/abc123',
        'qrCode': '00020101021238570010A000000727',
        'paymentLinkId': 'abc123',
        'status': 'PENDING',
    }
