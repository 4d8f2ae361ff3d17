import pytest
from django.urls import reverse
from rest_framework import status
from apps.members.models import Member


@pytest.mark.django_db
class TestMemberList:
    """Tests for GET /api/members/"""

    def test_list_is_public(self, api_client, member, other_member):
        url = reverse('members:member-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 2

    def test_search_without_diacritics(self, api_client, member, other_member):
        url = reverse('members:member-list')
        response = api_client.get(url, {'q': 'binh'})

        assert response.status_code == status.HTTP_200_OK
        assert [m['id'] for m in response.data] == [str(other_member.id)]

    def test_inactive_hidden(self, api_client, member, inactive_member):
        url = reverse('members:member-list')
        response = api_client.get(url)

        ids = [m['id'] for m in response.data]
        assert str(inactive_member.id) not in ids


@pytest.mark.django_db
class TestMemberWrite:

    def test_create_requires_auth(self, api_client):
        url = reverse('members:member-list')
        response = api_client.post(url, {'name': 'Võ Định'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_create_member(self, admin_client):
        url = reverse('members:member-list')
        response = admin_client.post(url, {'name': 'Võ Định', 'nickname': 'Định'})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['display_name'] == 'Định'
        assert Member.objects.filter(name='Võ Định').exists()

    def test_create_blank_name_rejected(self, admin_client):
        url = reverse('members:member-list')
        response = admin_client.post(url, {'name': '   '})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_partial_update(self, admin_client, member):
        url = reverse('members:member-detail', kwargs={'pk': member.id})
        response = admin_client.patch(url, {'nickname': 'Anh An'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        member.refresh_from_db()
        assert member.nickname == 'Anh An'

    def test_toggle_exempt(self, admin_client, member):
        url = reverse('members:member-toggle-exempt', kwargs={'pk': member.id})
        response = admin_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_exempt_from_payment'] is True

    def test_toggle_creditor(self, admin_client, member):
        url = reverse('members:member-toggle-creditor', kwargs={'pk': member.id})
        response = admin_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_creditor'] is True

    def test_delete_member(self, admin_client, member):
        url = reverse('members:member-detail', kwargs={'pk': member.id})
        response = admin_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Member.objects.filter(id=member.id).exists()
