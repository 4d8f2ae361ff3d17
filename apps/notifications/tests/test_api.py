import pytest
from unittest.mock import patch
from uuid import uuid4
from django.urls import reverse
from rest_framework import status

from apps.notifications.models import NotificationToken
from apps.notifications.services import PushDeliveryError


SEND_TO_ALL = 'apps.notifications.services.messages.send_to_all'
DELIVERED = {'successCount': 2, 'failureCount': 0, 'invalidTokensRemoved': 0}


# =============================================================================
# Fan-out Endpoint Tests
# =============================================================================

@pytest.mark.django_db
class TestFanOutApi:

    def test_match_notification(self, admin_client, match):
        with patch(SEND_TO_ALL, return_value=DELIVERED):
            response = admin_client.post(
                reverse('send-match-notification'), {'matchId': str(match.id)}, format='json'
            )

        assert response.status_code == status.HTTP_200_OK
        assert response.data == DELIVERED

    def test_match_notification_requires_auth(self, api_client, match):
        response = api_client.post(
            reverse('send-match-notification'), {'matchId': str(match.id)}, format='json'
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_match_notification_unknown_match(self, admin_client):
        response = admin_client.post(
            reverse('send-match-notification'), {'matchId': str(uuid4())}, format='json'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_attendance_created_is_public(self, api_client, match, member):
        with patch(SEND_TO_ALL, return_value=DELIVERED) as mock_send:
            response = api_client.post(
                reverse('notify-attendance-created'),
                {'matchId': str(match.id), 'memberId': str(member.id)},
                format='json'
            )

        assert response.status_code == status.HTTP_200_OK
        assert mock_send.call_args.kwargs['title'] == 'Điểm danh'

    def test_attendance_deleted(self, api_client, match, member):
        with patch(SEND_TO_ALL, return_value=DELIVERED) as mock_send:
            response = api_client.post(
                reverse('notify-attendance-deleted'),
                {'matchId': str(match.id), 'memberId': str(member.id)},
                format='json'
            )

        assert response.status_code == status.HTTP_200_OK
        assert mock_send.call_args.kwargs['title'] == 'Hủy điểm danh'

    def test_attendance_missing_member(self, api_client, match):
        response = api_client.post(
            reverse('notify-attendance-created'), {'matchId': str(match.id)}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_delivery_failure(self, admin_client):
        with patch(SEND_TO_ALL, side_effect=PushDeliveryError('FIREBASE_CREDENTIALS is not configured')):
            response = admin_client.post(
                reverse('notify-manual'), {'title': 'Hi', 'body': 'There'}, format='json'
            )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['error'] == 'Failed to send notification'
        assert 'FIREBASE_CREDENTIALS' in response.data['details']


# =============================================================================
# Token Endpoint Tests
# =============================================================================

@pytest.mark.django_db
class TestTokenApi:

    def test_register_token(self, api_client, member):
        response = api_client.post(
            reverse('notifications:tokens'),
            {'token': 'device-1', 'memberId': str(member.id)},
            format='json',
            HTTP_USER_AGENT='Mozilla/5.0'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert NotificationToken.objects.get(token='device-1').user_agent == 'Mozilla/5.0'

    def test_register_unknown_member(self, api_client):
        response = api_client.post(
            reverse('notifications:tokens'), {'token': 'device-1', 'memberId': str(uuid4())}, format='json'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_token(self, api_client, tokens):
        response = api_client.delete(reverse('notifications:tokens'), {'token': 'token-phone'}, format='json')

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert NotificationToken.objects.count() == 1

    def test_delete_unknown_token(self, api_client):
        response = api_client.delete(reverse('notifications:tokens'), {'token': 'nope'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_without_token(self, api_client):
        response = api_client.delete(reverse('notifications:tokens'), {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Feed Endpoint Tests
# =============================================================================

@pytest.mark.django_db
class TestFeedApi:

    def test_list_requires_auth(self, api_client):
        assert api_client.get(reverse('notifications:notification-list')).status_code == status.HTTP_401_UNAUTHORIZED

    def test_list_unread(self, admin_client, unread_notification):
        response = admin_client.get(reverse('notifications:notification-list'), {'unread': 'true'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['message'] == unread_notification.message

    def test_mark_read(self, admin_client, unread_notification):
        url = reverse('notifications:notification-mark-read', kwargs={'pk': unread_notification.id})
        response = admin_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_read'] is True

    def test_mark_all_read(self, admin_client, unread_notification):
        response = admin_client.post(reverse('notifications:notification-mark-all-read'))

        assert response.data == {'updated': 1}
