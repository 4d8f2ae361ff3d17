"""
Service layer unit tests for notifications app.

Firebase is never contacted: send_multicast (or the SDK call below it) is
patched in every test that would push.
"""

import pytest
from unittest.mock import MagicMock, patch
from uuid import uuid4

from apps.matches.services import MatchNotFoundError
from apps.members.services import MemberNotFoundError
from apps.notifications.models import NotificationToken, Notification
from apps.notifications.services import (
    send_multicast,
    send_to_all,
    notify_new_match,
    notify_attendance_created,
    notify_manual,
    register_token,
    unregister_token,
    list_notifications,
    mark_notification_read,
    mark_all_notifications_read,
    PushDeliveryError,
    NotificationNotFoundError,
)


def _send_result(success=True, code=None):
    result = MagicMock(success=success)
    result.exception = None if success else MagicMock(code=code)
    return result


# =============================================================================
# Push Fan-out Tests
# =============================================================================

@pytest.mark.django_db
class TestSendToAll:

    def test_no_tokens_sends_nothing(self):
        with patch('apps.notifications.services.push.send_multicast') as mock_send:
            result = send_to_all(title='Hello', body='World')

        mock_send.assert_not_called()
        assert result == {'successCount': 0, 'failureCount': 0, 'invalidTokensRemoved': 0}

    def test_invalid_tokens_are_removed(self, tokens):
        with patch(
            'apps.notifications.services.push.send_multicast',
            return_value=(1, 1, ['token-laptop'])
        ) as mock_send:
            result = send_to_all(title='Hello', body='World', data={'url': '/pay'})

        assert sorted(mock_send.call_args.kwargs['tokens']) == ['token-laptop', 'token-phone']
        assert result == {'successCount': 1, 'failureCount': 1, 'invalidTokensRemoved': 1}
        assert list(NotificationToken.objects.values_list('token', flat=True)) == ['token-phone']

    def test_delivery_error_propagates(self, tokens):
        with patch(
            'apps.notifications.services.push.send_multicast',
            side_effect=PushDeliveryError('boom')
        ):
            with pytest.raises(PushDeliveryError):
                send_to_all(title='Hello', body='World')

        assert NotificationToken.objects.count() == 2


class TestSendMulticast:

    def test_collects_unregistered_tokens(self):
        response = MagicMock(success_count=1, failure_count=2)
        response.responses = [
            _send_result(),
            _send_result(success=False, code='UNREGISTERED'),
            _send_result(success=False, code='INTERNAL'),
        ]

        with patch('apps.notifications.services.push.get_firebase_app'), \
                patch('firebase_admin.messaging.send_each_for_multicast', return_value=response):
            success, failure, invalid = send_multicast(tokens=['a', 'b', 'c'], title='T', body='B')

        assert (success, failure) == (1, 2)
        assert invalid == ['b']

    def test_data_values_are_stringified(self):
        response = MagicMock(success_count=1, failure_count=0, responses=[_send_result()])

        with patch('apps.notifications.services.push.get_firebase_app'), \
                patch('firebase_admin.messaging.send_each_for_multicast', return_value=response) as mock_send:
            send_multicast(tokens=['a'], title='T', body='B', data={'count': 3})

        message = mock_send.call_args.args[0]
        assert message.data == {'count': '3'}

    def test_missing_credentials(self, settings):
        settings.FIREBASE_CREDENTIALS = ''

        with patch('firebase_admin.get_app', side_effect=ValueError):
            with pytest.raises(PushDeliveryError):
                send_multicast(tokens=['a'], title='T', body='B')


# =============================================================================
# Message Tests
# =============================================================================

@pytest.mark.django_db
class TestMessages:

    def test_new_match_message(self, match):
        with patch('apps.notifications.services.messages.send_to_all', return_value={}) as mock_send:
            notify_new_match(match_id=match.id)

        kwargs = mock_send.call_args.kwargs
        assert '12/04/2025' in kwargs['body']
        assert kwargs['data'] == {'matchId': str(match.id), 'url': '/pay'}

    def test_new_match_unknown(self):
        with pytest.raises(MatchNotFoundError):
            notify_new_match(match_id=uuid4())

    def test_attendance_message_uses_display_name(self, match, member):
        with patch('apps.notifications.services.messages.send_to_all', return_value={}) as mock_send:
            notify_attendance_created(match_id=match.id, member_id=member.id)

        assert mock_send.call_args.kwargs['body'].startswith('Dũng đã điểm danh')

    def test_attendance_unknown_member(self, match):
        with pytest.raises(MemberNotFoundError):
            notify_attendance_created(match_id=match.id, member_id=uuid4())

    def test_manual_message(self):
        with patch('apps.notifications.services.messages.send_to_all', return_value={'successCount': 0}) as mock_send:
            result = notify_manual(title='Sân đổi', body='Tối nay đá sân B')

        mock_send.assert_called_once_with(title='Sân đổi', body='Tối nay đá sân B')
        assert result == {'successCount': 0}


# =============================================================================
# Registry & Feed Tests
# =============================================================================

@pytest.mark.django_db
class TestTokenRegistry:

    def test_register_is_idempotent(self, member):
        register_token(token='abc')
        record = register_token(token='abc', member_id=member.id, user_agent='Firefox')

        assert NotificationToken.objects.count() == 1
        assert record.member == member
        assert record.user_agent == 'Firefox'

    def test_register_unknown_member(self):
        with pytest.raises(MemberNotFoundError):
            register_token(token='abc', member_id=uuid4())

    def test_unregister(self, tokens):
        assert unregister_token(token='token-phone') is True
        assert unregister_token(token='token-phone') is False


@pytest.mark.django_db
class TestFeed:

    def test_unread_filter(self, match, unread_notification):
        Notification.objects.create(message='Đã đọc', match=match, is_read=True)

        assert list(list_notifications(unread_only=True)) == [unread_notification]
        assert list_notifications().count() == 2

    def test_mark_read(self, unread_notification):
        mark_notification_read(notification_id=unread_notification.id)

        unread_notification.refresh_from_db()
        assert unread_notification.is_read is True

    def test_mark_read_unknown(self):
        with pytest.raises(NotificationNotFoundError):
            mark_notification_read(notification_id=uuid4())

    def test_mark_all_read(self, match, unread_notification):
        Notification.objects.create(message='Khác', match=match)

        assert mark_all_notifications_read() == 2
        assert mark_all_notifications_read() == 0
