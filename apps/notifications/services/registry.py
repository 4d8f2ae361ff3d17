"""
Notification token registry and in-app feed.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction

from apps.members.models import Member
from apps.members.services.exceptions import MemberNotFoundError
from apps.notifications.models import NotificationToken, Notification

from .exceptions import NotificationNotFoundError


logger = logging.getLogger(__name__)


@transaction.atomic
def register_token(
    *,
    token: str,
    member_id: Optional[UUID] = None,
    user_agent: str = ''
) -> NotificationToken:
    """
    Store (or refresh) a push token.

    Re-registering the same token updates its member and user agent.

    Raises:
        MemberNotFoundError: If member_id doesn't exist
    """
    member = None
    if member_id is not None:
        try:
            member = Member.objects.get(id=member_id)
        except (Member.DoesNotExist, ValueError):
            raise MemberNotFoundError(f"Member with ID {member_id} not found")

    record, created = NotificationToken.objects.update_or_create(
        token=token,
        defaults={'member': member, 'user_agent': user_agent[:500]},
    )
    if created:
        logger.info("Registered notification token for member %s", member_id)
    return record


def unregister_token(*, token: str) -> bool:
    """Forget a push token. Returns False when it wasn't registered."""
    deleted, _ = NotificationToken.objects.filter(token=token).delete()
    return bool(deleted)


def list_notifications(*, unread_only: bool = False):
    queryset = Notification.objects.select_related('match', 'share__member')
    if unread_only:
        queryset = queryset.filter(is_read=False)
    return queryset.order_by('-created_at')


def mark_notification_read(*, notification_id: UUID) -> Notification:
    """
    Raises:
        NotificationNotFoundError: If notification doesn't exist
    """
    try:
        notification = Notification.objects.get(id=notification_id)
    except (Notification.DoesNotExist, ValueError):
        raise NotificationNotFoundError(f"Notification {notification_id} not found")

    if not notification.is_read:
        notification.is_read = True
        notification.save(update_fields=['is_read'])
    return notification


def mark_all_notifications_read() -> int:
    return Notification.objects.filter(is_read=False).update(is_read=True)
