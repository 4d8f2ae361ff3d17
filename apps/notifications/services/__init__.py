"""
Notifications app services layer.

Services contain business logic and orchestrate operations across models.
"""

from .exceptions import (
    NotificationsServiceError,
    PushDeliveryError,
    NotificationNotFoundError,
)

from .push import (
    send_multicast,
    send_to_all,
)

from .messages import (
    notify_new_match,
    notify_attendance_created,
    notify_attendance_deleted,
    notify_manual,
)

from .registry import (
    register_token,
    unregister_token,
    list_notifications,
    mark_notification_read,
    mark_all_notifications_read,
)


__all__ = [
    # Exceptions
    'NotificationsServiceError',
    'PushDeliveryError',
    'NotificationNotFoundError',

    # Push
    'send_multicast',
    'send_to_all',

    # Messages
    'notify_new_match',
    'notify_attendance_created',
    'notify_attendance_deleted',
    'notify_manual',

    # Registry & Feed
    'register_token',
    'unregister_token',
    'list_notifications',
    'mark_notification_read',
    'mark_all_notifications_read',
]
