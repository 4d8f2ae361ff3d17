"""
Domain-specific exceptions for notifications app.
"""


class NotificationsServiceError(Exception):
    """Base exception for all notifications service errors."""
    pass


class PushDeliveryError(NotificationsServiceError):
    """Raised when Firebase can't be initialized or rejects a send."""
    pass


class NotificationNotFoundError(NotificationsServiceError):
    """Raised when a feed item does not exist."""
    pass
