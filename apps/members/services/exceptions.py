"""
Domain-specific exceptions for members app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class MembersServiceError(Exception):
    """Base exception for all members service errors."""
    pass


class MemberNotFoundError(MembersServiceError):
    """Raised when a member does not exist."""
    pass


class MemberHasSharesError(MembersServiceError):
    """Raised when deleting a member who still owns payment shares."""
    pass
