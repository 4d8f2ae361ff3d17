"""
Domain-specific exceptions for matches app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class MatchesServiceError(Exception):
    """Base exception for all matches service errors."""
    pass


class MatchNotFoundError(MatchesServiceError):
    """Raised when a match does not exist or was deleted."""
    pass


class MatchClosedError(MatchesServiceError):
    """Raised when a match no longer accepts changes (already published)."""
    pass


class InvalidAmountError(MatchesServiceError):
    """Raised when the total match cost is not a positive amount."""
    pass


class InvalidTeamSplitError(MatchesServiceError):
    """Raised when team or member percentages don't add up."""
    pass


class EmptyTeamError(MatchesServiceError):
    """Raised when a team carries a percentage but has no members."""
    pass


class DuplicateMemberError(MatchesServiceError):
    """Raised when a member is placed in more than one team."""
    pass


class UnknownMemberError(MatchesServiceError):
    """Raised when a roster references members that don't exist."""
    pass


class AlreadyAttendingError(MatchesServiceError):
    """Raised when a member signs up twice for the same match."""
    pass


class AttendanceFullError(MatchesServiceError):
    """Raised when the attendance list reached its limit."""
    pass


class NotAttendingError(MatchesServiceError):
    """Raised when removing attendance that doesn't exist."""
    pass
