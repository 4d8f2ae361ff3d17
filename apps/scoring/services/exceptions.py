"""
Domain-specific exceptions for scoring app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class ScoringServiceError(Exception):
    """Base exception for all scoring service errors."""
    pass


class LiveEventNotFoundError(ScoringServiceError):
    """Raised when a live event does not exist for the match."""
    pass


class UnknownActionError(ScoringServiceError):
    """Raised when a live event has no action type."""
    pass


class NotInMatchError(ScoringServiceError):
    """Raised when a member didn't play in the rated match."""
    pass


class InvalidRatingError(ScoringServiceError):
    """Raised when a rating payload is malformed or out of range."""
    pass
