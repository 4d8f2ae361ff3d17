"""
Domain-specific exceptions for payments app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class PaymentsServiceError(Exception):
    """Base exception for all payments service errors."""
    pass


class ShareNotFoundError(PaymentsServiceError):
    """Raised when a share does not exist."""
    pass


class NoPendingSharesError(PaymentsServiceError):
    """Raised when none of the requested shares is pending for the member."""
    pass


class InvalidPaymentAmountError(PaymentsServiceError):
    """Raised when the amount to pay is not positive."""
    pass


class ShareAlreadyPaidError(PaymentsServiceError):
    """Raised when trying to cancel a share that was already paid."""
    pass


class ShareNotPendingError(PaymentsServiceError):
    """Raised when a share is not pending (e.g. cancelled)."""
    pass


class PaymentRequestNotFoundError(PaymentsServiceError):
    """Raised when a payment request with the given order code doesn't exist."""
    pass


class GatewayError(PaymentsServiceError):
    """Raised when the payment gateway rejects or fails a call."""
    pass
