"""
Payments app services layer.

Services contain business logic and orchestrate operations across models.
"""

from .exceptions import (
    PaymentsServiceError,
    ShareNotFoundError,
    NoPendingSharesError,
    InvalidPaymentAmountError,
    ShareAlreadyPaidError,
    ShareNotPendingError,
    PaymentRequestNotFoundError,
    GatewayError,
)

from .payment_links import (
    create_payment_link,
    get_payment_request,
    render_payment_qr,
)

from .settlement import (
    settle_payment,
    handle_webhook,
)

from .share_management import (
    mark_share_paid,
    cancel_share,
    get_member_outstanding,
    get_match_payment_summary,
)


__all__ = [
    # Exceptions
    'PaymentsServiceError',
    'ShareNotFoundError',
    'NoPendingSharesError',
    'InvalidPaymentAmountError',
    'ShareAlreadyPaidError',
    'ShareNotPendingError',
    'PaymentRequestNotFoundError',
    'GatewayError',

    # Payment Links
    'create_payment_link',
    'get_payment_request',
    'render_payment_qr',

    # Settlement
    'settle_payment',
    'handle_webhook',

    # Share Management
    'mark_share_paid',
    'cancel_share',
    'get_member_outstanding',
    'get_match_payment_summary',
]
