"""
Payment link service.

Bundles a member's pending shares into one PayOS payment request.
"""

import logging
import time
from typing import List, Optional
from uuid import UUID

from django.db import transaction

from apps.matches.models import MatchStatus
from apps.members.models import Member
from apps.members.services.exceptions import MemberNotFoundError
from apps.payments.models import Share, ShareStatus, PaymentRequest
from apps.scoring.services.ratings import validate_rating_payload

from . import gateway
from .exceptions import (
    NoPendingSharesError,
    InvalidPaymentAmountError,
    PaymentRequestNotFoundError,
)


logger = logging.getLogger(__name__)


def _next_order_code() -> int:
    order_code = int(time.time() * 1000)
    while PaymentRequest.objects.filter(order_code=order_code).exists():
        order_code += 1
    return order_code


def build_description(order_code: int) -> str:
    return f"Thanh toan {order_code}"


@transaction.atomic
def create_payment_link(
    *,
    share_ids: List[UUID],
    member_id: UUID,
    ratings: Optional[List[dict]] = None
) -> dict:
    """
    Create a PayOS payment link covering the member's selected pending shares.

    Only shares that belong to the member and are still PENDING (on a
    published, non-deleted match) are included; other IDs are ignored.

    Args:
        share_ids: Shares the member wants to pay
        member_id: Paying member
        ratings: Peer rating payloads written once the payment settles

    Returns:
        dict: Gateway fields plus ``checkoutUrl`` and ``orderCode``

    Raises:
        MemberNotFoundError: If member doesn't exist
        NoPendingSharesError: If no requested share is pending for the member
        InvalidPaymentAmountError: If the total is not positive
        InvalidRatingError: If an attached rating is malformed
        GatewayError: If PayOS fails (nothing is persisted)

    Note:
        Shares are row-locked while the request is built. A gateway failure
        rolls back the order code stamps and the request.
    """
    try:
        member = Member.objects.get(id=member_id)
    except (Member.DoesNotExist, ValueError):
        raise MemberNotFoundError(f"Member with ID {member_id} not found")

    shares = list(
        Share.objects.select_for_update()
        .filter(
            id__in=share_ids,
            member=member,
            status=ShareStatus.PENDING,
            match__status=MatchStatus.PUBLISHED,
            match__is_deleted=False,
        )
        .order_by('created_at')
    )
    if not shares:
        raise NoPendingSharesError("No matching pending shares found for the provided IDs")

    total_amount = sum(share.amount for share in shares)
    if total_amount <= 0:
        raise InvalidPaymentAmountError("Total amount must be greater than zero.")

    order_code = _next_order_code()
    payment_request = PaymentRequest.objects.create(
        order_code=order_code,
        member=member,
        amount=total_amount,
        ratings=[validate_rating_payload(payload) for payload in ratings or []],
    )
    payment_request.shares.set(shares)
    Share.objects.filter(id__in=[share.id for share in shares]).update(payos_order_code=order_code)

    link = gateway.create_payment_link(
        order_code=order_code,
        amount=total_amount,
        description=build_description(order_code),
    )

    payment_request.checkout_url = link.get('checkoutUrl') or ''
    payment_request.qr_code = link.get('qrCode') or ''
    payment_request.save(update_fields=['checkout_url', 'qr_code', 'updated_at'])

    logger.info(
        "Created payment link %s for member %s: %d shares, %s VND",
        order_code, member.id, len(shares), total_amount
    )
    return {
        **link,
        'checkoutUrl': payment_request.checkout_url,
        'orderCode': order_code,
    }


def get_payment_request(*, order_code: int) -> PaymentRequest:
    """
    Raises:
        PaymentRequestNotFoundError: If no request has this order code
    """
    try:
        return PaymentRequest.objects.get(order_code=order_code)
    except PaymentRequest.DoesNotExist:
        raise PaymentRequestNotFoundError(f"Payment request {order_code} not found")


def render_payment_qr(*, order_code: int) -> bytes:
    """
    Render the gateway's VietQR string of a payment request as PNG.

    Raises:
        PaymentRequestNotFoundError: If the request doesn't exist or has no QR data
    """
    payment_request = get_payment_request(order_code=order_code)
    if not payment_request.qr_code:
        raise PaymentRequestNotFoundError(f"Payment request {order_code} has no QR code")
    return gateway.render_qr_png(payment_request.qr_code)
