"""
Webhook-driven settlement.

PayOS calls the webhook once a payment goes through (and may call it again
for the same order). Settlement marks the covered shares PAID, writes the
peer ratings that were attached to the payment and drops one in-app
notification per paid share, all in one transaction.
"""

import logging

from django.db import transaction
from django.utils import timezone

from apps.notifications.models import Notification
from apps.payments.models import (
    Share,
    ShareStatus,
    PaymentChannel,
    PaymentRequest,
    PaymentRequestStatus,
)
from apps.matches.services.exceptions import MatchNotFoundError
from apps.scoring.models import RatingChannel
from apps.scoring.services.exceptions import InvalidRatingError
from apps.scoring.services.ratings import record_rating_payload

from . import gateway


logger = logging.getLogger(__name__)


def _payment_message(member, amount: int) -> str:
    return f"{member.get_display_name()} đã thanh toán {amount:,} VND"


@transaction.atomic
def settle_payment(*, order_code: int, webhook_data: dict) -> dict:
    """
    Settle a payment request.

    Args:
        order_code: Gateway order code of the paid request
        webhook_data: Verified webhook payload, kept on each share's meta

    Returns:
        dict: ``settled`` (bool), ``sharesPaid`` and ``ratingsCreated``

    Note:
        Unknown order codes and already settled requests are no-ops, so a
        retried webhook never writes twice. The request row is locked for
        the whole transaction.
    """
    result = {'settled': False, 'sharesPaid': 0, 'ratingsCreated': 0}

    try:
        payment_request = (
            PaymentRequest.objects
            .select_for_update()
            .select_related('member')
            .get(order_code=order_code)
        )
    except PaymentRequest.DoesNotExist:
        logger.warning("Webhook: no payment request found for order code %s", order_code)
        return result

    if payment_request.status == PaymentRequestStatus.SETTLED:
        logger.info("Webhook: order %s already settled, ignoring", order_code)
        return result

    now = timezone.now()
    shares = list(
        Share.objects.select_for_update()
        .filter(payment_requests=payment_request, status=ShareStatus.PENDING)
        .order_by('created_at')
    )
    for share in shares:
        share.status = ShareStatus.PAID
        share.channel = PaymentChannel.PAYOS
        share.paid_at = now
        share.meta = {'webhook': webhook_data}
        share.save(update_fields=['status', 'channel', 'paid_at', 'meta', 'updated_at'])

        Notification.objects.create(
            message=_payment_message(payment_request.member, share.amount),
            match_id=share.match_id,
            share=share,
        )

    ratings_created = 0
    skipped = []
    for payload in payment_request.ratings or []:
        try:
            record_rating_payload(
                payload=payload,
                channel=RatingChannel.PAYOS,
                payment_request=payment_request,
            )
        except (InvalidRatingError, MatchNotFoundError) as e:
            # The payment itself stands; the rating is kept for a manual retry
            logger.warning("Skipping rating attached to order %s: %s", order_code, e)
            skipped.append({'payload': payload, 'error': str(e)})
            continue
        ratings_created += 1

    payment_request.status = PaymentRequestStatus.SETTLED
    payment_request.settled_at = now
    payment_request.skipped_ratings = skipped
    payment_request.save(update_fields=['status', 'settled_at', 'skipped_ratings', 'updated_at'])

    logger.info(
        "Settled order %s: %d shares paid, %d ratings written",
        order_code, len(shares), ratings_created
    )
    result.update(settled=True, sharesPaid=len(shares), ratingsCreated=ratings_created)
    return result


def handle_webhook(body: dict) -> dict:
    """
    Verify a PayOS webhook body and settle the payment when it succeeded.

    Raises:
        GatewayError: If the body fails signature verification
    """
    data = gateway.verify_webhook(body)

    code = data.get('code', body.get('code'))
    if code != gateway.SUCCESS_CODE:
        logger.info("Webhook received for non-successful payment: %s", data)
        return {'settled': False, 'sharesPaid': 0, 'ratingsCreated': 0}

    return settle_payment(order_code=int(data['orderCode']), webhook_data=data)
