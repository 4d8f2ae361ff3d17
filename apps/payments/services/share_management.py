"""
Share management service.

Manual reconciliation by the admin and read-side summaries of who paid.
"""

import logging
from uuid import UUID

from django.db import transaction
from django.db.models import Sum
from django.utils import timezone

from apps.matches.models import Match, MatchStatus
from apps.matches.services.exceptions import MatchNotFoundError
from apps.members.models import Member
from apps.members.services.exceptions import MemberNotFoundError
from apps.payments.models import Share, ShareStatus, PaymentChannel

from .exceptions import ShareNotFoundError, ShareAlreadyPaidError, ShareNotPendingError


logger = logging.getLogger(__name__)


def _lock_share(share_id: UUID) -> Share:
    try:
        return Share.objects.select_for_update().get(id=share_id)
    except (Share.DoesNotExist, ValueError):
        raise ShareNotFoundError(f"Share with ID {share_id} not found")


@transaction.atomic
def mark_share_paid(*, share_id: UUID) -> Share:
    """
    Mark a share as paid outside the gateway (cash, bank transfer).

    Marking an already paid share again is a no-op.

    Raises:
        ShareNotFoundError: If share doesn't exist
        ShareNotPendingError: If share was cancelled
    """
    share = _lock_share(share_id)

    if share.status == ShareStatus.PAID:
        logger.info("Share %s already paid, nothing to do", share.id)
        return share

    if share.status != ShareStatus.PENDING:
        raise ShareNotPendingError("Cancelled shares cannot be marked as paid")

    share.status = ShareStatus.PAID
    share.channel = PaymentChannel.MANUAL
    share.paid_at = timezone.now()
    share.save(update_fields=['status', 'channel', 'paid_at', 'updated_at'])

    logger.info("Share %s marked paid manually", share.id)
    return share


@transaction.atomic
def cancel_share(*, share_id: UUID) -> Share:
    """
    Cancel a pending share.

    Raises:
        ShareNotFoundError: If share doesn't exist
        ShareAlreadyPaidError: If share was already paid
    """
    share = _lock_share(share_id)

    if share.status == ShareStatus.PAID:
        raise ShareAlreadyPaidError("Paid shares cannot be cancelled")

    if share.status != ShareStatus.CANCELLED:
        share.status = ShareStatus.CANCELLED
        share.save(update_fields=['status', 'updated_at'])
        logger.info("Share %s cancelled", share.id)

    return share


def get_member_outstanding(*, member_id: UUID) -> dict:
    """
    Pending shares of a member across published matches.

    Returns:
        dict: ``member``, ``shares`` (oldest match first) and ``total_amount``

    Raises:
        MemberNotFoundError: If member doesn't exist
    """
    try:
        member = Member.objects.get(id=member_id)
    except (Member.DoesNotExist, ValueError):
        raise MemberNotFoundError(f"Member with ID {member_id} not found")

    shares = list(
        Share.objects
        .filter(
            member=member,
            status=ShareStatus.PENDING,
            match__status=MatchStatus.PUBLISHED,
            match__is_deleted=False,
        )
        .select_related('match')
        .order_by('match__date', 'created_at')
    )
    return {
        'member': member,
        'shares': shares,
        'total_amount': sum(share.amount for share in shares),
    }


def get_match_payment_summary(*, match_id: UUID) -> dict:
    """
    Payment status of a match.

    Returns:
        dict: totals collected/outstanding plus paid, pending and
        cancelled share lists

    Raises:
        MatchNotFoundError: If match doesn't exist
    """
    try:
        match = Match.objects.get(id=match_id, is_deleted=False)
    except (Match.DoesNotExist, ValueError):
        raise MatchNotFoundError(f"Match with ID {match_id} not found")

    shares = list(match.shares.select_related('member').order_by('created_at'))
    paid = [s for s in shares if s.status == ShareStatus.PAID]
    pending = [s for s in shares if s.status == ShareStatus.PENDING]
    cancelled = [s for s in shares if s.status == ShareStatus.CANCELLED]

    collected = match.shares.filter(status=ShareStatus.PAID).aggregate(
        total=Sum('amount')
    )['total'] or 0

    return {
        'match': match,
        'total_amount': match.total_amount or 0,
        'collected_amount': collected,
        'outstanding_amount': sum(s.amount for s in pending),
        'is_fully_paid': bool(shares) and not pending,
        'total_shares': len(shares),
        'paid_count': len(paid),
        'pending_count': len(pending),
        'paid_shares': paid,
        'pending_shares': pending,
        'cancelled_shares': cancelled,
    }
