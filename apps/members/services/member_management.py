"""
Member management service.

Handles member registry operations and payment flag toggles.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Q, QuerySet

from apps.members.models import Member, strip_diacritics

from .exceptions import MemberNotFoundError, MemberHasSharesError


logger = logging.getLogger(__name__)


def get_member_by_id(*, member_id: UUID) -> Member:
    """
    Get a member by ID.

    Raises:
        MemberNotFoundError: If member doesn't exist
    """
    try:
        return Member.objects.get(id=member_id)
    except (Member.DoesNotExist, ValueError):
        raise MemberNotFoundError(f"Member with ID {member_id} not found")


def create_member(
    *,
    name: str,
    nickname: str = '',
    is_exempt_from_payment: bool = False,
    is_creditor: bool = False
) -> Member:
    """Create a new member."""
    member = Member.objects.create(
        name=name.strip(),
        nickname=nickname.strip(),
        is_exempt_from_payment=is_exempt_from_payment,
        is_creditor=is_creditor,
    )
    logger.info("Created member %s (%s)", member.id, member.name)
    return member


@transaction.atomic
def update_member(*, member_id: UUID, **fields) -> Member:
    """
    Update member fields.

    Only name, nickname, is_active and the payment flags can be changed.

    Raises:
        MemberNotFoundError: If member doesn't exist
    """
    try:
        member = Member.objects.select_for_update().get(id=member_id)
    except Member.DoesNotExist:
        raise MemberNotFoundError(f"Member with ID {member_id} not found")

    allowed = {'name', 'nickname', 'is_active', 'is_exempt_from_payment', 'is_creditor'}
    changed = []
    for field, value in fields.items():
        if field not in allowed:
            continue
        if isinstance(value, str):
            value = value.strip()
        setattr(member, field, value)
        changed.append(field)

    if changed:
        member.save(update_fields=changed + ['updated_at'])

    return member


@transaction.atomic
def toggle_payment_exemption(*, member_id: UUID) -> Member:
    """Flip the member's payment exemption flag."""
    try:
        member = Member.objects.select_for_update().get(id=member_id)
    except Member.DoesNotExist:
        raise MemberNotFoundError(f"Member with ID {member_id} not found")

    member.is_exempt_from_payment = not member.is_exempt_from_payment
    member.save(update_fields=['is_exempt_from_payment', 'updated_at'])
    return member


@transaction.atomic
def toggle_creditor(*, member_id: UUID) -> Member:
    """Flip the member's creditor flag."""
    try:
        member = Member.objects.select_for_update().get(id=member_id)
    except Member.DoesNotExist:
        raise MemberNotFoundError(f"Member with ID {member_id} not found")

    member.is_creditor = not member.is_creditor
    member.save(update_fields=['is_creditor', 'updated_at'])
    return member


@transaction.atomic
def delete_member(*, member_id: UUID) -> None:
    """
    Delete a member.

    Members with payment history cannot be deleted; deactivate them instead.

    Raises:
        MemberNotFoundError: If member doesn't exist
        MemberHasSharesError: If member still has payment shares
    """
    try:
        member = Member.objects.select_for_update().get(id=member_id)
    except Member.DoesNotExist:
        raise MemberNotFoundError(f"Member with ID {member_id} not found")

    if member.shares.exists():
        raise MemberHasSharesError(
            f"{member.get_display_name()} has payment shares. Deactivate the member instead."
        )

    member.delete()


def search_members(*, query: Optional[str] = None, include_inactive: bool = False) -> list:
    """
    Search members by name or nickname, ignoring Vietnamese diacritics.

    Returns:
        List of Member instances ordered by name
    """
    queryset: QuerySet[Member] = Member.objects.all()
    if not include_inactive:
        queryset = queryset.filter(is_active=True)

    if not query:
        return list(queryset)

    needle = strip_diacritics(query.strip())
    return list(queryset.filter(
        Q(name_normalized__icontains=needle) | Q(nickname_normalized__icontains=needle)
    ))
