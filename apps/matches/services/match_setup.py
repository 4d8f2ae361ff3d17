"""
Match setup service.

Creates matches, finalizes team layouts and generates one payment share per
participating member using the cost allocation engine.
"""

import logging
from datetime import date as date_type
from decimal import Decimal
from typing import List, Optional, Tuple
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.matches.models import Match, MatchStatus, MatchTeam, RosterEntry, LastMatchConfig
from apps.members.models import Member
from apps.payments.models import Share, ShareStatus, PaymentChannel

from .cost_allocation import MemberAllocation, TeamAllocation, allocate_with_breakdown
from .exceptions import (
    MatchNotFoundError,
    MatchClosedError,
    InvalidAmountError,
    InvalidTeamSplitError,
    EmptyTeamError,
    DuplicateMemberError,
    UnknownMemberError,
)


logger = logging.getLogger(__name__)

HUNDRED = Decimal(100)


def get_match_by_id(*, match_id: UUID) -> Match:
    """
    Get a non-deleted match by ID.

    Raises:
        MatchNotFoundError: If match doesn't exist or was deleted
    """
    try:
        return Match.objects.get(id=match_id, is_deleted=False)
    except (Match.DoesNotExist, ValueError):
        raise MatchNotFoundError(f"Match with ID {match_id} not found")


def open_match(*, date: date_type) -> Match:
    """Create a match that accepts attendance sign-ups."""
    match = Match.objects.create(date=date, status=MatchStatus.PENDING)
    logger.info("Opened match %s for %s", match.id, date)
    return match


def validate_team_layout(*, total_amount: int, teams: List[dict]) -> None:
    """
    Check a team layout before any allocation or persistence happens.

    Each team is a dict with ``code``, ``name``, ``percent`` and ``members``
    (list of dicts with ``member_id`` and optional ``percent``/``reason``).

    Raises:
        InvalidAmountError: If total_amount is not positive
        InvalidTeamSplitError: If team percents don't sum to 100, team codes
            repeat, or fixed member percents exceed a team's pocket
        EmptyTeamError: If a team has a percent but no members
        DuplicateMemberError: If a member is in more than one team
    """
    if total_amount is None or total_amount <= 0:
        raise InvalidAmountError("Total amount must be greater than zero")

    if not teams:
        raise InvalidTeamSplitError("At least one team is required")

    codes = [team['code'] for team in teams]
    if len(codes) != len(set(codes)):
        raise InvalidTeamSplitError("Team codes must be unique")

    total_percent = sum(Decimal(team['percent']) for team in teams)
    if total_percent != HUNDRED:
        raise InvalidTeamSplitError(
            f"Team percentages must add up to 100% (got {total_percent}%)"
        )

    seen = set()
    for team in teams:
        members = team.get('members') or []
        if Decimal(team['percent']) > 0 and not members:
            raise EmptyTeamError(f"{team['name']} has {team['percent']}% but no members")

        fixed_percent = sum(
            Decimal(m['percent']) for m in members if m.get('percent') is not None
        )
        if fixed_percent > HUNDRED:
            raise InvalidTeamSplitError(
                f"Fixed member percentages in {team['name']} exceed 100% ({fixed_percent}%)"
            )

        for entry in members:
            if entry['member_id'] in seen:
                raise DuplicateMemberError(
                    f"Member {entry['member_id']} is placed in more than one team"
                )
            seen.add(entry['member_id'])


@transaction.atomic
def create_match(
    *,
    date: date_type,
    total_amount: int,
    teams: List[dict],
    match_id: Optional[UUID] = None
) -> Tuple[Match, List[Share]]:
    """
    Finalize a match and split its cost into payment shares.

    Validates the layout, stores teams and roster, runs the cost allocation
    engine and creates one Share per non-exempt member. Creditors' shares
    are created already PAID (channel CREDITOR).

    Args:
        date: Match date
        total_amount: Total field cost in VND
        teams: Team layout (see validate_team_layout)
        match_id: Existing PENDING match to finalize. A new match is
            created when omitted.

    Returns:
        tuple: (Match, list[Share])

    Raises:
        MatchNotFoundError: If match_id doesn't exist
        MatchClosedError: If match_id is already published
        UnknownMemberError: If the layout references unknown members
        Plus everything validate_team_layout raises.

    Note:
        Wrapped in a database transaction. Nothing is written unless every
        share is created.
    """
    validate_team_layout(total_amount=total_amount, teams=teams)

    member_ids = [entry['member_id'] for team in teams for entry in team.get('members') or []]
    members = Member.objects.in_bulk(member_ids)
    missing = [str(member_id) for member_id in member_ids if member_id not in members]
    if missing:
        raise UnknownMemberError(f"Unknown members: {', '.join(missing)}")

    if match_id:
        try:
            match = Match.objects.select_for_update().get(id=match_id, is_deleted=False)
        except Match.DoesNotExist:
            raise MatchNotFoundError(f"Match with ID {match_id} not found")
        if match.status != MatchStatus.PENDING:
            raise MatchClosedError("Match is already published")
        match.date = date
        match.total_amount = total_amount
        match.team_count = len(teams)
        match.status = MatchStatus.PUBLISHED
        match.save(update_fields=['date', 'total_amount', 'team_count', 'status', 'updated_at'])
    else:
        match = Match.objects.create(
            date=date,
            total_amount=total_amount,
            team_count=len(teams),
            status=MatchStatus.PUBLISHED,
        )

    allocations = []
    for team_data in teams:
        team = MatchTeam.objects.create(
            match=match,
            code=team_data['code'],
            name=team_data['name'],
            percent=Decimal(team_data['percent']),
        )
        roster = []
        for position, entry in enumerate(team_data.get('members') or []):
            percent = entry.get('percent')
            RosterEntry.objects.create(
                team=team,
                member_id=entry['member_id'],
                position=position,
                percent=percent,
                reason=entry.get('reason', ''),
            )
            roster.append(MemberAllocation(
                member_id=entry['member_id'],
                percent=Decimal(percent) if percent is not None else None,
                reason=entry.get('reason', ''),
                is_exempt=members[entry['member_id']].is_exempt_from_payment,
            ))
        allocations.append(TeamAllocation(
            team_id=team.code,
            percent=team.percent,
            members=roster,
        ))

    allocated = allocate_with_breakdown(total_amount=total_amount, teams=allocations)

    now = timezone.now()
    shares = []
    for item in allocated:
        member = members[item.member_id]
        share = Share(
            match=match,
            member=member,
            team_code=item.team_id,
            amount=item.amount,
            calculation=item.calculation(),
        )
        if member.is_creditor:
            share.status = ShareStatus.PAID
            share.channel = PaymentChannel.CREDITOR
            share.paid_at = now
        shares.append(share)
    Share.objects.bulk_create(shares)

    save_last_match_config(teams=teams)

    logger.info(
        "Published match %s: %s VND split into %d shares",
        match.id, total_amount, len(shares)
    )
    return match, shares


@transaction.atomic
def delete_match(*, match_id: UUID) -> None:
    """Soft-delete a match; its shares stop showing up as outstanding."""
    try:
        match = Match.objects.select_for_update().get(id=match_id, is_deleted=False)
    except Match.DoesNotExist:
        raise MatchNotFoundError(f"Match with ID {match_id} not found")

    match.is_deleted = True
    match.save(update_fields=['is_deleted', 'updated_at'])
    logger.info("Deleted match %s", match_id)


def save_last_match_config(*, teams: List[dict]) -> LastMatchConfig:
    """Remember the team layout so the next setup can start from it."""
    config = LastMatchConfig.load()
    config.team_count = len(teams)
    config.teams = [
        {
            'code': team['code'],
            'name': team['name'],
            'percent': float(team['percent']),
            'members': [
                {
                    'id': str(entry['member_id']),
                    'percent': float(entry['percent']) if entry.get('percent') is not None else None,
                    'reason': entry.get('reason', ''),
                }
                for entry in team.get('members') or []
            ],
        }
        for team in teams
    ]
    config.save()
    return config


def get_last_match_config() -> LastMatchConfig:
    """Return the saved layout (empty when no match was set up yet)."""
    return LastMatchConfig.load()
