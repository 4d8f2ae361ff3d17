"""
Proportional cost allocation for a match.

Splits the field cost across teams by percentage and, inside each team,
across members. Members may carry a fixed percent of their team's pocket;
everybody else splits what is left equally in whole currency units.

The algorithm guarantees the returned amounts sum exactly to the total:
    1. team_total = total * team.percent / 100 (may be fractional)
    2. Fixed members get round_half_up(team_total * percent / 100)
    3. remaining = team_total - sum(fixed amounts)
    4. Regular members get floor(remaining / n); the leftover is handed out
       one unit at a time to the first regular members in roster order
    5. Whatever is still off from the total after all teams is added to the
       last member in the result, or to the last member that can take it
       without going below zero

Rounding (half-up for fixed members, floor + remainder for regular ones)
can leave a cross-team difference of a few units; step 5 absorbs it in one
place on purpose so that only one member's share deviates.

Example:
    100000 VND, one team at 100%, three regular members::

        >>> allocate(total_amount=100000, teams=[
        ...     TeamAllocation(team_id='A', percent=Decimal('100'), members=[
        ...         MemberAllocation('m1'), MemberAllocation('m2'), MemberAllocation('m3'),
        ...     ]),
        ... ])
        {'m1': 33334, 'm2': 33333, 'm3': 33333}

Everything here is pure: no database access, no validation, no exceptions.
Callers validate percentages and amounts before invoking it.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_FLOOR, ROUND_CEILING, ROUND_HALF_UP
from typing import Any, Dict, Hashable, List, Optional, Sequence


HUNDRED = Decimal(100)


@dataclass(frozen=True)
class MemberAllocation:
    """A roster entry as seen by the allocator."""

    member_id: Hashable
    percent: Optional[Decimal] = None
    reason: str = ''
    is_exempt: bool = False

    @property
    def is_fixed(self) -> bool:
        return self.percent is not None and Decimal(self.percent) > 0


@dataclass(frozen=True)
class TeamAllocation:
    """A team with its share of the total and its ordered roster."""

    team_id: Hashable
    percent: Decimal
    members: Sequence[MemberAllocation] = field(default_factory=tuple)


@dataclass
class AllocatedShare:
    """Amount owed by one member plus how it was derived."""

    member_id: Hashable
    team_id: Hashable
    amount: int
    team_total: Decimal
    total_fixed_amount: int
    remaining_amount: Decimal
    regular_member_count: int
    member_percent: Optional[Decimal] = None
    reason: str = ''

    def calculation(self) -> Dict[str, Any]:
        """JSON-friendly breakdown stored on the payment share."""
        details = {
            'teamTotal': float(self.team_total),
            'totalFixedAmount': self.total_fixed_amount,
            'remainingAmount': float(self.remaining_amount),
            'regularMemberCount': self.regular_member_count,
        }
        if self.member_percent is not None:
            details['memberPercent'] = float(self.member_percent)
        if self.reason:
            details['reason'] = self.reason
        return details


def _round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _split_team(total_amount: int, team: TeamAllocation) -> List[AllocatedShare]:
    team_total = Decimal(total_amount) * Decimal(team.percent) / HUNDRED

    payable = [m for m in team.members if not m.is_exempt]
    fixed = [m for m in payable if m.is_fixed]
    regular = [m for m in payable if not m.is_fixed]

    fixed_amounts = {}
    total_fixed_amount = 0
    for member in fixed:
        amount = _round_half_up(team_total * Decimal(member.percent) / HUNDRED)
        fixed_amounts[member.member_id] = amount
        total_fixed_amount += amount

    remaining = team_total - total_fixed_amount

    regular_amounts = {}
    if regular:
        if remaining >= 0:
            count = len(regular)
            base = int((remaining / count).to_integral_value(rounding=ROUND_FLOOR))
            # A fractional leftover still earns one unit; the final
            # correction takes it back from the last member.
            leftover = int((remaining - base * count).to_integral_value(rounding=ROUND_CEILING))
            for index, member in enumerate(regular):
                regular_amounts[member.member_id] = base + (1 if index < leftover else 0)
        else:
            # Fixed overrides ate more than the pocket.
            for member in regular:
                regular_amounts[member.member_id] = 0

    shares = []
    for member in payable:
        if member.is_fixed:
            amount = fixed_amounts[member.member_id]
        else:
            amount = regular_amounts[member.member_id]
        shares.append(AllocatedShare(
            member_id=member.member_id,
            team_id=team.team_id,
            amount=amount,
            team_total=team_total,
            total_fixed_amount=total_fixed_amount,
            remaining_amount=remaining,
            regular_member_count=len(regular),
            member_percent=Decimal(member.percent) if member.is_fixed else None,
            reason=member.reason,
        ))
    return shares


def _absorb_difference(shares: List[AllocatedShare], diff: int) -> None:
    """Apply diff to the last share that stays non-negative with it."""
    for share in reversed(shares):
        if share.amount + diff >= 0:
            share.amount += diff
            return

    # No single share can take a negative diff; drain from the end
    for share in reversed(shares):
        taken = min(share.amount, -diff)
        share.amount -= taken
        diff += taken
        if diff == 0:
            return


def allocate_with_breakdown(*, total_amount: int, teams: Sequence[TeamAllocation]) -> List[AllocatedShare]:
    """
    Allocate the total across teams and members, keeping the breakdown.

    Args:
        total_amount: Total match cost in whole currency units
        teams: Teams in display order, each with its ordered roster

    Returns:
        List of AllocatedShare in team order then roster order. Exempt
        members are left out. Amounts sum exactly to total_amount and none
        is negative.
    """
    shares: List[AllocatedShare] = []
    for team in teams:
        if not team.members:
            continue
        shares.extend(_split_team(total_amount, team))

    if shares:
        diff = total_amount - sum(share.amount for share in shares)
        if diff != 0:
            _absorb_difference(shares, diff)

    return shares


def allocate(*, total_amount: int, teams: Sequence[TeamAllocation]) -> Dict[Hashable, int]:
    """
    Allocate the total and return only the amount owed per member.

    Returns:
        Dict of member_id -> amount, in team order then roster order
    """
    return {
        share.member_id: share.amount
        for share in allocate_with_breakdown(total_amount=total_amount, teams=teams)
    }
