"""
Live event service.

Events are append-only; deleting one is the undo of the notes screen.
"""

import logging
from typing import Optional
from uuid import UUID

from apps.matches.models import Match
from apps.matches.services.exceptions import MatchNotFoundError, UnknownMemberError
from apps.members.models import Member
from apps.scoring.models import LiveEvent

from .action_configs import list_action_keys, load_action_weights
from .exceptions import LiveEventNotFoundError, UnknownActionError
from .live_stats import aggregate_live_stats, assign_medals, rank_stats, team_goal_tally


logger = logging.getLogger(__name__)


def _get_match(match_id: UUID) -> Match:
    try:
        return Match.objects.get(id=match_id, is_deleted=False)
    except (Match.DoesNotExist, ValueError):
        raise MatchNotFoundError(f"Match with ID {match_id} not found")


def record_event(
    *,
    match_id: UUID,
    type: str,
    member_id: Optional[UUID] = None,
    minute: Optional[int] = None,
    second: Optional[int] = None,
    note: str = ''
) -> LiveEvent:
    """
    Append a live event to a match.

    Raises:
        MatchNotFoundError: If match doesn't exist
        UnknownMemberError: If member_id doesn't exist
        UnknownActionError: If type is empty

    Types that are not a current action key are stored anyway; the
    aggregator leaves them unscored.
    """
    match = _get_match(match_id)

    type = (type or '').strip()
    if not type:
        raise UnknownActionError("Action type is required")
    if type not in list_action_keys():
        logger.info("Storing unscored action '%s' in match %s", type, match.id)

    if member_id is not None and not Member.objects.filter(id=member_id).exists():
        raise UnknownMemberError(f"Member with ID {member_id} not found")

    event = LiveEvent.objects.create(
        match=match,
        member_id=member_id,
        type=type,
        minute=minute,
        second=second,
        note=note,
    )
    logger.debug("Recorded %s for member %s in match %s", type, member_id, match.id)
    return event


def delete_event(*, match_id: UUID, event_id: UUID) -> None:
    """
    Raises:
        LiveEventNotFoundError: If the event doesn't belong to the match
    """
    deleted, _ = LiveEvent.objects.filter(id=event_id, match_id=match_id).delete()
    if not deleted:
        raise LiveEventNotFoundError(f"Live event {event_id} not found")


def get_match_events(*, match_id: UUID):
    return LiveEvent.objects.filter(match_id=match_id).select_related('member').order_by('created_at')


def get_match_live_stats(*, match_id: UUID) -> dict:
    """
    Aggregated live stats of a match.

    Returns:
        dict: ``ranking`` (list of AggregatedStat, best first), ``medals``
        (member_id -> medal), ``team_goals`` (team code -> goals) and
        ``weights`` (ActionWeights used)

    Raises:
        MatchNotFoundError: If match doesn't exist
    """
    match = _get_match(match_id)
    events = list(LiveEvent.objects.filter(match=match).only('member', 'type'))
    weights = load_action_weights()

    stats = aggregate_live_stats(events, weights)
    return {
        'ranking': rank_stats(stats.values()),
        'medals': assign_medals(stats.values()),
        'team_goals': team_goal_tally(events, match.get_member_team_map()),
        'weights': weights,
    }
