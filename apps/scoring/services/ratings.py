"""
Rating service.

Peer ratings (0-10 per player plus one MVP vote) are submitted by members
after a match, either together with a payment or directly. The admin adds
their own 0-5 score per player; the scoreboard combines both with the live
stats.
"""

import logging
from collections import OrderedDict
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional
from uuid import UUID

from django.db import transaction

from apps.matches.models import Match, MatchStatus, RosterEntry
from apps.matches.services.exceptions import MatchNotFoundError
from apps.members.models import Member
from apps.scoring.models import Rating, RatingChannel, AdminRating, LiveEvent

from .action_configs import load_action_weights
from .exceptions import InvalidRatingError, NotInMatchError
from .live_stats import aggregate_live_stats, assign_medals, team_goal_tally


logger = logging.getLogger(__name__)

MAX_PEER_SCORE = Decimal('10')
MAX_PEER_AVERAGE = Decimal('5')
MAX_ADMIN_SCORE = Decimal('5')
MAX_TOTAL_SCORE = Decimal('10')

TWO_PLACES = Decimal('0.01')


def _clamp(value: Decimal, low: Decimal, high: Decimal) -> Decimal:
    return max(low, min(high, value))


def _get_match(match_id) -> Match:
    try:
        return Match.objects.get(id=match_id, is_deleted=False)
    except (Match.DoesNotExist, ValueError):
        raise MatchNotFoundError(f"Match with ID {match_id} not found")


def validate_rating_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Check a rating payload and normalize its scores.

    Expected shape::

        {"matchId": "...", "ratedByMemberId": "...", "mvpPlayerId": "...",
         "playerRatings": [{"memberId": "...", "score": 7.5}, ...]}

    Raises:
        InvalidRatingError: If a field is missing or a score is outside 0-10
    """
    if not payload.get('matchId') or not payload.get('ratedByMemberId'):
        raise InvalidRatingError("matchId and ratedByMemberId are required")

    player_ratings = []
    for item in payload.get('playerRatings') or []:
        try:
            score = Decimal(str(item['score']))
        except (KeyError, TypeError, ArithmeticError):
            raise InvalidRatingError("Each player rating needs a numeric score")
        if not item.get('memberId'):
            raise InvalidRatingError("Each player rating needs a memberId")
        if not score.is_finite() or score < 0 or score > MAX_PEER_SCORE:
            raise InvalidRatingError(f"Scores must be between 0 and {MAX_PEER_SCORE}")
        player_ratings.append({'memberId': str(item['memberId']), 'score': float(score)})

    return {
        'matchId': str(payload['matchId']),
        'ratedByMemberId': str(payload['ratedByMemberId']),
        'playerRatings': player_ratings,
        'mvpPlayerId': str(payload['mvpPlayerId']) if payload.get('mvpPlayerId') else None,
    }


def record_rating_payload(
    *,
    payload: Dict[str, Any],
    channel: str,
    payment_request=None
) -> Rating:
    """
    Write one peer rating.

    Raises:
        InvalidRatingError: If the payload is malformed
        MatchNotFoundError: If the rated match doesn't exist
    """
    data = validate_rating_payload(payload)
    match = _get_match(data['matchId'])

    rated_by = Member.objects.filter(id=data['ratedByMemberId']).first()
    mvp = Member.objects.filter(id=data['mvpPlayerId']).first() if data['mvpPlayerId'] else None

    rating = Rating.objects.create(
        match=match,
        rated_by=rated_by,
        player_ratings=data['playerRatings'],
        mvp=mvp,
        channel=channel,
        payment_request=payment_request,
    )
    logger.info("Rating recorded for match %s via %s", match.id, channel)
    return rating


@transaction.atomic
def submit_ratings(
    *,
    ratings: List[Dict[str, Any]],
    channel: str = RatingChannel.DIRECT_CLIENT
) -> List[Rating]:
    """
    Write peer ratings directly (no payment involved).

    Either every payload is written or none is.
    """
    return [record_rating_payload(payload=payload, channel=channel) for payload in ratings]


def _peer_scores(ratings) -> Dict[str, Dict[str, Any]]:
    by_player: Dict[str, Dict[str, Any]] = OrderedDict()
    for rating in ratings:
        voter = rating.rated_by.get_display_name() if rating.rated_by else ''
        for item in rating.player_ratings or []:
            entry = by_player.setdefault(str(item['memberId']), {
                'total': Decimal('0'),
                'count': 0,
                'details': [],
            })
            score = Decimal(str(item['score']))
            entry['total'] += score
            entry['count'] += 1
            entry['details'].append({'ratedBy': voter, 'score': float(score)})
    return by_player


def _mvp_votes(ratings) -> List[Dict[str, Any]]:
    votes: Dict[str, Dict[str, Any]] = OrderedDict()
    for rating in ratings:
        if not rating.mvp_id:
            continue
        entry = votes.setdefault(str(rating.mvp_id), {'memberId': str(rating.mvp_id), 'voteCount': 0, 'votedBy': []})
        entry['voteCount'] += 1
        if rating.rated_by:
            entry['votedBy'].append(rating.rated_by.get_display_name())
    return sorted(votes.values(), key=lambda v: v['voteCount'], reverse=True)


def summarize_player_ratings(*, match_id: UUID) -> dict:
    """
    Peer ratings of a match.

    Returns:
        dict: ``players`` (memberId, averageScore capped at 5, ratingCount,
        details) best first and ``mvp`` (memberId, voteCount, votedBy)
        most voted first

    Raises:
        MatchNotFoundError: If match doesn't exist
    """
    match = _get_match(match_id)
    ratings = list(match.ratings.select_related('rated_by'))

    players = []
    for member_id, entry in _peer_scores(ratings).items():
        average = min(MAX_PEER_AVERAGE, entry['total'] / entry['count'])
        players.append({
            'memberId': member_id,
            'averageScore': float(average.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)),
            'ratingCount': entry['count'],
            'details': entry['details'],
        })
    players.sort(key=lambda p: p['averageScore'], reverse=True)

    return {'players': players, 'mvp': _mvp_votes(ratings)}


@transaction.atomic
def upsert_admin_rating(
    *,
    match_id: UUID,
    member_id: UUID,
    score: Decimal,
    notes: str = ''
) -> AdminRating:
    """
    Set the admin score of a player for a match (clamped to 0-5).

    Raises:
        MatchNotFoundError: If match doesn't exist
        NotInMatchError: If member isn't on the match roster
    """
    match = _get_match(match_id)
    if not RosterEntry.objects.filter(team__match=match, member_id=member_id).exists():
        raise NotInMatchError("Member did not play in this match")

    value = _clamp(Decimal(str(score)), Decimal('0'), MAX_ADMIN_SCORE).quantize(
        TWO_PLACES, rounding=ROUND_HALF_UP
    )
    rating, _ = AdminRating.objects.update_or_create(
        match=match,
        member_id=member_id,
        defaults={'score': value, 'notes': notes},
    )
    return rating


def build_scoreboard(*, match_id: UUID) -> dict:
    """
    Combined scores of everybody on the match roster.

    peer (average, 0-5) + admin (0-5), capped at 10, alongside the live
    stat and medal of each player.

    Returns:
        dict: ``players`` (roster order), ``team_goals``

    Raises:
        MatchNotFoundError: If match doesn't exist
    """
    match = _get_match(match_id)

    roster = list(
        RosterEntry.objects
        .filter(team__match=match)
        .select_related('team', 'member')
        .order_by('team__code', 'position')
    )
    peer = _peer_scores(match.ratings.select_related('rated_by'))
    admin = {str(r.member_id): r for r in match.admin_ratings.all()}

    events = list(LiveEvent.objects.filter(match=match).only('member', 'type'))
    stats = aggregate_live_stats(events, load_action_weights())
    medals = assign_medals(stats.values())

    players = []
    for entry in roster:
        key = str(entry.member_id)
        peer_entry = peer.get(key)
        peer_score = Decimal('0')
        if peer_entry:
            peer_score = _clamp(peer_entry['total'] / peer_entry['count'], Decimal('0'), MAX_PEER_AVERAGE)
        admin_rating = admin.get(key)
        admin_score = _clamp(admin_rating.score, Decimal('0'), MAX_ADMIN_SCORE) if admin_rating else Decimal('0')
        stat = stats.get(entry.member_id)

        players.append({
            'memberId': key,
            'name': entry.member.get_display_name(),
            'team': entry.team.code,
            'peerScore': float(peer_score.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)),
            'adminScore': float(admin_score),
            'total': float(min(peer_score + admin_score, MAX_TOTAL_SCORE).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)),
            'ratingCount': peer_entry['count'] if peer_entry else 0,
            'hasPeerScore': peer_entry is not None,
            'hasAdminScore': admin_rating is not None,
            'adminNotes': admin_rating.notes if admin_rating else '',
            'liveStat': stat.to_dict() if stat else None,
            'medal': medals.get(entry.member_id, ''),
        })

    return {
        'players': players,
        'team_goals': team_goal_tally(events, {e.member_id: e.team.code for e in roster}),
    }


def get_overall_leaders(*, limit: int = 3) -> dict:
    """
    Best average peer scores and most MVP votes across published matches.

    Returns:
        dict: ``topRatings`` and ``topMvp``, ``limit`` entries each
    """
    ratings = list(
        Rating.objects
        .filter(match__status=MatchStatus.PUBLISHED, match__is_deleted=False)
        .select_related('rated_by')
    )

    names = {str(m.id): m.get_display_name() for m in Member.objects.all()}

    top_ratings = []
    for member_id, entry in _peer_scores(ratings).items():
        average = entry['total'] / entry['count']
        top_ratings.append({
            'memberId': member_id,
            'memberName': names.get(member_id, ''),
            'averageScore': float(average.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)),
        })
    top_ratings.sort(key=lambda r: r['averageScore'], reverse=True)

    top_mvp = [
        {'memberId': vote['memberId'], 'memberName': names.get(vote['memberId'], ''), 'voteCount': vote['voteCount']}
        for vote in _mvp_votes(ratings)
    ]

    return {'topRatings': top_ratings[:limit], 'topMvp': top_mvp[:limit]}
