"""
Live-event aggregation.

Turns the stream of events noted during a match (goals, assists, cards...)
into per-member counters and a weighted score:

    positive = sum(count * weight) over goal, assist, save_gk, tackle,
               dribble, note and non-negative custom actions
    penalty  = sum(count * weight) over yellow, red, foul and negative
               custom actions
    primary_score = positive - penalty

``total`` counts positive events only. Weights are Decimals so equal scores
compare equal when ranking and handing out medals.

Everything here is pure: callers load the weights (see action_configs) and
pass them explicitly.
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Hashable, Iterable, List, Mapping, NamedTuple, Optional, Tuple


POSITIVE_TYPES = ('goal', 'assist', 'save_gk', 'tackle', 'dribble', 'note')
NEGATIVE_TYPES = ('yellow', 'red', 'foul')
BUILTIN_TYPES = POSITIVE_TYPES + NEGATIVE_TYPES

DEFAULT_ACTION_WEIGHTS = {
    'goal': Decimal('2'),
    'assist': Decimal('1.5'),
    'save_gk': Decimal('1.2'),
    'tackle': Decimal('0.8'),
    'dribble': Decimal('0.5'),
    'note': Decimal('0.3'),
    'yellow': Decimal('0.5'),
    'red': Decimal('1'),
    'foul': Decimal('0.2'),
}

MEDALS = ('gold', 'silver', 'bronze')
OTHERS_TEAM = 'others'


class LiveEventRecord(NamedTuple):
    """Minimal event shape accepted by the aggregator."""

    member_id: Optional[Hashable]
    type: str


@dataclass(frozen=True)
class ExtraAction:
    """A configured custom action with its own weight."""

    key: str
    weight: Decimal
    label: str = ''
    is_negative: bool = False


@dataclass(frozen=True)
class ActionWeights:
    """Weight per built-in action plus any custom actions."""

    goal: Decimal = DEFAULT_ACTION_WEIGHTS['goal']
    assist: Decimal = DEFAULT_ACTION_WEIGHTS['assist']
    save_gk: Decimal = DEFAULT_ACTION_WEIGHTS['save_gk']
    tackle: Decimal = DEFAULT_ACTION_WEIGHTS['tackle']
    dribble: Decimal = DEFAULT_ACTION_WEIGHTS['dribble']
    note: Decimal = DEFAULT_ACTION_WEIGHTS['note']
    yellow: Decimal = DEFAULT_ACTION_WEIGHTS['yellow']
    red: Decimal = DEFAULT_ACTION_WEIGHTS['red']
    foul: Decimal = DEFAULT_ACTION_WEIGHTS['foul']
    extras: Tuple[ExtraAction, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form (weights as strings to keep them exact)."""
        data: Dict[str, Any] = {key: str(getattr(self, key)) for key in BUILTIN_TYPES}
        data['extras'] = [
            {
                'key': extra.key,
                'label': extra.label,
                'weight': str(extra.weight),
                'isNegative': extra.is_negative,
            }
            for extra in self.extras
        ]
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ActionWeights':
        """Inverse of to_dict; missing built-ins fall back to the defaults."""
        values = {
            key: Decimal(str(data[key])) if data.get(key) is not None else DEFAULT_ACTION_WEIGHTS[key]
            for key in BUILTIN_TYPES
        }
        extras = tuple(
            ExtraAction(
                key=extra['key'],
                weight=Decimal(str(extra['weight'])),
                label=extra.get('label', ''),
                is_negative=bool(extra.get('isNegative', False)),
            )
            for extra in data.get('extras') or []
            if extra.get('key') and extra.get('weight') is not None
        )
        return cls(extras=extras, **values)


@dataclass
class AggregatedStat:
    """Counters and score of one member."""

    member_id: Hashable
    goal: int = 0
    assist: int = 0
    yellow: int = 0
    red: int = 0
    foul: int = 0
    save_gk: int = 0
    tackle: int = 0
    dribble: int = 0
    note: int = 0
    extras: Dict[str, int] = field(default_factory=dict)
    total: int = 0
    primary_score: Decimal = Decimal('0')

    def count(self, action: str) -> int:
        if action in BUILTIN_TYPES:
            return getattr(self, action)
        return self.extras.get(action, 0)

    @property
    def has_activity(self) -> bool:
        """Anything worth showing on the scoreboard."""
        return self.total > 0 or self.foul > 0 or self.yellow > 0 or self.red > 0 or self.note > 0

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'memberId': str(self.member_id)}
        data.update({key: getattr(self, key) for key in BUILTIN_TYPES})
        data.update(self.extras)
        data['total'] = self.total
        data['primaryScore'] = float(self.primary_score)
        return data


def _event_fields(event: Any) -> Tuple[Optional[Hashable], Optional[str]]:
    if isinstance(event, Mapping):
        return event.get('member_id'), event.get('type')
    return getattr(event, 'member_id', None), getattr(event, 'type', None)


def _score(stat: AggregatedStat, weights: ActionWeights, extras: Mapping[str, ExtraAction]) -> Decimal:
    positive = sum((getattr(stat, key) * getattr(weights, key) for key in POSITIVE_TYPES), Decimal('0'))
    penalty = sum((getattr(stat, key) * getattr(weights, key) for key in NEGATIVE_TYPES), Decimal('0'))
    for key, extra in extras.items():
        amount = stat.extras.get(key, 0) * extra.weight
        if extra.is_negative:
            penalty += amount
        else:
            positive += amount
    return positive - penalty


def aggregate_live_stats(
    events: Iterable[Any],
    weights: Optional[ActionWeights] = None
) -> Dict[Hashable, AggregatedStat]:
    """
    Aggregate live events into one AggregatedStat per member.

    Args:
        events: Objects (or mappings) with ``member_id`` and ``type``
        weights: Action weights; defaults when omitted

    Returns:
        Dict of member_id -> AggregatedStat in first-seen order. Events
        without a member, or with a type that is neither built-in nor a
        configured custom action, are ignored.
    """
    weights = weights or ActionWeights()
    extras = OrderedDict(
        (extra.key, extra) for extra in weights.extras
        if extra.key and extra.key not in BUILTIN_TYPES
    )

    stats: Dict[Hashable, AggregatedStat] = OrderedDict()
    for event in events:
        member_id, action = _event_fields(event)
        if not member_id:
            continue

        if action in BUILTIN_TYPES:
            stat = stats.setdefault(member_id, AggregatedStat(member_id=member_id))
            setattr(stat, action, getattr(stat, action) + 1)
            is_positive = action in POSITIVE_TYPES
        elif action in extras:
            stat = stats.setdefault(member_id, AggregatedStat(member_id=member_id))
            stat.extras[action] = stat.extras.get(action, 0) + 1
            is_positive = not extras[action].is_negative
        else:
            continue

        if is_positive:
            stat.total += 1

    for stat in stats.values():
        stat.primary_score = _score(stat, weights, extras)

    return stats


def rank_stats(stats: Iterable[AggregatedStat]) -> List[AggregatedStat]:
    """
    Members with activity, best first.

    Sorted by primary_score then total, both descending. Members whose only
    events were negative custom actions don't appear.
    """
    active = [stat for stat in stats if stat.has_activity]
    return sorted(active, key=lambda s: (s.primary_score, s.total), reverse=True)


def assign_medals(stats: Iterable[AggregatedStat]) -> Dict[Hashable, str]:
    """
    Gold, silver and bronze for the three best distinct scores.

    Members with the same primary_score share a medal.

    Returns:
        Dict of member_id -> 'gold' | 'silver' | 'bronze' (medal-less
        members are left out)
    """
    ranked = rank_stats(stats)

    top_scores: List[Decimal] = []
    for stat in ranked:
        if stat.primary_score not in top_scores:
            top_scores.append(stat.primary_score)
        if len(top_scores) == len(MEDALS):
            break

    medal_by_score = dict(zip(top_scores, MEDALS))
    return {
        stat.member_id: medal_by_score[stat.primary_score]
        for stat in ranked
        if stat.primary_score in medal_by_score
    }


def team_goal_tally(events: Iterable[Any], member_team_map: Mapping[Hashable, str]) -> Dict[str, int]:
    """Goals per team code; scorers without a roster entry count under 'others'."""
    tally: Dict[str, int] = OrderedDict()
    for event in events:
        member_id, action = _event_fields(event)
        if action != 'goal':
            continue
        team = member_team_map.get(member_id, OTHERS_TEAM)
        tally[team] = tally.get(team, 0) + 1
    return tally
