"""
Action configuration service.

Keeps the configurable live-note actions and derives the weights the
aggregation engine runs with.
"""

import logging
from decimal import Decimal
from typing import Iterable, List, Tuple

from django.db import transaction

from apps.scoring.models import ActionConfig, ActionKind, ScoringWeights

from .live_stats import ActionWeights, ExtraAction, BUILTIN_TYPES, DEFAULT_ACTION_WEIGHTS


logger = logging.getLogger(__name__)


DEFAULT_ACTION_CONFIGS = [
    {'key': 'goal', 'label': 'Bàn thắng', 'kind': ActionKind.OK,
     'color': 'bg-emerald-100 text-emerald-700', 'order': 1, 'is_negative': False},
    {'key': 'assist', 'label': 'Kiến tạo', 'kind': ActionKind.OK,
     'color': 'bg-blue-100 text-blue-700', 'order': 2, 'is_negative': False},
    {'key': 'save_gk', 'label': 'Cản phá GK', 'kind': ActionKind.OK,
     'color': 'bg-cyan-100 text-cyan-700', 'order': 3, 'is_negative': False},
    {'key': 'tackle', 'label': 'Tackle/Chặn', 'kind': ActionKind.OK,
     'color': 'bg-indigo-100 text-indigo-700', 'order': 4, 'is_negative': False},
    {'key': 'dribble', 'label': 'Qua người', 'kind': ActionKind.OK,
     'color': 'bg-purple-100 text-purple-700', 'order': 5, 'is_negative': False},
    {'key': 'note', 'label': 'Ghi chú', 'kind': ActionKind.OK,
     'color': 'bg-slate-100 text-slate-700', 'order': 6, 'is_negative': False},
    {'key': 'yellow', 'label': 'Thẻ vàng', 'kind': ActionKind.BAD,
     'color': 'bg-amber-100 text-amber-800', 'order': 1, 'is_negative': True},
    {'key': 'red', 'label': 'Thẻ đỏ', 'kind': ActionKind.BAD,
     'color': 'bg-red-100 text-red-700', 'order': 2, 'is_negative': True},
    {'key': 'foul', 'label': 'Phạm lỗi', 'kind': ActionKind.BAD,
     'color': 'bg-slate-100 text-slate-700', 'order': 3, 'is_negative': True},
]


def build_action_weights(configs: Iterable[ActionConfig]) -> ActionWeights:
    """
    Derive weights from action configs.

    Built-in keys override the default weight; any other key becomes a
    custom action. Configs without a weight are skipped.
    """
    builtins = dict(DEFAULT_ACTION_WEIGHTS)
    extras: List[ExtraAction] = []
    for config in configs:
        if config.weight is None:
            continue
        weight = Decimal(config.weight)
        if config.key in BUILTIN_TYPES:
            builtins[config.key] = weight
        else:
            extras.append(ExtraAction(
                key=config.key,
                weight=weight,
                label=config.label,
                is_negative=config.is_negative,
            ))
    return ActionWeights(extras=tuple(extras), **builtins)


def load_action_weights() -> ActionWeights:
    """
    Weights currently in effect.

    The saved snapshot wins; otherwise weights are built from the action
    configs; with neither, the defaults apply.
    """
    snapshot = ScoringWeights.objects.filter(key=ScoringWeights.SINGLETON_KEY).first()
    if snapshot and snapshot.weights:
        return ActionWeights.from_dict(snapshot.weights)

    configs = list(ActionConfig.objects.all())
    if configs:
        return build_action_weights(configs)

    return ActionWeights()


def save_scoring_weights(*, weights: ActionWeights) -> ScoringWeights:
    """Store a snapshot of the weights used for scoring."""
    snapshot, _ = ScoringWeights.objects.update_or_create(
        key=ScoringWeights.SINGLETON_KEY,
        defaults={'weights': weights.to_dict()},
    )
    logger.info("Saved scoring weights snapshot")
    return snapshot


def snapshot_configured_weights() -> ScoringWeights:
    """Freeze the weights derived from the current action configs."""
    return save_scoring_weights(weights=build_action_weights(ActionConfig.objects.all()))


def list_action_keys() -> List[str]:
    """Keys accepted as live event types."""
    keys = list(BUILTIN_TYPES)
    keys.extend(
        key for key in ActionConfig.objects.values_list('key', flat=True)
        if key not in BUILTIN_TYPES
    )
    return keys


@transaction.atomic
def seed_default_action_configs(*, dry_run: bool = False) -> Tuple[List[str], List[str]]:
    """
    Create or update the nine built-in action configs with default weights.

    Existing rows are updated in place; custom actions are left alone.

    Returns:
        tuple: (created keys, updated keys)
    """
    created, updated = [], []
    for seed in DEFAULT_ACTION_CONFIGS:
        key = seed['key']
        exists = ActionConfig.objects.filter(key=key).exists()
        (updated if exists else created).append(key)
        if dry_run:
            continue
        ActionConfig.objects.update_or_create(
            key=key,
            defaults={
                'label': seed['label'],
                'kind': seed['kind'],
                'weight': DEFAULT_ACTION_WEIGHTS[key],
                'color': seed['color'],
                'order': seed['order'],
                'is_negative': seed['is_negative'],
            },
        )

    if not dry_run:
        logger.info("Seeded action configs: %d created, %d updated", len(created), len(updated))
    return created, updated
