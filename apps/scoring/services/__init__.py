"""
Scoring app services layer.

Services contain business logic and orchestrate operations across models.
"""

from .exceptions import (
    ScoringServiceError,
    LiveEventNotFoundError,
    UnknownActionError,
    NotInMatchError,
    InvalidRatingError,
)

from .live_stats import (
    DEFAULT_ACTION_WEIGHTS,
    LiveEventRecord,
    ExtraAction,
    ActionWeights,
    AggregatedStat,
    aggregate_live_stats,
    rank_stats,
    assign_medals,
    team_goal_tally,
)

from .action_configs import (
    build_action_weights,
    load_action_weights,
    save_scoring_weights,
    snapshot_configured_weights,
    list_action_keys,
    seed_default_action_configs,
)

from .live_events import (
    record_event,
    delete_event,
    get_match_events,
    get_match_live_stats,
)

from .ratings import (
    validate_rating_payload,
    record_rating_payload,
    submit_ratings,
    summarize_player_ratings,
    upsert_admin_rating,
    build_scoreboard,
    get_overall_leaders,
)


__all__ = [
    # Exceptions
    'ScoringServiceError',
    'LiveEventNotFoundError',
    'UnknownActionError',
    'NotInMatchError',
    'InvalidRatingError',

    # Live Stats
    'DEFAULT_ACTION_WEIGHTS',
    'LiveEventRecord',
    'ExtraAction',
    'ActionWeights',
    'AggregatedStat',
    'aggregate_live_stats',
    'rank_stats',
    'assign_medals',
    'team_goal_tally',

    # Action Configs
    'build_action_weights',
    'load_action_weights',
    'save_scoring_weights',
    'snapshot_configured_weights',
    'list_action_keys',
    'seed_default_action_configs',

    # Live Events
    'record_event',
    'delete_event',
    'get_match_events',
    'get_match_live_stats',

    # Ratings
    'validate_rating_payload',
    'record_rating_payload',
    'submit_ratings',
    'summarize_player_ratings',
    'upsert_admin_rating',
    'build_scoreboard',
    'get_overall_leaders',
]
