"""
Service layer unit tests for scoring app.

Tests cover:
- Live event recording and aggregation
- Action configs and the weight snapshot
- Peer ratings, admin ratings and the scoreboard
"""

import pytest
from decimal import Decimal
from uuid import uuid4

from apps.matches.services.exceptions import MatchNotFoundError, UnknownMemberError
from apps.scoring.models import ActionConfig, ActionKind, ScoringWeights, Rating, RatingChannel, LiveEvent
from apps.scoring.services import (
    ActionWeights,
    record_event,
    delete_event,
    get_match_live_stats,
    load_action_weights,
    save_scoring_weights,
    snapshot_configured_weights,
    seed_default_action_configs,
    list_action_keys,
    validate_rating_payload,
    submit_ratings,
    summarize_player_ratings,
    upsert_admin_rating,
    build_scoreboard,
    get_overall_leaders,
)
from apps.scoring.services.exceptions import (
    LiveEventNotFoundError,
    UnknownActionError,
    NotInMatchError,
    InvalidRatingError,
)


def rating_payload(match, rated_by, scores, mvp=None):
    return {
        'matchId': match.id,
        'ratedByMemberId': rated_by.id,
        'playerRatings': [{'memberId': member.id, 'score': score} for member, score in scores],
        'mvpPlayerId': mvp.id if mvp else None,
    }


# =============================================================================
# Live Event Tests
# =============================================================================

@pytest.mark.django_db
class TestLiveEvents:

    def test_record_and_aggregate(self, played_match, striker):
        for kind in ('goal', 'goal', 'yellow'):
            record_event(match_id=played_match.id, type=kind, member_id=striker.id)

        result = get_match_live_stats(match_id=played_match.id)

        top = result['ranking'][0]
        assert top.member_id == striker.id
        assert top.primary_score == Decimal('3.5')
        assert result['medals'] == {striker.id: 'gold'}
        assert result['team_goals'] == {'A': 2}

    def test_unknown_action_stored_but_not_scored(self, played_match, striker):
        event = record_event(match_id=played_match.id, type='bicycle_kick', member_id=striker.id)

        assert LiveEvent.objects.filter(id=event.id, type='bicycle_kick').exists()
        result = get_match_live_stats(match_id=played_match.id)
        assert result['ranking'] == []
        assert result['medals'] == {}

    def test_blank_action_rejected(self, played_match, striker):
        with pytest.raises(UnknownActionError):
            record_event(match_id=played_match.id, type='  ', member_id=striker.id)

    def test_configured_action_accepted(self, played_match, striker):
        ActionConfig.objects.create(key='header', label='Đánh đầu', weight=Decimal('1'))

        event = record_event(match_id=played_match.id, type='header', member_id=striker.id)

        assert event.type == 'header'
        assert 'header' in list_action_keys()

    def test_unknown_member_rejected(self, played_match):
        with pytest.raises(UnknownMemberError):
            record_event(match_id=played_match.id, type='goal', member_id=uuid4())

    def test_event_without_member(self, played_match):
        event = record_event(match_id=played_match.id, type='note', note='Trời mưa')

        assert event.member is None
        assert get_match_live_stats(match_id=played_match.id)['ranking'] == []

    def test_unknown_match(self):
        with pytest.raises(MatchNotFoundError):
            record_event(match_id=uuid4(), type='goal')

    def test_delete_event(self, played_match, striker):
        event = record_event(match_id=played_match.id, type='goal', member_id=striker.id)

        delete_event(match_id=played_match.id, event_id=event.id)

        assert not LiveEvent.objects.exists()
        with pytest.raises(LiveEventNotFoundError):
            delete_event(match_id=played_match.id, event_id=event.id)


# =============================================================================
# Action Config Tests
# =============================================================================

@pytest.mark.django_db
class TestActionConfigs:

    def test_seed_creates_nine_actions(self):
        created, updated = seed_default_action_configs()

        assert len(created) == 9
        assert updated == []
        assert ActionConfig.objects.get(key='yellow').kind == ActionKind.BAD
        assert ActionConfig.objects.get(key='goal').weight == Decimal('2')

    def test_seed_twice_updates(self):
        seed_default_action_configs()
        ActionConfig.objects.filter(key='goal').update(weight=Decimal('5'))

        created, updated = seed_default_action_configs()

        assert created == []
        assert len(updated) == 9
        assert ActionConfig.objects.get(key='goal').weight == Decimal('2')

    def test_seed_dry_run_writes_nothing(self):
        created, _ = seed_default_action_configs(dry_run=True)

        assert len(created) == 9
        assert not ActionConfig.objects.exists()

    def test_defaults_without_configs(self):
        assert load_action_weights() == ActionWeights()

    def test_weights_from_configs(self):
        ActionConfig.objects.create(key='goal', label='Bàn thắng', weight=Decimal('3'))
        ActionConfig.objects.create(key='header', label='Đánh đầu', weight=Decimal('1'))
        ActionConfig.objects.create(key='clap', label='Vỗ tay')

        weights = load_action_weights()

        assert weights.goal == Decimal('3')
        assert [extra.key for extra in weights.extras] == ['header']

    def test_snapshot_wins_over_configs(self):
        save_scoring_weights(weights=ActionWeights(goal=Decimal('10')))
        ActionConfig.objects.create(key='goal', label='Bàn thắng', weight=Decimal('3'))

        assert load_action_weights().goal == Decimal('10')

    def test_snapshot_configured_weights(self):
        ActionConfig.objects.create(key='assist', label='Kiến tạo', weight=Decimal('2.5'))

        snapshot = snapshot_configured_weights()

        assert Decimal(snapshot.weights['assist']) == Decimal('2.5')
        assert ScoringWeights.objects.count() == 1


# =============================================================================
# Rating Tests
# =============================================================================

@pytest.mark.django_db
class TestRatings:

    def test_validate_rejects_out_of_range(self, played_match, striker, keeper):
        with pytest.raises(InvalidRatingError):
            validate_rating_payload(rating_payload(played_match, striker, [(keeper, 11)]))

    def test_validate_requires_match(self, striker):
        with pytest.raises(InvalidRatingError):
            validate_rating_payload({'ratedByMemberId': striker.id})

    def test_validate_rejects_nan(self, played_match, striker, keeper):
        with pytest.raises(InvalidRatingError):
            validate_rating_payload(rating_payload(played_match, striker, [(keeper, 'NaN')]))

    def test_submit_direct(self, played_match, striker, keeper):
        ratings = submit_ratings(ratings=[rating_payload(played_match, striker, [(keeper, 8)], mvp=keeper)])

        assert ratings[0].channel == RatingChannel.DIRECT_CLIENT
        assert ratings[0].mvp == keeper

    def test_submit_is_all_or_nothing(self, played_match, striker, keeper):
        good = rating_payload(played_match, striker, [(keeper, 8)])
        bad = rating_payload(played_match, keeper, [(striker, 20)])

        with pytest.raises(InvalidRatingError):
            submit_ratings(ratings=[good, bad])
        assert not Rating.objects.exists()

    def test_summary_caps_average(self, played_match, striker, keeper, defender):
        submit_ratings(ratings=[
            rating_payload(played_match, striker, [(keeper, 8), (defender, 4)], mvp=keeper),
            rating_payload(played_match, defender, [(keeper, 6)], mvp=keeper),
        ])

        summary = summarize_player_ratings(match_id=played_match.id)

        by_member = {p['memberId']: p for p in summary['players']}
        assert by_member[str(keeper.id)]['averageScore'] == 5.0
        assert by_member[str(keeper.id)]['ratingCount'] == 2
        assert by_member[str(defender.id)]['averageScore'] == 4.0
        mvp = summary['mvp'][0]
        assert mvp['memberId'] == str(keeper.id)
        assert mvp['voteCount'] == 2
        assert sorted(mvp['votedBy']) == ['Huy', 'Hải']

    def test_admin_rating_clamped(self, played_match, striker):
        rating = upsert_admin_rating(match_id=played_match.id, member_id=striker.id, score=Decimal('7'))

        assert rating.score == Decimal('5')

    def test_admin_rating_updates(self, played_match, striker):
        upsert_admin_rating(match_id=played_match.id, member_id=striker.id, score=Decimal('3'))
        rating = upsert_admin_rating(match_id=played_match.id, member_id=striker.id, score=Decimal('4.5'), notes='Tốt')

        assert rating.score == Decimal('4.5')
        assert played_match.admin_ratings.count() == 1

    def test_admin_rating_needs_roster(self, played_match):
        from apps.members.models import Member
        outsider = Member.objects.create(name='Khán giả')

        with pytest.raises(NotInMatchError):
            upsert_admin_rating(match_id=played_match.id, member_id=outsider.id, score=Decimal('3'))


# =============================================================================
# Scoreboard Tests
# =============================================================================

@pytest.mark.django_db
class TestScoreboard:

    def test_scoreboard_combines_scores(self, played_match, striker, keeper, defender):
        submit_ratings(ratings=[rating_payload(played_match, keeper, [(striker, 4)])])
        upsert_admin_rating(match_id=played_match.id, member_id=striker.id, score=Decimal('4.5'))
        record_event(match_id=played_match.id, type='goal', member_id=striker.id)

        board = build_scoreboard(match_id=played_match.id)

        rows = {row['memberId']: row for row in board['players']}
        assert len(rows) == 3
        row = rows[str(striker.id)]
        assert row['peerScore'] == 4.0
        assert row['adminScore'] == 4.5
        assert row['total'] == 8.5
        assert row['team'] == 'A'
        assert row['medal'] == 'gold'
        assert row['liveStat']['goal'] == 1
        assert rows[str(defender.id)]['hasPeerScore'] is False
        assert board['team_goals'] == {'A': 1}

    def test_total_capped_at_ten(self, played_match, striker, keeper):
        submit_ratings(ratings=[rating_payload(played_match, keeper, [(striker, 10)])])
        upsert_admin_rating(match_id=played_match.id, member_id=striker.id, score=Decimal('5'))

        board = build_scoreboard(match_id=played_match.id)

        row = next(r for r in board['players'] if r['memberId'] == str(striker.id))
        assert row['peerScore'] == 5.0
        assert row['total'] == 10.0

    def test_overall_leaders(self, played_match, striker, keeper, defender):
        submit_ratings(ratings=[
            rating_payload(played_match, keeper, [(striker, 9), (defender, 3)], mvp=striker),
        ])

        leaders = get_overall_leaders(limit=1)

        assert leaders['topRatings'] == [{'memberId': str(striker.id), 'memberName': 'Huy', 'averageScore': 9.0}]
        assert leaders['topMvp'][0]['voteCount'] == 1
