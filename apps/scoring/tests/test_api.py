import pytest
from decimal import Decimal
from io import StringIO
from django.core.management import call_command
from django.urls import reverse
from rest_framework import status

from apps.scoring.models import ActionConfig, LiveEvent, Rating, ScoringWeights
from apps.scoring.services import record_event


# =============================================================================
# Live Event Tests
# =============================================================================

@pytest.mark.django_db
class TestLiveEventsApi:
    """Tests for /api/scoring/matches/{id}/live-events/"""

    def test_admin_records_event(self, admin_client, played_match, striker):
        url = reverse('scoring:live-events', kwargs={'match_id': played_match.id})
        response = admin_client.post(url, {
            'type': 'goal',
            'member_id': str(striker.id),
            'minute': 12,
            'second': 30,
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['type'] == 'goal'
        assert LiveEvent.objects.count() == 1

    def test_recording_requires_auth(self, api_client, played_match, striker):
        url = reverse('scoring:live-events', kwargs={'match_id': played_match.id})
        response = api_client.post(url, {'type': 'goal', 'member_id': str(striker.id)}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_unknown_action_stored_unscored(self, admin_client, played_match, striker):
        url = reverse('scoring:live-events', kwargs={'match_id': played_match.id})
        response = admin_client.post(url, {'type': 'bicycle_kick', 'member_id': str(striker.id)}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert LiveEvent.objects.filter(type='bicycle_kick').count() == 1

        stats = admin_client.get(reverse('scoring:live-stats', kwargs={'match_id': played_match.id}))
        assert stats.data['ranking'] == []

    def test_blank_action_rejected(self, admin_client, played_match, striker):
        url = reverse('scoring:live-events', kwargs={'match_id': played_match.id})
        response = admin_client.post(url, {'type': '', 'member_id': str(striker.id)}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not LiveEvent.objects.exists()

    def test_list_is_public(self, api_client, played_match, striker):
        record_event(match_id=played_match.id, type='goal', member_id=striker.id)

        url = reverse('scoring:live-events', kwargs={'match_id': played_match.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1

    def test_undo_event(self, admin_client, played_match, striker):
        event = record_event(match_id=played_match.id, type='goal', member_id=striker.id)

        url = reverse('scoring:live-event-detail', kwargs={'match_id': played_match.id, 'event_id': event.id})
        response = admin_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not LiveEvent.objects.exists()

    def test_stats(self, api_client, played_match, striker, keeper):
        for kind in ('goal', 'goal', 'yellow'):
            record_event(match_id=played_match.id, type=kind, member_id=striker.id)
        record_event(match_id=played_match.id, type='save_gk', member_id=keeper.id)

        url = reverse('scoring:live-stats', kwargs={'match_id': played_match.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        top = response.data['ranking'][0]
        assert top['memberId'] == str(striker.id)
        assert top['primaryScore'] == 3.5
        assert top['medal'] == 'gold'
        assert response.data['ranking'][1]['medal'] == 'silver'
        assert response.data['teamGoals'] == {'A': 2}


# =============================================================================
# Rating Tests
# =============================================================================

@pytest.mark.django_db
class TestRatingsApi:

    def test_submit_direct_ratings(self, api_client, played_match, striker, keeper):
        url = reverse('scoring:match-ratings', kwargs={'match_id': played_match.id})
        response = api_client.post(url, {
            'ratedByMemberId': str(striker.id),
            'playerRatings': [{'memberId': str(keeper.id), 'score': 4}],
            'mvpPlayerId': str(keeper.id),
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['players'][0]['averageScore'] == 4.0
        assert Rating.objects.count() == 1

    def test_score_out_of_range(self, api_client, played_match, striker, keeper):
        url = reverse('scoring:match-ratings', kwargs={'match_id': played_match.id})
        response = api_client.post(url, {
            'ratedByMemberId': str(striker.id),
            'playerRatings': [{'memberId': str(keeper.id), 'score': 12}],
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not Rating.objects.exists()

    def test_admin_rating_upsert(self, admin_client, played_match, striker):
        url = reverse('scoring:admin-ratings', kwargs={'match_id': played_match.id})
        response = admin_client.put(url, {'member_id': str(striker.id), 'score': '3.5'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(response.data['score']) == Decimal('3.5')

        listed = admin_client.get(url)
        assert len(listed.data) == 1

    def test_admin_ratings_require_auth(self, api_client, played_match):
        url = reverse('scoring:admin-ratings', kwargs={'match_id': played_match.id})

        assert api_client.get(url).status_code == status.HTTP_401_UNAUTHORIZED

    def test_scoreboard(self, api_client, played_match):
        url = reverse('scoring:scoreboard', kwargs={'match_id': played_match.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['players']) == 3

    def test_leaders(self, api_client):
        response = api_client.get(reverse('scoring:leaders'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'topRatings': [], 'topMvp': []}


# =============================================================================
# Configuration Tests
# =============================================================================

@pytest.mark.django_db
class TestScoringConfigApi:

    def test_action_configs_public_read(self, api_client):
        ActionConfig.objects.create(key='goal', label='Bàn thắng', weight=Decimal('2'))

        response = api_client.get(reverse('scoring:action-config-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['key'] == 'goal'

    def test_action_config_create(self, admin_client):
        response = admin_client.post(reverse('scoring:action-config-list'), {
            'key': 'header',
            'label': 'Đánh đầu',
            'kind': 'ok',
            'weight': '1.00',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert ActionConfig.objects.filter(key='header').exists()

    def test_weights_default(self, api_client):
        response = api_client.get(reverse('scoring:weights'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['goal'] == '2'

    def test_save_weights(self, admin_client):
        payload = {
            'goal': '3', 'assist': '1.5', 'save_gk': '1.2', 'tackle': '0.8', 'dribble': '0.5',
            'note': '0.3', 'yellow': '0.5', 'red': '1', 'foul': '0.2',
            'extras': [{'key': 'header', 'weight': '1', 'label': 'Đánh đầu'}],
        }
        response = admin_client.put(reverse('scoring:weights'), payload, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(ScoringWeights.objects.get().weights['goal']) == Decimal('3')
        assert response.data['extras'][0]['key'] == 'header'

    def test_snapshot_from_configs(self, admin_client):
        ActionConfig.objects.create(key='goal', label='Bàn thắng', weight=Decimal('4'))

        response = admin_client.put(reverse('scoring:weights'), {}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(response.data['goal']) == Decimal('4')

    def test_save_weights_requires_auth(self, api_client):
        response = api_client.put(reverse('scoring:weights'), {}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestSeedCommand:

    def test_seed_action_configs(self):
        out = StringIO()
        call_command('seed_action_configs', stdout=out)

        assert ActionConfig.objects.count() == 9
        assert 'Seeded 9 new' in out.getvalue()

    def test_seed_dry_run(self):
        out = StringIO()
        call_command('seed_action_configs', '--dry-run', stdout=out)

        assert not ActionConfig.objects.exists()
        assert 'dry-run' in out.getvalue()
