from drf_spectacular.utils import extend_schema
from rest_framework import viewsets, status, serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated, AllowAny, BasePermission, SAFE_METHODS
from rest_framework.response import Response

from apps.matches.services import MatchNotFoundError, UnknownMemberError
from .models import ActionConfig, AdminRating
from .serializers import (
    LiveEventInputSerializer,
    LiveEventSerializer,
    MatchRatingInputSerializer,
    AdminRatingInputSerializer,
    AdminRatingSerializer,
    ActionConfigSerializer,
    ActionWeightsSerializer,
)
from .services import (
    ActionWeights,
    record_event,
    delete_event,
    get_match_events,
    get_match_live_stats,
    submit_ratings,
    summarize_player_ratings,
    upsert_admin_rating,
    build_scoreboard,
    get_overall_leaders,
    load_action_weights,
    save_scoring_weights,
    snapshot_configured_weights,
    # Exceptions
    LiveEventNotFoundError,
    UnknownActionError,
    NotInMatchError,
    InvalidRatingError,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


class IsAuthenticatedOrReadOnly(BasePermission):
    """Anyone can read; writes need an authenticated admin."""

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return bool(request.user and request.user.is_authenticated)


class ActionConfigViewSet(viewsets.ModelViewSet):
    """
    ViewSet for configurable live-note actions.

    list: Actions ordered for the notes screen
    create/update/destroy: Admin only
    """

    queryset = ActionConfig.objects.all()
    serializer_class = ActionConfigSerializer
    permission_classes = [IsAuthenticatedOrReadOnly]
    pagination_class = None


@extend_schema(
    request=LiveEventInputSerializer,
    responses={200: LiveEventSerializer(many=True), 201: LiveEventSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    description="List live events of a match (GET) or note a new one (POST, admin).",
    tags=['scoring'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticatedOrReadOnly])
def live_events(request, match_id):
    if request.method == 'GET':
        return Response(LiveEventSerializer(get_match_events(match_id=match_id), many=True).data)

    serializer = LiveEventInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        event = record_event(match_id=match_id, **serializer.validated_data)
    except (MatchNotFoundError, UnknownMemberError) as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except UnknownActionError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(LiveEventSerializer(event).data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=None,
    responses={204: None, 404: ErrorResponseSerializer},
    description="Undo a live event.",
    tags=['scoring'],
)
@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def live_event_detail(request, match_id, event_id):
    try:
        delete_event(match_id=match_id, event_id=event_id)
    except LiveEventNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    responses={404: ErrorResponseSerializer},
    description="Aggregated live stats: ranking, medals and goals per team.",
    tags=['scoring'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def live_stats(request, match_id):
    try:
        result = get_match_live_stats(match_id=match_id)
    except MatchNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    medals = result['medals']
    return Response({
        'ranking': [
            {**stat.to_dict(), 'medal': medals.get(stat.member_id, '')}
            for stat in result['ranking']
        ],
        'teamGoals': result['team_goals'],
        'weights': result['weights'].to_dict(),
    })


@extend_schema(
    request=MatchRatingInputSerializer,
    responses={404: ErrorResponseSerializer, 400: ErrorResponseSerializer},
    description="Peer rating summary of a match (GET) or submit ratings directly (POST).",
    tags=['scoring'],
)
@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def match_ratings(request, match_id):
    if request.method == 'POST':
        serializer = MatchRatingInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payload = {**serializer.validated_data, 'matchId': match_id}
        try:
            submit_ratings(ratings=[payload])
        except MatchNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidRatingError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    try:
        summary = summarize_player_ratings(match_id=match_id)
    except MatchNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    code = status.HTTP_201_CREATED if request.method == 'POST' else status.HTTP_200_OK
    return Response(summary, status=code)


@extend_schema(
    request=AdminRatingInputSerializer,
    responses={200: AdminRatingSerializer(many=True), 404: ErrorResponseSerializer},
    description="Admin scores of a match (GET) or set one player's score (PUT).",
    tags=['scoring'],
)
@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def admin_ratings(request, match_id):
    if request.method == 'PUT':
        serializer = AdminRatingInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            rating = upsert_admin_rating(match_id=match_id, **serializer.validated_data)
        except MatchNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotInMatchError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(AdminRatingSerializer(rating).data)

    ratings = AdminRating.objects.filter(match_id=match_id).select_related('member')
    return Response(AdminRatingSerializer(ratings, many=True).data)


@extend_schema(
    responses={404: ErrorResponseSerializer},
    description="Combined peer + admin scores with live stats for every rostered player.",
    tags=['scoring'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def scoreboard(request, match_id):
    try:
        board = build_scoreboard(match_id=match_id)
    except MatchNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response({'players': board['players'], 'teamGoals': board['team_goals']})


@extend_schema(
    request=ActionWeightsSerializer,
    responses={200: ActionWeightsSerializer},
    description=(
        "Weights in effect (GET). PUT saves a snapshot: the body's weights, "
        "or the weights built from action configs when the body is empty."
    ),
    tags=['scoring'],
)
@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticatedOrReadOnly])
def scoring_weights(request):
    if request.method == 'GET':
        return Response(load_action_weights().to_dict())

    if not request.data:
        snapshot = snapshot_configured_weights()
        return Response(snapshot.weights)

    serializer = ActionWeightsSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    snapshot = save_scoring_weights(weights=ActionWeights.from_dict(serializer.validated_data))
    return Response(snapshot.weights)


@extend_schema(
    description="Best average peer scores and most MVP votes across all matches.",
    tags=['scoring'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def leaders(request):
    try:
        limit = max(1, min(int(request.GET.get('limit', 3)), 20))
    except ValueError:
        limit = 3
    return Response(get_overall_leaders(limit=limit))
