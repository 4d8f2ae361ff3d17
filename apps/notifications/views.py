import logging

from drf_spectacular.utils import extend_schema
from rest_framework import viewsets, mixins, status, serializers as drf_serializers
from rest_framework.decorators import action, api_view, permission_classes, authentication_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response

from apps.matches.services import MatchNotFoundError
from apps.members.services import MemberNotFoundError
from .serializers import (
    MatchNotificationInputSerializer,
    AttendanceNotificationInputSerializer,
    ManualNotificationInputSerializer,
    TokenInputSerializer,
    NotificationTokenSerializer,
    NotificationSerializer,
    DeliveryResultSerializer,
)
from .services import (
    notify_new_match,
    notify_attendance_created,
    notify_attendance_deleted,
    notify_manual,
    register_token,
    unregister_token,
    list_notifications,
    mark_notification_read,
    mark_all_notifications_read,
    # Exceptions
    PushDeliveryError,
    NotificationNotFoundError,
)


logger = logging.getLogger(__name__)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()
    details = drf_serializers.CharField(required=False)


class NotificationPagination(PageNumberPagination):
    page_size = 30
    page_size_query_param = 'page_size'
    max_page_size = 100


def _deliver(send, **kwargs):
    """Run a fan-out helper and translate its errors to responses."""
    try:
        result = send(**kwargs)
    except (MatchNotFoundError, MemberNotFoundError) as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except PushDeliveryError as e:
        logger.exception("Push delivery failed")
        return Response(
            {'error': 'Failed to send notification', 'details': str(e)},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
    return Response(result)


@extend_schema(
    request=MatchNotificationInputSerializer,
    responses={200: DeliveryResultSerializer, 404: ErrorResponseSerializer, 500: ErrorResponseSerializer},
    description="Announce a new match to every registered device.",
    tags=['notifications'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def send_match_notification(request):
    serializer = MatchNotificationInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    return _deliver(notify_new_match, match_id=serializer.validated_data['matchId'])


@extend_schema(
    request=AttendanceNotificationInputSerializer,
    responses={200: DeliveryResultSerializer, 404: ErrorResponseSerializer, 500: ErrorResponseSerializer},
    description="Tell everyone a member signed up for a match.",
    tags=['notifications'],
)
@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def attendance_created(request):
    serializer = AttendanceNotificationInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    return _deliver(
        notify_attendance_created,
        match_id=serializer.validated_data['matchId'],
        member_id=serializer.validated_data['memberId'],
    )


@extend_schema(
    request=AttendanceNotificationInputSerializer,
    responses={200: DeliveryResultSerializer, 404: ErrorResponseSerializer, 500: ErrorResponseSerializer},
    description="Tell everyone a member dropped out of a match.",
    tags=['notifications'],
)
@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def attendance_deleted(request):
    serializer = AttendanceNotificationInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    return _deliver(
        notify_attendance_deleted,
        match_id=serializer.validated_data['matchId'],
        member_id=serializer.validated_data['memberId'],
    )


@extend_schema(
    request=ManualNotificationInputSerializer,
    responses={200: DeliveryResultSerializer, 500: ErrorResponseSerializer},
    description="Send a free-form push notification.",
    tags=['notifications'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def manual_notification(request):
    serializer = ManualNotificationInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    return _deliver(notify_manual, **serializer.validated_data)


@extend_schema(
    request=TokenInputSerializer,
    responses={201: NotificationTokenSerializer, 204: None, 404: ErrorResponseSerializer},
    description="Register (POST) or remove (DELETE) a browser push token.",
    tags=['notifications'],
)
@api_view(['POST', 'DELETE'])
@authentication_classes([])
@permission_classes([AllowAny])
def push_tokens(request):
    if request.method == 'DELETE':
        token = request.data.get('token')
        if not token:
            return Response({'error': 'token is required'}, status=status.HTTP_400_BAD_REQUEST)
        if not unregister_token(token=token):
            return Response({'error': 'Token not registered'}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    serializer = TokenInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        record = register_token(
            token=serializer.validated_data['token'],
            member_id=serializer.validated_data.get('memberId'),
            user_agent=request.META.get('HTTP_USER_AGENT', '')[:500],
        )
    except MemberNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(NotificationTokenSerializer(record).data, status=status.HTTP_201_CREATED)


class NotificationViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    In-app notification feed for the admin.

    list: Newest first, `?unread=true` for unread only
    mark_read: Mark one notification read
    mark_all_read: Mark everything read
    """

    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = NotificationPagination

    def get_queryset(self):
        unread = self.request.query_params.get('unread', '').lower() in ('1', 'true', 'yes')
        return list_notifications(unread_only=unread)

    @action(detail=True, methods=['post'])
    def mark_read(self, request, pk=None):
        try:
            notification = mark_notification_read(notification_id=pk)
        except NotificationNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(NotificationSerializer(notification).data)

    @action(detail=False, methods=['post'])
    def mark_all_read(self, request):
        updated = mark_all_notifications_read()
        return Response({'updated': updated})
