from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response

from apps.payments.serializers import ShareSerializer, MatchPaymentSummarySerializer
from apps.payments.services import get_match_payment_summary
from .models import Match
from .serializers import (
    MatchSerializer,
    MatchListSerializer,
    MatchFilterSerializer,
    MatchSetupSerializer,
    OpenMatchSerializer,
    AttendanceInputSerializer,
    AttendanceSerializer,
    LastMatchConfigSerializer,
)

from apps.matches.services import (
    open_match,
    create_match,
    delete_match,
    register_attendance,
    cancel_attendance,
    get_attendance,
    get_last_match_config,
    # Exceptions
    MatchNotFoundError,
    MatchClosedError,
    InvalidAmountError,
    InvalidTeamSplitError,
    EmptyTeamError,
    DuplicateMemberError,
    UnknownMemberError,
    AlreadyAttendingError,
    AttendanceFullError,
    NotAttendingError,
)


class MatchPagination(PageNumberPagination):
    """Custom pagination for matches."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class MatchViewSet(mixins.ListModelMixin,
                   mixins.RetrieveModelMixin,
                   mixins.DestroyModelMixin,
                   viewsets.GenericViewSet):
    """
    ViewSet for matches.

    list: Get matches (filterable by status)
    retrieve: Get a match with its teams and rosters
    destroy: Soft-delete a match
    setup: Finalize teams and create payment shares
    open: Open a match for attendance
    attendance: List, add or remove attendance
    shares: Payment shares of a match
    summary: Payment summary of a match
    last_config: Team layout of the last setup
    """

    queryset = Match.objects.filter(is_deleted=False).prefetch_related('teams__entries__member')
    serializer_class = MatchSerializer
    pagination_class = MatchPagination

    def get_permissions(self):
        """Reads and attendance sign-up are public; the rest is admin only."""
        if self.action in ['list', 'retrieve', 'shares']:
            return [AllowAny()]
        if self.action == 'attendance' and self.request.method in ['GET', 'POST']:
            return [AllowAny()]
        return [IsAuthenticated()]

    def get_queryset(self):
        queryset = super().get_queryset()

        if self.action == 'list':
            filter_serializer = MatchFilterSerializer(data=self.request.query_params)
            filter_serializer.is_valid(raise_exception=True)
            match_status = filter_serializer.validated_data.get('status')
            if match_status:
                queryset = queryset.filter(status=match_status)

        return queryset

    def get_serializer_class(self):
        if self.action == 'list':
            return MatchListSerializer
        return MatchSerializer

    def destroy(self, request, *args, **kwargs):
        """Soft-delete a match."""
        try:
            delete_match(match_id=self.kwargs['pk'])
        except MatchNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['post'])
    def setup(self, request):
        """Finalize a match: teams, rosters and payment shares."""
        serializer = MatchSetupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            match, shares = create_match(
                date=data['date'],
                total_amount=data['total_amount'],
                teams=data['teams'],
                match_id=data.get('match_id'),
            )
        except MatchNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except MatchClosedError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
        except (InvalidAmountError, InvalidTeamSplitError, EmptyTeamError,
                DuplicateMemberError, UnknownMemberError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        match = self.get_queryset().get(id=match.id)
        return Response(
            {
                'match': MatchSerializer(match).data,
                'shares': ShareSerializer(shares, many=True).data,
            },
            status=status.HTTP_201_CREATED
        )

    @action(detail=False, methods=['post'])
    def open(self, request):
        """Open a new match for attendance."""
        serializer = OpenMatchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        match = open_match(date=serializer.validated_data['date'])
        return Response(MatchSerializer(match).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['get', 'post', 'delete'])
    def attendance(self, request, pk=None):
        """
        GET: attendance list
        POST: sign a member up ({member_id})
        DELETE: remove a member ({member_id}, admin)
        """
        if request.method == 'GET':
            return Response(AttendanceSerializer(get_attendance(match_id=pk), many=True).data)

        serializer = AttendanceInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        member_id = serializer.validated_data['member_id']

        try:
            if request.method == 'POST':
                attendance = register_attendance(match_id=pk, member_id=member_id)
                return Response(AttendanceSerializer(attendance).data, status=status.HTTP_201_CREATED)

            cancel_attendance(match_id=pk, member_id=member_id)
            return Response(status=status.HTTP_204_NO_CONTENT)
        except (MatchNotFoundError, UnknownMemberError, NotAttendingError) as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (MatchClosedError, AlreadyAttendingError, AttendanceFullError) as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

    @action(detail=True, methods=['get'])
    def shares(self, request, pk=None):
        """Payment shares of a match."""
        match = self.get_object()
        shares = match.shares.select_related('member', 'match').order_by('team_code', 'created_at')
        return Response(ShareSerializer(shares, many=True).data)

    @action(detail=True, methods=['get'])
    def summary(self, request, pk=None):
        """Payment summary: collected vs outstanding."""
        try:
            summary = get_match_payment_summary(match_id=pk)
        except MatchNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(MatchPaymentSummarySerializer(summary).data)

    @action(detail=False, methods=['get'], url_path='last-config')
    def last_config(self, request):
        """Team layout of the last setup, to prefill the next one."""
        return Response(LastMatchConfigSerializer(get_last_match_config()).data)
