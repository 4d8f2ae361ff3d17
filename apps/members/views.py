from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response

from .models import Member
from .serializers import MemberSerializer, MemberFilterSerializer

from apps.members.services import (
    create_member,
    update_member,
    delete_member,
    search_members,
    toggle_payment_exemption,
    toggle_creditor,
    # Exceptions
    MemberNotFoundError,
    MemberHasSharesError,
)


class MemberViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Member CRUD operations.

    Reads are public (payment and attendance pages pick a member by name).
    Writes require an authenticated admin.

    list: Get members (searchable with ?q=)
    create: Create a member
    retrieve: Get a specific member
    update: Update a member
    destroy: Delete a member without payment history
    """

    queryset = Member.objects.all()
    serializer_class = MemberSerializer
    pagination_class = None

    def get_permissions(self):
        """Set permissions based on action."""
        if self.action in ['list', 'retrieve']:
            return [AllowAny()]
        return [IsAuthenticated()]

    def list(self, request, *args, **kwargs):
        """List members, optionally filtered by a search query."""
        filter_serializer = MemberFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        members = search_members(
            query=params.get('q'),
            include_inactive=params.get('include_inactive', False),
        )
        return Response(MemberSerializer(members, many=True).data)

    def create(self, request, *args, **kwargs):
        """Create a new member."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        member = create_member(
            name=serializer.validated_data['name'],
            nickname=serializer.validated_data.get('nickname', ''),
            is_exempt_from_payment=serializer.validated_data.get('is_exempt_from_payment', False),
            is_creditor=serializer.validated_data.get('is_creditor', False),
        )
        return Response(MemberSerializer(member).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Update a member."""
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        member = update_member(member_id=instance.id, **serializer.validated_data)
        return Response(MemberSerializer(member).data)

    def destroy(self, request, *args, **kwargs):
        """Delete a member."""
        try:
            delete_member(member_id=self.kwargs['pk'])
            return Response(status=status.HTTP_204_NO_CONTENT)
        except MemberNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except MemberHasSharesError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

    @action(detail=True, methods=['post'])
    def toggle_exempt(self, request, pk=None):
        """Flip the payment exemption flag."""
        try:
            member = toggle_payment_exemption(member_id=pk)
        except MemberNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(MemberSerializer(member).data)

    @action(detail=True, methods=['post'])
    def toggle_creditor(self, request, pk=None):
        """Flip the creditor flag."""
        try:
            member = toggle_creditor(member_id=pk)
        except MemberNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(MemberSerializer(member).data)
