from decimal import Decimal

from rest_framework import serializers

from apps.members.serializers import MemberMinimalSerializer
from .models import Share, ShareStatus, PaymentRequest


# =============================================================================
# Input Serializers
# =============================================================================

class PlayerRatingInputSerializer(serializers.Serializer):
    memberId = serializers.UUIDField()
    score = serializers.DecimalField(
        max_digits=4,
        decimal_places=2,
        min_value=Decimal('0'),
        max_value=Decimal('10')
    )


class RatingPayloadSerializer(serializers.Serializer):
    """Peer ratings of one match, as sent from the pay page."""

    matchId = serializers.UUIDField()
    ratedByMemberId = serializers.UUIDField()
    playerRatings = PlayerRatingInputSerializer(many=True, required=False, default=list)
    mvpPlayerId = serializers.UUIDField(required=False, allow_null=True)


class CreatePaymentLinkSerializer(serializers.Serializer):
    """
    Validate a payment link request.

    Fields:
        shareIds (list[UUID]): Shares to pay, at least one
        memberId (UUID): Paying member
        ratings (list): Optional peer ratings, written when the payment settles
    """

    shareIds = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
    memberId = serializers.UUIDField()
    ratings = RatingPayloadSerializer(many=True, required=False)


class ShareFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for share listing.

    Query Parameters:
        match (UUID): Shares of one match
        member (UUID): Shares of one member
        status (str): PENDING, PAID or CANCELLED
    """

    match = serializers.UUIDField(required=False)
    member = serializers.UUIDField(required=False)
    status = serializers.ChoiceField(choices=ShareStatus.choices, required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class ShareSerializer(serializers.ModelSerializer):
    """Serializer for payment shares."""

    member = MemberMinimalSerializer(read_only=True)
    match_date = serializers.DateField(source='match.date', read_only=True)

    class Meta:
        model = Share
        fields = [
            'id',
            'match',
            'match_date',
            'member',
            'team_code',
            'amount',
            'status',
            'channel',
            'calculation',
            'payos_order_code',
            'paid_at',
            'created_at',
        ]
        read_only_fields = fields


class PaymentRequestSerializer(serializers.ModelSerializer):
    """Serializer for payment requests."""

    class Meta:
        model = PaymentRequest
        fields = [
            'id',
            'order_code',
            'member',
            'amount',
            'status',
            'checkout_url',
            'settled_at',
            'created_at',
        ]
        read_only_fields = fields


class OutstandingSharesSerializer(serializers.Serializer):
    member = MemberMinimalSerializer()
    total_amount = serializers.IntegerField()
    count = serializers.SerializerMethodField()
    shares = ShareSerializer(many=True)

    def get_count(self, obj):
        return len(obj['shares'])


class MatchPaymentSummarySerializer(serializers.Serializer):
    """Serializer for the payment summary of a match."""

    total_amount = serializers.IntegerField()
    collected_amount = serializers.IntegerField()
    outstanding_amount = serializers.IntegerField()
    is_fully_paid = serializers.BooleanField()
    total_shares = serializers.IntegerField()
    paid_count = serializers.IntegerField()
    pending_count = serializers.IntegerField()
    paid_shares = ShareSerializer(many=True)
    pending_shares = ShareSerializer(many=True)
    cancelled_shares = ShareSerializer(many=True)
