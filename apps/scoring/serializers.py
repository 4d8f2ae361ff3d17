from decimal import Decimal

from rest_framework import serializers

from apps.members.serializers import MemberMinimalSerializer
from apps.payments.serializers import PlayerRatingInputSerializer
from .models import LiveEvent, ActionConfig, AdminRating


# =============================================================================
# Input Serializers
# =============================================================================

class LiveEventInputSerializer(serializers.Serializer):
    """
    Validate a live event.

    Fields:
        type (str): Built-in action key or configured custom key
        member_id (UUID): Player the event is about (optional)
        minute, second (int): Match clock (optional)
        note (str): Free text
    """

    type = serializers.CharField(max_length=50)
    member_id = serializers.UUIDField(required=False, allow_null=True)
    minute = serializers.IntegerField(min_value=0, max_value=200, required=False, allow_null=True)
    second = serializers.IntegerField(min_value=0, max_value=59, required=False, allow_null=True)
    note = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')


class MatchRatingInputSerializer(serializers.Serializer):
    """Peer ratings of one match submitted without a payment."""

    ratedByMemberId = serializers.UUIDField()
    playerRatings = PlayerRatingInputSerializer(many=True, required=False, default=list)
    mvpPlayerId = serializers.UUIDField(required=False, allow_null=True)


class AdminRatingInputSerializer(serializers.Serializer):
    member_id = serializers.UUIDField()
    # Clamped to 0-5 by the service
    score = serializers.DecimalField(max_digits=6, decimal_places=2)
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class ExtraActionSerializer(serializers.Serializer):
    key = serializers.CharField(max_length=50)
    label = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    weight = serializers.DecimalField(max_digits=6, decimal_places=2, min_value=Decimal('0'))
    isNegative = serializers.BooleanField(required=False, default=False)


class ActionWeightsSerializer(serializers.Serializer):
    """Weights of the built-in actions plus custom extras."""

    goal = serializers.DecimalField(max_digits=6, decimal_places=2, min_value=Decimal('0'))
    assist = serializers.DecimalField(max_digits=6, decimal_places=2, min_value=Decimal('0'))
    save_gk = serializers.DecimalField(max_digits=6, decimal_places=2, min_value=Decimal('0'))
    tackle = serializers.DecimalField(max_digits=6, decimal_places=2, min_value=Decimal('0'))
    dribble = serializers.DecimalField(max_digits=6, decimal_places=2, min_value=Decimal('0'))
    note = serializers.DecimalField(max_digits=6, decimal_places=2, min_value=Decimal('0'))
    yellow = serializers.DecimalField(max_digits=6, decimal_places=2, min_value=Decimal('0'))
    red = serializers.DecimalField(max_digits=6, decimal_places=2, min_value=Decimal('0'))
    foul = serializers.DecimalField(max_digits=6, decimal_places=2, min_value=Decimal('0'))
    extras = ExtraActionSerializer(many=True, required=False, default=list)


# =============================================================================
# Output Serializers
# =============================================================================

class LiveEventSerializer(serializers.ModelSerializer):
    member = MemberMinimalSerializer(read_only=True)

    class Meta:
        model = LiveEvent
        fields = ['id', 'match', 'member', 'type', 'minute', 'second', 'note', 'created_at']
        read_only_fields = fields


class ActionConfigSerializer(serializers.ModelSerializer):
    """Serializer for configurable actions."""

    class Meta:
        model = ActionConfig
        fields = ['key', 'label', 'kind', 'weight', 'color', 'order', 'is_negative', 'updated_at']
        read_only_fields = ['updated_at']


class AdminRatingSerializer(serializers.ModelSerializer):
    member = MemberMinimalSerializer(read_only=True)

    class Meta:
        model = AdminRating
        fields = ['member', 'score', 'notes', 'updated_at']
        read_only_fields = fields
