from decimal import Decimal

from rest_framework import serializers

from apps.members.serializers import MemberMinimalSerializer
from .models import Match, MatchStatus, MatchTeam, RosterEntry, Attendance, LastMatchConfig


# =============================================================================
# Input Serializers
# =============================================================================

class RosterMemberInputSerializer(serializers.Serializer):
    """A member placed in a team, optionally paying a fixed percent of it."""

    member_id = serializers.UUIDField()
    percent = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        min_value=Decimal('0'),
        max_value=Decimal('100'),
        required=False,
        allow_null=True
    )
    reason = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')


class TeamInputSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=8)
    name = serializers.CharField(max_length=100)
    percent = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        min_value=Decimal('0'),
        max_value=Decimal('100')
    )
    members = RosterMemberInputSerializer(many=True, required=False, default=list)


class MatchSetupSerializer(serializers.Serializer):
    """
    Validate a match setup request.

    Fields:
        date (date): Match date
        total_amount (int): Total field cost in VND
        teams (list): 1 to 3 teams with percent and roster
        match_id (UUID): Optional open match to finalize
    """

    date = serializers.DateField()
    total_amount = serializers.IntegerField()
    teams = TeamInputSerializer(many=True)
    match_id = serializers.UUIDField(required=False, allow_null=True)

    def validate_teams(self, value):
        if not 1 <= len(value) <= 3:
            raise serializers.ValidationError('A match has between 1 and 3 teams')
        return value


class OpenMatchSerializer(serializers.Serializer):
    date = serializers.DateField()


class AttendanceInputSerializer(serializers.Serializer):
    member_id = serializers.UUIDField()


class MatchFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for match listing.

    Query Parameters:
        status (str): PENDING or PUBLISHED
    """

    status = serializers.ChoiceField(choices=MatchStatus.choices, required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class RosterEntrySerializer(serializers.ModelSerializer):
    member = MemberMinimalSerializer(read_only=True)

    class Meta:
        model = RosterEntry
        fields = ['member', 'position', 'percent', 'reason']
        read_only_fields = fields


class MatchTeamSerializer(serializers.ModelSerializer):
    entries = RosterEntrySerializer(many=True, read_only=True)

    class Meta:
        model = MatchTeam
        fields = ['code', 'name', 'percent', 'entries']
        read_only_fields = fields


class MatchListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for match lists."""

    attendance_count = serializers.SerializerMethodField()

    class Meta:
        model = Match
        fields = [
            'id',
            'date',
            'total_amount',
            'team_count',
            'status',
            'attendance_count',
            'created_at',
        ]
        read_only_fields = fields

    def get_attendance_count(self, obj):
        return obj.attendance.count()


class MatchSerializer(serializers.ModelSerializer):
    """Detailed match serializer with teams and rosters."""

    teams = MatchTeamSerializer(many=True, read_only=True)
    attendance_count = serializers.SerializerMethodField()

    class Meta:
        model = Match
        fields = [
            'id',
            'date',
            'total_amount',
            'team_count',
            'status',
            'teams',
            'attendance_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_attendance_count(self, obj):
        return obj.attendance.count()


class AttendanceSerializer(serializers.ModelSerializer):
    member = MemberMinimalSerializer(read_only=True)

    class Meta:
        model = Attendance
        fields = ['id', 'member', 'created_at']
        read_only_fields = fields


class LastMatchConfigSerializer(serializers.ModelSerializer):
    class Meta:
        model = LastMatchConfig
        fields = ['team_count', 'teams', 'updated_at']
        read_only_fields = fields
