from rest_framework import serializers
from .models import Member


# =============================================================================
# Input Serializers
# =============================================================================

class MemberFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for member listing.

    Query Parameters:
        q (str): Diacritic-insensitive search on name and nickname
        include_inactive (bool): Include deactivated members
    """

    q = serializers.CharField(max_length=100, required=False, allow_blank=True)
    include_inactive = serializers.BooleanField(required=False, default=False)


# =============================================================================
# Output Serializers
# =============================================================================

class MemberSerializer(serializers.ModelSerializer):
    """Serializer for members."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = Member
        fields = [
            'id',
            'name',
            'nickname',
            'display_name',
            'is_exempt_from_payment',
            'is_creditor',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'display_name', 'created_at', 'updated_at']

    def get_display_name(self, obj):
        return obj.get_display_name()

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Name cannot be empty')
        return value


class MemberMinimalSerializer(serializers.ModelSerializer):
    """Minimal member info for nested serialization."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = Member
        fields = ['id', 'name', 'display_name']
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()
