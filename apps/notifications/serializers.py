from rest_framework import serializers
from .models import NotificationToken, Notification


# =============================================================================
# Input Serializers
# =============================================================================

class MatchNotificationInputSerializer(serializers.Serializer):
    matchId = serializers.UUIDField()


class AttendanceNotificationInputSerializer(serializers.Serializer):
    matchId = serializers.UUIDField()
    memberId = serializers.UUIDField()


class ManualNotificationInputSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    body = serializers.CharField(max_length=1000)


class TokenInputSerializer(serializers.Serializer):
    """
    Register a push token.

    Fields:
        token (str): FCM registration token from the browser
        memberId (UUID): Member the device belongs to (optional)
    """

    token = serializers.CharField(max_length=512)
    memberId = serializers.UUIDField(required=False, allow_null=True)


# =============================================================================
# Output Serializers
# =============================================================================

class NotificationTokenSerializer(serializers.ModelSerializer):
    class Meta:
        model = NotificationToken
        fields = ['id', 'token', 'member', 'user_agent', 'created_at', 'updated_at']
        read_only_fields = fields


class NotificationSerializer(serializers.ModelSerializer):
    """Serializer for in-app notifications."""

    class Meta:
        model = Notification
        fields = ['id', 'message', 'match', 'share', 'is_read', 'created_at']
        read_only_fields = fields


class DeliveryResultSerializer(serializers.Serializer):
    successCount = serializers.IntegerField()
    failureCount = serializers.IntegerField()
    invalidTokensRemoved = serializers.IntegerField()
