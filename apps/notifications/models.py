from django.db import models
import uuid


class NotificationToken(models.Model):
    """FCM registration token of a browser that accepted push notifications."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    token = models.CharField(max_length=512, unique=True)
    member = models.ForeignKey(
        'members.Member',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='notification_tokens'
    )
    user_agent = models.CharField(max_length=500, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'notification_tokens'
        ordering = ['-updated_at']

    def __str__(self):
        return f"{self.token[:16]}..."


class Notification(models.Model):
    """In-app feed item for the admin (e.g. a member paid a share)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    message = models.CharField(max_length=500)
    match = models.ForeignKey(
        'matches.Match',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='notifications'
    )
    share = models.ForeignKey(
        'payments.Share',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='notifications'
    )
    is_read = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'notifications'
        indexes = [
            models.Index(fields=['is_read', 'created_at'], name='notif_read_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.message
