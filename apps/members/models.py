# ==========================================
# apps/members/models.py
# ==========================================

from django.db import models
import unicodedata
import uuid


def strip_diacritics(value):
    """Lowercase ASCII form of a Vietnamese name, used for searching."""
    normalized = unicodedata.normalize('NFD', value or '')
    stripped = ''.join(c for c in normalized if unicodedata.category(c) != 'Mn')
    return stripped.replace('đ', 'd').replace('Đ', 'D').lower()


class Member(models.Model):
    """Club member who plays in matches and shares the field cost."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    nickname = models.CharField(max_length=100, blank=True)
    name_normalized = models.CharField(max_length=100, db_index=True, editable=False)
    nickname_normalized = models.CharField(max_length=100, blank=True, editable=False)

    # Payment flags
    is_exempt_from_payment = models.BooleanField(default=False)
    is_creditor = models.BooleanField(default=False)

    is_active = models.BooleanField(default=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'members'
        indexes = [
            models.Index(fields=['is_active', 'name'], name='members_active_name_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return self.get_display_name()

    def get_display_name(self):
        """Return nickname or full name."""
        return self.nickname or self.name

    def save(self, *args, **kwargs):
        self.name_normalized = strip_diacritics(self.name)
        self.nickname_normalized = strip_diacritics(self.nickname)
        update_fields = kwargs.get('update_fields')
        if update_fields is not None and {'name', 'nickname'} & set(update_fields):
            kwargs['update_fields'] = set(update_fields) | {'name_normalized', 'nickname_normalized'}
        super().save(*args, **kwargs)
