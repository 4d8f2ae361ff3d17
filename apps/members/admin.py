# ==========================================
# apps/members/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html
from .models import Member


@admin.register(Member)
class MemberAdmin(admin.ModelAdmin):
    """Admin interface for club members."""

    list_display = [
        'name',
        'nickname',
        'payment_flags',
        'is_active',
        'created_at',
    ]
    list_filter = ['is_active', 'is_exempt_from_payment', 'is_creditor']
    search_fields = ['name', 'nickname']
    readonly_fields = ['id', 'created_at', 'updated_at']

    def payment_flags(self, obj):
        """Show exemption/creditor flags as badges."""
        badges = []
        if obj.is_exempt_from_payment:
            badges.append(('#6B8E5E', 'Exempt'))
        if obj.is_creditor:
            badges.append(('#A47449', 'Creditor'))
        if not badges:
            return '-'
        return format_html(
            ' '.join(
                '<span style="background: {}; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">{}</span>'
                for _ in badges
            ),
            *[part for badge in badges for part in badge]
        )
    payment_flags.short_description = 'Flags'
