# ==========================================
# apps/payments/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html
from .models import Share, ShareStatus, PaymentRequest, PaymentRequestStatus


STATUS_COLORS = {
    ShareStatus.PENDING: ('#E5C49A', '#2C1810'),
    ShareStatus.PAID: ('#6B8E5E', 'white'),
    ShareStatus.CANCELLED: ('#B85C5C', 'white'),
    PaymentRequestStatus.SETTLED: ('#6B8E5E', 'white'),
}


def _badge(obj):
    bg, fg = STATUS_COLORS.get(obj.status, ('#ccc', '#666'))
    return format_html(
        '<span style="background: {}; color: {}; padding: 3px 8px; '
        'border-radius: 10px; font-size: 11px;">{}</span>',
        bg, fg, obj.get_status_display()
    )


@admin.register(Share)
class ShareAdmin(admin.ModelAdmin):
    """Admin interface for payment shares."""

    list_display = [
        'member',
        'match',
        'team_code',
        'amount',
        'status_badge',
        'channel',
        'paid_at',
    ]
    list_filter = ['status', 'channel', 'match__date']
    search_fields = ['member__name', 'member__nickname', 'payos_order_code']
    readonly_fields = ['id', 'calculation', 'payos_order_code', 'meta', 'created_at', 'updated_at']
    actions = ['mark_as_paid']

    def status_badge(self, obj):
        """Display payment status as colored badge."""
        return _badge(obj)
    status_badge.short_description = 'Status'

    def mark_as_paid(self, request, queryset):
        """Admin action to mark pending shares as paid."""
        from apps.payments.services import mark_share_paid

        count = 0
        for share in queryset.filter(status=ShareStatus.PENDING):
            mark_share_paid(share_id=share.id)
            count += 1
        self.message_user(request, f'{count} share(s) marked as paid.')
    mark_as_paid.short_description = 'Mark selected shares as paid'


@admin.register(PaymentRequest)
class PaymentRequestAdmin(admin.ModelAdmin):
    """Admin interface for PayOS payment requests."""

    list_display = ['order_code', 'member', 'amount', 'status_badge', 'created_at', 'settled_at']
    list_filter = ['status', 'created_at']
    search_fields = ['order_code', 'member__name']
    readonly_fields = ['id', 'order_code', 'checkout_url', 'qr_code', 'ratings', 'skipped_ratings', 'created_at', 'updated_at', 'settled_at']
    filter_horizontal = ['shares']

    def status_badge(self, obj):
        return _badge(obj)
    status_badge.short_description = 'Status'
