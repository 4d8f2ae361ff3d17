from django.contrib import admin
from .models import NotificationToken, Notification


@admin.register(NotificationToken)
class NotificationTokenAdmin(admin.ModelAdmin):
    list_display = ['short_token', 'member', 'updated_at']
    search_fields = ['token', 'member__name']
    readonly_fields = ['id', 'created_at', 'updated_at']

    def short_token(self, obj):
        return f"{obj.token[:24]}..."
    short_token.short_description = 'Token'


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ['message', 'match', 'is_read', 'created_at']
    list_filter = ['is_read']
    actions = ['mark_as_read']

    def mark_as_read(self, request, queryset):
        updated = queryset.update(is_read=True)
        self.message_user(request, f'{updated} notification(s) marked as read.')
    mark_as_read.short_description = 'Mark as read'
