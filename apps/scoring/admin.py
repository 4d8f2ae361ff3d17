from django.contrib import admin
from django.utils.html import format_html
from .models import LiveEvent, ActionConfig, ActionKind, ScoringWeights, Rating, AdminRating


@admin.register(ActionConfig)
class ActionConfigAdmin(admin.ModelAdmin):
    list_display = ['key', 'label', 'kind_badge', 'weight', 'order', 'is_negative']
    list_filter = ['kind', 'is_negative']
    list_editable = ['weight', 'order']
    ordering = ['kind', 'order']

    def kind_badge(self, obj):
        bg = '#6B8E5E' if obj.kind == ActionKind.OK else '#B85C5C'
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, obj.get_kind_display()
        )
    kind_badge.short_description = 'Kind'


@admin.register(LiveEvent)
class LiveEventAdmin(admin.ModelAdmin):
    list_display = ['match', 'member', 'type', 'minute', 'second', 'created_at']
    list_filter = ['type', 'match__date']
    search_fields = ['member__name', 'member__nickname', 'note']


@admin.register(Rating)
class RatingAdmin(admin.ModelAdmin):
    list_display = ['match', 'rated_by', 'mvp', 'channel', 'created_at']
    list_filter = ['channel']
    readonly_fields = ['id', 'created_at']


@admin.register(AdminRating)
class AdminRatingAdmin(admin.ModelAdmin):
    list_display = ['match', 'member', 'score', 'updated_at']
    search_fields = ['member__name', 'member__nickname']


@admin.register(ScoringWeights)
class ScoringWeightsAdmin(admin.ModelAdmin):
    list_display = ['key', 'updated_at']
    readonly_fields = ['key', 'updated_at']
