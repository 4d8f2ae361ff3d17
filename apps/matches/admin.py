# ==========================================
# apps/matches/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html
from .models import Match, MatchStatus, MatchTeam, RosterEntry, Attendance, LastMatchConfig


class MatchTeamInline(admin.TabularInline):
    model = MatchTeam
    extra = 0
    fields = ['code', 'name', 'percent']


class AttendanceInline(admin.TabularInline):
    model = Attendance
    extra = 0
    fields = ['member', 'created_at']
    readonly_fields = ['created_at']


@admin.register(Match)
class MatchAdmin(admin.ModelAdmin):
    """Admin interface for matches."""

    list_display = ['date', 'total_amount', 'team_count', 'status_badge', 'is_deleted', 'created_at']
    list_filter = ['status', 'is_deleted', 'date']
    readonly_fields = ['id', 'created_at', 'updated_at']
    inlines = [MatchTeamInline, AttendanceInline]

    def status_badge(self, obj):
        """Display match status as colored badge."""
        colors = {
            MatchStatus.PENDING: ('#E5C49A', '#2C1810'),
            MatchStatus.PUBLISHED: ('#6B8E5E', 'white'),
        }
        bg, fg = colors.get(obj.status, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_status_display()
        )
    status_badge.short_description = 'Status'


@admin.register(RosterEntry)
class RosterEntryAdmin(admin.ModelAdmin):
    list_display = ['member', 'team', 'position', 'percent', 'reason']
    list_filter = ['team__match__date']
    search_fields = ['member__name', 'member__nickname']


@admin.register(LastMatchConfig)
class LastMatchConfigAdmin(admin.ModelAdmin):
    list_display = ['key', 'team_count', 'updated_at']
    readonly_fields = ['key', 'updated_at']
