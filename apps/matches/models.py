from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
from decimal import Decimal
import uuid


class MatchStatus(models.TextChoices):
    PENDING = 'PENDING', 'Open for attendance'
    PUBLISHED = 'PUBLISHED', 'Published'


class Match(models.Model):
    """A football match whose field cost is split among the players."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    date = models.DateField()

    # Total field cost in VND (set when teams are finalized)
    total_amount = models.PositiveIntegerField(null=True, blank=True)
    team_count = models.PositiveSmallIntegerField(default=2)

    status = models.CharField(
        max_length=20,
        choices=MatchStatus.choices,
        default=MatchStatus.PENDING
    )
    is_deleted = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'matches'
        indexes = [
            models.Index(fields=['status', 'date'], name='matches_status_date_idx'),
            models.Index(fields=['is_deleted', 'date'], name='matches_deleted_date_idx'),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"Match {self.date} ({self.status})"

    @property
    def is_published(self):
        return self.status == MatchStatus.PUBLISHED and not self.is_deleted

    def get_team_percents(self):
        """Return {team code: percent} for the match's teams."""
        return {team.code: team.percent for team in self.teams.all()}

    def get_member_team_map(self):
        """Return {member id: team code} from the match roster."""
        return {
            entry.member_id: entry.team.code
            for entry in RosterEntry.objects.filter(team__match=self).select_related('team')
        }


class MatchTeam(models.Model):
    """Team configuration for one match (share of the cost + roster)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    match = models.ForeignKey(Match, on_delete=models.CASCADE, related_name='teams')
    code = models.CharField(max_length=8)
    name = models.CharField(max_length=100)
    percent = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))]
    )

    class Meta:
        db_table = 'match_teams'
        unique_together = [['match', 'code']]
        ordering = ['code']

    def __str__(self):
        return f"{self.name} ({self.percent}%)"


class RosterEntry(models.Model):
    """Member placed in a team, optionally with a fixed percent of the team pocket."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    team = models.ForeignKey(MatchTeam, on_delete=models.CASCADE, related_name='entries')
    member = models.ForeignKey('members.Member', on_delete=models.CASCADE, related_name='roster_entries')
    position = models.PositiveSmallIntegerField(default=0)

    # Fixed share of the team's pocket, overrides the equal split
    percent = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))]
    )
    reason = models.CharField(max_length=200, blank=True)

    class Meta:
        db_table = 'roster_entries'
        unique_together = [['team', 'member']]
        ordering = ['team', 'position']

    def __str__(self):
        return f"{self.member.get_display_name()} in {self.team.name}"


class Attendance(models.Model):
    """Member sign-up for an upcoming match."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    match = models.ForeignKey(Match, on_delete=models.CASCADE, related_name='attendance')
    member = models.ForeignKey('members.Member', on_delete=models.CASCADE, related_name='attendance')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'attendance'
        unique_together = [['match', 'member']]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.member.get_display_name()} attends {self.match.date}"


class LastMatchConfig(models.Model):
    """Team layout of the last match, used to prefill the next setup."""

    SINGLETON_KEY = 'last_match'

    key = models.CharField(max_length=32, primary_key=True, default=SINGLETON_KEY, editable=False)
    team_count = models.PositiveSmallIntegerField(default=2)
    teams = models.JSONField(default=list, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'match_configs'

    def __str__(self):
        return f"Last match config ({self.team_count} teams)"

    @classmethod
    def load(cls):
        config, _ = cls.objects.get_or_create(key=cls.SINGLETON_KEY)
        return config
