from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
from decimal import Decimal
import uuid


class LiveEvent(models.Model):
    """Something noted about a player while the match is being played."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    match = models.ForeignKey(
        'matches.Match',
        on_delete=models.CASCADE,
        related_name='live_events'
    )
    member = models.ForeignKey(
        'members.Member',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='live_events'
    )

    # Built-in action key (goal, assist, yellow...) or a configured custom key
    type = models.CharField(max_length=50)

    minute = models.PositiveSmallIntegerField(null=True, blank=True)
    second = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MaxValueValidator(59)]
    )
    note = models.CharField(max_length=500, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'live_events'
        indexes = [
            models.Index(fields=['match', 'created_at'], name='live_events_match_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.type} @ {self.minute or 0}'"


class ActionKind(models.TextChoices):
    OK = 'ok', 'Positive'
    BAD = 'bad', 'Negative'


class ActionConfig(models.Model):
    """Configurable action button shown on the live notes screen."""

    key = models.SlugField(max_length=50, primary_key=True)
    label = models.CharField(max_length=100)
    kind = models.CharField(max_length=3, choices=ActionKind.choices, default=ActionKind.OK)

    # Null means the action is counted but not weighted
    weight = models.DecimalField(
        max_digits=6,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0'))]
    )
    color = models.CharField(max_length=100, blank=True)
    order = models.PositiveSmallIntegerField(default=0)
    is_negative = models.BooleanField(default=False)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'action_configs'
        ordering = ['order', 'key']

    def __str__(self):
        return f"{self.label} ({self.key})"

    @property
    def counts_against(self):
        return self.kind == ActionKind.BAD or self.is_negative


class ScoringWeights(models.Model):
    """Saved snapshot of the effective action weights."""

    SINGLETON_KEY = 'scoring_weights'

    key = models.CharField(max_length=32, primary_key=True, default=SINGLETON_KEY, editable=False)
    weights = models.JSONField(default=dict)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'scoring_weights'

    def __str__(self):
        return "Scoring weights"


class RatingChannel(models.TextChoices):
    PAYOS = 'PAYOS', 'Submitted with payment'
    DIRECT_CLIENT = 'DIRECT_CLIENT', 'Submitted directly'


class Rating(models.Model):
    """Peer ratings one member gave after a match, plus their MVP vote."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    match = models.ForeignKey(
        'matches.Match',
        on_delete=models.CASCADE,
        related_name='ratings'
    )
    rated_by = models.ForeignKey(
        'members.Member',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='ratings_given'
    )

    # [{"memberId": "...", "score": 4.5}, ...]
    player_ratings = models.JSONField(default=list)
    mvp = models.ForeignKey(
        'members.Member',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='mvp_votes'
    )

    channel = models.CharField(max_length=20, choices=RatingChannel.choices)
    payment_request = models.ForeignKey(
        'payments.PaymentRequest',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='ratings_written'
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'ratings'
        indexes = [
            models.Index(fields=['match', 'created_at'], name='ratings_match_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"Rating for {self.match} ({self.channel})"


class AdminRating(models.Model):
    """Score the admin gives a player for a match (0-5)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    match = models.ForeignKey(
        'matches.Match',
        on_delete=models.CASCADE,
        related_name='admin_ratings'
    )
    member = models.ForeignKey(
        'members.Member',
        on_delete=models.CASCADE,
        related_name='admin_ratings'
    )
    score = models.DecimalField(
        max_digits=4,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('5'))]
    )
    notes = models.TextField(blank=True)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'admin_ratings'
        unique_together = [['match', 'member']]

    def __str__(self):
        return f"{self.member.get_display_name()}: {self.score}"
