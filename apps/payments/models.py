from django.db import models
from django.core.validators import MinValueValidator
import uuid


class ShareStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    PAID = 'PAID', 'Paid'
    CANCELLED = 'CANCELLED', 'Cancelled'


class PaymentChannel(models.TextChoices):
    PAYOS = 'PAYOS', 'PayOS'
    MANUAL = 'MANUAL', 'Manual'
    CREDITOR = 'CREDITOR', 'Creditor'


class PaymentRequestStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    SETTLED = 'SETTLED', 'Settled'


class Share(models.Model):
    """Amount one member owes for one match."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    match = models.ForeignKey(
        'matches.Match',
        on_delete=models.CASCADE,
        related_name='shares'
    )
    member = models.ForeignKey(
        'members.Member',
        on_delete=models.PROTECT,
        related_name='shares'
    )
    team_code = models.CharField(max_length=8, blank=True)

    # Amount owed in VND, fixed when the match is published
    amount = models.PositiveIntegerField()

    status = models.CharField(
        max_length=20,
        choices=ShareStatus.choices,
        default=ShareStatus.PENDING
    )
    channel = models.CharField(
        max_length=20,
        choices=PaymentChannel.choices,
        blank=True
    )

    # How the amount was derived (team total, fixed percent, remainder...)
    calculation = models.JSONField(default=dict, blank=True)

    # Gateway reference of the last payment link covering this share
    payos_order_code = models.BigIntegerField(null=True, blank=True, db_index=True)
    paid_at = models.DateTimeField(null=True, blank=True)
    meta = models.JSONField(default=dict, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'shares'
        unique_together = [['match', 'member']]
        indexes = [
            models.Index(fields=['member', 'status'], name='shares_member_status_idx'),
            models.Index(fields=['match', 'status'], name='shares_match_status_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.member.get_display_name()} owes {self.amount} VND ({self.status})"

    @property
    def is_paid(self):
        return self.status == ShareStatus.PAID


class PaymentRequest(models.Model):
    """Payment link issued for one or more pending shares of a member."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order_code = models.BigIntegerField(unique=True)

    member = models.ForeignKey(
        'members.Member',
        on_delete=models.CASCADE,
        related_name='payment_requests'
    )
    shares = models.ManyToManyField(Share, related_name='payment_requests')

    amount = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    # Peer ratings submitted together with the payment, written on settlement
    ratings = models.JSONField(default=list, blank=True)
    # Attached ratings that could not be written at settlement, with the reason
    skipped_ratings = models.JSONField(default=list, blank=True)

    status = models.CharField(
        max_length=20,
        choices=PaymentRequestStatus.choices,
        default=PaymentRequestStatus.PENDING
    )

    # Gateway response
    checkout_url = models.URLField(max_length=500, blank=True)
    qr_code = models.TextField(blank=True)

    settled_at = models.DateTimeField(null=True, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payment_requests'
        indexes = [
            models.Index(fields=['member', 'status'], name='payreq_member_status_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"Order {self.order_code} - {self.amount} VND ({self.status})"

    @property
    def is_settled(self):
        return self.status == PaymentRequestStatus.SETTLED
