# Generated manually for payments app

import uuid
import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('members', '0001_initial'),
        ('matches', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Share',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('team_code', models.CharField(blank=True, max_length=8)),
                ('amount', models.PositiveIntegerField()),
                ('status', models.CharField(choices=[('PENDING', 'Pending'), ('PAID', 'Paid'), ('CANCELLED', 'Cancelled')], default='PENDING', max_length=20)),
                ('channel', models.CharField(blank=True, choices=[('PAYOS', 'PayOS'), ('MANUAL', 'Manual'), ('CREDITOR', 'Creditor')], max_length=20)),
                ('calculation', models.JSONField(blank=True, default=dict)),
                ('payos_order_code', models.BigIntegerField(blank=True, db_index=True, null=True)),
                ('paid_at', models.DateTimeField(blank=True, null=True)),
                ('meta', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('match', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='shares', to='matches.match')),
                ('member', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='shares', to='members.member')),
            ],
            options={
                'db_table': 'shares',
                'ordering': ['created_at'],
                'unique_together': {('match', 'member')},
                'indexes': [
                    models.Index(fields=['member', 'status'], name='shares_member_status_idx'),
                    models.Index(fields=['match', 'status'], name='shares_match_status_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='PaymentRequest',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('order_code', models.BigIntegerField(unique=True)),
                ('amount', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('ratings', models.JSONField(blank=True, default=list)),
                ('status', models.CharField(choices=[('PENDING', 'Pending'), ('SETTLED', 'Settled')], default='PENDING', max_length=20)),
                ('checkout_url', models.URLField(blank=True, max_length=500)),
                ('qr_code', models.TextField(blank=True)),
                ('settled_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('member', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='payment_requests', to='members.member')),
                ('shares', models.ManyToManyField(related_name='payment_requests', to='payments.share')),
            ],
            options={
                'db_table': 'payment_requests',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['member', 'status'], name='payreq_member_status_idx'),
                ],
            },
        ),
    ]
