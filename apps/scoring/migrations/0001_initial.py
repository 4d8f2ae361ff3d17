# Generated manually for scoring app

import uuid
from decimal import Decimal
import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('members', '0001_initial'),
        ('matches', '0001_initial'),
        ('payments', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='LiveEvent',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('type', models.CharField(max_length=50)),
                ('minute', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('second', models.PositiveSmallIntegerField(blank=True, null=True, validators=[django.core.validators.MaxValueValidator(59)])),
                ('note', models.CharField(blank=True, max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('match', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='live_events', to='matches.match')),
                ('member', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='live_events', to='members.member')),
            ],
            options={
                'db_table': 'live_events',
                'ordering': ['created_at'],
                'indexes': [
                    models.Index(fields=['match', 'created_at'], name='live_events_match_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ActionConfig',
            fields=[
                ('key', models.SlugField(primary_key=True, serialize=False)),
                ('label', models.CharField(max_length=100)),
                ('kind', models.CharField(choices=[('ok', 'Positive'), ('bad', 'Negative')], default='ok', max_length=3)),
                ('weight', models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('color', models.CharField(blank=True, max_length=100)),
                ('order', models.PositiveSmallIntegerField(default=0)),
                ('is_negative', models.BooleanField(default=False)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'action_configs',
                'ordering': ['order', 'key'],
            },
        ),
        migrations.CreateModel(
            name='ScoringWeights',
            fields=[
                ('key', models.CharField(default='scoring_weights', editable=False, max_length=32, primary_key=True, serialize=False)),
                ('weights', models.JSONField(default=dict)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'scoring_weights',
            },
        ),
        migrations.CreateModel(
            name='Rating',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('player_ratings', models.JSONField(default=list)),
                ('channel', models.CharField(choices=[('PAYOS', 'Submitted with payment'), ('DIRECT_CLIENT', 'Submitted directly')], max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('match', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='ratings', to='matches.match')),
                ('mvp', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='mvp_votes', to='members.member')),
                ('payment_request', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='ratings_written', to='payments.paymentrequest')),
                ('rated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='ratings_given', to='members.member')),
            ],
            options={
                'db_table': 'ratings',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['match', 'created_at'], name='ratings_match_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='AdminRating',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('score', models.DecimalField(decimal_places=2, max_digits=4, validators=[django.core.validators.MinValueValidator(Decimal('0')), django.core.validators.MaxValueValidator(Decimal('5'))])),
                ('notes', models.TextField(blank=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('match', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='admin_ratings', to='matches.match')),
                ('member', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='admin_ratings', to='members.member')),
            ],
            options={
                'db_table': 'admin_ratings',
                'unique_together': {('match', 'member')},
            },
        ),
    ]
