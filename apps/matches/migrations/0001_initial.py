# Generated manually for matches app

import uuid
from decimal import Decimal
import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('members', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Match',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date', models.DateField()),
                ('total_amount', models.PositiveIntegerField(blank=True, null=True)),
                ('team_count', models.PositiveSmallIntegerField(default=2)),
                ('status', models.CharField(choices=[('PENDING', 'Open for attendance'), ('PUBLISHED', 'Published')], default='PENDING', max_length=20)),
                ('is_deleted', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'matches',
                'ordering': ['-date', '-created_at'],
                'indexes': [
                    models.Index(fields=['status', 'date'], name='matches_status_date_idx'),
                    models.Index(fields=['is_deleted', 'date'], name='matches_deleted_date_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='MatchTeam',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('code', models.CharField(max_length=8)),
                ('name', models.CharField(max_length=100)),
                ('percent', models.DecimalField(decimal_places=2, max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal('0')), django.core.validators.MaxValueValidator(Decimal('100'))])),
                ('match', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='teams', to='matches.match')),
            ],
            options={
                'db_table': 'match_teams',
                'ordering': ['code'],
                'unique_together': {('match', 'code')},
            },
        ),
        migrations.CreateModel(
            name='RosterEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('position', models.PositiveSmallIntegerField(default=0)),
                ('percent', models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0')), django.core.validators.MaxValueValidator(Decimal('100'))])),
                ('reason', models.CharField(blank=True, max_length=200)),
                ('member', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='roster_entries', to='members.member')),
                ('team', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='entries', to='matches.matchteam')),
            ],
            options={
                'db_table': 'roster_entries',
                'ordering': ['team', 'position'],
                'unique_together': {('team', 'member')},
            },
        ),
        migrations.CreateModel(
            name='Attendance',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('match', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='attendance', to='matches.match')),
                ('member', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='attendance', to='members.member')),
            ],
            options={
                'db_table': 'attendance',
                'ordering': ['created_at'],
                'unique_together': {('match', 'member')},
            },
        ),
        migrations.CreateModel(
            name='LastMatchConfig',
            fields=[
                ('key', models.CharField(default='last_match', editable=False, max_length=32, primary_key=True, serialize=False)),
                ('team_count', models.PositiveSmallIntegerField(default=2)),
                ('teams', models.JSONField(blank=True, default=list)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'match_configs',
            },
        ),
    ]
