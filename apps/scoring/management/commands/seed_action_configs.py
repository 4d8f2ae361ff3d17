"""
Management command to seed the built-in live-note actions.

Creates the nine built-in actions with their default labels and weights,
or resets them if they already exist. Custom actions are not touched.

Usage:
    python manage.py seed_action_configs
    python manage.py seed_action_configs --dry-run
"""

from django.core.management.base import BaseCommand

from apps.scoring.services import seed_default_action_configs, snapshot_configured_weights


class Command(BaseCommand):
    help = 'Create or reset the built-in action configs with default weights'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be seeded without making changes',
        )
        parser.add_argument(
            '--snapshot',
            action='store_true',
            help='Also save the resulting weights as the scoring snapshot',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']

        created, updated = seed_default_action_configs(dry_run=dry_run)

        for key in created:
            self.stdout.write(f'  + {key}')
        for key in updated:
            self.stdout.write(f'  ~ {key}')

        if dry_run:
            self.stdout.write(
                self.style.WARNING(
                    f'\n--dry-run mode: would create {len(created)} and update {len(updated)} action(s).'
                )
            )
            return

        if options['snapshot']:
            snapshot_configured_weights()
            self.stdout.write('Scoring weights snapshot saved.')

        self.stdout.write(
            self.style.SUCCESS(f'\n✓ Seeded {len(created)} new and {len(updated)} existing action(s)!')
        )
