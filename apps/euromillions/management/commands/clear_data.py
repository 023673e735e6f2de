from __future__ import annotations

from django.core.management.base import BaseCommand

from ...apps import get_services


class Command(BaseCommand):
    help = 'Delete all draws, predictions and models, then recreate the default active model.'

    def add_arguments(self, parser):
        parser.add_argument('--noinput', action='store_true', help='Do not ask for confirmation')

    def handle(self, *args, **options):
        storage = get_services().storage
        if not options.get('noinput'):
            answer = input(f'This removes all data from the {storage.name} storage. Continue? [y/N] ')
            if answer.strip().lower() not in ('y', 'yes'):
                self.stdout.write(self.style.WARNING('Aborted.'))
                return

        storage.clear_all_data()
        active = storage.get_active_model()
        self.stdout.write(self.style.SUCCESS(
            f'Cleared {storage.name} storage; active model {active.version if active else "none"}.'
        ))
