from __future__ import annotations

from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from ...apps import get_services
from ...services.ingestion import ingest_csv


class Command(BaseCommand):
    help = 'Ingest historical EuroMillions draws from a CSV file.'

    def add_arguments(self, parser):
        parser.add_argument('path', type=str, help='CSV file with a header row')
        parser.add_argument('--encoding', type=str, default='utf-8-sig', help='File encoding')

    def handle(self, *args, **options):
        path = Path(options['path'])
        if not path.is_file():
            raise CommandError(f'CSV file not found: {path}')

        try:
            content = path.read_text(encoding=options['encoding'], errors='replace')
        except (OSError, LookupError) as exc:
            raise CommandError(f'Could not read {path}: {exc}') from exc

        storage = get_services().storage
        result = ingest_csv(content, storage)
        self.stdout.write(self.style.SUCCESS(
            f'Processed {result.lines_seen} lines, stored {result.records_processed} draws '
            f'({storage.name} storage), skipped {result.lines_skipped}.'
        ))
