"""
Initialize System Command.

Issues an API key for a client of the BOM API.
"""

from django.core.management.base import BaseCommand
from django.db import transaction


class Command(BaseCommand):
    help = 'Initialize system: issue an API key for the BOM API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--name',
            type=str,
            default='default',
            help='Label of the issued API key'
        )

    def handle(self, *args, **options):
        from infrastructure.persistence.models import ApiKey

        with transaction.atomic():
            api_key, raw_key = ApiKey.objects.issue(name=options['name'])

        self.stdout.write(
            self.style.SUCCESS(f"API key '{api_key}' issued (id={api_key.id})")
        )
        # The raw key is not stored; this is the only place it is shown.
        self.stdout.write(raw_key)
