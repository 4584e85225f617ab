from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from apps.converter.client.api_client import ConverterApiClient, ConverterApiError
from apps.converter.client.response_cache import ResponseCache


class Command(BaseCommand):
    help = 'Convert an amount between currencies through the converter API'

    def add_arguments(self, parser):
        parser.add_argument('source', type=str, help='Source currency code (e.g. USD)')
        parser.add_argument('target', type=str, help='Target currency code (e.g. EUR)')
        parser.add_argument('amount', type=float, help='Amount to convert')
        parser.add_argument(
            '--base-url',
            dest='base_url',
            default=None,
            help='Converter API base URL (defaults to CONVERTER_API_URL)'
        )
        parser.add_argument(
            '--no-cache',
            action='store_true',
            help='Bypass the local response cache'
        )
        parser.add_argument(
            '--clear-cache',
            action='store_true',
            help='Clear the local response cache before converting'
        )

    def handle(self, **options):
        cache = None if options['no_cache'] else ResponseCache.from_settings()

        if options['clear_cache']:
            removed = ResponseCache.from_settings().clear()
            self.stdout.write(f'Cleared {removed} cached response(s)')

        client = ConverterApiClient(options['base_url'] or settings.CONVERTER_API_URL, cache=cache)

        try:
            result = client.convert(options['source'].upper(), options['target'].upper(), options['amount'])
        except ConverterApiError as e:
            raise CommandError(str(e))

        self.stdout.write(
            self.style.SUCCESS(
                f"{result['amount']} {result['from']} = {result['converted_amount']} {result['to']} "
                f"(rate {result['rate']})"
            )
        )
