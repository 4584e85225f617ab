from django.core.management.base import BaseCommand, CommandError

from apps.converter.application.tasks import refresh_rate_cache


class Command(BaseCommand):
    help = 'Refresh the cached exchange rate table from the upstream provider'

    def add_arguments(self, parser):
        parser.add_argument(
            '--sync',
            action='store_true',
            help='Execute synchronously instead of using Celery task queue'
        )

    def handle(self, **options):
        if options['sync']:
            self.stdout.write('Running in synchronous mode...')
            result = refresh_rate_cache()

            if not result['success']:
                raise CommandError(f"Failed: {result.get('message', 'Unknown error')}")

            self.stdout.write(
                self.style.SUCCESS(
                    f"Successfully refreshed {result['currencies']} rates"
                )
            )
        else:
            self.stdout.write('Dispatching Celery task...')
            task = refresh_rate_cache.delay()

            self.stdout.write(
                self.style.SUCCESS(
                    f'Task dispatched with ID: {task.id}'
                )
            )
            self.stdout.write(
                'Use "celery -A core inspect active" to check task status'
            )
