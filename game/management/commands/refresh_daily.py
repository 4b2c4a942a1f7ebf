from django.core.management import call_command
from django.core.management.base import BaseCommand

from game.management.commands.generate_puzzle import parse_date


class Command(BaseCommand):
    help = 'Re-derives eligibility and then generates the puzzle for a date. Run after each ingestion pass.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--date',
            type=parse_date,
            default=None,
            help='Target date (YYYY-MM-DD). Defaults to today.',
        )

    def handle(self, *args, **options):
        # Generation reads is_eligible, so derivation has to finish first
        call_command('derive_eligibility', stdout=self.stdout)
        generate_args = []
        if options['date']:
            generate_args = ['--date', options['date'].isoformat()]
        call_command('generate_puzzle', *generate_args, stdout=self.stdout)
