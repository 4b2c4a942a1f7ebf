from datetime import timedelta

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from catalog.exceptions import StoreError
from game.exceptions import PuzzleError
from game.management.commands.generate_puzzle import parse_date
from game.utils import generate_puzzle_for_date


class Command(BaseCommand):
    help = 'Generates RealityGrid puzzles for today and the following days (30 days total by default).'

    def add_arguments(self, parser):
        parser.add_argument(
            '--days',
            type=int,
            default=30,
            help='Number of consecutive days to generate.',
        )
        parser.add_argument(
            '--start',
            type=parse_date,
            default=None,
            help='First date to generate (YYYY-MM-DD). Defaults to today.',
        )

    def handle(self, *args, **kwargs):
        start_date = kwargs['start'] or timezone.localdate()
        days_to_generate = kwargs['days']

        self.stdout.write(f"Generating puzzles for {days_to_generate} days starting {start_date}...")

        failed = []
        for i in range(days_to_generate):
            target_date = start_date + timedelta(days=i)

            # Existing puzzles for a date are replaced
            try:
                puzzle = generate_puzzle_for_date(target_date)
                self.stdout.write(self.style.SUCCESS(f"[{target_date}] Success: {puzzle.seed}"))
            except (PuzzleError, StoreError) as e:
                failed.append(target_date)
                self.stdout.write(self.style.ERROR(f"[{target_date}] Failed: {e}"))

        if failed:
            raise CommandError(f"{len(failed)} of {days_to_generate} dates failed.")

        self.stdout.write(self.style.SUCCESS("\nBatch generation complete!"))
