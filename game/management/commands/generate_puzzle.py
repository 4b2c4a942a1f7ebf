import argparse
from datetime import date

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from catalog.exceptions import StoreError
from game.exceptions import PuzzleError
from game.utils import generate_puzzle_for_date


def parse_date(value):
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Not a YYYY-MM-DD date: {value}")


class Command(BaseCommand):
    help = 'Generates (or regenerates) the daily puzzle for one date.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--date',
            type=parse_date,
            default=None,
            help='Target date (YYYY-MM-DD). Defaults to today.',
        )
        parser.add_argument(
            '--attempts',
            type=int,
            default=None,
            help='Attempt budget (defaults to REALITYGRID_MAX_ATTEMPTS).',
        )

    def handle(self, *args, **options):
        target_date = options['date'] or timezone.localdate()

        try:
            puzzle = generate_puzzle_for_date(target_date, max_attempts=options['attempts'])
        except (PuzzleError, StoreError) as e:
            raise CommandError(f"[{target_date}] {e}")

        self.stdout.write(self.style.SUCCESS(f"[{target_date}] Puzzle {puzzle.id} (seed {puzzle.seed})"))
        for cell in puzzle.cells.all():
            self.stdout.write(f"  [{cell.row_idx},{cell.col_idx}] {cell.answer_count} answers")
