from django.core.management.base import BaseCommand, CommandError

from catalog.eligibility import derive_eligibility
from catalog.exceptions import StoreError


class Command(BaseCommand):
    help = "Recomputes distinct_show_count and is_eligible for every person from the appearance table."

    def add_arguments(self, parser):
        parser.add_argument(
            '--min-shows',
            type=int,
            default=None,
            help="Override the distinct show threshold (defaults to REALITYGRID_MIN_SHOWS)."
        )

    def handle(self, *args, **options):
        self.stdout.write("Deriving eligibility for people...")
        try:
            stats = derive_eligibility(min_shows=options['min_shows'])
        except StoreError as e:
            raise CommandError(f"Failed to derive eligibility: {e}")

        self.stdout.write("=" * 30)
        self.stdout.write(f"Total people: {stats.total}")
        self.stdout.write(self.style.SUCCESS(f"Eligible people: {stats.eligible}"))
        self.stdout.write(f"Eligibility rate: {stats.rate:.2f}%")
        self.stdout.write("=" * 30)
