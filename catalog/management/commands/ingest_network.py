from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from catalog.ingest import NetworkIngest
from catalog.tmdb import TMDBClient, TMDBError


class Command(BaseCommand):
    help = "Fetches a TV network's shows, cast and guest stars from TMDB and merges them into the catalog."

    def add_arguments(self, parser):
        parser.add_argument(
            '--network',
            type=int,
            default=getattr(settings, 'TMDB_NETWORK_ID', 74),
            help="TMDB network id to crawl (74 = Bravo)."
        )
        parser.add_argument(
            '--pages',
            type=int,
            default=getattr(settings, 'TMDB_DISCOVER_PAGES', 3),
            help="Number of discover pages to read (20 shows per page)."
        )
        parser.add_argument(
            '--exclude',
            type=int,
            nargs='*',
            default=[],
            help="Show ids to leave out of the catalog."
        )

    def handle(self, *args, **options):
        if not getattr(settings, 'TMDB_READ_TOKEN', ''):
            raise CommandError("TMDB_READ_TOKEN is not configured.")

        ingest = NetworkIngest(TMDBClient(), excluded_show_ids=options['exclude'])

        self.stdout.write(self.style.NOTICE(
            f"Crawling network {options['network']} ({options['pages']} pages)..."
        ))
        try:
            result = ingest.crawl(options['network'], pages=options['pages'])
        except TMDBError as e:
            raise CommandError(f"Crawl failed: {e}")

        self.stdout.write(
            f"Found {len(result.shows)} shows, {len(result.people)} people, "
            f"{len(result.appearances)} appearances"
        )
        created = ingest.save(result)
        self.stdout.write(self.style.SUCCESS(f"Catalog updated ({created} new appearances)."))
        self.stdout.write("Run derive_eligibility before generating puzzles.")
