from django.core.management.base import BaseCommand, CommandError

from catalog.exceptions import StoreError
from game.validation import solutions_for


class Command(BaseCommand):
    help = 'Lists the eligible people who appear in both shows.'

    def add_arguments(self, parser):
        parser.add_argument('row_show_id', type=int, help='TMDB id of the row show')
        parser.add_argument('col_show_id', type=int, help='TMDB id of the column show')

    def handle(self, *args, **kwargs):
        try:
            people = solutions_for(kwargs['row_show_id'], kwargs['col_show_id'])
        except StoreError as e:
            raise CommandError(str(e))

        if not people:
            self.stdout.write(self.style.WARNING("No solutions currently."))
            return

        for person in people:
            self.stdout.write(f"{person.name} ({person.id})")
        self.stdout.write(self.style.SUCCESS(f"Total: {len(people)}"))
