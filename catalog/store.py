import logging
from contextlib import contextmanager

from django.db import DatabaseError, transaction

from .exceptions import StoreReadFailed, StoreWriteFailed
from .models import Appearance, Person

logger = logging.getLogger(__name__)

WRITE_BATCH_SIZE = 500


@contextmanager
def reading(what):
    try:
        yield
    except DatabaseError as e:
        raise StoreReadFailed(f"Failed to read {what}: {e}") from e


@contextmanager
def writing(what):
    try:
        yield
    except DatabaseError as e:
        raise StoreWriteFailed(f"Failed to write {what}: {e}") from e


class CatalogStore:
    """
    ORM-backed access to the show/person/appearance tables.

    The eligibility deriver, grid generator and cell lookup all take a store
    instance instead of querying models directly, so tests can hand them a fake.
    Reads always return the whole relation (no page cap).
    """

    def read_all_appearances(self):
        with reading("appearances"):
            return list(
                Appearance.objects.values_list('person_id', 'show_id').iterator(chunk_size=2000)
            )

    def read_person_ids(self):
        with reading("people"):
            return list(Person.objects.values_list('id', flat=True))

    def write_person_eligibility(self, rows):
        """rows: iterable of (person_id, distinct_show_count, is_eligible)."""
        people = [
            Person(id=person_id, distinct_show_count=count, is_eligible=eligible)
            for person_id, count, eligible in rows
        ]
        with writing("person eligibility"), transaction.atomic():
            Person.objects.bulk_update(
                people,
                ['distinct_show_count', 'is_eligible'],
                batch_size=WRITE_BATCH_SIZE,
            )
        return len(people)

    def read_eligible_appearances(self):
        with reading("eligible appearances"):
            return list(
                Appearance.objects.filter(person__is_eligible=True)
                .values_list('person_id', 'show_id')
                .iterator(chunk_size=2000)
            )

    def read_appearances_for_show(self, show_id, eligible_only=True):
        qs = Appearance.objects.filter(show_id=show_id)
        if eligible_only:
            qs = qs.filter(person__is_eligible=True)
        with reading(f"appearances for show {show_id}"):
            return set(qs.values_list('person_id', flat=True))

    def read_people(self, person_ids):
        with reading("people"):
            return list(Person.objects.filter(id__in=list(person_ids)).order_by('name', 'id'))

    def person_appears_in(self, person_id, show_ids):
        wanted = set(show_ids)
        with reading(f"appearances for person {person_id}"):
            found = set(
                Appearance.objects.filter(person_id=person_id, show_id__in=wanted)
                .values_list('show_id', flat=True)
            )
        return found == wanted
