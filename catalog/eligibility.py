"""
Eligibility derivation for the grid game.

A person is "eligible" once they appear in at least MIN_SHOWS distinct shows.
Only eligible people are used when building a daily grid, which keeps every
cell solvable by someone a player has a fair chance of knowing.

The result is a full recompute over the Appearance table, never a delta:
running it twice with the same data gives the same counts, and a failed run
is repaired by the next successful one.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass

from django.conf import settings

from .store import CatalogStore

logger = logging.getLogger(__name__)

DEFAULT_MIN_SHOWS = 3


@dataclass
class EligibilityStats:
    total: int
    eligible: int

    @property
    def rate(self):
        if not self.total:
            return 0.0
        return self.eligible / self.total * 100


def count_distinct_shows(appearances):
    """appearances: iterable of (person_id, show_id). Returns {person_id: distinct show count}."""
    shows_by_person = defaultdict(set)
    for person_id, show_id in appearances:
        shows_by_person[person_id].add(show_id)
    return {person_id: len(shows) for person_id, shows in shows_by_person.items()}


def derive_eligibility(store=None, min_shows=None):
    if store is None:
        store = CatalogStore()
    if min_shows is None:
        min_shows = getattr(settings, 'REALITYGRID_MIN_SHOWS', DEFAULT_MIN_SHOWS)

    appearances = store.read_all_appearances()
    counts = count_distinct_shows(appearances)
    logger.info("Loaded %d appearances for %d people", len(appearances), len(counts))

    # People with no appearance rows still get written back, as ineligible
    person_ids = set(store.read_person_ids()) | set(counts)

    rows = []
    eligible = 0
    for person_id in sorted(person_ids):
        count = counts.get(person_id, 0)
        is_eligible = count >= min_shows
        eligible += is_eligible
        rows.append((person_id, count, is_eligible))

    store.write_person_eligibility(rows)

    stats = EligibilityStats(total=len(rows), eligible=eligible)
    logger.info(
        "Eligibility derived: %d/%d people eligible (%.2f%%, threshold %d shows)",
        stats.eligible, stats.total, stats.rate, min_shows,
    )
    return stats
