import hashlib
import logging
import random
from collections import defaultdict
from dataclasses import dataclass

from django.conf import settings
from django.utils import timezone

from .exceptions import GenerationFailed, InsufficientData
from .models import GRID_SIZE
from .store import PuzzleStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 100
SHOWS_PER_GRID = GRID_SIZE * 2


@dataclass
class Grid:
    seed: str
    attempt: int
    row_show_ids: list
    col_show_ids: list
    # counts[r][c] = number of eligible people in both row show r and column show c
    counts: list

    def cells(self):
        for r in range(GRID_SIZE):
            for c in range(GRID_SIZE):
                yield r, c, self.counts[r][c]


def build_show_people(appearances):
    """appearances: iterable of (person_id, show_id). Returns {show_id: set(person_id)}."""
    show_people = defaultdict(set)
    for person_id, show_id in appearances:
        show_people[show_id].add(person_id)
    return dict(show_people)


def seed_for(target_date, attempt):
    return f"{target_date.isoformat()}:{attempt}"


def rng_for(seed):
    """
    Seeded PRNG for one attempt.

    The seed string is hashed with SHA-256 and the first 8 bytes (big-endian)
    seed Python's Mersenne Twister. Changing this changes every past and
    future date's grid, so treat it as a fixed format.
    """
    digest = hashlib.sha256(seed.encode('utf-8')).digest()
    return random.Random(int.from_bytes(digest[:8], 'big'))


def score_grid(show_people, row_show_ids, col_show_ids):
    """
    Returns the 3x3 intersection counts, or None as soon as one cell is empty.
    """
    counts = []
    for row_show in row_show_ids:
        row_people = show_people[row_show]
        row_counts = []
        for col_show in col_show_ids:
            count = len(row_people & show_people[col_show])
            if count == 0:
                return None
            row_counts.append(count)
        counts.append(row_counts)
    return counts


def find_grid(show_people, target_date, max_attempts=DEFAULT_MAX_ATTEMPTS):
    # Shows nobody eligible appeared in can't help any cell
    available = sorted(show for show, people in show_people.items() if people)

    if len(available) < SHOWS_PER_GRID:
        raise InsufficientData(
            f"Only {len(available)} shows have eligible people; {SHOWS_PER_GRID} are needed."
        )

    for attempt in range(1, max_attempts + 1):
        seed = seed_for(target_date, attempt)
        shuffled = list(available)
        rng_for(seed).shuffle(shuffled)

        row_show_ids = shuffled[:GRID_SIZE]
        col_show_ids = shuffled[GRID_SIZE:SHOWS_PER_GRID]

        counts = score_grid(show_people, row_show_ids, col_show_ids)
        if counts is not None:
            logger.info("Found valid grid for %s on attempt %d", target_date, attempt)
            return Grid(seed, attempt, row_show_ids, col_show_ids, counts)

    raise GenerationFailed(
        f"No valid grid for {target_date} after {max_attempts} attempts "
        f"({len(available)} shows available)."
    )


def generate_puzzle_for_date(target_date=None, store=None, max_attempts=None):
    if target_date is None:
        target_date = timezone.localdate()
    if store is None:
        store = PuzzleStore()
    if max_attempts is None:
        max_attempts = getattr(settings, 'REALITYGRID_MAX_ATTEMPTS', DEFAULT_MAX_ATTEMPTS)

    logger.info("Generating puzzle for %s...", target_date)

    # 1. Load eligible appearances into memory
    show_people = build_show_people(store.read_eligible_appearances())
    logger.info("Available shows with eligible people: %d", len(show_people))

    # 2. Search
    grid = find_grid(show_people, target_date, max_attempts)

    # 3. Persist. Header first, then cells; readers treat a header without 9 cells as not ready.
    puzzle = store.upsert_daily_puzzle(target_date, grid.seed, grid.row_show_ids, grid.col_show_ids)
    store.upsert_daily_cells(puzzle, list(grid.cells()))

    logger.info("Puzzle %s saved for %s, cell counts %s", puzzle.id, target_date, grid.counts)
    return puzzle
