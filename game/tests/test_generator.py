from datetime import date
from types import SimpleNamespace
from unittest import mock

from django.test import SimpleTestCase, TestCase, override_settings

from catalog.models import Person
from game.exceptions import GenerationFailed, InsufficientData
from game.models import DailyCell, DailyPuzzle
from game.utils import (
    build_show_people,
    find_grid,
    generate_puzzle_for_date,
    rng_for,
    score_grid,
    seed_for,
)

from .factories import build_catalog, connected_catalog

TARGET = date(2026, 10, 19)

# A..F as in the worked example: B∩D, D∩E and E∩F are empty
A, B, C, D, E, F = 1, 2, 3, 4, 5, 6
EXAMPLE = {
    A: {1, 2, 3},
    B: {3, 4},
    C: {1, 4, 5},
    D: {2, 5},
    E: {1, 4},
    F: {2, 3, 5},
}


def assert_valid(test, show_people, grid):
    test.assertEqual(len(set(grid.row_show_ids + grid.col_show_ids)), 6)
    for r, row_show in enumerate(grid.row_show_ids):
        for c, col_show in enumerate(grid.col_show_ids):
            live = len(show_people[row_show] & show_people[col_show])
            test.assertGreater(live, 0)
            test.assertEqual(grid.counts[r][c], live)


class SeedTests(SimpleTestCase):

    def test_seed_string(self):
        self.assertEqual(seed_for(TARGET, 7), "2026-10-19:7")

    def test_same_seed_same_sequence(self):
        self.assertEqual(
            [rng_for("2026-10-19:1").random() for _ in range(5)],
            [rng_for("2026-10-19:1").random() for _ in range(5)],
        )

    def test_attempts_are_decorrelated(self):
        self.assertNotEqual(rng_for("2026-10-19:1").random(), rng_for("2026-10-19:2").random())


class FindGridTests(SimpleTestCase):

    def test_example_combination_is_rejected(self):
        self.assertIsNone(score_grid(EXAMPLE, [A, B, C], [D, E, F]))

    def test_valid_combination_is_scored(self):
        show_people = {**EXAMPLE, B: {2, 3, 4}}
        counts = score_grid(show_people, [A, B, C], [D, E, F])
        self.assertEqual(counts, [[1, 1, 2], [1, 1, 2], [1, 2, 1]])

    def test_example_has_no_valid_grid(self):
        # B, D, E and F would all have to sit on the same side
        with self.assertRaises(GenerationFailed):
            find_grid(EXAMPLE, TARGET, max_attempts=50)

    def test_fewer_than_six_shows(self):
        show_people = {k: v for k, v in EXAMPLE.items() if k != F}
        with self.assertRaises(InsufficientData):
            find_grid(show_people, TARGET)

    def test_empty_shows_do_not_count(self):
        show_people = {**EXAMPLE, F: set()}
        with self.assertRaises(InsufficientData):
            find_grid(show_people, TARGET)

    def test_found_grid_is_valid(self):
        show_people = {k: set(v) for k, v in connected_catalog(10).items()}
        grid = find_grid(show_people, TARGET)
        assert_valid(self, show_people, grid)
        self.assertEqual(grid.attempt, 1)
        self.assertEqual(grid.seed, "2026-10-19:1")

    def test_search_skips_failed_attempts(self):
        # Only shows 1-6 share person 1; the rest are isolated
        show_people = {k: set(v) for k, v in connected_catalog(6).items()}
        for show_id in range(7, 10):
            show_people[show_id] = {show_id * 100}
        grid = find_grid(show_people, TARGET, max_attempts=2000)
        assert_valid(self, show_people, grid)
        self.assertEqual(sorted(grid.row_show_ids + grid.col_show_ids), [1, 2, 3, 4, 5, 6])

    def test_same_date_same_grid(self):
        show_people = {k: set(v) for k, v in connected_catalog(12).items()}
        first = find_grid(show_people, TARGET)
        # Insertion order of the map must not matter
        reordered = dict(reversed(list(show_people.items())))
        second = find_grid(reordered, TARGET)
        self.assertEqual(first.row_show_ids, second.row_show_ids)
        self.assertEqual(first.col_show_ids, second.col_show_ids)

    def test_build_show_people(self):
        self.assertEqual(
            build_show_people([(1, 10), (2, 10), (1, 11), (1, 10)]),
            {10: {1, 2}, 11: {1}},
        )


class RecordingStore:
    """Fake store that serves fixed appearances and records writes."""

    def __init__(self, show_people):
        self.appearances = [(p, s) for s, people in show_people.items() for p in people]
        self.writes = []

    def read_eligible_appearances(self):
        return list(self.appearances)

    def upsert_daily_puzzle(self, date, seed, row_show_ids, col_show_ids):
        self.writes.append(('puzzle', date, seed, row_show_ids, col_show_ids))
        return SimpleNamespace(id='fake', date=date, seed=seed)

    def upsert_daily_cells(self, puzzle, cells):
        self.writes.append(('cells', puzzle.id, cells))


class GenerateWithFakeStoreTests(SimpleTestCase):

    def test_insufficient_data_writes_nothing(self):
        store = RecordingStore({k: v for k, v in EXAMPLE.items() if k != F})
        with self.assertRaises(InsufficientData):
            generate_puzzle_for_date(TARGET, store=store)
        self.assertEqual(store.writes, [])

    def test_generation_failed_writes_nothing(self):
        store = RecordingStore(EXAMPLE)
        with self.assertRaises(GenerationFailed):
            generate_puzzle_for_date(TARGET, store=store, max_attempts=10)
        self.assertEqual(store.writes, [])

    def test_writes_header_then_nine_cells(self):
        store = RecordingStore(connected_catalog(8))
        generate_puzzle_for_date(TARGET, store=store)

        self.assertEqual([w[0] for w in store.writes], ['puzzle', 'cells'])
        cells = store.writes[1][2]
        self.assertEqual(len(cells), 9)
        self.assertEqual({(r, c) for r, c, _ in cells}, {(r, c) for r in range(3) for c in range(3)})


class GeneratePuzzleTests(TestCase):

    def setUp(self):
        build_catalog(connected_catalog(8))

    def test_persists_puzzle_and_cells(self):
        puzzle = generate_puzzle_for_date(TARGET)

        self.assertEqual(DailyPuzzle.objects.count(), 1)
        self.assertEqual(puzzle.date, TARGET)
        self.assertTrue(puzzle.seed.startswith("2026-10-19:"))
        self.assertTrue(puzzle.is_ready())
        for cell in DailyCell.objects.filter(puzzle=puzzle):
            self.assertGreater(cell.answer_count, 0)

    def test_stored_counts_match_live_intersections(self):
        puzzle = generate_puzzle_for_date(TARGET)
        show_people = {k: set(v) for k, v in connected_catalog(8).items()}
        for cell in puzzle.cells.all():
            row_show, col_show = puzzle.cell_shows(cell.row_idx, cell.col_idx)
            self.assertEqual(cell.answer_count, len(show_people[row_show] & show_people[col_show]))

    def test_regenerating_replaces(self):
        generate_puzzle_for_date(TARGET)
        puzzle = generate_puzzle_for_date(TARGET)

        self.assertEqual(DailyPuzzle.objects.filter(date=TARGET).count(), 1)
        self.assertEqual(DailyCell.objects.count(), 9)
        self.assertEqual(DailyCell.objects.filter(puzzle=puzzle).count(), 9)

    def test_same_date_same_selection(self):
        first = generate_puzzle_for_date(TARGET)
        first_rows, first_cols = first.row_show_ids, first.col_show_ids
        second = generate_puzzle_for_date(TARGET)
        self.assertEqual(second.row_show_ids, first_rows)
        self.assertEqual(second.col_show_ids, first_cols)

    def test_ineligible_people_are_ignored(self):
        Person.objects.update(is_eligible=False)
        with self.assertRaises(InsufficientData):
            generate_puzzle_for_date(TARGET)
        self.assertEqual(DailyPuzzle.objects.count(), 0)

    @override_settings(REALITYGRID_MAX_ATTEMPTS=1)
    def test_attempt_budget_from_settings(self):
        puzzle = generate_puzzle_for_date(TARGET)
        self.assertEqual(puzzle.seed, "2026-10-19:1")

    @mock.patch('game.utils.timezone.localdate', return_value=TARGET)
    def test_defaults_to_local_date(self, _):
        puzzle = generate_puzzle_for_date()
        self.assertEqual(puzzle.date, TARGET)
        self.assertTrue(puzzle.seed.startswith("2026-10-19:"))
