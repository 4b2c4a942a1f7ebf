"""
Play-time checks for a single grid cell.

Two different rules apply on purpose:
- solutions_for() lists only ELIGIBLE people in both shows. These are the
  answers the grid was built around and what the "possible answers" peek shows.
- is_valid_cell_answer() accepts ANY person who really appears in both shows,
  eligible or not. Eligibility decides which grids we publish, not which
  guesses count.

Neither is cached from generation time; both read the current appearance data.
"""
from .store import PuzzleStore


def solutions_for(row_show_id, col_show_id, store=None):
    if store is None:
        store = PuzzleStore()

    row_people = store.read_appearances_for_show(row_show_id, eligible_only=True)
    col_people = store.read_appearances_for_show(col_show_id, eligible_only=True)
    intersection = row_people & col_people
    if not intersection:
        return []

    people = store.read_people(intersection)
    return sorted(people, key=lambda person: (person.name, person.id))


def is_valid_cell_answer(person_id, row_show_id, col_show_id, store=None):
    if store is None:
        store = PuzzleStore()
    return store.person_appears_in(person_id, [row_show_id, col_show_id])
