from django.db import transaction

from catalog.store import CatalogStore, reading, writing

from .models import DailyCell, DailyPuzzle


class PuzzleStore(CatalogStore):
    """Catalog reads plus the daily puzzle/cell writes the generator needs."""

    def upsert_daily_puzzle(self, date, seed, row_show_ids, col_show_ids):
        # Replace, not update: the old puzzle's cells go with it
        with writing(f"puzzle for {date}"), transaction.atomic():
            DailyPuzzle.objects.filter(date=date).delete()
            return DailyPuzzle.objects.create(
                date=date,
                seed=seed,
                row_1_id=row_show_ids[0],
                row_2_id=row_show_ids[1],
                row_3_id=row_show_ids[2],
                col_1_id=col_show_ids[0],
                col_2_id=col_show_ids[1],
                col_3_id=col_show_ids[2],
            )

    def upsert_daily_cells(self, puzzle, cells):
        """cells: iterable of (row_idx, col_idx, answer_count)."""
        with writing(f"cells for {puzzle.date}"), transaction.atomic():
            for row_idx, col_idx, answer_count in cells:
                DailyCell.objects.update_or_create(
                    puzzle=puzzle,
                    row_idx=row_idx,
                    col_idx=col_idx,
                    defaults={'answer_count': answer_count},
                )

    def read_puzzle_for_date(self, date):
        with reading(f"puzzle for {date}"):
            return DailyPuzzle.objects.filter(date=date).first()

    def read_puzzle(self, puzzle_id):
        with reading(f"puzzle {puzzle_id}"):
            return DailyPuzzle.objects.filter(id=puzzle_id).first()
