import uuid

from django.db import models

from catalog.models import Show

GRID_SIZE = 3


class DailyPuzzle(models.Model):
    """
    The grid for one calendar day: three row shows and three column shows.
    Every row/column pair must share at least one eligible person.
    Regenerating a date replaces this row (and its cells) entirely.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    date = models.DateField(unique=True)

    # "<date>:<attempt>" - the string the shuffle was seeded from
    seed = models.CharField(max_length=64)

    row_1 = models.ForeignKey(Show, on_delete=models.PROTECT, related_name='+')
    row_2 = models.ForeignKey(Show, on_delete=models.PROTECT, related_name='+')
    row_3 = models.ForeignKey(Show, on_delete=models.PROTECT, related_name='+')
    col_1 = models.ForeignKey(Show, on_delete=models.PROTECT, related_name='+')
    col_2 = models.ForeignKey(Show, on_delete=models.PROTECT, related_name='+')
    col_3 = models.ForeignKey(Show, on_delete=models.PROTECT, related_name='+')

    created_at = models.DateTimeField(auto_now_add=True)

    @property
    def row_show_ids(self):
        return [self.row_1_id, self.row_2_id, self.row_3_id]

    @property
    def col_show_ids(self):
        return [self.col_1_id, self.col_2_id, self.col_3_id]

    def cell_shows(self, row_idx, col_idx):
        """Returns (row_show_id, col_show_id) for a 0-based cell, or None if out of range."""
        if not (0 <= row_idx < GRID_SIZE and 0 <= col_idx < GRID_SIZE):
            return None
        return self.row_show_ids[row_idx], self.col_show_ids[col_idx]

    def is_ready(self):
        # The header and the cells are written separately; without all 9 cells the puzzle isn't playable yet
        return self.cells.count() == GRID_SIZE * GRID_SIZE

    def __str__(self):
        return f"Puzzle {self.date}"

    class Meta:
        ordering = ['-date']


class DailyCell(models.Model):
    puzzle = models.ForeignKey(DailyPuzzle, on_delete=models.CASCADE, related_name='cells')
    row_idx = models.PositiveSmallIntegerField()
    col_idx = models.PositiveSmallIntegerField()

    # How many eligible people answered this cell when the puzzle was generated
    answer_count = models.PositiveIntegerField()

    def __str__(self):
        return f"{self.puzzle.date} [{self.row_idx},{self.col_idx}] = {self.answer_count}"

    class Meta:
        ordering = ['row_idx', 'col_idx']
        constraints = [
            models.UniqueConstraint(fields=['puzzle', 'row_idx', 'col_idx'], name='unique_puzzle_cell'),
        ]
