class PuzzleError(Exception):
    pass


class InsufficientData(PuzzleError):
    """Fewer than 6 shows have any eligible people, so no grid can be attempted."""


class GenerationFailed(PuzzleError):
    """Every attempt in the budget produced at least one empty cell."""
