import json
import logging
import uuid

from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_GET, require_POST

from catalog.exceptions import StoreError
from catalog.models import Show
from catalog.tmdb import image_url

from .models import DailyCell
from .store import PuzzleStore
from .validation import is_valid_cell_answer, solutions_for

logger = logging.getLogger(__name__)

MAX_WRONG_GUESSES = 9


def format_show(show_id, shows):
    show = shows.get(show_id)
    return {
        'id': show_id,
        'name': show.name if show else 'Unknown',
        'poster_path': show.poster_path if show else None,
    }


def parse_body(request):
    try:
        data = json.loads(request.body)
    except (ValueError, json.JSONDecodeError):
        return None
    return data if isinstance(data, dict) else None


@require_GET
@ensure_csrf_cookie
def today_puzzle(request):
    store = PuzzleStore()
    today = timezone.localdate()

    try:
        puzzle = store.read_puzzle_for_date(today)
        # A header without its 9 cells is a half-written puzzle, same as no puzzle
        if puzzle is None or not puzzle.is_ready():
            return JsonResponse({'error': 'No puzzle found for today'}, status=404)

        show_ids = puzzle.row_show_ids + puzzle.col_show_ids
        shows = Show.objects.in_bulk(show_ids)
        cells = list(DailyCell.objects.filter(puzzle=puzzle).order_by('row_idx', 'col_idx'))
    except StoreError as e:
        logger.error("Error fetching puzzle for %s: %s", today, e)
        return JsonResponse({'error': 'Failed to fetch puzzle'}, status=500)

    return JsonResponse({
        'puzzle_id': str(puzzle.id),
        'date': puzzle.date.isoformat(),
        'rows': [format_show(show_id, shows) for show_id in puzzle.row_show_ids],
        'cols': [format_show(show_id, shows) for show_id in puzzle.col_show_ids],
        'cells': [
            {'row': c.row_idx, 'col': c.col_idx, 'answer_count': c.answer_count}
            for c in cells
        ],
        'rules': {'max_wrong': MAX_WRONG_GUESSES},
    })


@require_POST
def cell_solutions(request):
    data = parse_body(request)
    if not data or not data.get('row_show_id') or not data.get('col_show_id'):
        return JsonResponse({'error': 'Missing required show IDs'}, status=400)

    try:
        row_show_id = int(data['row_show_id'])
        col_show_id = int(data['col_show_id'])
    except (TypeError, ValueError):
        return JsonResponse({'error': 'Invalid data'}, status=400)

    try:
        people = solutions_for(row_show_id, col_show_id)
    except StoreError as e:
        logger.error("Solutions lookup failed for %s x %s: %s", row_show_id, col_show_id, e)
        return JsonResponse({'error': 'Failed to fetch solutions'}, status=500)

    if not people:
        try:
            warn_if_published_cell_emptied(row_show_id, col_show_id)
        except StoreError as e:
            # The empty answer stands; only the consistency check is lost
            logger.error("Could not check today's puzzle for %s x %s: %s", row_show_id, col_show_id, e)

    solutions = [
        {'id': p.id, 'name': p.name, 'profile_url': image_url(p.profile_path)}
        for p in people
    ]
    return JsonResponse({'solutions': solutions, 'count': len(solutions)})


def warn_if_published_cell_emptied(row_show_id, col_show_id):
    # Eligibility or appearances changed since generation; the player just sees no solutions
    today = timezone.localdate()
    puzzle = PuzzleStore().read_puzzle_for_date(today)
    if puzzle is None:
        return
    for r, row_id in enumerate(puzzle.row_show_ids):
        for c, col_id in enumerate(puzzle.col_show_ids):
            if row_id == row_show_id and col_id == col_show_id:
                cell = puzzle.cells.filter(row_idx=r, col_idx=c).first()
                if cell and cell.answer_count > 0:
                    logger.warning(
                        "Cell [%d,%d] of %s was generated with %d answers but has none now",
                        r, c, puzzle.date, cell.answer_count,
                    )


@require_POST
def validate_guess(request):
    data = parse_body(request)
    if not data:
        return JsonResponse({'error': 'Invalid data'}, status=400)

    puzzle_id = data.get('puzzle_id')
    row = data.get('r')
    col = data.get('c')
    person_id = data.get('person_id')

    if not puzzle_id or row is None or col is None or not person_id:
        return JsonResponse({'error': 'Missing required fields'}, status=400)

    try:
        puzzle_id = uuid.UUID(str(puzzle_id))
        row = int(row)
        col = int(col)
        person_id = int(person_id)
    except (TypeError, ValueError):
        return JsonResponse({'error': 'Invalid data'}, status=400)

    store = PuzzleStore()
    try:
        puzzle = store.read_puzzle(puzzle_id)
        if puzzle is None:
            return JsonResponse({'error': 'Invalid puzzle ID'}, status=404)

        shows = puzzle.cell_shows(row, col)
        if shows is None:
            return JsonResponse({'error': 'Invalid cell coordinates'}, status=400)

        is_correct = is_valid_cell_answer(person_id, shows[0], shows[1], store=store)
    except StoreError as e:
        logger.error("Validation failed for puzzle %s: %s", puzzle_id, e)
        return JsonResponse({'error': 'Failed to validate answer'}, status=500)

    return JsonResponse({'is_correct': is_correct})
