import logging
import time

import requests
from django.conf import settings

logger = logging.getLogger(__name__)

TMDB_BASE_URL = "https://api.themoviedb.org/3"
TMDB_IMAGE_URL = "https://image.tmdb.org/t/p"
MAX_RETRIES = 3


class TMDBError(Exception):
    pass


def image_url(path, size='w185'):
    if not path:
        return None
    return f"{TMDB_IMAGE_URL}/{size}{path}"


class TMDBClient:
    """Minimal TMDB v3 client. Authenticates with the read-access bearer token."""

    def __init__(self, token=None, session=None, timeout=10):
        self.token = token if token is not None else getattr(settings, 'TMDB_READ_TOKEN', '')
        self.session = session or requests.Session()
        self.timeout = timeout
        self.session.headers.update({
            'Authorization': f'Bearer {self.token}',
            'Accept': 'application/json',
        })

    def get(self, path, **params):
        url = f"{TMDB_BASE_URL}{path}"
        for attempt in range(MAX_RETRIES):
            try:
                response = self.session.get(url, params=params or None, timeout=self.timeout)
            except requests.exceptions.RequestException as e:
                raise TMDBError(f"TMDB {path} request failed: {e}") from e

            if response.status_code in (429, 503):
                # Back off and retry when TMDB is throttling us
                time.sleep(2 ** attempt)
                continue
            if response.status_code != 200:
                raise TMDBError(f"TMDB {path} returned {response.status_code}")
            return response.json()

        raise TMDBError(f"TMDB {path} still unavailable after {MAX_RETRIES} attempts")

    def discover_network_shows(self, network_id, page=1):
        data = self.get('/discover/tv', with_networks=network_id, page=page, sort_by='popularity.desc')
        return data.get('results', [])

    def aggregate_credits(self, show_id):
        return self.get(f'/tv/{show_id}/aggregate_credits').get('cast', [])

    def show_details(self, show_id):
        return self.get(f'/tv/{show_id}')

    def episode_guest_stars(self, show_id, season, episode):
        data = self.get(f'/tv/{show_id}/season/{season}/episode/{episode}/credits')
        return data.get('guest_stars', [])
