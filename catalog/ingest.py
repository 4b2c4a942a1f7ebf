"""
Pulls a network's shows and their cast/guest credits from TMDB into the catalog.

Crawl:
1. Discover the network's shows, most popular first (popularity_rank = listing position).
2. For every show, read aggregate_credits for the main cast. A cast member's
   episode_count is the sum of their role episode counts (1 if TMDB gives none).
3. Scan the first few episodes of the first few seasons for guest stars.
   Each episode a person guests in adds 1 to guest_episode_count.

Save:
Shows and people are upserted by TMDB id. Appearances are merged into any
existing (show, person) row: episode_count takes the max, guest_episode_count
is added on.
"""
import logging
import time
from dataclasses import dataclass, field

from django.db import transaction

from .models import Appearance, Person, Show
from .tmdb import TMDBError

logger = logging.getLogger(__name__)

MAX_SEASONS_TO_SCAN = 2
MAX_EPISODES_PER_SEASON = 3
# Shows with more seasons than this are long-running franchises; guest scanning them is not worth the calls
MAX_SEASONS_FOR_GUEST_SCAN = 15


@dataclass
class CrawlResult:
    shows: dict = field(default_factory=dict)
    people: dict = field(default_factory=dict)
    # (show_id, person_id) -> [episode_count, guest_episode_count]
    appearances: dict = field(default_factory=dict)


class NetworkIngest:

    def __init__(self, client, delay=0.1, excluded_show_ids=()):
        self.client = client
        self.delay = delay
        self.excluded_show_ids = set(excluded_show_ids)

    def pause(self):
        if self.delay:
            time.sleep(self.delay)

    def crawl(self, network_id, pages=3):
        result = CrawlResult()

        for page in range(1, pages + 1):
            shows = self.client.discover_network_shows(network_id, page=page)
            for idx, show in enumerate(shows):
                if show['id'] in self.excluded_show_ids or show['id'] in result.shows:
                    continue
                result.shows[show['id']] = {
                    'name': show.get('name') or 'Unknown',
                    'poster_path': show.get('poster_path'),
                    'popularity_rank': (page - 1) * 20 + idx + 1,
                }
            self.pause()

        logger.info("Discovered %d shows on network %s", len(result.shows), network_id)

        for show_id in result.shows:
            self.collect_main_cast(show_id, result)
            self.pause()
            self.collect_guest_stars(show_id, result)

        return result

    def remember_person(self, person, result):
        result.people[person['id']] = {
            'name': person.get('name') or 'Unknown',
            'profile_path': person.get('profile_path'),
        }

    def collect_main_cast(self, show_id, result):
        try:
            cast = self.client.aggregate_credits(show_id)
        except TMDBError as e:
            logger.warning("No main cast credits for show %s: %s", show_id, e)
            return

        for person in cast:
            if not person.get('id'):
                continue
            self.remember_person(person, result)
            episodes = sum(role.get('episode_count') or 0 for role in person.get('roles', [])) or 1
            counts = result.appearances.setdefault((show_id, person['id']), [0, 0])
            counts[0] = max(counts[0], episodes)

    def collect_guest_stars(self, show_id, result):
        try:
            details = self.client.show_details(show_id)
        except TMDBError as e:
            logger.warning("Could not read details for show %s, skipping guest scan: %s", show_id, e)
            return

        seasons = details.get('number_of_seasons') or 0
        if seasons == 0 or seasons > MAX_SEASONS_FOR_GUEST_SCAN:
            return

        for season in range(1, min(MAX_SEASONS_TO_SCAN, seasons) + 1):
            for episode in range(1, MAX_EPISODES_PER_SEASON + 1):
                try:
                    guests = self.client.episode_guest_stars(show_id, season, episode)
                except TMDBError:
                    break  # episode doesn't exist
                for person in guests:
                    if not person.get('id'):
                        continue
                    self.remember_person(person, result)
                    counts = result.appearances.setdefault((show_id, person['id']), [0, 0])
                    counts[1] += 1
                self.pause()

    @transaction.atomic
    def save(self, result):
        for show_id, data in result.shows.items():
            Show.objects.update_or_create(id=show_id, defaults=data)

        for person_id, data in result.people.items():
            Person.objects.update_or_create(id=person_id, defaults=data)

        existing = {
            (a.show_id, a.person_id): a
            for a in Appearance.objects.filter(show_id__in=list(result.shows))
        }

        created = 0
        for (show_id, person_id), (episodes, guest_episodes) in result.appearances.items():
            appearance = existing.get((show_id, person_id))
            if appearance is None:
                appearance = Appearance(show_id=show_id, person_id=person_id)
                created += 1
            appearance.merge_counts(episodes, guest_episodes)
            appearance.save()

        logger.info(
            "Saved %d shows, %d people, %d appearances (%d new)",
            len(result.shows), len(result.people), len(result.appearances), created,
        )
        return created
