from django.db import models


def classify_appearance(episode_count, guest_episode_count):
    """
    Derives the appearance kind from the two episode counters.
    'both' if the person was cast AND guested, otherwise whichever is non-zero.
    Returns None when neither counter is positive.
    """
    main = (episode_count or 0) > 0
    guest = (guest_episode_count or 0) > 0
    if main and guest:
        return Appearance.KIND_BOTH
    if main:
        return Appearance.KIND_MAIN
    if guest:
        return Appearance.KIND_GUEST
    return None


class Show(models.Model):
    """
    A TV show pulled from TMDB. The TMDB id is used as the primary key
    so re-ingestion updates rows instead of duplicating them.
    """
    id = models.IntegerField(primary_key=True)
    name = models.CharField(max_length=500)
    poster_path = models.CharField(max_length=500, null=True, blank=True)

    # Position in the network's popularity listing at ingestion time (1 = most popular)
    popularity_rank = models.IntegerField(default=0)

    def __str__(self):
        return self.name

    class Meta:
        ordering = ['popularity_rank', 'name']


class Person(models.Model):
    """
    A cast member or guest star. distinct_show_count and is_eligible are a cache
    over the Appearance table and are only as fresh as the last derive_eligibility run.
    """
    id = models.IntegerField(primary_key=True)
    name = models.CharField(max_length=500)
    profile_path = models.CharField(max_length=500, null=True, blank=True)

    distinct_show_count = models.IntegerField(default=0)
    is_eligible = models.BooleanField(default=False, db_index=True)

    def __str__(self):
        return self.name

    class Meta:
        verbose_name_plural = "People"
        ordering = ['name']


class Appearance(models.Model):
    KIND_MAIN = 'main'
    KIND_GUEST = 'guest'
    KIND_BOTH = 'both'
    KIND_CHOICES = [
        (KIND_MAIN, 'Main cast'),
        (KIND_GUEST, 'Guest star'),
        (KIND_BOTH, 'Main cast and guest'),
    ]

    show = models.ForeignKey(Show, on_delete=models.CASCADE, related_name="appearances")
    person = models.ForeignKey(Person, on_delete=models.CASCADE, related_name="appearances")

    episode_count = models.IntegerField(null=True, blank=True)
    guest_episode_count = models.IntegerField(null=True, blank=True)
    kind = models.CharField(max_length=5, choices=KIND_CHOICES, null=True, blank=True)

    def save(self, *args, **kwargs):
        self.kind = classify_appearance(self.episode_count, self.guest_episode_count)
        super().save(*args, **kwargs)

    def merge_counts(self, episode_count=0, guest_episode_count=0):
        # Cast credits are totals (take the max), guest credits are per-episode hits (add them up)
        self.episode_count = max(self.episode_count or 0, episode_count or 0)
        self.guest_episode_count = (self.guest_episode_count or 0) + (guest_episode_count or 0)
        self.kind = classify_appearance(self.episode_count, self.guest_episode_count)

    def __str__(self):
        return f"{self.person_id} in {self.show_id}"

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['show', 'person'], name='unique_show_person'),
        ]
