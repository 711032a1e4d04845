"""Read-through repositories for the Airtable pedagogical content.

Each read first looks up the shared cache under a fixed key. On a miss the
record(s) are fetched from Airtable, stored in the cache and returned. Cache
errors are not swallowed: they reach the caller unchanged.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List

from pix_api.core.cache import cache
from pix_api.schemas.content_schema import Challenge, CourseGroup, Solution
from pix_api.services.airtable import client as airtable
from pix_api.services.airtable.serializers import (
    challenge_serializer,
    course_group_serializer,
    solution_serializer,
)

logger = logging.getLogger(__name__)

CHALLENGES_TABLE = "Epreuves"
COURSE_GROUPS_TABLE = "Groupes de tests"


def _read_through(cache_key: str, fetch: Callable[[], Any]) -> Any:
    cached_value = cache.get(cache_key)
    if cached_value is not None:
        logger.debug("Cache hit: %s", cache_key)
        return cached_value

    logger.debug("Cache miss: %s", cache_key)
    value = fetch()
    cache.set(cache_key, value)
    return value


class CourseGroupRepository:
    CACHE_KEY = "course-group-repository_list"

    def list(self) -> List[CourseGroup]:
        return _read_through(
            self.CACHE_KEY,
            lambda: airtable.get_records(COURSE_GROUPS_TABLE, {}, course_group_serializer),
        )


class ChallengeRepository:
    CACHE_KEY_PREFIX = "challenge-repository_get"

    def get(self, challenge_id: str) -> Challenge:
        return _read_through(
            f"{self.CACHE_KEY_PREFIX}_{challenge_id}",
            lambda: airtable.get_record(CHALLENGES_TABLE, challenge_id, challenge_serializer),
        )


class SolutionRepository:
    """La solution vit dans la même table que l'épreuve, sous une autre clé de cache."""

    CACHE_KEY_PREFIX = "solution-repository_get"

    def get(self, challenge_id: str) -> Solution:
        return _read_through(
            f"{self.CACHE_KEY_PREFIX}_{challenge_id}",
            lambda: airtable.get_record(CHALLENGES_TABLE, challenge_id, solution_serializer),
        )


course_group_repository = CourseGroupRepository()
challenge_repository = ChallengeRepository()
solution_repository = SolutionRepository()
