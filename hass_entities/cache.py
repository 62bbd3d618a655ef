"""
In-memory cache of the last fetched Home Assistant entities
"""
import logging
import threading
from typing import Iterable, List

from hass_entities.models import Entity

logger = logging.getLogger(__name__)


class EntityCache:
    """Holds the most recent entity snapshot behind a lock.

    The stored sequence is only ever swapped as a whole, so readers see either
    the previous snapshot or the new one.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._entities: List[Entity] = []

    def replace(self, entities: Iterable[Entity]) -> None:
        """Discard the cached entities and install a copy of the new ones"""
        new_entities = list(entities)
        with self._lock:
            self._entities = new_entities
        logger.debug(f"Cached {len(new_entities)} entities")

    def snapshot(self) -> List[Entity]:
        """Return a copy of the cached entities"""
        with self._lock:
            return list(self._entities)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entities)
