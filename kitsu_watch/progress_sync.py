"""
Progress synchronizer applying a watched episode to the remote library and the local cache.
"""

import logging
from typing import List, Optional, Protocol, Tuple

from .bindings import BindingStore
from .config_store import ConfigStore
from .models import LibraryEntry

logger = logging.getLogger(__name__)


class ProgressUpdater(Protocol):
    def update_progress(self, library_id: str, progress: int) -> Tuple[int, Optional[int]]:
        ...


def target_progress(explicit_progress: Optional[int], parsed_episode_number: int) -> int:
    """Forced progress wins when given and non-zero, otherwise the file's episode number"""
    return explicit_progress or parsed_episode_number


class ProgressSynchronizer:
    """Updates remote progress, reconciles the cached entry and persists the result."""

    def __init__(self, updater: ProgressUpdater, config: ConfigStore, bindings: BindingStore):
        self.updater = updater
        self.config = config
        self.bindings = bindings

    def synchronize(self, cache: List[LibraryEntry], cache_index: int, explicit_progress: Optional[int],
                    parsed_episode_number: int, file_title: str) -> bool:
        """
        Apply a watched episode to a cached library entry

        Args:
            cache: The library cache, mutated in place
            cache_index: Position of the entry in the cache
            explicit_progress: Operator-forced progress (0/None means not given)
            parsed_episode_number: Episode number from the file name
            file_title: Title parsed from the matched file, used for a new binding

        Returns:
            True if the series was completed and evicted from the cache

        Raises:
            RemoteUpdateError: propagated from the remote updater
        """
        entry = cache[cache_index]
        progress = target_progress(explicit_progress, parsed_episode_number)

        confirmed, total = self.updater.update_progress(entry.library_id, progress)
        entry.episode_progress = confirmed
        entry.episode_count = total or 0

        if entry.is_complete:
            del cache[cache_index]
            completed = self.config.increment_completed_series()
            self.config.set_cache(cache)
            self.config.save()
            logger.info(f"🏁 Completed '{entry.original_title}' ({completed} series completed), removed from cache")
            return True

        if self.bindings.get_binding(entry.library_id) is None:
            self.bindings.set_binding(entry.library_id, file_title)

        cache[cache_index] = entry
        self.config.set_cache(cache)
        self.config.save()
        return False
