"""
Watch manager orchestrating episode resolution, progress sync and file relocation.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .bindings import BindingStore
from .candidate_resolver import CandidateResolver
from .config_store import ConfigStore, DEFAULT_CONFIG_PATH
from .errors import InvalidArgumentsError, WorkingDirectoryMissingError
from .filename_parser import parse_release_filename
from .kitsu_client import KitsuClient
from .models import LibraryEntry
from .progress_sync import ProgressSynchronizer, ProgressUpdater, target_progress
from .relocator import relocate

logger = logging.getLogger(__name__)


@dataclass
class WatchResult:
    file_name: str
    entry: LibraryEntry
    completed: bool = False
    destination: Optional[Path] = None


class WatchManager:
    """Runs one resolve -> update -> relocate sequence for a watched episode."""

    def __init__(self, config_store: Optional[ConfigStore] = None,
                 updater: Optional[ProgressUpdater] = None, **config):
        self.config = config
        self.config_store = config_store or ConfigStore(config.get('config_path') or DEFAULT_CONFIG_PATH)
        self.client = updater or KitsuClient(
            self.config_store,
            username=config.get('kitsu_username'),
            password=config.get('kitsu_password')
        )
        self.bindings = BindingStore(self.config_store)
        self.resolver = CandidateResolver(self.bindings)
        self.synchronizer = ProgressSynchronizer(self.client, self.config_store, self.bindings)

    def watch(self, search_term: str, file_episode: str, forced_episode: Optional[str],
              working_dir: str) -> WatchResult:
        """
        Mark an episode file as watched

        Args:
            search_term: Freeform name used to find the file and the cached entry
            file_episode: Episode number of the file, as typed by the operator
            forced_episode: Progress to set instead of the file episode ('' or '0' for none)
            working_dir: Directory holding the episode files

        Returns:
            WatchResult describing the matched entry and where the file went
        """
        directory = Path(working_dir)
        term, episode, forced = self._validate_params(search_term, file_episode, forced_episode, directory)
        logger.info(f"Working directory: {directory}")

        file_name = self.resolver.resolve_candidate_files(directory, term, episode)[0]
        parsed = parse_release_filename(file_name)

        cache = self.config_store.get_cache()
        index, entry = self.resolver.resolve_cache_entry(cache, term, parsed.binding_title)

        if self.config.get('dry_run'):
            progress = target_progress(forced, episode)
            logger.info(f"[DRY RUN] Would set '{entry.original_title}' to episode {progress}")
            logger.info(f"[DRY RUN] Would move {file_name} to the watched directory")
            return WatchResult(file_name=file_name, entry=entry)

        completed = self.synchronizer.synchronize(cache, index, forced, episode, parsed.binding_title)
        self._report_progress(entry)

        destination = relocate(file_name, directory)
        return WatchResult(file_name=file_name, entry=entry, completed=completed, destination=destination)

    def refresh_cache(self) -> int:
        """Replace the cached watch list with the current one from Kitsu"""
        logger.info("🔄 Refreshing watch list cache...")
        entries = self.client.fetch_watching_entries()

        if self.config.get('dry_run'):
            logger.info(f"[DRY RUN] Would cache {len(entries)} entries")
            return len(entries)

        self.config_store.set_cache(entries)
        self.config_store.save()
        logger.info(f"✅ Cached {len(entries)} entries")
        return len(entries)

    def _validate_params(self, search_term: str, file_episode: str, forced_episode: Optional[str],
                         directory: Path):
        if not directory.is_dir():
            raise WorkingDirectoryMissingError(str(directory))

        term = (search_term or '').strip().lower()
        if not term:
            raise InvalidArgumentsError("An episode name is required")

        episode = self._to_episode_number(file_episode, 'episode')
        if episode is None or episode <= 0:
            raise InvalidArgumentsError(f"Episode number must be a positive integer: {file_episode}")

        forced = self._to_episode_number(forced_episode, 'forced episode')
        return term, episode, forced

    def _to_episode_number(self, value: Optional[str], label: str) -> Optional[int]:
        if value is None or str(value).strip() == '':
            return None

        try:
            number = int(str(value).strip())
        except ValueError:
            raise InvalidArgumentsError(f"The {label} must be a number: {value}") from None

        if number < 0:
            raise InvalidArgumentsError(f"The {label} cannot be negative: {value}")
        return number

    def _report_progress(self, entry: LibraryEntry) -> None:
        logger.info(f"Jap Title: {entry.original_title}")
        logger.info(f"Eng Title: {entry.localized_title}")
        logger.info(f"Progress Set: {entry.episode_progress} / {entry.episode_count or 'unknown'}")
