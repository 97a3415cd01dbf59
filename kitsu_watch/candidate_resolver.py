"""
Episode File and Library Entry Resolution
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from .bindings import BindingStore
from .errors import (
    AmbiguousEntriesError,
    AmbiguousFilesError,
    EntryNotFoundError,
    FileNotFoundForEpisodeError,
)
from .filename_parser import episode_token, has_bracket_tag
from .models import LibraryEntry

logger = logging.getLogger(__name__)

DISPLAY_TITLE_LENGTH = 60


class CandidateResolver:
    """Narrows the working directory and the library cache down to exactly one match"""

    def __init__(self, bindings: Optional[BindingStore] = None):
        self.bindings = bindings

    def resolve_candidate_files(self, directory: Path, search_term: str, episode_number: int) -> List[str]:
        """
        Find release files for a search term and episode number

        Args:
            directory: Working directory to list
            search_term: Case-insensitive substring of the file name
            episode_number: Episode, matched as the literal "- NN" token

        Returns:
            The single matching file name, as a one-element list

        Raises:
            FileNotFoundForEpisodeError: nothing matches
            AmbiguousFilesError: more than one file matches
        """
        term = search_term.lower()
        token = episode_token(episode_number)

        candidates = sorted(
            path.name for path in Path(directory).iterdir()
            if path.is_file()
            and has_bracket_tag(path.name)
            and term in path.name.lower()
            and token in path.name
        )

        if not candidates:
            raise FileNotFoundForEpisodeError(search_term, token[2:])

        if len(candidates) > 1:
            raise AmbiguousFilesError([self._display_file_title(name, token) for name in candidates])

        logger.debug(f"Resolved episode file: {candidates[0]}")
        return candidates

    def resolve_cache_entry(self, cache: List[LibraryEntry], search_term: str,
                            file_title: str) -> Tuple[int, LibraryEntry]:
        """
        Find the single cached library entry for a resolved file

        A remembered binding equal to the file's title wins over the search
        term; otherwise the search term must be a substring of exactly one
        entry's original title, localized title or synonym.

        Returns:
            Tuple of (cache_index, entry)
        """
        matches: List[Tuple[int, LibraryEntry]] = []

        if self.bindings:
            bound_ids = {entry.library_id for entry in self.bindings.find_bound_entries(cache, file_title)}
            matches = [(index, entry) for index, entry in enumerate(cache) if entry.library_id in bound_ids]
            if matches:
                logger.debug(f"Using file binding '{file_title.lower()}'")

        if not matches:
            matches = [(index, entry) for index, entry in enumerate(cache) if entry.matches(search_term)]

        if not matches:
            raise EntryNotFoundError(file_title)

        if len(matches) > 1:
            raise AmbiguousEntriesError([entry.original_title for _, entry in matches])

        index, entry = matches[0]
        logger.info(f"✅ Matched '{search_term}' to '{entry.original_title}'")
        return index, entry

    def _display_file_title(self, file_name: str, token: str) -> str:
        title = file_name.split(token)[0].rstrip()
        return f"{truncate(title, DISPLAY_TITLE_LENGTH)} {token}"


def truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + '...'
