"""
File binding accessor

A binding remembers the lowercase on-disk title that belongs to a library
entry once it has been matched unambiguously. Bindings are sticky: an
existing binding is never replaced.
"""

import logging
from typing import Optional, List

from .config_store import ConfigStore
from .models import LibraryEntry

logger = logging.getLogger(__name__)


class BindingStore:
    """Thin lookup/update layer over the persisted file bindings"""

    def __init__(self, config: ConfigStore):
        self.config = config

    def get_binding(self, library_id: str) -> Optional[str]:
        return self.config.get_file_binding(library_id)

    def set_binding(self, library_id: str, title: str) -> bool:
        """Store a binding unless one already exists. Returns True when written."""
        existing = self.get_binding(library_id)
        if existing is not None:
            logger.debug(f"Binding for {library_id} already set to '{existing}', keeping it")
            return False

        self.config.set_file_binding(library_id, title.lower())
        logger.info(f"🔗 Bound library entry {library_id} to '{title.lower()}'")
        return True

    def find_bound_entries(self, cache: List[LibraryEntry], file_title: str) -> List[LibraryEntry]:
        """Entries whose remembered title equals the title parsed from a file"""
        wanted = file_title.lower().strip()
        return [entry for entry in cache if self.get_binding(entry.library_id) == wanted]
