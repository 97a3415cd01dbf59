"""
Kitsu Client - Orchestrates authentication and API operations
"""

import logging
from typing import Optional, List, Tuple

from .config_store import ConfigStore
from .errors import RemoteUpdateError
from .kitsu_api import KitsuAPI
from .kitsu_auth import KitsuAuth
from .models import LibraryEntry

logger = logging.getLogger(__name__)


class KitsuClient:
    """High-level Kitsu client used as the remote progress updater"""

    def __init__(self, config: ConfigStore, username: Optional[str] = None,
                 password: Optional[str] = None, api: Optional[KitsuAPI] = None):
        self.config = config
        self.auth = KitsuAuth(config, username, password)
        self.api = api or KitsuAPI()

    def update_progress(self, library_id: str, progress: int) -> Tuple[int, Optional[int]]:
        """Update progress remotely, returning (confirmed_progress, episode_count)"""
        token = self.auth.authenticate()
        logger.debug(f"Setting library entry {library_id} progress to {progress}")
        try:
            return self.api.update_library_entry(library_id, progress, token)
        except RemoteUpdateError as e:
            self._drop_rejected_token(e)
            raise

    def fetch_watching_entries(self) -> List[LibraryEntry]:
        """Fetch the user's current watch list, resolving and caching the user ID"""
        token = self.auth.authenticate()

        try:
            user_id = self.config.get_user_id()
            if not user_id:
                user_id = self.api.get_current_user_id(token)
                self.config.set_user_id(user_id)

            return self.api.get_watching_entries(user_id, token)
        except RemoteUpdateError as e:
            self._drop_rejected_token(e)
            raise

    def _drop_rejected_token(self, error: RemoteUpdateError) -> None:
        if error.status_code == 401:
            self.auth.invalidate()
