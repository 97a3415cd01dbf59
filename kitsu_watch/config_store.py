"""
Persisted Configuration Store

This module keeps the Kitsu token, the currently-watching library cache, the
file bindings and usage stats in a single JSON file.
"""

import json
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Dict, Any, Optional, List

from .errors import ConfigStoreError
from .models import LibraryEntry

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "_cache/config.json"


class ConfigStore:
    """Reads and writes the persisted watch configuration"""

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        self.config_path = Path(config_path)
        self._data = self._load()

    # ==================== Library Cache ====================

    def get_cache(self) -> List[LibraryEntry]:
        """Cached currently-watching entries, in stored order"""
        return [LibraryEntry.from_dict(item) for item in self._kitsu['cache']]

    def set_cache(self, entries: List[LibraryEntry]) -> None:
        self._kitsu['cache'] = [entry.to_dict() for entry in entries]

    # ==================== File Bindings ====================

    def get_file_binding(self, library_id: str) -> Optional[str]:
        return self._kitsu['file_bindings'].get(library_id)

    def set_file_binding(self, library_id: str, title: str) -> None:
        self._kitsu['file_bindings'][library_id] = title

    # ==================== Kitsu Authentication ====================

    def save_kitsu_auth(self, access_token: str, refresh_token: Optional[str], expires_in: int) -> None:
        """
        Store the OAuth token with its expiration time

        Args:
            access_token: OAuth access token
            refresh_token: OAuth refresh token, if the server issued one
            expires_in: Token lifetime in seconds
        """
        self._kitsu['auth'] = {
            'access_token': access_token,
            'refresh_token': refresh_token,
            'timestamp': datetime.now().isoformat(),
            'expires_at': (datetime.now() + timedelta(seconds=expires_in)).isoformat(),
        }

    def load_kitsu_auth(self) -> Optional[Dict[str, Any]]:
        """
        Load the stored OAuth token if not expired

        Returns:
            Dictionary with auth data, or None if expired/not found
        """
        kitsu_auth = self._kitsu.get('auth')
        if not kitsu_auth:
            return None

        expires_at_str = kitsu_auth.get('expires_at', '2000-01-01')
        try:
            expires_at = datetime.fromisoformat(expires_at_str)
        except ValueError:
            logger.warning(f"Invalid expires_at format: {expires_at_str}")
            return None

        if datetime.now() > expires_at:
            logger.info("Kitsu auth token expired")
            self.clear_kitsu_auth()
            return None

        return kitsu_auth

    def clear_kitsu_auth(self) -> None:
        self._kitsu.pop('auth', None)

    def get_user_id(self) -> Optional[str]:
        return self._kitsu.get('user_id')

    def set_user_id(self, user_id: str) -> None:
        self._kitsu['user_id'] = user_id

    # ==================== Stats ====================

    def increment_completed_series(self) -> int:
        stats = self._kitsu['stats']
        stats['completed_series'] = stats.get('completed_series', 0) + 1
        return stats['completed_series']

    @property
    def completed_series(self) -> int:
        return self._kitsu['stats'].get('completed_series', 0)

    # ==================== Persistence ====================

    def save(self) -> None:
        """Write the whole configuration to disk"""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(self._data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigStoreError(str(self.config_path), str(e)) from e

        logger.debug(f"Saved configuration to {self.config_path}")

    @property
    def _kitsu(self) -> Dict[str, Any]:
        return self._data['kitsu']

    def _load(self) -> Dict[str, Any]:
        """Load the configuration from disk, filling in missing sections"""
        data: Dict[str, Any] = {}

        if self.config_path.exists():
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except (OSError, ValueError) as e:
                raise ConfigStoreError(str(self.config_path), str(e)) from e

            if not isinstance(data, dict):
                raise ConfigStoreError(str(self.config_path), "top level is not an object")
        else:
            logger.info(f"No configuration found, starting fresh: {self.config_path}")

        kitsu = data.setdefault('kitsu', {})
        kitsu.setdefault('cache', [])
        kitsu.setdefault('file_bindings', {})
        kitsu.setdefault('stats', {}).setdefault('completed_series', 0)
        return data
