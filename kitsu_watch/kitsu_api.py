"""
Kitsu API Handler with Retry Handling
"""

import logging
import time
from typing import Optional, Dict, Any, List, Tuple

import requests

from .errors import RemoteUpdateError
from .models import LibraryEntry

logger = logging.getLogger(__name__)

JSON_API_TYPE = 'application/vnd.api+json'
RETRY_STATUS_CODES = [500, 502, 503, 504]


class KitsuAPI:
    """Handles JSON:API interactions with Kitsu"""

    def __init__(self, base_url: str = "https://kitsu.io/api/edge", max_retries: int = 3, timeout: int = 30):
        self.base_url = base_url.rstrip('/')
        self.max_retries = max_retries
        self.timeout = timeout
        self.session = requests.Session()

    def update_library_entry(self, library_id: str, progress: int,
                             access_token: str) -> Tuple[int, Optional[int]]:
        """
        Set the progress of a library entry

        Args:
            library_id: Kitsu library entry ID
            progress: Episodes watched
            access_token: User's access token

        Returns:
            Tuple of (confirmed_progress, episode_count), episode_count is None
            when Kitsu has not published it yet
        """
        payload = {
            'data': {
                'id': library_id,
                'type': 'library-entries',
                'attributes': {
                    'progress': progress,
                },
            }
        }

        result = self._request(
            'PATCH',
            f"/library-entries/{library_id}",
            access_token,
            params={'include': 'anime'},
            json=payload,
            library_id=library_id
        )

        data = result.get('data') or {}
        attributes = data.get('attributes') or {}
        if 'progress' not in attributes:
            raise RemoteUpdateError(library_id, "response did not contain progress")

        episode_count = None
        for included in result.get('included') or []:
            if included.get('type') == 'anime':
                episode_count = (included.get('attributes') or {}).get('episodeCount')
                break

        confirmed = int(attributes['progress'])
        logger.info(f"✅ Updated library entry {library_id}: {confirmed} episodes")
        return confirmed, episode_count

    def get_current_user_id(self, access_token: str) -> str:
        """Get the authenticated user's ID"""
        result = self._request('GET', "/users", access_token, params={'filter[self]': 'true'})
        users = result.get('data') or []
        if not users:
            raise RemoteUpdateError(None, "could not determine the current user")

        user = users[0]
        user_name = (user.get('attributes') or {}).get('name', 'Unknown')
        logger.info(f"🔍 Authenticated as user: {user_name} (ID: {user['id']})")
        return str(user['id'])

    def get_watching_entries(self, user_id: str, access_token: str) -> List[LibraryEntry]:
        """Fetch every anime library entry the user is currently watching"""
        params: Optional[Dict[str, Any]] = {
            'filter[user_id]': user_id,
            'filter[kind]': 'anime',
            'filter[status]': 'current',
            'include': 'anime',
            'page[limit]': 50,
        }
        url = f"{self.base_url}/library-entries"
        entries: List[LibraryEntry] = []

        while url:
            result = self._request('GET', url, access_token, params=params)
            anime_by_id = {
                item['id']: item.get('attributes') or {}
                for item in result.get('included') or []
                if item.get('type') == 'anime'
            }

            for item in result.get('data') or []:
                anime_ref = ((item.get('relationships') or {}).get('anime') or {}).get('data') or {}
                anime = anime_by_id.get(anime_ref.get('id'))
                if anime is None:
                    logger.debug(f"Library entry {item.get('id')} has no included anime, skipping")
                    continue
                entries.append(self._to_library_entry(item, anime))

            # The next link already carries the query string
            url = (result.get('links') or {}).get('next')
            params = None

        logger.info(f"📚 Fetched {len(entries)} currently watching entries")
        return entries

    def _to_library_entry(self, item: Dict[str, Any], anime: Dict[str, Any]) -> LibraryEntry:
        titles = anime.get('titles') or {}
        return LibraryEntry(
            library_id=str(item['id']),
            original_title=titles.get('en_jp') or anime.get('canonicalTitle') or '',
            localized_title=titles.get('en') or titles.get('en_us') or '',
            synonyms=list(anime.get('abbreviatedTitles') or []),
            episode_progress=(item.get('attributes') or {}).get('progress') or 0,
            episode_count=anime.get('episodeCount'),
        )

    def _request(self, method: str, path: str, access_token: Optional[str],
                 params: Optional[Dict[str, Any]] = None, json: Optional[Dict[str, Any]] = None,
                 library_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Execute a request with automatic retry

        Retries timeouts, network errors, 429 and 5xx responses with
        exponential backoff. Raises RemoteUpdateError once retries run out or
        on any other failed response.
        """
        url = path if path.startswith('http') else f"{self.base_url}{path}"
        headers = {
            'Content-Type': JSON_API_TYPE,
            'Accept': JSON_API_TYPE,
        }
        if access_token:
            headers['Authorization'] = f'Bearer {access_token}'

        retry_count = 0
        last_error = "no attempt made"

        while retry_count < self.max_retries:
            try:
                response = self.session.request(
                    method,
                    url,
                    headers=headers,
                    params=params,
                    json=json,
                    timeout=self.timeout
                )
            except requests.exceptions.Timeout:
                last_error = "request timed out"
                wait_time = (2 ** retry_count) * 2
                logger.warning(f"⏰ Request timeout, retrying in {wait_time}s...")
                time.sleep(wait_time)
                retry_count += 1
                continue
            except requests.exceptions.RequestException as e:
                last_error = f"network error: {e}"
                wait_time = (2 ** retry_count) * 2
                logger.warning(f"🔌 Network error: {e}, retrying in {wait_time}s...")
                time.sleep(wait_time)
                retry_count += 1
                continue

            if response.ok:
                try:
                    return response.json()
                except ValueError as e:
                    raise RemoteUpdateError(library_id, f"invalid JSON response: {e}") from e

            if response.status_code == 429:
                retry_after = response.headers.get('Retry-After', '60')
                try:
                    wait_seconds = int(retry_after)
                except ValueError:
                    wait_seconds = 60

                last_error = "rate limit exceeded"
                logger.warning(f"🚫 Rate limit exceeded. Waiting {wait_seconds} seconds...")
                time.sleep(wait_seconds)
                retry_count += 1
                continue

            if response.status_code in RETRY_STATUS_CODES:
                last_error = f"server error {response.status_code}"
                wait_time = (2 ** retry_count) * 1
                logger.warning(f"🔧 Server error {response.status_code}, retrying in {wait_time}s...")
                time.sleep(wait_time)
                retry_count += 1
                continue

            logger.debug(f"Response: {response.text}")
            raise RemoteUpdateError(library_id, f"{method} {url} failed with {response.status_code}",
                                    status_code=response.status_code)

        logger.error(f"Kitsu request failed after {self.max_retries} retries")
        raise RemoteUpdateError(library_id, last_error)
