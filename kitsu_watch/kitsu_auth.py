"""
Kitsu Authentication Handler using the OAuth password grant
"""

import logging
from typing import Optional

import requests

from .config_store import ConfigStore
from .errors import AuthenticationError

logger = logging.getLogger(__name__)

TOKEN_URL = "https://kitsu.io/api/oauth/token"
DEFAULT_TOKEN_LIFETIME = 30 * 24 * 60 * 60


class KitsuAuth:
    """Handles Kitsu OAuth authentication with a cached token and env-based credentials"""

    def __init__(self, config: ConfigStore, username: Optional[str] = None,
                 password: Optional[str] = None):
        self.config = config
        self.username = username
        self.password = password
        self.access_token: Optional[str] = None

    def authenticate(self) -> str:
        """Return a usable access token, requesting a new one if the cached token is gone"""
        if self.access_token:
            return self.access_token

        cached_auth = self.config.load_kitsu_auth()
        if cached_auth and cached_auth.get('access_token'):
            logger.debug("Using cached Kitsu authentication")
            self.access_token = cached_auth['access_token']
            return self.access_token

        if not self.username or not self.password:
            raise AuthenticationError(
                "No cached Kitsu token and KITSU_USERNAME / KITSU_PASSWORD are not set"
            )

        logger.info("🔐 Authenticating with Kitsu...")
        self.access_token = self._request_token()
        logger.info("💾 Authentication cached for future use")
        return self.access_token

    def is_authenticated(self) -> bool:
        return bool(self.access_token)

    def invalidate(self) -> None:
        """Forget a token Kitsu rejected so the next run requests a new one"""
        logger.warning("Kitsu rejected the cached token, clearing it")
        self.access_token = None
        self.config.clear_kitsu_auth()
        self.config.save()

    def _request_token(self) -> str:
        try:
            response = requests.post(
                TOKEN_URL,
                json={
                    'grant_type': 'password',
                    'username': self.username,
                    'password': self.password,
                },
                timeout=30
            )
        except requests.exceptions.RequestException as e:
            raise AuthenticationError(f"Token request failed: {e}") from e

        if response.status_code != 200:
            logger.debug(f"Response: {response.text}")
            if response.status_code in [400, 401]:
                raise AuthenticationError("Kitsu rejected the username or password")
            raise AuthenticationError(f"Token request failed: {response.status_code}")

        token_data = response.json()
        access_token = token_data.get('access_token')
        if not access_token:
            raise AuthenticationError("No access token in response")

        self.config.save_kitsu_auth(
            access_token=access_token,
            refresh_token=token_data.get('refresh_token'),
            expires_in=int(token_data.get('expires_in') or DEFAULT_TOKEN_LIFETIME)
        )
        self.config.save()
        logger.info("🔑 Access token obtained successfully")
        return access_token
