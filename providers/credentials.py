import asyncio
import logging
import os
from typing import Optional

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials

from services.errors import ProviderError

SHEETS_READONLY_SCOPE = "https://www.googleapis.com/auth/spreadsheets.readonly"

logger = logging.getLogger(__name__)


class TokenFileCredentials:
    """Bearer tokens from an already-authorized user token file.

    The file is produced out of band by the OAuth consent flow; this class
    only loads it and refreshes the access token in memory when it expires.
    """

    def __init__(self, token_file: str, provider: str = "google_sheets"):
        self._token_file = token_file
        self._provider = provider
        self._creds: Optional[Credentials] = None

    def is_configured(self) -> bool:
        return os.path.isfile(self._token_file)

    def _load(self) -> Credentials:
        if self._creds is None:
            try:
                self._creds = Credentials.from_authorized_user_file(self._token_file, [SHEETS_READONLY_SCOPE])
            except (OSError, ValueError) as e:
                raise ProviderError(self._provider, f"unable to read token file {self._token_file}: {e}")
        return self._creds

    def _fresh_token(self) -> str:
        creds = self._load()
        if not creds.valid:
            if not creds.refresh_token:
                raise ProviderError(self._provider, "token expired and no refresh token available")
            try:
                creds.refresh(Request())
            except GoogleAuthError as e:
                raise ProviderError(self._provider, f"token refresh failed: {e}")
            logger.info("Refreshed access token from %s", self._token_file)
        return creds.token

    async def token(self) -> str:
        # google-auth refreshes over requests, which blocks
        return await asyncio.to_thread(self._fresh_token)
