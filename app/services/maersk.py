from typing import Optional

import requests
from loguru import logger

from app.config import Settings, get_settings
from app.errors import CarrierAPIError, CarrierAuthError

TOKEN_PATH = "/customer-identity/oauth/v2/access_token"
EVENTS_PATH = "/track-and-trace-private/events"


class MaerskService:
    """
    Fetches raw track & trace events for a transport document.
    Upstream failures are raised, never turned into empty results.
    """

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        settings = settings or get_settings()
        self.consumer_key = settings.maersk_consumer_key
        self.consumer_secret = settings.maersk_consumer_secret
        self.base_url = settings.maersk_base_url.rstrip("/")
        self.timeout = settings.maersk_timeout_seconds
        self.session = session or requests.Session()

    def _get_token(self) -> str:
        """Client-credentials handshake; a fresh token per lookup."""
        url = f"{self.base_url}{TOKEN_PATH}"
        payload = {
            "grant_type": "client_credentials",
            "client_id": self.consumer_key,
            "client_secret": self.consumer_secret,
        }
        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "Consumer-Key": self.consumer_key or "",
        }

        try:
            resp = self.session.post(url, data=payload, headers=headers, timeout=self.timeout)
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"[Maersk] Token request failed: {e}")
            raise CarrierAuthError(str(e)) from e

        token = (data.get("access_token") or data.get("token")) if isinstance(data, dict) else None
        if not token:
            logger.error(f"[Maersk] No access_token in auth response ({resp.status_code})")
            raise CarrierAuthError("No access_token")
        return token

    def fetch_events(self, tracking_number: str):
        """Returns the carrier payload untouched: a list, or an object holding `events`."""
        token = self._get_token()

        url = f"{self.base_url}{EVENTS_PATH}"
        headers = {
            "Authorization": f"Bearer {token}",
            "Consumer-Key": self.consumer_key or "",
        }
        params = {"transportDocumentReference": tracking_number}

        try:
            response = self.session.get(url, headers=headers, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"[Maersk] Events request failed for {tracking_number}: {e}")
            raise CarrierAPIError(503, str(e)) from e

        if not response.ok:
            logger.warning(f"[Maersk] API Error: {response.status_code} | {response.text[:200]}")
            raise CarrierAPIError(response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            raise CarrierAPIError(response.status_code, "Response body is not JSON") from e
