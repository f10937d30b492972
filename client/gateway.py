"""
client.gateway - HTTP client for the persistence endpoints.

Every call carries the static bearer token.  Failures never raise:
loads return None and saves return False, after logging the cause,
so callers can keep their in-memory state as it was.
"""

from __future__ import annotations

import logging
from typing import Optional

import requests

import config

logger = logging.getLogger(__name__)


class PersistenceGateway:

    def __init__(
        self,
        base_url: str = config.GATEWAY_URL,
        token: str = config.API_TOKEN,
        timeout: float = config.HTTP_TIMEOUT,
        http: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = http or requests.Session()
        if token:
            self.http.headers["Authorization"] = f"Bearer {token}"

    # ── Tables ─────────────────────────────────────────────────────────

    def load_data(self) -> Optional[list[dict]]:
        return self._load("/load-data", "data")

    def save_data(self, rows: list[dict]) -> bool:
        return self._save("/save-data", "data", rows)

    def load_recipes(self) -> Optional[list[dict]]:
        return self._load("/load-recipes", "recipes")

    def save_recipes(self, recipes: list[dict]) -> bool:
        return self._save("/save-recipes", "recipes", recipes)

    def load_colors(self) -> Optional[list[dict]]:
        return self._load("/load-colors", "colors")

    def save_colors(self, colors: list[dict]) -> bool:
        return self._save("/save-colors", "colors", colors)

    def health(self) -> bool:
        try:
            r = self.http.get(self._url("/health"), timeout=self.timeout)
            return r.ok and r.json().get("status") == "ok"
        except (requests.RequestException, ValueError) as exc:
            logger.warning(f"Health check failed: {exc}")
            return False

    # ── Internal ───────────────────────────────────────────────────────

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _load(self, path: str, field: str) -> Optional[list[dict]]:
        try:
            r = self.http.get(self._url(path), timeout=self.timeout)
            r.raise_for_status()
            payload = r.json()
        except (requests.RequestException, ValueError) as exc:
            logger.error(f"Failed to load {field}: {exc}")
            return None

        if "error" in payload:
            logger.error(f"Failed to load {field}: {payload['error']}")
            return None
        value = payload.get(field) or []
        logger.info(f"Loaded {len(value)} {field} entries")
        return value

    def _save(self, path: str, field: str, value: list[dict]) -> bool:
        try:
            r = self.http.post(self._url(path), json={field: value}, timeout=self.timeout)
            payload = r.json()
        except (requests.RequestException, ValueError) as exc:
            logger.error(f"Failed to save {field}: {exc}")
            return False

        if not r.ok or "error" in payload:
            logger.error(f"Failed to save {field}: {payload.get('error', r.status_code)}")
            return False
        logger.info(payload.get("message", f"Saved {field}"))
        return True


def fetch_text(url: str, timeout: float = config.HTTP_TIMEOUT) -> str:
    """GET a text resource (remote CSV).  Raises requests.HTTPError on failure."""
    r = requests.get(url, timeout=timeout)
    r.raise_for_status()
    return r.text
