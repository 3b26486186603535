"""Thin requests wrapper used by every adapter."""

import requests

from .config import REQUEST_TIMEOUT, USER_AGENT
from .errors import SourceUnavailable


class HttpClient:
    """Shared session with a fixed User-Agent and a bounded per-request timeout.

    Every failure mode (connection error, timeout, non-2xx status, body that
    is not JSON when JSON was asked for) surfaces as SourceUnavailable so the
    orchestrator only has one thing to catch.
    """

    def __init__(self, timeout: float = REQUEST_TIMEOUT, session: requests.Session | None = None):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = USER_AGENT

    def _get(self, url: str) -> requests.Response:
        try:
            r = self.session.get(url, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            raise SourceUnavailable(url, str(e)) from e
        return r

    def get_bytes(self, url: str) -> bytes:
        return self._get(url).content

    def get_json(self, url: str):
        r = self._get(url)
        try:
            return r.json()
        except ValueError as e:
            raise SourceUnavailable(url, f"invalid JSON body: {e}") from e

    def close(self):
        self.session.close()
