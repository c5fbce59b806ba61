"""
Remote schema fetching.

Schemas declared by URL are fetched with a single time-boxed GET, only from the
allow-listed prefixes, and cached per URL for a limited time. Any failure is
logged and reported as None so callers fall back to local resolution.
"""

import time
from typing import Any, Dict, Optional, Tuple

import requests

from vitae.contexts.schemas.logger import _log_debug, log_rejected_url, log_remote_failure
from vitae.utils.constants import ALLOWED_SCHEMA_URL_PREFIXES
from vitae.utils.settings import get_settings


def is_allowed_schema_url(url: str) -> bool:
    """True if the URL starts with one of the trusted schema prefixes."""
    return isinstance(url, str) and url.startswith(ALLOWED_SCHEMA_URL_PREFIXES)


class RemoteSchemaFetcher:
    """Fetches schemas over HTTP with a per-URL TTL cache."""

    def __init__(self, timeout_s: float = None, cache_ttl_s: float = None):
        settings = get_settings().remote_schemas
        self.timeout_s = settings.timeout_s if timeout_s is None else timeout_s
        self.cache_ttl_s = settings.cache_ttl_s if cache_ttl_s is None else cache_ttl_s
        self._cache: Dict[str, Tuple[float, Dict[str, Any]]] = {}

    def _cached(self, url: str) -> Optional[Dict[str, Any]]:
        entry = self._cache.get(url)
        if entry is None:
            return None
        fetched_at, schema = entry
        if time.monotonic() - fetched_at > self.cache_ttl_s:
            del self._cache[url]
            return None
        return schema

    def fetch(self, url: str) -> Optional[Dict[str, Any]]:
        """
        Fetch a schema document.

        Args:
            url: Schema URL (must pass is_allowed_schema_url)

        Returns:
            Schema dictionary, or None if the URL is rejected or the fetch fails
        """
        if not is_allowed_schema_url(url):
            log_rejected_url(url)
            return None

        cached = self._cached(url)
        if cached is not None:
            _log_debug(f"Remote schema cache hit: {url}")
            return cached

        try:
            response = requests.get(
                url, timeout=self.timeout_s, headers={"Accept": "application/json"}
            )
            response.raise_for_status()
            schema = response.json()
        except (requests.RequestException, ValueError) as e:
            log_remote_failure(url, e)
            return None

        if not isinstance(schema, dict):
            log_remote_failure(url, TypeError("response is not a JSON object"))
            return None

        self._cache[url] = (time.monotonic(), schema)
        _log_debug(f"Fetched remote schema: {url}")
        return schema

    def clear_cache(self):
        self._cache.clear()

    def is_cached(self, url: str) -> bool:
        return self._cached(url) is not None
