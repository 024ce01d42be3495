from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from config.settings import Settings, get_settings
from db.errors import BackendError, ConfigurationError, SingleRowError
from db.query import TableQuery


logger = logging.getLogger(__name__)


class BackendClient:
    """Read-only client for the hosted PostgREST API (Supabase REST)."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: Optional[float] = 30,
        session: Optional[requests.Session] = None,
    ):
        self.rest_url = f"{base_url.rstrip('/')}/rest/v1"
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        })

    def execute(self, query: TableQuery) -> List[Dict[str, Any]]:
        url = f"{self.rest_url}/{query.table}"
        try:
            response = self.session.get(url, params=query.to_params(), timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise BackendError(f"Request to {query.table} failed: {e}", table=query.table) from e

        if response.status_code != 200:
            raise BackendError(
                f"Backend returned status {response.status_code} for {query.table}: {response.text[:200]}",
                status_code=response.status_code,
                table=query.table,
            )
        try:
            rows = response.json()
        except ValueError as e:
            raise BackendError(f"Invalid JSON from {query.table}", table=query.table) from e
        if not isinstance(rows, list):
            raise BackendError(f"Expected a JSON array from {query.table}", table=query.table)

        if query.expect_single and len(rows) != 1:
            raise SingleRowError(query.table, len(rows))
        return rows


def get_client(settings: Optional[Settings] = None):
    """Public (anon key) backend, or the fixtures backend when FIXTURES_PATH is set.

    Missing URL/key is fatal: raises ConfigurationError.
    """
    settings = settings or get_settings()
    if settings.fixtures_path:
        from db.memory import InMemoryBackend

        logger.info("Using fixtures backend at %s", settings.fixtures_path)
        return InMemoryBackend.from_json_file(settings.fixtures_path)
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise ConfigurationError("Missing Supabase environment variables (SUPABASE_URL, SUPABASE_ANON_KEY)")
    return BackendClient(
        settings.supabase_url,
        settings.supabase_anon_key,
        timeout=settings.request_timeout_seconds,
    )


def get_admin_client(settings: Optional[Settings] = None) -> BackendClient:
    """Client authenticated with the service-role key, for administrative reads."""
    settings = settings or get_settings()
    if not settings.supabase_url:
        raise ConfigurationError("Missing Supabase environment variables (SUPABASE_URL)")
    if not settings.supabase_service_role_key:
        raise ConfigurationError("SUPABASE_SERVICE_ROLE_KEY required for admin client")
    return BackendClient(
        settings.supabase_url,
        settings.supabase_service_role_key,
        timeout=settings.request_timeout_seconds,
    )
