from __future__ import annotations

from typing import Any, Dict, Optional

from db.repos.base import BaseRepo


class CompanySettingsRepo(BaseRepo):
    table = "company_settings"

    def fetch_company_settings(self) -> Optional[Dict[str, Any]]:
        """The single published settings row, or None (missing, duplicated, or unreachable)."""
        return self._row("fetch_company_settings", self._published())


class BrandingRepo(BaseRepo):
    table = "branding"

    def fetch_branding(self) -> Optional[Dict[str, Any]]:
        # branding has no lifecycle column: the table itself is the singleton
        return self._row("fetch_branding", self._query())
