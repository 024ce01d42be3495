from __future__ import annotations

from typing import Any, Dict, List, Protocol

from db.query import TableQuery


class BackendPort(Protocol):
    def execute(self, query: TableQuery) -> List[Dict[str, Any]]:
        """Run a read; raise BackendError (or SingleRowError) on failure."""
        ...
