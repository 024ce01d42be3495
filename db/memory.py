from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from db.errors import BackendError, SingleRowError
from db.query import AnyILike, TableQuery


def _matches(row: Dict[str, Any], f) -> bool:
    if isinstance(f, AnyILike):
        needle = f.term.lower()
        return any(needle in str(row.get(col) or "").lower() for col in f.columns)
    value = row.get(f.column)
    if f.op == "eq":
        return value == f.value
    # Range comparisons never match NULL, as in SQL
    if value is None:
        return False
    if f.op == "gte":
        return value >= f.value
    return value <= f.value


def _project(row: Dict[str, Any], columns: str) -> Dict[str, Any]:
    if columns.strip() == "*":
        return dict(row)
    wanted = [c.strip() for c in columns.split(",") if c.strip()]
    return {c: row.get(c) for c in wanted}


class InMemoryBackend:
    """Evaluates TableQuery objects against in-process rows.

    Used for offline runs (FIXTURES_PATH) and tests.
    """

    def __init__(self, tables: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self.tables: Dict[str, List[Dict[str, Any]]] = {k: list(v) for k, v in (tables or {}).items()}
        self.executed: List[TableQuery] = []

    @classmethod
    def from_json_file(cls, path: str) -> "InMemoryBackend":
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Fixtures file must hold an object of tables: {path}")
        return cls(data)

    def execute(self, query: TableQuery) -> List[Dict[str, Any]]:
        self.executed.append(query)
        if query.table not in self.tables:
            raise BackendError(f"Unknown table: {query.table}", status_code=404, table=query.table)

        rows = [r for r in self.tables[query.table] if all(_matches(r, f) for f in query.filters)]

        # Stable sorts applied last-key-first give multi-column ordering; NULLs last
        for o in reversed(query.orderings):
            if o.ascending:
                rows.sort(key=lambda r: (r.get(o.column) is None, r.get(o.column)))
            else:
                rows.sort(key=lambda r: (r.get(o.column) is not None, r.get(o.column)), reverse=True)

        if query.row_limit is not None:
            rows = rows[: query.row_limit]
        if query.expect_single and len(rows) != 1:
            raise SingleRowError(query.table, len(rows))
        return [_project(r, query.columns) for r in rows]
