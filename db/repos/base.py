from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional

from db.errors import BackendError, ConfigurationError
from db.query import TableQuery, from_table
from db.result import Empty, Ok, QueryResult
from ports.backend import BackendPort


logger = logging.getLogger(__name__)

ErrorHook = Callable[[str, Exception], None]

PUBLISHED = "published"


class BaseRepo:
    """Shared read path: run a query, log failures, collapse them to a fallback.

    Callers never see backend errors; pass ``on_error`` to observe them.
    """

    table: str = ""

    def __init__(self, backend: BackendPort, on_error: Optional[ErrorHook] = None):
        self.backend = backend
        self.on_error = on_error

    def _query(self) -> TableQuery:
        return from_table(self.table)

    def _published(self) -> TableQuery:
        return self._query().eq("status", PUBLISHED)

    def _run(self, operation: str, query: TableQuery) -> QueryResult[List[Dict[str, Any]]]:
        t0 = time.time()
        try:
            rows = self.backend.execute(query)
        except ConfigurationError:
            raise
        except Exception as e:
            duration_ms = int((time.time() - t0) * 1000)
            logger.error(
                "Error in %s", operation,
                exc_info=not isinstance(e, BackendError),
                extra={
                    "table": query.table,
                    "operation": operation,
                    "status": "error",
                    "duration_ms": duration_ms,
                    "error": str(e),
                },
            )
            if self.on_error is not None:
                self.on_error(operation, e)
            return Empty(e)
        logger.debug(
            "%s returned %d row(s)", operation, len(rows),
            extra={
                "table": query.table,
                "operation": operation,
                "status": "ok",
                "duration_ms": int((time.time() - t0) * 1000),
            },
        )
        return Ok(rows)

    def _rows(self, operation: str, query: TableQuery) -> List[Dict[str, Any]]:
        result = self._run(operation, query)
        return result.value if isinstance(result, Ok) else []

    def _row(self, operation: str, query: TableQuery) -> Optional[Dict[str, Any]]:
        result = self._run(operation, query.single())
        return result.value[0] if isinstance(result, Ok) else None
