from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, List, Literal, Optional, Tuple, Union


Operator = Literal["eq", "gte", "lte"]


@dataclass(frozen=True)
class Condition:
    column: str
    op: Operator
    value: Any


@dataclass(frozen=True)
class AnyILike:
    """Disjunction: term appears (case-insensitive substring) in any column."""

    columns: Tuple[str, ...]
    term: str


@dataclass(frozen=True)
class Ordering:
    column: str
    ascending: bool = True


Filter = Union[Condition, AnyILike]


def normalize_search_term(term: Optional[str]) -> str:
    """Terms match literally; only surrounding whitespace is dropped."""
    if not term:
        return ""
    return str(term).strip()


def _ilike_pattern(term: str) -> str:
    # LIKE metacharacters are escaped. PostgREST rewrites every "*" to "%", so a
    # literal "*" can only be sent as the single-character wildcard.
    escaped = (
        term.replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
        .replace("*", "_")
    )
    return f"*{escaped}*"


def _quote(value: str) -> str:
    """Double-quote a value inside a logic tree so "," "(" ")" stay literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class TableQuery:
    """Immutable description of a single read against one table.

    Every filter is a conjunct; builder methods return new instances.
    """

    table: str
    columns: str = "*"
    filters: Tuple[Filter, ...] = field(default_factory=tuple)
    orderings: Tuple[Ordering, ...] = field(default_factory=tuple)
    row_limit: Optional[int] = None
    expect_single: bool = False

    def select(self, columns: str) -> "TableQuery":
        return replace(self, columns=columns)

    def _where(self, f: Filter) -> "TableQuery":
        return replace(self, filters=self.filters + (f,))

    def eq(self, column: str, value: Any) -> "TableQuery":
        return self._where(Condition(column, "eq", value))

    def gte(self, column: str, value: Any) -> "TableQuery":
        return self._where(Condition(column, "gte", value))

    def lte(self, column: str, value: Any) -> "TableQuery":
        return self._where(Condition(column, "lte", value))

    def or_ilike(self, columns: List[str], term: str) -> "TableQuery":
        return self._where(AnyILike(tuple(columns), term))

    def order(self, column: str, ascending: bool = True) -> "TableQuery":
        return replace(self, orderings=self.orderings + (Ordering(column, ascending),))

    def limit(self, n: int) -> "TableQuery":
        return replace(self, row_limit=int(n))

    def single(self) -> "TableQuery":
        return replace(self, expect_single=True)

    def to_params(self) -> List[Tuple[str, str]]:
        """Render as PostgREST query parameters (repeated keys allowed)."""
        params: List[Tuple[str, str]] = [("select", self.columns)]
        for f in self.filters:
            if isinstance(f, AnyILike):
                pattern = _quote(_ilike_pattern(f.term))
                group = ",".join(f"{col}.ilike.{pattern}" for col in f.columns)
                params.append(("or", f"({group})"))
            else:
                params.append((f.column, f"{f.op}.{_format_value(f.value)}"))
        if self.orderings:
            params.append((
                "order",
                ",".join(f"{o.column}.{'asc' if o.ascending else 'desc'}" for o in self.orderings),
            ))
        if self.row_limit is not None:
            params.append(("limit", str(self.row_limit)))
        return params


def from_table(table: str) -> TableQuery:
    return TableQuery(table=table)
