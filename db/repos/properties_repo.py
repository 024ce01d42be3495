from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union

from db.query import TableQuery, normalize_search_term
from db.repos.base import BaseRepo
from models.filters import PropertyFilters


SEARCH_COLUMNS = ["title", "description", "address_neighborhood"]

FiltersArg = Union[PropertyFilters, Mapping[str, Any], None]


def _coerce_filters(filters: FiltersArg) -> PropertyFilters:
    if filters is None:
        return PropertyFilters()
    if isinstance(filters, PropertyFilters):
        return filters
    return PropertyFilters.model_validate(dict(filters))


def apply_property_filters(query: TableQuery, filters: PropertyFilters) -> TableQuery:
    """Add one conjunct per present filter; absent filters add nothing.

    Zero counts as absent for the numeric filters (``bedrooms=0`` means any).
    """
    if filters.property_type:
        query = query.eq("property_type", filters.property_type)
    if filters.min_price:
        query = query.gte("price", filters.min_price)
    if filters.max_price:
        query = query.lte("price", filters.max_price)
    if filters.city:
        query = query.eq("address_city", filters.city)
    if filters.bedrooms:
        query = query.gte("bedrooms", filters.bedrooms)
    if filters.featured:
        query = query.eq("featured", True)
    return query


def _listing_order(query: TableQuery) -> TableQuery:
    return query.order("featured", ascending=False).order("created_at", ascending=False)


def _distinct(values) -> List[Any]:
    seen = set()
    out = []
    for v in values:
        if not v or v in seen:
            continue
        seen.add(v)
        out.append(v)
    return out


class PropertiesRepo(BaseRepo):
    table = "properties"

    def fetch_properties(self, filters: FiltersArg = None) -> List[Dict[str, Any]]:
        """Published listings, featured first then newest first."""
        query = apply_property_filters(self._published(), _coerce_filters(filters))
        return self._rows("fetch_properties", _listing_order(query))

    def fetch_property(self, slug: str) -> Optional[Dict[str, Any]]:
        return self._row("fetch_property", self._published().eq("slug", slug))

    def fetch_featured_properties(self, limit: int = 6) -> List[Dict[str, Any]]:
        query = (
            self._published()
            .eq("featured", True)
            .order("created_at", ascending=False)
            .limit(limit)
        )
        return self._rows("fetch_featured_properties", query)

    def fetch_property_types(self) -> List[str]:
        rows = self._rows("fetch_property_types", self._published().select("property_type"))
        return _distinct(r.get("property_type") for r in rows)

    def fetch_cities(self) -> List[str]:
        rows = self._rows("fetch_cities", self._published().select("address_city"))
        return sorted(_distinct(r.get("address_city") for r in rows))

    def search_properties(self, search_term: Optional[str], filters: FiltersArg = None) -> List[Dict[str, Any]]:
        """Published listings whose title, description or neighborhood contain the term.

        Matching is case-insensitive substring; the term group is ANDed with filters.
        An empty term behaves like fetch_properties.
        """
        query = self._published()
        term = normalize_search_term(search_term)
        if term:
            query = query.or_ilike(SEARCH_COLUMNS, term)
        query = apply_property_filters(query, _coerce_filters(filters))
        return self._rows("search_properties", _listing_order(query))
