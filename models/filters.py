from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class PropertyFilters(BaseModel):
    """Optional narrowing for property listings; None means no constraint.

    ``featured`` only narrows when True; False is treated like absent.
    """

    property_type: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    city: str | None = None
    bedrooms: int | None = None
    featured: bool | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("property_type", "city", mode="before")
    @classmethod
    def _blank_is_absent(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value
