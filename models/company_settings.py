from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


class CompanySettings(BaseModel):
    """Backend row shape for the singleton company_settings record."""

    id: str
    company_name: str

    address_street: str | None = None
    address_number: str | None = None
    address_complement: str | None = None
    address_neighborhood: str | None = None
    address_city: str | None = None
    address_state: str | None = None
    address_zip_code: str | None = None
    address_country: str | None = None

    phone_main: str | None = None
    phone_secondary: str | None = None
    whatsapp: str | None = None
    email_main: str | None = None
    email_contact: str | None = None

    cnpj: str | None = None
    inscricao_estadual: str | None = None
    creci: str | None = None
    business_hours: str | None = None

    website: str | None = None
    instagram: str | None = None
    facebook: str | None = None
    linkedin: str | None = None

    logo_url: str | None = None
    favicon_url: str | None = None
    company_description: str | None = None

    status: Literal["draft", "published"] = "published"
    created_at: str | None = None
    updated_at: str | None = None

    # numeric columns (id, address_number, ...) are kept as text
    model_config = ConfigDict(extra="ignore", frozen=True, coerce_numbers_to_str=True)
