from __future__ import annotations

from pydantic import BaseModel, ConfigDict


DEFAULT_COUNTRY = "Brasil"


class CompanyAddress(BaseModel):
    street: str | None = None
    number: str | None = None
    complement: str | None = None
    neighborhood: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str = DEFAULT_COUNTRY

    model_config = ConfigDict(frozen=True)


class CompanyContact(BaseModel):
    phone_main: str | None = None
    phone_secondary: str | None = None
    whatsapp: str | None = None
    email_main: str | None = None
    email_contact: str | None = None

    model_config = ConfigDict(frozen=True)


class CompanyBusiness(BaseModel):
    cnpj: str | None = None
    inscricao_estadual: str | None = None
    creci: str | None = None
    business_hours: str | None = None

    model_config = ConfigDict(frozen=True)


class CompanySocial(BaseModel):
    website: str | None = None
    instagram: str | None = None
    facebook: str | None = None
    linkedin: str | None = None

    model_config = ConfigDict(frozen=True)


class CompanyBranding(BaseModel):
    logo: str | None = None
    favicon: str | None = None
    description: str | None = None

    model_config = ConfigDict(frozen=True)
