from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional

from pydantic import ValidationError

from db.repos.company_settings_repo import CompanySettingsRepo
from models.company_settings import CompanySettings
from models.company_views import (
    DEFAULT_COUNTRY,
    CompanyAddress,
    CompanyBranding,
    CompanyBusiness,
    CompanyContact,
    CompanySocial,
)


logger = logging.getLogger(__name__)

FALLBACK_COMPANY_NAME = "Imobiliária"

# User-facing messages, kept apart from the logged technical errors
NOT_FOUND_MESSAGE = "Não foi possível carregar as informações da empresa"
LOAD_ERROR_MESSAGE = "Erro ao carregar configurações da empresa"
REFRESH_ERROR_MESSAGE = "Erro ao atualizar configurações da empresa"


@dataclass(frozen=True)
class SettingsState:
    company: Optional[CompanySettings] = None
    loading: bool = True
    error: Optional[str] = None


Subscriber = Callable[[SettingsState], None]


class CompanySettingsService:
    """Session-wide holder of the published company settings.

    State is a single immutable value that is only ever replaced as a whole.
    Overlapping load()/refresh() calls are not coordinated: the last one to
    finish decides the cached value.
    """

    def __init__(self, repo: CompanySettingsRepo, *, fallback_name: str = FALLBACK_COMPANY_NAME):
        self.repo = repo
        self.fallback_name = fallback_name
        self._state = SettingsState()
        self._subscribers: List[Subscriber] = []

    # --- state cell ---
    @property
    def state(self) -> SettingsState:
        return self._state

    @property
    def company(self) -> Optional[CompanySettings]:
        return self._state.company

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> Optional[str]:
        return self._state.error

    def _set_state(self, new_state: SettingsState) -> None:
        self._state = new_state
        for callback in list(self._subscribers):
            callback(new_state)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback for every state replacement; returns an unsubscribe function."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    # --- loading ---
    def load(self) -> SettingsState:
        """Initial fetch. On failure the previously held company (if any) is kept."""
        return self._fetch_into_state("load", LOAD_ERROR_MESSAGE)

    def refresh(self) -> SettingsState:
        """Re-fetch after an external change (e.g. an admin edit)."""
        return self._fetch_into_state("refresh", REFRESH_ERROR_MESSAGE)

    def _fetch_into_state(self, action: str, error_message: str) -> SettingsState:
        self._set_state(replace(self._state, loading=True))
        try:
            data = self.repo.fetch_company_settings()
            company = CompanySettings.model_validate(data) if data is not None else None
        except ValidationError as e:
            logger.error(
                "Invalid company settings on %s", action,
                extra={"operation": action, "status": "error", "error": str(e)},
            )
            self._set_state(replace(self._state, loading=False, error=error_message))
            return self._state

        if company is None:
            self._set_state(replace(self._state, loading=False, error=NOT_FOUND_MESSAGE))
        else:
            self._set_state(SettingsState(company=company, loading=False, error=None))
        return self._state

    # --- derived views ---
    @property
    def display_name(self) -> str:
        company = self._state.company
        return (company.company_name if company else None) or self.fallback_name

    @property
    def address(self) -> Optional[CompanyAddress]:
        c = self._state.company
        if c is None:
            return None
        return CompanyAddress(
            street=c.address_street,
            number=c.address_number,
            complement=c.address_complement,
            neighborhood=c.address_neighborhood,
            city=c.address_city,
            state=c.address_state,
            zip_code=c.address_zip_code,
            country=c.address_country or DEFAULT_COUNTRY,
        )

    @property
    def contact(self) -> Optional[CompanyContact]:
        c = self._state.company
        if c is None:
            return None
        return CompanyContact(
            phone_main=c.phone_main,
            phone_secondary=c.phone_secondary,
            whatsapp=c.whatsapp,
            email_main=c.email_main,
            email_contact=c.email_contact,
        )

    @property
    def business(self) -> Optional[CompanyBusiness]:
        c = self._state.company
        if c is None:
            return None
        return CompanyBusiness(
            cnpj=c.cnpj,
            inscricao_estadual=c.inscricao_estadual,
            creci=c.creci,
            business_hours=c.business_hours,
        )

    @property
    def social(self) -> Optional[CompanySocial]:
        c = self._state.company
        if c is None:
            return None
        return CompanySocial(
            website=c.website,
            instagram=c.instagram,
            facebook=c.facebook,
            linkedin=c.linkedin,
        )

    @property
    def branding(self) -> Optional[CompanyBranding]:
        c = self._state.company
        if c is None:
            return None
        return CompanyBranding(
            logo=c.logo_url,
            favicon=c.favicon_url,
            description=c.company_description,
        )

    def formatted_address(self) -> str:
        """One-line postal address, e.g. 'Rua A, 10, Centro, Curitiba - PR, CEP: 80000-000, Brasil'."""
        addr = self.address
        if addr is None:
            return ""
        city_state = " - ".join(p for p in (addr.city, addr.state) if p)
        parts = [
            addr.street,
            addr.number,
            addr.complement,
            addr.neighborhood,
            city_state,
            f"CEP: {addr.zip_code}" if addr.zip_code else None,
            addr.country,
        ]
        return ", ".join(p for p in parts if p)

    def contact_or_blank(self) -> CompanyContact:
        contact = self.contact or CompanyContact()
        return CompanyContact(
            phone_main=contact.phone_main or "",
            phone_secondary=contact.phone_secondary or "",
            whatsapp=contact.whatsapp or "",
            email_main=contact.email_main or "",
            email_contact=contact.email_contact or "",
        )

    def branding_variables(self) -> Dict[str, str]:
        """CSS custom properties for the site theme; only set values are included."""
        branding = self.branding
        if branding is None:
            return {}
        out: Dict[str, str] = {}
        if branding.logo:
            out["--company-logo"] = branding.logo
        if branding.favicon:
            out["--company-favicon"] = branding.favicon
        return out
