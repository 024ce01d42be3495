from __future__ import annotations

import pytest

from db.errors import ConfigurationError
from db.memory import InMemoryBackend
from db.repos.company_settings_repo import CompanySettingsRepo
from services.company_context import company_scope, use_company
from services.company_settings import (
    LOAD_ERROR_MESSAGE,
    NOT_FOUND_MESSAGE,
    REFRESH_ERROR_MESSAGE,
    CompanySettingsService,
    SettingsState,
)


class _ScriptedRepo:
    """Returns queued results from fetch_company_settings, one per call."""

    def __init__(self, *results):
        self.results = list(results)

    def fetch_company_settings(self):
        return self.results.pop(0)


def _row(**overrides):
    row = {"id": "cs-1", "company_name": "Casa Nova Imóveis", "status": "published"}
    row.update(overrides)
    return row


def test_initial_state_is_loading_without_company():
    service = CompanySettingsService(_ScriptedRepo())
    assert service.state == SettingsState(company=None, loading=True, error=None)
    assert service.display_name == "Imobiliária"


def test_load_success_populates_company(backend):
    service = CompanySettingsService(CompanySettingsRepo(backend))
    state = service.load()
    assert state.loading is False
    assert state.error is None
    assert service.company.company_name == "Casa Nova Imóveis"
    assert service.display_name == "Casa Nova Imóveis"


def test_failed_load_then_successful_refresh(failing_backend, tables):
    repo = CompanySettingsRepo(failing_backend)
    service = CompanySettingsService(repo)
    service.load()
    assert service.company is None
    assert service.error == NOT_FOUND_MESSAGE
    assert service.loading is False

    repo.backend = InMemoryBackend(tables)
    service.refresh()
    assert service.error is None
    assert service.company.id == "cs-1"


def test_failed_refresh_keeps_previous_company():
    service = CompanySettingsService(_ScriptedRepo(_row(), None))
    service.load()
    service.refresh()
    assert service.company.company_name == "Casa Nova Imóveis"
    assert service.error == NOT_FOUND_MESSAGE


def test_invalid_row_sets_action_specific_message():
    service = CompanySettingsService(_ScriptedRepo({"id": "cs-1"}, {"id": "cs-1"}))
    service.load()
    assert service.error == LOAD_ERROR_MESSAGE
    service.refresh()
    assert service.error == REFRESH_ERROR_MESSAGE
    assert service.company is None


def test_each_refresh_replaces_the_whole_value():
    service = CompanySettingsService(_ScriptedRepo(_row(), _row(company_name="Outra", phone_main="4133334444")))
    service.load()
    first = service.company
    service.refresh()
    assert service.company is not first
    assert service.company.company_name == "Outra"
    assert first.company_name == "Casa Nova Imóveis"


def test_derived_views_absent_without_company():
    service = CompanySettingsService(_ScriptedRepo(None))
    service.load()
    assert service.address is None
    assert service.contact is None
    assert service.business is None
    assert service.social is None
    assert service.branding is None
    assert service.formatted_address() == ""
    assert service.branding_variables() == {}
    assert service.contact_or_blank().phone_main == ""


def test_derived_views_with_company(backend):
    service = CompanySettingsService(CompanySettingsRepo(backend))
    service.load()
    assert service.address.city == "Curitiba"
    assert service.address.zip_code == "80010-000"
    assert service.address.country == "Brasil"
    assert service.contact.email_main == "contato@casanova.com.br"
    assert service.business.creci == "J-1234"
    assert service.social.instagram == "@casanova"
    assert service.branding.logo == "https://cdn.example.com/logo.png"
    assert service.branding.description == "Imóveis em Curitiba"


def test_country_from_row_wins_over_default():
    service = CompanySettingsService(_ScriptedRepo(_row(address_country="Portugal")))
    service.load()
    assert service.address.country == "Portugal"


def test_formatted_address_and_contact_or_blank(backend):
    service = CompanySettingsService(CompanySettingsRepo(backend))
    service.load()
    assert service.formatted_address() == (
        "Rua das Flores, 120, Centro, Curitiba - PR, CEP: 80010-000, Brasil"
    )
    contact = service.contact_or_blank()
    assert contact.phone_main == "41999990000"
    assert contact.whatsapp == ""


def test_branding_variables_only_include_set_urls(backend):
    service = CompanySettingsService(CompanySettingsRepo(backend))
    service.load()
    assert service.branding_variables() == {"--company-logo": "https://cdn.example.com/logo.png"}


def test_subscribers_see_each_replacement():
    service = CompanySettingsService(_ScriptedRepo(_row(), _row()))
    seen = []
    unsubscribe = service.subscribe(seen.append)
    service.load()
    assert [s.loading for s in seen] == [True, False]
    assert seen[-1].company.id == "cs-1"
    unsubscribe()
    unsubscribe()
    service.refresh()
    assert len(seen) == 2


def test_overlapping_refresh_last_write_wins():
    class _ReentrantRepo:
        def __init__(self):
            self.calls = 0
            self.service = None

        def fetch_company_settings(self):
            self.calls += 1
            if self.calls == 1:
                # a refresh lands while the first load is still in flight
                self.service.refresh()
                return _row(company_name="Carregado primeiro")
            return _row(company_name="Atualizado")

    repo = _ReentrantRepo()
    service = CompanySettingsService(repo)
    repo.service = service
    service.load()
    assert service.company.company_name == "Carregado primeiro"


def test_use_company_outside_scope_fails_fast():
    with pytest.raises(ConfigurationError, match="company_scope"):
        use_company()


def test_company_scope_binds_and_restores(backend):
    service = CompanySettingsService(CompanySettingsRepo(backend))
    with company_scope(service) as bound:
        assert use_company() is bound is service
    with pytest.raises(ConfigurationError):
        use_company()


def test_numeric_columns_are_accepted_as_text():
    service = CompanySettingsService(_ScriptedRepo(_row(id=7, address_number=120, address_zip_code=80010000)))
    service.load()
    assert service.error is None
    assert service.company.id == "7"
    assert service.address.number == "120"
    assert service.formatted_address() == "120, CEP: 80010000, Brasil"
