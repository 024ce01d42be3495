from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure():
    # Ensure project root is on sys.path for absolute imports like 'db.repos.properties_repo'
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


@pytest.fixture(autouse=True)
def _fresh_settings():
    from config.settings import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def sample_tables() -> dict:
    return {
        "company_settings": [
            {
                "id": "cs-1",
                "company_name": "Casa Nova Imóveis",
                "address_street": "Rua das Flores",
                "address_number": "120",
                "address_neighborhood": "Centro",
                "address_city": "Curitiba",
                "address_state": "PR",
                "address_zip_code": "80010-000",
                "phone_main": "41999990000",
                "email_main": "contato@casanova.com.br",
                "cnpj": "12345678000190",
                "creci": "J-1234",
                "instagram": "@casanova",
                "logo_url": "https://cdn.example.com/logo.png",
                "company_description": "Imóveis em Curitiba",
                "status": "published",
                "created_at": "2024-01-01T00:00:00Z",
                "updated_at": "2024-06-01T00:00:00Z",
            },
            {
                "id": "cs-0",
                "company_name": "Rascunho",
                "status": "draft",
            },
        ],
        "branding": [
            {"id": "b-1", "primary_color": "#004488", "logo_url": "https://cdn.example.com/logo.png"},
        ],
        "properties": [
            {
                "id": "p-1", "slug": "apto-centro", "title": "Apartamento no Centro",
                "description": "Dois quartos", "property_type": "apartment", "price": 90000,
                "bedrooms": 2, "address_neighborhood": "Centro", "address_city": "Curitiba",
                "featured": False, "status": "published", "created_at": "2024-01-10T00:00:00Z",
            },
            {
                "id": "p-2", "slug": "apto-batel", "title": "Apartamento Batel",
                "description": "Vista para o parque", "property_type": "apartment", "price": 120000,
                "bedrooms": 3, "address_neighborhood": "Batel", "address_city": "Curitiba",
                "featured": True, "status": "published", "created_at": "2024-02-10T00:00:00Z",
            },
            {
                "id": "p-3", "slug": "apto-agua-verde", "title": "Apartamento Água Verde",
                "description": "Perto do JARDIM Botânico", "property_type": "apartment", "price": 150000,
                "bedrooms": 3, "address_neighborhood": "Água Verde", "address_city": "Curitiba",
                "featured": True, "status": "published", "created_at": "2024-03-10T00:00:00Z",
            },
            {
                "id": "p-4", "slug": "casa-jardim-america", "title": "Casa ampla",
                "description": "Quintal grande", "property_type": "house", "price": 480000,
                "bedrooms": 4, "address_neighborhood": "Jardim América", "address_city": "Londrina",
                "featured": False, "status": "published", "created_at": "2024-04-10T00:00:00Z",
            },
            {
                "id": "p-5", "slug": "terreno-sem-cidade", "title": "Terreno no jardim",
                "description": None, "property_type": "land", "price": 60000,
                "bedrooms": None, "address_neighborhood": None, "address_city": None,
                "featured": False, "status": "published", "created_at": "2024-05-10T00:00:00Z",
            },
            {
                "id": "p-6", "slug": "apto-batel", "title": "Rascunho Jardim",
                "description": "draft copy", "property_type": "penthouse", "price": 999999,
                "bedrooms": 5, "address_neighborhood": "Batel", "address_city": "Araucária",
                "featured": True, "status": "draft", "created_at": "2024-06-10T00:00:00Z",
            },
        ],
        "blog_posts": [
            {"id": "bp-1", "slug": "guia-financiamento", "title": "Guia de financiamento",
             "published_at": "2024-03-01T00:00:00Z", "status": "published"},
            {"id": "bp-2", "slug": "mercado-2024", "title": "Mercado em 2024",
             "published_at": "2024-05-01T00:00:00Z", "status": "published"},
            {"id": "bp-3", "slug": "dicas-mudanca", "title": "Dicas de mudança",
             "published_at": "2024-04-01T00:00:00Z", "status": "published"},
            {"id": "bp-4", "slug": "rascunho", "title": "Rascunho",
             "published_at": None, "status": "draft"},
        ],
    }


@pytest.fixture
def tables():
    return sample_tables()


@pytest.fixture
def backend(tables):
    from db.memory import InMemoryBackend
    return InMemoryBackend(tables)


class FailingBackend:
    """Backend that fails every read the way a dropped connection would."""

    def __init__(self, message: str = "connection refused"):
        self.message = message
        self.calls = 0

    def execute(self, query):
        from db.errors import BackendError
        self.calls += 1
        raise BackendError(self.message, table=query.table)


@pytest.fixture
def failing_backend():
    return FailingBackend()
