from __future__ import annotations

import contextvars
from contextlib import contextmanager
from typing import Iterator, Optional

from db.errors import ConfigurationError
from services.company_settings import CompanySettingsService


_current: contextvars.ContextVar[Optional[CompanySettingsService]] = contextvars.ContextVar(
    "company_settings_service", default=None
)


@contextmanager
def company_scope(service: CompanySettingsService) -> Iterator[CompanySettingsService]:
    """Bind a settings service for code that cannot receive it as an argument."""
    token = _current.set(service)
    try:
        yield service
    finally:
        _current.reset(token)


def use_company() -> CompanySettingsService:
    service = _current.get()
    if service is None:
        raise ConfigurationError("use_company must be used within company_scope")
    return service
