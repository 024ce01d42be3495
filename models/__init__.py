from .company_settings import CompanySettings
from .company_views import (
    CompanyAddress,
    CompanyBranding,
    CompanyBusiness,
    CompanyContact,
    CompanySocial,
)
from .filters import PropertyFilters

__all__ = [
    "CompanySettings",
    "CompanyAddress",
    "CompanyBranding",
    "CompanyBusiness",
    "CompanyContact",
    "CompanySocial",
    "PropertyFilters",
]
