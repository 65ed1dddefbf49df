"""
countryref - country name, ISO code and country category resolution.

    >>> from countryref import name_to_code, code_to_info, expand_category
    >>> name_to_code(["France", "Deutschland"])
    ['FRA', 'DEU']
    >>> code_to_info(["SAU"], "Oil")
    ['HYD_EXP']
"""

from .api import (
    CountryRef,
    category_difference,
    category_overlap,
    code_to_info,
    enrich_frame,
    expand_category,
    get_country_ref,
    list_categories,
    name_to_code,
)
from .exceptions import (
    ConfigurationError,
    CountryRefError,
    InvalidArgumentError,
    InvalidAttributeError,
    ReferenceDataError,
)
from .models import Attribute, DiagnosticEvent, DiagnosticLevel
from .services.diagnostics import CollectingSink, LoggingSink, NullSink

__version__ = "0.1.0"

__all__ = [
    # Operations
    "name_to_code",
    "code_to_info",
    "expand_category",
    "category_overlap",
    "category_difference",
    "list_categories",
    "enrich_frame",
    "CountryRef",
    "get_country_ref",
    # Models
    "Attribute",
    "DiagnosticEvent",
    "DiagnosticLevel",
    # Sinks
    "CollectingSink",
    "LoggingSink",
    "NullSink",
    # Errors
    "CountryRefError",
    "ConfigurationError",
    "ReferenceDataError",
    "InvalidArgumentError",
    "InvalidAttributeError",
]
