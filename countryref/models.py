"""
Shared models for countryref.

Attribute is the closed set of things the code resolver can report about an
ISO3 code; DiagnosticEvent is what the diagnostics sinks record.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from .exceptions import InvalidAttributeError


class Attribute(str, Enum):
    """Information that can be looked up for an ISO3 code"""
    NAME = "Name"
    ISO2 = "ISO2"
    REGION = "Region"
    SUBREGION = "Subregion"
    CENTER_PERIPHERY = "Center-Periphery"
    OIL = "Oil"
    NATURAL_RENT = "NaturalRent"
    CATEGORY = "Category"

    @classmethod
    def parse(cls, value: Union["Attribute", str]) -> "Attribute":
        """Resolve an Attribute from an enum member or a case-insensitive name.

        Raises:
            InvalidAttributeError: if ``value`` names no attribute
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            wanted = value.strip().lower()
            for member in cls:
                if member.value.lower() == wanted or member.name.lower() == wanted:
                    return member
        raise InvalidAttributeError(value, [member.value for member in cls])

    @property
    def per_element(self) -> bool:
        """False for attributes that answer for the whole batch at once."""
        return self is not Attribute.CATEGORY


class DiagnosticLevel(str, Enum):
    """Severity of a diagnostic event"""
    INFO = "info"
    WARNING = "warning"


class DiagnosticEvent(BaseModel):
    """A single informational or warning note emitted during resolution."""
    model_config = ConfigDict(frozen=True)

    message: str
    level: DiagnosticLevel = DiagnosticLevel.INFO
    tag: Optional[str] = None
