"""
Code Resolver - ISO3 Code to Country Information

Answers one Attribute per call for a batch of ISO3 codes. Codes are trimmed
and uppercased before lookup. Per-element attributes give one value (or None)
per input code; Category answers for the batch as a whole.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from ..exceptions import InvalidArgumentError
from ..models import Attribute, DiagnosticLevel
from ..services.diagnostics import DiagnosticsSink, safe_emit
from ..services.reference_data import ReferenceData
from .category_expander import CategoryExpander

logger = logging.getLogger(__name__)

# (label reported, categories checked) in priority order
CENTER_PERIPHERY_ORDER: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("CTR_LDR", ("CTR_LDR",)),
    ("CTR_FOL", ("CTR_FOL",)),
    ("SMP_LDR", ("SMP_WLD", "SMP_RLD")),
    ("SMP_FOL", ("SMP_FOL",)),
    ("PERI", ("PERI",)),
)
OIL_ORDER: Tuple[str, ...] = ("HYD_EXP", "HYD_IMP")
NATURAL_RENT_ORDER: Tuple[str, ...] = ("NRS_REN",)

SPECIAL_TAG = "Special"
ARCHIVE_TAG = "Archive"


def clean_code(code: str) -> str:
    return code.strip().upper()


class CodeResolver:
    """Looks up names, ISO2 codes and classifications for ISO3 codes."""

    def __init__(
        self,
        data: ReferenceData,
        sink: Optional[DiagnosticsSink] = None,
        expander: Optional[CategoryExpander] = None,
    ):
        self.data = data
        self.sink = sink
        self.expander = expander or CategoryExpander(data, sink)
        self._per_element: Dict[Attribute, Callable[[str, bool], Optional[str]]] = {
            Attribute.NAME: self.name,
            Attribute.ISO2: lambda code, verbose: self.iso2(code),
            Attribute.REGION: lambda code, verbose: self.region(code),
            Attribute.SUBREGION: lambda code, verbose: self.subregion(code),
            Attribute.CENTER_PERIPHERY: lambda code, verbose: self.center_periphery(code),
            Attribute.OIL: lambda code, verbose: self.oil(code),
            Attribute.NATURAL_RENT: lambda code, verbose: self.natural_rent(code),
        }

    # ==========================================================================
    # Batch entry point
    # ==========================================================================

    def resolve(
        self,
        codes: Sequence[str],
        attribute: Union[Attribute, str],
        verbose: bool = True,
    ) -> List[Optional[str]]:
        """
        Resolve ``attribute`` for every code.

        Args:
            codes: ISO3 codes (case and surrounding whitespace are ignored)
            attribute: Attribute member or its name (e.g., "Oil", "center-periphery")
            verbose: Emit diagnostics for non-current and unknown codes

        Returns:
            One value per code, or for Category the names of all categories
            that contain every code

        Raises:
            InvalidAttributeError: if ``attribute`` is not a known attribute
        """
        attribute = Attribute.parse(attribute)
        cleaned = [clean_code(code) for code in codes]
        if attribute is Attribute.CATEGORY:
            return list(self.categories(cleaned))
        lookup = self._per_element[attribute]
        return [lookup(code, verbose) for code in cleaned]

    # ==========================================================================
    # Per-code lookups
    # ==========================================================================

    def name(self, code: str, verbose: bool = True) -> Optional[str]:
        """Name from the current, then special, then historical table."""
        sink = self.sink if verbose else None

        name = self.data.code_to_name_current.get(code)
        if name is not None:
            return name

        name = self.data.code_to_name_special.get(code)
        if name is not None:
            safe_emit(
                sink,
                f"ISO code '{code}' ({name}) found in special/regional pseudo-ISO codes list",
                DiagnosticLevel.INFO,
                SPECIAL_TAG,
            )
            return name

        name = self.data.code_to_name_historical.get(code)
        if name is not None:
            safe_emit(
                sink,
                f"ISO code '{code}' ({name}) found in historical ISO codes list",
                DiagnosticLevel.INFO,
                ARCHIVE_TAG,
            )
            return name

        safe_emit(sink, f"ISO not in any lists: {code}", DiagnosticLevel.WARNING)
        return None

    def iso2(self, code: str) -> Optional[str]:
        """First ISO2 code (in table order) that maps to ``code``."""
        for iso2, iso3 in self.data.iso2_to_iso3.items():
            if iso3 == code:
                return iso2
        return None

    def region(self, code: str) -> Optional[str]:
        return self._first_group(code, self.data.regions)

    def subregion(self, code: str) -> Optional[str]:
        return self._first_group(code, self.data.subregions)

    def center_periphery(self, code: str) -> Optional[str]:
        for label, groups in CENTER_PERIPHERY_ORDER:
            if any(self.data.is_member(code, group) for group in groups):
                return label
        return None

    def oil(self, code: str) -> Optional[str]:
        return self._first_group(code, OIL_ORDER)

    def natural_rent(self, code: str) -> Optional[str]:
        return self._first_group(code, NATURAL_RENT_ORDER)

    # ==========================================================================
    # Whole-batch lookup
    # ==========================================================================

    def categories(self, codes: Sequence[str]) -> Tuple[str, ...]:
        """
        Categories whose members include every one of ``codes``.

        This is a question about the batch, not about each code: for
        ["FRA", "DEU"] it returns the categories containing both.

        Raises:
            InvalidArgumentError: if any code is not three characters long
        """
        bad = [code for code in codes if len(code) != 3]
        if bad:
            raise InvalidArgumentError(
                f"Category lookup needs ISO3 codes, got: {', '.join(repr(c) for c in bad)}",
                argument="codes",
            )

        wanted = set(codes)
        result = []
        for category in self.data.categories():
            members = set(self.expander.expand([category], verbose=False))
            if wanted <= members:
                result.append(category)
        logger.debug(f"{len(result)} categories contain all of {sorted(wanted)}")
        return tuple(result)

    def _first_group(self, code: str, groups: Sequence[str]) -> Optional[str]:
        for group in groups:
            if self.data.is_member(code, group):
                return group
        return None
