"""
Public operations.

    name_to_code(["France", "Deutschland"])        -> ["FRA", "DEU"]
    code_to_info(["SAU", "USA"], "Oil")            -> ["HYD_EXP", None]
    expand_category(["EUROPE-DEU", "BRICS"])       -> ["ALA", "AND", ...]

Every operation works on the bundled reference tables unless a CountryRef
built on other tables is used directly. Diagnostics go to the logging module
unless a sink is given.
"""
from __future__ import annotations

import copy
import logging
from functools import lru_cache
from typing import Iterable, List, Optional, Tuple, Union

import pandas as pd

from .config import get_settings
from .exceptions import InvalidArgumentError
from .models import Attribute
from .resolution.category_expander import CategoryExpander
from .resolution.code_resolver import CodeResolver
from .resolution.name_resolver import NameResolver
from .services.diagnostics import DiagnosticsSink, get_default_sink
from .services.reference_data import ReferenceData, get_reference_data
from .utils.vectorize import Batch, as_batch, restore

logger = logging.getLogger(__name__)


class CountryRef:
    """
    Bundles the resolvers over one ReferenceData and one diagnostics sink.

    Args:
        data: Reference tables (the configured tables if None)
        sink: Receiver for diagnostics (logging if None)
    """

    def __init__(
        self,
        data: Optional[ReferenceData] = None,
        sink: Optional[DiagnosticsSink] = None,
    ):
        self.data = data if data is not None else get_reference_data()
        self.sink = sink if sink is not None else get_default_sink()
        self.names = NameResolver(self.data, self.sink)
        self.expander = CategoryExpander(self.data, self.sink)
        self.codes = CodeResolver(self.data, self.sink, self.expander)

    def with_sink(self, sink: DiagnosticsSink) -> "CountryRef":
        """Copy of this CountryRef reporting to ``sink``, sharing the prepared name table."""
        ref = copy.copy(self)
        ref.sink = sink
        ref.names = self.names.with_sink(sink)
        ref.expander = CategoryExpander(self.data, sink)
        ref.codes = CodeResolver(self.data, sink, ref.expander)
        return ref

    def name_to_code(
        self,
        names: Batch,
        min_letter: Optional[int] = None,
        verbose: Optional[bool] = None,
    ) -> Union[List[Optional[str]], pd.Series]:
        """
        Convert country names to ISO3 codes.

        Args:
            names: Country names in any common spelling
            min_letter: Minimum normalized length for prefix/substring matching
            verbose: Emit diagnostics for fuzzy matches and misses

        Returns:
            One ISO3 code (or None) per name, in input order
        """
        settings = get_settings()
        min_letter = settings.min_letter if min_letter is None else min_letter
        verbose = settings.verbose if verbose is None else verbose
        if min_letter < 0:
            raise InvalidArgumentError("min_letter must be >= 0", argument="min_letter")

        items, series = as_batch(names, "names")
        results = [self.names.resolve(name, min_letter, verbose) for name in items]
        return restore(results, series)

    def code_to_info(
        self,
        codes: Batch,
        attribute: Union[Attribute, str] = Attribute.NAME,
        verbose: Optional[bool] = None,
    ) -> Union[List[Optional[str]], pd.Series]:
        """
        Look up information about ISO3 codes.

        Args:
            codes: ISO3 codes (case-insensitive, whitespace trimmed)
            attribute: Name, ISO2, Region, Subregion, Center-Periphery, Oil,
                NaturalRent or Category
            verbose: Emit diagnostics for special, historical and unknown codes

        Returns:
            One value (or None) per code. For Category, the list of categories
            containing all the codes.

        Raises:
            InvalidAttributeError: for an unknown attribute
            InvalidArgumentError: for non-string codes, or non-ISO3 codes with Category
        """
        verbose = get_settings().verbose if verbose is None else verbose
        attribute = Attribute.parse(attribute)
        items, series = as_batch(codes, "codes")
        results = self.codes.resolve(items, attribute, verbose)
        if not attribute.per_element:
            return results
        return restore(results, series)

    def expand_category(
        self,
        expressions: Batch,
        verbose: Optional[bool] = None,
    ) -> List[str]:
        """
        Expand category expressions ("EU", "EUROPE-DEU", "USA") to ISO3 codes.

        Returns:
            Codes in first-seen order, without duplicates
        """
        verbose = get_settings().verbose if verbose is None else verbose
        items, _ = as_batch(expressions, "expressions")
        return self.expander.expand(items, verbose)

    def category_overlap(self, first: str, second: str) -> List[str]:
        """Codes belonging to both category expressions."""
        self._require_str(first, "first")
        self._require_str(second, "second")
        return self.expander.overlap(first, second)

    def category_difference(self, first: str, second: str) -> List[str]:
        """Codes in the first category expression but not the second."""
        self._require_str(first, "first")
        self._require_str(second, "second")
        return self.expander.difference(first, second)

    def list_categories(self) -> Tuple[str, ...]:
        return self.data.categories()

    def enrich_frame(
        self,
        frame: pd.DataFrame,
        column: str,
        attributes: Iterable[Union[Attribute, str]] = (Attribute.NAME,),
        verbose: Optional[bool] = None,
    ) -> pd.DataFrame:
        """
        Add one ``<column>_<attribute>`` column per attribute to a copy of ``frame``.

        Args:
            frame: DataFrame with ISO3 codes in ``column``
            column: Name of the ISO3 column
            attributes: Per-code attributes to add (Category is not per-code)

        Raises:
            InvalidArgumentError: for a missing column or the Category attribute
        """
        if column not in frame.columns:
            raise InvalidArgumentError(f"Column '{column}' not in frame", argument="column")

        parsed = [Attribute.parse(attribute) for attribute in attributes]
        for attribute in parsed:
            if not attribute.per_element:
                raise InvalidArgumentError(
                    f"Attribute '{attribute.value}' describes the whole batch and cannot be a column",
                    argument="attributes",
                )

        out = frame.copy()
        for attribute in parsed:
            out[f"{column}_{attribute.value}"] = self.code_to_info(
                out[column], attribute, verbose=verbose
            )
        return out

    @staticmethod
    def _require_str(value: object, argument: str) -> None:
        if not isinstance(value, str):
            raise InvalidArgumentError(
                f"{argument} must be a category expression string, got {type(value).__name__}",
                argument=argument,
            )


@lru_cache(maxsize=1)
def get_country_ref() -> CountryRef:
    """Shared CountryRef over the configured reference data."""
    logger.debug("Building shared CountryRef")
    return CountryRef()


def _ref(sink: Optional[DiagnosticsSink]) -> CountryRef:
    if sink is None:
        return get_country_ref()
    return get_country_ref().with_sink(sink)


def name_to_code(
    names: Batch,
    min_letter: Optional[int] = None,
    verbose: Optional[bool] = None,
    *,
    sink: Optional[DiagnosticsSink] = None,
) -> Union[List[Optional[str]], pd.Series]:
    """Convert country names to ISO3 codes. See CountryRef.name_to_code."""
    return _ref(sink).name_to_code(names, min_letter, verbose)


def code_to_info(
    codes: Batch,
    attribute: Union[Attribute, str] = Attribute.NAME,
    verbose: Optional[bool] = None,
    *,
    sink: Optional[DiagnosticsSink] = None,
) -> Union[List[Optional[str]], pd.Series]:
    """Look up information about ISO3 codes. See CountryRef.code_to_info."""
    return _ref(sink).code_to_info(codes, attribute, verbose)


def expand_category(
    expressions: Batch,
    verbose: Optional[bool] = None,
    *,
    sink: Optional[DiagnosticsSink] = None,
) -> List[str]:
    """Expand category expressions to ISO3 codes. See CountryRef.expand_category."""
    return _ref(sink).expand_category(expressions, verbose)


def category_overlap(first: str, second: str) -> List[str]:
    return get_country_ref().category_overlap(first, second)


def category_difference(first: str, second: str) -> List[str]:
    return get_country_ref().category_difference(first, second)


def list_categories() -> Tuple[str, ...]:
    return get_country_ref().list_categories()


def enrich_frame(
    frame: pd.DataFrame,
    column: str,
    attributes: Iterable[Union[Attribute, str]] = (Attribute.NAME,),
    verbose: Optional[bool] = None,
    *,
    sink: Optional[DiagnosticsSink] = None,
) -> pd.DataFrame:
    """Add ISO3 attribute columns to a copy of ``frame``. See CountryRef.enrich_frame."""
    return _ref(sink).enrich_frame(frame, column, attributes, verbose)
