"""
Category Expander - Category Expressions to ISO3 Codes

An expression is one of:
- a category name ("EU", "BRICS", "EUROPE")
- a category with exclusions ("EUROPE-DEU-FRA")
- a literal three-character code ("USA"), taken as-is

Results of several expressions are merged in order with duplicates removed.
"""

from __future__ import annotations

import logging
import re
from typing import FrozenSet, Iterable, List, Optional, Tuple

from ..models import DiagnosticLevel
from ..services.diagnostics import DiagnosticsSink, safe_emit
from ..services.reference_data import ReferenceData

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")

# Expressions whose membership surprises people often enough to warrant a note.
BOUNDARY_WATCH: FrozenSet[str] = frozenset({"CTR", "CTR_FOL", "SMP", "SMP_FOL"})
BOUNDARY_NOTE = "Note: IRL, HKG and SGP are in CTR and ESP, ISR, TWN, KOR and CHN are in SMP"


def _dedupe(codes: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for code in codes:
        if code not in seen:
            seen.add(code)
            result.append(code)
    return result


class CategoryExpander:
    """Expands category expressions against a ReferenceData category table."""

    def __init__(self, data: ReferenceData, sink: Optional[DiagnosticsSink] = None):
        self.data = data
        self.sink = sink

    def expand_one(self, expression: str) -> Tuple[str, ...]:
        """
        Expand a single expression.

        Unknown categories and unknown exclusions contribute nothing; neither
        is an error.
        """
        expression = expression.strip()

        if "-" in expression:
            group, *exclusions = _WHITESPACE.sub("", expression).split("-")
            if not self.data.has_category(group):
                logger.debug(f"Unknown category '{group}' in expression '{expression}'")
                return ()
            excluded = set(exclusions)
            return tuple(code for code in self.data.members(group) if code not in excluded)

        if self.data.has_category(expression):
            return self.data.members(expression)

        if len(expression) == 3:
            return (expression,)

        return ()

    def expand(self, expressions: Iterable[str], verbose: bool = True) -> List[str]:
        """
        Expand and merge several expressions.

        Args:
            expressions: Category expressions (e.g., ["BRICS", "EUROPE-DEU", "USA"])
            verbose: Emit the boundary-country note for CTR/SMP style queries

        Returns:
            ISO3 codes in first-seen order, without duplicates
        """
        expressions = list(expressions)
        if verbose and any(item in BOUNDARY_WATCH for item in expressions):
            safe_emit(self.sink, BOUNDARY_NOTE, DiagnosticLevel.INFO)

        result: List[str] = []
        for item in expressions:
            result.extend(self.expand_one(item))
        return _dedupe(result)

    def overlap(self, first: str, second: str) -> List[str]:
        """Codes present in both expressions, in the order of ``first``."""
        other = set(self.expand([second], verbose=False))
        return [code for code in self.expand([first], verbose=False) if code in other]

    def difference(self, first: str, second: str) -> List[str]:
        """
        Codes in ``first`` but not in ``second``.

        Example:
            >>> expander.difference("CTR", "EU")
            ['USA', 'JPN', 'GBR', 'CHE', 'NOR', 'ISL', 'CAN', 'AUS', 'NZL', 'HKG', 'SGP']
        """
        other = set(self.expand([second], verbose=False))
        return [code for code in self.expand([first], verbose=False) if code not in other]
