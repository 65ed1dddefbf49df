"""
Name Resolver - Country Name to ISO3 Code

Matching runs in tiers, loosest last:
1. Exact match on the normalized name
2. Prefix match (input starts a known name)
3. Substring match (input appears inside a known name)

Tiers 2 and 3 only run when the normalized input has at least ``min_letter``
characters and is not made up entirely of generic words such as "united" or
"republic". Within a tier the first name in table order wins.
"""

from __future__ import annotations

import logging
from typing import FrozenSet, Optional, Tuple

from ..models import DiagnosticLevel
from ..services.diagnostics import DiagnosticsSink, safe_emit
from ..services.reference_data import ReferenceData
from .normalizer import normalize

logger = logging.getLogger(__name__)

# "Korea" alone is ambiguous; it resolves to the Republic of Korea.
KOREA_INPUT = "korea"
KOREA_DEFAULT_CODE = "KOR"

DEFAULT_MIN_LETTER = 5

STOP_WORDS: FrozenSet[str] = frozenset({
    "united", "republic", "democratic", "state", "states", "kingdom",
    "islamic", "federal", "federation", "new", "northern", "southern",
    "eastern", "western", "central", "people", "saint", "san", "union",
    "great", "grand", "independent", "congo", "korea", "germany",
})


def is_only_stop_words(normalized: str) -> bool:
    """True when every word of ``normalized`` is a stop word (or there are none)."""
    return all(word in STOP_WORDS for word in normalized.split())


class NameResolver:
    """
    Resolves free-text country names to ISO3 codes against a ReferenceData
    name table.
    """

    def __init__(
        self,
        data: ReferenceData,
        sink: Optional[DiagnosticsSink] = None,
        entries: Optional[Tuple[Tuple[str, str, str], ...]] = None,
    ):
        self.data = data
        self.sink = sink
        # (normalized name, original name, code) in table order
        if entries is None:
            entries = tuple(
                (normalize(name), name, code) for name, code in data.name_to_code.items()
            )
            logger.debug(f"NameResolver ready with {len(entries)} names")
        self._entries: Tuple[Tuple[str, str, str], ...] = entries

    def with_sink(self, sink: Optional[DiagnosticsSink]) -> "NameResolver":
        """Resolver over the same normalized names that reports to ``sink``."""
        return NameResolver(self.data, sink, self._entries)

    def resolve(
        self,
        country_name: str,
        min_letter: int = DEFAULT_MIN_LETTER,
        verbose: bool = True,
    ) -> Optional[str]:
        """
        Resolve one country name.

        Args:
            country_name: Free-text name (e.g., "France", "Rep. of Korea", "franc")
            min_letter: Minimum normalized length for prefix/substring matching
            verbose: Emit diagnostics for fuzzy matches and failures

        Returns:
            ISO3 code, or None if nothing matched
        """
        sink = self.sink if verbose else None
        normalized = normalize(country_name)

        if normalized == KOREA_INPUT:
            safe_emit(
                sink,
                f"ISO code for country name '{country_name}' ({normalized}) "
                f"was associated with South Korea ({KOREA_DEFAULT_CODE})",
                DiagnosticLevel.WARNING,
            )
            return KOREA_DEFAULT_CODE

        for candidate, _, code in self._entries:
            if candidate == normalized:
                return code

        if len(normalized) >= min_letter and not is_only_stop_words(normalized):
            for candidate, name, code in self._entries:
                if candidate.startswith(normalized):
                    safe_emit(
                        sink,
                        f"Found prefix match: input '{country_name}' matched with country '{name}'",
                        DiagnosticLevel.INFO,
                        "PREFIX",
                    )
                    return code

            for candidate, name, code in self._entries:
                if normalized in candidate:
                    safe_emit(
                        sink,
                        f"Found partial match: input '{country_name}' matched with country '{name}'",
                        DiagnosticLevel.INFO,
                        "PARTIAL",
                    )
                    return code

        safe_emit(
            sink,
            f"ISO code for country name '{country_name}' ({normalized}) not found. None returned.",
            DiagnosticLevel.WARNING,
        )
        return None
