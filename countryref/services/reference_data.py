"""
Reference Data Service

Loads the static country tables once and exposes them as an immutable
ReferenceData object shared by every resolver:

- name -> ISO3 (canonical names, aliases, special and historical names)
- ISO3 -> name for the current, special/regional and historical tiers
- category -> ordered member codes, plus the region/subregion name lists
- ISO2 -> ISO3

Tables are YAML files under countryref/data (or COUNTRYREF_DATA_DIR).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

import yaml

from ..config import get_settings
from ..exceptions import ConfigurationError, ReferenceDataError

logger = logging.getLogger(__name__)

BUNDLED_DATA_DIR = Path(__file__).resolve().parent.parent / "data"

COUNTRIES_FILE = "countries.yaml"
ALIASES_FILE = "aliases.yaml"
SPECIAL_FILE = "special_codes.yaml"
HISTORICAL_FILE = "historical_codes.yaml"
ISO2_FILE = "iso2.yaml"
CATEGORIES_FILE = "categories.yaml"


def _ordered_unique(values: Iterable[str]) -> Tuple[str, ...]:
    seen = set()
    out = []
    for value in values:
        if value not in seen:
            seen.add(value)
            out.append(value)
    return tuple(out)


@dataclass(frozen=True)
class ReferenceData:
    """Read-only lookup tables consumed by the resolvers.

    Mappings preserve insertion order: "first match wins" lookups depend on it.
    """
    name_to_code: Mapping[str, str]
    code_to_name_current: Mapping[str, str]
    code_to_name_special: Mapping[str, str]
    code_to_name_historical: Mapping[str, str]
    category_to_codes: Mapping[str, Tuple[str, ...]]
    iso2_to_iso3: Mapping[str, str]
    regions: Tuple[str, ...] = ()
    subregions: Tuple[str, ...] = ()
    _category_sets: Mapping[str, FrozenSet[str]] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        sets = {name: frozenset(codes) for name, codes in self.category_to_codes.items()}
        object.__setattr__(self, "_category_sets", MappingProxyType(sets))

    @classmethod
    def from_tables(
        cls,
        *,
        name_to_code: Mapping[str, str],
        code_to_name_current: Mapping[str, str],
        code_to_name_special: Optional[Mapping[str, str]] = None,
        code_to_name_historical: Optional[Mapping[str, str]] = None,
        category_to_codes: Optional[Mapping[str, Iterable[str]]] = None,
        iso2_to_iso3: Optional[Mapping[str, str]] = None,
        regions: Iterable[str] = (),
        subregions: Iterable[str] = (),
    ) -> "ReferenceData":
        """Build ReferenceData from plain mappings (copied, then frozen)."""
        categories = {
            str(name): _ordered_unique(str(code) for code in codes)
            for name, codes in (category_to_codes or {}).items()
        }
        return cls(
            name_to_code=MappingProxyType(dict(name_to_code)),
            code_to_name_current=MappingProxyType(dict(code_to_name_current)),
            code_to_name_special=MappingProxyType(dict(code_to_name_special or {})),
            code_to_name_historical=MappingProxyType(dict(code_to_name_historical or {})),
            category_to_codes=MappingProxyType(categories),
            iso2_to_iso3=MappingProxyType(dict(iso2_to_iso3 or {})),
            regions=tuple(regions),
            subregions=tuple(subregions),
        )

    # ------------------------------------------------------------------
    # Category helpers
    # ------------------------------------------------------------------

    def categories(self) -> Tuple[str, ...]:
        """All category names in table order."""
        return tuple(self.category_to_codes)

    def has_category(self, name: str) -> bool:
        return name in self.category_to_codes

    def members(self, category: str) -> Optional[Tuple[str, ...]]:
        """Ordered member codes of ``category`` or None if it is unknown."""
        return self.category_to_codes.get(category)

    def is_member(self, code: str, category: str) -> bool:
        members = self._category_sets.get(category)
        return members is not None and code in members


class ReferenceDataLoader:
    """Reads the YAML reference tables from a directory."""

    def __init__(self, data_dir: Optional[Path | str] = None):
        """
        Args:
            data_dir: Directory holding the six YAML tables (bundled data if None)
        """
        self.data_dir = Path(data_dir) if data_dir else BUNDLED_DATA_DIR

    def load(self) -> ReferenceData:
        if not self.data_dir.is_dir():
            raise ConfigurationError(
                f"Reference data directory not found: {self.data_dir}",
                details={"data_dir": str(self.data_dir)},
            )

        current, iso2_current = self._load_countries()
        aliases = self._load_code_mapping(ALIASES_FILE, key_upper=False)
        special = self._load_code_mapping(SPECIAL_FILE, key_upper=True, value_is_code=False)
        historical = self._load_code_mapping(HISTORICAL_FILE, key_upper=True, value_is_code=False)
        iso2_extra = self._load_code_mapping(ISO2_FILE, key_upper=True)
        categories, regions, subregions = self._load_categories()

        # Canonical names first, then aliases, then special and historical
        # names; a name already present keeps its first code.
        name_to_code: Dict[str, str] = {}
        for code, name in current.items():
            name_to_code.setdefault(name, code)
        for name, code in aliases.items():
            name_to_code.setdefault(name, code)
        for code, name in special.items():
            name_to_code.setdefault(name, code)
        for code, name in historical.items():
            name_to_code.setdefault(name, code)

        iso2_to_iso3 = dict(iso2_current)
        for iso2, iso3 in iso2_extra.items():
            iso2_to_iso3.setdefault(iso2, iso3)

        data = ReferenceData.from_tables(
            name_to_code=name_to_code,
            code_to_name_current=current,
            code_to_name_special=special,
            code_to_name_historical=historical,
            category_to_codes=categories,
            iso2_to_iso3=iso2_to_iso3,
            regions=regions,
            subregions=subregions,
        )
        self._warn_overlapping(data, data.regions, "region")
        self._warn_overlapping(data, data.subregions, "subregion")

        logger.info(
            f"Loaded reference data from {self.data_dir}: {len(name_to_code)} names, "
            f"{len(current)} current codes, {len(categories)} categories"
        )
        return data

    # ------------------------------------------------------------------

    def _read_yaml(self, filename: str, expected: type) -> Any:
        path = self.data_dir / filename
        try:
            with open(path, "r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise ReferenceDataError(f"Reference table missing: {filename}", path=str(path)) from e
        except yaml.YAMLError as e:
            raise ReferenceDataError(f"Error parsing {filename}: {e}", path=str(path)) from e

        if content is None:
            content = expected()
        if not isinstance(content, expected):
            raise ReferenceDataError(
                f"{filename} must contain a YAML {expected.__name__}, got {type(content).__name__}",
                path=str(path),
            )
        return content

    def _load_countries(self) -> Tuple[Dict[str, str], Dict[str, str]]:
        rows = self._read_yaml(COUNTRIES_FILE, list)
        current: Dict[str, str] = {}
        iso2_to_iso3: Dict[str, str] = {}
        for index, row in enumerate(rows):
            if not isinstance(row, dict) or not row.get("iso3") or not row.get("name"):
                raise ReferenceDataError(
                    f"{COUNTRIES_FILE} entry {index} needs 'iso3' and 'name'",
                    path=str(self.data_dir / COUNTRIES_FILE),
                )
            iso3 = str(row["iso3"]).strip().upper()
            current.setdefault(iso3, str(row["name"]).strip())
            iso2 = row.get("iso2")
            if iso2:
                iso2_to_iso3.setdefault(str(iso2).strip().upper(), iso3)
        return current, iso2_to_iso3

    def _load_code_mapping(
        self,
        filename: str,
        key_upper: bool,
        value_is_code: bool = True,
    ) -> Dict[str, str]:
        raw = self._read_yaml(filename, dict)
        mapping: Dict[str, str] = {}
        for key, value in raw.items():
            key_text = str(key).strip()
            value_text = str(value).strip()
            if key_upper:
                key_text = key_text.upper()
            if value_is_code:
                value_text = value_text.upper()
            if key_text and value_text:
                mapping.setdefault(key_text, value_text)
        return mapping

    def _load_categories(self) -> Tuple[Dict[str, List[str]], List[str], List[str]]:
        raw = self._read_yaml(CATEGORIES_FILE, dict)
        table = raw.get("categories") or {}
        if not isinstance(table, dict):
            raise ReferenceDataError(
                f"'categories' in {CATEGORIES_FILE} must be a mapping",
                path=str(self.data_dir / CATEGORIES_FILE),
            )

        categories: Dict[str, List[str]] = {}
        for name, codes in table.items():
            if not isinstance(codes, list):
                raise ReferenceDataError(
                    f"Category {name} in {CATEGORIES_FILE} must list ISO3 codes",
                    path=str(self.data_dir / CATEGORIES_FILE),
                )
            categories[str(name)] = [str(code).strip().upper() for code in codes]

        regions = [str(r) for r in raw.get("regions") or []]
        subregions = [str(r) for r in raw.get("subregions") or []]
        for group in regions + subregions:
            if group not in categories:
                logger.warning(f"Region '{group}' has no category table; it will never match")
        return categories, regions, subregions

    @staticmethod
    def _warn_overlapping(data: ReferenceData, groups: Tuple[str, ...], label: str) -> None:
        """Region lookups take the first matching group, so overlaps are ambiguous."""
        owner: Dict[str, str] = {}
        for group in groups:
            for code in data.members(group) or ():
                if code in owner and owner[code] != group:
                    logger.warning(
                        f"{code} belongs to {label}s {owner[code]} and {group}; "
                        f"{owner[code]} will be reported"
                    )
                else:
                    owner.setdefault(code, group)


@lru_cache(maxsize=1)
def get_reference_data() -> ReferenceData:
    """Load the configured reference tables once per process."""
    return ReferenceDataLoader(get_settings().data_dir).load()
