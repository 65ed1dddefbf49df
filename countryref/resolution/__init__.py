"""
Resolution Module

Components:
- normalize: Canonical comparison form of a country name
- NameResolver: Country name -> ISO3 (exact, prefix, substring)
- CodeResolver: ISO3 -> name, ISO2, region, classifications
- CategoryExpander: Category expressions -> ISO3 codes
"""

from .normalizer import normalize
from .name_resolver import NameResolver, STOP_WORDS
from .code_resolver import CodeResolver
from .category_expander import CategoryExpander

__all__ = [
    "normalize",
    "NameResolver",
    "STOP_WORDS",
    "CodeResolver",
    "CategoryExpander",
]
