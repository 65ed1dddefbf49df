"""Utility functions for countryref."""
from .vectorize import Batch, as_batch, restore

__all__ = [
    'Batch',
    'as_batch',
    'restore',
]
