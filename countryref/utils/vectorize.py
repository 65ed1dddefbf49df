"""Element-wise helpers for the public batch operations.

Batches may be given as a list/tuple, a single string (a batch of one) or a
pandas Series. Results mirror the input: a Series in gives a Series out with
the same index, anything else gives a list.
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any, List, Optional, Sequence, Tuple, Union

import pandas as pd

from ..exceptions import InvalidArgumentError

Batch = Union[str, Sequence[str], pd.Series]


def as_batch(values: Any, argument: str) -> Tuple[List[str], Optional[pd.Series]]:
    """
    Split ``values`` into a plain list of strings and the Series it came from.

    Raises:
        InvalidArgumentError: if ``values`` is not iterable or holds non-strings
    """
    if isinstance(values, str):
        return [values], None

    series = values if isinstance(values, pd.Series) else None
    if isinstance(values, (bytes, dict)) or not isinstance(values, Iterable):
        raise InvalidArgumentError(
            f"{argument} must be a string or a sequence of strings, got {type(values).__name__}",
            argument=argument,
        )

    items = list(values)
    for position, item in enumerate(items):
        if not isinstance(item, str):
            raise InvalidArgumentError(
                f"{argument} must contain only strings; element {position} is {item!r}",
                argument=argument,
                details={"position": position},
            )
    return items, series


def restore(results: List[Any], series: Optional[pd.Series]) -> Union[List[Any], pd.Series]:
    """Give results back in the container type the caller used."""
    if series is None:
        return results
    return pd.Series(results, index=series.index, name=series.name, dtype=object)
