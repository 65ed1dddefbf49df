"""Reference data and diagnostics services shared by the resolvers."""
from .diagnostics import (
    CollectingSink,
    DiagnosticsSink,
    LoggingSink,
    NullSink,
    get_default_sink,
    safe_emit,
)
from .reference_data import (
    ReferenceData,
    ReferenceDataLoader,
    get_reference_data,
)

__all__ = [
    # Diagnostics
    'CollectingSink',
    'DiagnosticsSink',
    'LoggingSink',
    'NullSink',
    'get_default_sink',
    'safe_emit',
    # Reference data
    'ReferenceData',
    'ReferenceDataLoader',
    'get_reference_data',
]
