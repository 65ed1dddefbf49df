from __future__ import annotations

import logging
from typing import Callable, List, Optional, Protocol, Union, runtime_checkable

from ..models import DiagnosticEvent, DiagnosticLevel

logger = logging.getLogger(__name__)

# Resolution notes have their own logger, separate from library internals.
diagnostics_logger = logging.getLogger("countryref.diagnostics")

LevelLike = Union[DiagnosticLevel, str]


@runtime_checkable
class DiagnosticsSink(Protocol):
    """Receives informational and warning notes produced while resolving."""

    def emit(self, message: str, level: LevelLike, tag: Optional[str] = None) -> None:
        ...


class LoggingSink:
    """Forwards diagnostic events to the standard logging module."""

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self._log = log or diagnostics_logger

    def emit(self, message: str, level: LevelLike, tag: Optional[str] = None) -> None:
        text = f"[{tag}] {message}" if tag else message
        if DiagnosticLevel(level) is DiagnosticLevel.WARNING:
            self._log.warning(text)
        else:
            self._log.info(text)


class CollectingSink:
    """Collects diagnostic events so callers can inspect them afterwards.

    An optional callback receives each event as it is recorded.
    """

    def __init__(self, stream_callback: Optional[Callable[[DiagnosticEvent], None]] = None) -> None:
        self._events: list[DiagnosticEvent] = []
        self._stream_callback = stream_callback

    def emit(self, message: str, level: LevelLike, tag: Optional[str] = None) -> None:
        event = DiagnosticEvent(message=message, level=DiagnosticLevel(level), tag=tag)
        self._events.append(event)
        if self._stream_callback:
            self._stream_callback(event)

    @property
    def events(self) -> List[DiagnosticEvent]:
        return list(self._events)

    def warnings(self) -> List[DiagnosticEvent]:
        return [e for e in self._events if e.level is DiagnosticLevel.WARNING]

    def with_tag(self, tag: str) -> List[DiagnosticEvent]:
        return [e for e in self._events if e.tag == tag]

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)


class NullSink:
    """Discards every event."""

    def emit(self, message: str, level: LevelLike, tag: Optional[str] = None) -> None:
        return None


_default_sink = LoggingSink()


def get_default_sink() -> DiagnosticsSink:
    return _default_sink


def safe_emit(
    sink: Optional[DiagnosticsSink],
    message: str,
    level: LevelLike = DiagnosticLevel.INFO,
    tag: Optional[str] = None,
) -> None:
    """Send an event to ``sink`` without letting sink failures escape.

    A failing sink is logged at debug level.
    """
    if sink is None:
        return
    try:
        sink.emit(message, level, tag)
    except Exception as exc:
        logger.debug(f"Diagnostics sink {type(sink).__name__} failed: {exc}")
