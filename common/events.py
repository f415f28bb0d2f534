"""Structured run events and the context object passed into each operation."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from common.logging import get_logger


@dataclass(frozen=True)
class InjectionEvent:
    level: int
    kind: str
    message: str
    fields: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": logging.getLevelName(self.level),
            "kind": self.kind,
            "message": self.message,
            "fields": dict(self.fields),
        }


class EventSink(Protocol):
    def emit(self, event: InjectionEvent) -> None:
        ...


class RecordingSink:
    """Keeps every emitted event in memory, in order."""

    def __init__(self) -> None:
        self.events: List[InjectionEvent] = []

    def emit(self, event: InjectionEvent) -> None:
        self.events.append(event)

    def kinds(self) -> List[str]:
        return [event.kind for event in self.events]


class NullSink:
    def emit(self, event: InjectionEvent) -> None:
        return None


@dataclass
class InjectionContext:
    """Logger plus event sink for one injector run."""

    logger: logging.Logger = field(default_factory=lambda: get_logger("injector"))
    sink: EventSink = field(default_factory=NullSink)

    def emit(self, level: int, kind: str, message: str, **fields: Any) -> InjectionEvent:
        event = InjectionEvent(level=level, kind=kind, message=message, fields=fields)
        self.logger.log(level, message)
        self.sink.emit(event)
        return event

    def debug(self, kind: str, message: str, **fields: Any) -> InjectionEvent:
        return self.emit(logging.DEBUG, kind, message, **fields)

    def info(self, kind: str, message: str, **fields: Any) -> InjectionEvent:
        return self.emit(logging.INFO, kind, message, **fields)

    @classmethod
    def recording(cls, logger: Optional[logging.Logger] = None) -> "InjectionContext":
        return cls(logger=logger or get_logger("injector"), sink=RecordingSink())


__all__ = ["EventSink", "InjectionContext", "InjectionEvent", "NullSink", "RecordingSink"]
