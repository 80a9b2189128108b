"""Bridge from the standard ``logging`` module to an EventSourceLogger."""

import logging
from typing import Optional

from eslog.events import EventKind
from eslog.source_logger import (
    EventSourceLogger, INVALID_FORMAT_MESSAGE, get_event_source_logger,
)


def kind_for_level(levelno: int) -> EventKind:
    """Map a logging level number onto the plain event kind."""
    if levelno >= logging.CRITICAL:
        return EventKind.FATAL
    if levelno >= logging.ERROR:
        return EventKind.ERROR
    if levelno >= logging.WARNING:
        return EventKind.WARN
    if levelno >= logging.INFO:
        return EventKind.INFO
    return EventKind.DEBUG


class EventSourceHandler(logging.Handler):
    """logging.Handler that writes records as tagged events.

    The record's logger name is the first field. ``exc_info`` routes the
    record to the exception kind. A record whose %-args do not fit its
    message is sent the same way a bad format string is.

    Usage::

        logging.getLogger().addHandler(EventSourceHandler())
    """

    def __init__(self, event_source_logger: Optional[EventSourceLogger] = None,
                 level=logging.NOTSET):
        super().__init__(level)
        self._esl = event_source_logger

    @property
    def event_source_logger(self) -> EventSourceLogger:
        if self._esl is None:
            self._esl = get_event_source_logger()
        return self._esl

    def emit(self, record: logging.LogRecord) -> None:
        esl = self.event_source_logger
        kind = kind_for_level(record.levelno)
        exception = record.exc_info[1] if record.exc_info else None
        try:
            message = record.getMessage()
        except Exception as e:
            esl.log(kind, record.name, INVALID_FORMAT_MESSAGE + str(record.msg), e)
            return
        esl.log(kind, record.name, message, exception)
