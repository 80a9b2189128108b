"""
Application-facing loggers bound to an EventSourceLogger.

A Logger carries a name and forwards each call, with that name as the
record's first field, to the shared EventSourceLogger:

    factory = LoggerFactory()
    log = factory.get_logger(MyService)
    log.info("started")
    log.error_format("job {0} failed after {1}s", job_id, elapsed)
"""

from typing import Optional, Union

from eslog.source_logger import EventSourceLogger, get_event_source_logger

DEFAULT_LOGGER_NAME = 'Default'


class Logger:
    """Named logger. Blank names become DEFAULT_LOGGER_NAME."""

    def __init__(self, event_source_logger: EventSourceLogger,
                 name: Optional[str] = None):
        if event_source_logger is None:
            raise ValueError("event_source_logger is required")
        self._esl = event_source_logger
        self.name = name if name and name.strip() else DEFAULT_LOGGER_NAME

    @property
    def is_debug_enabled(self) -> bool:
        return self._esl.is_debug_enabled

    @property
    def is_info_enabled(self) -> bool:
        return self._esl.is_info_enabled

    @property
    def is_warn_enabled(self) -> bool:
        return self._esl.is_warn_enabled

    @property
    def is_error_enabled(self) -> bool:
        return self._esl.is_error_enabled

    @property
    def is_fatal_enabled(self) -> bool:
        return self._esl.is_fatal_enabled

    def debug(self, message, exception=None):
        self._esl.debug(self.name, message, exception)

    def debug_format(self, format, *args):
        self._esl.debug_format(self.name, format, args)

    def info(self, message, exception=None):
        self._esl.info(self.name, message, exception)

    def info_format(self, format, *args):
        self._esl.info_format(self.name, format, args)

    def warn(self, message, exception=None):
        self._esl.warn(self.name, message, exception)

    def warn_format(self, format, *args):
        self._esl.warn_format(self.name, format, args)

    def error(self, message, exception=None):
        self._esl.error(self.name, message, exception)

    def error_format(self, format, *args):
        self._esl.error_format(self.name, format, args)

    def fatal(self, message, exception=None):
        self._esl.fatal(self.name, message, exception)

    def fatal_format(self, format, *args):
        self._esl.fatal_format(self.name, format, args)

    def __repr__(self):
        return f"Logger({self.name!r})"


class LoggerFactory:
    """Hands out Loggers that share one EventSourceLogger.

    Without an explicit backend the process-wide default is used.
    """

    def __init__(self, event_source_logger: Optional[EventSourceLogger] = None):
        self._esl = event_source_logger

    @property
    def event_source_logger(self) -> EventSourceLogger:
        if self._esl is None:
            self._esl = get_event_source_logger()
        return self._esl

    def with_logger(self, event_source_logger: EventSourceLogger) -> 'LoggerFactory':
        """Swap the backend for loggers created from now on."""
        if event_source_logger is None:
            raise ValueError("event_source_logger is required")
        self._esl = event_source_logger
        return self

    def get_logger(self, name: Union[str, type]) -> Logger:
        """Logger named after a string, or "module.QualName" for a class.

        Raises:
            ValueError: name is None or blank
        """
        if isinstance(name, type):
            name = f"{name.__module__}.{name.__qualname__}"
        if name is None or not str(name).strip():
            raise ValueError("logger name is required")
        return Logger(self.event_source_logger, str(name))
