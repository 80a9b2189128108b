"""
EventSourceLogger — level/keyword/channel tagged logging over an event provider.

At construction the provider's manifest is read once and the ten logging
event kinds (Debug ... FatalException) are resolved into a DescriptorTable.
After that every call is a table lookup plus a subscription check on the
provider; no XML is touched again.

Records have a fixed shape:

    plain      [logger, message]
    exception  [logger, message, exception_type, exception_message, exception_text]

Logging calls never raise. A format string that fails to interpolate is
logged through the exception kind with the raw format and the error.
"""

import threading
import traceback
from dataclasses import replace
from typing import Optional, Sequence, Tuple

from eslog.descriptors import DescriptorTable
from eslog.events import EventDefinition, EventKind, EventLevel
from eslog.lib.log_lib import get_output
from eslog.lib.log_lib.levels import CONFIG
from eslog.manifest import (
    ManifestError, build_keyword_table, parse_manifest, resolve_events,
)
from eslog.provider import EventSource

DEFAULT_PROVIDER_NAME = 'Eslog-Logging'
INVALID_FORMAT_MESSAGE = 'Attempted to log a message with an invalid format: '

_PLAIN_MESSAGE = '{0} : {1}'
_EXCEPTION_MESSAGE = '{0} : {1} : {2} : {3} : {4}'

# Static declaration of the logging provider's events
LOGGING_EVENTS = (
    EventDefinition(1001, 'Fatal', EventLevel.CRITICAL, message=_PLAIN_MESSAGE),
    EventDefinition(1002, 'FatalException', EventLevel.CRITICAL, message=_EXCEPTION_MESSAGE),
    EventDefinition(1003, 'Error', EventLevel.ERROR, message=_PLAIN_MESSAGE),
    EventDefinition(1004, 'ErrorException', EventLevel.ERROR, message=_EXCEPTION_MESSAGE),
    EventDefinition(1005, 'Warn', EventLevel.WARNING, message=_PLAIN_MESSAGE),
    EventDefinition(1006, 'WarnException', EventLevel.WARNING, message=_EXCEPTION_MESSAGE),
    EventDefinition(1007, 'Info', EventLevel.INFORMATIONAL, message=_PLAIN_MESSAGE),
    EventDefinition(1008, 'InfoException', EventLevel.INFORMATIONAL, message=_EXCEPTION_MESSAGE),
    EventDefinition(1009, 'Debug', EventLevel.VERBOSE, message=_PLAIN_MESSAGE),
    EventDefinition(1010, 'DebugException', EventLevel.VERBOSE, message=_EXCEPTION_MESSAGE),
)


def _events_from_manifest(name: str, manifest: str) -> Tuple[EventDefinition, ...]:
    """LOGGING_EVENTS with ids and tags taken from ``manifest`` where it
    declares the symbol."""
    try:
        attributes = resolve_events(parse_manifest(manifest), name)
    except ManifestError:
        return LOGGING_EVENTS
    events = []
    for definition in LOGGING_EVENTS:
        attribute = attributes.get(definition.symbol)
        if attribute is not None:
            definition = replace(definition, event_id=attribute.event_id,
                                 level=attribute.level, channel=attribute.channel,
                                 keywords=attribute.keywords)
        events.append(definition)
    return tuple(events)


def create_logging_source(name: str = DEFAULT_PROVIDER_NAME,
                          manifest: Optional[str] = None) -> EventSource:
    """Build an in-process provider declaring LOGGING_EVENTS.

    With ``manifest`` the provider reports that document and its events
    carry the ids and tags it declares.
    """
    events = LOGGING_EVENTS if manifest is None else _events_from_manifest(name, manifest)
    return EventSource(name, events, manifest=manifest)


def _safe_str(value) -> str:
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    try:
        return str(value)
    except Exception:
        return repr(type(value))


def exception_fields(exception) -> Tuple[str, str, str]:
    """(type name, message, full text) for an exception record.

    A value that is not an exception is described by its type and str();
    its full text is "TypeName: message" with no traceback.
    """
    cls = type(exception)
    if cls.__module__ == 'builtins':
        type_name = cls.__qualname__
    else:
        type_name = f"{cls.__module__}.{cls.__qualname__}"
    message = _safe_str(exception)
    if not isinstance(exception, BaseException):
        return type_name, message, f"{type_name}: {message}"
    try:
        full_text = ''.join(
            traceback.format_exception(cls, exception, exception.__traceback__))
    except Exception:
        full_text = f"{type_name}: {message}"
    return type_name, message, full_text.rstrip('\n')


class EventSourceLogger:
    """Logging facade over an event provider.

    Args:
        provider: Object exposing name, generate_manifest(), is_subscribed()
            and write_event(). Defaults to create_logging_source().
        manifest: Manifest text to resolve instead of asking the provider

    Construction never fails because of the manifest: a missing,
    ill-formed or provider-less manifest leaves every kind unconfigured,
    and unconfigured kinds never emit.
    """

    def __init__(self, provider=None, manifest: Optional[str] = None):
        self.provider = provider if provider is not None else create_logging_source()
        self._descriptors = self._resolve(manifest)

    def _resolve(self, manifest: Optional[str]) -> DescriptorTable:
        out = get_output()
        name = getattr(self.provider, 'name', None)
        try:
            text = manifest if manifest is not None else self.provider.generate_manifest()
            if text is None:
                out.emit(CONFIG, "  [manifest] {p}: no manifest, all events unconfigured",
                         channel='manifest', p=name)
                return DescriptorTable()
            root = parse_manifest(text)
            keyword_table = build_keyword_table(root, name)
            attributes = resolve_events(root, name, keyword_table)
        except ManifestError as e:
            out.emit(CONFIG, "  [manifest] {p}: {err}; all events unconfigured",
                     channel='manifest', p=name, err=e)
            return DescriptorTable()
        except Exception as e:
            out.emit(CONFIG, "  [manifest] {p}: resolution failed ({exc}: {err}); "
                     "all events unconfigured",
                     channel='manifest', p=name, exc=type(e).__name__, err=e)
            return DescriptorTable()

        table = DescriptorTable(attributes)
        out.emit(CONFIG, "  [manifest] {p}: {n}/{total} event kinds configured, "
                 "{k} keyword(s)",
                 channel='manifest', p=name, n=len(table.configured_kinds),
                 total=len(table), k=len(keyword_table))
        return table

    @property
    def descriptors(self) -> DescriptorTable:
        return self._descriptors

    # -- enablement --------------------------------------------------------
    def is_event_enabled(self, kind: EventKind) -> bool:
        return self._descriptors.is_enabled(kind, self.provider)

    @property
    def is_debug_enabled(self) -> bool:
        return self._descriptors.is_level_enabled(EventKind.DEBUG, self.provider)

    @property
    def is_info_enabled(self) -> bool:
        return self._descriptors.is_level_enabled(EventKind.INFO, self.provider)

    @property
    def is_warn_enabled(self) -> bool:
        return self._descriptors.is_level_enabled(EventKind.WARN, self.provider)

    @property
    def is_error_enabled(self) -> bool:
        return self._descriptors.is_level_enabled(EventKind.ERROR, self.provider)

    @property
    def is_fatal_enabled(self) -> bool:
        return self._descriptors.is_level_enabled(EventKind.FATAL, self.provider)

    # -- core paths --------------------------------------------------------
    def _write(self, kind: EventKind, *fields) -> None:
        if not self._descriptors.is_enabled(kind, self.provider):
            return
        self.provider.write_event(self._descriptors[kind].event_id,
                                  *[_safe_str(f) for f in fields])

    def log(self, kind: EventKind, logger: Optional[str], message: Optional[str],
            exception: Optional[BaseException] = None) -> None:
        """Emit a plain record, or the exception sibling when ``exception`` is set."""
        if exception is None:
            self._write(kind.plain, logger, message)
            return
        if not self._descriptors.is_enabled(kind.exception, self.provider):
            return
        self._write(kind.exception, logger, message, *exception_fields(exception))

    def log_format(self, kind: EventKind, logger: Optional[str],
                   format: Optional[str], args: Optional[Sequence]) -> None:
        """Interpolate ``args`` into a {0}-style ``format`` and emit it."""
        if format is None or args is None:
            return
        if not self._descriptors.is_level_enabled(kind, self.provider):
            return
        try:
            message = format.format(*args)
        except Exception as e:
            self.log(kind, logger, INVALID_FORMAT_MESSAGE + _safe_str(format), e)
            return
        self._write(kind.plain, logger, message)

    # -- debug -------------------------------------------------------------
    def debug(self, logger, message, exception=None):
        self.log(EventKind.DEBUG, logger, message, exception)

    def debug_format(self, logger, format, args):
        self.log_format(EventKind.DEBUG, logger, format, args)

    def debug_exception(self, logger, message, exception_type,
                        exception_message, exception_value):
        self._write(EventKind.DEBUG_EXCEPTION, logger, message, exception_type,
                    exception_message, exception_value)

    # -- info --------------------------------------------------------------
    def info(self, logger, message, exception=None):
        self.log(EventKind.INFO, logger, message, exception)

    def info_format(self, logger, format, args):
        self.log_format(EventKind.INFO, logger, format, args)

    def info_exception(self, logger, message, exception_type,
                       exception_message, exception_value):
        self._write(EventKind.INFO_EXCEPTION, logger, message, exception_type,
                    exception_message, exception_value)

    # -- warn --------------------------------------------------------------
    def warn(self, logger, message, exception=None):
        self.log(EventKind.WARN, logger, message, exception)

    def warn_format(self, logger, format, args):
        self.log_format(EventKind.WARN, logger, format, args)

    def warn_exception(self, logger, message, exception_type,
                       exception_message, exception_value):
        self._write(EventKind.WARN_EXCEPTION, logger, message, exception_type,
                    exception_message, exception_value)

    # -- error -------------------------------------------------------------
    def error(self, logger, message, exception=None):
        self.log(EventKind.ERROR, logger, message, exception)

    def error_format(self, logger, format, args):
        self.log_format(EventKind.ERROR, logger, format, args)

    def error_exception(self, logger, message, exception_type,
                        exception_message, exception_value):
        self._write(EventKind.ERROR_EXCEPTION, logger, message, exception_type,
                    exception_message, exception_value)

    # -- fatal -------------------------------------------------------------
    def fatal(self, logger, message, exception=None):
        self.log(EventKind.FATAL, logger, message, exception)

    def fatal_format(self, logger, format, args):
        self.log_format(EventKind.FATAL, logger, format, args)

    def fatal_exception(self, logger, message, exception_type,
                        exception_message, exception_value):
        self._write(EventKind.FATAL_EXCEPTION, logger, message, exception_type,
                    exception_message, exception_value)


# =============================================================================
# Process-wide default
# =============================================================================

_default_logger: Optional[EventSourceLogger] = None
_default_lock = threading.Lock()


def get_event_source_logger() -> EventSourceLogger:
    """Return the process-wide EventSourceLogger, creating it on first use."""
    global _default_logger
    if _default_logger is None:
        with _default_lock:
            if _default_logger is None:
                _default_logger = EventSourceLogger()
    return _default_logger
