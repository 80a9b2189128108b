"""eslog — manifest-driven, level/keyword/channel tagged event logging.

An application logging surface (Logger, LoggerFactory, a stdlib logging
handler) on top of an event provider whose events are described by an
XML manifest resolved once at startup.
"""

from eslog._version import __version__, __app_name__
from eslog.events import (
    EventChannel, EventDefinition, EventKind, EventLevel,
    KEYWORDS_ALL, KEYWORDS_NONE,
)
from eslog.manifest import (
    EventAttribute, ManifestError, build_keyword_table, generate_manifest,
    resolve_events,
)
from eslog.descriptors import DescriptorTable, EventDescriptor
from eslog.provider import (
    CollectingListener, ConsoleListener, EventListener, EventRecord, EventSource,
)
from eslog.source_logger import EventSourceLogger, get_event_source_logger
from eslog.logger import Logger, LoggerFactory
from eslog.handler import EventSourceHandler

__all__ = [
    "__version__", "__app_name__",
    "EventChannel", "EventDefinition", "EventKind", "EventLevel",
    "KEYWORDS_ALL", "KEYWORDS_NONE",
    "EventAttribute", "ManifestError", "build_keyword_table",
    "generate_manifest", "resolve_events",
    "DescriptorTable", "EventDescriptor",
    "CollectingListener", "ConsoleListener", "EventListener", "EventRecord",
    "EventSource",
    "EventSourceLogger", "get_event_source_logger",
    "Logger", "LoggerFactory", "EventSourceHandler",
]
