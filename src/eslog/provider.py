"""
In-process event provider and listeners.

EventSource plays the part of the tracing substrate: it describes itself
with a generated manifest, answers subscription queries, and delivers
written events to attached listeners. Any object with the same four
members (name, generate_manifest, is_subscribed, write_event) can stand
in for it.

Subscription rule for a listener (level L, keyword mask K, channels C)
and an event (level l, keywords k, channel c):

    (L == LOG_ALWAYS or l <= L) and (k == 0 or k & K) and (C is None or c in C)
"""

import sys
import threading
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Set, TextIO, Tuple

from eslog.events import (
    EventDefinition, EventLevel, KEYWORDS_ALL, KEYWORDS_NONE,
)
from eslog.lib.log_lib import get_output
from eslog.lib.log_lib.levels import DEBUG
from eslog.manifest import generate_manifest


@dataclass(frozen=True)
class EventRecord:
    """One written event as seen by a listener."""
    provider: str
    event_id: int
    symbol: str
    level: int
    channel: int
    keywords: int
    payload: Tuple[str, ...]
    message: str


class EventListener:
    """Receives events from the providers it is attached to.

    Subclasses override on_event_written(). The filter attributes are read
    by EventSource on every subscription query.
    """

    def __init__(self, level: int = EventLevel.VERBOSE,
                 keywords: int = KEYWORDS_ALL,
                 channels: Optional[Iterable[int]] = None):
        self.level = level
        self.keywords = keywords
        self.channels: Optional[Set[int]] = set(channels) if channels is not None else None

    def accepts(self, level: int, keywords: int, channel: int) -> bool:
        if self.level != EventLevel.LOG_ALWAYS and level > self.level:
            return False
        if keywords != KEYWORDS_NONE and not (keywords & self.keywords):
            return False
        if self.channels is not None and channel not in self.channels:
            return False
        return True

    def on_event_written(self, record: EventRecord) -> None:
        pass


class CollectingListener(EventListener):
    """Keeps every delivered record in ``records``."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.records: List[EventRecord] = []

    def on_event_written(self, record: EventRecord) -> None:
        self.records.append(record)


class ConsoleListener(EventListener):
    """Prints "{id} {channel} {symbol} {level} {message}" per event."""

    def __init__(self, *args, file: TextIO = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.file = file

    def on_event_written(self, record: EventRecord) -> None:
        try:
            level = EventLevel(record.level).name
        except ValueError:
            level = record.level
        print(f"{record.event_id} {record.channel} {record.symbol} {level} {record.message}",
              file=self.file if self.file is not None else sys.stdout)


def _render(template: Optional[str], payload: Tuple[str, ...]) -> str:
    if template is None:
        return ' : '.join(payload)
    try:
        return template.format(*payload)
    except (IndexError, KeyError, ValueError):
        return ' : '.join(payload)


class EventSource:
    """Named provider with statically declared events.

    Args:
        name: Provider name, used to scope manifest queries
        events: EventDefinition declarations
        keywords: Keyword name -> mask declarations
        manifest: Manifest text to report instead of the generated one
    """

    def __init__(self, name: str,
                 events: Iterable[EventDefinition] = (),
                 keywords: Optional[Mapping[str, int]] = None,
                 manifest: Optional[str] = None):
        self.name = name
        self.keywords = dict(keywords or {})
        self._definitions = {d.event_id: d for d in events}
        self._manifest = manifest
        self._listeners: Tuple[EventListener, ...] = ()
        self._lock = threading.Lock()

    @property
    def definitions(self) -> List[EventDefinition]:
        return list(self._definitions.values())

    def generate_manifest(self) -> Optional[str]:
        """The provider's self-describing manifest."""
        if self._manifest is not None:
            return self._manifest
        return generate_manifest(self.name, self._definitions.values(), self.keywords)

    # -- listeners ---------------------------------------------------------
    def add_listener(self, listener: EventListener) -> EventListener:
        with self._lock:
            if listener not in self._listeners:
                self._listeners = self._listeners + (listener,)
        return listener

    def remove_listener(self, listener: EventListener) -> None:
        with self._lock:
            self._listeners = tuple(x for x in self._listeners if x is not listener)

    @property
    def listeners(self) -> Tuple[EventListener, ...]:
        return self._listeners

    # -- emission ----------------------------------------------------------
    def is_subscribed(self, level: int, keywords: int, channel: int) -> bool:
        for listener in self._listeners:
            if listener.accepts(level, keywords, channel):
                return True
        return False

    def write_event(self, event_id: int, *fields: Optional[str]) -> None:
        """Deliver an event to every listener that accepts its tags.

        Events whose id was never declared go out with Informational level
        and no keywords or channel.
        """
        listeners = self._listeners
        if not listeners:
            return
        payload = tuple('' if f is None else f for f in fields)
        definition = self._definitions.get(event_id)
        if definition is None:
            definition = EventDefinition(event_id, f'Event{event_id}')
        record = EventRecord(
            provider=self.name,
            event_id=event_id,
            symbol=definition.symbol,
            level=definition.level,
            channel=definition.channel,
            keywords=definition.keywords,
            payload=payload,
            message=_render(definition.message, payload),
        )
        delivered = 0
        for listener in listeners:
            if listener.accepts(record.level, record.keywords, record.channel):
                listener.on_event_written(record)
                delivered += 1
        get_output().emit(DEBUG, "  [emit] {symbol} ({id}) -> {n} listener(s)",
                          channel='emit', symbol=record.symbol, id=event_id, n=delivered)
