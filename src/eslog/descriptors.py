"""Per-kind event descriptors and the enablement cache built from them."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from eslog.events import EventChannel, EventKind, EventLevel, KEYWORDS_NONE
from eslog.manifest import EventAttribute


@dataclass(frozen=True)
class EventDescriptor:
    """Resolved tags for one event kind.

    ``configured`` is True only when the manifest declared the kind's
    symbol; an unconfigured descriptor never fires.
    """
    event_id: int
    level: EventLevel
    channel: int = EventChannel.NONE
    keywords: int = KEYWORDS_NONE
    configured: bool = False


DEFAULT_DESCRIPTORS: Mapping[EventKind, EventDescriptor] = MappingProxyType({
    EventKind.FATAL: EventDescriptor(1001, EventLevel.CRITICAL),
    EventKind.FATAL_EXCEPTION: EventDescriptor(1002, EventLevel.CRITICAL),
    EventKind.ERROR: EventDescriptor(1003, EventLevel.ERROR),
    EventKind.ERROR_EXCEPTION: EventDescriptor(1004, EventLevel.ERROR),
    EventKind.WARN: EventDescriptor(1005, EventLevel.WARNING),
    EventKind.WARN_EXCEPTION: EventDescriptor(1006, EventLevel.WARNING),
    EventKind.INFO: EventDescriptor(1007, EventLevel.INFORMATIONAL),
    EventKind.INFO_EXCEPTION: EventDescriptor(1008, EventLevel.INFORMATIONAL),
    EventKind.DEBUG: EventDescriptor(1009, EventLevel.VERBOSE),
    EventKind.DEBUG_EXCEPTION: EventDescriptor(1010, EventLevel.VERBOSE),
})


class DescriptorTable:
    """Descriptors for the ten event kinds, fixed at construction.

    Each kind starts from DEFAULT_DESCRIPTORS and is replaced once by the
    resolved attribute of the same symbol, if there is one. The table is
    never written afterwards, so lookups need no locking.

    Usage::

        table = DescriptorTable(resolve_events(xml, 'MyProvider'))
        if table.is_enabled(EventKind.INFO, provider):
            provider.write_event(table[EventKind.INFO].event_id, name, msg)
    """

    __slots__ = ('_descriptors',)

    def __init__(self, attributes: Optional[Mapping[str, EventAttribute]] = None):
        descriptors: Dict[EventKind, EventDescriptor] = dict(DEFAULT_DESCRIPTORS)
        if attributes:
            for kind in EventKind:
                attribute = attributes.get(kind.symbol)
                if attribute is None:
                    continue
                descriptors[kind] = EventDescriptor(
                    event_id=attribute.event_id,
                    level=attribute.level,
                    channel=attribute.channel,
                    keywords=attribute.keywords,
                    configured=True,
                )
        self._descriptors = MappingProxyType(descriptors)

    def __getitem__(self, kind: EventKind) -> EventDescriptor:
        return self._descriptors[kind]

    def __iter__(self) -> Iterator[EventKind]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DescriptorTable):
            return NotImplemented
        return dict(self._descriptors) == dict(other._descriptors)

    def items(self) -> List[Tuple[EventKind, EventDescriptor]]:
        return list(self._descriptors.items())

    @property
    def configured_kinds(self) -> List[EventKind]:
        return [kind for kind, d in self._descriptors.items() if d.configured]

    def is_enabled(self, kind: EventKind, provider) -> bool:
        """True when ``kind`` is configured and the provider has a subscriber
        for its level/keywords/channel."""
        d = self._descriptors[kind]
        return d.configured and provider.is_subscribed(d.level, d.keywords, d.channel)

    def is_level_enabled(self, kind: EventKind, provider) -> bool:
        """Coarse flag: the plain kind OR its exception sibling is enabled."""
        return (self.is_enabled(kind.plain, provider)
                or self.is_enabled(kind.exception, provider))
