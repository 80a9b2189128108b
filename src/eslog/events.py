"""
Event levels, channels, keywords and the ten well-known logging event kinds.

Manifest encoding of the tags:

    level     "win:LogAlways" ... "win:Verbose"   (decode_level / level_token)
    channel   unsigned 8-bit code, "17"           (decode_channel)
    keywords  space separated names, "Kw1 Kw2"    (resolved via the keyword table)

Lower level values are more severe. LOG_ALWAYS (0) is always on.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional


class EventLevel(IntEnum):
    """Ordered severity of an event (lower = more severe)."""
    LOG_ALWAYS = 0
    CRITICAL = 1
    ERROR = 2
    WARNING = 3
    INFORMATIONAL = 4
    VERBOSE = 5


class EventChannel(IntEnum):
    """Well-known channel codes. Other 8-bit values pass through as ints."""
    NONE = 0
    ADMIN = 16
    OPERATIONAL = 17
    ANALYTIC = 18
    DEBUG = 19


KEYWORDS_NONE = 0
KEYWORDS_ALL = 0xFFFFFFFFFFFFFFFF

_LEVEL_TOKENS = {
    'win:LogAlways': EventLevel.LOG_ALWAYS,
    'win:Critical': EventLevel.CRITICAL,
    'win:Error': EventLevel.ERROR,
    'win:Warning': EventLevel.WARNING,
    'win:Informational': EventLevel.INFORMATIONAL,
    'win:Verbose': EventLevel.VERBOSE,
}

_TOKENS_BY_LEVEL = {level: token for token, level in _LEVEL_TOKENS.items()}


def decode_level(token: Optional[str]) -> EventLevel:
    """Map a manifest level token to an EventLevel.

    Exact, case-sensitive match. Unknown or missing tokens give
    INFORMATIONAL rather than an error.
    """
    return _LEVEL_TOKENS.get(token, EventLevel.INFORMATIONAL)


def level_token(level: int) -> str:
    """Inverse of decode_level, used when writing manifests."""
    return _TOKENS_BY_LEVEL.get(level, 'win:Informational')


def decode_channel(text: Optional[str], default: int = EventChannel.NONE) -> int:
    """Parse a channel code as an unsigned byte.

    Returns ``default`` when the text is missing, not a plain decimal
    number, or outside 0-255, so an invalid value never overrides the
    existing one.
    """
    if text is None:
        return default
    text = text.strip()
    if not text.isdigit():
        return default
    value = int(text)
    if value > 0xFF:
        return default
    return value


class EventKind(Enum):
    """The closed set of logging events. Values are the manifest symbols."""
    DEBUG = 'Debug'
    DEBUG_EXCEPTION = 'DebugException'
    INFO = 'Info'
    INFO_EXCEPTION = 'InfoException'
    WARN = 'Warn'
    WARN_EXCEPTION = 'WarnException'
    ERROR = 'Error'
    ERROR_EXCEPTION = 'ErrorException'
    FATAL = 'Fatal'
    FATAL_EXCEPTION = 'FatalException'

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def is_exception(self) -> bool:
        return self.value.endswith('Exception')

    @property
    def plain(self) -> 'EventKind':
        """The plain sibling (Debug for DebugException)."""
        if self.is_exception:
            return EventKind(self.value[:-len('Exception')])
        return self

    @property
    def exception(self) -> 'EventKind':
        """The exception-carrying sibling (DebugException for Debug)."""
        if self.is_exception:
            return self
        return EventKind(self.value + 'Exception')

    @classmethod
    def from_symbol(cls, symbol: str) -> Optional['EventKind']:
        """Look up a kind by manifest symbol. None for unrelated symbols."""
        try:
            return cls(symbol)
        except ValueError:
            return None


@dataclass(frozen=True)
class EventDefinition:
    """Static declaration of one event on a provider.

    Attributes:
        event_id: Provider-unique positive id
        symbol: Event name written to the manifest
        level: EventLevel
        channel: Channel code (0 = none)
        keywords: Keyword bitmask (0 = no keyword filter)
        message: Optional template with {0}, {1}... payload placeholders
    """
    event_id: int
    symbol: str
    level: EventLevel = EventLevel.INFORMATIONAL
    channel: int = EventChannel.NONE
    keywords: int = KEYWORDS_NONE
    message: Optional[str] = None
