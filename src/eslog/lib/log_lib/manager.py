"""
OutputManager — verbosity-gated diagnostic output with per-channel overrides.

A message on channel C at level L is written when L <= threshold(C),
where threshold(C) is the channel's override if one is set, else the
global verbosity. A threshold of -4 or below writes nothing at all.

    out = OutputManager(verbosity=0, channel_overrides={'manifest': 3})
    out.emit(3, "  [manifest] skipped keyword {name!r}", channel='manifest', name=n)
    out.hint('manifest.unresolved', 'error', provider='P')
    out.error("cannot read manifest")

-v raises the verbosity by one, -Q lowers it by one; they compose.
"""

import sys
from typing import Any, Dict, Optional, Set, TextIO

from . import channels as _channels
from .hints import get_hint
from .levels import ERROR, NOTHING, WARNING


class OutputManager:
    """Writes diagnostics to ``file`` (stderr by default) when the
    channel threshold allows, and remembers which hints were shown."""

    def __init__(
        self,
        verbosity: int = 0,
        channel_overrides: Dict[str, int] = None,
        file: TextIO = None,
    ):
        self.verbosity = verbosity
        self.channel_overrides: Dict[str, int] = dict(channel_overrides or {})
        self.file = file
        self._shown_hints: Set[str] = set()

    def threshold(self, channel: str) -> int:
        """Effective threshold for a channel."""
        return self.channel_overrides.get(channel, self.verbosity)

    def _write(self, text: str) -> None:
        print(text, file=self.file if self.file is not None else sys.stderr)

    def emit(self, level: int, message: str, *,
             channel: str = 'general', **kwargs: Any) -> None:
        """Write ``message.format(**kwargs)`` if ``level`` passes the
        channel threshold. Formatting only happens for shown messages."""
        threshold = self.threshold(channel)
        if threshold <= NOTHING or level > threshold:
            return
        self._write(message.format(**kwargs) if kwargs else message)

    def hint(self, hint_id: str, context: str = 'result', **kwargs: Any) -> None:
        """Show a registered hint once per session.

        Skipped when the hint is unknown, not meant for ``context``, or
        its min_level is above the 'hint' channel threshold.
        """
        if hint_id in self._shown_hints:
            return
        h = get_hint(hint_id)
        if h is None or context not in h.context:
            return
        threshold = self.threshold('hint')
        if threshold <= NOTHING or h.min_level > threshold:
            return
        self._write(h.message.format(**kwargs) if kwargs else h.message)
        self._shown_hints.add(hint_id)

    def warn(self, message: str) -> None:
        """Warning on the 'error' channel (level -2)."""
        self.emit(WARNING, message, channel='error')

    def error(self, message: str) -> None:
        """Error on the 'error' channel (level -3); only -4 hides it."""
        self.emit(ERROR, message, channel='error')

    def channel_active(self, channel: str) -> bool:
        """True when a level-0 message on ``channel`` would be written."""
        threshold = self.threshold(channel)
        return threshold > NOTHING and threshold >= 0

    @property
    def shown_hints(self) -> Set[str]:
        return set(self._shown_hints)


# =============================================================================
# Module-level singleton
# =============================================================================

_manager: Optional[OutputManager] = None


def init_output(verbosity: int = 0, channels: list = None,
                file: TextIO = None) -> OutputManager:
    """Create the module-level OutputManager from CLI-style settings.

    Opt-in channels start at -1 (off); ``channels`` specs such as
    'manifest:3' or 'trace' override that.
    """
    global _manager

    overrides = {name: -1 for name in _channels.OPT_IN_CHANNELS}
    for spec in channels or []:
        cfg = _channels.parse_channel_spec(spec)
        overrides[cfg.name] = cfg.level

    _manager = OutputManager(verbosity=verbosity, channel_overrides=overrides,
                             file=file)
    return _manager


def get_output() -> OutputManager:
    """The module-level OutputManager; a quiet default until init_output()."""
    global _manager
    if _manager is None:
        _manager = OutputManager(
            channel_overrides={name: -1 for name in _channels.OPT_IN_CHANNELS})
    return _manager
