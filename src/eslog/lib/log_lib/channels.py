"""
Named diagnostic channels and the CHANNEL[:LEVEL] spec syntax.

A channel is a category of diagnostic output. Each one may carry its own
threshold that replaces the global verbosity for messages on it:

    manifest        # threshold 0
    manifest:3      # threshold 3 (show per-element skips)
    trace:3         # enable the @trace decorator

The module-level sets below are the generic defaults; an application
swaps in its own (see eslog.channels.configure_eslog_channels).
"""

from dataclasses import dataclass
from typing import Dict, Set


KNOWN_CHANNELS: Set[str] = {
    'general',
    'hint',
    'error',
    'trace',
}

CHANNEL_DESCRIPTIONS: Dict[str, str] = {
    'general': 'General output',
    'hint':    'Contextual tips',
    'error':   'Error messages',
    'trace':   'Function call tracing',
}

# Off unless named explicitly with --show
OPT_IN_CHANNELS: Set[str] = {
    'trace',
}


@dataclass
class ChannelConfig:
    """Parsed channel spec."""
    name: str
    level: int = 0


def parse_channel_spec(spec: str) -> ChannelConfig:
    """Parse "NAME" or "NAME:LEVEL".

    Raises:
        ValueError: the name is empty or LEVEL is not an integer
    """
    name, _, level = spec.partition(':')
    name = name.strip()
    if not name:
        raise ValueError(f"channel spec {spec!r} has no channel name")
    level = level.strip()
    return ChannelConfig(name=name, level=int(level) if level else 0)


def format_channel_list() -> str:
    """Listing of KNOWN_CHANNELS with descriptions, one per line."""
    lines = ["Available channels:"]
    width = max(len(name) for name in KNOWN_CHANNELS)
    for name in sorted(KNOWN_CHANNELS):
        desc = CHANNEL_DESCRIPTIONS.get(name, '')
        opt_in = " (opt-in)" if name in OPT_IN_CHANNELS else ""
        lines.append(f"  {name:<{width}}  {desc}{opt_in}")
    return "\n".join(lines)
