"""eslog channel set for the log_lib diagnostic system.

Usage:
    from eslog.channels import configure_eslog_channels
    configure_eslog_channels()      # once, before init_output()
"""

from eslog.lib.log_lib import channels as _ch


ESLOG_CHANNELS = {
    'manifest',     # Manifest resolution and degraded providers
    'emit',         # Event delivery to listeners
    'config',       # Config file discovery and resolution
    'general',      # Default channel
    'hint',         # Contextual tips
    'error',        # Errors and warnings
    'trace',        # @trace decorator output
}

ESLOG_CHANNEL_DESCRIPTIONS = {
    'manifest': 'Manifest resolution (skipped entries at level 3)',
    'emit':     'Event delivery to listeners',
    'config':   'Config file discovery and resolution',
    'general':  'General output',
    'hint':     'Contextual tips',
    'error':    'Errors and warnings',
    'trace':    'Function call tracing (use trace:3)',
}

ESLOG_OPT_IN_CHANNELS = {
    'trace',
}


def configure_eslog_channels():
    """Install the eslog channel set into log_lib."""
    _ch.KNOWN_CHANNELS = ESLOG_CHANNELS
    _ch.CHANNEL_DESCRIPTIONS = ESLOG_CHANNEL_DESCRIPTIONS
    _ch.OPT_IN_CHANNELS = ESLOG_OPT_IN_CHANNELS
