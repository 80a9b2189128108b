"""
Diagnostic verbosity levels for eslog's own output.

Not to be confused with eslog.events.EventLevel, which tags the events
being logged. These levels gate what eslog says about itself (manifest
resolution, listener delivery, CLI progress) on stderr.

Rule: a message is shown when ``level <= threshold``.

    ←── quieter ────────────── default ────────────── louder ──→
    -4       -3      -2        -1       0        1      2       3
    nothing  errors  warnings  minimal  default  info   config  debug
"""

# Louder than default (-v / -vv / -vvv)
DEBUG = 3          # Per-element manifest skips, per-event delivery
CONFIG = 2         # Resolution summaries, degraded providers
INFO = 1           # Command progress, config sources
DEFAULT = 0        # Normal command output, result hints

# Quieter than default (-Q ... -QQQQ)
MINIMAL = -1       # No hints
WARNING = -2       # Warnings and errors
ERROR = -3         # Errors only
NOTHING = -4       # Hard wall
