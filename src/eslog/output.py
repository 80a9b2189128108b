"""Console formatting helpers for the eslog CLI.

print_*() write to stdout unless the verbosity is -3 or lower; errors go
through OutputManager.error() on stderr.
"""

import sys

from eslog.lib.log_lib import get_output


def _should_print():
    """True unless the user asked for errors-only or silence."""
    return get_output().verbosity >= -2


def print_header(title):
    if _should_print():
        print(f"\n== {title} ==")


def print_ok(msg):
    if _should_print():
        print(f"  [OK] {msg}")


def print_warn(msg):
    if _should_print():
        print(f"  [WARN] {msg}")


def print_row(*columns, widths=()):
    """Print one left-aligned table row."""
    if not _should_print():
        return
    cells = []
    for i, col in enumerate(columns):
        width = widths[i] if i < len(widths) else 0
        cells.append(f"{col!s:<{width}}")
    print("  " + "  ".join(cells).rstrip())


def print_error(msg):
    """Error line on stderr; only -QQQQ hides it."""
    try:
        get_output().error(f"  ERROR: {msg}")
    except Exception:
        print(f"  ERROR: {msg}", file=sys.stderr)
