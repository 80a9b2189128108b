"""eslog emit — write one logging event to a console listener."""

import argparse

from eslog.config import build_logger, resolve_config
from eslog.events import EventKind, EventLevel
from eslog.lib.log_lib import get_output
from eslog.manifest import ManifestError
from eslog.output import print_error, print_warn
from eslog.provider import ConsoleListener

LEVELS = {
    'debug': EventKind.DEBUG,
    'info': EventKind.INFO,
    'warn': EventKind.WARN,
    'error': EventKind.ERROR,
    'fatal': EventKind.FATAL,
}


def register(subparsers, parents):
    """Register the 'emit' subcommand."""
    p = subparsers.add_parser(
        "emit",
        parents=parents,
        help="Emit one logging event and print it",
        description=(
            "Log MESSAGE at LEVEL through the logging provider with a\n"
            "console listener attached. --exception sends the\n"
            "exception-carrying event instead."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("level", choices=list(LEVELS), help="Logging level")
    p.add_argument("message", help="Message text")
    p.add_argument("--exception", metavar="TEXT",
                   help="Attach an exception with this message")
    p.add_argument("--logger", default="eslog.cli", metavar="NAME",
                   help="Logger name (default: eslog.cli)")
    p.add_argument("--listen-level", default="verbose",
                   choices=[level.name.lower() for level in EventLevel],
                   help="Console listener level (default: verbose)")
    p.set_defaults(func=run)


def run(args):
    """Execute the emit command."""
    config = resolve_config(args)
    try:
        esl = build_logger(config)
    except ManifestError as e:
        print_error(f"{config['manifest']}: {e}")
        return 1
    listen_level = EventLevel[args.listen_level.upper()]
    esl.provider.add_listener(ConsoleListener(level=listen_level))

    kind = LEVELS[args.level]
    exception = RuntimeError(args.exception) if args.exception else None
    target = kind if exception is None else kind.exception
    if not esl.is_event_enabled(target):
        print_warn(f"{target.symbol} is not enabled; nothing emitted")
        get_output().hint('emit.disabled', 'result', kind=target.symbol,
                          level=listen_level.name)
        return 1

    esl.log(kind, args.logger, args.message, exception)
    return 0
