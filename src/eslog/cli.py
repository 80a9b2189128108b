"""Main CLI entry point for eslog.

Two-pass argument parsing:
  1. Global flags (--verbose, --quiet, --show, --config) are pulled out
     from anywhere in argv.
  2. The rest is parsed as a subcommand with the shared parent args.

    eslog -vv inspect --manifest app.man
    eslog inspect --manifest app.man --show manifest:3

Subcommands self-register via the register(subparsers, parents) convention.
"""

import argparse
import sys

from eslog._version import BASE_VERSION, VERSION


# ---------------------------------------------------------------------------
# Global flags
# ---------------------------------------------------------------------------
GLOBAL_FLAGS = {
    "--verbose": {"aliases": ["-v"], "action": "count", "default": 0,
                  "help": "Increase diagnostic verbosity (-v, -vv, -vvv)"},
    "--quiet": {"aliases": ["-Q"], "action": "count", "default": 0,
                "help": "Decrease verbosity (-Q, -QQ, -QQQ, -QQQQ=silent)"},
    "--show": {"nargs": "?", "action": "append", "metavar": "CHANNEL[:LEVEL]",
               "help": "Set a diagnostic channel threshold (bare --show lists channels)"},
    "--config": {"metavar": "PATH", "default": None,
                 "help": "Global config file (default: ~/.eslog/config.json)"},
}


def _add_global_flags(parser):
    for flag, kwargs in GLOBAL_FLAGS.items():
        kw = {k: v for k, v in kwargs.items() if k != "aliases"}
        parser.add_argument(flag, *kwargs.get("aliases", []), **kw)


def _extract_global_flags(argv):
    """Return (global_namespace, remaining_argv)."""
    global_parser = argparse.ArgumentParser(add_help=False)
    _add_global_flags(global_parser)
    return global_parser.parse_known_args(argv)


# ---------------------------------------------------------------------------
# Shared parent parser
# ---------------------------------------------------------------------------
def _build_common_parser():
    """Provider/manifest flags inherited by every subcommand."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--provider", metavar="NAME",
                        help="Provider name to scope manifest queries")
    common.add_argument("--manifest", metavar="PATH",
                        help="Manifest file to resolve instead of the generated one")
    return common


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------
def _discover_commands():
    """Command modules; each exports register(subparsers, parents) and run(args)."""
    from eslog.commands import emit, inspect, manifest
    return [manifest, inspect, emit]


def _build_parser(commands, common_parser):
    parser = argparse.ArgumentParser(
        prog="eslog",
        description="eslog — manifest-driven event logging tools",
        epilog=(
            "Run 'eslog <command> --help' for details on a specific command.\n"
            "\n"
            "Global flags (--verbose, --quiet, --show, --config) can appear\n"
            "before or after the subcommand."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"eslog {BASE_VERSION} ({VERSION})",
    )
    _add_global_flags(parser)

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )
    for cmd_module in commands:
        cmd_module.register(subparsers, parents=[common_parser])
    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def main(argv=None):
    """Run the eslog CLI and return its exit code."""
    if argv is None:
        argv = sys.argv[1:]

    global_args, remaining = _extract_global_flags(argv)

    from eslog.channels import configure_eslog_channels
    from eslog.lib.log_lib import format_channel_list, init_output
    configure_eslog_channels()

    # Bare --show lists channels
    if global_args.show and None in global_args.show:
        print(format_channel_list())
        return 0

    verbosity = (global_args.verbose or 0) - (global_args.quiet or 0)
    channels = [s for s in (global_args.show or []) if s is not None]
    try:
        init_output(verbosity=verbosity, channels=channels)
    except ValueError as e:
        print(f"eslog: invalid --show value: {e}", file=sys.stderr)
        return 2
    import eslog.hints  # noqa: F401  (registers hints)

    common_parser = _build_common_parser()
    parser = _build_parser(_discover_commands(), common_parser)

    if not remaining:
        parser.print_help()
        return 0

    args = parser.parse_args(remaining)
    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    for key, value in vars(global_args).items():
        if getattr(args, key, None) is None:
            setattr(args, key, value)

    try:
        return args.func(args) or 0
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
