"""eslog manifest — print or write the built-in logging provider's manifest.

The manifest is generated from the static LOGGING_EVENTS declarations,
so it is the document a default EventSourceLogger resolves at startup.
Edit a copy and point ``--manifest`` (or .eslog.json) at it to change
ids, levels, channels or keywords without touching code.
"""

import argparse
from pathlib import Path

from eslog.config import resolve_config
from eslog.lib.log_lib import get_output
from eslog.lib.log_lib.levels import INFO
from eslog.output import print_ok
from eslog.source_logger import DEFAULT_PROVIDER_NAME, create_logging_source


def register(subparsers, parents):
    """Register the 'manifest' subcommand."""
    p = subparsers.add_parser(
        "manifest",
        parents=parents,
        help="Print the generated manifest of the logging provider",
        description=(
            "Generate the manifest for the built-in logging provider.\n"
            "--provider renames the provider in the output."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--output", "-o", metavar="PATH",
                   help="Write to PATH instead of stdout")
    p.set_defaults(func=run)


def run(args):
    """Execute the manifest command."""
    config = resolve_config(args, keys=["provider"])
    name = config["provider"] or DEFAULT_PROVIDER_NAME
    text = create_logging_source(name).generate_manifest()
    get_output().emit(INFO, "  [manifest] generated for {p}", channel='manifest', p=name)

    if args.output:
        path = Path(args.output)
        path.write_text(text + "\n", encoding="utf-8")
        print_ok(f"Wrote manifest for {name} to {path}")
    else:
        print(text)
    return 0
