"""eslog inspect — show what a manifest resolves to.

Prints the keyword table and the ten logging event slots with their
resolved id, level, channel, keywords and whether the manifest
configured them. Unconfigured slots never emit.
"""

import argparse

from eslog.config import (
    build_logger, load_manifest_text, resolve_config, save_project_config,
)
from eslog.lib.log_lib import get_output
from eslog.manifest import (
    ManifestError, build_keyword_table, parse_manifest, provider_names,
)
from eslog.output import print_error, print_header, print_ok, print_row


def register(subparsers, parents):
    """Register the 'inspect' subcommand."""
    p = subparsers.add_parser(
        "inspect",
        parents=parents,
        help="Show the event descriptors resolved from a manifest",
        description=(
            "Resolve a manifest the way EventSourceLogger does at startup\n"
            "and print the result. Without --manifest the generated\n"
            "manifest of the built-in logging provider is used."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--save", action="store_true", default=False,
                   help="Remember --provider/--manifest in .eslog.json")
    p.set_defaults(func=run)


def _keywords_text(mask):
    return f"0x{mask:x}" if mask else "-"


def run(args):
    """Execute the inspect command."""
    out = get_output()
    config = resolve_config(args)

    if config["manifest"]:
        try:
            text = load_manifest_text(config["manifest"])
            if text is None:
                print_error(f"Manifest not found: {config['manifest']}")
                return 1
            parse_manifest(text)
        except ManifestError as e:
            print_error(f"{config['manifest']}: {e}")
            return 1

    esl = build_logger(config)
    provider = esl.provider
    root = parse_manifest(provider.generate_manifest())
    keyword_table = build_keyword_table(root, provider.name)

    print_header(f"Provider {provider.name}")
    if keyword_table:
        for name, mask in sorted(keyword_table.items(), key=lambda item: item[1]):
            print_row(name, f"0x{mask:x}", widths=(24,))
    else:
        print_row("(no keywords)")

    print_header("Event kinds")
    widths = (16, 6, 14, 8, 20)
    print_row("KIND", "ID", "LEVEL", "CHANNEL", "KEYWORDS", "STATE", widths=widths)
    for kind, d in esl.descriptors.items():
        state = "configured" if d.configured else "unconfigured"
        print_row(kind.symbol, d.event_id, d.level.name, int(d.channel),
                  _keywords_text(d.keywords), state, widths=widths)

    configured = len(esl.descriptors.configured_kinds)
    if configured:
        print_ok(f"{configured}/{len(esl.descriptors)} event kinds configured")
    else:
        out.hint('manifest.unresolved', 'result', provider=provider.name)
        names = provider_names(root)
        if names:
            out.hint('manifest.providers', 'result', names=', '.join(names))
    out.hint('manifest.skipped', 'verbose')

    if args.save:
        path = save_project_config({k: v for k, v in config.items() if v is not None})
        print_ok(f"Saved {path}")
    elif config["manifest"]:
        out.hint('config.remember', 'result')
    return 0
