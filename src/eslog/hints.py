"""eslog hints. Importing this module registers them."""

from eslog.lib.log_lib import Hint, register_hints


register_hints(
    Hint(
        id='manifest.unresolved',
        message=('  Tip: No logging events resolved for provider {provider!r}. '
                 'Check that the manifest declares <event symbol="Debug" ...> '
                 'under <provider name="{provider}">.'),
        context={'result', 'error'},
        min_level=0,
    ),
    Hint(
        id='manifest.providers',
        message='  Note: Providers in this manifest: {names}',
        context={'result', 'error'},
        min_level=0,
    ),
    Hint(
        id='manifest.skipped',
        message='  Tip: Re-run with --show manifest:3 to list skipped entries.',
        context={'verbose'},
        min_level=1,
    ),
    Hint(
        id='config.remember',
        message=('  Tip: Use --save to remember --manifest/--provider '
                 'in .eslog.json.'),
        context={'result'},
        min_level=0,
    ),
    Hint(
        id='emit.disabled',
        message=('  Note: {kind} is not enabled; the console listener '
                 'only receives events at level {level} or more severe.'),
        context={'result'},
        min_level=0,
    ),
)
