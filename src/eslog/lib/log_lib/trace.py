"""
@trace — call tracing routed through the OutputManager.

Entry, return value and exceptions are written on the 'trace' channel at
level 3, so a wrapped function costs one threshold lookup when tracing
is off. Enable with ``--show trace:3``; -vvv alone does not, since
trace is an opt-in channel.
"""

import functools

from .levels import DEBUG

_MAX_REPR = 60


def _short_repr(value) -> str:
    if isinstance(value, (list, tuple, dict, set)) and len(value) > 3:
        return f"<{type(value).__name__} of {len(value)}>"
    text = repr(value)
    if len(text) > _MAX_REPR:
        return text[:_MAX_REPR - 3] + '...'
    return text


def trace(func):
    """Trace calls to ``func`` when the 'trace' channel threshold >= 3."""
    name = f"{func.__module__}.{func.__qualname__}"

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        from .manager import get_output

        out = get_output()
        if out.threshold('trace') < DEBUG:
            return func(*args, **kwargs)

        shown = [_short_repr(a) for a in args]
        shown += [f"{k}={_short_repr(v)}" for k, v in kwargs.items()]
        out.emit(DEBUG, "[TRACE] >> {fn}({args})", channel='trace',
                 fn=name, args=', '.join(shown))
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            out.emit(DEBUG, "[TRACE] !! {fn} raised {exc}: {msg}", channel='trace',
                     fn=name, exc=type(e).__name__, msg=e)
            raise
        out.emit(DEBUG, "[TRACE] << {fn} returned {val}", channel='trace',
                 fn=name, val=_short_repr(result))
        return result

    return wrapper
