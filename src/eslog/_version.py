"""
Version information for eslog.

This file is the canonical source for version numbers.
Format: MAJOR.MINOR.PATCH[-PHASE]_BRANCH_BUILD-YYYYMMDD-COMMITHASH
Example: 0.1.0-alpha_main_1-20261019-3f2a9c1e
"""

MAJOR = 0
MINOR = 1
PATCH = 0
PHASE = "alpha"  # None, "alpha", "beta", "rc1", ...

# Auto-updated by git hooks - do not edit manually
__version__ = "0.1.0-alpha_main_1-20261019-3f2a9c1"
__app_name__ = "eslog"


def get_version():
    """Full version string including branch and build info."""
    return __version__


def get_base_version():
    """MAJOR.MINOR.PATCH[-PHASE]."""
    if "_" in __version__:
        return __version__.split("_")[0]
    base = f"{MAJOR}.{MINOR}.{PATCH}"
    return f"{base}-{PHASE}" if PHASE else base


def get_pip_version():
    """PEP 440 form: 0.1.0-alpha_main_1-... -> 0.1.0a0, dev branches -> .devN."""
    base = f"{MAJOR}.{MINOR}.{PATCH}"
    if PHASE:
        base += {"alpha": "a0", "beta": "b0"}.get(PHASE, PHASE)

    if "_" not in __version__:
        return base

    parts = __version__.split("_")
    branch = parts[1] if len(parts) > 1 else "unknown"
    if branch == "main":
        return base
    build_info = "_".join(parts[2:]) if len(parts) > 2 else ""
    build_num = build_info.split("-")[0] if "-" in build_info else "0"
    return f"{base}.dev{build_num}"


VERSION = get_version()
BASE_VERSION = get_base_version()
PIP_VERSION = get_pip_version()
