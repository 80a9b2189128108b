"""Configuration for eslog.

Three-layer resolution (highest priority wins):
  1. CLI flags
  2. Project config — .eslog.json, found walking up from the working dir
  3. Global config — ~/.eslog/config.json

Keys:
  provider   provider name used to scope manifest queries
  manifest   path of a manifest file to resolve instead of the generated one
"""

import json
import os
from pathlib import Path

from eslog.lib.log_lib import get_output
from eslog.lib.log_lib.levels import INFO

CONFIG_KEYS = ["provider", "manifest"]
PROJECT_CONFIG_NAME = ".eslog.json"


# ---------------------------------------------------------------------------
# Config file locations
# ---------------------------------------------------------------------------
def get_global_config_dir():
    return Path.home() / ".eslog"


def get_global_config_path():
    return get_global_config_dir() / "config.json"


def find_project_config(start_dir=None):
    """Walk up from start_dir looking for .eslog.json. None if absent."""
    current = Path(start_dir or os.getcwd()).resolve()
    while True:
        candidate = current / PROJECT_CONFIG_NAME
        if candidate.is_file():
            return candidate
        if current.parent == current:
            return None
        current = current.parent


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------
def load_json(path):
    """Load a JSON object, returning {} for missing, invalid or non-object files."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def load_global_config():
    return load_json(get_global_config_path())


def load_project_config(start_dir=None):
    """(config dict, path) of the nearest .eslog.json, or ({}, None)."""
    path = find_project_config(start_dir)
    if path:
        return load_json(path), path
    return {}, None


def resolve_config(args, keys=None, start_dir=None):
    """Resolve each key from CLI args, then project, then global config.

    An explicit ``args.config`` path replaces the global config file.
    Relative ``manifest`` paths from a config file are taken relative to
    that file.
    """
    out = get_output()
    keys = keys or CONFIG_KEYS

    project_cfg, project_path = load_project_config(start_dir)
    explicit = getattr(args, "config", None)
    global_path = Path(explicit) if explicit else get_global_config_path()
    global_cfg = load_json(global_path)

    resolved = {}
    for key in keys:
        cli_val = getattr(args, key, None)
        if cli_val is not None:
            resolved[key] = cli_val
            out.emit(INFO, "  [config] {key} from command line", channel='config', key=key)
            continue

        for cfg, path in ((project_cfg, project_path), (global_cfg, global_path)):
            value = cfg.get(key)
            if value is None:
                continue
            if key == "manifest" and path is not None:
                value = str((Path(path).parent / value).resolve())
            resolved[key] = value
            out.emit(INFO, "  [config] {key} from {path}", channel='config',
                     key=key, path=path)
            break
        else:
            resolved[key] = None

    return resolved


def load_manifest_text(path):
    """Read a manifest file; None if it does not exist.

    Raises ManifestError when the path exists but cannot be read as UTF-8
    text (a directory, no permission, undecodable bytes).
    """
    from eslog.manifest import ManifestError

    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(f"cannot read manifest: {e}") from e


def build_logger(config):
    """EventSourceLogger for a resolved config dict.

    The built-in logging provider resolves ``manifest`` when one is
    configured. It is named after ``provider``; when that is unset it
    takes the first provider of the manifest, else the default name.
    Raises ManifestError when the manifest file cannot be read.
    """
    from eslog.manifest import ManifestError, provider_names
    from eslog.source_logger import (
        DEFAULT_PROVIDER_NAME, EventSourceLogger, create_logging_source,
    )

    manifest = None
    if config.get("manifest"):
        manifest = load_manifest_text(config["manifest"])

    name = config.get("provider")
    if not name and manifest is not None:
        try:
            names = provider_names(manifest)
        except ManifestError:
            names = []
        name = names[0] if names else None
    return EventSourceLogger(
        create_logging_source(name or DEFAULT_PROVIDER_NAME, manifest=manifest))


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------
def _write_json(path, data):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
    return path


def save_project_config(data, directory=None):
    """Write .eslog.json into ``directory`` (default: cwd)."""
    return _write_json(Path(directory or os.getcwd()) / PROJECT_CONFIG_NAME, data)


def save_global_config(data):
    get_global_config_dir().mkdir(parents=True, exist_ok=True)
    return _write_json(get_global_config_path(), data)
