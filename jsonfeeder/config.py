"""Default CLI options from YAML files and JSONFEEDER_* environment variables.

Files are read user-level first, then project-level, so a project's
``./jsonfeeder.yaml`` overrides ``~/.jsonfeeder.yaml``. Environment
variables override both, and explicit CLI flags override everything.
"""
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "JSONFEEDER_"
CONFIG_NAMES = ("jsonfeeder.yaml", "jsonfeeder.yml")

# field -> (type, example value, help line for the starter file)
FIELDS: Dict[str, Tuple[type, Any, str]] = {
    "indent": (int, 2, "Pretty-print output with this many spaces"),
    "excerpt_only": (bool, False, "Publish summaries only, never full post content"),
    "title": (str, "My Site", "Override the site title"),
    "comment": (str, "Generated by jsonfeeder", "Note for humans reading the raw feed"),
    "feed_url": (str, "https://example.com/feed.json", "Where the generated feed is published"),
    "next_url": (str, "https://example.com/feed-2.json", "Next page of a paginated feed"),
    "output": (str, "feed.json", "Write to this file instead of stdout"),
    "timeout": (int, 15, "HTTP timeout for remote RSS/Atom sources, in seconds"),
    "retries": (int, 2, "Retries for failed HTTP requests"),
    "stats": (bool, False, "Print a summary table instead of JSON"),
    "verbose": (bool, False, "Debug logging"),
    "quiet": (bool, False, "Suppress status messages"),
}

_TRUE_STRINGS = ("1", "true", "yes", "on")


def config_paths() -> List[Path]:
    home = Path.home()
    return [home / f".{name}" for name in CONFIG_NAMES] + [Path(name) for name in CONFIG_NAMES]


def _coerce(field: str, value: Any) -> Tuple[bool, Any]:
    """Convert a raw value to the field's type; ``(False, None)`` if impossible."""
    kind = FIELDS[field][0]
    if kind is bool:
        if isinstance(value, str):
            return True, value.strip().lower() in _TRUE_STRINGS
        return True, bool(value)
    if kind is int:
        try:
            return True, int(value)
        except (TypeError, ValueError):
            logger.warning(f"[Config] Ignoring {field}={value!r}: not an integer")
            return False, None
    return True, str(value)


def load_config() -> Dict[str, Any]:
    """Merge every config file found, later files winning. Keys use underscores."""
    config: Dict[str, Any] = {}
    for path in config_paths():
        if not path.is_file():
            continue
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"[Config] Failed to load {path}: {e}")
            continue
        if not isinstance(data, dict):
            logger.warning(f"[Config] Ignoring {path}: expected a mapping")
            continue
        config.update({str(k).replace("-", "_"): v for k, v in data.items()})
        logger.debug(f"[Config] Loaded {path}")
    return config


def load_env_config() -> Dict[str, Any]:
    """Read known fields from the environment, e.g. JSONFEEDER_INDENT=2."""
    config: Dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        field = key[len(ENV_PREFIX):].lower()
        if field not in FIELDS:
            continue
        ok, coerced = _coerce(field, value)
        if ok:
            config[field] = coerced
    return config


def apply_config_defaults(parser, args):
    """Fill options the user left at their parser default from env and files."""
    config = load_config()
    config.update(load_env_config())

    for field, value in config.items():
        if field not in FIELDS or not hasattr(args, field):
            continue
        if getattr(args, field) != parser.get_default(field):
            continue
        ok, coerced = _coerce(field, value)
        if ok:
            setattr(args, field, coerced)
    return args


def render_starter_config() -> str:
    lines = [
        "# jsonfeeder defaults. Uncomment to use; CLI flags always win.",
        "",
    ]
    for field, (_, example, help_text) in FIELDS.items():
        lines.append(f"# {help_text}")
        lines.append("# " + yaml.safe_dump({field: example}, default_flow_style=False).strip())
        lines.append("")
    return "\n".join(lines)


def generate_starter_config() -> Path:
    """Write a commented config to ~/.jsonfeeder.yaml, or beside it if one exists."""
    path = Path.home() / f".{CONFIG_NAMES[0]}"
    if path.exists():
        path = path.with_name(path.name + ".new")
    path.write_text(render_starter_config(), encoding="utf-8")
    return path
