"""Config file support for atomgen.

Loads default CLI arguments from:
  1. ~/.atomgen.yaml  (user-level)
  2. ./atomgen.yaml   (project-level, overrides user-level)

Example config file:

    # ~/.atomgen.yaml
    strict: true
    lang: en
    output: public/feed.atom
"""
import logging
import os
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

_BOOL_FIELDS = {"verbose", "quiet", "strict", "no_verify"}
_STR_FIELDS = {"output", "lang"}


def load_config() -> Dict[str, Any]:
    """Load config from YAML files, merging user + project level."""
    config: Dict[str, Any] = {}

    paths = [
        Path.home() / ".atomgen.yaml",
        Path.home() / ".atomgen.yml",
        Path("atomgen.yaml"),
        Path("atomgen.yml"),
    ]

    for p in paths:
        if p.is_file():
            try:
                import yaml
                with open(p, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f) or {}
                if isinstance(data, dict):
                    # Normalize keys: dashes → underscores
                    normalized = {k.replace("-", "_"): v for k, v in data.items()}
                    config.update(normalized)
                    logger.debug(f"[Config] Loaded {p}")
            except Exception as e:
                logger.warning(f"[Config] Failed to load {p}: {e}")

    return config


def load_env_config() -> Dict[str, Any]:
    """Load config from ATOMGEN_* environment variables.

    Maps ATOMGEN_LANG=en → lang=en, ATOMGEN_STRICT=1 → strict=True, etc.
    """
    prefix = "ATOMGEN_"
    config: Dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue
        field = key[len(prefix):].lower()
        if field in _BOOL_FIELDS:
            config[field] = value.lower() in ("1", "true", "yes", "on")
        elif field in _STR_FIELDS:
            config[field] = value
    return config


def apply_config_defaults(parser, args):
    """Apply config defaults to unset CLI args (CLI always wins).

    Priority: CLI flags > env vars (ATOMGEN_*) > config files > parser defaults.
    """
    config = load_config()
    config.update(load_env_config())
    if not config:
        return args

    for key, value in config.items():
        if not hasattr(args, key):
            continue
        if getattr(args, key) != parser.get_default(key):
            continue  # User explicitly set it, don't override

        if key in _BOOL_FIELDS:
            setattr(args, key, bool(value))
        elif key in _STR_FIELDS:
            setattr(args, key, str(value))

    return args


_STARTER_CONFIG = """\
# atomgen configuration. Customize your defaults here.
# CLI flags always override these values.

# Exit with status 1 (and write nothing) when verification finds problems
# strict: false

# Skip verification entirely
# no_verify: false

# Default xml:lang for feeds whose definition does not set one
# lang: en

# Write the feed here instead of stdout
# output: feed.atom

# Suppress status messages
# quiet: false
"""


def generate_starter_config() -> Path:
    """Write a starter config file to ~/.atomgen.yaml (won't overwrite existing)."""
    path = Path.home() / ".atomgen.yaml"
    if path.exists():
        path = Path.home() / ".atomgen.yaml.new"
    path.write_text(_STARTER_CONFIG, encoding="utf-8")
    return path
