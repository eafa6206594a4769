from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Tuple

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import StacheUserError
from .markup.adapter import DEFAULT_RENAMED_ATTRIBUTES, DEFAULT_RENAME_PREFIX

SCHEMA_VERSION = 1
DEFAULT_CFG_FILE = "stache.yaml"

# --------------------------------------------------------------------------- #
# DEFAULTS
# --------------------------------------------------------------------------- #
_DEFAULT_CFG: Dict[str, Any] = {
    "schema_version": SCHEMA_VERSION,
    "preserve_whitespace": False,
    "strip_comments": True,
    "strict_triples": False,
    # attributes renamed before parsing so the host never fetches template URLs
    "rename_attributes": list(DEFAULT_RENAMED_ATTRIBUTES),
    "rename_prefix": DEFAULT_RENAME_PREFIX,
}

# --------------------------------------------------------------------------- #
# YAML loader
# --------------------------------------------------------------------------- #
_yaml = YAML(typ="safe")


class ConfigLoadError(StacheUserError):
    """Invalid compiler configuration, with the offending key in the message."""
    pass


@dataclass(frozen=True)
class CompilerOptions:
    preserve_whitespace: bool = False
    strip_comments: bool = True
    strict_triples: bool = False
    rename_attributes: Tuple[str, ...] = DEFAULT_RENAMED_ATTRIBUTES
    rename_prefix: str = DEFAULT_RENAME_PREFIX

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> CompilerOptions:
        """Build options from a mapping, validating keys and value types."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known - {"schema_version"})
        if unknown:
            raise ConfigLoadError(f"Unknown config keys: {', '.join(unknown)}")

        kwargs: Dict[str, Any] = {}
        for key in ("preserve_whitespace", "strip_comments", "strict_triples"):
            if key in data:
                if not isinstance(data[key], bool):
                    raise ConfigLoadError(f"{key}: expected a boolean, got {data[key]!r}")
                kwargs[key] = data[key]

        if "rename_prefix" in data:
            if not isinstance(data["rename_prefix"], str):
                raise ConfigLoadError(f"rename_prefix: expected a string, got {data['rename_prefix']!r}")
            kwargs["rename_prefix"] = data["rename_prefix"]

        if "rename_attributes" in data:
            names = data["rename_attributes"] or []
            if isinstance(names, str):
                names = [names]
            if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
                raise ConfigLoadError(f"rename_attributes: expected a list of names, got {names!r}")
            kwargs["rename_attributes"] = tuple(names)

        return cls(**kwargs)


# --------------------------------------------------------------------------- #
# HELPERS
# --------------------------------------------------------------------------- #
def _merge_defaults(raw: Dict[str, Any]) -> Dict[str, Any]:
    """User values override the defaults."""
    cfg = _DEFAULT_CFG.copy()
    cfg.update(raw)
    return cfg


# --------------------------------------------------------------------------- #
# PUBLIC API
# --------------------------------------------------------------------------- #
def load_options(path: Path) -> CompilerOptions:
    """
    Load compiler options from a YAML file.

    • Missing file: defaults.
    • Missing schema_version: assumed current.
    • Unknown keys or wrong types: ConfigLoadError.
    """
    if not path.exists():
        return CompilerOptions()

    try:
        with path.open(encoding="utf-8") as f:
            raw = _yaml.load(f) or {}
    except YAMLError as e:
        raise ConfigLoadError(f"Failed to parse {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigLoadError(f"{path}: expected a mapping at top level")

    if raw.get("schema_version", SCHEMA_VERSION) != SCHEMA_VERSION:
        raise ConfigLoadError(
            f"Unsupported config schema {raw.get('schema_version')} "
            f"(tool expects {SCHEMA_VERSION})"
        )

    return CompilerOptions.from_dict(_merge_defaults(raw))


__all__ = [
    "SCHEMA_VERSION",
    "DEFAULT_CFG_FILE",
    "ConfigLoadError",
    "CompilerOptions",
    "load_options",
]
