"""TOML preferences loading, writing, and defaults."""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from pathlib import Path

# Python 3.11+ stdlib
import tomllib

from clonekit.errors import ConfigError


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

_DEFAULTS = {
    "clones_root_path": "",
    "editor_path": "",
    "editor_check_lock_file": True,
    "display_show_origin_info": False,
}

_SECTIONS = ("clones", "editor", "display")


@dataclass
class ClonekitConfig:
    """Merged preferences (hardcoded defaults < clonekit.toml < CLI)."""

    clones_root_path: str = _DEFAULTS["clones_root_path"]
    editor_path: str = _DEFAULTS["editor_path"]
    editor_check_lock_file: bool = _DEFAULTS["editor_check_lock_file"]
    display_show_origin_info: bool = _DEFAULTS["display_show_origin_info"]


def _flatten_toml(data: dict, prefix: str = "") -> dict[str, object]:
    """Flatten nested TOML dict into underscore-joined keys.

    ``{"clones": {"root_path": "x"}}`` → ``{"clones_root_path": "x"}``
    """
    out: dict[str, object] = {}
    for k, v in data.items():
        key = f"{prefix}_{k}" if prefix else k
        if isinstance(v, dict):
            out.update(_flatten_toml(v, key))
        else:
            out[key] = v
    return out


def _coerce(flat_key: str, value: object) -> object:
    """Convert *value* to the type of the default for *flat_key*."""
    if isinstance(_DEFAULTS[flat_key], bool):
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in ("1", "true", "yes", "on"):
            return True
        if text in ("0", "false", "no", "off"):
            return False
        raise ConfigError(f"Expected a boolean for {flat_key}, got {value!r}")
    return str(value)


def config_file_path(config_home: Path) -> Path:
    """Return the path to clonekit.toml under *config_home*."""
    return config_home / "clonekit.toml"


def load_config(path: Path) -> ClonekitConfig:
    """Read a single TOML file and return a ClonekitConfig with defaults filled in."""
    cfg = ClonekitConfig()
    if path.exists():
        with open(path, "rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ConfigError(f"{path} is not valid TOML: {e}") from e
        flat = _flatten_toml(data)
        valid_keys = {fld.name for fld in fields(cfg)}
        for k, v in flat.items():
            if k in valid_keys:
                setattr(cfg, k, _coerce(k, v))
    return cfg


def load_merged_config(
    path: Path,
    *,
    cli_overrides: dict[str, object] | None = None,
) -> ClonekitConfig:
    """Load the preferences file, then apply CLI overrides.

    Precedence: CLI flags > clonekit.toml > hardcoded defaults.
    """
    cfg = load_config(path)
    if cli_overrides:
        valid_keys = {fld.name for fld in fields(cfg)}
        for k, v in cli_overrides.items():
            if k in valid_keys and v is not None:
                setattr(cfg, k, _coerce(k, v))
    return cfg


def _toml_value(v: object) -> str:
    if isinstance(v, bool):
        return "true" if v else "false"
    # Literal strings keep Windows paths readable without escaping.
    s = str(v)
    if "'" not in s:
        return f"'{s}'"
    return '"' + s.replace("\\", "\\\\").replace('"', '\\"') + '"'


def write_config(path: Path, cfg: ClonekitConfig | None = None) -> None:
    """Write a structured TOML preferences file.

    If *cfg* is None, writes defaults.
    """
    if cfg is None:
        cfg = ClonekitConfig()
    path.parent.mkdir(parents=True, exist_ok=True)
    lines: list[str] = []
    for section in _SECTIONS:
        if lines:
            lines.append("")
        lines.append(f"[{section}]")
        for fld in fields(cfg):
            if fld.name.startswith(section + "_"):
                key = fld.name[len(section) + 1:]
                lines.append(f"{key} = {_toml_value(getattr(cfg, fld.name))}")
    lines.append("")
    path.write_text("\n".join(lines))


def _split_config_key(flat_key: str) -> tuple[str, str]:
    """Split a flat config key into (section, toml_key).

    ``"clones_root_path"`` → ``("clones", "root_path")``
    """
    for section in _SECTIONS:
        prefix = section + "_"
        if flat_key.startswith(prefix):
            return section, flat_key[len(prefix):]
    raise ValueError(f"Cannot determine TOML section for key: {flat_key}")


def config_keys() -> list[str]:
    """Return all valid flat config key names."""
    return [fld.name for fld in fields(ClonekitConfig)]


def write_config_key(path: Path, flat_key: str, value: object) -> None:
    """Write or update a single key in clonekit.toml, preserving other lines."""
    if flat_key not in _DEFAULTS:
        raise ValueError(f"Unknown config key: {flat_key}")
    section, toml_key = _split_config_key(flat_key)
    rendered = f"{toml_key} = {_toml_value(_coerce(flat_key, value))}"
    section_header = f"[{section}]"

    path.parent.mkdir(parents=True, exist_ok=True)
    if not path.exists():
        path.write_text(f"{section_header}\n{rendered}\n")
        return

    text = path.read_text()
    lines = text.splitlines()
    current = None
    for i, line in enumerate(lines):
        stripped = line.strip()
        if stripped.startswith("[") and stripped.endswith("]"):
            current = stripped
            continue
        if current == section_header and re.match(rf"{re.escape(toml_key)}\s*=", stripped):
            lines[i] = rendered
            path.write_text("\n".join(lines) + "\n")
            return

    if section_header in lines:
        idx = lines.index(section_header)
        lines.insert(idx + 1, rendered)
    else:
        if lines and lines[-1].strip():
            lines.append("")
        lines.extend([section_header, rendered])
    path.write_text("\n".join(lines) + "\n")
