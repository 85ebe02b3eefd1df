"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

CONFIG_FILENAME = "f.toml"
DEFAULT_EDITOR = "vim"
DEFAULT_ID_CHARS = "dfghklsa"


@dataclass(slots=True, frozen=True)
class AppConfig:
    """Fully merged configuration for one run."""

    editor: str
    id_chars: str
    log_path: Path | None = None

    @property
    def alphabet(self) -> str:
        """Return the normalized identifier alphabet."""
        return normalize_id_chars(self.id_chars)


@dataclass(slots=True, frozen=True)
class ConfigOverrides:
    """Optional startup overrides applied at highest precedence."""

    editor: str | None = None


def default_config() -> AppConfig:
    return AppConfig(editor=DEFAULT_EDITOR, id_chars=DEFAULT_ID_CHARS)


def default_config_path() -> Path:
    """Return the per-user config file location."""
    config_home = os.environ.get("XDG_CONFIG_HOME", "").strip()
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / CONFIG_FILENAME


def normalize_id_chars(raw: str) -> str:
    """Drop repeated characters, falling back to the default when fewer than two remain."""
    distinct = "".join(dict.fromkeys(raw))
    if len(distinct) >= 2:
        return distinct
    return DEFAULT_ID_CHARS


def load_config_file(path: Path) -> dict[str, object]:
    """Load the optional TOML config file."""
    if not path.exists():
        return {}
    with path.open("rb") as handle:
        try:
            payload = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ValueError(f"Failed to parse config file {path}: {exc}") from exc
    return payload


def merge_config(
    base: AppConfig, payload: dict[str, object], overrides: ConfigOverrides
) -> AppConfig:
    """Merge defaults, config file, then startup overrides."""
    editor = _optional_string(payload.get("editor"), "editor", base.editor)
    id_chars = _optional_string(payload.get("id_chars"), "id_chars", base.id_chars)
    log_path = base.log_path
    raw_log_path = _optional_string(payload.get("log_path"), "log_path", "")
    if raw_log_path:
        log_path = Path(raw_log_path).expanduser()

    merged = AppConfig(editor=editor, id_chars=id_chars, log_path=log_path)
    return apply_overrides(merged, overrides)


def apply_overrides(config: AppConfig, overrides: ConfigOverrides) -> AppConfig:
    """Apply startup overrides at highest precedence."""
    return AppConfig(
        editor=overrides.editor or config.editor,
        id_chars=config.id_chars,
        log_path=config.log_path,
    )


def overrides_from_env() -> ConfigOverrides:
    """$EDITOR wins over the configured editor."""
    editor = os.environ.get("EDITOR", "").strip()
    return ConfigOverrides(editor=editor or None)


def load_effective_config(
    config_path: Path | None = None, overrides: ConfigOverrides | None = None
) -> AppConfig:
    """Load effective config using merge order defaults -> config file -> overrides."""
    payload = load_config_file(config_path or default_config_path())
    return merge_config(default_config(), payload, overrides or ConfigOverrides())


def _optional_string(value: object, name: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"Config field '{name}' must be a string.")
    return value
