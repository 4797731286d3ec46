"""Layered TOML configuration.

Layers are merged lowest priority first:

    1. model defaults
    2. ``$XDG_CONFIG_HOME/finroute/config.toml`` (``~/.config`` fallback)
    3. ``./finroute.toml``
    4. the file named by ``$FINROUTE_CONFIG``
    5. the ``path`` passed to :func:`load_config`
    6. the ``overrides`` passed to :func:`load_config`

The two optional files are skipped when absent; the two named ones must
exist. Keys for the model providers and the financial data API come from
the env var named by ``api_key_env`` unless set inline.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from finroute.core.errors import ConfigError

from .schema import FinrouteConfig

if TYPE_CHECKING:
    from .schema import ApiConfig, ProviderConfig

ENV_CONFIG_VAR = "FINROUTE_CONFIG"


def _optional_layers() -> list[Path]:
    config_home = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    candidates = (
        Path(config_home) / "finroute" / "config.toml",
        Path.cwd() / "finroute.toml",
    )
    return [p for p in candidates if p.is_file()]


def _required_layer(path: str | Path, problem: str) -> Path:
    layer = Path(path)
    if not layer.is_file():
        msg = f"{problem}: {path}"
        raise ConfigError(msg)
    return layer


def config_layers(path: str | Path | None = None) -> list[Path]:
    """Config files that :func:`load_config` would read, in merge order.

    Raises:
        ConfigError: If ``$FINROUTE_CONFIG`` or *path* names a missing file.
    """
    layers = _optional_layers()
    env_path = os.environ.get(ENV_CONFIG_VAR)
    if env_path:
        layers.append(
            _required_layer(env_path, f"{ENV_CONFIG_VAR} points to non-existent file")
        )
    if path is not None:
        layers.append(_required_layer(path, "Config file not found"))
    return layers


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Cannot read config file {path}: {e}"
        raise ConfigError(msg) from e


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge *override* into a copy of *base*; nested tables merge key by key."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = _deep_merge(current, value)
        merged[key] = value
    return merged


def _fill_key_from_env(section: ProviderConfig | ApiConfig) -> None:
    if section.api_key is None and section.api_key_env:
        section.api_key = os.environ.get(section.api_key_env)


def load_config(
    path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> FinrouteConfig:
    """Merge all config layers and validate the result.

    Raises:
        ConfigError: On a missing named file, unreadable or invalid TOML,
            or a value the schema rejects.
    """
    merged: dict[str, Any] = {}
    for layer in config_layers(path):
        merged = _deep_merge(merged, _read_toml(layer))
    merged = _deep_merge(merged, overrides or {})

    try:
        config = FinrouteConfig.model_validate(merged)
    except ValidationError as e:
        msg = f"Configuration validation failed: {e}"
        raise ConfigError(msg) from e

    for section in (*config.providers.values(), config.api):
        _fill_key_from_env(section)
    return config
