"""Runtime configuration for the CLI and UI.

Values come from, in increasing priority: defaults, a YAML/JSON file, and
environment variables:
- B64KIT_DEFAULT_FORMAT
- B64KIT_PREVIEW_CHARS
- B64KIT_MAX_INPUT_CHARS
- B64KIT_LOG_DIR
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from b64kit.formats import Selector

ENV_PREFIX = "B64KIT_"
DEFAULT_PREVIEW_CHARS = 100
DEFAULT_MAX_INPUT_CHARS = 1_000_000


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ToolkitConfig:
    default_format: str = Selector.AUTO.value
    preview_chars: int = DEFAULT_PREVIEW_CHARS
    max_input_chars: int = DEFAULT_MAX_INPUT_CHARS
    log_dir: Path = Path("logs")

    @property
    def selector(self) -> Selector:
        return Selector.parse(self.default_format)

    @staticmethod
    def from_mapping(payload: Mapping[str, Any]) -> ToolkitConfig:
        known = {"default_format", "preview_chars", "max_input_chars", "log_dir"}
        unknown = sorted(set(payload) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        defaults = ToolkitConfig()
        try:
            cfg = ToolkitConfig(
                default_format=Selector.parse(
                    payload.get("default_format", defaults.default_format)
                ).value,
                preview_chars=int(payload.get("preview_chars", defaults.preview_chars)),
                max_input_chars=int(payload.get("max_input_chars", defaults.max_input_chars)),
                log_dir=Path(payload.get("log_dir", defaults.log_dir)),
            )
        except (TypeError, ValueError) as exc:
            raise ConfigError(str(exc)) from exc
        if cfg.preview_chars < 1 or cfg.max_input_chars < 1:
            raise ConfigError("preview_chars and max_input_chars must be positive")
        return cfg

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["log_dir"] = str(self.log_dir)
        return payload


def load_config(path: Path) -> ToolkitConfig:
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    try:
        raw = path.read_text(encoding="utf-8")
        if path.suffix.lower() in {".yml", ".yaml"}:
            payload = yaml.safe_load(raw)
        else:
            payload = json.loads(raw)
    except (OSError, yaml.YAMLError, ValueError) as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc
    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise ConfigError(f"Config file must hold a mapping: {path}")
    return ToolkitConfig.from_mapping(payload)


def _env_overrides(environ: Mapping[str, str]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key in ("default_format", "preview_chars", "max_input_chars", "log_dir"):
        value = environ.get(ENV_PREFIX + key.upper())
        if value:
            overrides[key] = value
    return overrides


def resolve_config(
    path: Path | None = None, environ: Mapping[str, str] | None = None
) -> ToolkitConfig:
    """Load ``path`` (if any) and apply environment overrides on top."""
    base = load_config(path) if path else ToolkitConfig()
    overrides = _env_overrides(os.environ if environ is None else environ)
    if not overrides:
        return base
    merged = {**base.to_dict(), **overrides}
    return ToolkitConfig.from_mapping(merged)


def sample_config() -> dict[str, Any]:
    return replace(ToolkitConfig(), log_dir=Path("logs/b64kit")).to_dict()
