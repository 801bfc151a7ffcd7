from __future__ import annotations

import os
from importlib import resources
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError

from dependr.ecosystems import DEPENDENCY_CACHE_DIRS
from dependr.errors import SettingsError
from dependr.models import Settings

SETTINGS_ENV = "DEPENDR_SETTINGS"


def _builtin_data() -> dict[str, Any]:
    data = resources.files("dependr.data").joinpath("settings.yaml").read_text(encoding="utf-8")
    parsed = yaml.safe_load(data)
    return parsed if isinstance(parsed, dict) else {}


def load_builtin_settings() -> Settings:
    return Settings.model_validate(_builtin_data())


def load_settings_file(path: Path) -> Settings:
    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SettingsError(f"Unable to read settings file: {path} ({exc})") from exc
    except UnicodeDecodeError as exc:
        raise SettingsError(f"Unable to decode settings file: {path} ({exc})") from exc
    except yaml.YAMLError as exc:
        raise SettingsError(f"Invalid YAML in settings file: {path} ({exc})") from exc
    if parsed is None:
        parsed = {}
    if not isinstance(parsed, dict):
        raise SettingsError(f"Settings file must contain a mapping: {path}")

    merged = {**_builtin_data(), **parsed}
    try:
        return Settings.model_validate(merged)
    except ValidationError as exc:
        raise SettingsError(f"Invalid settings file: {path}\n{exc}") from exc


def load_settings(path: Path | None = None) -> Settings:
    if path is None:
        env_path = os.getenv(SETTINGS_ENV)
        if env_path:
            path = Path(env_path).expanduser()
    if path is None:
        return load_builtin_settings()
    return load_settings_file(path)


def settings_summary(settings: Settings) -> str:
    excluded = ", ".join(sorted(DEPENDENCY_CACHE_DIRS | set(settings.exclude_dirs)))
    return f"interval={settings.schedule_interval} excluded={excluded}"
