"""Settings dataclass and JSON persistence helpers."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping

from ..chat.commands import CustomCommand, parse_custom_commands
from ..editor.context_collector import ContextOptions

__all__ = ["Settings", "SettingsStore"]

LOGGER = logging.getLogger(__name__)
_SETTINGS_DIR = Path.home() / ".editorchat"
_DEFAULT_SETTINGS_PATH = _SETTINGS_DIR / "settings.json"
_SETTINGS_VERSION = 1
_ENV_OVERRIDES: Mapping[str, str] = {
    "EDITORCHAT_MODEL": "default_model_id",
}
_BOOL_ENV_OVERRIDES: Mapping[str, str] = {
    "EDITORCHAT_EMBED_FILE_IF_NO_SELECTION": "embed_file_content_if_no_selection",
    "EDITORCHAT_DEBUG_LOGGING": "debug_logging",
}
_FLOAT_ENV_OVERRIDES: Mapping[str, str] = {
    "EDITORCHAT_TEMPERATURE": "default_temperature",
}
_INT_ENV_OVERRIDES: Mapping[str, str] = {
    "EDITORCHAT_MAX_EMBEDDABLE_LINES": "max_embeddable_file_line_count",
}
_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(slots=True)
class Settings:
    """User preferences read by the context collector and chat menu."""

    embed_file_content_if_no_selection: bool = False
    max_embeddable_file_line_count: int = 100
    default_temperature: float = 0.7
    default_model_id: str = ""
    custom_commands: list[dict[str, Any]] = field(default_factory=list)
    debug_logging: bool = False

    def context_options(self) -> ContextOptions:
        """Return the options object handed to the context collector."""

        return ContextOptions(
            embed_file_if_no_selection=self.embed_file_content_if_no_selection,
            max_embeddable_line_count=self.max_embeddable_file_line_count,
        )

    def parsed_custom_commands(self) -> list[CustomCommand]:
        return parse_custom_commands(self.custom_commands)

    @property
    def log_level(self) -> int:
        return logging.DEBUG if self.debug_logging else logging.INFO


class SettingsStore:
    """Persistence adapter for :class:`Settings`."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or _DEFAULT_SETTINGS_PATH

    @property
    def path(self) -> Path:
        """Return the resolved path backing this store."""

        return self._path

    def load(self, *, overrides: Mapping[str, Any] | None = None) -> Settings:
        """Load settings from disk, applying caller then environment overrides."""

        payload = self._read_payload()
        settings = Settings()
        if payload:
            data = _filter_fields(payload)
            try:
                settings = Settings(**data)
            except TypeError as exc:
                LOGGER.warning("Settings payload contained unexpected data: %s", exc)
                settings = Settings()
            settings = _coerce_types(settings)
            LOGGER.debug("Settings loaded from %s: keys=%s", self._path, sorted(data))

        if overrides:
            settings = self._apply_overrides(settings, overrides, source="caller")

        return self._apply_env_overrides(settings)

    def save(self, settings: Settings) -> Path:
        """Persist settings to disk with atomic file writes."""

        payload = asdict(settings)
        payload["version"] = _SETTINGS_VERSION
        body = json.dumps(payload, indent=2, sort_keys=True)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(".tmp")
        tmp_path.write_text(body, encoding="utf-8")
        tmp_path.replace(self._path)
        LOGGER.debug("Settings saved to %s", self._path)
        return self._path

    def _read_payload(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            text = self._path.read_text(encoding="utf-8")
            payload = json.loads(text)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as exc:
            LOGGER.warning("Settings file %s could not be read: %s", self._path, exc)
            return {}
        if not isinstance(payload, dict):
            LOGGER.warning("Settings file %s does not contain a JSON object", self._path)
            return {}
        return payload

    def _apply_overrides(
        self,
        settings: Settings,
        overrides: Mapping[str, Any],
        *,
        source: str = "runtime",
    ) -> Settings:
        allowed = {item.name for item in fields(Settings)}
        filtered: Dict[str, Any] = {}
        for key, value in overrides.items():
            if key not in allowed or value is None:
                continue
            filtered[key] = value
        if filtered:
            LOGGER.debug("Applying %s settings overrides: %s", source, sorted(filtered))
            settings = replace(settings, **filtered)
        return settings

    def _apply_env_overrides(self, settings: Settings) -> Settings:
        overrides: Dict[str, Any] = {}
        for env_name, field_name in _ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is not None:
                overrides[field_name] = value
        for env_name, field_name in _BOOL_ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is not None:
                overrides[field_name] = value.strip().lower() in _TRUE_VALUES
        for env_name, field_name in _INT_ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is None:
                continue
            try:
                overrides[field_name] = int(value, 10)
            except ValueError:
                LOGGER.warning("Environment override %s=%s is not a valid integer", env_name, value)
        for env_name, field_name in _FLOAT_ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is None:
                continue
            try:
                overrides[field_name] = float(value)
            except ValueError:
                LOGGER.warning("Environment override %s=%s is not a valid float", env_name, value)
        if overrides:
            settings = self._apply_overrides(settings, overrides, source="environment")
        return settings


def _filter_fields(payload: Mapping[str, Any]) -> Dict[str, Any]:
    allowed = {item.name for item in fields(Settings)}
    return {key: value for key, value in payload.items() if key in allowed}


def _coerce_types(settings: Settings) -> Settings:
    """Replace values of the wrong JSON type with the defaults."""

    defaults = Settings()
    updates: Dict[str, Any] = {}
    for item in fields(Settings):
        value = getattr(settings, item.name)
        expected = getattr(defaults, item.name)
        if isinstance(expected, bool):
            valid = isinstance(value, bool)
        elif isinstance(expected, float):
            valid = isinstance(value, (int, float)) and not isinstance(value, bool)
        elif isinstance(expected, int):
            valid = isinstance(value, int) and not isinstance(value, bool)
        else:
            valid = isinstance(value, type(expected))
        if not valid:
            LOGGER.warning("Settings field %s has invalid value %r; using default", item.name, value)
            updates[item.name] = expected
        elif isinstance(expected, float) and not isinstance(value, float):
            updates[item.name] = float(value)
    if updates:
        settings = replace(settings, **updates)
    return settings
