"""User-defined chat commands and their schema validation."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from jsonschema import Draft7Validator, ValidationError

LOGGER = logging.getLogger(__name__)


class CommandKind(str, Enum):
    """How a custom command talks to the chat service."""

    CHAT_WITH_SELECTION = "chat_with_selection"
    CUSTOM_CHAT = "custom_chat"


@dataclass(slots=True)
class ValidationResult:
    """Outcome of validating a custom command payload."""

    ok: bool
    message: str = ""


@dataclass(frozen=True, slots=True)
class CustomCommand:
    """A named prompt shortcut shown in the chat menu."""

    name: str
    kind: CommandKind
    prompt: str = ""
    system_prompt: Optional[str] = None
    extra_system_prompt: Optional[str] = None
    use_extra_system_prompt: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", CommandKind(self.kind))

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "kind": self.kind.value,
            "prompt": self.prompt,
            "use_extra_system_prompt": self.use_extra_system_prompt,
        }
        if self.system_prompt is not None:
            payload["system_prompt"] = self.system_prompt
        if self.extra_system_prompt is not None:
            payload["extra_system_prompt"] = self.extra_system_prompt
        return payload


CUSTOM_COMMAND_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["name", "kind"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "kind": {"type": "string", "enum": [item.value for item in CommandKind]},
        "prompt": {"type": "string"},
        "system_prompt": {"type": ["string", "null"]},
        "extra_system_prompt": {"type": ["string", "null"]},
        "use_extra_system_prompt": {"type": "boolean"},
    },
    "additionalProperties": False,
    "allOf": [
        {
            "if": {"properties": {"kind": {"const": CommandKind.CUSTOM_CHAT.value}}},
            "then": {"not": {"required": ["extra_system_prompt"]}},
            "else": {"not": {"required": ["system_prompt"]}},
        }
    ],
}

_COMMAND_VALIDATOR = Draft7Validator(CUSTOM_COMMAND_SCHEMA)


def validate_custom_command(payload: Mapping[str, Any]) -> ValidationResult:
    """Validate a custom command mapping against the schema and naming rules."""

    if not isinstance(payload, Mapping):
        return ValidationResult(ok=False, message="Custom command must be a mapping")

    candidate: Dict[str, Any] = dict(payload)
    kind = candidate.get("kind")
    if isinstance(kind, str):
        candidate["kind"] = kind.strip().lower()

    try:
        _COMMAND_VALIDATOR.validate(candidate)
    except ValidationError as error:
        return ValidationResult(ok=False, message=_format_validation_error(error))

    if not str(candidate["name"]).strip():
        return ValidationResult(ok=False, message="name must not be blank")
    return ValidationResult(ok=True)


def parse_custom_command(payload: Mapping[str, Any]) -> CustomCommand:
    """Build a :class:`CustomCommand`; raises ``ValueError`` on invalid payloads."""

    result = validate_custom_command(payload)
    if not result.ok:
        raise ValueError(f"Invalid custom command: {result.message}")
    data = dict(payload)
    return CustomCommand(
        name=str(data["name"]).strip(),
        kind=CommandKind(str(data["kind"]).strip().lower()),
        prompt=data.get("prompt", ""),
        system_prompt=data.get("system_prompt"),
        extra_system_prompt=data.get("extra_system_prompt"),
        use_extra_system_prompt=data.get("use_extra_system_prompt", True),
    )


def parse_custom_commands(payload: Sequence[Any] | None) -> list[CustomCommand]:
    """Parse a list of command mappings, skipping invalid or duplicate entries."""

    if not payload:
        return []
    commands: list[CustomCommand] = []
    seen: set[str] = set()
    for index, entry in enumerate(payload):
        try:
            command = parse_custom_command(entry)
        except ValueError as exc:
            LOGGER.warning("Skipping custom command #%d: %s", index, exc)
            continue
        if command.name in seen:
            LOGGER.warning("Skipping duplicate custom command %r", command.name)
            continue
        seen.add(command.name)
        commands.append(command)
    return commands


def _format_validation_error(error: ValidationError) -> str:
    path = ".".join(str(part) for part in error.path)
    if path:
        return f"{path}: {error.message}"
    return error.message


__all__ = [
    "CUSTOM_COMMAND_SCHEMA",
    "CommandKind",
    "CustomCommand",
    "ValidationResult",
    "parse_custom_command",
    "parse_custom_commands",
    "validate_custom_command",
]
