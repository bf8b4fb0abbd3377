"""Chat menu sub-state: prompts, model overrides, scopes and custom commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

from .service import Scope

if TYPE_CHECKING:  # pragma: no cover
    from .commands import CustomCommand
    from .service import ChatService

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ChatMenuState:
    """Mirror of the service prompts and configuration overrides."""

    system_prompt: str = ""
    extra_system_prompt: str = ""
    temperature_override: Optional[float] = None
    model_id_override: Optional[str] = None
    default_scopes: frozenset[Scope] = frozenset()


class ChatMenu:
    """Routes menu intents to the chat service and mirrors what it publishes.

    The menu never treats its own state as authoritative. Override setters
    update the mirror so the menu reflects the choice immediately, then write
    through to the service configuration; scope toggles go straight to the
    service and come back through the default-scopes channel.
    """

    def __init__(
        self,
        service: ChatService,
        state: ChatMenuState | None = None,
        *,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._service = service
        self._state = state if state is not None else ChatMenuState()
        self._on_change = on_change

    @property
    def state(self) -> ChatMenuState:
        return self._state

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    def refresh(self) -> None:
        """Pull the current overrides from the service configuration."""
        overriding = self._service.configuration.overriding
        self._state.temperature_override = overriding.temperature
        self._state.model_id_override = overriding.model_id
        LOGGER.debug(
            "ChatMenu.refresh: temperature=%s, model_id=%s",
            overriding.temperature,
            overriding.model_id,
        )
        self._changed()

    async def reset_prompt(self) -> None:
        await self._service.reset_prompt()

    def set_temperature_override(self, temperature: Optional[float]) -> None:
        self._state.temperature_override = temperature
        self._changed()
        self._service.configuration.overriding.temperature = temperature

    def set_model_id_override(self, model_id: Optional[str]) -> None:
        self._state.model_id_override = model_id
        self._changed()
        self._service.configuration.overriding.model_id = model_id

    async def run_custom_command(self, command: CustomCommand) -> None:
        """Forward ``command`` to the service; errors propagate to the caller."""
        LOGGER.debug("ChatMenu.run_custom_command: %s", command.name)
        await self._service.handle_custom_command(command)

    def reset_default_scopes(self) -> None:
        self._service.reset_default_scopes()

    def toggle_scope(self, scope: Scope) -> None:
        """Add ``scope`` to the service default scopes, or remove it if present."""
        self._service.default_scopes.update(lambda scopes: frozenset(scopes) ^ {scope})

    # ------------------------------------------------------------------
    # Channel reactions
    # ------------------------------------------------------------------

    def system_prompt_changed(self, prompt: str) -> None:
        self._state.system_prompt = prompt
        self._changed()

    def extra_system_prompt_changed(self, prompt: str) -> None:
        self._state.extra_system_prompt = prompt
        self._changed()

    def default_scopes_changed(self, scopes: frozenset[Scope]) -> None:
        self._state.default_scopes = frozenset(scopes)
        self._changed()

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()


__all__ = ["ChatMenu", "ChatMenuState"]
