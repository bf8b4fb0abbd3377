"""Chat session core and editor context extraction for IDE chat assistants."""

from importlib import import_module
from typing import Any

__version__ = "0.1.0"

_LAZY_EXPORTS = {
    "ChatSession": "editorchat.chat.session",
    "ChatSessionState": "editorchat.chat.session",
    "ActiveDocumentContextCollector": "editorchat.editor.context_collector",
    "ContextOptions": "editorchat.editor.context_collector",
    "Observable": "editorchat.core.observable",
    "Settings": "editorchat.services.settings",
    "SettingsStore": "editorchat.services.settings",
}

__all__ = ["__version__", *_LAZY_EXPORTS]


def __getattr__(name: str) -> Any:
    module_name = _LAZY_EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    value = getattr(import_module(module_name), name)
    globals()[name] = value
    return value
