"""Editor snapshot models and the active document context collector."""

from importlib import import_module
from typing import Any

from . import document_model, selection_gateway

__all__ = ["document_model", "selection_gateway"]


def __getattr__(name: str) -> Any:
	if name == "context_collector":
		module = import_module(f"{__name__}.{name}")
		globals()[name] = module
		return module
	raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
