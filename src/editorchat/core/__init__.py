"""Core building blocks shared by the chat and editor packages."""

from .observable import Observable, Subscription

__all__ = ["Observable", "Subscription"]
