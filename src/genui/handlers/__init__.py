"""Caller-facing handlers."""

from .ui import DynamicUIState, UIHandler

__all__ = ["DynamicUIState", "UIHandler"]
