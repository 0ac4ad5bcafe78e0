"""Styling and theme components for Light Tracker UI."""

from .theme import AppTheme, apply_dark_theme, apply_light_theme, apply_theme

__all__ = [
    "AppTheme",
    "apply_dark_theme",
    "apply_light_theme",
    "apply_theme"
]
