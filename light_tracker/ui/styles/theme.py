"""Theme and styling system for Light Tracker UI."""

from typing import Dict


class AppColors:
    """Application color scheme."""

    # Dark theme colors
    DARK_BACKGROUND = "#2d2d2d"
    DARK_FOREGROUND = "#cccccc"
    DARK_ACCENT = "#5a9bd5"
    DARK_ACCENT_HOVER = "#7ab3e0"
    DARK_SECONDARY = "#404040"
    DARK_STATUS = "#ffeb3b"

    # Light theme colors
    LIGHT_BACKGROUND = "#ffffff"
    LIGHT_FOREGROUND = "#333333"
    LIGHT_ACCENT = "#0078d4"
    LIGHT_ACCENT_HOVER = "#106ebe"
    LIGHT_SECONDARY = "#f3f2f1"
    LIGHT_STATUS = "#8a6d00"


class AppTheme:
    """Application theme configuration."""

    def __init__(self, theme_name: str = "dark"):
        self.theme_name = theme_name
        if theme_name == "dark":
            self.colors: Dict[str, str] = {
                'background': AppColors.DARK_BACKGROUND,
                'foreground': AppColors.DARK_FOREGROUND,
                'accent': AppColors.DARK_ACCENT,
                'accent_hover': AppColors.DARK_ACCENT_HOVER,
                'secondary': AppColors.DARK_SECONDARY,
                'status': AppColors.DARK_STATUS,
            }
        else:
            self.colors = {
                'background': AppColors.LIGHT_BACKGROUND,
                'foreground': AppColors.LIGHT_FOREGROUND,
                'accent': AppColors.LIGHT_ACCENT,
                'accent_hover': AppColors.LIGHT_ACCENT_HOVER,
                'secondary': AppColors.LIGHT_SECONDARY,
                'status': AppColors.LIGHT_STATUS,
            }

    def get_stylesheet(self) -> str:
        """Qt stylesheet for the whole application."""
        c = self.colors
        return f"""
        QWidget {{
            background-color: {c['background']};
            color: {c['foreground']};
            font-size: 12px;
        }}
        QPushButton {{
            background-color: {c['accent']};
            color: white;
            border: none;
            border-radius: 4px;
            padding: 6px 14px;
        }}
        QPushButton:hover {{
            background-color: {c['accent_hover']};
        }}
        QPushButton:disabled {{
            background-color: {c['secondary']};
        }}
        QComboBox, QCheckBox {{
            background-color: {c['secondary']};
            padding: 3px;
        }}
        QLabel#statusLabel {{
            color: {c['status']};
            font-weight: bold;
            padding: 4px;
        }}
        """


def apply_dark_theme(app):
    """Apply dark theme to application."""
    app.setStyleSheet(AppTheme("dark").get_stylesheet())


def apply_light_theme(app):
    """Apply light theme to application."""
    app.setStyleSheet(AppTheme("light").get_stylesheet())


def apply_theme(app, theme_name: str):
    """Apply a theme by name; unknown names fall back to dark."""
    if theme_name == "light":
        apply_light_theme(app)
    else:
        apply_dark_theme(app)
