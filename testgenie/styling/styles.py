"""Centralized styles and font definitions for the application."""

from testgenie.core.formatting import ScoreBand
from testgenie.core.services.take_session import OptionState

from .color_palette import ColorPalette, Theme

class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.LIGHT) -> str:
        return f"""
            QMainWindow {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
            }}
            QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
            }}
            QPushButton {{
                background-color: {ColorPalette.BUTTON_SECONDARY_BG.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 6px 12px;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.BUTTON_HOVER_BG.get(theme)};
            }}
            QPushButton:checked {{
                background-color: {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};
                color: {ColorPalette.BUTTON_PRIMARY_TEXT.get(theme)};
            }}
            QPushButton:disabled {{
                color: {ColorPalette.TEXT_SECONDARY.get(theme)};
            }}
            QLineEdit, QSpinBox, QComboBox {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 4px;
            }}
            QTableWidget, QListWidget {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
            }}
            QGroupBox {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 6px;
                margin-top: 6px;
                padding-top: 10px;
            }}
            QGroupBox::title {{
                subcontrol-origin: margin;
                left: 10px;
                padding: 0 3px 0 3px;
            }}
        """

    @staticmethod
    def get_primary_button_style(theme: Theme = Theme.LIGHT) -> str:
        return (
            f"QPushButton {{ background-color: {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};"
            f" color: {ColorPalette.BUTTON_PRIMARY_TEXT.get(theme)}; font-weight: bold; }}"
            f" QPushButton:disabled {{ background-color: {ColorPalette.BORDER_PRIMARY.get(theme)}; }}"
        )

    @staticmethod
    def get_option_button_style(state: OptionState, theme: Theme = Theme.LIGHT) -> str:
        """Stylesheet for one answer button in the given reveal state."""
        background = ColorPalette.BACKGROUND_PRIMARY.get(theme)
        border = ColorPalette.BORDER_PRIMARY.get(theme)
        if state == OptionState.CORRECT:
            background = ColorPalette.OPTION_CORRECT_BG.get(theme)
            border = ColorPalette.OPTION_CORRECT_BORDER.get(theme)
        elif state == OptionState.INCORRECT:
            background = ColorPalette.OPTION_INCORRECT_BG.get(theme)
            border = ColorPalette.OPTION_INCORRECT_BORDER.get(theme)
        elif state == OptionState.SELECTED:
            background = ColorPalette.OPTION_SELECTED_BG.get(theme)
            border = ColorPalette.ACCENT_PRIMARY.get(theme)
        return (
            f"QPushButton {{ text-align: left; padding: 10px 14px;"
            f" background-color: {background}; border: 2px solid {border}; border-radius: 6px;"
            f" color: {ColorPalette.TEXT_PRIMARY.get(theme)}; }}"
        )

    @staticmethod
    def get_score_bar_style(band: ScoreBand, theme: Theme = Theme.LIGHT) -> str:
        colors = {
            ScoreBand.GOOD: ColorPalette.SCORE_GOOD,
            ScoreBand.FAIR: ColorPalette.SCORE_FAIR,
            ScoreBand.POOR: ColorPalette.SCORE_POOR,
        }
        return (
            f"QProgressBar {{ border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};"
            " border-radius: 6px; text-align: center; height: 18px; }"
            f" QProgressBar::chunk {{ background-color: {colors[band].get(theme)}; border-radius: 6px; }}"
        )

    @staticmethod
    def get_error_label_style(theme: Theme = Theme.LIGHT) -> str:
        return f"color: {ColorPalette.ERROR.get(theme)};"

    @staticmethod
    def get_muted_label_style(theme: Theme = Theme.LIGHT) -> str:
        return f"color: {ColorPalette.TEXT_SECONDARY.get(theme)};"

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"
