"""Color palette for TestGenie supporting light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Theme(Enum):
    """Application theme options."""
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    """Color definitions for a specific theme."""
    light: str
    dark: str
    
    def get(self, theme: Theme) -> str:
        """Get color value for the specified theme."""
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Centralized color definitions for the application."""
    
    # Text colors
    TEXT_PRIMARY = ThemeColors(
        light="#111827",      # Near black
        dark="#F5F5F5"        # WhiteSmoke
    )
    
    TEXT_SECONDARY = ThemeColors(
        light="#6B7280",      # Gray
        dark="#AAAAAA"        # Light Gray
    )
    
    # Background colors
    BACKGROUND_PRIMARY = ThemeColors(
        light="#FFFFFF",      # White
        dark="#1E1E1E"        # Dark Gray
    )
    
    BACKGROUND_SECONDARY = ThemeColors(
        light="#F9FAFB",      # Off-white
        dark="#2D2D2D"        # Slightly lighter dark
    )
    
    # Accent colors
    ACCENT_PRIMARY = ThemeColors(
        light="#2563EB",      # Blue
        dark="#4A9EFF"        # Lighter Blue
    )
    
    # Status colors
    ERROR = ThemeColors(
        light="#DC2626",      # Red
        dark="#FF6B6B"        # Light Red
    )
    
    # Border colors
    BORDER_PRIMARY = ThemeColors(
        light="#D1D5DB",      # Gray
        dark="#555555"        # Dark Gray
    )
    
    # Button colors
    BUTTON_PRIMARY_BG = ThemeColors(
        light="#2563EB",      # Blue
        dark="#4A9EFF"        # Lighter Blue
    )
    
    BUTTON_PRIMARY_TEXT = ThemeColors(
        light="#FFFFFF",      # White
        dark="#000000"        # Black
    )
    
    BUTTON_SECONDARY_BG = ThemeColors(
        light="#F3F4F6",      # Light Gray
        dark="#3A3A3A"        # Dark Gray
    )
    
    BUTTON_HOVER_BG = ThemeColors(
        light="#E5E7EB",      # Gray
        dark="#505050"        # Medium Gray
    )
    
    # Answer reveal colors
    OPTION_CORRECT_BG = ThemeColors(
        light="#D1FAE5",      # Pale green
        dark="#14532D"        # Deep green
    )
    
    OPTION_CORRECT_BORDER = ThemeColors(
        light="#10B981",      # Green
        dark="#22C55E"        # Bright green
    )
    
    OPTION_INCORRECT_BG = ThemeColors(
        light="#FEE2E2",      # Pale red
        dark="#7F1D1D"        # Deep red
    )
    
    OPTION_INCORRECT_BORDER = ThemeColors(
        light="#EF4444",      # Red
        dark="#F87171"        # Light red
    )
    
    OPTION_SELECTED_BG = ThemeColors(
        light="#DBEAFE",      # Pale blue
        dark="#1E3A8A"        # Deep blue
    )
    
    # Score bands
    SCORE_GOOD = ThemeColors(
        light="#10B981",      # Green
        dark="#34D399"        # Light green
    )
    
    SCORE_FAIR = ThemeColors(
        light="#FBBF24",      # Amber
        dark="#FCD34D"        # Light amber
    )
    
    SCORE_POOR = ThemeColors(
        light="#EF4444",      # Red
        dark="#F87171"        # Light red
    )
