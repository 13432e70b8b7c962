"""Built-in card themes."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from .models import CardConfig, ThemeConfig

DEFAULT_THEME_NAME = "Android Green"

THEMES: dict[str, ThemeConfig] = {
    "Android Green": ThemeConfig(
        name="Android Green",
        background="#444444",
        card_bg="#00000080",
        border="#888888",
        accent="#3CD982",
        text_primary="#FFFFFF",
        image_border="#FFFFFF",
    ),
    "Midnight Ink": ThemeConfig(
        name="Midnight Ink",
        background="#0A0F1D",
        card_bg="#1A253FCC",
        border="#35D9FF",
        accent="#35D9FF",
        text_primary="#F4F7FF",
        image_border="#A9B5D1",
    ),
    "Paper": ThemeConfig(
        name="Paper",
        background="#F2EFE8",
        card_bg="#FFFFFFB3",
        border="#B8B0A2",
        accent="#A0522D",
        text_primary="#2B2B2B",
        image_border="#2B2B2B",
    ),
}


def list_themes() -> list[str]:
    return sorted(THEMES.keys())


def get_theme(name: str | None) -> ThemeConfig:
    if not name:
        return THEMES[DEFAULT_THEME_NAME]
    return THEMES.get(name, THEMES[DEFAULT_THEME_NAME])


def card_config_for_theme(name: str | None, **overrides: Any) -> CardConfig:
    """Build a CardConfig from a named palette; keyword overrides win."""
    theme = get_theme(name)
    base = CardConfig(
        background_color=theme.background,
        card_background_color=theme.card_bg,
        border_color=theme.border,
        accent_color=theme.accent,
        text_color=theme.text_primary,
        image_border_color=theme.image_border,
    )
    return replace(base, **overrides) if overrides else base
