"""Renderer package for business card composition."""

from .layout import (
    DEFAULT_SIZE,
    card_view,
    contact_row,
    contact_section,
    distribute_weights,
    profile_section,
    render_card,
)
from .models import (
    BoxStyle,
    CardConfig,
    ContactEntry,
    FontFamily,
    FontWeight,
    IconKind,
    ImageHandle,
    LayoutNode,
    NodeKind,
    ProfileData,
    ProfileStyle,
    Rect,
    TextStyle,
    ThemeConfig,
)
from .resources import ResourceNotFound, ResourceProvider, ResourceRegistry
from .themes import DEFAULT_THEME_NAME, card_config_for_theme, get_theme, list_themes

try:  # pragma: no cover - optional at import time for test environments
    from .painter import CardPainter
except ImportError:  # pragma: no cover
    CardPainter = None  # type: ignore[assignment,misc]

__all__ = [
    "BoxStyle",
    "CardConfig",
    "ContactEntry",
    "DEFAULT_SIZE",
    "DEFAULT_THEME_NAME",
    "FontFamily",
    "FontWeight",
    "IconKind",
    "ImageHandle",
    "LayoutNode",
    "NodeKind",
    "ProfileData",
    "ProfileStyle",
    "Rect",
    "ResourceNotFound",
    "ResourceProvider",
    "ResourceRegistry",
    "TextStyle",
    "ThemeConfig",
    "card_config_for_theme",
    "card_view",
    "contact_row",
    "contact_section",
    "distribute_weights",
    "get_theme",
    "list_themes",
    "profile_section",
    "render_card",
]

if CardPainter is not None:
    __all__.append("CardPainter")
