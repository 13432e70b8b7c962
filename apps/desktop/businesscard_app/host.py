"""Host wiring: loads resources and settings, then composes the card tree."""

from __future__ import annotations

from pathlib import Path

from PIL import Image, ImageDraw

from businesscard_core import AppConfig, get_logger
from businesscard_renderer import (
    CardConfig,
    ContactEntry,
    IconKind,
    LayoutNode,
    ProfileData,
    ProfileStyle,
    ResourceNotFound,
    ResourceRegistry,
    card_config_for_theme,
    render_card,
)

RESOURCE_DIR = Path(__file__).resolve().parent / "resources"

LOGO_KEY = "android_logo"
NAME_KEY = "name_text"
TITLE_KEY = "title_text"
LOGO_DESCRIPTION_KEY = "android_logo_image"

# (icon, label key, accessibility name key), in display order.
CONTACT_KEYS: tuple[tuple[IconKind, str, str], ...] = (
    (IconKind.PHONE, "mobile_no_text", "phone_icon_text"),
    (IconKind.EMAIL, "mail_address_text", "mail_icon_text"),
    (IconKind.HANDLE, "github_link_text", "github_icon_text"),
)

STRING_KEYS: tuple[str, ...] = (NAME_KEY, TITLE_KEY, LOGO_DESCRIPTION_KEY) + tuple(
    key for _, label_key, name_key in CONTACT_KEYS for key in (label_key, name_key)
)
IMAGE_KEYS: tuple[str, ...] = (LOGO_KEY,)


def generated_logo(size: int = 256) -> Image.Image:
    """Green robot head used when no logo file is supplied."""
    image = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)
    green = (60, 217, 130, 255)
    s = float(size)
    stroke = max(2, size // 40)
    draw.line([(s * 0.32, s * 0.30), (s * 0.24, s * 0.16)], fill=green, width=stroke)
    draw.line([(s * 0.68, s * 0.30), (s * 0.76, s * 0.16)], fill=green, width=stroke)
    draw.pieslice((s * 0.14, s * 0.26, s * 0.86, s * 0.98), start=180, end=360, fill=green)
    eye = s * 0.04
    for cx in (s * 0.36, s * 0.64):
        draw.ellipse((cx - eye, s * 0.50 - eye, cx + eye, s * 0.50 + eye), fill=(255, 255, 255, 255))
    draw.rounded_rectangle((s * 0.14, s * 0.66, s * 0.86, s * 0.72), radius=max(1, size // 64), fill=green)
    return image


def default_resources() -> ResourceRegistry:
    registry = ResourceRegistry.from_directory(RESOURCE_DIR)
    registry.register_image(LOGO_KEY, generated_logo())
    return registry


def load_resources(directory: Path | None = None) -> ResourceRegistry:
    """Bundled resources, overridden key by key by ``directory`` when given."""
    registry = default_resources()
    if directory is not None:
        if not directory.is_dir():
            raise FileNotFoundError(f"Resource directory not found: {directory}")
        registry.update(ResourceRegistry.from_directory(directory))
        get_logger("host").info("resource overrides loaded from %s", directory, extra={"event": "resources_loaded"})
    return registry


def card_config_from_settings(cfg: AppConfig) -> CardConfig:
    return card_config_for_theme(
        cfg.card.theme,
        section_weights=(cfg.card.profile_weight, cfg.card.contact_weight),
        profile_style=ProfileStyle(cfg.card.profile_style),
    )


def build_card_inputs(
    resources: ResourceRegistry, cfg: AppConfig
) -> tuple[ProfileData, CardConfig, list[ContactEntry] | None]:
    profile = ProfileData(
        image_key=LOGO_KEY,
        name=resources.resolve_string(NAME_KEY),
        title=resources.resolve_string(TITLE_KEY),
        image_description=resources.resolve_string(LOGO_DESCRIPTION_KEY),
    )
    contacts = None
    if cfg.card.show_contacts:
        contacts = [
            ContactEntry(
                icon=icon,
                label=resources.resolve_string(label_key),
                accessibility_name=resources.resolve_string(name_key),
            )
            for icon, label_key, name_key in CONTACT_KEYS
        ]
    return profile, card_config_from_settings(cfg), contacts


def compose(cfg: AppConfig, resources: ResourceRegistry) -> LayoutNode:
    profile, config, contacts = build_card_inputs(resources, cfg)
    return render_card(
        profile,
        config,
        contacts,
        resources=resources,
        size=(cfg.display.width, cfg.display.height),
    )


def check_resources(resources: ResourceRegistry) -> dict[str, bool]:
    status: dict[str, bool] = {}
    for key in STRING_KEYS:
        try:
            resources.resolve_string(key)
            status[f"string:{key}"] = True
        except ResourceNotFound:
            status[f"string:{key}"] = False
    for key in IMAGE_KEYS:
        try:
            resources.resolve_image(key)
            status[f"image:{key}"] = True
        except ResourceNotFound:
            status[f"image:{key}"] = False
    return status
