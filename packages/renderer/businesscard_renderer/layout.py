"""Card composition: builds immutable layout trees with resolved geometry.

Every function here is pure. Sections receive the rectangle they may occupy
and return a LayoutNode whose frame is exactly that rectangle; children are
placed inside it. All units are points.
"""

from __future__ import annotations

import logging
from typing import Sequence

from .models import (
    BoxStyle,
    CardConfig,
    ContactEntry,
    FontFamily,
    FontWeight,
    ImageHandle,
    LayoutNode,
    NodeKind,
    ProfileData,
    ProfileStyle,
    Rect,
    TextStyle,
)
from .resources import ResourceProvider

logger = logging.getLogger(__name__)

DEFAULT_SIZE: tuple[int, int] = (412, 915)
LINE_HEIGHT_RATIO = 1.2
MAX_CONTACTS = 3

IMAGE_SIZE_PT = 250.0
IMAGE_BORDER_PT = 2.0
IMAGE_CORNER_PT = 16.0
NAME_SIZE_PT = 36.0
NAME_GAP_PT = 16.0
TITLE_SIZE_PT = 24.0
TITLE_GAP_PT = 8.0

ROW_INSET_PT = 28.0
ROW_SPACING_PT = 16.0
ROW_GAP_PT = 8.0
ICON_SIZE_PT = 24.0
CONTACT_TEXT_SIZE_PT = 16.0


def distribute_weights(total: float, weights: Sequence[float]) -> list[float]:
    """Split ``total`` proportionally to ``weights``.

    When every weight is zero the space is shared equally.
    """
    if not weights:
        return []
    weight_sum = float(sum(weights))
    if weight_sum <= 0:
        return [total / len(weights)] * len(weights)
    return [total * w / weight_sum for w in weights]


def text_height(style: TextStyle) -> float:
    return style.size_pt * LINE_HEIGHT_RATIO


def _stack_top(area: Rect, content_height: float) -> float:
    # Centered; content taller than the area is pinned to the top.
    return area.y + max(area.height - content_height, 0.0) / 2


def _section_box(config: CardConfig) -> BoxStyle:
    return BoxStyle(
        fill=config.card_background_color,
        border_color=config.border_color,
        border_width=config.border_width_pt,
        corner_radius=config.corner_radius_pt,
        inset=config.section_margin_pt,
    )


def _label_style(config: CardConfig) -> TextStyle:
    return TextStyle(
        color=config.text_color,
        size_pt=CONTACT_TEXT_SIZE_PT,
        weight=FontWeight.SEMIBOLD,
        font_family=FontFamily.SANS_SERIF,
    )


def contact_row_height(config: CardConfig) -> float:
    return ROW_GAP_PT + max(ICON_SIZE_PT, text_height(_label_style(config)))


def contact_row(entry: ContactEntry, config: CardConfig, frame: Rect) -> LayoutNode:
    """Icon glyph plus label, vertically centered below the row's top gap."""
    label_style = _label_style(config)
    label_h = text_height(label_style)
    content = frame.inset(0.0, ROW_GAP_PT, 0.0, 0.0)

    icon_x = frame.x + ROW_INSET_PT
    icon = LayoutNode(
        kind=NodeKind.ICON,
        role="contact_icon",
        frame=Rect(icon_x, content.y + (content.height - ICON_SIZE_PT) / 2, ICON_SIZE_PT, ICON_SIZE_PT),
        icon=entry.icon,
        tint=config.accent_color,
        description=entry.accessibility_name,
    )

    label_x = icon_x + ICON_SIZE_PT + ROW_SPACING_PT
    label = LayoutNode(
        kind=NodeKind.TEXT,
        role="contact_label",
        frame=Rect(label_x, content.y + (content.height - label_h) / 2, max(frame.right - label_x, 0.0), label_h),
        text=entry.label,
        text_style=label_style,
        align="start",
    )
    return LayoutNode(kind=NodeKind.ROW, role="contact_row", frame=frame, children=(icon, label))


def contact_section(entries: Sequence[ContactEntry], config: CardConfig, frame: Rect) -> LayoutNode:
    entries = tuple(entries)
    if len(entries) > MAX_CONTACTS:
        raise ValueError(f"At most {MAX_CONTACTS} contact entries are supported, got {len(entries)}")

    box = _section_box(config)
    inner = frame.inset(box.inset + box.border_width)
    row_h = contact_row_height(config)
    top = _stack_top(inner, row_h * len(entries))

    rows = tuple(
        contact_row(entry, config, Rect(inner.x, top + index * row_h, inner.width, row_h))
        for index, entry in enumerate(entries)
    )
    return LayoutNode(kind=NodeKind.COLUMN, role="contacts", frame=frame, box=box, children=rows)


def profile_section(profile: ProfileData, image: ImageHandle, config: CardConfig, frame: Rect) -> LayoutNode:
    if config.profile_style == ProfileStyle.CARD:
        box = _section_box(config)
        inner = frame.inset(box.inset + box.border_width)
    else:
        box = None
        inner = frame.inset(config.section_margin_pt)

    name_style = TextStyle(
        color=config.text_color,
        size_pt=NAME_SIZE_PT,
        weight=FontWeight.NORMAL,
        font_family=FontFamily.SERIF,
    )
    title_style = TextStyle(
        color=config.accent_color,
        size_pt=TITLE_SIZE_PT,
        weight=FontWeight.SEMIBOLD,
        font_family=FontFamily.SERIF,
    )
    name_h = text_height(name_style)
    title_h = text_height(title_style)

    y = _stack_top(inner, IMAGE_SIZE_PT + NAME_GAP_PT + name_h + TITLE_GAP_PT + title_h)
    image_node = LayoutNode(
        kind=NodeKind.IMAGE,
        role="profile_image",
        frame=Rect(inner.x + (inner.width - IMAGE_SIZE_PT) / 2, y, IMAGE_SIZE_PT, IMAGE_SIZE_PT),
        box=BoxStyle(
            border_color=config.image_border_color,
            border_width=IMAGE_BORDER_PT,
            corner_radius=IMAGE_CORNER_PT,
        ),
        image=image,
        description=profile.image_description,
    )

    y += IMAGE_SIZE_PT + NAME_GAP_PT
    name_node = LayoutNode(
        kind=NodeKind.TEXT,
        role="name",
        frame=Rect(inner.x, y, inner.width, name_h),
        text=profile.name,
        text_style=name_style,
        align="center",
    )

    y += name_h + TITLE_GAP_PT
    title_node = LayoutNode(
        kind=NodeKind.TEXT,
        role="title",
        frame=Rect(inner.x, y, inner.width, title_h),
        text=profile.title,
        text_style=title_style,
        align="center",
    )
    return LayoutNode(
        kind=NodeKind.COLUMN,
        role="profile",
        frame=frame,
        box=box,
        children=(image_node, name_node, title_node),
    )


def card_view(
    profile: ProfileData,
    image: ImageHandle,
    config: CardConfig,
    contacts: Sequence[ContactEntry],
    frame: Rect,
) -> LayoutNode:
    """Full-screen column: profile on top, contacts below when present."""
    content = frame.inset(config.content_padding_pt)
    weights = [config.profile_weight]
    if contacts:
        weights.append(config.contact_weight)
    heights = distribute_weights(content.height, weights)

    profile_slot = Rect(content.x, content.y, content.width, heights[0])
    children = [profile_section(profile, image, config, profile_slot)]
    if contacts:
        contact_slot = Rect(content.x, profile_slot.bottom, content.width, heights[1])
        children.append(contact_section(contacts, config, contact_slot))

    return LayoutNode(
        kind=NodeKind.COLUMN,
        role="card",
        frame=frame,
        box=BoxStyle(fill=config.background_color),
        children=tuple(children),
    )


def render_card(
    data: ProfileData,
    config: CardConfig,
    contacts: Sequence[ContactEntry] | None = None,
    *,
    resources: ResourceProvider,
    size: tuple[float, float] = DEFAULT_SIZE,
) -> LayoutNode:
    """Compose the whole card for a screen of ``size`` points.

    Raises ResourceNotFound before any node is built if the profile image is
    not registered.
    """
    width, height = size
    if width <= 0 or height <= 0:
        raise ValueError(f"Card size must be positive, got {size}")

    image = resources.resolve_image(data.image_key)
    entries = tuple(contacts) if contacts else ()
    root = card_view(data, image, config, entries, Rect(0.0, 0.0, float(width), float(height)))
    logger.debug(
        "rendered card %sx%s with %d contact rows",
        width,
        height,
        len(entries),
        extra={"event": "card_rendered"},
    )
    return root
