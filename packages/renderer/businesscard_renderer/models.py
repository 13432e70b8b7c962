"""Typed card and layout models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Iterator


class FontWeight(str, Enum):
    NORMAL = "normal"
    SEMIBOLD = "semibold"


class FontFamily(str, Enum):
    SERIF = "serif"
    SANS_SERIF = "sans_serif"


class IconKind(str, Enum):
    PHONE = "phone"
    EMAIL = "email"
    HANDLE = "handle"


class ProfileStyle(str, Enum):
    CARD = "card"
    PLAIN = "plain"


class NodeKind(str, Enum):
    COLUMN = "column"
    ROW = "row"
    TEXT = "text"
    IMAGE = "image"
    ICON = "icon"


@dataclass(frozen=True)
class TextStyle:
    color: str
    size_pt: float
    weight: FontWeight = FontWeight.NORMAL
    font_family: FontFamily = FontFamily.SANS_SERIF

    def __post_init__(self) -> None:
        if self.size_pt <= 0:
            raise ValueError(f"Text size must be positive, got {self.size_pt}")


@dataclass(frozen=True)
class ContactEntry:
    icon: IconKind
    label: str
    accessibility_name: str = ""

    def __post_init__(self) -> None:
        if not self.label:
            raise ValueError("Contact label must not be empty")


@dataclass(frozen=True)
class ProfileData:
    image_key: str
    name: str
    title: str
    image_description: str = ""


@dataclass(frozen=True)
class CardConfig:
    """Card colors, borders and section weights.

    Colors are ``#RRGGBB`` or ``#RRGGBBAA`` strings. The defaults reproduce the
    shipped card: dark gray screen, translucent black sections with a gray
    2pt border and a green accent.
    """

    background_color: str = "#444444"
    card_background_color: str = "#00000080"
    corner_radius_pt: float = 10.0
    border_width_pt: float = 2.0
    section_weights: tuple[float, float] = (1.5, 0.75)
    border_color: str = "#888888"
    accent_color: str = "#3CD982"
    text_color: str = "#FFFFFF"
    image_border_color: str = "#FFFFFF"
    profile_style: ProfileStyle = ProfileStyle.CARD
    section_margin_pt: float = 32.0
    content_padding_pt: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "section_weights", tuple(float(w) for w in self.section_weights))
        object.__setattr__(self, "profile_style", ProfileStyle(self.profile_style))
        if len(self.section_weights) != 2:
            raise ValueError("section_weights must hold (profile, contact)")
        if any(w < 0 for w in self.section_weights):
            raise ValueError(f"Section weights must be >= 0, got {self.section_weights}")

    @property
    def profile_weight(self) -> float:
        return self.section_weights[0]

    @property
    def contact_weight(self) -> float:
        return self.section_weights[1]


@dataclass(frozen=True)
class ImageHandle:
    """Resolved image resource. Equality only considers the key."""

    key: str
    source: Path | Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def inset(self, left: float, top: float | None = None, right: float | None = None, bottom: float | None = None) -> Rect:
        top = left if top is None else top
        right = left if right is None else right
        bottom = top if bottom is None else bottom
        return Rect(
            x=self.x + left,
            y=self.y + top,
            width=max(0.0, self.width - left - right),
            height=max(0.0, self.height - top - bottom),
        )


@dataclass(frozen=True)
class BoxStyle:
    fill: str | None = None
    border_color: str | None = None
    border_width: float = 0.0
    corner_radius: float = 0.0
    inset: float = 0.0


@dataclass(frozen=True)
class LayoutNode:
    kind: NodeKind
    role: str
    frame: Rect
    box: BoxStyle | None = None
    text: str | None = None
    text_style: TextStyle | None = None
    image: ImageHandle | None = None
    icon: IconKind | None = None
    tint: str | None = None
    align: str | None = None
    description: str | None = None
    children: tuple[LayoutNode, ...] = ()

    def walk(self) -> Iterator[LayoutNode]:
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, role: str) -> list[LayoutNode]:
        return [node for node in self.walk() if node.role == role]

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "kind": self.kind.value,
            "role": self.role,
            "frame": [self.frame.x, self.frame.y, self.frame.width, self.frame.height],
        }
        if self.box is not None:
            payload["box"] = {
                "fill": self.box.fill,
                "border_color": self.box.border_color,
                "border_width": self.box.border_width,
                "corner_radius": self.box.corner_radius,
                "inset": self.box.inset,
            }
        if self.text is not None:
            payload["text"] = self.text
        if self.text_style is not None:
            payload["text_style"] = {
                "color": self.text_style.color,
                "size_pt": self.text_style.size_pt,
                "weight": self.text_style.weight.value,
                "font_family": self.text_style.font_family.value,
            }
        if self.image is not None:
            payload["image"] = self.image.key
        if self.icon is not None:
            payload["icon"] = self.icon.value
        if self.tint is not None:
            payload["tint"] = self.tint
        if self.align is not None:
            payload["align"] = self.align
        if self.description:
            payload["description"] = self.description
        if self.children:
            payload["children"] = [child.to_dict() for child in self.children]
        return payload


@dataclass(frozen=True)
class ThemeConfig:
    name: str
    background: str
    card_bg: str
    border: str
    accent: str
    text_primary: str
    image_border: str
