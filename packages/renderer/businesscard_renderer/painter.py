"""Rasterizes card layout trees with Pillow."""

from __future__ import annotations

import base64
from io import BytesIO
from pathlib import Path

from PIL import Image, ImageColor, ImageDraw, ImageFont, ImageOps

from .models import BoxStyle, FontFamily, FontWeight, IconKind, LayoutNode, NodeKind, Rect, TextStyle

_FONT_CANDIDATES: dict[tuple[FontFamily, FontWeight], tuple[str, ...]] = {
    (FontFamily.SERIF, FontWeight.NORMAL): (
        "DejaVuSerif.ttf",
        "LiberationSerif-Regular.ttf",
        "Times New Roman.ttf",
        "times.ttf",
    ),
    (FontFamily.SERIF, FontWeight.SEMIBOLD): (
        "DejaVuSerif-Bold.ttf",
        "LiberationSerif-Bold.ttf",
        "Times New Roman Bold.ttf",
        "timesbd.ttf",
    ),
    (FontFamily.SANS_SERIF, FontWeight.NORMAL): (
        "DejaVuSans.ttf",
        "LiberationSans-Regular.ttf",
        "Arial.ttf",
        "arial.ttf",
    ),
    (FontFamily.SANS_SERIF, FontWeight.SEMIBOLD): (
        "DejaVuSans-Bold.ttf",
        "LiberationSans-Bold.ttf",
        "Arial Bold.ttf",
        "arialbd.ttf",
    ),
}


def _rgba(color: str) -> tuple[int, int, int, int]:
    return ImageColor.getcolor(color, "RGBA")  # type: ignore[return-value]


class CardPainter:
    """Paints a LayoutNode tree onto an RGBA canvas, one point = ``scale`` px."""

    def __init__(self, scale: float = 1.0) -> None:
        if scale <= 0:
            raise ValueError("scale must be positive")
        self.scale = scale
        self._fonts: dict[tuple[FontFamily, FontWeight, int], ImageFont.ImageFont | ImageFont.FreeTypeFont] = {}

    def paint(self, root: LayoutNode) -> Image.Image:
        size = (max(1, self._px(root.frame.right)), max(1, self._px(root.frame.bottom)))
        image = Image.new("RGBA", size, (0, 0, 0, 0))
        self._paint_node(image, root)
        return image

    def save_png(self, root: LayoutNode, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        self.paint(root).save(path, format="PNG")
        return path

    def preview_data_url(self, root: LayoutNode) -> str:
        buf = BytesIO()
        self.paint(root).save(buf, format="PNG")
        b64 = base64.b64encode(buf.getvalue()).decode("ascii")
        return f"data:image/png;base64,{b64}"

    def _px(self, value: float) -> int:
        return int(round(value * self.scale))

    def _bounds(self, rect: Rect) -> tuple[int, int, int, int]:
        x0, y0 = self._px(rect.x), self._px(rect.y)
        return (x0, y0, max(x0, self._px(rect.right) - 1), max(y0, self._px(rect.bottom) - 1))

    def _font(self, style: TextStyle):
        size = max(1, self._px(style.size_pt))
        key = (style.font_family, style.weight, size)
        if key not in self._fonts:
            self._fonts[key] = self._load_font(key[0], key[1], size)
        return self._fonts[key]

    @staticmethod
    def _load_font(family: FontFamily, weight: FontWeight, size: int):
        for name in _FONT_CANDIDATES[(family, weight)]:
            try:
                return ImageFont.truetype(name, size)
            except OSError:
                continue
        return ImageFont.load_default(size=size)

    def _paint_node(self, image: Image.Image, node: LayoutNode) -> None:
        if node.kind == NodeKind.IMAGE:
            self._paint_image(image, node)
        elif node.box is not None:
            self._paint_box(image, node.frame.inset(node.box.inset), node.box)

        if node.kind == NodeKind.TEXT:
            self._paint_text(image, node)
        elif node.kind == NodeKind.ICON:
            self._paint_icon(image, node)

        for child in node.children:
            self._paint_node(image, child)

    def _paint_box(self, image: Image.Image, rect: Rect, box: BoxStyle, fill: bool = True) -> None:
        if rect.width <= 0 or rect.height <= 0:
            return
        layer = Image.new("RGBA", image.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        fill_color = _rgba(box.fill) if (fill and box.fill) else None
        outline = _rgba(box.border_color) if (box.border_color and box.border_width > 0) else None
        width = max(1, self._px(box.border_width)) if outline else 0
        radius = self._px(box.corner_radius)
        if radius > 0:
            draw.rounded_rectangle(self._bounds(rect), radius=radius, fill=fill_color, outline=outline, width=width)
        else:
            draw.rectangle(self._bounds(rect), fill=fill_color, outline=outline, width=width)
        image.alpha_composite(layer)

    def _paint_image(self, image: Image.Image, node: LayoutNode) -> None:
        handle = node.image
        if handle is not None and handle.source is not None:
            source = handle.source
            target = (max(1, self._px(node.frame.width)), max(1, self._px(node.frame.height)))
            if isinstance(source, Image.Image):
                picture = ImageOps.contain(source.convert("RGBA"), target)
            else:
                with Image.open(source) as opened:
                    picture = ImageOps.contain(opened.convert("RGBA"), target)
            x = self._px(node.frame.x) + (target[0] - picture.width) // 2
            y = self._px(node.frame.y) + (target[1] - picture.height) // 2
            layer = Image.new("RGBA", image.size, (0, 0, 0, 0))
            layer.paste(picture, (x, y))
            image.alpha_composite(layer)
        if node.box is not None:
            self._paint_box(image, node.frame.inset(node.box.inset), node.box, fill=False)

    def _paint_text(self, image: Image.Image, node: LayoutNode) -> None:
        if not node.text or node.text_style is None:
            return
        layer = Image.new("RGBA", image.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        font = self._font(node.text_style)
        mid_y = self._px(node.frame.y + node.frame.height / 2)
        if node.align == "center":
            draw.text((self._px(node.frame.x + node.frame.width / 2), mid_y), node.text, font=font, fill=_rgba(node.text_style.color), anchor="mm")
        else:
            draw.text((self._px(node.frame.x), mid_y), node.text, font=font, fill=_rgba(node.text_style.color), anchor="lm")
        image.alpha_composite(layer)

    def _paint_icon(self, image: Image.Image, node: LayoutNode) -> None:
        layer = Image.new("RGBA", image.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        tint = _rgba(node.tint or "#FFFFFF")
        x0, y0, x1, y1 = self._bounds(node.frame)
        w = x1 - x0
        h = y1 - y0
        stroke = max(1, self._px(2))

        if node.icon == IconKind.PHONE:
            body = (x0 + w * 0.25, y0 + h * 0.08, x1 - w * 0.25, y1 - h * 0.08)
            draw.rounded_rectangle(body, radius=max(1, int(w * 0.12)), outline=tint, width=stroke)
            cx = (x0 + x1) / 2
            r = max(1.0, w * 0.06)
            draw.ellipse((cx - r, y1 - h * 0.24 - r, cx + r, y1 - h * 0.24 + r), fill=tint)
        elif node.icon == IconKind.EMAIL:
            env = (x0 + w * 0.08, y0 + h * 0.2, x1 - w * 0.08, y1 - h * 0.2)
            draw.rounded_rectangle(env, radius=max(1, int(w * 0.08)), outline=tint, width=stroke)
            draw.line([(env[0], env[1]), ((x0 + x1) / 2, (y0 + y1) / 2), (env[2], env[1])], fill=tint, width=stroke)
        elif node.icon == IconKind.HANDLE:
            cx = (x0 + x1) / 2
            r = w * 0.2
            head_y = y0 + h * 0.3
            draw.ellipse((cx - r, head_y - r, cx + r, head_y + r), fill=tint)
            draw.pieslice((x0 + w * 0.15, y0 + h * 0.58, x1 - w * 0.15, y1 + h * 0.42), start=180, end=360, fill=tint)
        image.alpha_composite(layer)
