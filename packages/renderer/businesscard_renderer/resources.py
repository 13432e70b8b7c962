"""String and image resource lookup."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

from .models import ImageHandle

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg", ".webp", ".bmp", ".gif")


class ResourceNotFound(LookupError):
    def __init__(self, kind: str, key: str) -> None:
        super().__init__(f"{kind} resource not found: {key}")
        self.kind = kind
        self.key = key


class ResourceProvider(Protocol):
    def resolve_string(self, key: str) -> str: ...

    def resolve_image(self, key: str) -> ImageHandle: ...


class ResourceRegistry:
    """In-memory key to string/image registry.

    Images are registered either as a filesystem path or as an already
    decoded Pillow image; both are wrapped in an ImageHandle on lookup.
    """

    def __init__(self) -> None:
        self._strings: dict[str, str] = {}
        self._images: dict[str, ImageHandle] = {}

    def register_string(self, key: str, value: str) -> None:
        self._strings[key] = value

    def register_image(self, key: str, source: Path | Any) -> None:
        self._images[key] = ImageHandle(key=key, source=source)

    def update(self, other: ResourceRegistry) -> None:
        self._strings.update(other._strings)
        self._images.update(other._images)

    def resolve_string(self, key: str) -> str:
        try:
            return self._strings[key]
        except KeyError:
            raise ResourceNotFound("string", key) from None

    def resolve_image(self, key: str) -> ImageHandle:
        try:
            return self._images[key]
        except KeyError:
            raise ResourceNotFound("image", key) from None

    def keys(self) -> dict[str, list[str]]:
        return {"strings": sorted(self._strings), "images": sorted(self._images)}

    @classmethod
    def from_directory(cls, root: Path) -> ResourceRegistry:
        """Load ``strings.json`` and ``drawable/*`` from a resource directory."""
        registry = cls()
        strings_path = root / "strings.json"
        if strings_path.exists():
            raw = json.loads(strings_path.read_text(encoding="utf-8"))
            if not isinstance(raw, dict):
                raise ValueError(f"{strings_path} must contain a JSON object")
            for key, value in raw.items():
                registry.register_string(str(key), str(value))

        drawable = root / "drawable"
        if drawable.is_dir():
            for path in sorted(drawable.iterdir()):
                if path.is_file() and path.suffix.lower() in IMAGE_SUFFIXES:
                    registry.register_image(path.stem, path)

        counts = registry.keys()
        logger.debug(
            "loaded resources from %s: %d strings, %d images",
            root,
            len(counts["strings"]),
            len(counts["images"]),
        )
        return registry
