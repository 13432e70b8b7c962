"""Persistent app settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from businesscard_renderer.themes import DEFAULT_THEME_NAME as DEFAULT_THEME


CONFIG_VERSION = 2

PROFILE_STYLES = ("card", "plain")


@dataclass
class CardSettings:
    theme: str = DEFAULT_THEME
    show_contacts: bool = True
    profile_style: str = "card"
    profile_weight: float = 1.5
    contact_weight: float = 0.75


@dataclass
class DisplaySettings:
    width: int = 412
    height: int = 915
    scale: float = 2.0
    fullscreen: bool = True


@dataclass
class ResourceSettings:
    directory: str | None = None


@dataclass
class DiagnosticsSettings:
    keep_log_files: int = 7
    debug: bool = False


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    card: CardSettings = field(default_factory=CardSettings)
    display: DisplaySettings = field(default_factory=DisplaySettings)
    resources: ResourceSettings = field(default_factory=ResourceSettings)
    diagnostics: DiagnosticsSettings = field(default_factory=DiagnosticsSettings)


DEFAULT_CONFIG = AppConfig()


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "BusinessCard"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "BusinessCard"
    return Path.home() / ".config" / "businesscard"


def config_path() -> Path:
    return config_root() / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    if not isinstance(raw, dict):
        return defaults
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_card(cfg: AppConfig, themes: list[str] | None = None) -> None:
    if not isinstance(cfg.card.theme, str) or not cfg.card.theme:
        cfg.card.theme = DEFAULT_THEME
    if themes is not None and cfg.card.theme not in themes:
        cfg.card.theme = DEFAULT_THEME
    if cfg.card.profile_style not in PROFILE_STYLES:
        cfg.card.profile_style = "card"
    cfg.card.show_contacts = bool(cfg.card.show_contacts)
    cfg.card.profile_weight = float(max(0.0, float(cfg.card.profile_weight)))
    cfg.card.contact_weight = float(max(0.0, float(cfg.card.contact_weight)))


def _normalize_display(cfg: AppConfig) -> None:
    cfg.display.width = max(120, min(4096, int(cfg.display.width)))
    cfg.display.height = max(120, min(4096, int(cfg.display.height)))
    cfg.display.scale = float(max(0.25, min(4.0, float(cfg.display.scale))))
    cfg.display.fullscreen = bool(cfg.display.fullscreen)


def _normalize_diagnostics(cfg: AppConfig) -> None:
    cfg.diagnostics.keep_log_files = max(2, int(cfg.diagnostics.keep_log_files))


def _migrate(raw: dict[str, Any]) -> dict[str, Any]:
    version = int(raw.get("config_version", 1))
    data = dict(raw)

    if version < 2:
        # v1 kept weights as a [profile, contact] pair and had no display section.
        card = dict(data.get("card", {}) or {})
        weights = card.pop("weights", None)
        if isinstance(weights, list) and len(weights) == 2:
            card.setdefault("profile_weight", weights[0])
            card.setdefault("contact_weight", weights[1])
        data["card"] = card
        data.setdefault("display", {})
        data["config_version"] = 2

    return data


def normalize_config(cfg: AppConfig, themes: list[str] | None = None) -> AppConfig:
    """Clamp settings into range; also used after command-line overrides."""
    _normalize_card(cfg, themes)
    _normalize_display(cfg)
    _normalize_diagnostics(cfg)
    return cfg


def load_config(path: Path | None = None, themes: list[str] | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return AppConfig()
    if not isinstance(raw, dict):
        return AppConfig()

    data = _migrate(raw)
    cfg = AppConfig(
        config_version=int(data.get("config_version", CONFIG_VERSION)),
        card=_merge(CardSettings, data.get("card", {})),
        display=_merge(DisplaySettings, data.get("display", {})),
        resources=_merge(ResourceSettings, data.get("resources", {})),
        diagnostics=_merge(DiagnosticsSettings, data.get("diagnostics", {})),
    )

    return normalize_config(cfg, themes)


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
