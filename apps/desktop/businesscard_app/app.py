"""Desktop host window: paints the card and mounts it full screen."""

from __future__ import annotations

import os
import sys
from importlib import metadata

from PIL.ImageQt import ImageQt
from PySide6.QtCore import Qt
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import QApplication, QLabel

from businesscard_core import AppConfig
from businesscard_core.logging_setup import configure_logging, get_logger, install_crash_hooks
from businesscard_renderer import CardPainter, ResourceRegistry

from .host import compose


def _app_version() -> str:
    try:
        return metadata.version("businesscard")
    except metadata.PackageNotFoundError:
        return "0.1.0"


class CardWindow(QLabel):
    """Borderless label holding the painted card; Esc or Q closes it."""

    def __init__(self, pixmap: QPixmap) -> None:
        super().__init__()
        self.setWindowTitle(f"Business Card {_app_version()}")
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setStyleSheet("background-color: black;")
        self.setPixmap(pixmap)

    def keyPressEvent(self, event) -> None:  # noqa: N802 - Qt override
        if event.key() in (Qt.Key.Key_Escape, Qt.Key.Key_Q):
            self.close()
            return
        super().keyPressEvent(event)


def run_gui(cfg: AppConfig, resources: ResourceRegistry) -> int:
    configure_logging(keep_files=cfg.diagnostics.keep_log_files, debug=cfg.diagnostics.debug)
    install_crash_hooks()
    logger = get_logger("app")

    root = compose(cfg, resources)
    card = CardPainter(scale=cfg.display.scale).paint(root)

    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")
    QApplication.setHighDpiScaleFactorRoundingPolicy(Qt.HighDpiScaleFactorRoundingPolicy.PassThrough)

    app = QApplication(sys.argv)
    app.setApplicationName("BusinessCard")

    pixmap = QPixmap.fromImage(ImageQt(card))
    pixmap.setDevicePixelRatio(cfg.display.scale)
    window = CardWindow(pixmap)
    if cfg.display.fullscreen:
        window.showFullScreen()
    else:
        window.resize(cfg.display.width, cfg.display.height)
        window.show()

    logger.info("card mounted", extra={"event": "card_mounted"})
    exit_code = app.exec()
    logger.info("app shutdown", extra={"event": "shutdown", "exit_code": int(exit_code)})
    return int(exit_code)
