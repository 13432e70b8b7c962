import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "apps" / "desktop"))
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from businesscard_app.host import compose, default_resources
from businesscard_core import AppConfig, load_config, save_config
from businesscard_renderer import CardPainter


class RenderPipelineTests(unittest.TestCase):
    def test_settings_to_png(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            cfg = AppConfig()
            cfg.card.theme = "Midnight Ink"
            cfg.display.scale = 1.0
            save_config(cfg, path)

            loaded = load_config(path)
            root = compose(loaded, default_resources())
            out = CardPainter(scale=loaded.display.scale).save_png(root, Path(tmp) / "card.png")

            self.assertTrue(out.exists())
            self.assertEqual(root.box.fill, "#0A0F1D")
            profile, contacts = root.children
            self.assertAlmostEqual(profile.frame.height / root.frame.height, 2 / 3)
            self.assertAlmostEqual(contacts.frame.height / root.frame.height, 1 / 3)

    def test_variant_without_contacts(self):
        cfg = AppConfig()
        cfg.card.show_contacts = False
        cfg.card.profile_style = "plain"
        root = compose(cfg, default_resources())
        self.assertEqual([c.role for c in root.children], ["profile"])
        self.assertIsNone(root.children[0].box)
        self.assertEqual(root.children[0].frame.height, root.frame.height)


if __name__ == "__main__":
    unittest.main()
