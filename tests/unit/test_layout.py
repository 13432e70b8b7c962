import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from businesscard_renderer.layout import (
    IMAGE_SIZE_PT,
    contact_row,
    contact_row_height,
    contact_section,
    distribute_weights,
    profile_section,
    render_card,
)
from businesscard_renderer.models import (
    CardConfig,
    ContactEntry,
    FontFamily,
    FontWeight,
    IconKind,
    ImageHandle,
    NodeKind,
    ProfileData,
    ProfileStyle,
    Rect,
)
from businesscard_renderer.resources import ResourceNotFound, ResourceRegistry

JANE = ProfileData(image_key="avatar", name="Jane Doe", title="Engineer")
CONTACTS = [
    ContactEntry(IconKind.PHONE, "+1-555-0100", "Phone"),
    ContactEntry(IconKind.EMAIL, "jane@x.com", "Email"),
    ContactEntry(IconKind.HANDLE, "@janedoe", "Handle"),
]


def _registry() -> ResourceRegistry:
    registry = ResourceRegistry()
    registry.register_image("avatar", Path("avatar.png"))
    return registry


class DistributeWeightsTests(unittest.TestCase):
    def test_proportional_split(self):
        self.assertEqual(distribute_weights(900, [1.5, 0.75]), [600.0, 300.0])

    def test_single_weight_takes_everything(self):
        self.assertEqual(distribute_weights(500, [0.3]), [500.0])

    def test_zero_weights_share_equally(self):
        self.assertEqual(distribute_weights(400, [0, 0]), [200.0, 200.0])

    def test_empty(self):
        self.assertEqual(distribute_weights(400, []), [])


class ContactRowTests(unittest.TestCase):
    def test_icon_and_label_geometry(self):
        config = CardConfig()
        frame = Rect(10, 20, 300, contact_row_height(config))
        row = contact_row(CONTACTS[0], config, frame)

        self.assertEqual(row.kind, NodeKind.ROW)
        self.assertEqual(row.frame, frame)
        icon, label = row.children
        self.assertEqual(icon.icon, IconKind.PHONE)
        self.assertEqual(icon.tint, config.accent_color)
        self.assertEqual(icon.description, "Phone")
        self.assertEqual(icon.frame.x, 38)
        self.assertEqual(label.frame.x, 38 + 24 + 16)
        self.assertEqual(label.frame.right, frame.right)
        self.assertAlmostEqual(icon.frame.y + icon.frame.height / 2, label.frame.y + label.frame.height / 2)
        self.assertEqual(label.text, "+1-555-0100")
        self.assertEqual(label.text_style.weight, FontWeight.SEMIBOLD)
        self.assertEqual(label.text_style.font_family, FontFamily.SANS_SERIF)


class ContactSectionTests(unittest.TestCase):
    def test_row_count_and_order_preserved(self):
        config = CardConfig()
        for count in range(4):
            entries = CONTACTS[:count]
            section = contact_section(entries, config, Rect(0, 0, 400, 300))
            rows = section.find("contact_row")
            self.assertEqual(len(rows), count)
            self.assertEqual([r.children[1].text for r in rows], [e.label for e in entries])

    def test_input_order_is_not_sorted(self):
        reversed_entries = list(reversed(CONTACTS))
        section = contact_section(reversed_entries, CardConfig(), Rect(0, 0, 400, 300))
        icons = [node.icon for node in section.find("contact_icon")]
        self.assertEqual(icons, [IconKind.HANDLE, IconKind.EMAIL, IconKind.PHONE])

    def test_rows_stack_top_to_bottom(self):
        section = contact_section(CONTACTS, CardConfig(), Rect(0, 0, 400, 300))
        tops = [row.frame.y for row in section.children]
        self.assertEqual(tops, sorted(tops))

    def test_empty_section_is_still_styled(self):
        config = CardConfig()
        section = contact_section([], config, Rect(0, 0, 400, 300))
        self.assertEqual(section.children, ())
        self.assertEqual(section.box.fill, config.card_background_color)
        self.assertEqual(section.box.border_width, config.border_width_pt)
        self.assertEqual(section.box.corner_radius, config.corner_radius_pt)

    def test_more_than_three_entries_rejected(self):
        with self.assertRaises(ValueError):
            contact_section(CONTACTS + [CONTACTS[0]], CardConfig(), Rect(0, 0, 400, 300))


class ProfileSectionTests(unittest.TestCase):
    def test_card_style(self):
        config = CardConfig()
        frame = Rect(0, 0, 412, 610)
        section = profile_section(JANE, ImageHandle("avatar"), config, frame)

        self.assertEqual(section.frame, frame)
        self.assertIsNotNone(section.box)
        image, name, title = section.children
        self.assertEqual(image.frame.width, IMAGE_SIZE_PT)
        self.assertAlmostEqual(image.frame.x + image.frame.width / 2, 206)
        self.assertEqual(image.box.border_color, config.image_border_color)
        self.assertEqual(name.text, "Jane Doe")
        self.assertEqual(name.text_style.font_family, FontFamily.SERIF)
        self.assertEqual(name.text_style.weight, FontWeight.NORMAL)
        self.assertEqual(title.text, "Engineer")
        self.assertEqual(title.text_style.color, config.accent_color)
        self.assertEqual(title.text_style.weight, FontWeight.SEMIBOLD)
        self.assertLess(image.frame.bottom, name.frame.y)
        self.assertLess(name.frame.bottom, title.frame.y)

    def test_plain_style_has_no_box(self):
        config = CardConfig(profile_style=ProfileStyle.PLAIN)
        section = profile_section(JANE, ImageHandle("avatar"), config, Rect(0, 0, 412, 915))
        self.assertIsNone(section.box)
        self.assertEqual(len(section.children), 3)


class RenderCardTests(unittest.TestCase):
    def test_profile_only_fills_screen(self):
        root = render_card(JANE, CardConfig(), [], resources=_registry(), size=(412, 915))

        self.assertEqual(root.frame, Rect(0, 0, 412, 915))
        self.assertEqual(root.box.fill, CardConfig().background_color)
        self.assertEqual([c.role for c in root.children], ["profile"])
        self.assertEqual(root.children[0].frame.height, 915)

    def test_contacts_none_matches_empty(self):
        registry = _registry()
        self.assertEqual(
            render_card(JANE, CardConfig(), None, resources=registry),
            render_card(JANE, CardConfig(), [], resources=registry),
        )

    def test_weighted_sections(self):
        root = render_card(JANE, CardConfig(section_weights=(1.5, 0.75)), CONTACTS, resources=_registry(), size=(412, 915))

        profile, contacts = root.children
        self.assertAlmostEqual(profile.frame.height / root.frame.height, 2 / 3)
        self.assertAlmostEqual(contacts.frame.height / root.frame.height, 1 / 3)
        self.assertEqual(contacts.frame.y, profile.frame.bottom)
        icons = [node.icon for node in contacts.find("contact_icon")]
        self.assertEqual(icons, [IconKind.PHONE, IconKind.EMAIL, IconKind.HANDLE])

    def test_weight_law_for_several_ratios(self):
        for weights in [(1, 1), (3, 1), (0.2, 0.8), (2, 0)]:
            root = render_card(JANE, CardConfig(section_weights=weights), CONTACTS, resources=_registry(), size=(400, 1000))
            share = root.children[0].frame.height / 1000
            self.assertAlmostEqual(share, weights[0] / sum(weights))

    def test_idempotent(self):
        registry = _registry()
        first = render_card(JANE, CardConfig(), CONTACTS, resources=registry)
        second = render_card(JANE, CardConfig(), CONTACTS, resources=registry)
        self.assertEqual(first, second)

    def test_unregistered_image_raises(self):
        data = ProfileData(image_key="missing", name="Jane Doe", title="Engineer")
        with self.assertRaises(ResourceNotFound) as ctx:
            render_card(data, CardConfig(), CONTACTS, resources=_registry())
        self.assertEqual(ctx.exception.key, "missing")
        self.assertEqual(ctx.exception.kind, "image")

    def test_content_padding_shrinks_sections(self):
        root = render_card(JANE, CardConfig(content_padding_pt=10), [], resources=_registry(), size=(400, 800))
        self.assertEqual(root.frame, Rect(0, 0, 400, 800))
        self.assertEqual(root.children[0].frame, Rect(10, 10, 380, 780))

    def test_rejects_empty_size(self):
        with self.assertRaises(ValueError):
            render_card(JANE, CardConfig(), [], resources=_registry(), size=(0, 915))


if __name__ == "__main__":
    unittest.main()
