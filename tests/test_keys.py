import unittest

from raid_squares.input.keys import (
    format_modifier_for_display,
    is_modifier_token,
    normalize_key_token,
)


class KeyTokenTests(unittest.TestCase):
    def test_modifier_variants_collapse(self) -> None:
        for name in ("ctrl", "Left Ctrl", "right ctrl", "ctrl_l", "CONTROL"):
            self.assertEqual(normalize_key_token(name), "ctrl")
        self.assertEqual(normalize_key_token("right shift"), "shift")
        self.assertEqual(normalize_key_token("alt gr"), "alt")

    def test_plain_keys_are_lowercased_and_spaced(self) -> None:
        self.assertEqual(normalize_key_token("  Page_Up "), "page up")
        self.assertEqual(normalize_key_token("F"), "f")
        self.assertEqual(normalize_key_token(""), "")
        self.assertEqual(normalize_key_token(None), "")

    def test_is_modifier(self) -> None:
        self.assertTrue(is_modifier_token("Right Alt"))
        self.assertFalse(is_modifier_token("space"))

    def test_display(self) -> None:
        self.assertEqual(format_modifier_for_display("left ctrl"), "Ctrl")
        self.assertEqual(format_modifier_for_display("shift"), "Shift")


if __name__ == "__main__":
    unittest.main()
