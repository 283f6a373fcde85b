"""Tests for hotkey text, tray text and display naming helpers."""

import pytest

from mouseguard.core.display import (
    Rect,
    ScreenInfo,
    compose_display_name,
    device_name_contains_instance_token,
    friendly_name_from_codes,
    primary_screen,
)
from mouseguard.core.hotkey import (
    DEFAULT_HOTKEY,
    MOD_ALT,
    MOD_CONTROL,
    MOD_SHIFT,
    Hotkey,
    hotkey_to_string,
    modifiers_and_key_code,
    parse_hotkey,
    try_parse_hotkey,
)
from mouseguard.core.tray_text import format_tray_text


# ---------------------------------------------------------------------------
# Hotkeys
# ---------------------------------------------------------------------------

class TestHotkey:
    def test_to_string_control_alt_b(self):
        assert hotkey_to_string(Hotkey("B", control=True, alt=True)) == "Control,Alt,B"

    def test_to_string_modifier_order(self):
        hotkey = Hotkey("F5", control=True, alt=True, shift=True)
        assert str(hotkey) == "Control,Alt,Shift,F5"

    def test_to_string_key_only(self):
        assert hotkey_to_string(Hotkey("Space")) == "Space"

    def test_parse_round_trip(self):
        assert try_parse_hotkey("Control,Alt,B") == DEFAULT_HOTKEY

    def test_parse_case_insensitive(self):
        assert try_parse_hotkey("control,alt,b") == Hotkey("B", control=True, alt=True)

    def test_parse_whitespace(self):
        assert try_parse_hotkey(" Shift , pageup ") == Hotkey("PageUp", shift=True)

    def test_parse_ignores_unknown_tokens(self):
        assert try_parse_hotkey("Control,Bogus,D1") == Hotkey("D1", control=True)

    @pytest.mark.parametrize("text", [None, "", "   ", "notakey", "Control,Alt"])
    def test_parse_invalid(self, text):
        assert try_parse_hotkey(text) is None

    def test_strict_parse_raises(self):
        with pytest.raises(ValueError):
            parse_hotkey("notakey")

    def test_modifiers_and_key_code(self):
        mod, vk = modifiers_and_key_code(DEFAULT_HOTKEY)
        assert mod == MOD_CONTROL | MOD_ALT
        assert vk == 0x42

    def test_shift_function_key_code(self):
        mod, vk = modifiers_and_key_code(Hotkey("F1", shift=True))
        assert mod == MOD_SHIFT
        assert vk == 0x70


# ---------------------------------------------------------------------------
# Tray text
# ---------------------------------------------------------------------------

class TestTrayText:
    def test_blocking(self):
        text = format_tray_text("Mouse Guard", True, DEFAULT_HOTKEY)
        assert text == "Mouse Guard (Blocking) - Hotkey: Control,Alt,B"

    def test_unblocked(self):
        text = format_tray_text("Mouse Guard", False, DEFAULT_HOTKEY)
        assert text == "Mouse Guard (Unblocked) - Hotkey: Control,Alt,B"


# ---------------------------------------------------------------------------
# Display names
# ---------------------------------------------------------------------------

class TestDisplayNames:
    def test_instance_token_match(self):
        device = r"\\.\DISPLAY1"
        instance = "DISPLAY1\\5&1a2b3c4d&0&UID4353"
        assert device_name_contains_instance_token(device, instance)

    def test_instance_token_no_match(self):
        assert not device_name_contains_instance_token(r"\\.\DISPLAY2", "DISPLAY1\\foo")

    def test_instance_token_case_insensitive(self):
        assert device_name_contains_instance_token(r"\\.\display1", "DISPLAY1\\x")

    @pytest.mark.parametrize("device,instance", [("", "DISPLAY1"), (r"\\.\DISPLAY1", " "), (None, "a")])
    def test_instance_token_blank(self, device, instance):
        assert not device_name_contains_instance_token(device, instance)

    def test_compose_with_friendly(self):
        assert compose_display_name(r"\\.\DISPLAY1", "DELL U2720Q") == r"DELL U2720Q (\\.\DISPLAY1)"

    def test_compose_without_friendly(self):
        assert compose_display_name(r"\\.\DISPLAY1", None) == r"\\.\DISPLAY1"
        assert compose_display_name(r"\\.\DISPLAY1", "") == r"\\.\DISPLAY1"

    def test_friendly_name_stops_at_null(self):
        codes = [ord(c) for c in "DELL"] + [0, ord("X")]
        assert friendly_name_from_codes(codes) == "DELL"

    def test_friendly_name_empty(self):
        assert friendly_name_from_codes(None) == ""
        assert friendly_name_from_codes([]) == ""


class TestGeometry:
    def test_rect_contains_is_half_open(self):
        rect = Rect(0, 0, 100, 50)
        assert rect.contains((0, 0))
        assert rect.contains((99, 49))
        assert not rect.contains((100, 10))
        assert not rect.contains((10, 50))

    def test_rect_center(self):
        assert Rect(1920, 0, 1920, 1080).center() == (2880, 540)

    def test_primary_screen(self):
        screens = [
            ScreenInfo(0, "A", Rect(0, 0, 10, 10)),
            ScreenInfo(1, "B", Rect(10, 0, 10, 10), primary=True),
        ]
        assert primary_screen(screens).device_name == "B"

    def test_primary_screen_fallback(self):
        screens = [ScreenInfo(0, "A", Rect(0, 0, 10, 10))]
        assert primary_screen(screens).device_name == "A"
        assert primary_screen([]) is None
