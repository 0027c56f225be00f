"""Tests for quaint.core.colors — hex color normalization and parsing."""

from __future__ import annotations

import pytest

from quaint.core.colors import RGBColor, hex_to_rgb, normalize_hex, resolve_color
from quaint.core.errors import BadColorError


def _expand(short: str) -> str:
    return "".join(ch * 2 for ch in short)


class TestNormalizeHex:
    """Tests for normalize_hex."""

    @pytest.mark.parametrize("short", ["abc", "000", "fff", "1a9", "F0e"])
    def test_short_form_matches_expanded(self, short):
        """A 3-digit code normalizes like its digit-duplicated 6-digit form."""
        assert normalize_hex(short) == normalize_hex(_expand(short))

    def test_strips_single_hash(self):
        assert normalize_hex("#aabbcc") == "aabbcc"
        assert normalize_hex("#abc") == "aabbcc"

    def test_lowercases(self):
        assert normalize_hex("AABBCC") == "aabbcc"

    @pytest.mark.parametrize("value", ["", "#", "a", "ab", "abcd", "abcde", "abcdefa", "##abc"])
    def test_wrong_length_is_invalid(self, value):
        assert normalize_hex(value) is None


class TestHexToRgb:
    """Tests for hex_to_rgb."""

    def test_channel_decomposition(self):
        assert hex_to_rgb("123456") == RGBColor(0x12, 0x34, 0x56, 255)

    @pytest.mark.parametrize("digits", ["zzzzzz", "0x1234", "+12345", "12_345", " 12345"])
    def test_non_hex_digits_rejected(self, digits):
        with pytest.raises(BadColorError):
            hex_to_rgb(digits)


class TestResolveColor:
    """Tests for resolve_color."""

    def test_white_long_form(self):
        assert resolve_color("#ffffff", "#000") == RGBColor(255, 255, 255, 255)

    def test_white_short_form_equal_to_long(self):
        assert resolve_color("fff", "#000") == resolve_color("#ffffff", "#000")

    def test_empty_param_uses_fallback(self):
        assert resolve_color("", "#969696") == RGBColor(150, 150, 150)

    def test_none_param_uses_fallback(self):
        assert resolve_color(None, "#cccccc") == RGBColor(204, 204, 204)

    def test_alpha_always_opaque(self):
        assert resolve_color("000", "#fff").a == 255

    def test_bad_digits_carry_offending_value(self):
        with pytest.raises(BadColorError) as exc_info:
            resolve_color("zzz", "#969696")
        assert exc_info.value.value == "zzz"

    @pytest.mark.parametrize("value", ["1", "12", "1234", "12345", "1234567", "#12345"])
    def test_bad_length_raises(self, value):
        with pytest.raises(BadColorError):
            resolve_color(value, "#969696")

    def test_bad_color_error_is_value_error(self):
        with pytest.raises(ValueError):
            resolve_color("nope", "#fff")


class TestRGBColor:
    """Tests for the RGBColor value type."""

    def test_as_tuple(self):
        assert RGBColor(1, 2, 3).as_tuple() == (1, 2, 3, 255)

    def test_hex_property(self):
        assert RGBColor(255, 0, 16).hex == "#ff0010"

    def test_is_immutable(self):
        color = RGBColor(1, 2, 3)
        with pytest.raises(AttributeError):
            color.r = 4
