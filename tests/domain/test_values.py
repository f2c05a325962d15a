"""Tests for raw attribute value decoders."""

import pytest

from src.domain.parsing.values import (
    SEARCH_MODE_FLAGS,
    to_bool,
    to_int,
    to_resource_ref,
    to_str,
)


class TestToInt:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(5, 5), ("5", 5), (" 0x10 ", 16), ("0o17", 15)],
    )
    def test_numeric_values(self, raw, expected):
        assert to_int(raw) == expected

    def test_flag_names_are_or_joined(self):
        raw = "showSearchLabelAsBadge | showSearchIconAsBadge"

        assert to_int(raw, SEARCH_MODE_FLAGS) == 0x0C

    def test_numbers_win_over_flags(self):
        assert to_int("0x20", SEARCH_MODE_FLAGS) == 0x20

    @pytest.mark.parametrize("raw", [True, "", "abc", 1.5, None])
    def test_rejects_non_integers(self, raw):
        with pytest.raises(ValueError):
            to_int(raw)

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("2147483647", 2**31 - 1), ("-2147483648", -(2**31)), ("0x7fffffff", 2**31 - 1)],
    )
    def test_int32_bounds_are_accepted(self, raw, expected):
        assert to_int(raw) == expected

    @pytest.mark.parametrize("raw", ["3000000000", "-2147483649", "0x80000000", 2**31])
    def test_rejects_values_outside_int32(self, raw):
        with pytest.raises(ValueError, match="32 bits"):
            to_int(raw)

    def test_unknown_flag(self):
        with pytest.raises(ValueError, match="Unknown flag"):
            to_int("showSearchLabelAsBadge|nope", SEARCH_MODE_FLAGS)


class TestToResourceRef:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (42, 42),
            ("@42", 42),
            ("@0x7f050001", 0x7F050001),
            ("@null", 0),
            ("@0", 0),
        ],
    )
    def test_references(self, raw, expected):
        assert to_resource_ref(raw) == expected

    def test_rejects_named_references(self):
        with pytest.raises(ValueError):
            to_resource_ref("@string/label")


class TestToBool:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (True, True),
            (False, False),
            (1, True),
            (0, False),
            ("TRUE", True),
            ("false", False),
        ],
    )
    def test_booleans(self, raw, expected):
        assert to_bool(raw) is expected

    @pytest.mark.parametrize("raw", ["yes", 2, None])
    def test_rejects_other_values(self, raw):
        with pytest.raises(ValueError):
            to_bool(raw)


class TestToStr:
    def test_strings_and_numbers(self):
        assert to_str("abc") == "abc"
        assert to_str(12) == "12"

    @pytest.mark.parametrize("raw", [True, None, ["a"]])
    def test_rejects_other_values(self, raw):
        with pytest.raises(ValueError):
            to_str(raw)
