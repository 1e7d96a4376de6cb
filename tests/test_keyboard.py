import pytest

from slstatus.keyboard import (
    format_indicators,
    get_layout,
    keyboard_indicators,
    keymap,
)


@pytest.mark.parametrize(
    "fmt, mask, expected",
    [
        ("c?n?", 0, ""),
        ("c?n?", 1, "c"),
        ("c?n?", 2, "n"),
        ("c?n?", 3, "cn"),
        ("cn", 0, "cn"),
        ("cn", 2, "cN"),
        ("cn", 3, "CN"),
        ("C?n", 1, "Cn"),
        ("N?", 2, "N"),
    ],
)
def test_format_indicators(fmt, mask, expected):
    assert format_indicators(fmt, mask) == expected


def test_format_ignores_other_letters():
    assert format_indicators("xcy", 1) == "C"


def test_format_uses_first_four_characters():
    assert format_indicators("c?n?c", 3) == format_indicators("c?n?", 3)


def test_layout_of_first_group():
    assert get_layout("pc+us+ru:2+inet(evdev)", 0) == "us"


def test_layout_of_second_group():
    assert get_layout("pc+us+ru:2+inet(evdev)", 1) == "ru"


def test_layout_keeps_variant():
    assert get_layout("pc+us(intl)+inet(evdev)", 0) == "us(intl)"


def test_layout_beyond_groups_is_last():
    assert get_layout("pc+us+inet(evdev)", 3) == "us"


def test_layout_with_only_invalid_symbols():
    assert get_layout("pc+inet(evdev)+base", 0) is None


def test_indicators_without_display(monkeypatch, capsys):
    monkeypatch.delenv("DISPLAY", raising=False)
    assert keyboard_indicators("c?n?") is None
    assert "XOpenDisplay: Failed to open display" in capsys.readouterr().err


def test_keymap_without_display(monkeypatch, capsys):
    monkeypatch.delenv("DISPLAY", raising=False)
    assert keymap() is None
    assert "XOpenDisplay: Failed to open display" in capsys.readouterr().err


@pytest.mark.parametrize("display", [":bogus", ":987", "nohost"])
def test_unreachable_display(monkeypatch, display):
    monkeypatch.setenv("DISPLAY", display)
    assert keyboard_indicators("cn") is None
    assert keymap() is None