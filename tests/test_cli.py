import pytest

from slstatus.cli import Options, build_status, main, parse_args, set_root_name
from slstatus.config import Component


@pytest.mark.parametrize(
    "argv, expected",
    [
        ([], Options(single=False, once=False)),
        (["-s"], Options(single=True, once=False)),
        (["-1"], Options(single=True, once=True)),
        (["-s1"], Options(single=True, once=True)),
        (["--"], Options(single=False, once=False)),
        (["-s", "--"], Options(single=True, once=False)),
    ],
)
def test_parse_args_flags(argv, expected):
    assert parse_args(argv) == expected


@pytest.mark.parametrize("argv", [["-x"], ["extra"], ["-"], ["--", "extra"], ["-s", "extra"]])
def test_parse_args_usage_error(argv, capsys):
    with pytest.raises(SystemExit) as info:
        parse_args(argv)
    assert info.value.code == 1
    assert capsys.readouterr().err == "usage: slstatus [-v] [-s] [-1]\n"


def test_parse_args_version(capsys):
    with pytest.raises(SystemExit) as info:
        parse_args(["-v"])
    assert info.value.code == 1
    assert capsys.readouterr().err == "slstatus-1.0\n"


def test_build_status_joins_formatted_values():
    components = [
        Component(lambda arg: "abc", "%s"),
        Component(lambda arg: arg.upper(), "[%s]", "x"),
        Component(lambda arg: "5", " %s%%"),
    ]
    assert build_status(components, "n/a", 2048) == "abc[X] 5%"


def test_build_status_uses_unknown_for_none():
    components = [Component(lambda arg: None, "<%s>")]
    assert build_status(components, "n/a", 2048) == "<n/a>"


def test_build_status_keeps_empty_value():
    components = [Component(lambda arg: "", "[%s]")]
    assert build_status(components, "n/a", 2048) == "[]"


def test_build_status_truncates_and_stops(capsys):
    calls = []

    def later(arg):
        calls.append(arg)
        return "z"

    components = [
        Component(lambda arg: "abc", "%s"),
        Component(lambda arg: "defg", "%s"),
        Component(later, "%s"),
    ]
    assert build_status(components, "n/a", 5) == "abcd"
    assert calls == []
    assert "vsnprintf: Output truncated" in capsys.readouterr().err


def test_build_status_length_bound():
    components = [Component(lambda arg: "x" * 10, "%s")] * 5
    result = build_status(components, "n/a", 32)
    assert len(result.encode("utf-8")) < 32
    assert set(result) == {"x"}


def test_build_status_empty_components():
    assert build_status([], "n/a", 2048) == ""


def test_set_root_name_without_display(monkeypatch, capsys):
    monkeypatch.delenv("DISPLAY", raising=False)
    with pytest.raises(SystemExit) as info:
        set_root_name("status")
    assert info.value.code == 1
    assert capsys.readouterr().err == "XOpenDisplay: Failed to open display\n"


def test_main_without_display_fails(monkeypatch, capsys):
    monkeypatch.delenv("DISPLAY", raising=False)
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 1
    assert "XOpenDisplay" in capsys.readouterr().err


def test_main_once_prints_single_line(capsys):
    assert main(["-1"]) == 0
    out = capsys.readouterr().out
    assert out.endswith("\n")
    assert out.count("\n") == 1
    assert "%" in out


def test_main_version_exits(capsys):
    with pytest.raises(SystemExit) as info:
        main(["-v"])
    assert info.value.code == 1
    assert capsys.readouterr().err.startswith("slstatus-")