from slstatus import files


def test_cat_first_line(tmp_path):
    path = tmp_path / "f"
    path.write_text("hello\nworld\n")
    assert files.cat(str(path)) == "hello"


def test_cat_empty_line_is_unknown(tmp_path):
    path = tmp_path / "f"
    path.write_text("\nsecond\n")
    assert files.cat(str(path)) is None


def test_cat_missing_file(tmp_path, capsys):
    assert files.cat(str(tmp_path / "missing")) is None
    assert "fopen" in capsys.readouterr().err


def test_num_files_counts_entries(tmp_path):
    for name in ("a", "b", ".hidden"):
        (tmp_path / name).write_text("")
    (tmp_path / "sub").mkdir()
    assert files.num_files(str(tmp_path)) == "4"


def test_num_files_empty_directory(tmp_path):
    assert files.num_files(str(tmp_path)) == "0"


def test_num_files_missing_directory(tmp_path, capsys):
    assert files.num_files(str(tmp_path / "missing")) is None
    assert "opendir" in capsys.readouterr().err


def test_run_command_first_line():
    assert files.run_command("echo foo; echo bar") == "foo"


def test_run_command_no_output():
    assert files.run_command("true") is None


def test_run_command_long_output_is_limited():
    result = files.run_command("printf '%05000d\\n' 0")
    assert result == "0" * files.LINE_MAX


def test_temp_converts_millidegrees(tmp_path):
    path = tmp_path / "temp"
    path.write_text("45999\n")
    assert files.temp(str(path)) == "45"


def test_temp_missing_sensor(tmp_path):
    assert files.temp(str(tmp_path / "missing")) is None