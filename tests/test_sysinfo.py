import os
import pwd
import socket
import time

from slstatus import sysinfo


def test_datetime_year_matches_local_clock():
    assert sysinfo.datetime("%Y") == time.strftime("%Y")


def test_datetime_literal_text_passes_through():
    assert sysinfo.datetime("status") == "status"


def test_datetime_empty_result_is_unknown(capsys):
    assert sysinfo.datetime("") is None
    assert "strftime" in capsys.readouterr().err


def test_datetime_too_long_is_unknown():
    assert sysinfo.datetime("x" * 2000) is None


def test_format_uptime_hours_and_minutes():
    assert sysinfo.format_uptime(3661) == "1h 1m"


def test_format_uptime_under_a_minute():
    assert sysinfo.format_uptime(59) == "0h 0m"


def test_format_uptime_many_hours():
    assert sysinfo.format_uptime(100 * 3600 + 59 * 60 + 59) == "100h 59m"


def test_uptime_shape():
    hours, minutes = sysinfo.uptime().split(" ")
    assert hours.endswith("h")
    assert minutes.endswith("m")
    assert int(hours[:-1]) >= 0
    assert 0 <= int(minutes[:-1]) < 60


def test_hostname_matches_system():
    assert sysinfo.hostname() == socket.gethostname()


def test_kernel_release_matches_uname():
    assert sysinfo.kernel_release() == os.uname().release


def test_load_avg_shape():
    parts = sysinfo.load_avg().split(" ")
    assert len(parts) == 3
    for part in parts:
        whole, fraction = part.split(".")
        assert whole.isdigit()
        assert len(fraction) == 2
        assert float(part) >= 0


def test_ids_match_process():
    assert sysinfo.gid() == str(os.getgid())
    assert sysinfo.uid() == str(os.geteuid())


def test_username_matches_password_database():
    assert sysinfo.username() == pwd.getpwuid(os.geteuid()).pw_name


def test_entropy_reads_counter(tmp_path):
    path = tmp_path / "entropy_avail"
    path.write_text("3256\n")
    assert sysinfo.entropy(None, str(path)) == "3256"


def test_entropy_missing_counter(tmp_path):
    assert sysinfo.entropy(None, str(tmp_path / "missing")) is None