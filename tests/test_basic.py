import os
import platform
import pwd
import re
import socket

from slmon.components import basic


def test_cat_returns_first_line(tmp_path):
    path = tmp_path / "f"
    path.write_text("first\nsecond\n")
    assert basic.cat(path) == "first"


def test_cat_blank_line_is_none(tmp_path):
    path = tmp_path / "f"
    path.write_text("\n")
    assert basic.cat(path) is None


def test_cat_missing_file(tmp_path):
    assert basic.cat(tmp_path / "missing") is None


def test_datetime_literal_text():
    assert basic.datetime("literal") == "literal"


def test_datetime_date_shape():
    parts = basic.datetime("%Y-%m-%d").split("-")
    assert [len(part) for part in parts] == [4, 2, 2]
    assert all(part.isdigit() for part in parts)


def test_datetime_empty_result_is_none():
    assert basic.datetime("") is None


def test_datetime_too_long_is_none():
    assert basic.datetime("x" * 2000) is None


def test_hostname_matches_socket():
    assert basic.hostname(None) == socket.gethostname()


def test_kernel_release_matches_platform():
    assert basic.kernel_release(None) == platform.release()


def test_load_avg_shape():
    parts = basic.load_avg(None).split(" ")
    assert len(parts) == 3
    assert [len(part.partition(".")[2]) for part in parts] == [2, 2, 2]
    assert all(float(part) >= 0 for part in parts)


def test_num_files_counts_entries(tmp_path):
    for name in ("a", "b", "c"):
        (tmp_path / name).write_text("")
    (tmp_path / "sub").mkdir()
    assert basic.num_files(tmp_path) == "4"


def test_num_files_missing_dir(tmp_path):
    assert basic.num_files(tmp_path / "missing") is None


def test_run_command_first_line():
    assert basic.run_command("printf 'a\\nb\\n'") == "a"


def test_run_command_echo():
    assert basic.run_command("echo foo") == "foo"


def test_run_command_no_output():
    assert basic.run_command("true") is None


def test_uptime_shape():
    result = basic.uptime(None)
    match = re.fullmatch(r"(\d+)h (\d+)m", result)
    assert match
    assert int(match.group(2)) < 60


def test_ids_and_username():
    assert basic.gid(None) == str(os.getgid())
    assert basic.uid(None) == str(os.geteuid())
    assert basic.username(None) == pwd.getpwuid(os.geteuid()).pw_name


def test_entropy_reads_counter(tmp_path, monkeypatch):
    path = tmp_path / "entropy_avail"
    path.write_text("256\n")
    monkeypatch.setattr(basic, "ENTROPY_AVAIL", str(path))
    assert basic.entropy(None) == "256"


def test_temp_truncates_to_degrees(tmp_path):
    path = tmp_path / "temp"
    path.write_text("45999\n")
    assert basic.temp(path) == "45"


def test_temp_missing(tmp_path):
    assert basic.temp(tmp_path / "missing") is None