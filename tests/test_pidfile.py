import os

import pytest

from pushrelay.pidfile import PIDFileError, create_pid_file


def test_disabled_writes_nothing(tmp_path):
    path = tmp_path / "server.pid"
    assert create_pid_file(str(path), False, False) is None
    assert not path.exists()


def test_writes_current_pid(tmp_path):
    path = tmp_path / "server.pid"
    pid = create_pid_file(str(path), True, False)
    assert pid == os.getpid()
    assert path.read_text() == str(os.getpid())


def test_creates_missing_folders(tmp_path):
    path = tmp_path / "a" / "b" / "server.pid"
    create_pid_file(str(path), True, False)
    assert path.read_text() == str(os.getpid())


def test_existing_file_without_override_raises(tmp_path):
    path = tmp_path / "server.pid"
    path.write_text("old")
    with pytest.raises(PIDFileError, match="already exists"):
        create_pid_file(str(path), True, False)
    assert path.read_text() == "old"


def test_existing_file_with_override_is_replaced(tmp_path):
    path = tmp_path / "server.pid"
    path.write_text("old contents that are longer")
    create_pid_file(str(path), True, True)
    assert path.read_text() == str(os.getpid())


def test_error_message_names_path(tmp_path):
    path = tmp_path / "server.pid"
    path.write_text("x")
    with pytest.raises(PIDFileError) as info:
        create_pid_file(str(path), True, False)
    assert str(info.value) == f"{path} already exists"


def test_unwritable_target_raises(tmp_path):
    folder = tmp_path / "dir.pid"
    folder.mkdir()
    with pytest.raises(PIDFileError, match="can't create PID file"):
        create_pid_file(str(folder), True, True)