from __future__ import annotations

from infra.path import APP_NAME, COMPANY_NAME, logs_dir, user_data_dir


def test_data_dir_override(tmp_path):
    target = tmp_path / "dualify-data"

    assert user_data_dir({"DUALIFY_DATA_DIR": str(target)}) == target
    assert target.is_dir()


def test_linux_data_dir_follows_xdg(tmp_path):
    path = user_data_dir({"XDG_DATA_HOME": str(tmp_path)}, platform="linux")

    assert path == tmp_path / COMPANY_NAME / APP_NAME


def test_windows_data_dir_follows_appdata(tmp_path):
    path = user_data_dir({"APPDATA": str(tmp_path)}, platform="win32")

    assert path == tmp_path / COMPANY_NAME / APP_NAME


def test_logs_dir_is_created_under_data_dir(tmp_path):
    path = logs_dir({"DUALIFY_DATA_DIR": str(tmp_path)})

    assert path == tmp_path / "logs"
    assert path.is_dir()
