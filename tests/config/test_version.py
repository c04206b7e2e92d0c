from importlib.metadata import PackageNotFoundError
from unittest.mock import patch

from pcpreset.config.version import get_git_commit, get_package_version, get_version


@patch("pcpreset.config.version.version", return_value="0.1.0")
def test_get_package_version(mock_version):
    assert get_package_version() == "0.1.0"
    mock_version.assert_called_once_with("create-pc-preset")


@patch("pcpreset.config.version.version", side_effect=PackageNotFoundError("create-pc-preset"))
def test_get_package_version_not_installed(_mock_version):
    assert get_package_version() == "0.0.0"


def test_git_commit_detached(tmp_path):
    (tmp_path / "HEAD").write_text("bf01c19d0a3e\n", encoding="utf-8")
    assert get_git_commit(tmp_path) == "bf01c19d0a3e"


def test_git_commit_follows_branch(tmp_path):
    (tmp_path / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
    (tmp_path / "refs" / "heads").mkdir(parents=True)
    (tmp_path / "refs" / "heads" / "main").write_text("0123456789abcdef\n", encoding="utf-8")

    assert get_git_commit(tmp_path) == "0123456789abcdef"


def test_git_commit_dangling_branch(tmp_path):
    (tmp_path / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
    assert get_git_commit(tmp_path) == "main"


def test_git_commit_outside_checkout(tmp_path):
    assert get_git_commit(tmp_path / "missing") is None


@patch("pcpreset.config.version.get_git_commit", return_value="abcdef0123")
@patch("pcpreset.config.version.get_package_version", return_value="1.2.3")
def test_get_version(_mock_get_package_version, _mock_get_git_commit):
    assert get_version() == "1.2.3-gitabcdef0"


@patch("pcpreset.config.version.get_git_commit", return_value=None)
@patch("pcpreset.config.version.get_package_version", return_value="1.2.3")
def test_get_version_without_git(_mock_get_package_version, _mock_get_git_commit):
    assert get_version() == "1.2.3"
