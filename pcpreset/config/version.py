from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Optional

DISTRIBUTION_NAME = "create-pc-preset"
UNKNOWN_VERSION = "0.0.0"

# Only present when running from a source checkout
GIT_DIR = Path(__file__).resolve().parent.parent.parent / ".git"


def get_git_commit(git_dir: Path = GIT_DIR) -> Optional[str]:
    """
    Return the commit checked out in `git_dir`, if any.

    A dangling branch reference (fresh repository without commits)
    yields the branch name.
    """
    head = git_dir / "HEAD"
    if not head.is_file():
        return None

    ref = head.read_text(encoding="utf-8").strip()
    if not ref.startswith("ref: "):
        return ref

    ref_path = git_dir / ref[len("ref: ") :]
    if not ref_path.is_file():
        return ref_path.name
    return ref_path.read_text(encoding="utf-8").strip()


def get_package_version() -> str:
    """
    Version of the installed create-pc-preset distribution.

    :return: package version, or "0.0.0" if the package isn't installed
    """
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return UNKNOWN_VERSION


def get_version() -> str:
    """
    Version string shown by `--version`, eg. `0.1.0-gitbf01c19`.

    The git suffix is only added when running from a checkout.
    """
    package_version = get_package_version()
    commit = get_git_commit()
    if commit:
        return f"{package_version}-git{commit[:7]}"
    return package_version


__all__ = ["get_version"]
