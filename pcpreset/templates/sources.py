import asyncio
import re
import shutil
import zipfile
import zlib
from pathlib import Path, PurePosixPath
from tempfile import TemporaryFile
from typing import Optional

import httpx

from pcpreset.config import TemplateConfig, TemplateSourceType
from pcpreset.errors import ConfigurationError, FetchError, ScaffoldError
from pcpreset.log import get_logger
from pcpreset.ui.base import UIBase

log = get_logger(__name__)

CLONE_PROGRESS = "正在克隆仓库..."
CLONE_SUCCESS = "克隆成功"
CLONE_FAILURE = "克隆失败"

LOCATOR_PATTERN = re.compile(
    r"^(?:(?P<host>[a-z]+):)?(?P<owner>[^/:#\s]+)/(?P<name>[^/:#\s]+)(?:#(?P<ref>\S+))?$",
)

ARCHIVE_URLS = {
    "github": "https://github.com/{owner}/{name}/archive/{ref}.zip",
    "gitlab": "https://gitlab.com/{owner}/{name}/repository/archive.zip?ref={ref}",
    "bitbucket": "https://bitbucket.org/{owner}/{name}/get/{ref}.zip",
}

CHUNK_SIZE = 64 * 1024


def archive_url(locator: str, default_ref: str = "master") -> str:
    """
    Resolve a repository locator to the URL of its zip archive.

    Supported syntax:

    * `owner/name[#ref]` (GitHub)
    * `github:owner/name[#ref]`, `gitlab:owner/name[#ref]`, `bitbucket:owner/name[#ref]`
    * `direct:<url>` (URL of a zip archive, used as-is)

    :param locator: Repository locator.
    :param default_ref: Branch or tag to use if the locator doesn't specify one.
    :return: Archive URL.
    """
    locator = locator.strip()
    if not locator:
        raise ConfigurationError("Template locator must not be empty")

    if locator.startswith("direct:"):
        url = locator[len("direct:") :]
        if not url.startswith(("https://", "http://")):
            raise ConfigurationError(f"Invalid direct template URL: {url}")
        return url

    m = LOCATOR_PATTERN.match(locator)
    if not m:
        raise ConfigurationError(f"Invalid template locator: {locator}")

    host = m.group("host") or "github"
    if host not in ARCHIVE_URLS:
        raise ConfigurationError(f"Unsupported template host '{host}' in: {locator}")

    return ARCHIVE_URLS[host].format(
        owner=m.group("owner"),
        name=m.group("name"),
        ref=m.group("ref") or default_ref,
    )


def _strip_prefix(names: list[str]) -> Optional[str]:
    """
    Find the single top-level directory shared by all archive members.

    Repository archives wrap the tree in a `<name>-<ref>/` directory.
    """
    roots = {PurePosixPath(name).parts[0] for name in names if PurePosixPath(name).parts}
    if len(roots) != 1:
        return None
    root = roots.pop()
    if any(name.rstrip("/") == root and not name.endswith("/") for name in names):
        # The only member is a file, not a directory
        return None
    return root


def extract_archive(archive: zipfile.ZipFile, destination: Path):
    """
    Extract a repository archive, dropping its top-level directory.

    :param archive: Open zip archive.
    :param destination: Directory to extract into (created if needed).
    """
    names = archive.namelist()
    prefix = _strip_prefix(names)
    destination.mkdir(parents=True, exist_ok=True)
    root = destination.resolve()

    for info in archive.infolist():
        member = PurePosixPath(info.filename)
        if member.is_absolute() or ".." in member.parts:
            raise FetchError(f"Refusing to extract unsafe archive member: {info.filename}")

        parts = member.parts[1:] if prefix else member.parts
        if not parts:
            continue

        target = root.joinpath(*parts)
        if info.is_dir():
            target.mkdir(parents=True, exist_ok=True)
            continue

        target.parent.mkdir(parents=True, exist_ok=True)
        with archive.open(info) as src, open(target, "wb") as dst:
            shutil.copyfileobj(src, dst)

        mode = (info.external_attr >> 16) & 0o777
        if mode:
            target.chmod(mode)


class TemplateSource:
    """
    Base class for template sources.

    A template source knows how to materialize a template tree
    in a (not yet existing or empty) destination directory.
    """

    description: str

    async def fetch(self, destination: Path):
        """
        Materialize the template tree at `destination`.

        :param destination: Destination directory.
        """
        raise NotImplementedError()


class RemoteArchiveSource(TemplateSource):
    """
    Template fetched as a zip archive of a hosted git repository.
    """

    def __init__(
        self,
        locator: str,
        *,
        default_ref: str = "master",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = archive_url(locator, default_ref)
        self.description = locator
        self.transport = transport

    async def _download(self, fp):
        async with httpx.AsyncClient(
            follow_redirects=True,
            timeout=None,
            transport=self.transport,
        ) as client:
            async with client.stream("GET", self.url) as response:
                response.raise_for_status()
                async for chunk in response.aiter_bytes(CHUNK_SIZE):
                    fp.write(chunk)

    async def fetch(self, destination: Path):
        log.info(f"Downloading template archive {self.url}")
        with TemporaryFile() as fp:
            try:
                await self._download(fp)
            except httpx.HTTPStatusError as err:
                raise FetchError(f"Downloading {self.url} failed with HTTP {err.response.status_code}") from err
            except (httpx.HTTPError, httpx.InvalidURL) as err:
                raise FetchError(f"Downloading {self.url} failed: {err}") from err

            fp.seek(0)
            try:
                with zipfile.ZipFile(fp) as archive:
                    extract_archive(archive, destination)
            except zipfile.BadZipFile as err:
                raise FetchError(f"Template archive from {self.url} is not a valid zip file") from err
            except (NotImplementedError, RuntimeError, zlib.error) as err:
                # Unsupported compression, encrypted members or corrupt data
                raise FetchError(f"Cannot extract template archive from {self.url}: {err}") from err


class LocalDirectorySource(TemplateSource):
    """
    Template copied from a directory on the local filesystem.
    """

    def __init__(self, path: str):
        if not path.strip():
            raise ConfigurationError("Template path must not be empty")
        self.path = Path(path).expanduser()
        self.description = str(self.path)

    async def fetch(self, destination: Path):
        if not self.path.is_dir():
            raise FetchError(f"Template directory not found: {self.path}")

        log.info(f"Copying template from {self.path}")
        try:
            await asyncio.to_thread(
                shutil.copytree,
                self.path,
                destination,
                ignore=shutil.ignore_patterns(".git"),
                dirs_exist_ok=True,
            )
        except OSError as err:
            raise FetchError(f"Copying template from {self.path} failed: {err}") from err


def source_for(template: TemplateConfig, *, default_ref: str = "master") -> TemplateSource:
    """
    Create the template source for a template registry entry.

    :param template: Template registry entry.
    :param default_ref: Default branch for remote sources.
    :return: Template source.
    """
    if template.source == TemplateSourceType.LOCAL:
        return LocalDirectorySource(template.locator)
    return RemoteArchiveSource(template.locator, default_ref=default_ref)


async def fetch_template(source: TemplateSource, destination: Path, ui: UIBase):
    """
    Fetch the template into `destination`, showing progress.

    The progress indicator always reaches a terminal state before
    this function returns or raises.

    :param source: Template source.
    :param destination: Staging directory.
    :param ui: User interface.
    """
    progress = ui.progress(CLONE_PROGRESS)
    try:
        await source.fetch(destination)
    except ScaffoldError:
        progress.fail(CLONE_FAILURE)
        raise
    except OSError as err:
        progress.fail(CLONE_FAILURE)
        raise FetchError(f"Fetching template {source.description} failed: {err}") from err
    except BaseException:
        # Cancelled or interrupted by the user
        progress.fail(CLONE_FAILURE)
        raise

    progress.succeed(CLONE_SUCCESS)
    log.info(f"Template {source.description} fetched into {destination}")


__all__ = [
    "TemplateSource",
    "RemoteArchiveSource",
    "LocalDirectorySource",
    "archive_url",
    "extract_archive",
    "fetch_template",
    "source_for",
]
