import json
import re
from dataclasses import dataclass, field
from pathlib import Path

from pcpreset.config import RewriteConfig
from pcpreset.errors import RewriteParseError, RewriteReadError
from pcpreset.log import get_logger
from pcpreset.ui.base import UIBase

log = get_logger(__name__)

REWRITE_PROGRESS = "正在修改项目名称..."
REWRITE_SUCCESS = "项目名称修改成功"
REWRITE_FAILURE = "项目名称修改失败"

STORE_KEY_PATTERN = re.compile(r"(?<![\w$])key:\s*'[^'\n]*'")
HTML_TITLE_PATTERN = re.compile(r"<title>[^<]*</title>", re.IGNORECASE)


@dataclass
class RewriteReport:
    """
    Outcome of personalising the template files.

    Attributes:
    * `ok`: Whether all files were rewritten.
    * `changed`: Relative paths of the files whose content changed.
    * `warnings`: Problems that were reported but didn't stop the scaffolding.
    """

    ok: bool = True
    changed: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def rewrite_manifest(content: str, project_name: str) -> str:
    """
    Set the package name in a JSON manifest.

    Key order is kept and the result is indented with two spaces.

    :param content: Manifest content.
    :param project_name: New package name.
    :return: Updated manifest content.
    """
    try:
        manifest = json.loads(content)
    except json.JSONDecodeError as err:
        raise RewriteParseError(f"Invalid JSON manifest: {err}") from err

    if not isinstance(manifest, dict):
        raise RewriteParseError("Invalid JSON manifest: top-level value is not an object")

    manifest["name"] = project_name
    updated = json.dumps(manifest, indent=2, ensure_ascii=False)
    if content.endswith("\n"):
        updated += "\n"
    return updated


def rewrite_store_key(content: str, project_name: str) -> str:
    """
    Replace the first `key: '...'` literal with the project name.

    Content without such a literal is returned unchanged.
    """
    return STORE_KEY_PATTERN.sub(lambda _: f"key: '{project_name}'", content, count=1)


def rewrite_html_title(content: str, title: str) -> str:
    """
    Replace the text of the first `<title>` element.

    Content without a title is returned unchanged.
    """
    return HTML_TITLE_PATTERN.sub(lambda _: f"<title>{title}</title>", content, count=1)


class TemplateRewriter:
    """
    Personalises a fetched template for the new project.
    """

    def __init__(self, targets: RewriteConfig):
        self.targets = targets

    def _read(self, root: Path, relative_path: str) -> str:
        path = root / relative_path
        try:
            return path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as err:
            raise RewriteReadError(f"Cannot read template file {relative_path}: {err}") from err

    def render(self, root: Path, project_name: str, description: str) -> dict[str, tuple[str, str]]:
        """
        Compute the new content of all target files without writing anything.

        :param root: Template root directory.
        :param project_name: Project (package) name.
        :param description: Human-readable project description, used as the page title.
        :return: Mapping of relative path to (old content, new content).
        """
        manifest = self._read(root, self.targets.manifest)
        store = self._read(root, self.targets.store)
        html = self._read(root, self.targets.html)

        return {
            self.targets.manifest: (manifest, rewrite_manifest(manifest, project_name)),
            self.targets.store: (store, rewrite_store_key(store, project_name)),
            self.targets.html: (html, rewrite_html_title(html, description)),
        }

    async def apply(self, root: Path, project_name: str, description: str, ui: UIBase) -> RewriteReport:
        """
        Rewrite the target files in place.

        Read errors propagate. A manifest that can't be parsed is reported
        as a failed step and returned as a warning, leaving all files untouched.

        :param root: Template root directory.
        :param project_name: Project (package) name.
        :param description: Human-readable project description.
        :param ui: User interface.
        :return: Rewrite report.
        """
        progress = ui.progress(REWRITE_PROGRESS)
        report = RewriteReport()

        try:
            files = self.render(root, project_name, description)
        except RewriteParseError as err:
            log.warning(f"Skipping template rewrite: {err}")
            progress.fail(REWRITE_FAILURE)
            report.ok = False
            report.warnings.append(str(err))
            return report
        except BaseException:
            progress.fail(REWRITE_FAILURE)
            raise

        try:
            for relative_path, (old, new) in files.items():
                (root / relative_path).write_bytes(new.encode("utf-8"))
                if new != old:
                    report.changed.append(relative_path)
                else:
                    log.info(f"Nothing to replace in {relative_path}")
        except BaseException:
            progress.fail(REWRITE_FAILURE)
            raise

        progress.succeed(REWRITE_SUCCESS)
        log.debug(f"Rewrote template files: {report.changed}")
        return report


__all__ = ["TemplateRewriter", "RewriteReport", "rewrite_manifest", "rewrite_store_key", "rewrite_html_title"]
