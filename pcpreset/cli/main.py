import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence

from pcpreset.cli.helpers import init, show_config
from pcpreset.config import DEFAULT_DESCRIPTION, DEFAULT_PROJECT_NAME, Config
from pcpreset.disk.staging import staging_directory
from pcpreset.errors import EditorLaunchError, RenameError, ScaffoldError
from pcpreset.log import get_logger
from pcpreset.naming import validate_project_name
from pcpreset.proc.editor import open_in_editor
from pcpreset.project import ProjectAnswers
from pcpreset.templates.rewrite import TemplateRewriter
from pcpreset.templates.sources import fetch_template, source_for
from pcpreset.ui.base import MessageLevel, UIBase, UIClosedError

log = get_logger(__name__)

PROJECT_NAME_QUESTION = "Project name"
DESCRIPTION_QUESTION = "项目中文描述"
VERSION_QUESTION = "Vue版本"
OPEN_EDITOR_QUESTION = "通过VSCode编译器打开"

CREATED_MESSAGE = "🎉项目创建成功！"
FAILED_MESSAGE = "项目创建失败："
EDITOR_FAILED_MESSAGE = "打开编辑器失败："
CANCELLED_MESSAGE = "已取消创建项目"
WARNING_MESSAGE = "注意："


async def collect_answers(ui: UIBase, config: Config) -> ProjectAnswers:
    """
    Ask the user about the new project.

    :param ui: User interface.
    :param config: Configuration (provides the template registry).
    :return: Validated answers.
    """
    pro_name = await ui.ask_text(
        PROJECT_NAME_QUESTION,
        default=DEFAULT_PROJECT_NAME,
        validate=validate_project_name,
    )
    zh_name = await ui.ask_text(DESCRIPTION_QUESTION, default=DEFAULT_DESCRIPTION)
    version = await ui.ask_select(
        VERSION_QUESTION,
        {key: template.label for key, template in config.templates.items()},
        default=next(iter(config.templates)),
    )

    answers = ProjectAnswers(pro_name=pro_name, zh_name=zh_name, version=version)
    log.info(f"Creating project {answers.pro_name} ({answers.zh_name}) from template {answers.version}")
    return answers


def rename_project(staging: Path, target: Path) -> Path:
    """
    Move the staged template to its final location.

    :param staging: Staging directory.
    :param target: Final project directory; must not exist.
    :return: The final project directory.
    """
    if target.exists() or target.is_symlink():
        raise RenameError(f"{target} already exists")

    try:
        staging.rename(target)
    except OSError as err:
        raise RenameError(f"Cannot rename {staging} to {target}: {err}") from err

    log.info(f"Project created at {target}")
    return target


async def finalize(ui: UIBase, config: Config, staging: Path, target: Path, warnings: list[str]):
    """
    Rename the staged project, report success and optionally open the editor.

    :param ui: User interface.
    :param config: Configuration (provides the editor command).
    :param staging: Staging directory.
    :param target: Final project directory.
    :param warnings: Problems from earlier steps to show after the success message.
    """
    project_path = rename_project(staging, target)
    await ui.send_message(CREATED_MESSAGE, level=MessageLevel.SUCCESS)
    for warning in warnings:
        await ui.send_message(f"{WARNING_MESSAGE}{warning}", level=MessageLevel.WARNING)

    try:
        open_editor = await ui.ask_confirm(OPEN_EDITOR_QUESTION, default=True)
    except UIClosedError:
        # The project is already in place
        log.info("Editor prompt closed, not opening the editor")
        open_editor = False

    if open_editor:
        await open_in_editor(config.editor.command, project_path)


async def run_scaffold(ui: UIBase, config: Config, cwd: Optional[Path] = None) -> bool:
    """
    Create a new project in `cwd`.

    The staging directory is removed on every exit path.

    :param ui: User interface.
    :param config: Configuration.
    :param cwd: Directory to create the project in (defaults to the current directory).
    :return: True if the project was created (and the editor, if requested, started).
    """
    cwd = cwd or Path.cwd()
    staging = cwd / config.fs.staging_dir

    try:
        async with staging_directory(staging):
            answers = await collect_answers(ui, config)
            source = source_for(config.template(answers.version), default_ref=config.fetch.default_ref)
            await fetch_template(source, staging, ui)

            rewriter = TemplateRewriter(config.rewrite)
            report = await rewriter.apply(staging, answers.pro_name, answers.zh_name, ui)

            await finalize(ui, config, staging, cwd / answers.pro_name, report.warnings)
    except (KeyboardInterrupt, UIClosedError):
        log.info("Interrupted by user")
        await ui.send_message(CANCELLED_MESSAGE, level=MessageLevel.ERROR)
        return False
    except EditorLaunchError as err:
        log.warning(f"Editor launch failed: {err}")
        await ui.send_message(f"{EDITOR_FAILED_MESSAGE}{err}", level=MessageLevel.ERROR)
        return False
    except ScaffoldError as err:
        log.warning(f"Project creation failed: {err}")
        await ui.send_message(f"{FAILED_MESSAGE}{err}", level=MessageLevel.ERROR)
        return False
    except Exception as err:
        log.error(f"Uncaught exception: {err}", exc_info=True)
        await ui.send_message(f"{FAILED_MESSAGE}{err}", level=MessageLevel.ERROR)
        return False

    return True


async def async_main(ui: UIBase, config: Config, cwd: Optional[Path] = None) -> bool:
    """
    Main application coroutine.

    :param ui: User interface.
    :param config: Configuration.
    :param cwd: Directory to create the project in.
    :return: True if the application ran successfully, False otherwise.
    """
    ui_started = await ui.start()
    if not ui_started:
        return False

    try:
        return await run_scaffold(ui, config, cwd)
    finally:
        await ui.stop()


def run_preset(argv: Optional[Sequence[str]] = None) -> int:
    ui, config, args = init(argv)
    if not ui or not config:
        return 1

    if args.show_config:
        show_config(config)
        return 0

    try:
        success = asyncio.run(async_main(ui, config))
    except KeyboardInterrupt:
        log.info("Interrupted by user")
        return 1
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(run_preset())
