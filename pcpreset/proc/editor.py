import asyncio
import os
import shlex
import subprocess
from pathlib import Path

from pcpreset.errors import EditorLaunchError
from pcpreset.log import get_logger

log = get_logger(__name__)


def editor_command_line(command: str, project_path: Path) -> str:
    """
    Build the shell command line that opens `project_path` in the editor.

    :param command: Editor command, may include extra arguments (eg. "code -n").
    :param project_path: Project directory to open.
    :return: Shell command line.
    """
    command = command.strip()
    if not command:
        raise EditorLaunchError("No editor command configured")

    if os.name == "nt":
        quoted = subprocess.list2cmdline([str(project_path)])
    else:
        quoted = shlex.quote(str(project_path))
    return f"{command} {quoted}"


async def open_in_editor(command: str, project_path: Path):
    """
    Open the project directory in an external editor.

    The command runs through the shell (editors like VSCode are often
    shell wrappers) and inherits the current environment. Non-zero exit
    codes, including "command not found", raise `EditorLaunchError`.

    :param command: Editor command.
    :param project_path: Project directory to open.
    """
    cmd = editor_command_line(command, project_path)
    log.debug(f"Launching editor: {cmd}")

    try:
        process = await asyncio.create_subprocess_shell(cmd)
    except OSError as err:
        raise EditorLaunchError(f"Cannot launch editor: {err}") from err

    retcode = await process.wait()
    if retcode != 0:
        raise EditorLaunchError(f"Editor command `{cmd}` exited with code {retcode}")


__all__ = ["editor_command_line", "open_in_editor"]
