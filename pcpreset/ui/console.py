import sys
from typing import Optional

import questionary
from yaspin import yaspin
from yaspin.spinners import Spinners

from pcpreset.log import get_logger
from pcpreset.ui.base import MessageLevel, Progress, UIBase, UIClosedError, Validator
from pcpreset.ui.style import PROMPT_STYLE, color_green, color_red, color_yellow

log = get_logger(__name__)


class SpinnerProgress(Progress):
    """
    Progress indicator rendered as a terminal spinner.
    """

    def __init__(self, text: str):
        self.spinner = yaspin(Spinners.line, text=text)
        self.spinner.start()

    def succeed(self, text: str):
        self.spinner.text = text
        self.spinner.ok(color_green("✔"))

    def fail(self, text: str):
        self.spinner.text = text
        self.spinner.fail(color_red("✖"))


class ConsoleUI(UIBase):
    """
    UI adapter for interactive, colored console sessions.
    """

    async def start(self) -> bool:
        log.debug("Starting console UI")
        return True

    async def stop(self):
        log.debug("Stopping console UI")

    async def send_message(self, message: str, *, level: MessageLevel = MessageLevel.INFO):
        if level == MessageLevel.ERROR:
            print(color_red(message), file=sys.stderr)
        elif level == MessageLevel.WARNING:
            print(color_yellow(message))
        elif level == MessageLevel.SUCCESS:
            print(color_green(message))
        else:
            print(message)

    @staticmethod
    async def _ask(question: questionary.Question):
        try:
            answer = await question.unsafe_ask_async()
        except KeyboardInterrupt:
            raise UIClosedError()
        if answer is None:
            raise UIClosedError()
        return answer

    async def ask_text(
        self,
        question: str,
        *,
        default: Optional[str] = None,
        validate: Optional[Validator] = None,
    ) -> str:
        def check(text: str):
            if not text.strip() and default is not None:
                text = default
            return validate(text) if validate else True

        answer = await self._ask(
            questionary.text(
                question,
                default=default or "",
                validate=check,
                style=PROMPT_STYLE,
            )
        )
        if not answer.strip() and default is not None:
            answer = default
        return answer

    async def ask_select(
        self,
        question: str,
        choices: dict[str, str],
        *,
        default: Optional[str] = None,
    ) -> str:
        return await self._ask(
            questionary.select(
                question,
                choices=[questionary.Choice(title=label, value=value) for value, label in choices.items()],
                default=default,
                style=PROMPT_STYLE,
            )
        )

    async def ask_confirm(self, question: str, *, default: bool = True) -> bool:
        return await self._ask(
            questionary.confirm(
                question,
                default=default,
                style=PROMPT_STYLE,
            )
        )

    def progress(self, text: str) -> Progress:
        return SpinnerProgress(text)


__all__ = ["ConsoleUI"]
