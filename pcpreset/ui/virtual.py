from typing import Any, Optional

from pcpreset.log import get_logger
from pcpreset.ui.base import MessageLevel, Progress, UIBase, UIClosedError, Validator

log = get_logger(__name__)


class VirtualProgress(Progress):
    """
    Progress indicator that only records its state transitions.
    """

    def __init__(self, text: str):
        self.text = text
        self.state = "running"

    def succeed(self, text: str):
        if self.state != "running":
            raise RuntimeError(f"Progress '{self.text}' already finished ({self.state})")
        self.state = "succeeded"
        self.text = text

    def fail(self, text: str):
        if self.state != "running":
            raise RuntimeError(f"Progress '{self.text}' already finished ({self.state})")
        self.state = "failed"
        self.text = text


class VirtualUI(UIBase):
    """
    Scripted UI adapter, used in tests and non-interactive runs.

    Answers are consumed in order. When the script runs out, the question
    default is used; a question without a default closes the UI.
    """

    def __init__(self, inputs: list[Any]):
        self.virtual_inputs = list(inputs)
        self.questions: list[str] = []
        self.messages: list[tuple[MessageLevel, str]] = []
        self.progresses: list[VirtualProgress] = []
        self.rejected: list[str] = []

    async def start(self) -> bool:
        log.debug("Starting virtual UI")
        return True

    async def stop(self):
        log.debug("Stopping virtual UI")

    async def send_message(self, message: str, *, level: MessageLevel = MessageLevel.INFO):
        self.messages.append((level, message))
        print(message)

    def _next_input(self, question: str, default: Any) -> Any:
        self.questions.append(question)
        if self.virtual_inputs:
            return self.virtual_inputs.pop(0)
        if default is not None:
            return default
        raise UIClosedError()

    async def ask_text(
        self,
        question: str,
        *,
        default: Optional[str] = None,
        validate: Optional[Validator] = None,
    ) -> str:
        while True:
            answer = str(self._next_input(question, default))
            if not answer.strip() and default is not None:
                answer = default
            result = validate(answer) if validate else True
            if result is True:
                return answer
            self.rejected.append(result)
            if not self.virtual_inputs:
                raise UIClosedError()

    async def ask_select(
        self,
        question: str,
        choices: dict[str, str],
        *,
        default: Optional[str] = None,
    ) -> str:
        while True:
            answer = self._next_input(question, default if default is not None else next(iter(choices), None))
            if answer in choices:
                return answer
            self.rejected.append(f"Invalid choice: {answer}")
            if not self.virtual_inputs:
                raise UIClosedError()

    async def ask_confirm(self, question: str, *, default: bool = True) -> bool:
        return bool(self._next_input(question, default))

    def progress(self, text: str) -> Progress:
        progress = VirtualProgress(text)
        self.progresses.append(progress)
        return progress


__all__ = ["VirtualUI"]
