from enum import Enum
from typing import Callable, Optional, Union

Validator = Callable[[str], Union[bool, str]]


class MessageLevel(str, Enum):
    """
    Kind of a message shown to the user, used for coloring.
    """

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class UIClosedError(Exception):
    """The user interface has been closed (user cancelled a prompt)."""


class Progress:
    """
    Handle for a running progress indicator.

    A progress indicator is started with `UIBase.progress()` and ends
    in exactly one terminal state, either `succeed()` or `fail()`.
    """

    def succeed(self, text: str):
        """
        Stop the indicator and mark it as successful.

        :param text: Final text to show.
        """
        raise NotImplementedError()

    def fail(self, text: str):
        """
        Stop the indicator and mark it as failed.

        :param text: Final text to show.
        """
        raise NotImplementedError()


class UIBase:
    """
    Base class for UI adapters.
    """

    async def start(self) -> bool:
        """
        Start the UI adapter.

        :return: Whether the UI was started successfully.
        """
        raise NotImplementedError()

    async def stop(self):
        """
        Stop the UI adapter.
        """
        raise NotImplementedError()

    async def send_message(self, message: str, *, level: MessageLevel = MessageLevel.INFO):
        """
        Send a complete message to the UI.

        :param message: Message content.
        :param level: Message level (affects coloring, errors go to stderr).
        """
        raise NotImplementedError()

    async def ask_text(
        self,
        question: str,
        *,
        default: Optional[str] = None,
        validate: Optional[Validator] = None,
    ) -> str:
        """
        Ask the user for free-form text.

        If the user leaves the answer blank and `default` is set, the
        default is returned. If `validate` is set, it's called with the
        answer and must return True, or an error message in which case
        the question is asked again.

        :param question: Question to ask.
        :param default: Default answer.
        :param validate: Answer validator.
        :return: The (validated) answer.
        """
        raise NotImplementedError()

    async def ask_select(
        self,
        question: str,
        choices: dict[str, str],
        *,
        default: Optional[str] = None,
    ) -> str:
        """
        Ask the user to pick one of the choices.

        :param question: Question to ask.
        :param choices: Mapping of choice values to their labels.
        :param default: Value of the initially selected choice.
        :return: Value (key) of the selected choice.
        """
        raise NotImplementedError()

    async def ask_confirm(self, question: str, *, default: bool = True) -> bool:
        """
        Ask the user a yes/no question.

        :param question: Question to ask.
        :param default: Answer used when the user just presses ENTER.
        :return: Whether the user confirmed.
        """
        raise NotImplementedError()

    def progress(self, text: str) -> Progress:
        """
        Start a progress indicator.

        :param text: Text shown while the operation is running.
        :return: Progress handle.
        """
        raise NotImplementedError()


__all__ = ["MessageLevel", "Progress", "UIBase", "UIClosedError", "Validator"]
