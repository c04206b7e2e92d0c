from enum import Enum

from colorama import Fore
from colorama import Style as ColoramaStyle
from colorama import just_fix_windows_console
from questionary import Style

# Ensures that ANSI codes work on Windows consoles
just_fix_windows_console()


class ColorName(Enum):
    """
    Message colors, mapped to their ANSI color codes.
    """

    RED = Fore.RED
    GREEN = Fore.GREEN
    YELLOW = Fore.YELLOW


PROMPT_STYLE = Style.from_dict(
    {
        "question": "bold",
        "answer": "#FF910A bold",  # Dark Orange / Pumpkin
        "pointer": "#FF4500 bold",  # Orange Red
        "highlighted": "#63CD91 bold",  # Medium Aquamarine
        "instruction": "#A0A0A0",  # Grey
    }
)


def get_color_function(color_name: ColorName):
    """
    Returns a function that colorizes text.

    :param color_name: Color to use.
    :return: A function that takes a string and returns it colorized.
    """

    def color_func(text: str) -> str:
        return f"{color_name.value}{text}{ColoramaStyle.RESET_ALL}"

    return color_func


color_red = get_color_function(ColorName.RED)
color_green = get_color_function(ColorName.GREEN)
color_yellow = get_color_function(ColorName.YELLOW)
