import re
from typing import Union

# ASCII only; `\w` and `\d` would also accept unicode letters and digits
PROJECT_NAME_PATTERN = re.compile(r"[A-Za-z0-9_-]+")
PROJECT_NAME_ERROR = "项目名称只能包含字母、数字、横线和下划线"


def is_valid_project_name(name: str) -> bool:
    return PROJECT_NAME_PATTERN.fullmatch(name) is not None


def validate_project_name(name: str) -> Union[bool, str]:
    """
    Prompt validator for the project name.

    :param name: Name entered by the user.
    :return: True if the name is valid, otherwise the error message to show.
    """
    if is_valid_project_name(name):
        return True
    return PROJECT_NAME_ERROR


__all__ = ["is_valid_project_name", "validate_project_name", "PROJECT_NAME_ERROR"]
