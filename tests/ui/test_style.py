from pcpreset.ui.style import ColorName, color_green, color_red, color_yellow, get_color_function

RESET = "\x1b[0m"


def test_color_function():
    assert get_color_function(ColorName.RED)("Test") == f"\x1b[31mTest{RESET}"
    assert get_color_function(ColorName.YELLOW)("") == f"\x1b[33m{RESET}"


def test_message_colors():
    assert color_red("项目创建失败") == f"\x1b[31m项目创建失败{RESET}"
    assert color_green("✔") == f"\x1b[32m✔{RESET}"
    assert color_yellow("注意") == f"\x1b[33m注意{RESET}"
