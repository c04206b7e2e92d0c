from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from pcpreset.ui.base import MessageLevel, UIClosedError
from pcpreset.ui.console import ConsoleUI


def mock_question(answer=None, side_effect=None):
    return MagicMock(unsafe_ask_async=AsyncMock(return_value=answer, side_effect=side_effect))


@pytest.mark.asyncio
async def test_send_message(capsys):
    ui = ConsoleUI()

    connected = await ui.start()
    assert connected is True
    await ui.send_message("Hello from the other side ♫")
    await ui.send_message("🎉项目创建成功！", level=MessageLevel.SUCCESS)
    await ui.send_message("项目创建失败：boom", level=MessageLevel.ERROR)

    captured = capsys.readouterr()
    assert "Hello from the other side ♫\n" in captured.out
    assert "🎉项目创建成功！" in captured.out
    assert "\x1b[3" in captured.out  # colored
    assert "项目创建失败：boom" in captured.err
    assert "项目创建失败" not in captured.out
    await ui.stop()


@pytest.mark.asyncio
@patch("pcpreset.ui.console.questionary.text")
async def test_ask_text(mock_text):
    mock_text.return_value = mock_question("demo-app")
    ui = ConsoleUI()

    answer = await ui.ask_text("Project name", default="my-vue-project")

    assert answer == "demo-app"
    assert mock_text.call_args.args == ("Project name",)
    assert mock_text.call_args.kwargs["default"] == "my-vue-project"


@pytest.mark.asyncio
@patch("pcpreset.ui.console.questionary.text")
async def test_ask_text_keeps_answer_as_typed(mock_text):
    mock_text.return_value = mock_question("  演示 项目 ")
    ui = ConsoleUI()

    assert await ui.ask_text("项目中文描述", default="vue3项目") == "  演示 项目 "


@pytest.mark.asyncio
@patch("pcpreset.ui.console.questionary.text")
async def test_ask_text_blank_uses_default(mock_text):
    mock_text.return_value = mock_question("   ")
    ui = ConsoleUI()

    answer = await ui.ask_text("项目中文描述", default="vue3项目")

    assert answer == "vue3项目"


@pytest.mark.asyncio
@patch("pcpreset.ui.console.questionary.text")
async def test_ask_text_validator(mock_text):
    mock_text.return_value = mock_question("ok")
    ui = ConsoleUI()

    def validate(value):
        return True if value == "ok" else "not ok"

    await ui.ask_text("Name", default="fallback", validate=validate)

    check = mock_text.call_args.kwargs["validate"]
    assert check("ok") is True
    assert check("bad") == "not ok"
    # A blank answer is validated as the default
    assert check("") == "not ok"


@pytest.mark.asyncio
@patch("pcpreset.ui.console.questionary.select")
async def test_ask_select(mock_select):
    mock_select.return_value = mock_question("3")
    ui = ConsoleUI()

    answer = await ui.ask_select("Vue版本", {"3": "Vue 3.0"}, default="3")

    assert answer == "3"
    choices = mock_select.call_args.kwargs["choices"]
    assert [(c.title, c.value) for c in choices] == [("Vue 3.0", "3")]


@pytest.mark.asyncio
@patch("pcpreset.ui.console.questionary.confirm")
async def test_ask_confirm(mock_confirm):
    mock_confirm.return_value = mock_question(False)
    ui = ConsoleUI()

    assert await ui.ask_confirm("通过VSCode编译器打开") is False
    assert mock_confirm.call_args.kwargs["default"] is True


@pytest.mark.asyncio
@pytest.mark.parametrize("question", [mock_question(side_effect=KeyboardInterrupt), mock_question(None)])
@patch("pcpreset.ui.console.questionary.text")
async def test_ask_interrupted(mock_text, question):
    mock_text.return_value = question
    ui = ConsoleUI()

    with pytest.raises(UIClosedError):
        await ui.ask_text("Project name")


@patch("pcpreset.ui.console.yaspin")
def test_progress(mock_yaspin):
    spinner = mock_yaspin.return_value
    ui = ConsoleUI()

    progress = ui.progress("正在克隆仓库...")
    spinner.start.assert_called_once_with()

    progress.succeed("克隆成功")
    assert spinner.text == "克隆成功"
    spinner.ok.assert_called_once()
    spinner.fail.assert_not_called()


@patch("pcpreset.ui.console.yaspin")
def test_progress_fail(mock_yaspin):
    spinner = mock_yaspin.return_value
    ui = ConsoleUI()

    ui.progress("正在克隆仓库...").fail("克隆失败")

    assert spinner.text == "克隆失败"
    spinner.fail.assert_called_once()
    spinner.ok.assert_not_called()
