import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PySide6.QtWidgets")

from LiveCalc import UI  # noqa: E402


@pytest.fixture(scope="module")
def app():
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])


@pytest.fixture
def window(app, monkeypatch):
    monkeypatch.setattr(UI, "is_shift_pressed", lambda: False)
    widget = UI.CalculatorWindow()
    yield widget
    widget.close()


def click(window, *labels):
    for label in labels:
        window.button_objects[label].click()


class TestCalculatorWindow:

    def test_keypad_has_every_key(self, window):
        for label in "0123456789.+-×÷^√%()=":
            assert label in window.button_objects
        for label in ("AC", "⌫", "+/-"):
            assert label in window.button_objects

    def test_live_result(self, window):
        click(window, "2", "√", "9")
        assert window.display.text() == "2×√9"
        assert window.result_label.text() == "6"
        click(window, "=")
        assert window.display.text() == "6"

    def test_error_tooltip(self, window):
        click(window, "5", "÷", "0")
        assert window.result_label.text() == "Error"
        assert window.result_label.toolTip().startswith("Error 4000")

    def test_refresh_does_not_re_evaluate(self, window, monkeypatch):
        click(window, "5", "÷", "0")
        monkeypatch.setattr(UI.MathEngine, "explain", lambda *args, **kwargs: pytest.fail("evaluated again"))
        window.refresh()
        assert window.result_label.toolTip().startswith("Error 4000")

    def test_settings_read_once_at_start(self, window, monkeypatch):
        monkeypatch.setattr(UI.config_manager, "load_setting_value",
                            lambda *args, **kwargs: pytest.fail("settings read per keystroke"))
        click(window, "1", "÷", "3", "=")
        assert window.display.text() == "0.3333333333"

    def test_clear_shows_zero(self, window):
        click(window, "7", "AC")
        assert window.display.text() == ""
        assert window.result_label.text() == "0"

    def test_copy_expression_and_result(self, window, monkeypatch):
        copied = []
        monkeypatch.setattr(UI.pyperclip, "copy", copied.append)
        click(window, "1", "+", "2")
        click(window, UI.COPY_KEY)
        window.shift_is_held = True
        click(window, UI.COPY_KEY)
        assert copied == ["1+2", "3"]

    def test_darkmode_toggle_is_saved(self, window, isolated_settings):
        click(window, UI.THEME_KEY)
        assert window.setting_value_list["darkmode"] is True
        assert '"darkmode": true' in isolated_settings.read_text(encoding="utf-8")
