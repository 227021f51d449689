# UI.py
""""PySide6 user interface for the live calculator.

Structure
---------
- Expression display (read-only line edit) with the live result underneath
- Keypad grid whose labels are exactly the keys Calculator.press() understands

Responsibilities
----------------
- Forward button presses and physical key presses to the Calculator
- Render the current text and live result after every action ("Error" in red)
- Clipboard integration: copy the expression, or with Shift held the live result
- Dark/light mode, persisted through config_manager

All evaluation is synchronous: one keystroke is one pass over a short string,
so nothing runs off the UI thread.
"""""

from PySide6 import QtWidgets
from PySide6.QtCore import Qt
import sys
import pyperclip
from . import error as E  # Imports error.py as a module
from . import config_manager as config_manager  # Imports config_manager.py as a module
from . import MathEngine as MathEngine  # Imports MathEngine.py as a module
from .InputMachine import Calculator

COPY_KEY = "📋"
THEME_KEY = "🌓"


def is_shift_pressed():
    """""

    Small and simple check, whether shift is pressed or not.
    Used for the "shift to copy" setting.

    """""
    # Imported here: pynput needs a running display server to load its backend
    from pynput.keyboard import Controller

    keyboard_controller = Controller()
    return keyboard_controller.shift_pressed


class CalculatorWindow(QtWidgets.QWidget):
    shift_is_held = False

    def __init__(self):
        super().__init__()

        # --- 1. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")

        # --- 2. Instance State ---
        self.calculator = Calculator(debug=self.setting_value_list["debug"] == True)
        self.button_objects = {}  # Dictionary to store button widgets

        # --- 3. Window Setup ---
        self.setWindowTitle("Calculator")
        self.resize(320, 520)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        expanding_policy = QtWidgets.QSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding
        )

        # --- 4. Display Setup ---
        self.display = QtWidgets.QLineEdit("")
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.display.setReadOnly(True)
        self.display.setPlaceholderText("Enter expression")
        self.display.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        font = self.display.font()
        font.setPointSize(22)
        self.display.setFont(font)
        main_v_layout.addWidget(self.display)

        self.result_label = QtWidgets.QLabel("0")
        self.result_label.setAlignment(Qt.AlignmentFlag.AlignRight)
        font = self.result_label.font()
        font.setPointSize(30)
        font.setBold(True)
        self.result_label.setFont(font)
        main_v_layout.addWidget(self.result_label)

        # --- 5. Button Grid Setup ---
        button_container = QtWidgets.QWidget()
        main_v_layout.addWidget(button_container, 3)
        button_grid = QtWidgets.QGridLayout(button_container)
        button_grid.setSpacing(4)
        button_grid.setContentsMargins(0, 0, 0, 0)

        # (text, row, column, row span, column span)
        self.buttons = [
            (COPY_KEY, 0, 0, 1, 1), (THEME_KEY, 0, 1, 1, 1), ('AC', 0, 2, 1, 1), ('⌫', 0, 3, 1, 1),
            ('(', 1, 0, 1, 1), (')', 1, 1, 1, 1), ('^', 1, 2, 1, 1), ('√', 1, 3, 1, 1),
            ('%', 2, 0, 1, 1), ('+/-', 2, 1, 1, 1), ('÷', 2, 2, 1, 1), ('×', 2, 3, 1, 1),
            ('7', 3, 0, 1, 1), ('8', 3, 1, 1, 1), ('9', 3, 2, 1, 1), ('-', 3, 3, 1, 1),
            ('4', 4, 0, 1, 1), ('5', 4, 1, 1, 1), ('6', 4, 2, 1, 1), ('+', 4, 3, 1, 1),
            ('1', 5, 0, 1, 1), ('2', 5, 1, 1, 1), ('3', 5, 2, 1, 1), ('=', 5, 3, 2, 1),
            ('0', 6, 0, 1, 2), ('.', 6, 2, 1, 1)
        ]

        for text, row, col, row_span, col_span in self.buttons:
            button = QtWidgets.QPushButton(text)
            button.setSizePolicy(expanding_policy)
            button.setFocusPolicy(Qt.FocusPolicy.NoFocus)
            button.clicked.connect(lambda checked=False, val=text: self.handle_button_press(val))
            button_grid.addWidget(button, row, col, row_span, col_span)
            self.button_objects[text] = button

        self.update_darkmode()  # Apply darkmode on initial load
        self.refresh()

    # --- Input Handling ---
    def handle_button_press(self, value):
        if value == COPY_KEY:
            self.copy_to_clipboard()
            return

        if value == THEME_KEY:
            self.toggle_darkmode()
            return

        self.calculator.press(value)
        self.refresh()

    def keyPressEvent(self, event):
        key = event.key()
        if key == Qt.Key.Key_Shift:
            self.shift_is_held = True
        elif key in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            self.handle_button_press("=")
        elif key == Qt.Key.Key_Backspace:
            self.handle_button_press("⌫")
        elif key in (Qt.Key.Key_Escape, Qt.Key.Key_Delete):
            self.handle_button_press("AC")
        elif event.text():
            self.handle_button_press(event.text())
        super().keyPressEvent(event)

    def keyReleaseEvent(self, event):
        if event.key() == Qt.Key.Key_Shift:
            self.shift_is_held = False
        super().keyReleaseEvent(event)

    def copy_to_clipboard(self):
        use_result = self.setting_value_list["shift_to_copy"] == True and \
                     (self.shift_is_held or is_shift_pressed())
        if use_result and self.calculator.current_live_result():
            pyperclip.copy(self.calculator.current_live_result())
        else:
            pyperclip.copy(self.calculator.current_text())

    # --- Rendering ---
    def refresh(self):
        text = self.calculator.current_text()
        live_result = self.calculator.current_live_result()

        self.display.setText(text)
        if live_result:
            self.result_label.setText(live_result)
        else:
            self.result_label.setText("" if text else "0")

        if live_result == MathEngine.ERROR_TEXT:
            # Tooltip carries the error code and reason behind the plain "Error"
            error = self.calculator.current_error()
            if error is not None:
                self.result_label.setToolTip(E.describe(error))
            self.result_label.setStyleSheet("color: #fa5252;")
        else:
            self.result_label.setToolTip("")
            self.result_label.setStyleSheet(self.result_stylesheet())

        if self.setting_value_list["debug"] == True:
            print(self.calculator.state)

    def result_stylesheet(self):
        if self.setting_value_list["darkmode"] == True:
            return "color: #9bb0d3;"
        return ""

    def update_darkmode(self):
        # --- Apply Dark/Light Mode to all buttons ---
        if self.setting_value_list["darkmode"] == True:
            for text, button in self.button_objects.items():
                if text == '=':
                    button.setStyleSheet("background-color: #2f6df6; color: white; font-weight: bold;")
                else:
                    button.setStyleSheet("background-color: #1f2430; color: white; font-weight: bold;")
            self.setStyleSheet("background-color: #0e1420;")
            self.display.setStyleSheet("background-color: #0e1420; color: #c8d1e1; border: none;")
        else:
            for text, button in self.button_objects.items():
                if text == '=':
                    button.setStyleSheet("background-color: #007bff; color: white; font-weight: bold;")
                else:
                    button.setStyleSheet("font-weight: normal;")
            self.setStyleSheet("")
            self.display.setStyleSheet("")

    def toggle_darkmode(self):
        self.setting_value_list["darkmode"] = not self.setting_value_list["darkmode"]
        saved_settings = config_manager.save_setting(self.setting_value_list)
        if saved_settings == {}:
            QtWidgets.QMessageBox.critical(self, "Error", f"Error 5000: {E.ERROR_MESSAGES['5000']}")
        self.update_darkmode()
        self.refresh()


def main():
    # --- Main Application Entry Point ---
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(sys.argv)
    window = CalculatorWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
