"""Widget tests for the calculator keypad."""

from __future__ import annotations

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

QtWidgets = pytest.importorskip("PySide6.QtWidgets")

from PySide6.QtCore import QEvent, Qt  # noqa: E402
from PySide6.QtGui import QKeyEvent  # noqa: E402

from keypad import CalculatorKeypad, KeypadLayout  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture()
def keypad(qapp):
    widget = CalculatorKeypad()
    yield widget
    widget.deleteLater()


def click(keypad: CalculatorKeypad, labels):
    for label in labels:
        keypad.key_buttons[label].click()


def key_event(key, text=""):
    return QKeyEvent(QEvent.KeyPress, key, Qt.NoModifier, text)


def test_every_button_has_an_accessible_name(keypad):
    assert set(keypad.key_buttons) == {label for label, *_ in KeypadLayout.KEYS}
    for label, button in keypad.key_buttons.items():
        assert button.accessibleName() == KeypadLayout.ACCESSIBLE_NAMES[label]


def test_button_clicks_drive_the_engine(keypad):
    shown = []
    keypad.display_changed.connect(shown.append)

    click(keypad, ["7", "×", "6", "="])

    assert keypad.display_label.text() == "42"
    assert shown[-1] == "42"


def test_active_operator_is_highlighted(keypad):
    click(keypad, ["9", "÷"])
    assert keypad.key_buttons["÷"].property("active") is True
    assert keypad.key_buttons["+"].property("active") is False

    click(keypad, ["3"])
    assert keypad.key_buttons["÷"].property("active") is False


def test_error_is_displayed_and_flagged(keypad):
    errors = []
    keypad.error_shown.connect(errors.append)

    click(keypad, ["5", "÷", "0", "="])

    assert keypad.display_label.text() == "Cannot divide by zero"
    assert keypad.display_label.property("error") is True
    assert errors == ["Cannot divide by zero"]

    click(keypad, ["⌫"])
    assert keypad.display_label.text() == "0"
    assert keypad.display_label.property("error") is False


def test_keyboard_input(keypad):
    for key, text in [(Qt.Key_1, "1"), (Qt.Key_2, "2"), (Qt.Key_Plus, "+"), (Qt.Key_3, "3")]:
        keypad.keyPressEvent(key_event(key, text))
    keypad.keyPressEvent(key_event(Qt.Key_Return))
    assert keypad.display_label.text() == "15"

    keypad.keyPressEvent(key_event(Qt.Key_Escape))
    assert keypad.engine.render() == ("0", False)
