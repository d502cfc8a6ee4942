"""
Calculator Keypad Widget for CalcPad.
Touch-friendly four-function keypad with a result display. All arithmetic
is delegated to CalculatorEngine; this module only maps buttons and keys
onto engine events and renders the engine's output.
"""
from typing import Dict, Optional

from PySide6.QtWidgets import QFrame, QGridLayout, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget
from PySide6.QtCore import Qt, Signal, QSize
from PySide6.QtGui import QFont, QKeyEvent

from calculator_engine import CalculatorEngine, DEFAULT_SIGNIFICANT_DIGITS
from key_bindings import KeyAction, OPERATOR_GLYPHS, dispatch, resolve_key
from logger import LogCategory, LoggableMixin


class KeypadLayout:
    """Keypad layout definitions."""

    # (label, row, column, row span, column span)
    KEYS = [
        ('C', 0, 0, 1, 1), ('÷', 0, 1, 1, 1), ('×', 0, 2, 1, 1), ('⌫', 0, 3, 1, 1),
        ('7', 1, 0, 1, 1), ('8', 1, 1, 1, 1), ('9', 1, 2, 1, 1), ('−', 1, 3, 1, 1),
        ('4', 2, 0, 1, 1), ('5', 2, 1, 1, 1), ('6', 2, 2, 1, 1), ('+', 2, 3, 1, 1),
        ('1', 3, 0, 1, 1), ('2', 3, 1, 1, 1), ('3', 3, 2, 1, 1), ('=', 3, 3, 2, 1),
        ('0', 4, 0, 1, 2), ('.', 4, 2, 1, 1),
    ]

    ACCESSIBLE_NAMES = {
        'C': 'Clear calculator',
        '÷': 'Divide',
        '×': 'Multiply',
        '⌫': 'Backspace',
        '−': 'Subtract',
        '+': 'Add',
        '=': 'Equals',
        '.': 'Decimal point',
        '0': 'Zero', '1': 'One', '2': 'Two', '3': 'Three', '4': 'Four',
        '5': 'Five', '6': 'Six', '7': 'Seven', '8': 'Eight', '9': 'Nine',
    }

    OBJECT_NAMES = {
        KeyAction.DIGIT: 'digitKey',
        KeyAction.OPERATOR: 'operatorKey',
        KeyAction.EQUALS: 'equalsKey',
        KeyAction.BACKSPACE: 'actionKey',
        KeyAction.CLEAR: 'actionKey',
    }

    # Qt keys whose event text is empty or a control character
    QT_KEY_NAMES = {
        int(Qt.Key_Return): 'Enter',
        int(Qt.Key_Enter): 'Enter',
        int(Qt.Key_Backspace): 'Backspace',
        int(Qt.Key_Escape): 'Escape',
    }


THEME_COLORS = {
    'Dark': {
        'panel': '#1f2630', 'border': '#3d5a8c', 'display': '#141a22', 'text': '#ffffff',
        'digit': '#34404f', 'operator': '#2c5aa0', 'active': '#5a8de0',
        'action': '#8a3b45', 'equals': '#28a745', 'error': '#ff6b6b', 'footer': '#8794a6',
    },
    'Light': {
        'panel': '#f4f6f9', 'border': '#c3cad5', 'display': '#ffffff', 'text': '#1b2430',
        'digit': '#e2e7ee', 'operator': '#c9daf5', 'active': '#8fb2ea',
        'action': '#f3c9ce', 'equals': '#9ad5a7', 'error': '#c62828', 'footer': '#6b7685',
    },
}


class CalculatorKeypad(QWidget, LoggableMixin):
    """Calculator widget hosting a CalculatorEngine."""

    display_changed = Signal(str)
    error_shown = Signal(str)

    def __init__(self, parent=None, engine: Optional[CalculatorEngine] = None,
                 theme: str = 'Dark', font_scale: int = 100):
        QWidget.__init__(self, parent)
        LoggableMixin.__init__(self)

        self.engine = engine or CalculatorEngine(DEFAULT_SIGNIFICANT_DIGITS)
        self.theme = theme if theme in THEME_COLORS else 'Dark'
        self.font_scale = font_scale
        self.button_size = QSize(70, 60)
        self.key_buttons: Dict[str, QPushButton] = {}

        self.setFocusPolicy(Qt.StrongFocus)
        self.setup_ui()
        self.apply_styling()
        self.refresh_display()

        self.log_debug("Calculator keypad initialized", category=LogCategory.DISPLAY)

    def setup_ui(self):
        """Build the display, key grid and footer."""
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(10, 10, 10, 10)

        self.panel_frame = QFrame()
        self.panel_frame.setObjectName("panelFrame")
        panel_layout = QVBoxLayout(self.panel_frame)
        panel_layout.setContentsMargins(15, 15, 15, 15)
        panel_layout.setSpacing(8)

        self.create_display(panel_layout)
        self.create_key_grid(panel_layout)

        self.footer_label = QLabel("Modern Minimal Calculator")
        self.footer_label.setObjectName("footerLabel")
        self.footer_label.setAlignment(Qt.AlignCenter)
        panel_layout.addWidget(self.footer_label)

        main_layout.addWidget(self.panel_frame)

    def create_display(self, layout):
        """Create the display area showing the current value or error."""
        display_frame = QFrame()
        display_frame.setObjectName("displayFrame")
        display_frame.setFixedHeight(int(64 * self.font_scale / 100))

        display_layout = QHBoxLayout(display_frame)
        display_layout.setContentsMargins(10, 5, 10, 5)

        self.display_label = QLabel("0")
        self.display_label.setObjectName("displayLabel")
        self.display_label.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
        self.display_label.setAccessibleName("Calculator display")

        display_layout.addWidget(self.display_label)
        layout.addWidget(display_frame)

    def create_key_grid(self, layout):
        """Create the grid of calculator keys."""
        keys_widget = QWidget()
        self.keys_layout = QGridLayout(keys_widget)
        self.keys_layout.setContentsMargins(0, 0, 0, 0)
        self.keys_layout.setSpacing(6)

        for label, row, col, row_span, col_span in KeypadLayout.KEYS:
            button = self.create_key_button(label)
            self.keys_layout.addWidget(button, row, col, row_span, col_span)
            self.key_buttons[label] = button

        layout.addWidget(keys_widget)

    def create_key_button(self, label: str) -> QPushButton:
        """Create a key button wired to the engine."""
        command = resolve_key(label)
        button = QPushButton(label)
        button.setFont(QFont("Arial", int(16 * self.font_scale / 100), QFont.Bold))
        button.setMinimumSize(self.button_size)
        button.setObjectName(KeypadLayout.OBJECT_NAMES[command.action])
        button.setAccessibleName(KeypadLayout.ACCESSIBLE_NAMES[label])
        button.setToolTip(KeypadLayout.ACCESSIBLE_NAMES[label])
        button.setFocusPolicy(Qt.NoFocus)
        button.clicked.connect(lambda checked=False, key=label: self.press_key(key))
        return button

    def apply_styling(self):
        """Apply the theme stylesheet, scaled by the configured font scale."""
        colors = THEME_COLORS[self.theme]
        display_size = int(26 * self.font_scale / 100)
        key_size = int(16 * self.font_scale / 100)
        style = f"""
        QFrame#panelFrame {{
            background-color: {colors['panel']};
            border: 2px solid {colors['border']};
            border-radius: 15px;
        }}
        QFrame#displayFrame {{
            background-color: {colors['display']};
            border: 1px solid {colors['border']};
            border-radius: 8px;
        }}
        QLabel#displayLabel {{
            color: {colors['text']};
            font-size: {display_size}px;
            font-weight: bold;
        }}
        QLabel#displayLabel[error="true"] {{
            color: {colors['error']};
            font-size: {int(display_size * 0.7)}px;
        }}
        QLabel#footerLabel {{
            color: {colors['footer']};
            font-size: {int(key_size * 0.7)}px;
        }}
        QPushButton {{
            border-radius: 8px;
            color: {colors['text']};
            font-size: {key_size}px;
            font-weight: 600;
        }}
        QPushButton:pressed {{
            margin-top: 2px;
        }}
        QPushButton#digitKey {{
            background-color: {colors['digit']};
        }}
        QPushButton#operatorKey {{
            background-color: {colors['operator']};
        }}
        QPushButton#operatorKey[active="true"] {{
            background-color: {colors['active']};
            border: 2px solid {colors['text']};
        }}
        QPushButton#actionKey {{
            background-color: {colors['action']};
        }}
        QPushButton#equalsKey {{
            background-color: {colors['equals']};
        }}
        """
        self.setStyleSheet(style)

    def press_key(self, key: str) -> bool:
        """Feed a key name or button label to the engine and re-render."""
        command = resolve_key(key)
        if command is None:
            return False
        dispatch(self.engine, command)
        self.log_user_action("calculator_key_press", {"key": key, "action": command.action.name})
        self.refresh_display()
        return True

    def refresh_display(self):
        """Render the engine output and operator highlight."""
        text, is_error = self.engine.render()
        self.display_label.setText(text)
        self._set_dynamic_property(self.display_label, "error", is_error)

        for glyph, symbol in OPERATOR_GLYPHS.items():
            self._set_dynamic_property(self.key_buttons[glyph], "active",
                                       self.engine.is_operator_active(symbol))
        self._set_dynamic_property(self.key_buttons['+'], "active",
                                   self.engine.is_operator_active('+'))

        if is_error:
            self.log_warning(f"Displaying error: {text}", category=LogCategory.DISPLAY)
            self.error_shown.emit(text)
        self.display_changed.emit(text)

    @staticmethod
    def _set_dynamic_property(widget: QWidget, name: str, value: bool):
        if widget.property(name) == value:
            return
        widget.setProperty(name, value)
        # Dynamic-property selectors only re-evaluate after a re-polish
        widget.style().unpolish(widget)
        widget.style().polish(widget)

    def keyPressEvent(self, event: QKeyEvent):
        """Route keyboard input through the key bindings."""
        key = KeypadLayout.QT_KEY_NAMES.get(int(event.key()), event.text())
        if self.press_key(key):
            event.accept()
            return
        super().keyPressEvent(event)
