"""
CalcPad - Four-Function Calculator
Main Application Module
Builds the Qt application, loads and validates persisted settings, and
shows the calculator keypad.
"""
import sys
from typing import Any, Dict, List, Optional

from PySide6.QtWidgets import QApplication, QMainWindow, QStatusBar, QWidget
from PySide6.QtCore import QSettings

from calculator_engine import CalculatorEngine
from config_validation import DEFAULT_SETTINGS, ValidationIssue, resolve_settings
from keypad import CalculatorKeypad
from logger import LogCategory, get_logger

# QSettings keys for each setting name
SETTINGS_KEYS = {
    "significant_digits": "calculator/significant_digits",
    "font_scale": "display/font_scale",
    "theme": "display/theme",
    "log_retention": "general/log_retention",
}


def load_settings(settings: QSettings) -> Dict[str, Any]:
    """Read raw setting values, falling back to defaults for missing keys."""
    return {
        name: settings.value(key, DEFAULT_SETTINGS[name])
        for name, key in SETTINGS_KEYS.items()
    }


def save_settings(settings: QSettings, values: Dict[str, Any]):
    """Persist effective setting values."""
    for name, key in SETTINGS_KEYS.items():
        settings.setValue(key, values[name])


class MainWindow(QMainWindow):
    """Top-level window hosting the calculator keypad."""

    def __init__(self, config: Dict[str, Any], parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.logger = get_logger()
        self.config = config

        self.setWindowTitle("CalcPad")
        self.engine = CalculatorEngine(significant_digits=config["significant_digits"])
        self.keypad = CalculatorKeypad(
            engine=self.engine,
            theme=config["theme"],
            font_scale=config["font_scale"],
        )
        self.setCentralWidget(self.keypad)
        self.keypad.setFocus()

        self.setStatusBar(QStatusBar())
        self.keypad.error_shown.connect(self.statusBar().showMessage)
        self.keypad.display_changed.connect(self._clear_status_on_recovery)

        self.logger.info("Main window ready", category=LogCategory.SYSTEM,
                         significant_digits=config["significant_digits"],
                         theme=config["theme"])

    def _clear_status_on_recovery(self, _text: str):
        if not self.engine.render().is_error:
            self.statusBar().clearMessage()


def report_issues(issues: List[ValidationIssue]):
    """Log settings that were replaced by defaults."""
    logger = get_logger()
    for issue in issues:
        logger.warning(f"{issue.title}: {issue.message} Using default.",
                       category=LogCategory.CONFIG, setting=issue.field)


def main(argv: Optional[List[str]] = None) -> int:
    """Start the calculator GUI and run the Qt event loop."""
    logger = get_logger()
    app = QApplication.instance() or QApplication(argv if argv is not None else sys.argv)
    app.setApplicationName("CalcPad")
    app.setOrganizationName("CalcPad")

    settings = QSettings("CalcPad", "CalcPad")
    config, issues = resolve_settings(load_settings(settings))
    report_issues(issues)
    save_settings(settings, config)

    logger.cleanup_old_logs(days_to_keep=config["log_retention"])

    window = MainWindow(config)
    window.show()
    logger.info("CalcPad started", category=LogCategory.SYSTEM)
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
