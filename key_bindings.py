"""Mapping of keyboard keys and keypad labels onto calculator commands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Optional

from calculator_engine import DIGIT_CHARACTERS, CalculatorEngine, Operator


class KeyAction(Enum):
    """Engine operations a key can trigger."""

    DIGIT = auto()
    OPERATOR = auto()
    EQUALS = auto()
    BACKSPACE = auto()
    CLEAR = auto()


@dataclass(frozen=True)
class KeyCommand:
    """A resolved key: the action to run and its argument, if any."""

    action: KeyAction
    value: Optional[str] = None


# Keypad glyphs shown on buttons, mapped to the keyboard operator symbols
OPERATOR_GLYPHS: Dict[str, str] = {
    "÷": Operator.DIVIDE.value,
    "×": Operator.MULTIPLY.value,
    "−": Operator.SUBTRACT.value,
}

NAMED_KEYS: Dict[str, KeyCommand] = {
    "Enter": KeyCommand(KeyAction.EQUALS),
    "Return": KeyCommand(KeyAction.EQUALS),
    "=": KeyCommand(KeyAction.EQUALS),
    "Backspace": KeyCommand(KeyAction.BACKSPACE),
    "⌫": KeyCommand(KeyAction.BACKSPACE),
    "Escape": KeyCommand(KeyAction.CLEAR),
    "c": KeyCommand(KeyAction.CLEAR),
    "C": KeyCommand(KeyAction.CLEAR),
}


def resolve_key(key: str) -> Optional[KeyCommand]:
    """Resolve a key name or keypad label, or ``None`` if the key is unbound."""

    if not key:
        return None
    if key in NAMED_KEYS:
        return NAMED_KEYS[key]
    if key in DIGIT_CHARACTERS:
        return KeyCommand(KeyAction.DIGIT, key)

    symbol = OPERATOR_GLYPHS.get(key, key)
    if symbol in {op.value for op in Operator}:
        return KeyCommand(KeyAction.OPERATOR, symbol)
    return None


def dispatch(engine: CalculatorEngine, command: KeyCommand) -> None:
    """Apply ``command`` to ``engine``."""

    if command.action is KeyAction.DIGIT:
        engine.digit(command.value)
    elif command.action is KeyAction.OPERATOR:
        engine.operator_press(command.value)
    elif command.action is KeyAction.EQUALS:
        engine.equals()
    elif command.action is KeyAction.BACKSPACE:
        engine.backspace()
    elif command.action is KeyAction.CLEAR:
        engine.clear_all()


def handle_key(engine: CalculatorEngine, key: str) -> bool:
    """Resolve and apply ``key``; returns whether the key was consumed."""

    command = resolve_key(key)
    if command is None:
        return False
    dispatch(engine, command)
    return True
