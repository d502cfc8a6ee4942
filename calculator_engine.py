"""Immediate-execution input engine for the CalcPad four-function calculator.

The engine interprets digit, operator and control events into a display
string, one pending operand, one pending operator and an optional error
message. It holds no presentation state; hosts call the event methods and
read back :meth:`CalculatorEngine.render`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal
from enum import Enum
from typing import NamedTuple, Optional, Tuple, Union

from logger import LogCategory, get_logger

DEFAULT_SIGNIFICANT_DIGITS = 12
DIGIT_CHARACTERS = frozenset("0123456789.")


class Operator(Enum):
    """Supported binary operators, keyed by their keyboard symbol."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    @classmethod
    def coerce(cls, value: Union["Operator", str]) -> "Operator":
        """Return the operator for ``value``, raising ``ValueError`` if unknown."""

        if isinstance(value, cls):
            return value
        return cls(value)


class CalculatorErrorKind(Enum):
    """Recoverable calculation failures and the message each one displays."""

    INVALID_INPUT = "Invalid input"
    DIVISION_BY_ZERO = "Cannot divide by zero"
    UNKNOWN_OPERATOR = "Unknown operator"

    @property
    def message(self) -> str:
        return self.value


class CalculationError(Exception):
    """Raised by the arithmetic step; never leaves :class:`CalculatorEngine`."""

    def __init__(self, kind: CalculatorErrorKind):
        super().__init__(kind.message)
        self.kind = kind


@dataclass
class CalculatorState:
    """Mutable state owned by a single engine."""

    display: str = "0"
    operand: Optional[float] = None
    operator: Optional[Operator] = None
    waiting_for_operand: bool = False
    error: Optional[str] = None


class RenderResult(NamedTuple):
    """Text a host should show, and whether it is an error message."""

    text: str
    is_error: bool


def round_significant(value: float, digits: int = DEFAULT_SIGNIFICANT_DIGITS) -> float:
    """Round ``value`` to ``digits`` significant digits.

    Rounding is done on the exact binary value with ties away from zero, so
    representation noise such as ``0.30000000000000004`` collapses back to
    ``0.3``. Non-finite values pass through untouched.
    """

    if not math.isfinite(value) or value == 0:
        return value
    context = Context(prec=digits, rounding=ROUND_HALF_UP)
    return float(context.plus(Decimal(value)))


def format_number(value: float) -> str:
    """Render ``value`` the way the calculator display shows numbers.

    Integral values drop their fractional part, magnitudes in ``[1e-6, 1e21)``
    use positional notation and everything else uses exponent notation with
    an explicit sign (``1e+21``, ``1.5e-7``).
    """

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    text = repr(value)
    if "e" in text:
        mantissa, exponent = text.split("e")
        exponent_value = int(exponent)
        if -7 < exponent_value < 21:
            return format(Decimal(text), "f")
        sign = "+" if exponent_value >= 0 else "-"
        return f"{mantissa}e{sign}{abs(exponent_value)}"
    if text.endswith(".0"):
        return text[:-2]
    return text


def parse_display(text: str) -> float:
    """Parse display text, returning NaN for anything unparsable."""

    try:
        return float(text)
    except ValueError:
        return math.nan


class CalculatorEngine:
    """Finite-state calculator input model.

    Each public method handles one input event to completion. Calculation
    failures are reported through ``state.error`` and never raised.
    """

    def __init__(self, significant_digits: int = DEFAULT_SIGNIFICANT_DIGITS) -> None:
        self.significant_digits = significant_digits
        self.state = CalculatorState()
        self.logger = get_logger()

    def digit(self, ch: str) -> None:
        """Handle a digit or decimal point key."""

        if ch not in DIGIT_CHARACTERS:
            raise ValueError(f"Not a digit key: {ch!r}")

        state = self.state
        state.error = None

        if state.waiting_for_operand:
            state.display = "0." if ch == "." else ch
            state.waiting_for_operand = False
        elif ch == "." and "." in state.display:
            return
        elif state.display == "0" and ch != ".":
            state.display = ch
        else:
            state.display += ch

        self.logger.debug("Digit entered", category=LogCategory.INPUT,
                          digit=ch, display=state.display)

    def operator_press(self, op: Union[Operator, str]) -> None:
        """Handle an operator key, evaluating any pending operation first."""

        next_operator = Operator.coerce(op)
        state = self.state
        state.error = None

        if state.operator is not None and state.waiting_for_operand:
            state.operator = next_operator
            self.logger.debug("Pending operator replaced", category=LogCategory.INPUT,
                              operator=next_operator.value)
            return

        input_value = parse_display(state.display)
        if state.operand is None:
            state.operand = input_value
        elif state.operator is not None:
            result = self.perform_calculation(state.operand, input_value, state.operator)
            if result is None:
                return
            state.operand = result
            state.display = format_number(result)

        state.operator = next_operator
        state.waiting_for_operand = True
        self.logger.debug("Operator pressed", category=LogCategory.INPUT,
                          operator=next_operator.value, operand=state.operand)

    def equals(self) -> None:
        """Evaluate the pending operation, if a second operand has been entered."""

        state = self.state
        if state.operator is None or state.waiting_for_operand:
            return

        input_value = parse_display(state.display)
        result = self.perform_calculation(state.operand, input_value, state.operator)
        if result is None:
            return

        state.display = format_number(result)
        state.operand = None
        state.operator = None
        state.waiting_for_operand = True

    def perform_calculation(self, left: Optional[float], right: Optional[float],
                            op: Union[Operator, str, None]) -> Optional[float]:
        """Apply ``op`` to the operands.

        Returns the rounded result, or ``None`` after setting ``state.error``
        when the operation cannot be carried out.
        """

        try:
            operator, result = self._evaluate(left, right, op)
        except CalculationError as exc:
            self.state.error = exc.kind.message
            self.logger.log_calculation_error(exc.kind.name, exc.kind.message,
                                              left=left, right=right, operator=str(op))
            return None

        result = round_significant(result, self.significant_digits)
        self.logger.log_calculation(operator.value, left, right, result)
        return result

    @staticmethod
    def _evaluate(left, right, op) -> Tuple[Operator, float]:
        if left is None or right is None or math.isnan(left) or math.isnan(right):
            raise CalculationError(CalculatorErrorKind.INVALID_INPUT)
        try:
            operator = Operator.coerce(op)
        except ValueError:
            raise CalculationError(CalculatorErrorKind.UNKNOWN_OPERATOR) from None

        if operator is Operator.ADD:
            return operator, left + right
        if operator is Operator.SUBTRACT:
            return operator, left - right
        if operator is Operator.MULTIPLY:
            return operator, left * right
        if right == 0:
            raise CalculationError(CalculatorErrorKind.DIVISION_BY_ZERO)
        return operator, left / right

    def clear_all(self) -> None:
        """Reset every field to its initial value."""

        self.state = CalculatorState()
        self.logger.debug("Calculator cleared", category=LogCategory.INPUT)

    def backspace(self) -> None:
        """Delete the last typed character; an error forces a full reset."""

        state = self.state
        if state.error:
            self.clear_all()
            return

        if not state.waiting_for_operand and len(state.display) > 1:
            state.display = state.display[:-1]
        else:
            state.display = "0"

    def is_operator_active(self, op: Union[Operator, str]) -> bool:
        """True when ``op`` is pending and no digit has been typed since."""

        return self.state.waiting_for_operand and self.state.operator is Operator.coerce(op)

    def render(self) -> RenderResult:
        """Project the state onto the text a host should display."""

        if self.state.error:
            return RenderResult(self.state.error, True)
        return RenderResult(self.state.display, False)
