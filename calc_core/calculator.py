"""
Calculator State Machine - two operands, one pending operator, strict
left-to-right chaining.

The state is a single CalculationState owned by a Calculator instance. The
presentation layer feeds it classified input tokens and reads `display` back
(or listens for DISPLAY_CHANGED).
"""
import math
import re
from dataclasses import dataclass, asdict
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from .events import EventEmitter, EventType
from .tokens import (
    DIGITS,
    EQUALS,
    OPERATORS,
    Delete,
    Digit,
    Equals,
    InputToken,
    Operator,
)


ERROR_TEXT = "Error"

_NUMBER_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INFINITY_PREFIX = re.compile(r"^\s*([+-]?)Infinity")


class Phase(Enum):
    """Where the calculator is in an entry cycle."""
    EMPTY = "empty"
    ENTERING_OPERAND1 = "entering_operand1"
    OPERATOR_PENDING = "operator_pending"
    ENTERING_OPERAND2 = "entering_operand2"
    RESULT = "result"


@dataclass
class CalculationState:
    """Mutable arithmetic state plus the text currently on screen."""
    operand1: str = ""
    operand2: str = ""
    operator: str = ""
    result: str = ""
    display: str = ""

    def compose_display(self) -> str:
        """The display implied by the arithmetic fields."""
        return self.operand1 + self.operator + self.operand2

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def parse_number(text: str) -> float:
    """
    Parse the longest numeric prefix of `text`.

    Operands are normally plain digit strings, but a previous result can carry
    a sign, a fraction or an exponent, and deleting characters can leave a
    fragment such as "-". Anything without a numeric prefix is NaN.
    """
    match = _NUMBER_PREFIX.match(text)
    if match:
        return float(match.group(1))
    match = _INFINITY_PREFIX.match(text)
    if match:
        return -math.inf if match.group(1) == "-" else math.inf
    return math.nan


def format_number(value: float) -> str:
    """
    Format a float with the shortest digits that round-trip.

    Integral values drop the fractional part, and plain decimal notation is
    used for decimal exponents from -7 to 21; outside that range the value is
    written as d.ddde+N.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    digits = "".join(str(d) for d in digit_tuple).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    k = len(digits)
    n = k + exponent  # position of the decimal point relative to the digits

    if k <= n <= 21:
        body = digits + "0" * (n - k)
    elif 0 < n <= 21:
        body = digits[:n] + "." + digits[n:]
    elif -6 < n <= 0:
        body = "0." + "0" * (-n) + digits
    else:
        e = n - 1
        mantissa = digits[0] + ("." + digits[1:] if k > 1 else "")
        body = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"
    return sign + body


def apply_operator(left: float, operator: str, right: float) -> Optional[float]:
    """Apply a binary operator. Returns None for division by exactly zero."""
    if operator == "+":
        return left + right
    if operator == "-":
        return left - right
    if operator == "*":
        return left * right
    if operator == "/":
        if right == 0:
            return None
        return left / right
    raise ValueError(f"Unknown operator: {operator!r}")


class Calculator:
    """
    Owns one CalculationState and applies the input transition rules.

    All methods run synchronously on the caller's thread; the instance is
    meant to be created once at startup and handed to whatever handles input.
    """

    def __init__(self, emitter: Optional[EventEmitter] = None):
        self.state = CalculationState()
        self.emitter = emitter
        self._evaluated = False

    # ---- read side -------------------------------------------------------

    @property
    def display(self) -> str:
        return self.state.display

    @property
    def phase(self) -> Phase:
        s = self.state
        if s.operator:
            return Phase.ENTERING_OPERAND2 if s.operand2 else Phase.OPERATOR_PENDING
        if self._evaluated:
            return Phase.RESULT
        if s.operand1:
            return Phase.ENTERING_OPERAND1
        return Phase.EMPTY

    # ---- operations ------------------------------------------------------

    def handle(self, token: InputToken):
        """Dispatch a classified input token."""
        if isinstance(token, Digit):
            self.on_digit(token.value)
        elif isinstance(token, Operator):
            self.on_operator(token.symbol)
        elif isinstance(token, Equals):
            self.on_operator(EQUALS)
        elif isinstance(token, Delete):
            self.on_delete()
        else:
            raise TypeError(f"Unsupported token: {token!r}")

    def on_digit(self, digit: str):
        """Append a digit to whichever operand is being entered."""
        if len(digit) != 1 or digit not in DIGITS:
            raise ValueError(f"Not a digit: {digit!r}")
        before = self.state.display
        s = self.state
        if s.operator:
            s.operand2 += digit
        else:
            s.operand1 += digit
        s.display = s.compose_display()
        self._evaluated = False
        self._publish(before)

    def on_operator(self, op: str):
        """
        Record, replace, evaluate or chain an operator.

        "=" only ever evaluates a complete operation; it is never stored as
        the pending operator, so a repeated "=" is a no-op.
        """
        if op != EQUALS and op not in OPERATORS:
            raise ValueError(f"Not an operator: {op!r}")
        before = self.state.display
        s = self.state

        if op == EQUALS:
            if s.operand1 and s.operator and s.operand2:
                self._evaluate()
                self._publish(before)
            return

        if not s.operator or not s.operand2:
            s.operator = op
            s.display = s.compose_display()
            self._evaluated = False
            self._publish(before)
        elif s.operand1:
            self._evaluate()
            s.operator = op
            s.display = s.result + op
            self._publish(before)

    def evaluate(self):
        """Evaluate the pending operation, if there is one."""
        s = self.state
        if not s.operator:
            return
        before = s.display
        self._evaluate()
        self._publish(before)

    def on_delete(self):
        """Remove the last character from the active field."""
        before = self.state.display
        s = self.state
        if s.operand2:
            s.operand2 = s.operand2[:-1]
        elif s.operator:
            s.operator = ""
        elif s.operand1:
            s.operand1 = s.operand1[:-1]
        s.display = s.compose_display()
        self._evaluated = False
        self._publish(before)

    def reset(self):
        """Return to the empty state."""
        before = self.state.display
        self.state = CalculationState()
        self._evaluated = False
        self._publish(before)

    # ---- internals -------------------------------------------------------

    def _evaluate(self):
        s = self.state
        left = parse_number(s.operand1)
        right = parse_number(s.operand2)
        expression = f"{s.operand1}{s.operator}{s.operand2}"
        value = apply_operator(left, s.operator, right)

        s.operand2 = ""
        s.operator = ""
        self._evaluated = True

        if value is None:
            s.operand1 = ""
            s.display = ERROR_TEXT
            if self.emitter:
                self.emitter.emit_simple(
                    EventType.CALCULATION_ERROR,
                    f"{expression} -> {ERROR_TEXT}",
                    expression=expression,
                )
            return

        text = format_number(value)
        s.operand1 = text
        s.result = text
        s.display = text
        if self.emitter:
            self.emitter.emit_simple(
                EventType.CALCULATION_COMPLETE,
                f"{expression} = {text}",
                expression=expression,
                result=text,
            )

    def _publish(self, previous_display: str):
        if self.emitter and self.state.display != previous_display:
            self.emitter.emit_simple(
                EventType.DISPLAY_CHANGED,
                self.state.display,
                display=self.state.display,
                previous=previous_display,
            )
