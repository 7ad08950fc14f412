"""
Input tokens - the closed set of things a user can send to the calculator.

Raw button values and keyboard names are classified here, at the boundary,
so the state machine only ever sees one of four token kinds.
"""
from dataclasses import dataclass
from typing import Optional, Union


DIGITS = "0123456789"
OPERATORS = ("+", "-", "*", "/")
EQUALS = "="
DELETE = "DEL"

# Every value a button can carry
BUTTON_VALUES = tuple(DIGITS) + OPERATORS + (EQUALS, DELETE)

# Keyboard names that stand in for a button value
KEY_ALIASES = {
    "Enter": EQUALS,
    "Return": EQUALS,
    "KP_Enter": EQUALS,
    "Delete": DELETE,
    "Backspace": DELETE,
}


@dataclass(frozen=True)
class Digit:
    """A single decimal digit."""
    value: str

    def __post_init__(self):
        if len(self.value) != 1 or self.value not in DIGITS:
            raise ValueError(f"Not a digit: {self.value!r}")


@dataclass(frozen=True)
class Operator:
    """One of the four binary arithmetic operators."""
    symbol: str

    def __post_init__(self):
        if self.symbol not in OPERATORS:
            raise ValueError(f"Not an operator: {self.symbol!r}")


@dataclass(frozen=True)
class Equals:
    """Request to evaluate the pending operation."""


@dataclass(frozen=True)
class Delete:
    """Remove the last entered character."""


InputToken = Union[Digit, Operator, Equals, Delete]


def classify(value: str) -> Optional[InputToken]:
    """
    Classify a button value into an input token.

    Args:
        value: Raw value such as "7", "+", "=" or "DEL"

    Returns:
        The matching token, or None when the value is not part of the alphabet
    """
    if not isinstance(value, str):
        return None
    if len(value) == 1 and value in DIGITS:
        return Digit(value)
    if value in OPERATORS:
        return Operator(value)
    if value == EQUALS:
        return Equals()
    if value == DELETE:
        return Delete()
    return None


def key_to_value(key: str) -> Optional[str]:
    """
    Map a keyboard key name to the button value it activates.

    Digits and operator characters map to themselves; Enter and Delete style
    names map through KEY_ALIASES. Unknown keys return None.
    """
    if not key:
        return None
    if key in KEY_ALIASES:
        return KEY_ALIASES[key]
    if key in BUTTON_VALUES and key != DELETE:
        return key
    return None


def token_to_value(token: InputToken) -> str:
    """Return the button value a token came from."""
    if isinstance(token, Digit):
        return token.value
    if isinstance(token, Operator):
        return token.symbol
    if isinstance(token, Equals):
        return EQUALS
    return DELETE


def split_tokens(text: str) -> list:
    """
    Split free text into button values.

    Accepts spaced input ("12 + 3 =") as well as compact input ("12+3="),
    and the word DEL anywhere. Characters outside the alphabet are kept as
    single-character values so callers can report them as ignored.
    """
    values = []
    i = 0
    text = text.strip()
    while i < len(text):
        ch = text[i]
        if ch.isspace():
            i += 1
            continue
        if text[i:i + len(DELETE)].upper() == DELETE:
            values.append(DELETE)
            i += len(DELETE)
            continue
        values.append(ch)
        i += 1
    return values
