"""
Unit tests for input classification.
"""
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from calc_core.tokens import (
    BUTTON_VALUES,
    Delete,
    Digit,
    Equals,
    Operator,
    classify,
    key_to_value,
    split_tokens,
    token_to_value,
)


class TestClassify:
    """Button values to tokens."""

    @pytest.mark.parametrize("value", list("0123456789"))
    def test_digits(self, value):
        assert classify(value) == Digit(value)

    @pytest.mark.parametrize("value", ["+", "-", "*", "/"])
    def test_operators(self, value):
        assert classify(value) == Operator(value)

    def test_equals_and_delete(self):
        assert classify("=") == Equals()
        assert classify("DEL") == Delete()

    @pytest.mark.parametrize("value", ["", "x", "12", "del", "%", ".", " ", None, 5])
    def test_everything_else_is_ignored(self, value):
        assert classify(value) is None

    def test_every_button_value_round_trips(self):
        for value in BUTTON_VALUES:
            assert token_to_value(classify(value)) == value

    def test_tokens_validate_their_payload(self):
        with pytest.raises(ValueError):
            Digit("12")
        with pytest.raises(ValueError):
            Operator("=")


class TestKeys:
    """Keyboard names to button values."""

    @pytest.mark.parametrize("key, value", [
        ("7", "7"),
        ("+", "+"),
        ("/", "/"),
        ("=", "="),
        ("Enter", "="),
        ("Return", "="),
        ("Delete", "DEL"),
        ("Backspace", "DEL"),
    ])
    def test_known_keys(self, key, value):
        assert key_to_value(key) == value

    @pytest.mark.parametrize("key", ["", "a", "Shift", "DEL", "Escape", "%"])
    def test_unknown_keys(self, key):
        assert key_to_value(key) is None


class TestSplitTokens:
    """Free text to button values."""

    def test_spaced_input(self):
        assert split_tokens("12 + 3 =") == ["1", "2", "+", "3", "="]

    def test_compact_input(self):
        assert split_tokens("12+3=") == ["1", "2", "+", "3", "="]

    def test_delete_word(self):
        assert split_tokens("12DEL del") == ["1", "2", "DEL", "DEL"]

    def test_unknown_characters_are_kept(self):
        assert split_tokens("5x") == ["5", "x"]

    def test_blank(self):
        assert split_tokens("   ") == []
