"""
Property-based tests using Hypothesis.

These tests verify the scanner, parser and evaluator invariants across
arbitrary input rather than a handful of fixed strings.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from lox.core.errors import DiagnosableError
from lox.core.expression_lang.tokenizer import tokenize
from lox.core.interpreter import interpret
from lox.core.ir.values import NumberValue, format_number, number
from lox.core.source import REPL_SOURCE_ID

# Characters that make up most well-formed (and nearly well-formed) expressions
EXPRESSION_ALPHABET = "0123456789.+-*/()!<>= \"\ntruefalsenil"

# =============================================================================
# Scanner and Interpreter Property Tests
# =============================================================================


class TestProperties:
    """Property-based tests for scanning and interpreting."""

    @given(st.text(min_size=0, max_size=200))
    @settings(max_examples=200)
    def test_each_lexeme_rescans_to_one_token(self, text: str) -> None:
        """Invariant: a token's lexeme scanned alone gives one token of the same kind."""
        for token in tokenize(text):
            rescanned = tokenize(token.lexeme)
            assert len(rescanned) == 1
            assert rescanned[0].kind == token.kind
            assert rescanned[0].lexeme == token.lexeme

    @given(st.text(min_size=0, max_size=200))
    @settings(max_examples=200)
    def test_tokens_cover_the_input_in_order(self, text: str) -> None:
        """Invariant: token spans are increasing and never overlap."""
        end = 0
        for token in tokenize(text):
            assert token.location.offset >= end
            end = token.location.end
        assert end <= len(text)

    @given(st.text(min_size=0, max_size=500))
    @settings(max_examples=200)
    def test_interpret_never_crashes_on_arbitrary_input(self, text: str) -> None:
        """Invariant: interpret only ever raises DiagnosableError."""
        try:
            interpret(REPL_SOURCE_ID, text)
        except DiagnosableError as e:
            assert e.diagnosis().message

    @given(st.text(alphabet=st.sampled_from(EXPRESSION_ALPHABET), max_size=300))
    @settings(max_examples=300)
    def test_interpret_never_crashes_on_expression_like_input(self, text: str) -> None:
        """Invariant: near-miss expressions are diagnosed, never a Python error."""
        try:
            interpret(REPL_SOURCE_ID, text)
        except DiagnosableError as e:
            assert e.diagnosis().message

    @given(st.integers(min_value=0, max_value=2**53))
    @settings(max_examples=200)
    def test_integer_literal_round_trips(self, n: int) -> None:
        """Invariant: a whole literal evaluates to itself and displays without `.0`."""
        value = interpret(REPL_SOURCE_ID, str(n))
        assert value == number(n)
        assert str(value) == str(n)

    @given(st.integers(min_value=0, max_value=10**6), st.integers(min_value=0, max_value=999))
    @settings(max_examples=100)
    def test_fractional_literal_display(self, whole: int, frac: int) -> None:
        """Invariant: a fractional literal displays like the float it denotes."""
        text = f"{whole}.{frac:03d}"
        value = interpret(REPL_SOURCE_ID, text)
        assert isinstance(value, NumberValue)
        expected = float(text)
        assert value.value == expected
        if frac == 0:
            assert str(value) == str(whole)
        else:
            assert str(value) == repr(expected)

    @given(st.integers(min_value=-(2**70), max_value=2**70).map(float))
    def test_whole_floats_display_as_integers(self, n: float) -> None:
        """Invariant: whole finite numbers never render with a fractional part."""
        assert "." not in format_number(n)
