"""Tests for directive validators."""

from dataclasses import replace

import pytest

import chronoform
from chronoform._internal.validation import (
    NOOP,
    OneOf,
    Pattern,
    Predicate,
    Validator,
    check_bounds,
)
from chronoform.core.directive import Directive, Kind, Token, Width
from chronoform.core.program import FormatProgram
from chronoform.core.registry import directive_for
from chronoform.errors import ParseError


def _in_2000s(text):
    return text.startswith("20")


class TestValidators:
    """Tests for the validator classes."""

    def test_noop_accepts_anything(self):
        """The base validator accepts every string."""
        assert NOOP("") is True
        assert NOOP("anything") is True
        assert NOOP.describe() == "any value"

    def test_one_of(self):
        """OneOf is case sensitive."""
        validator = OneOf(("am", "pm"))
        assert validator("pm")
        assert not validator("PM")
        assert validator.describe() == "one of 'am', 'pm'"

    def test_pattern(self):
        """Pattern matches from the start of the text."""
        validator = Pattern(r"^[-+]\d{4}$")
        assert validator("+0530")
        assert not validator("0530")
        assert "[-+]" in validator.describe()

    def test_predicate(self):
        """Predicate calls the function and reports its description."""
        validator = Predicate(_in_2000s, "a year in the 2000s")
        assert validator("2024")
        assert not validator("1999")
        assert validator.describe() == "a year in the 2000s"

    def test_predicate_truthiness(self):
        """Predicate results are coerced to bool."""
        validator = Predicate(len)
        assert validator("abc") is True
        assert validator("") is False
        assert validator.describe() == "a valid value"

    def test_validators_are_validators(self):
        """Every validator shares the base class."""
        for validator in (NOOP, OneOf(("a",)), Pattern("a"), Predicate(bool)):
            assert isinstance(validator, Validator)


class TestCheckBounds:
    """Tests for check_bounds."""

    @pytest.mark.parametrize("value", [1, 6, 12])
    def test_within(self, value):
        """Inclusive bounds accept both ends."""
        check_bounds(value, (1, 12))

    def test_below(self):
        """Values under the minimum are rejected."""
        with pytest.raises(ValueError, match="below the minimum of 1"):
            check_bounds(0, (1, 12))

    def test_above(self):
        """Values over the maximum are rejected."""
        with pytest.raises(ValueError, match="above the maximum of 12"):
            check_bounds(13, (1, 12))

    def test_open_ends(self):
        """None leaves an end open."""
        check_bounds(10**12, (0, None))
        check_bounds(-5, (None, 0))
        check_bounds(7, None)


class TestDirectiveValidators:
    """Tests that parse runs a directive's validator."""

    def _program(self, validator):
        year = replace(directive_for(Token.YEAR4, raw="YYYY"), validator=validator)
        return FormatProgram(
            (year, Directive.literal("-"), directive_for(Token.MONTH, raw="M")),
            "default",
            "<validated>",
        )

    def test_predicate_accepts(self):
        """Text the predicate accepts parses normally."""
        program = self._program(Predicate(_in_2000s, "a year in the 2000s"))
        result = chronoform.parse("2024-5", program)
        assert (result.year, result.month) == (2024, 5)

    def test_predicate_rejects(self):
        """Text the predicate rejects is a parse error naming the rule."""
        program = self._program(Predicate(_in_2000s, "a year in the 2000s"))
        with pytest.raises(ParseError, match="a year in the 2000s") as excinfo:
            chronoform.parse("1999-5", program)
        assert excinfo.value.position == 0
        assert excinfo.value.token is Token.YEAR4

    def test_noop_accepts(self):
        """The no-op validator never rejects."""
        result = chronoform.parse("1999-5", self._program(NOOP))
        assert result.year == 1999

    def test_pattern_on_word(self):
        """Word directives are validated before the name lookup."""
        month = replace(
            directive_for(Token.MONTH_FULL, raw="Mfull"),
            validator=Pattern(r"^[A-Z]"),
        )
        program = FormatProgram((month,), "default", "<validated>")
        assert chronoform.parse("March", program).month == 3
        with pytest.raises(ParseError, match="text matching"):
            chronoform.parse("march", program)

    def test_one_of_on_match(self):
        """Match directives use their validator."""
        marker = replace(
            directive_for(Token.AM_LOWER, raw="am"),
            validator=OneOf(("pm",)),
        )
        program = FormatProgram(
            (directive_for(Token.HOUR12, raw="h12"), marker), "default", "<validated>"
        )
        assert chronoform.parse("3pm", program).hour == 15
        with pytest.raises(ParseError, match="one of 'pm'"):
            chronoform.parse("3am", program)

    def test_hand_built_directive(self):
        """Custom numeric directives can carry a predicate and bounds."""
        even_day = Directive(
            token=Token.DAY,
            kind=Kind.NUMERIC,
            width=Width.range(1, 2),
            bounds=(1, 31),
            validator=Predicate(lambda text: int(text) % 2 == 0, "an even day"),
        )
        program = FormatProgram((even_day,), "default", "<validated>")
        assert chronoform.parse("12", program).day == 12
        with pytest.raises(ParseError, match="an even day"):
            chronoform.parse("13", program)
