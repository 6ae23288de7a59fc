"""Tests for compound fractions."""

import pytest

from crew_wx.utils import CompoundFraction


class TestParse:
    """Test parsing of written values."""

    def test_whole(self):
        fraction = CompoundFraction.parse("10")
        assert fraction.whole == 10
        assert fraction.numerator is None
        assert fraction.denominator is None

    def test_fraction(self):
        fraction = CompoundFraction.parse("3/4")
        assert fraction.whole is None
        assert fraction.numerator == 3
        assert fraction.denominator == 4

    def test_whole_and_fraction(self):
        fraction = CompoundFraction.parse("1 1/2")
        assert fraction == CompoundFraction(1, 1, 2)

    def test_surrounding_whitespace(self):
        assert CompoundFraction.parse(" 1/4 ") == CompoundFraction(numerator=1, denominator=4)

    @pytest.mark.parametrize("text", ["", "1/", "a", "1 1", "1/2 1", "1 1/2 1/4", "1.5"])
    def test_invalid(self, text):
        with pytest.raises(ValueError, match="Not a compound fraction"):
            CompoundFraction.parse(text)

    def test_zero_denominator(self):
        with pytest.raises(ValueError, match="Zero denominator"):
            CompoundFraction.parse("1/0")


class TestValue:
    """Test construction rules and accessors."""

    def test_not_reduced(self):
        assert CompoundFraction.parse("1/2") != CompoundFraction.parse("2/4")

    def test_str_reproduces_input(self):
        for text in ("2", "5/8", "1 3/4"):
            assert str(CompoundFraction.parse(text)) == text

    def test_empty(self):
        with pytest.raises(ValueError, match="Empty"):
            CompoundFraction()

    def test_numerator_without_denominator(self):
        with pytest.raises(ValueError):
            CompoundFraction(whole=1, numerator=1)

    def test_whole_or_zero(self):
        assert CompoundFraction.parse("1/2").whole_or_zero == 0
        assert CompoundFraction.parse("2 1/2").whole_or_zero == 2

    def test_remove_whole(self):
        assert CompoundFraction.parse("2 1/2").remove_whole() == CompoundFraction.parse("1/2")
        assert CompoundFraction.parse("2").remove_whole() is None

    def test_hashable(self):
        assert len({CompoundFraction.parse("1/2"), CompoundFraction(numerator=1, denominator=2)}) == 1
