"""Tests for the fact/error trail."""

import io

from crew_wx.legal import Result


class TestResult:

    def test_empty(self):
        result = Result()
        assert not result.has_error()
        assert result.facts == []
        assert result.errors == []

    def test_order_kept(self):
        result = Result()
        result.add_fact("first")
        result.add_fact("second")
        result.add_error("problem")
        assert result.facts == ["first", "second"]
        assert result.errors == ["problem"]
        assert result.has_error()

    def test_output(self):
        result = Result()
        result.add_fact("Adding arrival METAR visibility 10SM")
        result.add_error("No suitable arrival approach minimums")
        stream = io.StringIO()
        result.output(stream)
        assert stream.getvalue() == (
            "FACTS\n"
            "Adding arrival METAR visibility 10SM\n"
            "\n"
            "ERRORS\n"
            "No suitable arrival approach minimums\n"
        )

    def test_output_defaults_to_stdout(self, capsys):
        Result().output()
        assert capsys.readouterr().out == "FACTS\n\nERRORS\n"
