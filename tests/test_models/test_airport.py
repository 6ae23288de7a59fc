"""Tests for approach selection by wind and runway condition."""

import pytest

from crew_wx.legal import Result
from crew_wx.models import Airport, Approach
from crew_wx.weather import Visibility, Wind


@pytest.fixture
def abe() -> Airport:
    return Airport(
        faa_id="ABE",
        icao="KABE",
        name="Lehigh Valley Intl",
        variation="11W",
        approaches=[
            Approach("ILS OR LOC RWY 06", runway_number=6, visibility=Visibility.rvr(18)),
            Approach("RNAV (GPS) RWY 13", runway_number=13,
                     c_visibility=Visibility.statute_mile("1"),
                     d_visibility=Visibility.statute_mile("1 1/4")),
            Approach("VOR-A", c_visibility=Visibility.statute_mile("1 1/2"),
                     d_visibility=Visibility.statute_mile("2")),
        ],
    )


class TestApproach:

    def test_all_categories(self):
        approach = Approach("ILS RWY 06", 6, visibility=Visibility.rvr(18),
                            d_visibility=Visibility.statute_mile("1"))
        assert approach.minimum_visibility(category_d=True) == Visibility.rvr(18)
        assert approach.minimum_visibility(category_d=False) == Visibility.rvr(18)

    def test_by_category(self):
        approach = Approach("VOR-A", c_visibility=Visibility.statute_mile("1 1/2"),
                            d_visibility=Visibility.statute_mile("2"))
        assert approach.minimum_visibility(category_d=True) == Visibility.statute_mile("2")
        assert approach.minimum_visibility(category_d=False) == Visibility.statute_mile("1 1/2")

    def test_not_published(self):
        approach = Approach("VOR-A", c_visibility=Visibility.statute_mile("1 1/2"))
        assert approach.minimum_visibility(category_d=True) is None


class TestSuitableApproachMinimums:

    def test_calm_category_d(self, abe):
        minimums = abe.get_suitable_approach_minimums([], True, 6, Result())
        assert minimums == {Visibility.rvr(18), Visibility.statute_mile("1 1/4"),
                            Visibility.statute_mile("2")}

    def test_calm_category_c(self, abe):
        minimums = abe.get_suitable_approach_minimums([], False, 6, Result())
        assert minimums == {Visibility.rvr(18), Visibility.statute_mile("1"),
                            Visibility.statute_mile("1 1/2")}

    def test_calm_facts(self, abe):
        result = Result()
        abe.get_suitable_approach_minimums([], True, 6, result)
        assert "Runway 06 worst steady wind xwind:00 tailwind:00" in result.facts
        assert "Runway 13 worst gusty wind xwind:00 tailwind:00" in result.facts

    def test_condition_code_zero(self, abe):
        result = Result()
        minimums = abe.get_suitable_approach_minimums([], True, 0, result)
        assert minimums == {Visibility.statute_mile("2")}
        assert result.facts == [
            "Excluding runway 06 due to condition code 0",
            "Excluding runway 13 due to condition code 0",
        ]

    def test_crosswind_excludes_runway(self, abe):
        winds = [Wind.directional(150, 30)]
        minimums = abe.get_suitable_approach_minimums(winds, True, 6, Result())
        assert Visibility.rvr(18) not in minimums
        assert Visibility.statute_mile("1 1/4") in minimums

    def test_worst_of_all_winds(self, abe):
        winds = [Wind.directional(60, 10), Wind.directional(150, 30)]
        minimums = abe.get_suitable_approach_minimums(winds, True, 6, Result())
        assert Visibility.rvr(18) not in minimums


class TestRunwayConditionCode:

    @pytest.mark.parametrize("code, suitable", [(6, True), (5, True), (4, False), (3, False)])
    def test_gusts_count_at_four_and_below(self, abe, code, suitable):
        winds = [Wind.directional(150, 20, gusts=35)]
        assert abe.is_runway_suitable(6, winds, code, Result()) == suitable

    def test_gusty_limits_at_three(self, abe):
        winds = [Wind.directional(150, 10, gusts=15)]
        assert abe.is_runway_suitable(6, winds, 3, Result())
        assert not abe.is_runway_suitable(6, winds, 2, Result())

    @pytest.mark.parametrize("code, suitable", [(6, True), (4, True), (3, False), (2, False)])
    def test_tailwind_limits(self, abe, code, suitable):
        winds = [Wind.directional(240, 8)]
        assert abe.is_runway_suitable(6, winds, code, Result()) == suitable

    def test_no_tailwind_at_one(self, abe):
        assert abe.is_runway_suitable(6, [Wind.directional(60, 5)], 1, Result())
        assert not abe.is_runway_suitable(6, [Wind.directional(250, 2)], 1, Result())

    def test_variable_wind(self, abe):
        # no range: counts as full crosswind and full tailwind
        assert abe.is_runway_suitable(6, [Wind.variable(5)], 6, Result())
        assert not abe.is_runway_suitable(6, [Wind.variable(11)], 6, Result())

    def test_unknown_code(self, abe):
        with pytest.raises(ValueError, match="Unknown runway condition code"):
            abe.is_runway_suitable(6, [], 7, Result())
