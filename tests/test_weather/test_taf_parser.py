"""Tests for the TAF decoder."""

from datetime import datetime, timezone

from crew_wx.weather import TafParser, TafFormatter, TafPeriod, TafModifier, Visibility, Wind


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def format_taf(taf) -> str:
    return "\n".join(TafFormatter().format(taf))


class TestRoundTrip:
    """Decode then format known forecasts."""

    def test_example(self, august_2013):
        taf = TafParser(august_2013, [
            "TAF KABC 241732Z 2418/2524 11006KT 4SM -SHRA BKN030 ",
            "FM242300 22006KT 3SM -SHRA OVC030 PROB30 2504/2506 VRB20G35KT "
            "1SM TSRA BKN015CB ",
            "FM250600 25010KT 4SM -SHRA OVC050 ",
            "TEMPO 2508/2511 2SM -SHRA OVC030",
        ]).parse()
        assert format_taf(taf) == "\n".join([
            "TAF KXXX 241732Z 2418/2600 11006KT 4SM -SHRA BKN030",
            "FM242300 22006KT 3SM -SHRA OVC030",
            "PROB30 2504/2506 VRB20G35KT 1SM TSRA BKN015",
            "FM250600 25010KT 4SM -SHRA OVC050",
            "TEMPO 2508/2511 2SM -SHRA OVC030",
        ])

    def test_atl(self, august_2013):
        taf = TafParser(august_2013, [
            "TAF KATL 220540Z 2206/2312 03006KT P6SM SKC ",
            "FM221200 05005KT P6SM SKC ",
            "FM221600 09006KT P6SM SKC ",
            "FM222000 15006KT P6SM SKC ",
            "FM230300 25003KT P6SM SKC ",
            "FM230900 30003KT P6SM SKC",
        ]).parse()
        assert format_taf(taf) == "\n".join([
            "TAF KXXX 220540Z 2206/2312 03006KT P6SM SKC",
            "FM221200 05005KT P6SM SKC",
            "FM221600 09006KT P6SM SKC",
            "FM222000 15006KT P6SM SKC",
            "FM230300 25003KT P6SM SKC",
            "FM230900 30003KT P6SM SKC",
        ])

    def test_europe(self, august_2013):
        taf = TafParser(august_2013, ["TAF EDDF 101100Z 1012/1118 25007KT 9999 SCT040"]).parse()
        assert format_taf(taf) == "TAF KXXX 101100Z 1012/1118 25007KT P6SM SCT040"

    def test_month_boundary(self):
        taf = TafParser(utc(2019, 10, 31), [
            "TAF KPIT 311730Z 3118/0124 20010KT P6SM SCT040",
            "FM010600 22012KT 5SM BR BKN015",
            "TEMPO 0108/0112 2SM BR OVC008",
        ]).parse()
        assert taf.valid_from == utc(2019, 10, 31, 18)
        assert taf.valid_to == utc(2019, 11, 2)
        assert list(taf.forecast) == [
            TafPeriod(utc(2019, 10, 31, 18), utc(2019, 11, 1, 6)),
            TafPeriod(utc(2019, 11, 1, 6), utc(2019, 11, 2)),
            TafPeriod(utc(2019, 11, 1, 8), utc(2019, 11, 1, 12), TafModifier.TEMPO),
        ]
        assert format_taf(taf) == "\n".join([
            "TAF KXXX 311730Z 3118/0200 20010KT P6SM SCT040",
            "FM010600 22012KT 5SM BR BKN015",
            "TEMPO 0108/0112 2SM BR OVC008",
        ])


class TestHeader:

    def test_issued_previous_month(self, august_2013):
        taf = TafParser(august_2013, [
            "TAF KSAC 312333Z 0100/0124 20012KT P6SM BKN250",
            "FM010500 18006KT P6SM BKN200",
        ]).parse()
        assert taf.issued == utc(2013, 7, 31, 23, 33)
        assert taf.valid_from == utc(2013, 8, 1)
        assert taf.valid_to == utc(2013, 8, 2)

    def test_issued_next_month(self):
        taf = TafParser(utc(2013, 7, 31), ["TAF KSAC 010533Z 0106/0212 20012KT P6SM"]).parse()
        assert taf.issued == utc(2013, 8, 1, 5, 33)

    def test_older_issue_day_stays_in_reference_month(self):
        taf = TafParser(utc(2013, 8, 10), ["TAF KABC 031732Z 0318/0424 11006KT P6SM SKC"]).parse()
        assert taf.issued == utc(2013, 8, 3, 17, 32)
        assert taf.valid_from == utc(2013, 8, 3, 18)

    def test_station_prefix(self, abe_taf):
        assert abe_taf.station == "KABE"
        assert abe_taf.issued == utc(2020, 4, 3, 17, 20)
        assert abe_taf.valid_from == utc(2020, 4, 3, 18)
        assert abe_taf.valid_to == utc(2020, 4, 4, 18)

    def test_amended(self, august_2013):
        taf = TafParser(august_2013, ["TAF AMD KABC 241732Z 2418/2524 11006KT P6SM SKC"]).parse()
        assert taf.station == "KABC"
        assert len(taf.forecast) == 1

    def test_without_taf_literal(self, august_2013):
        taf = TafParser(august_2013, ["KABC 241732Z 2418/2524 11006KT P6SM SKC"]).parse()
        assert taf.station == "KABC"
        assert taf.issued == utc(2013, 7, 24, 17, 32)

    def test_without_issue_time(self, august_2013):
        taf = TafParser(august_2013, ["TAF KABC 2418/2524 11006KT P6SM SKC"]).parse()
        assert taf.issued is None
        assert taf.valid_from == utc(2013, 7, 24, 18)

    def test_missing_validity(self, august_2013):
        taf = TafParser(august_2013, ["TAF KABC 241732Z"]).parse()
        assert taf.issued == utc(2013, 7, 24, 17, 32)
        assert taf.valid_from is None
        assert taf.forecast == {}

    def test_empty(self, august_2013):
        assert TafParser(august_2013, []).parse().forecast == {}
        assert TafParser(august_2013, ["TAF"]).parse().forecast == {}

    def test_decode_splits_lines(self, august_2013):
        taf = TafParser.decode(august_2013, "TAF KABC 241732Z 2418/2524 11006KT P6SM SKC\n"
                                            "FM242300 22006KT 3SM -SHRA OVC030")
        assert len(taf.forecast) == 2


class TestPeriods:

    def test_fm_truncates_previous(self, abe_taf):
        periods = list(abe_taf.forecast)
        assert periods[0] == TafPeriod(utc(2020, 4, 3, 18), utc(2020, 4, 3, 22))
        assert periods[-1] == TafPeriod(utc(2020, 4, 4, 15), utc(2020, 4, 4, 18))
        for previous, current in zip(periods, periods[1:]):
            assert previous.end == current.start

    def test_modified_periods_overlay(self, august_2013):
        taf = TafParser(august_2013, [
            "TAF KABC 241732Z 2418/2524 11006KT P6SM SKC",
            "BECMG 2420/2422 27015KT",
            "PROB30 TEMPO 2502/2504 2SM TSRA",
        ]).parse()
        periods = list(taf.forecast)
        assert periods[0] == TafPeriod(utc(2013, 7, 24, 18), utc(2013, 7, 26))
        assert periods[1].modifier == TafModifier.BECMG
        assert periods[2].modifier == TafModifier.PROB
        assert periods[2].probability == 30
        assert taf.forecast[periods[2]].visibility == Visibility.statute_mile("2")

    def test_periods_at(self, abe_taf):
        eta = utc(2020, 4, 3, 20, 34)
        periods = abe_taf.periods_at(eta)
        assert len(periods) == 1
        assert abe_taf.conditions_for(periods[0]).wind == Wind.directional(340, 14, gusts=23)

    def test_periods_at_includes_overlays(self, august_2013):
        taf = TafParser(august_2013, [
            "TAF KABC 241732Z 2418/2524 11006KT P6SM SKC",
            "TEMPO 2420/2422 1SM BR",
        ]).parse()
        assert len(taf.periods_at(utc(2013, 7, 24, 21))) == 2
        assert len(taf.periods_at(utc(2013, 7, 24, 22))) == 1

    def test_period_end_is_exclusive(self, abe_taf):
        periods = abe_taf.periods_at(utc(2020, 4, 3, 22))
        assert [period.start for period in periods] == [utc(2020, 4, 3, 22)]

    def test_unknown_period_abandons_line(self, august_2013):
        taf = TafParser(august_2013, [
            "TAF KABC 241732Z 2418/2524 11006KT P6SM SKC",
            "XYZZY 22006KT 3SM -SHRA OVC030 FM250000 25010KT P6SM SKC",
            "FM250600 25010KT 4SM -SHRA OVC050",
        ]).parse()
        assert [period.start for period in taf.forecast] == [
            utc(2013, 7, 24, 18), utc(2013, 7, 25, 6)]

    def test_fm_before_previous_period_abandons_line(self, august_2013):
        taf = TafParser(august_2013, [
            "TAF KABC 241732Z 2418/2524 11006KT P6SM SKC",
            "FM250600 25010KT 4SM -SHRA OVC050",
            "FM250000 22006KT 3SM -SHRA OVC030",
            "TEMPO 2508/2511 2SM -SHRA OVC030",
        ]).parse()
        assert list(taf.forecast) == [
            TafPeriod(utc(2013, 7, 24, 18), utc(2013, 7, 25, 6)),
            TafPeriod(utc(2013, 7, 25, 6), utc(2013, 7, 26)),
            TafPeriod(utc(2013, 7, 25, 8), utc(2013, 7, 25, 11), TafModifier.TEMPO),
        ]

    def test_fm_outside_validity(self, august_2013):
        taf = TafParser(august_2013, [
            "TAF KABC 241732Z 2418/2524 11006KT P6SM SKC",
            "FM280000 25010KT P6SM SKC",
        ]).parse()
        assert len(taf.forecast) == 1


class TestTafPeriod:

    def test_equality_by_interval(self):
        start, end = utc(2020, 4, 3, 18), utc(2020, 4, 3, 22)
        assert TafPeriod(start, end) == TafPeriod(start, end, TafModifier.TEMPO)
        assert len({TafPeriod(start, end), TafPeriod(start, end, TafModifier.BECMG)}) == 1

    def test_ordering(self):
        early = TafPeriod(utc(2020, 4, 3, 18), utc(2020, 4, 4))
        late = TafPeriod(utc(2020, 4, 3, 20), utc(2020, 4, 3, 21), TafModifier.TEMPO)
        assert sorted([late, early]) == [early, late]

    def test_str(self):
        period = TafPeriod(utc(2013, 7, 25, 4), utc(2013, 7, 25, 6), TafModifier.PROB, 30)
        assert str(period) == "PROB30 250400Z-250600Z"
