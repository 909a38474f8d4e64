import unittest

from fourpillars.annual import (
    ANNUAL_RULES,
    Rating,
    annual_activations,
    annual_fortune,
    rating_for,
    score_year,
)
from fourpillars.astro_calendar import FixedCalendar
from fourpillars.bazi import assemble_chart
from fourpillars.errors import InvalidDomainValue
from fourpillars.ganzhi import parse_ganzhi
from fourpillars.test_bazi import sample_reading


class AnnualFortuneTest(unittest.TestCase):
    def setUp(self) -> None:
        # weak 己 day master: fire and earth favorable; metal, water and wood unfavorable
        self.chart = assemble_chart(sample_reading(), "male", birth_year=1990)

    def fortune(self, year, ganzhi):
        calendar = FixedCalendar(sample_reading(), years={year: ganzhi})
        return annual_fortune(self.chart, year, calendar)

    def test_year_occupying_the_birth_branch(self) -> None:
        fortune = self.fortune(2026, "丙午")
        self.assertEqual(fortune.score, 50)
        self.assertIs(fortune.rating, Rating.NEUTRAL)
        self.assertEqual(len(fortune.reasons), 3)
        self.assertIn("大运壬午", fortune.reasons[0])
        self.assertIn("值太岁", fortune.reasons[1])
        self.assertIn("喜用神", fortune.reasons[2])

    def test_coincident_fate_on_a_favorable_running_score(self) -> None:
        fortune = self.fortune(2026, "壬午")
        self.assertEqual(fortune.score, 25)
        self.assertIs(fortune.rating, Rating.INAUSPICIOUS)
        self.assertTrue(fortune.reasons[0].startswith("岁运并临"))
        self.assertEqual(len(fortune.reasons), 4)

    def test_clash_with_year_branch(self) -> None:
        fortune = self.fortune(2020, "庚子")
        self.assertEqual(fortune.score, 10)
        self.assertIs(fortune.rating, Rating.INAUSPICIOUS)
        self.assertIn("冲太岁", fortune.reasons[1])

    def test_romance_star_before_luck_starts(self) -> None:
        fortune = self.fortune(1993, "癸酉")
        self.assertEqual(fortune.score, 40)
        self.assertEqual(fortune.reasons[-1], "流年红鸾星动，利感情婚姻。")

    def test_travel_star(self) -> None:
        fortune = self.fortune(2028, "戊申")
        self.assertEqual(fortune.score, 63)
        self.assertIs(fortune.rating, Rating.NEUTRAL)
        self.assertIn("驿马", fortune.reasons[-1])

    def test_year_pillar_comes_from_the_calendar(self) -> None:
        calendar = FixedCalendar(sample_reading())
        self.assertEqual(annual_fortune(self.chart, 2026, calendar).pair.text, "丙午")
        self.assertEqual(annual_fortune(self.chart, 2024, calendar).pair.text, "甲辰")

    def test_score_year_is_pure(self) -> None:
        pair = parse_ganzhi("丙午", self.chart.day_master_index)
        first = score_year(self.chart, pair, 2026)
        second = score_year(self.chart, pair, 2026)
        self.assertEqual(first, second)

    def test_bad_calendar_response(self) -> None:
        calendar = FixedCalendar(sample_reading(), years={2026: "丙未"})
        with self.assertRaises(InvalidDomainValue):
            annual_fortune(self.chart, 2026, calendar)

    def test_rule_order(self) -> None:
        names = [rule.__name__ for rule in ANNUAL_RULES]
        self.assertEqual(names[0], "_coincident_fate")
        self.assertEqual(names[-1], "_travel_star")

    def test_to_dict(self) -> None:
        data = self.fortune(2026, "丙午").to_dict()
        self.assertEqual(data["rating"], "平")
        self.assertEqual(data["ganzhi"]["ganzhi"], "丙午")


class StrongChartTest(unittest.TestCase):
    def setUp(self) -> None:
        # strong 甲 born in 子 month: fire and metal favorable, earth mildly favorable
        reading = sample_reading(year="甲子", month="丙子", day="甲辰", hour="甲子")
        self.chart = assemble_chart(reading, "male", birth_year=1984)

    def test_wealth_stem_counts_as_favorable(self) -> None:
        balance = self.chart.balance
        self.assertEqual([e.chinese for e in balance.mildly_favorable], ["土"])
        calendar = FixedCalendar(sample_reading(), years={1995: "戊寅"})
        fortune = annual_fortune(self.chart, 1995, calendar)
        self.assertEqual(fortune.score, 73)
        self.assertIs(fortune.rating, Rating.AUSPICIOUS)
        self.assertIn("喜用神", fortune.reasons[0])
        self.assertIn("驿马", fortune.reasons[1])


class RatingTest(unittest.TestCase):
    def test_partition(self) -> None:
        for score in range(-50, 151):
            rating = rating_for(score)
            if score >= 65:
                self.assertIs(rating, Rating.AUSPICIOUS)
            elif score <= 42:
                self.assertIs(rating, Rating.INAUSPICIOUS)
            else:
                self.assertIs(rating, Rating.NEUTRAL)

    def test_non_finite(self) -> None:
        with self.assertRaises(InvalidDomainValue):
            rating_for(float("inf"))


class ActivationTest(unittest.TestCase):
    def setUp(self) -> None:
        self.chart = assemble_chart(sample_reading(), "male", birth_year=1990)

    def test_clash_activates_year_pillar(self) -> None:
        found = annual_activations(self.chart, parse_ganzhi("庚子", 5))
        self.assertEqual([(a.pillar, a.method) for a in found], [("year", "六冲")])

    def test_combination_activates_month_pillar(self) -> None:
        found = annual_activations(self.chart, parse_ganzhi("甲戌", 5))
        self.assertEqual([(a.pillar, a.method) for a in found], [("month", "六合")])
        self.assertEqual(found[0].description, "流年戌合月柱卯")

    def test_quiet_year(self) -> None:
        self.assertEqual(annual_activations(self.chart, parse_ganzhi("甲寅", 5)), [])


if __name__ == "__main__":
    unittest.main()
