import unittest

from fourpillars.astro_calendar import CalendarReading, DecadeEntry, ganzhi_text
from fourpillars.balance import StrengthLevel
from fourpillars.bazi import Gender, assemble_chart, assemble_pillars, element_counts
from fourpillars.errors import InvalidDomainValue
from fourpillars.tables import Element


def sample_reading(year="庚午", month="己卯", day="己酉", hour="己巳"):
    # hand-built reading for a male born 1990; forward luck from 1997 at age 8
    decades = [DecadeEntry(1, 1990, 1996, "")]
    for i in range(1, 9):
        begin = 1997 + (i - 1) * 10
        decades.append(DecadeEntry(begin - 1989, begin, begin + 9, ganzhi_text(5 + i, 3 + i)))
    return CalendarReading(
        year=year,
        month=month,
        day=day,
        hour=hour,
        decades=tuple(decades),
        start_text="出生后6年11个月37天起运，1997-03-24交运",
        life_palace="癸未",
        body_palace="乙酉",
        fetal_origin="庚午",
    )


class AssemblePillarsTest(unittest.TestCase):
    def test_void_flags(self) -> None:
        pillars = assemble_pillars("庚午", "己卯", "己酉", "己巳")
        self.assertEqual([pillars[p].void for p in ("year", "month", "day", "hour")],
                         [False, True, False, False])

    def test_element_counts_sum_to_eight(self) -> None:
        counts = element_counts(assemble_pillars("庚午", "己卯", "己酉", "己巳"))
        self.assertEqual(sum(counts.values()), 8)
        self.assertEqual(counts[Element.EARTH], 3)
        self.assertEqual(counts[Element.METAL], 2)
        self.assertEqual(counts[Element.FIRE], 2)
        self.assertEqual(counts[Element.WOOD], 1)
        self.assertEqual(counts[Element.WATER], 0)

    def test_invalid_input(self) -> None:
        with self.assertRaises(InvalidDomainValue):
            assemble_pillars("庚午", "己卯", "己", "己巳")
        with self.assertRaises(InvalidDomainValue):
            assemble_pillars("庚丑", "己卯", "己酉", "己巳")


class AssembleChartTest(unittest.TestCase):
    def setUp(self) -> None:
        self.chart = assemble_chart(sample_reading(), "male", birth_year=1990,
                                    original_time="1990-03-15 10:30")

    def test_day_master(self) -> None:
        self.assertEqual(self.chart.day_master, "己")
        self.assertEqual(self.chart.day_master_index, 5)
        self.assertIs(self.chart.day_master_element, Element.EARTH)
        self.assertIs(self.chart.gender, Gender.MALE)
        self.assertTrue(self.chart.forward)

    def test_engines_are_wired(self) -> None:
        self.assertIs(self.chart.balance.level, StrengthLevel.WEAK)
        self.assertEqual(self.chart.pattern.name, "七杀格")
        self.assertEqual(len(self.chart.god_strength), 10)
        kinds = {record["type"] for record in self.chart.branch_interactions}
        self.assertEqual(kinds, {"相破", "六冲", "半三合"})

    def test_luck(self) -> None:
        self.assertEqual(len(self.chart.luck_pillars), 8)
        self.assertEqual(self.chart.luck_pillars[0].pair.text, "庚辰")
        self.assertEqual(self.chart.luck_pillars[0].start_age, 8)
        self.assertEqual(len(self.chart.childhood_luck), 7)
        self.assertEqual(self.chart.childhood_luck[0].pair.text, "庚午")

    def test_stars(self) -> None:
        self.assertEqual(self.chart.pillars["month"].stars, ("天喜", "咸池", "灾煞", "元辰"))
        self.assertIn("九丑", self.chart.all_stars())

    def test_star_interactions(self) -> None:
        names = [hit.name for hit in self.chart.star_interactions]
        self.assertEqual(names, ["文星汇聚", "红鸾天喜", "桃花红鸾"])
        self.assertNotIn("孤寡同临", names)

    def test_female_chart_counts_backward(self) -> None:
        chart = assemble_chart(sample_reading(), Gender.FEMALE, birth_year=1990)
        self.assertFalse(chart.forward)

    def test_invalid_gender(self) -> None:
        with self.assertRaises(InvalidDomainValue):
            assemble_chart(sample_reading(), "other", birth_year=1990)

    def test_to_dict(self) -> None:
        data = self.chart.to_dict()
        self.assertEqual(data["gender"], "male")
        self.assertEqual(data["day_master"], {"stem": "己", "element": "土"})
        self.assertEqual(data["pillars"]["month"]["name"], "月柱")
        self.assertTrue(data["pillars"]["month"]["void"])
        self.assertEqual(data["element_counts"]["土"], 3)
        self.assertEqual(data["life_palace"], "癸未")
        self.assertEqual(data["original_time"], "1990-03-15 10:30")
        self.assertIsNone(data["solar_time"])
        self.assertEqual(len(data["luck_pillars"]), 8)
        self.assertEqual(data["star_interactions"][0]["severity"], "吉")


if __name__ == "__main__":
    unittest.main()
