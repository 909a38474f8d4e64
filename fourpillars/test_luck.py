import unittest

from fourpillars.astro_calendar import DecadeEntry, ganzhi_text
from fourpillars.errors import InvalidDomainValue
from fourpillars.ganzhi import parse_ganzhi
from fourpillars.luck import active_decade, childhood_steps, decade_pillars, is_forward

JI = 5


def decades_from(month="己卯", first_start=1997, birth_year=1990, count=9, forward=True):
    pair = parse_ganzhi(month, JI)
    direction = 1 if forward else -1
    entries = [DecadeEntry(1, birth_year, first_start - 1, "")]
    for i in range(1, count):
        begin = first_start + (i - 1) * 10
        entries.append(DecadeEntry(
            start_age=begin - birth_year + 1,
            start_year=begin,
            end_year=begin + 9,
            ganzhi=ganzhi_text(pair.stem_index + i * direction, pair.branch_index + i * direction),
        ))
    return entries


class DirectionTest(unittest.TestCase):
    def test_truth_table(self) -> None:
        self.assertTrue(is_forward(6, male=True))
        self.assertFalse(is_forward(6, male=False))
        self.assertFalse(is_forward(7, male=True))
        self.assertTrue(is_forward(7, male=False))


class DecadePillarsTest(unittest.TestCase):
    def test_entry_zero_is_dropped(self) -> None:
        pillars = decade_pillars(decades_from(), JI)
        self.assertEqual(len(pillars), 8)
        self.assertEqual(pillars[0].index, 1)
        self.assertEqual(pillars[0].pair.text, "庚辰")
        self.assertEqual(pillars[0].start_age, 8)
        self.assertEqual(pillars[0].start_year, 1997)

    def test_decades_are_contiguous(self) -> None:
        pillars = decade_pillars(decades_from(), JI)
        for earlier, later in zip(pillars, pillars[1:]):
            self.assertEqual(earlier.end_year + 1, later.start_year)
            self.assertEqual(later.start_age - earlier.start_age, 10)

    def test_gap_is_logged(self) -> None:
        entries = decades_from()
        entries[3] = DecadeEntry(entries[3].start_age, entries[3].start_year + 1,
                                 entries[3].end_year + 1, entries[3].ganzhi)
        with self.assertLogs("fourpillars.luck", level="WARNING"):
            decade_pillars(entries, JI)

    def test_backward_sequence(self) -> None:
        pillars = decade_pillars(decades_from(forward=False), JI)
        self.assertEqual([p.pair.text for p in pillars[:3]], ["戊寅", "丁丑", "丙子"])

    def test_bad_ganzhi_is_rejected(self) -> None:
        entries = decades_from()
        entries[1] = DecadeEntry(8, 1997, 2006, "庚卯")
        with self.assertRaises(InvalidDomainValue):
            decade_pillars(entries, JI)

    def test_active_decade(self) -> None:
        pillars = decade_pillars(decades_from(), JI)
        self.assertEqual(active_decade(pillars, 2026).pair.text, "壬午")
        self.assertEqual(active_decade(pillars, 2017).pair.text, "壬午")
        self.assertIsNone(active_decade(pillars, 1993))


class ChildhoodStepsTest(unittest.TestCase):
    def test_forward_walk_from_hour_pillar(self) -> None:
        steps = childhood_steps(parse_ganzhi("己巳", JI), True, 1990, 8, JI)
        self.assertEqual([s.age for s in steps], list(range(1, 8)))
        self.assertEqual(steps[0].pair.text, "庚午")
        self.assertEqual(steps[0].year, 1990)
        self.assertEqual(steps[-1].pair.text, "丙子")
        self.assertEqual(steps[-1].year, 1996)

    def test_backward_walk(self) -> None:
        steps = childhood_steps(parse_ganzhi("甲子", 0), False, 2000, 3, 0)
        self.assertEqual([s.pair.text for s in steps], ["癸亥", "壬戌"])

    def test_luck_starting_in_first_year(self) -> None:
        self.assertEqual(childhood_steps(parse_ganzhi("甲子", 0), True, 2000, 1, 0), [])


if __name__ == "__main__":
    unittest.main()
