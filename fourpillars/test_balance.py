import unittest

from fourpillars.balance import (
    AdjustmentMethod,
    StrengthLevel,
    analyze_balance,
    branch_support_score,
    element_sets,
    god_strength,
    seasonal_score,
    stem_support_score,
    strength_level,
)
from fourpillars.bazi import assemble_pillars, element_counts
from fourpillars.errors import InvalidDomainValue
from fourpillars.tables import SIXTY_GANZHI, TEN_GOD_NAMES, Element


def balance_for(year, month, day, hour):
    pillars = assemble_pillars(year, month, day, hour)
    return analyze_balance(day[0], pillars, element_counts(pillars))


class StrengthLevelTest(unittest.TestCase):
    def test_partition(self) -> None:
        for tenths in range(0, 1001):
            score = tenths / 10
            level = strength_level(score)
            if score >= 55:
                self.assertIs(level, StrengthLevel.STRONG)
            elif score <= 42:
                self.assertIs(level, StrengthLevel.WEAK)
            else:
                self.assertIs(level, StrengthLevel.BALANCED)

    def test_boundaries(self) -> None:
        self.assertIs(strength_level(55), StrengthLevel.STRONG)
        self.assertIs(strength_level(42), StrengthLevel.WEAK)
        self.assertIs(strength_level(42.1), StrengthLevel.BALANCED)

    def test_non_finite(self) -> None:
        with self.assertRaises(InvalidDomainValue):
            strength_level(float("nan"))


class ComponentScoreTest(unittest.TestCase):
    def test_seasonal(self) -> None:
        self.assertEqual(seasonal_score(Element.WOOD, Element.WATER), 35)
        self.assertEqual(seasonal_score(Element.WOOD, Element.WOOD), 40)
        self.assertEqual(seasonal_score(Element.WOOD, Element.FIRE), 10)
        self.assertEqual(seasonal_score(Element.WOOD, Element.EARTH), 0)
        self.assertEqual(seasonal_score(Element.EARTH, Element.WOOD), 0)

    def test_branch_support_without_clashes(self) -> None:
        pillars = assemble_pillars("庚午", "己卯", "己酉", "己巳")
        self.assertEqual(branch_support_score(Element.EARTH, pillars), 22)

    def test_branch_support_discounts_clashed_branches(self) -> None:
        pillars = assemble_pillars("戊戌", "戊戌", "戊辰", "戊午")
        self.assertAlmostEqual(branch_support_score(Element.EARTH, pillars), 20.0)

    def test_stem_support_is_capped(self) -> None:
        pillars = assemble_pillars("戊戌", "戊戌", "戊辰", "戊午")
        self.assertEqual(stem_support_score(Element.EARTH, pillars), 24)
        pillars = assemble_pillars("丙子", "丁酉", "戊子", "丁巳")
        self.assertEqual(stem_support_score(Element.EARTH, pillars), 21)


class ElementSetsTest(unittest.TestCase):
    def test_strong(self) -> None:
        favorable, mild, unfavorable = element_sets(Element.WOOD, StrengthLevel.STRONG)
        self.assertEqual(favorable, [Element.FIRE, Element.METAL])
        self.assertEqual(mild, [Element.EARTH])
        self.assertEqual(unfavorable, [Element.WATER, Element.WOOD])

    def test_weak(self) -> None:
        favorable, mild, unfavorable = element_sets(Element.EARTH, StrengthLevel.WEAK)
        self.assertEqual(favorable, [Element.FIRE, Element.EARTH])
        self.assertEqual(mild, [])
        self.assertEqual(unfavorable, [Element.METAL, Element.WATER, Element.WOOD])

    def test_balanced(self) -> None:
        favorable, mild, unfavorable = element_sets(Element.METAL, StrengthLevel.BALANCED)
        self.assertEqual(favorable, [Element.METAL])
        self.assertEqual(mild, [Element.EARTH])
        self.assertEqual(unfavorable, [Element.FIRE])


class AnalyzeBalanceTest(unittest.TestCase):
    def test_weak_earth_day_master(self) -> None:
        balance = balance_for("庚午", "己卯", "己酉", "己巳")
        self.assertEqual(balance.seasonal_score, 0)
        self.assertEqual(balance.branch_score, 22)
        self.assertEqual(balance.stem_score, 16)
        self.assertEqual(balance.score, 38)
        self.assertIs(balance.level, StrengthLevel.WEAK)
        self.assertEqual(balance.favorable, (Element.FIRE, Element.EARTH))
        self.assertEqual(balance.unfavorable, (Element.METAL, Element.WATER, Element.WOOD))
        self.assertIs(balance.method, AdjustmentMethod.SUPPORT_SUPPRESSION)
        self.assertIn("身弱", balance.advice)

    def test_winter_birth_takes_fire_first(self) -> None:
        balance = balance_for("甲子", "丙子", "甲辰", "甲子")
        self.assertEqual(balance.score, 81)
        self.assertIs(balance.level, StrengthLevel.STRONG)
        self.assertEqual(balance.favorable, (Element.FIRE, Element.METAL))
        self.assertEqual(balance.mildly_favorable, (Element.EARTH,))
        self.assertEqual(balance.unfavorable, (Element.WATER, Element.WOOD))
        self.assertIs(balance.method, AdjustmentMethod.SEASONAL_REGULATION)
        self.assertTrue(balance.advice.startswith("生于子月"))
        self.assertTrue(balance.is_favorable(Element.EARTH))
        self.assertFalse(balance.is_favorable(Element.WATER))

    def test_summer_birth_takes_water_first(self) -> None:
        balance = balance_for("庚午", "辛巳", "庚申", "壬午")
        self.assertEqual(balance.favorable[0], Element.WATER)
        self.assertEqual(balance.favorable.count(Element.WATER), 1)
        self.assertNotIn(Element.WATER, balance.mildly_favorable)
        self.assertNotIn(Element.WATER, balance.unfavorable)
        self.assertIs(balance.method, AdjustmentMethod.SEASONAL_REGULATION)

    def test_score_is_bounded(self) -> None:
        for month in SIXTY_GANZHI:
            for day in SIXTY_GANZHI[::6]:
                balance = balance_for("甲子", month, day, "丙寅")
                self.assertTrue(0 <= balance.score <= 100, (month, day))

    def test_to_dict(self) -> None:
        data = balance_for("庚午", "己卯", "己酉", "己巳").to_dict()
        self.assertEqual(data["level"], "身弱")
        self.assertEqual(data["favorable"], ["火", "土"])
        self.assertEqual(data["components"]["stem_support"], 16)


class GodStrengthTest(unittest.TestCase):
    def test_one_entry_per_ten_god(self) -> None:
        pillars = assemble_pillars("庚午", "己卯", "己酉", "己巳")
        table = god_strength("己", pillars)
        self.assertEqual([g.name for g in table], TEN_GOD_NAMES)
        for entry in table:
            self.assertTrue(0 <= entry.score <= 100)
            self.assertIn(entry.level, ("强", "中", "弱"))


if __name__ == "__main__":
    unittest.main()
