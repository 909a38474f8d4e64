import unittest

from fourpillars.errors import InvalidDomainValue
from fourpillars.stars import (
    STAR_INTERACTION_RULES,
    STAR_RULES,
    Severity,
    StarContext,
    branch_distance,
    star_interactions,
    stars_for,
    void_branches,
    void_offset,
    void_pair,
)
from fourpillars.tables import EARTHLY_BRANCHES, HEAVENLY_STEMS, VOID_PAIRS


def context(position, ganzhi, year="庚午", month_branch="卯", day="己酉"):
    return StarContext(
        position=position,
        stem=ganzhi[0],
        branch=ganzhi[1],
        day_stem=day[0],
        day_branch=day[1],
        year_stem=year[0],
        year_branch=year[1],
        month_branch=month_branch,
    )


class VoidBranchTest(unittest.TestCase):
    def test_offset_is_even_for_every_valid_pair(self) -> None:
        for stem in HEAVENLY_STEMS:
            for branch in EARTHLY_BRANCHES:
                if stem.index % 2 != branch.index % 2:
                    continue
                offset = void_offset(stem.chinese, branch.chinese)
                self.assertEqual(offset % 2, 0)
                self.assertTrue(0 <= offset <= 10)
                self.assertIn(void_pair(stem.chinese, branch.chinese), VOID_PAIRS.values())

    def test_jia_zi_decade(self) -> None:
        self.assertEqual(void_pair("甲", "子"), ("戌", "亥"))
        self.assertEqual(void_pair("癸", "酉"), ("戌", "亥"))
        self.assertEqual(void_pair("甲", "戌"), ("申", "酉"))

    def test_mixed_polarity_rejected(self) -> None:
        with self.assertRaises(InvalidDomainValue):
            void_offset("甲", "丑")

    def test_union_of_day_and_year(self) -> None:
        self.assertEqual(void_branches("己", "酉", "庚", "午"), {"寅", "卯", "戌", "亥"})
        self.assertEqual(void_branches("甲", "子", "甲", "子"), {"戌", "亥"})


class StarRulesTest(unittest.TestCase):
    def test_names_are_unique(self) -> None:
        names = [name for name, _ in STAR_RULES]
        self.assertEqual(len(names), len(set(names)))

    def test_branch_distance(self) -> None:
        self.assertEqual(branch_distance("午", "卯"), 9)
        self.assertEqual(branch_distance("卯", "午"), 3)
        self.assertEqual(branch_distance("子", "子"), 0)

    def test_month_pillar(self) -> None:
        self.assertEqual(stars_for(context("month", "己卯")), ["天喜", "咸池", "灾煞", "元辰"])

    def test_day_pillar(self) -> None:
        self.assertEqual(
            stars_for(context("day", "己酉")),
            ["文昌贵人", "将星", "天厨贵人", "学堂", "红鸾", "九丑"],
        )

    def test_hour_pillar(self) -> None:
        found = stars_for(context("hour", "己巳"))
        self.assertIn("金神", found)
        self.assertIn("亡神", found)

    def test_hour_position_peach_blossom(self) -> None:
        self.assertIn("墙外桃花", stars_for(context("hour", "丁卯")))
        self.assertNotIn("墙外桃花", stars_for(context("month", "己卯")))
        self.assertNotIn("hour_branch", StarContext.__dataclass_fields__)

    def test_day_only_stars_need_the_day_position(self) -> None:
        self.assertIn("魁罡", stars_for(context("day", "庚辰", day="庚辰")))
        self.assertNotIn("魁罡", stars_for(context("hour", "庚辰", day="庚辰")))

    def test_nobleman(self) -> None:
        self.assertIn("天乙贵人", stars_for(context("hour", "乙丑", day="甲子")))
        self.assertIn("天乙贵人", stars_for(context("hour", "癸未", day="甲子")))

    def test_repeat_and_reverse_of_year(self) -> None:
        self.assertIn("伏吟", stars_for(context("hour", "庚午")))
        self.assertNotIn("伏吟", stars_for(context("year", "庚午")))
        self.assertIn("反吟", stars_for(context("hour", "丙子")))

    def test_unknown_symbols(self) -> None:
        with self.assertRaises(InvalidDomainValue):
            stars_for(context("hour", "X子"))


class StarInteractionTest(unittest.TestCase):
    def test_needs_every_required_star(self) -> None:
        hits = star_interactions(["天乙贵人", "天德贵人", "咸池"])
        self.assertEqual([hit.name for hit in hits], ["德贵双全"])
        self.assertIs(hits[0].severity, Severity.AUSPICIOUS)
        self.assertEqual(star_interactions(["红鸾"]), [])

    def test_duplicates_and_order(self) -> None:
        hits = star_interactions(["孤辰", "红鸾", "寡宿", "天喜", "红鸾"])
        self.assertEqual([hit.name for hit in hits], ["红鸾天喜", "孤寡同临"])
        self.assertIs(hits[1].severity, Severity.INAUSPICIOUS)

    def test_rules_name_known_stars(self) -> None:
        known = {name for name, _ in STAR_RULES}
        for name, required, effect, severity in STAR_INTERACTION_RULES:
            self.assertTrue(set(required) <= known, name)
            self.assertGreaterEqual(len(required), 2, name)

    def test_to_dict(self) -> None:
        data = star_interactions(["咸池", "红鸾"])[0].to_dict()
        self.assertEqual(data["name"], "桃花红鸾")
        self.assertEqual(data["stars"], ["咸池", "红鸾"])
        self.assertEqual(data["severity"], "中平")

if __name__ == "__main__":
    unittest.main()
