import unittest

from fourpillars.errors import InvalidDomainValue
from fourpillars.interactions import find_branch_interactions


def by_type(records):
    return {r["type"]: r for r in records}


class BranchInteractionTest(unittest.TestCase):
    def test_pairs(self) -> None:
        found = by_type(find_branch_interactions(["午", "卯", "酉", "巳"],
                                                 ["year", "month", "day", "hour"]))
        self.assertEqual(found["相破"]["branches"], ["year:午", "month:卯"])
        self.assertEqual(found["六冲"]["branches"], ["month:卯", "day:酉"])
        self.assertEqual(found["半三合"]["missing"], "丑")
        self.assertEqual(found["半三合"]["result_element"], "金")

    def test_six_combination(self) -> None:
        found = find_branch_interactions(["子", "丑"])
        self.assertEqual(found, [{
            "type": "六合",
            "branches": ["branch_0:子", "branch_1:丑"],
            "result_element": "土",
        }])

    def test_full_three_harmony(self) -> None:
        found = by_type(find_branch_interactions(["申", "子", "辰"]))
        self.assertIn("三合", found)
        self.assertEqual(found["三合"]["result_element"], "水")
        self.assertNotIn("半三合", found)

    def test_punishments(self) -> None:
        found = by_type(find_branch_interactions(["寅", "巳", "申"]))
        self.assertTrue(found["无恩之刑"]["complete"])
        found = by_type(find_branch_interactions(["辰", "辰"]))
        self.assertEqual(found["自刑"]["branches"], ["branch_0:辰", "branch_1:辰"])

    def test_unknown_branch(self) -> None:
        with self.assertRaises(InvalidDomainValue):
            find_branch_interactions(["子", "X"])


if __name__ == "__main__":
    unittest.main()
