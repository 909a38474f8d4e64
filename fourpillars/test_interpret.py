import unittest

from fourpillars.bazi import assemble_chart
from fourpillars.interpret import chart_summary, pillar_summary
from fourpillars.test_bazi import sample_reading


class InterpretTest(unittest.TestCase):
    def setUp(self) -> None:
        self.chart = assemble_chart(sample_reading(), "male", birth_year=1990)

    def test_month_pillar(self) -> None:
        text = pillar_summary(self.chart, "month")
        self.assertTrue(text.startswith("月柱己卯（城头土）："))
        self.assertIn("此柱逢空亡", text)
        self.assertIn("咸池", text)

    def test_day_pillar_skips_its_own_ten_god(self) -> None:
        text = pillar_summary(self.chart, "day")
        self.assertNotIn("天干为", text)
        self.assertIn("文昌贵人", text)

    def test_chart_summary(self) -> None:
        lines = chart_summary(self.chart)
        self.assertEqual(len(lines), 8)
        self.assertIn("身弱", lines[4])
        self.assertIn("七杀格", lines[4])
        self.assertTrue(lines[5].startswith("文星汇聚（文昌贵人、学堂，吉）："))


if __name__ == "__main__":
    unittest.main()
