import copy
import unittest

from models import MatchupAnalysis
from sample_analysis import ANALYSIS
from streamlit_app import power_curve_rows


class PowerCurveRowsTests(unittest.TestCase):
    def test_one_row_per_point(self) -> None:
        rows, series = power_curve_rows(MatchupAnalysis.from_dict(ANALYSIS))

        self.assertEqual(["You (Yasuo)", "Enemy (Zed)"], series)
        self.assertEqual([0.0, 5.0, 10.0], [row["time"] for row in rows])
        self.assertEqual({"time": 10.0, "You (Yasuo)": 65.0, "Enemy (Zed)": 58.5}, rows[2])

    def test_mirror_matchup_keeps_both_series(self) -> None:
        mirror = copy.deepcopy(ANALYSIS)
        mirror["opponent"] = "Yasuo"
        rows, series = power_curve_rows(MatchupAnalysis.from_dict(mirror))

        self.assertEqual(2, len(set(series)))
        self.assertEqual(45.0, rows[0][series[0]])
        self.assertEqual(55.0, rows[0][series[1]])


if __name__ == "__main__":
    unittest.main()
