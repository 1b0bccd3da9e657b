import copy
import unittest

import mcda
from mcda import calculate_saw, calculate_wp, get_method, list_methods
from models import Alternative, Criterion


def salary_distance_case(a_values, b_values):
    criteria = [
        Criterion(id="salary", name="Salary", weight=0.6, type="benefit"),
        Criterion(id="distance", name="Distance", weight=0.4, type="cost"),
    ]
    alternatives = [
        Alternative(id="a", name="A", values={"salary": a_values[0], "distance": a_values[1]}),
        Alternative(id="b", name="B", values={"salary": b_values[0], "distance": b_values[1]}),
    ]
    return criteria, alternatives


class TestRegistry(unittest.TestCase):
    def test_list_methods(self) -> None:
        self.assertEqual(
            list_methods(),
            {"saw": "Simple Additive Weighting", "wp": "Weighted Product"},
        )

    def test_get_method_unknown(self) -> None:
        self.assertIs(get_method("wp"), mcda.METHODS["wp"])
        with self.assertRaises(ValueError):
            get_method("topsis")


class TestEndToEnd(unittest.TestCase):
    def test_salary_distance_scenario(self) -> None:
        criteria, alternatives = salary_distance_case((5.0, 2.0), (3.0, 1.0))

        saw = calculate_saw(criteria, alternatives)
        self.assertEqual([(result.alternative_id, result.rank) for result in saw], [("a", 1), ("b", 2)])
        self.assertAlmostEqual(saw[0].score, 0.8)
        self.assertAlmostEqual(saw[1].score, 0.76)

        wp = calculate_wp(criteria, alternatives)
        s_a = 5.0 ** 0.6 * (1 / 2.0) ** 0.4
        s_b = 3.0 ** 0.6 * (1 / 1.0) ** 0.4
        scores = {result.alternative_id: result.score for result in wp}
        self.assertAlmostEqual(scores["a"], s_a / (s_a + s_b), places=9)
        self.assertAlmostEqual(scores["b"], s_b / (s_a + s_b), places=9)
        self.assertAlmostEqual(scores["a"], 0.5073, places=3)
        self.assertEqual(wp[0].alternative_id, "a")

    def test_methods_can_disagree_on_winner(self) -> None:
        criteria, alternatives = salary_distance_case((5.0, 5.0), (2.0, 1.0))

        saw = calculate_saw(criteria, alternatives)
        wp = calculate_wp(criteria, alternatives)
        self.assertAlmostEqual(saw[0].score, 0.68)
        self.assertAlmostEqual(saw[1].score, 0.64)
        self.assertEqual(saw[0].alternative_name, "A")
        self.assertEqual(wp[0].alternative_name, "B")

    def test_ranks_form_total_order(self) -> None:
        criteria = [
            Criterion(id="c1", name="Cost", weight=0.25, type="cost"),
            Criterion(id="c2", name="Quality", weight=0.45, type="benefit"),
            Criterion(id="c3", name="Speed", weight=0.3, type="benefit"),
        ]
        rows = [(3, 4, 2), (1, 2, 5), (5, 5, 5), (2, 3, 1), (4, 1, 3)]
        alternatives = [
            Alternative(id=f"alt{idx}", name=f"Alt {idx}", values={"c1": v1, "c2": v2, "c3": v3})
            for idx, (v1, v2, v3) in enumerate(rows)
        ]
        for calculate in (calculate_saw, calculate_wp):
            ranked = calculate(criteria, alternatives)
            self.assertEqual(sorted(result.rank for result in ranked), [1, 2, 3, 4, 5])
            self.assertEqual({result.alternative_id for result in ranked}, {alt.id for alt in alternatives})
            for first in ranked:
                for second in ranked:
                    if first.score > second.score:
                        self.assertLess(first.rank, second.rank)

    def test_idempotent_and_inputs_untouched(self) -> None:
        criteria, alternatives = salary_distance_case((4.0, 3.0), (2.0, 2.0))
        snapshot = copy.deepcopy((criteria, alternatives))
        for calculate in (calculate_saw, calculate_wp):
            first = calculate(criteria, alternatives)
            second = calculate(criteria, alternatives)
            self.assertEqual(first, second)
        self.assertEqual((criteria, alternatives), snapshot)
