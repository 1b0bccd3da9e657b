import unittest

from mcda.core import RankingError
from mcda.methods.wp import WPMethod
from models import Alternative, Criterion


class TestWPMethod(unittest.TestCase):
    def setUp(self) -> None:
        self.criteria = [
            Criterion(id="c1", name="Price", weight=0.3, type="cost"),
            Criterion(id="c2", name="Quality", weight=0.5, type="benefit"),
            Criterion(id="c3", name="Support", weight=0.2, type="benefit"),
        ]
        self.alternatives = [
            Alternative(id="a", name="A", values={"c1": 4.0, "c2": 3.0, "c3": 5.0}),
            Alternative(id="b", name="B", values={"c1": 2.0, "c2": 4.0, "c3": 2.0}),
            Alternative(id="c", name="C", values={"c1": 5.0, "c2": 5.0, "c3": 1.0}),
            Alternative(id="d", name="D", values={"c1": 1.0, "c2": 1.0, "c3": 3.0}),
        ]

    def test_preferences_sum_to_one(self) -> None:
        ranked = WPMethod().compute_scores(self.criteria, self.alternatives)
        self.assertEqual(len(ranked), 4)
        self.assertAlmostEqual(sum(result.score for result in ranked), 1.0, delta=1e-9)

    def test_matches_hand_computed_vector(self) -> None:
        ranked = WPMethod().compute_scores(self.criteria, self.alternatives)
        vector_s = {
            "a": 4.0 ** -0.3 * 3.0 ** 0.5 * 5.0 ** 0.2,
            "b": 2.0 ** -0.3 * 4.0 ** 0.5 * 2.0 ** 0.2,
            "c": 5.0 ** -0.3 * 5.0 ** 0.5 * 1.0 ** 0.2,
            "d": 1.0 ** -0.3 * 1.0 ** 0.5 * 3.0 ** 0.2,
        }
        total = sum(vector_s.values())
        for result in ranked:
            self.assertAlmostEqual(result.score, vector_s[result.alternative_id] / total, places=12)

    def test_relative_weights_are_always_renormalized(self) -> None:
        doubled = [
            Criterion(id=criterion.id, name=criterion.name, weight=criterion.weight * 2, type=criterion.type)
            for criterion in self.criteria
        ]
        base = WPMethod().compute_scores(self.criteria, self.alternatives)
        scaled = WPMethod().compute_scores(doubled, self.alternatives)
        for left, right in zip(base, scaled):
            self.assertEqual(left.alternative_id, right.alternative_id)
            self.assertAlmostEqual(left.score, right.score, places=12)

    def test_zero_value_under_cost_exponent_raises(self) -> None:
        self.alternatives[0].values["c1"] = 0.0
        with self.assertRaisesRegex(RankingError, "non-finite score for: A"):
            WPMethod().compute_scores(self.criteria, self.alternatives)

    def test_all_zero_products_raise(self) -> None:
        for alternative in self.alternatives:
            alternative.values["c2"] = 0.0
        with self.assertRaisesRegex(RankingError, "sums to zero"):
            WPMethod().compute_scores(self.criteria, self.alternatives)

    def test_negative_value_raises(self) -> None:
        self.alternatives[1].values["c2"] = -4.0
        with self.assertRaises(RankingError):
            WPMethod().compute_scores(self.criteria, self.alternatives)

    def test_ties_keep_input_order(self) -> None:
        criteria = [Criterion(id="q", name="Quality", weight=1.0)]
        alternatives = [
            Alternative(id="x", name="X", values={"q": 2.0}),
            Alternative(id="y", name="Y", values={"q": 2.0}),
        ]
        ranked = WPMethod().compute_scores(criteria, alternatives)
        self.assertEqual([result.alternative_id for result in ranked], ["x", "y"])
        self.assertAlmostEqual(ranked[0].score, 0.5)
