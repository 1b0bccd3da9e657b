import unittest

from mcda.core import RankingError
from mcda.methods.saw import SAWMethod
from models import Alternative, Criterion


class TestSAWMethod(unittest.TestCase):
    def test_single_benefit_criterion_scores_by_max(self) -> None:
        method = SAWMethod()
        criteria = [Criterion(id="q", name="Quality", weight=1.0, type="benefit")]
        alternatives = [
            Alternative(id="a", name="A", values={"q": 2.0}),
            Alternative(id="b", name="B", values={"q": 5.0}),
            Alternative(id="c", name="C", values={"q": 4.0}),
        ]

        ranked = method.compute_scores(criteria, alternatives)
        self.assertEqual([result.alternative_name for result in ranked], ["B", "C", "A"])
        self.assertEqual([result.rank for result in ranked], [1, 2, 3])
        self.assertAlmostEqual(ranked[0].score, 1.0)
        self.assertAlmostEqual(ranked[1].score, 0.8)
        self.assertAlmostEqual(ranked[2].score, 0.4)

    def test_single_cost_criterion_scores_by_min(self) -> None:
        method = SAWMethod()
        criteria = [Criterion(id="p", name="Price", weight=1.0, type="cost")]
        alternatives = [
            Alternative(id="a", name="A", values={"p": 4.0}),
            Alternative(id="b", name="B", values={"p": 2.0}),
            Alternative(id="c", name="C", values={"p": 5.0}),
        ]

        ranked = method.compute_scores(criteria, alternatives)
        self.assertEqual(ranked[0].alternative_name, "B")
        self.assertAlmostEqual(ranked[0].score, 1.0)
        self.assertAlmostEqual(ranked[1].score, 0.5)
        self.assertAlmostEqual(ranked[2].score, 0.4)
        self.assertTrue(all(result.score < 1.0 for result in ranked[1:]))

    def test_scores_are_not_normalized_to_one(self) -> None:
        method = SAWMethod()
        criteria = [
            Criterion(id="c1", name="C1", weight=0.5, type="benefit"),
            Criterion(id="c2", name="C2", weight=0.5, type="benefit"),
        ]
        alternatives = [
            Alternative(id="a", name="A", values={"c1": 5.0, "c2": 5.0}),
            Alternative(id="b", name="B", values={"c1": 5.0, "c2": 5.0}),
        ]

        ranked = method.compute_scores(criteria, alternatives)
        self.assertAlmostEqual(sum(result.score for result in ranked), 2.0)

    def test_ties_keep_input_order(self) -> None:
        method = SAWMethod()
        criteria = [Criterion(id="q", name="Quality", weight=1.0, type="benefit")]
        alternatives = [
            Alternative(id="x", name="X", values={"q": 3.0}),
            Alternative(id="y", name="Y", values={"q": 5.0}),
            Alternative(id="z", name="Z", values={"q": 3.0}),
        ]

        ranked = method.compute_scores(criteria, alternatives)
        self.assertEqual([result.alternative_id for result in ranked], ["y", "x", "z"])
        self.assertEqual([result.rank for result in ranked], [1, 2, 3])

    def test_zero_benefit_basis_raises(self) -> None:
        method = SAWMethod()
        criteria = [Criterion(id="q", name="Quality", weight=1.0, type="benefit")]
        alternatives = [
            Alternative(id="a", name="A", values={"q": 0.0}),
            Alternative(id="b", name="B", values={"q": 0.0}),
        ]

        with self.assertRaises(RankingError):
            method.compute_scores(criteria, alternatives)

    def test_zero_cost_basis_raises(self) -> None:
        method = SAWMethod()
        criteria = [Criterion(id="p", name="Price", weight=1.0, type="cost")]
        alternatives = [
            Alternative(id="a", name="A", values={"p": 0.0}),
            Alternative(id="b", name="B", values={"p": 3.0}),
        ]

        with self.assertRaisesRegex(RankingError, "Price"):
            method.compute_scores(criteria, alternatives)

    def test_empty_alternatives(self) -> None:
        criteria = [Criterion(id="q", name="Quality", weight=1.0)]
        self.assertEqual(SAWMethod().compute_scores(criteria, []), [])
