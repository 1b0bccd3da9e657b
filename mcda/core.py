from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence

import numpy as np

from models import Alternative, Criterion, RankResult


class RankingError(ValueError):
    """Raised when a ranking cannot be computed from numerically degenerate input."""


class RankingMethod(ABC):
    id: str
    name: str

    @abstractmethod
    def compute_scores(
        self,
        criteria: Sequence[Criterion],
        alternatives: Sequence[Alternative],
    ) -> List[RankResult]:
        raise NotImplementedError

    @staticmethod
    def _decision_matrix(
        criteria: Sequence[Criterion],
        alternatives: Sequence[Alternative],
    ) -> np.ndarray:
        # rows are alternatives, columns are criteria
        return np.array(
            [[alternative.values[criterion.id] for criterion in criteria] for alternative in alternatives],
            dtype=float,
        )

    def _check_finite(self, scores: np.ndarray, alternatives: Sequence[Alternative]) -> None:
        bad = [alternatives[idx].name for idx in np.flatnonzero(~np.isfinite(scores))]
        if bad:
            raise RankingError(f"{self.name} produced a non-finite score for: {', '.join(bad)}")


def assign_ranks(alternatives: Sequence[Alternative], scores: Sequence[float]) -> List[RankResult]:
    """Order alternatives by descending score and number them from 1.

    The sort is stable, so alternatives with exactly equal scores keep
    their input order.
    """
    results = [
        RankResult(
            alternative_id=alternative.id,
            alternative_name=alternative.name,
            score=float(score),
            rank=0,
        )
        for alternative, score in zip(alternatives, scores)
    ]
    results.sort(key=lambda item: item.score, reverse=True)
    for position, result in enumerate(results, start=1):
        result.rank = position
    return results
