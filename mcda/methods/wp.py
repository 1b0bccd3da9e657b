from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np

from mcda.core import RankingError, RankingMethod, assign_ranks
from models import Alternative, Criterion, RankResult

logger = logging.getLogger(__name__)


class WPMethod(RankingMethod):
    id = "wp"
    name = "Weighted Product"

    def compute_scores(
        self,
        criteria: Sequence[Criterion],
        alternatives: Sequence[Alternative],
    ) -> List[RankResult]:
        if not alternatives:
            return []

        matrix = self._decision_matrix(criteria, alternatives)
        exponents = self._signed_exponents(criteria)
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            vector_s = np.prod(np.power(matrix, exponents), axis=1)
        self._check_finite(vector_s, alternatives)

        total = vector_s.sum()
        if total == 0:
            logger.warning("WP vector S sums to zero for %d alternatives", len(alternatives))
            raise RankingError(f"{self.name} vector S sums to zero; preferences are undefined")
        preferences = vector_s / total
        logger.debug("WP preferences for %d alternatives: %s", len(alternatives), preferences.tolist())
        return assign_ranks(alternatives, preferences.tolist())

    @staticmethod
    def _relative_weights(criteria: Sequence[Criterion]) -> np.ndarray:
        weights = np.array([criterion.weight for criterion in criteria], dtype=float)
        total = weights.sum()
        if total == 0:
            raise RankingError("Criteria weights sum to zero")
        return weights / total

    @classmethod
    def _signed_exponents(cls, criteria: Sequence[Criterion]) -> np.ndarray:
        relative = cls._relative_weights(criteria)
        signs = np.array([1.0 if criterion.is_benefit else -1.0 for criterion in criteria])
        return relative * signs
