from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np

from mcda.core import RankingError, RankingMethod, assign_ranks
from models import Alternative, Criterion, RankResult

logger = logging.getLogger(__name__)


class SAWMethod(RankingMethod):
    id = "saw"
    name = "Simple Additive Weighting"

    def compute_scores(
        self,
        criteria: Sequence[Criterion],
        alternatives: Sequence[Alternative],
    ) -> List[RankResult]:
        if not alternatives:
            return []

        matrix = self._decision_matrix(criteria, alternatives)
        normalized = self._normalize(matrix, criteria)
        weights = np.array([criterion.weight for criterion in criteria], dtype=float)
        scores = normalized.dot(weights)
        self._check_finite(scores, alternatives)
        logger.debug("SAW scores for %d alternatives: %s", len(alternatives), scores.tolist())
        return assign_ranks(alternatives, scores.tolist())

    @staticmethod
    def _normalize(matrix: np.ndarray, criteria: Sequence[Criterion]) -> np.ndarray:
        normalized = np.zeros_like(matrix, dtype=float)
        for idx, criterion in enumerate(criteria):
            column = matrix[:, idx]
            basis = column.max() if criterion.is_benefit else column.min()
            if basis == 0:
                logger.warning("Zero normalization basis for criterion %s", criterion.name)
                raise RankingError(
                    f"Criterion {criterion.name} has a zero normalization basis; "
                    "it cannot discriminate between alternatives"
                )
            with np.errstate(divide="ignore", invalid="ignore"):
                if criterion.is_benefit:
                    normalized[:, idx] = column / basis
                else:
                    normalized[:, idx] = basis / column
        return normalized
