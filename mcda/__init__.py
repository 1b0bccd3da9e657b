from typing import List, Sequence

from mcda.core import RankingError, RankingMethod, assign_ranks
from mcda.methods.saw import SAWMethod
from mcda.methods.wp import WPMethod
from mcda.validation import ValidationResult, validate, validate_sub_criteria
from models import Alternative, Criterion, RankResult

METHODS = {
    "saw": SAWMethod(),
    "wp": WPMethod(),
}


def get_method(method_id: str) -> RankingMethod:
    try:
        return METHODS[method_id]
    except KeyError:
        raise ValueError(f"Unknown ranking method: {method_id}") from None


def list_methods() -> dict:
    return {method_id: method.name for method_id, method in METHODS.items()}


def calculate_saw(criteria: Sequence[Criterion], alternatives: Sequence[Alternative]) -> List[RankResult]:
    return METHODS["saw"].compute_scores(criteria, alternatives)


def calculate_wp(criteria: Sequence[Criterion], alternatives: Sequence[Alternative]) -> List[RankResult]:
    return METHODS["wp"].compute_scores(criteria, alternatives)


__all__ = [
    "METHODS",
    "RankingError",
    "RankingMethod",
    "ValidationResult",
    "assign_ranks",
    "calculate_saw",
    "calculate_wp",
    "get_method",
    "list_methods",
    "validate",
    "validate_sub_criteria",
]
