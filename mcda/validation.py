from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import List, Sequence

from models import CRITERION_TYPES, Alternative, Criterion, SubCriterion

WEIGHT_TOLERANCE = 0.001
MIN_CRITERIA = 2
MIN_ALTERNATIVES = 2
RUBRIC_SIZE = 5


def is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _describe(value) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{value:g}"
    return repr(value)


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def validate(criteria: Sequence[Criterion], alternatives: Sequence[Alternative]) -> ValidationResult:
    """Collect every problem that would make a SAW/WP ranking meaningless.

    Nothing is raised for bad input; callers check ``is_valid`` and show
    the full ``errors`` list.
    """
    errors: List[str] = []

    if len(criteria) < MIN_CRITERIA:
        errors.append(f"At least {MIN_CRITERIA} criteria are required")
    if len(alternatives) < MIN_ALTERNATIVES:
        errors.append(f"At least {MIN_ALTERNATIVES} alternatives are required")

    for criterion in criteria:
        if not isinstance(criterion.name, str) or not criterion.name.strip():
            errors.append("Criterion name cannot be empty")
        if not is_number(criterion.weight) or not 0 < criterion.weight <= 1:
            errors.append(
                f"Weight for criterion {criterion.name} must be greater than 0 and at most 1"
            )
        if criterion.type not in CRITERION_TYPES:
            errors.append(
                f"Criterion {criterion.name} has invalid type {criterion.type}; expected benefit or cost"
            )

    total_weight = sum(criterion.weight for criterion in criteria if is_number(criterion.weight))
    if abs(total_weight - 1.0) > WEIGHT_TOLERANCE:
        errors.append(f"Criteria weights must sum to 1 (got {total_weight:.4f})")

    for criterion in criteria:
        for alternative in alternatives:
            if criterion.id not in alternative.values:
                errors.append(
                    f"Alternative {alternative.name} missing value for criterion {criterion.name}"
                )

    for alternative in alternatives:
        for criterion in criteria:
            if criterion.id not in alternative.values:
                continue
            value = alternative.values[criterion.id]
            if not is_number(value) or value <= 0:
                errors.append(
                    f"All values must be positive. Found {_describe(value)} for {alternative.name} - {criterion.name}"
                )

    return ValidationResult(errors=errors)


def validate_sub_criteria(sub_criteria: Sequence[SubCriterion]) -> ValidationResult:
    errors: List[str] = []
    if len(sub_criteria) != RUBRIC_SIZE:
        errors.append(f"Sub-criteria must contain exactly {RUBRIC_SIZE} items")
        return ValidationResult(errors=errors)

    for position, item in enumerate(sub_criteria, start=1):
        if not item.label.strip():
            errors.append(f"Sub-criteria item {position} must have a valid label")
        if item.value != position:
            errors.append(f"Sub-criteria item {position} must have value {position}")
        if item.order != position:
            errors.append(f"Sub-criteria item {position} must have order {position}")
    return ValidationResult(errors=errors)
