from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from mcda import calculate_saw, calculate_wp, validate
from mcda.rubric import default_sub_criteria, label_for_value, relabel
from mcda.validation import ValidationResult, validate_sub_criteria
from models import BENEFIT, COST, Alternative, Criterion, DecisionRecord, RankResult, Template, new_id, utc_now

logger = logging.getLogger(__name__)


def format_score(score: Optional[float]) -> str:
    return "-" if score is None else f"{score:.4f}"


@dataclass
class ComparisonRow:
    alternative_id: str
    alternative_name: str
    saw_score: Optional[float]
    saw_rank: Optional[int]
    wp_score: Optional[float]
    wp_rank: Optional[int]

    @property
    def methods_agree(self) -> bool:
        return self.saw_rank is not None and self.saw_rank == self.wp_rank

    def to_table_row(self) -> dict:
        """Display row keyed by alternative id; missing results render as "-"."""
        return {
            "id": self.alternative_id,
            "name": self.alternative_name,
            "saw_rank": "-" if self.saw_rank is None else self.saw_rank,
            "saw_score": format_score(self.saw_score),
            "wp_rank": "-" if self.wp_rank is None else self.wp_rank,
            "wp_score": format_score(self.wp_score),
            "agree": "yes" if self.methods_agree else "no",
        }


def prepare_decision(
    title: str,
    criteria: Iterable[Criterion],
    alternatives: Iterable[Alternative],
) -> DecisionRecord:
    """Build a record whose alternative values are keyed by criterion id.

    Criteria and alternatives without an id get a fresh one. Value keys that
    match a criterion name are rewritten to that criterion's id; any other
    key is assumed to already be an id and kept as-is.
    """
    prepared_criteria: List[Criterion] = []
    for criterion in criteria:
        item = copy.deepcopy(criterion)
        if not item.id:
            item.id = new_id()
        if not item.sub_criteria:
            item.sub_criteria = default_sub_criteria()
        prepared_criteria.append(item)

    name_to_id = {criterion.name: criterion.id for criterion in prepared_criteria}
    prepared_alternatives: List[Alternative] = []
    for alternative in alternatives:
        values: Dict[str, float] = {}
        for key, value in alternative.values.items():
            values[name_to_id.get(key, key)] = value
        prepared_alternatives.append(
            Alternative(id=alternative.id or new_id(), name=alternative.name, values=values)
        )

    return DecisionRecord(
        title=title.strip() or "Untitled",
        criteria=prepared_criteria,
        alternatives=prepared_alternatives,
    )


def rank_decision(record: DecisionRecord) -> ValidationResult:
    """Validate the record and, when valid, replace both result sets.

    Invalid input leaves the stored results untouched. ``RankingError``
    from either method propagates to the caller.
    """
    validation = validate(record.criteria, record.alternatives)
    if not validation.is_valid:
        logger.info(
            "Decision %r rejected with %d validation error(s)", record.title, len(validation.errors)
        )
        return validation

    saw_results = calculate_saw(record.criteria, record.alternatives)
    wp_results = calculate_wp(record.criteria, record.alternatives)
    record.saw_results = saw_results
    record.wp_results = wp_results
    record.updated_at = utc_now()
    logger.info(
        "Ranked decision %r: SAW winner %s, WP winner %s",
        record.title,
        saw_results[0].alternative_name,
        wp_results[0].alternative_name,
    )
    return validation


def record_from_template(template: Template, title: str) -> DecisionRecord:
    criteria = []
    for criterion in template.criteria:
        item = copy.deepcopy(criterion)
        item.id = new_id()
        criteria.append(item)
    return DecisionRecord(title=title.strip() or template.name, criteria=criteria)


def template_from_record(record: DecisionRecord, name: str, description: str = "") -> Template:
    return Template(
        name=name.strip() or record.title,
        description=description,
        criteria=[copy.deepcopy(criterion) for criterion in record.criteria],
    )


def build_comparison(record: DecisionRecord) -> List[ComparisonRow]:
    """Line up SAW and WP results per alternative, in the record's input order."""
    saw_by_id: Dict[str, RankResult] = {result.alternative_id: result for result in record.saw_results}
    wp_by_id: Dict[str, RankResult] = {result.alternative_id: result for result in record.wp_results}
    rows: List[ComparisonRow] = []
    for alternative in record.alternatives:
        saw = saw_by_id.get(alternative.id)
        wp = wp_by_id.get(alternative.id)
        rows.append(
            ComparisonRow(
                alternative_id=alternative.id,
                alternative_name=alternative.name,
                saw_score=saw.score if saw else None,
                saw_rank=saw.rank if saw else None,
                wp_score=wp.score if wp else None,
                wp_rank=wp.rank if wp else None,
            )
        )
    return rows


def apply_rubric_label(criterion: Criterion, value: int, label: str | None) -> ValidationResult:
    """Relabel one rubric level, keeping the old rubric if the new one is invalid."""
    candidate = relabel(criterion.sub_criteria, value, label or "")
    check = validate_sub_criteria(candidate)
    if check.is_valid:
        criterion.sub_criteria = candidate
    return check


EXCELLENT = "excellent"
GOOD = "good"
AVERAGE = "average"
POOR = "poor"

# criteria lighter than this only count as strengths/weaknesses at the extremes
KEY_CRITERION_WEIGHT = 0.15

PERFORMANCE_LABELS = {
    BENEFIT: {EXCELLENT: "Sangat Tinggi", GOOD: "Tinggi", AVERAGE: "Sedang", POOR: "Rendah"},
    COST: {EXCELLENT: "Sangat Rendah", GOOD: "Rendah", AVERAGE: "Sedang", POOR: "Tinggi"},
}


@dataclass
class CriterionAnalysis:
    criterion_id: str
    criterion_name: str
    criterion_type: str
    weight: float
    value: float
    value_label: str
    performance: str
    is_highest: bool
    is_lowest: bool

    @property
    def performance_label(self) -> str:
        return PERFORMANCE_LABELS.get(self.criterion_type, PERFORMANCE_LABELS[BENEFIT])[self.performance]


@dataclass
class AlternativeAnalysis:
    alternative_id: str
    alternative_name: str
    rank: int
    score: float
    criteria: List[CriterionAnalysis] = field(default_factory=list)
    strengths: List[CriterionAnalysis] = field(default_factory=list)
    weaknesses: List[CriterionAnalysis] = field(default_factory=list)


def rate_performance(value: float, column: List[float], is_benefit: bool) -> str:
    """Place a value against its criterion column; cost criteria reward low values."""
    highest = max(column)
    lowest = min(column)
    average = sum(column) / len(column)
    if is_benefit:
        if value >= highest * 0.9:
            return EXCELLENT
        if value >= average:
            return GOOD
        if value >= lowest * 1.1:
            return AVERAGE
        return POOR
    if value <= lowest * 1.1:
        return EXCELLENT
    if value <= average:
        return GOOD
    if value <= highest * 0.9:
        return AVERAGE
    return POOR


def analyze_alternative(
    record: DecisionRecord,
    alternative_id: str,
    results: List[RankResult],
) -> Optional[AlternativeAnalysis]:
    """Explain one alternative's position in ``results`` criterion by criterion.

    Returns None when the alternative or its result is not in the record.
    Missing values count as 0.
    """
    alternative = next((item for item in record.alternatives if item.id == alternative_id), None)
    result = next((item for item in results if item.alternative_id == alternative_id), None)
    if alternative is None or result is None:
        return None

    rows: List[CriterionAnalysis] = []
    for criterion in record.criteria:
        column = [item.values.get(criterion.id, 0.0) for item in record.alternatives]
        value = alternative.values.get(criterion.id, 0.0)
        rows.append(
            CriterionAnalysis(
                criterion_id=criterion.id,
                criterion_name=criterion.name,
                criterion_type=criterion.type,
                weight=criterion.weight,
                value=value,
                value_label=label_for_value(criterion.sub_criteria, value),
                performance=rate_performance(value, column, criterion.is_benefit),
                is_highest=value == max(column),
                is_lowest=value == min(column),
            )
        )

    strengths = [
        row for row in rows
        if row.performance == EXCELLENT or (row.performance == GOOD and row.weight > KEY_CRITERION_WEIGHT)
    ]
    weaknesses = [
        row for row in rows
        if row.performance == POOR or (row.performance == AVERAGE and row.weight > KEY_CRITERION_WEIGHT)
    ]
    return AlternativeAnalysis(
        alternative_id=alternative.id,
        alternative_name=alternative.name,
        rank=result.rank,
        score=result.score,
        criteria=rows,
        strengths=strengths,
        weaknesses=weaknesses,
    )
