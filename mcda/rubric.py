from __future__ import annotations

from typing import List, Sequence

from models import SubCriterion

DEFAULT_LABELS = [
    "Sangat Rendah",
    "Rendah",
    "Sedang",
    "Tinggi",
    "Sangat Tinggi",
]

SCALE = list(range(1, len(DEFAULT_LABELS) + 1))


def default_sub_criteria() -> List[SubCriterion]:
    return [SubCriterion(value=value, label=label, order=value) for value, label in zip(SCALE, DEFAULT_LABELS)]


def relabel(sub_criteria: Sequence[SubCriterion], value: int, label: str) -> List[SubCriterion]:
    """Return a copy of the rubric with the label for ``value`` replaced."""
    return [
        SubCriterion(value=item.value, label=label.strip() if item.value == value else item.label, order=item.order)
        for item in sub_criteria
    ]


def label_for_value(sub_criteria: Sequence[SubCriterion], value: float) -> str:
    for item in sub_criteria:
        if item.value == value:
            return item.label
    index = int(value) - 1
    if float(value).is_integer() and 0 <= index < len(DEFAULT_LABELS):
        return DEFAULT_LABELS[index]
    return f"{value:g}"


def selector_options(sub_criteria: Sequence[SubCriterion]) -> dict:
    items = sorted(sub_criteria, key=lambda item: item.order) if sub_criteria else default_sub_criteria()
    return {item.value: f"{item.value} - {item.label}" for item in items}
