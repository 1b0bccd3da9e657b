from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional
import uuid

BENEFIT = "benefit"
COST = "cost"
CRITERION_TYPES = (BENEFIT, COST)


def new_id() -> str:
    return uuid.uuid4().hex


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class SubCriterion:
    value: int
    label: str
    order: int

    def to_dict(self) -> dict:
        return {"value": self.value, "label": self.label, "order": self.order}

    @classmethod
    def from_dict(cls, data: dict) -> "SubCriterion":
        value = int(data.get("value", 0))
        return cls(
            value=value,
            label=str(data.get("label", "")),
            order=int(data.get("order", value)),
        )


@dataclass
class Criterion:
    name: str
    weight: float
    type: str = BENEFIT
    id: str = field(default_factory=new_id)
    sub_criteria: List[SubCriterion] = field(default_factory=list)

    @property
    def is_benefit(self) -> bool:
        return self.type == BENEFIT

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "weight": self.weight,
            "type": self.type,
            "sub_criteria": [item.to_dict() for item in self.sub_criteria],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Criterion":
        return cls(
            id=data.get("id") or new_id(),
            name=data.get("name", ""),
            weight=float(data.get("weight", 0.0)),
            type=data.get("type", BENEFIT),
            sub_criteria=[SubCriterion.from_dict(item) for item in data.get("sub_criteria", [])],
        )


@dataclass
class Alternative:
    name: str
    values: Dict[str, float] = field(default_factory=dict)
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "values": dict(self.values)}

    @classmethod
    def from_dict(cls, data: dict) -> "Alternative":
        return cls(
            id=data.get("id") or new_id(),
            name=data.get("name", ""),
            values={key: float(value) for key, value in data.get("values", {}).items()},
        )


@dataclass
class RankResult:
    alternative_id: str
    alternative_name: str
    score: float
    rank: int

    def to_dict(self) -> dict:
        return {
            "alternative_id": self.alternative_id,
            "alternative_name": self.alternative_name,
            "score": float(self.score),
            "rank": int(self.rank),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RankResult":
        return cls(
            alternative_id=data["alternative_id"],
            alternative_name=data.get("alternative_name", ""),
            score=float(data["score"]),
            rank=int(data["rank"]),
        )


@dataclass
class DecisionRecord:
    title: str
    criteria: List[Criterion] = field(default_factory=list)
    alternatives: List[Alternative] = field(default_factory=list)
    saw_results: List[RankResult] = field(default_factory=list)
    wp_results: List[RankResult] = field(default_factory=list)
    id: str = field(default_factory=new_id)
    created_at: str = field(default_factory=utc_now)
    updated_at: Optional[str] = None

    def clear_results(self) -> None:
        self.saw_results = []
        self.wp_results = []

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "criteria": [criterion.to_dict() for criterion in self.criteria],
            "alternatives": [alternative.to_dict() for alternative in self.alternatives],
            "saw_results": [result.to_dict() for result in self.saw_results],
            "wp_results": [result.to_dict() for result in self.wp_results],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DecisionRecord":
        return cls(
            id=data.get("id") or new_id(),
            title=data.get("title", "Untitled"),
            created_at=data.get("created_at") or utc_now(),
            updated_at=data.get("updated_at"),
            criteria=[Criterion.from_dict(item) for item in data.get("criteria", [])],
            alternatives=[Alternative.from_dict(item) for item in data.get("alternatives", [])],
            saw_results=[RankResult.from_dict(item) for item in data.get("saw_results", [])],
            wp_results=[RankResult.from_dict(item) for item in data.get("wp_results", [])],
        )


@dataclass
class Template:
    name: str
    description: str = ""
    criteria: List[Criterion] = field(default_factory=list)
    is_active: bool = True
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "is_active": self.is_active,
            "criteria": [criterion.to_dict() for criterion in self.criteria],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Template":
        return cls(
            id=data.get("id") or new_id(),
            name=data.get("name", "Untitled"),
            description=data.get("description", ""),
            is_active=bool(data.get("is_active", True)),
            criteria=[Criterion.from_dict(item) for item in data.get("criteria", [])],
        )
