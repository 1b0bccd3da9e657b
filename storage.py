from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from config import Settings
from models import DecisionRecord, Template

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5


def slugify(name: str) -> str:
    cleaned = re.sub(r"[^a-zA-Z0-9_-]+", "-", name.strip()).strip("-")
    return cleaned.lower() or "untitled"


@dataclass
class RecordSummary:
    slug: str
    title: str
    created_at: str


@dataclass
class DashboardStats:
    total: int
    recent: List[RecordSummary] = field(default_factory=list)


class Storage:
    """JSON files for decision records and templates under one data directory."""

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = Path(data_dir)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Storage":
        return cls(settings.data_dir)

    @property
    def records_dir(self) -> Path:
        path = self.data_dir / "records"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def templates_dir(self) -> Path:
        path = self.data_dir / "templates"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @staticmethod
    def _write(path: Path, data: dict) -> Path:
        with path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=2)
        return path

    @staticmethod
    def _read(path: Path) -> dict | None:
        if not path.exists():
            return None
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)

    @staticmethod
    def _delete(path: Path) -> bool:
        if not path.exists():
            return False
        path.unlink()
        logger.info("Deleted %s", path)
        return True

    def record_path(self, title: str) -> Path:
        return self.records_dir / f"{slugify(title)}.json"

    def record_summaries(self) -> List[RecordSummary]:
        """All saved records, newest first."""
        summaries: List[RecordSummary] = []
        for path in self.records_dir.glob("*.json"):
            data = self._read(path) or {}
            summaries.append(
                RecordSummary(
                    slug=path.stem,
                    title=data.get("title", path.stem),
                    created_at=data.get("created_at") or "",
                )
            )
        summaries.sort(key=lambda item: item.slug)
        summaries.sort(key=lambda item: item.created_at, reverse=True)
        return summaries

    def list_records(self) -> List[str]:
        return [summary.slug for summary in self.record_summaries()]

    def dashboard_stats(self, limit: int = RECENT_LIMIT) -> DashboardStats:
        summaries = self.record_summaries()
        return DashboardStats(total=len(summaries), recent=summaries[:limit])

    def save_record(self, record: DecisionRecord) -> Path:
        path = self._write(self.record_path(record.title), record.to_dict())
        logger.info("Saved decision record %r to %s", record.title, path)
        return path

    def load_record(self, title: str) -> DecisionRecord | None:
        data = self._read(self.record_path(title))
        if data is None:
            return None
        return DecisionRecord.from_dict(data)

    def delete_record(self, title: str) -> bool:
        return self._delete(self.record_path(title))

    def template_path(self, name: str) -> Path:
        return self.templates_dir / f"{slugify(name)}.json"

    def list_templates(self, active_only: bool = False) -> List[str]:
        names: List[str] = []
        for path in sorted(self.templates_dir.glob("*.json")):
            if active_only and not (self._read(path) or {}).get("is_active", True):
                continue
            names.append(path.stem)
        return names

    def save_template(self, template: Template) -> Path:
        path = self._write(self.template_path(template.name), template.to_dict())
        logger.info("Saved template %r to %s", template.name, path)
        return path

    def load_template(self, name: str) -> Template | None:
        data = self._read(self.template_path(name))
        if data is None:
            return None
        return Template.from_dict(data)

    def delete_template(self, name: str) -> bool:
        return self._delete(self.template_path(name))

    def toggle_template_status(self, name: str) -> Template | None:
        template = self.load_template(name)
        if template is None:
            return None
        template.is_active = not template.is_active
        self.save_template(template)
        logger.info("Template %r is now %s", template.name, "active" if template.is_active else "inactive")
        return template
