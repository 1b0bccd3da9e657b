from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Optional

import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nicegui import ui
import nicegui.run as ng_run

from config import load_settings
from decisions import (
    AlternativeAnalysis,
    analyze_alternative,
    apply_rubric_label,
    build_comparison,
    rank_decision,
    record_from_template,
    template_from_record,
)
from mcda import RankingError, list_methods
from mcda.rubric import default_sub_criteria, selector_options
from mcda.validation import WEIGHT_TOLERANCE
from models import BENEFIT, COST, Alternative, Criterion, DecisionRecord
from storage import Storage

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    record: DecisionRecord
    storage: Storage


settings = load_settings()
logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

state = AppState(record=DecisionRecord(title="default"), storage=Storage.from_settings(settings))
weight_total_label: Optional[ui.label] = None

CRITERION_TYPE_OPTIONS = {
    BENEFIT: "Benefit (higher is better)",
    COST: "Cost (lower is better)",
}


def ensure_state_consistency() -> None:
    record = state.record
    criterion_ids = {criterion.id for criterion in record.criteria}
    for criterion in record.criteria:
        if len(criterion.sub_criteria) != 5:
            criterion.sub_criteria = default_sub_criteria()
    for alternative in record.alternatives:
        alternative.values = {
            key: value for key, value in alternative.values.items() if key in criterion_ids
        }


def invalidate_results() -> None:
    state.record.clear_results()
    results_view.refresh()


def refresh_all() -> None:
    criteria_view.refresh()
    update_weight_total()
    alternatives_view.refresh()
    results_view.refresh()


def weight_total() -> float:
    return sum(criterion.weight for criterion in state.record.criteria)


def update_weight_total() -> None:
    if weight_total_label is None:
        return
    total = weight_total()
    weight_total_label.set_text(f"Total weight: {total:.3f}")
    if abs(total - 1.0) > WEIGHT_TOLERANCE:
        weight_total_label.classes(replace="text-sm text-negative font-semibold")
    else:
        weight_total_label.classes(replace="text-sm text-gray-500")


def add_criterion(name: str, weight: float | None, criterion_type: str | None) -> None:
    name = (name or "").strip()
    if not name:
        ui.notify("Criterion name cannot be empty.")
        return
    if any(criterion.name == name for criterion in state.record.criteria):
        ui.notify("Criterion already exists.")
        return
    if weight is None or weight <= 0 or weight > 1:
        ui.notify("Weight must be greater than 0 and at most 1.")
        return
    state.record.criteria.append(
        Criterion(
            name=name,
            weight=float(weight),
            type=criterion_type or BENEFIT,
            sub_criteria=default_sub_criteria(),
        )
    )
    ensure_state_consistency()
    invalidate_results()
    refresh_all()


def remove_criterion(index: int) -> None:
    state.record.criteria.pop(index)
    ensure_state_consistency()
    invalidate_results()
    refresh_all()


def update_weight(index: int, value: float | None) -> None:
    if value is None:
        return
    if value <= 0 or value > 1:
        ui.notify("Weight must be greater than 0 and at most 1.")
        return
    state.record.criteria[index].weight = float(value)
    update_weight_total()
    invalidate_results()


def update_type(index: int, value: str | None) -> None:
    if value not in CRITERION_TYPE_OPTIONS:
        return
    state.record.criteria[index].type = value
    invalidate_results()


def normalize_weights() -> None:
    total = weight_total()
    if total <= 0:
        ui.notify("Add criteria with positive weights first.")
        return
    for criterion in state.record.criteria:
        criterion.weight = round(criterion.weight / total, 4)
    invalidate_results()
    criteria_view.refresh()
    update_weight_total()


def update_rubric_label(criterion_index: int, value: int, label: str | None) -> None:
    check = apply_rubric_label(state.record.criteria[criterion_index], value, label)
    if not check.is_valid:
        for message in check.errors:
            ui.notify(message)
        criteria_view.refresh()
        return
    alternatives_view.refresh()


def add_alternative(name: str) -> None:
    name = (name or "").strip()
    if not name:
        ui.notify("Alternative name cannot be empty.")
        return
    if any(alternative.name == name for alternative in state.record.alternatives):
        ui.notify("Alternative already exists.")
        return
    state.record.alternatives.append(Alternative(name=name))
    invalidate_results()
    alternatives_view.refresh()


def remove_alternative(index: int) -> None:
    state.record.alternatives.pop(index)
    invalidate_results()
    alternatives_view.refresh()


def update_value(alternative_index: int, criterion_id: str, value: int | None) -> None:
    if value is None:
        return
    if value < 1 or value > 5:
        ui.notify("Value must be between 1 and 5.")
        return
    state.record.alternatives[alternative_index].values[criterion_id] = float(value)
    invalidate_results()


def recompute_results() -> None:
    record = state.record
    try:
        validation = rank_decision(record)
    except RankingError as exc:
        logger.warning("Ranking failed for %r: %s", record.title, exc)
        ui.notify(f"Ranking failed: {exc}", type="negative")
        return
    if not validation.is_valid:
        for message in validation.errors:
            ui.notify(message, type="warning")
        return
    results_view.refresh()


def new_record() -> None:
    state.record = DecisionRecord(title="Untitled")
    record_title_input.value = state.record.title
    refresh_all()


def save_current() -> None:
    record = state.record
    if not record.saw_results:
        ui.notify("Rank alternatives before saving.")
        return
    path = state.storage.save_record(record)
    ui.notify(f"Saved to {path}")
    refresh_saved_lists()


def load_named(name: str | None) -> None:
    if not name:
        ui.notify("Choose a decision to load.")
        return
    loaded = state.storage.load_record(name)
    if loaded is None:
        ui.notify("Decision not found on disk.")
        return
    state.record = loaded
    ensure_state_consistency()
    record_title_input.value = state.record.title
    refresh_all()
    ui.notify(f"Loaded {state.record.title}")


def delete_named(name: str | None) -> None:
    if not name:
        ui.notify("Choose a decision to delete.")
        return
    if state.storage.delete_record(name):
        ui.notify(f"Deleted {name}")
    else:
        ui.notify("Decision not found on disk.")
    refresh_saved_lists()


def save_as_template(name: str | None) -> None:
    if len(state.record.criteria) == 0:
        ui.notify("Add criteria before saving a template.")
        return
    template = template_from_record(state.record, name or "")
    path = state.storage.save_template(template)
    ui.notify(f"Template saved to {path}")
    refresh_saved_lists()


def apply_template(name: str | None) -> None:
    if not name:
        ui.notify("Choose a template to apply.")
        return
    template = state.storage.load_template(name)
    if template is None:
        ui.notify("Template not found on disk.")
        return
    if not template.is_active:
        ui.notify(f"Template {template.name} is inactive.")
        return
    state.record = record_from_template(template, state.record.title)
    ensure_state_consistency()
    refresh_all()
    ui.notify(f"Applied template {template.name}")


def delete_template_named(name: str | None) -> None:
    if not name:
        ui.notify("Choose a template to delete.")
        return
    if state.storage.delete_template(name):
        ui.notify(f"Deleted template {name}")
    else:
        ui.notify("Template not found on disk.")
    refresh_saved_lists()


def toggle_template_named(name: str | None) -> None:
    if not name:
        ui.notify("Choose a template to toggle.")
        return
    template = state.storage.toggle_template_status(name)
    if template is None:
        ui.notify("Template not found on disk.")
    else:
        ui.notify(f"Template {template.name} is now {'active' if template.is_active else 'inactive'}")
    refresh_saved_lists()


def template_options() -> dict:
    active = set(state.storage.list_templates(active_only=True))
    return {
        name: name if name in active else f"{name} (inactive)"
        for name in state.storage.list_templates()
    }


def refresh_saved_lists() -> None:
    saved_select.options = state.storage.list_records()
    saved_select.update()
    template_select.options = template_options()
    template_select.update()
    dashboard_view.refresh()


def render_analysis(method_label: str, analysis: AlternativeAnalysis) -> None:
    title = f"{method_label} #{analysis.rank} {analysis.alternative_name} ({analysis.score:.4f})"
    with ui.expansion(title).classes("w-full"):
        for row in analysis.criteria:
            best = row.is_highest if row.criterion_type == BENEFIT else row.is_lowest
            marker = " (best)" if best else ""
            ui.label(
                f"{row.criterion_name} [{row.criterion_type}, weight {row.weight:.3f}]: "
                f"{row.value:g} - {row.value_label} -> {row.performance_label}{marker}"
            ).classes("text-sm")
        if analysis.strengths:
            ui.label("Strengths: " + ", ".join(row.criterion_name for row in analysis.strengths)).classes(
                "text-sm text-green-700"
            )
        if analysis.weaknesses:
            ui.label("Weaknesses: " + ", ".join(row.criterion_name for row in analysis.weaknesses)).classes(
                "text-sm text-red-700"
            )


ui.page_title("SAW & WP Decision Helper")

with ui.column().classes("w-full max-w-6xl mx-auto p-6"):
    ui.label("SAW & WP Decision Helper").classes("text-3xl font-semibold")
    ui.label(
        "Rank alternatives with " + " and ".join(list_methods().values()) + ", side by side."
    ).classes("text-gray-500")

    with ui.card().classes("w-full"):
        ui.label("Decision").classes("text-lg font-semibold")
        with ui.row().classes("items-center"):
            record_title_input = ui.input("Decision title", value=state.record.title)

            def on_title_change(event) -> None:
                state.record.title = (event.value or "").strip() or "Untitled"

            record_title_input.on_value_change(on_title_change)
            ui.button("New", on_click=new_record).props("flat")
            ui.button("Save", on_click=save_current)

        with ui.row().classes("items-center"):
            saved_select = ui.select(options=state.storage.list_records(), label="Saved decisions")
            ui.button("Load", on_click=lambda: load_named(saved_select.value))
            ui.button("Delete", on_click=lambda: delete_named(saved_select.value)).props("outline color=negative")
            ui.button("Refresh list", on_click=refresh_saved_lists)

        with ui.row().classes("items-center"):
            template_select = ui.select(options=template_options(), label="Templates")
            ui.button("Apply template", on_click=lambda: apply_template(template_select.value))
            ui.button("Toggle active", on_click=lambda: toggle_template_named(template_select.value)).props("flat")
            ui.button("Delete template", on_click=lambda: delete_template_named(template_select.value)).props(
                "outline color=negative"
            )
            template_name_input = ui.input("Template name")
            ui.button("Save criteria as template", on_click=lambda: save_as_template(template_name_input.value))

        @ui.refreshable
        def dashboard_view() -> None:
            stats = state.storage.dashboard_stats()
            ui.label(f"Saved decisions: {stats.total}").classes("text-sm font-semibold")
            if not stats.recent:
                ui.label("Nothing saved yet.").classes("text-sm text-gray-500")
                return
            with ui.row().classes("gap-2"):
                for summary in stats.recent:
                    ui.button(summary.title, on_click=lambda slug=summary.slug: load_named(slug)).props(
                        "flat dense no-caps"
                    )

        dashboard_view()

    with ui.stepper().classes("w-full") as stepper:
        with ui.step("1. Criteria"):
            with ui.card().classes("w-full"):
                ui.label("Add criteria").classes("text-lg font-semibold")
                with ui.row().classes("items-center"):
                    criterion_input = ui.input("Criterion name")
                    weight_input = ui.number("Weight", value=0.5, min=0.001, max=1, step=0.05, format="%.3f")
                    type_select = ui.select(options=CRITERION_TYPE_OPTIONS, value=BENEFIT, label="Type")

                    def submit_criterion() -> None:
                        add_criterion(criterion_input.value, weight_input.value, type_select.value)
                        criterion_input.set_value("")

                    criterion_input.on("keydown.enter", lambda: submit_criterion())
                    ui.button("Add", on_click=submit_criterion)

                weight_total_label = ui.label("").classes("text-sm text-gray-500")
                ui.label("Weights must sum to 1.").classes("text-sm text-gray-500")
                ui.button("Normalize weights", on_click=normalize_weights).props("flat")

                @ui.refreshable
                def criteria_view() -> None:
                    if not state.record.criteria:
                        ui.label("No criteria yet.").classes("text-gray-500")
                        return
                    with ui.column().classes("gap-4 w-full"):
                        for idx, criterion in enumerate(state.record.criteria):
                            with ui.card().classes("w-full"):
                                with ui.row().classes("items-center justify-between w-full"):
                                    ui.label(criterion.name).classes("font-semibold")
                                    ui.number(
                                        "Weight",
                                        value=criterion.weight,
                                        min=0.001,
                                        max=1,
                                        step=0.05,
                                        format="%.3f",
                                        on_change=lambda e, i=idx: update_weight(i, e.value),
                                    ).props("dense")
                                    ui.select(
                                        options=CRITERION_TYPE_OPTIONS,
                                        value=criterion.type,
                                        on_change=lambda e, i=idx: update_type(i, e.value),
                                    ).props("dense")
                                    ui.button("Remove", on_click=lambda i=idx: remove_criterion(i)).props(
                                        "outline color=negative"
                                    )
                                with ui.expansion("Rubric labels (1-5)").classes("w-full"):
                                    with ui.row().classes("items-center"):
                                        for item in sorted(criterion.sub_criteria, key=lambda sub: sub.order):
                                            ui.input(
                                                f"{item.value}",
                                                value=item.label,
                                                on_change=lambda e, i=idx, v=item.value: update_rubric_label(
                                                    i, v, e.value
                                                ),
                                            ).props("dense")

                criteria_view()
                update_weight_total()

                with ui.stepper_navigation():
                    ui.button("Next", on_click=stepper.next)

        with ui.step("2. Alternatives"):
            with ui.card().classes("w-full"):
                ui.label("Add alternatives").classes("text-lg font-semibold")
                with ui.row().classes("items-center"):
                    alternative_input = ui.input("Alternative name")

                    def submit_alternative() -> None:
                        add_alternative(alternative_input.value)
                        alternative_input.set_value("")

                    alternative_input.on("keydown.enter", lambda: submit_alternative())
                    ui.button("Add", on_click=submit_alternative)

                @ui.refreshable
                def alternatives_view() -> None:
                    if not state.record.criteria:
                        ui.label("Add criteria before scoring alternatives.").classes("text-gray-500")
                        return
                    if not state.record.alternatives:
                        ui.label("No alternatives yet.").classes("text-gray-500")
                        return
                    ui.label("Pick a rubric level (1-5) for every criterion.").classes("text-sm text-gray-500")
                    criteria = state.record.criteria
                    name_col_width = 220
                    value_col_width = 180
                    action_col_width = 110
                    min_width = name_col_width + (len(criteria) * value_col_width) + action_col_width
                    grid_template = (
                        f"grid-template-columns: {name_col_width}px "
                        f"repeat({len(criteria)}, {value_col_width}px) {action_col_width}px;"
                    )

                    with ui.element("div").classes("w-full overflow-x-auto").style("max-width: 100%;"):
                        with ui.column().classes("gap-2"):
                            with ui.element("div").style(
                                f"display: grid; {grid_template} align-items: center; gap: 12px; min-width: {min_width}px;"
                            ):
                                ui.label("Alternative")
                                for criterion in criteria:
                                    ui.label(f"{criterion.name} ({criterion.type})").classes("text-center").style(
                                        "justify-self: center;"
                                    )
                                ui.label("")
                            for idx, alternative in enumerate(state.record.alternatives):
                                with ui.element("div").style(
                                    f"display: grid; {grid_template} align-items: center; gap: 12px; min-width: {min_width}px;"
                                ):
                                    ui.label(alternative.name).classes("break-words pr-2")
                                    for criterion in criteria:
                                        current = alternative.values.get(criterion.id)
                                        ui.select(
                                            options=selector_options(criterion.sub_criteria),
                                            value=int(current) if current is not None else None,
                                            on_change=lambda e, ii=idx, cid=criterion.id: update_value(ii, cid, e.value),
                                        ).classes("w-full").props("dense")
                                    ui.button("Remove", on_click=lambda i=idx: remove_alternative(i)).props(
                                        "outline color=negative"
                                    ).classes("w-full")

                alternatives_view()

                with ui.stepper_navigation():
                    ui.button("Back", on_click=stepper.previous).props("flat")
                    ui.button("Next", on_click=stepper.next)

        with ui.step("3. Results"):
            with ui.card().classes("w-full"):
                ui.label("Ranking").classes("text-lg font-semibold")
                ui.button("Recompute results", on_click=recompute_results)

                @ui.refreshable
                def results_view() -> None:
                    record = state.record
                    if not record.saw_results or not record.wp_results:
                        ui.label("No results yet.").classes("text-gray-500")
                        return
                    with ui.row().classes("w-full gap-8"):
                        with ui.column().classes("gap-1"):
                            ui.label("SAW (weighted sum)").classes("text-md font-semibold")
                            for result in record.saw_results:
                                ui.label(f"{result.rank}. {result.alternative_name}: {result.score:.4f}")
                        with ui.column().classes("gap-1"):
                            ui.label("WP (preference, sums to 1)").classes("text-md font-semibold")
                            for result in record.wp_results:
                                ui.label(f"{result.rank}. {result.alternative_name}: {result.score:.4f}")

                    rows = build_comparison(record)
                    ui.table(
                        columns=[
                            {"name": "name", "label": "Alternative", "field": "name", "align": "left"},
                            {"name": "saw_rank", "label": "SAW rank", "field": "saw_rank"},
                            {"name": "saw_score", "label": "SAW score", "field": "saw_score"},
                            {"name": "wp_rank", "label": "WP rank", "field": "wp_rank"},
                            {"name": "wp_score", "label": "WP score", "field": "wp_score"},
                            {"name": "agree", "label": "Same rank", "field": "agree"},
                        ],
                        rows=[row.to_table_row() for row in rows],
                        row_key="id",
                    ).classes("w-full mt-4")
                    if not all(row.methods_agree for row in rows):
                        ui.label(
                            "The methods rank some alternatives differently; compare both rankings before deciding."
                        ).classes("text-sm text-gray-500")
                    ui.label("SAW and WP scores are on different scales and are not comparable.").classes(
                        "text-sm text-gray-500"
                    )

                    ui.label("Why each alternative ranks where it does").classes("text-md font-semibold mt-4")
                    for method_label, results in (("SAW", record.saw_results), ("WP", record.wp_results)):
                        for result in results:
                            analysis = analyze_alternative(record, result.alternative_id, results)
                            if analysis is None:
                                continue
                            render_analysis(method_label, analysis)

                results_view()

                with ui.stepper_navigation():
                    ui.button("Back", on_click=stepper.previous).props("flat")
                    ui.button("Save", on_click=save_current)


ensure_state_consistency()
ng_run.setup = lambda: None
ui.run(reload=False, host=settings.host, port=settings.port)
