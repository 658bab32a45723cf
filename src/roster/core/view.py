"""View models derived from SyncController state.

Plain frozen dataclasses a UI can render without knowing about the
controller, plus a text renderer for the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .models import Part
from .state import Editing
from .sync_controller import ErrorKind, SyncController

EMPTY_MESSAGE = "No users found"


@dataclass(frozen=True)
class RowView:
    id: int
    name: str
    age: int
    part: str


@dataclass(frozen=True)
class TableView:
    """The record table for the selected part."""

    part: str
    rows: Tuple[RowView, ...]
    loading: bool
    empty_message: str = EMPTY_MESSAGE

    @property
    def empty(self) -> bool:
        return not self.rows


@dataclass(frozen=True)
class FormView:
    """The shared name/age/part fields and the button under them."""

    mode: str  # "create" or "edit"
    name: str
    age: str
    part: str
    submit_label: str
    can_cancel: bool
    editing_id: Optional[int] = None


@dataclass(frozen=True)
class PartTab:
    part: str
    label: str
    selected: bool


@dataclass(frozen=True)
class ErrorBanner:
    kind: ErrorKind
    message: str


def table_view(controller: SyncController) -> TableView:
    cache = controller.cache
    rows = tuple(
        RowView(id=r.id, name=r.name, age=r.age, part=r.part.value) for r in cache.records
    )
    return TableView(part=controller.part.value, rows=rows, loading=cache.is_loading)


def form_view(controller: SyncController) -> FormView:
    drafts = controller.drafts
    name, age, part = drafts.form_values()
    if isinstance(drafts.mode, Editing):
        return FormView(
            mode="edit",
            name=name,
            age=age,
            part=part,
            submit_label="Update",
            can_cancel=True,
            editing_id=drafts.mode.record.id,
        )
    return FormView(mode="create", name=name, age=age, part=part, submit_label="Add", can_cancel=False)


def part_tabs(controller: SyncController) -> List[PartTab]:
    return [
        PartTab(part=p.value, label=p.label, selected=p is controller.part)
        for p in Part
    ]


def error_banner(controller: SyncController) -> Optional[ErrorBanner]:
    error = controller.last_error
    if error is None:
        return None
    return ErrorBanner(kind=error.kind, message=error.message)


def render_table_text(table: TableView) -> str:
    """Format the table as aligned plain text.

    Args:
        table: Table view to render

    Returns:
        Multi-line string; the empty-state message when there are no rows
    """
    header = ("ID", "Name", "Age", "Part")
    lines = [f"Part: {table.part.upper()}"]
    if table.empty:
        lines.append(table.empty_message)
        return "\n".join(lines)

    cells = [header] + [(str(r.id), r.name, str(r.age), r.part) for r in table.rows]
    widths = [max(len(row[i]) for row in cells) for i in range(len(header))]
    for row in cells:
        lines.append("  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip())
    return "\n".join(lines)
