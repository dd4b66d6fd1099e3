"""Render a change-set as reviewable tables before pushing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from rich.console import Group
from rich.table import Table
from rich.text import Text

from ..models import ChangeSetItem, ChangeStatus, StandardTemplate
from ..sync.differ import LAYOUT
from ..utils import pluralize_with_number

STATUS_STYLES = {
    ChangeStatus.ADDED: "yellow",
    ChangeStatus.MODIFIED: "green",
    ChangeStatus.UNMODIFIED: "dim",
}

NONE_LABEL = "None"


@dataclass
class ReviewRow:
    status: ChangeStatus
    name: str
    alias: str
    layout: Optional[Text] = None


@dataclass
class PushReview:
    templates: List[ReviewRow] = field(default_factory=list)
    layouts: List[ReviewRow] = field(default_factory=list)


def layout_used_label(
    local_layout: Optional[str], remote_layout: Optional[str], changed: bool
) -> Text:
    """Local layout, plus the deployed one when they differ."""
    label = Text(local_layout) if local_layout else Text(NONE_LABEL, style="dim")
    if changed:
        label.append(f"  ✘ {remote_layout or NONE_LABEL}", style="red")
    return label


def build_review(change_set: Sequence[ChangeSetItem]) -> PushReview:
    review = PushReview()
    for item in change_set:
        record = item.record
        row = ReviewRow(status=item.status, name=record.name, alias=record.alias or "")
        if isinstance(record, StandardTemplate):
            remote_layout = getattr(item.remote, "layout_template", None)
            row.layout = layout_used_label(
                record.layout_template,
                remote_layout,
                item.remote is not None and LAYOUT in item.changes,
            )
            review.templates.append(row)
        else:
            review.layouts.append(row)
    return review


def _status_cell(status: ChangeStatus) -> Text:
    return Text(status.value, style=STATUS_STYLES[status])


def _table(title: str, columns: Sequence[str]) -> Table:
    table = Table(title=title, title_justify="left", header_style="bright_black")
    for column in columns:
        table.add_column(column)
    return table


def render_review(review: PushReview) -> Group:
    tables: List[Table] = []
    if review.templates:
        table = _table(
            pluralize_with_number(len(review.templates), "template"),
            ["Change", "Name", "Alias", "Layout used"],
        )
        for row in review.templates:
            table.add_row(_status_cell(row.status), row.name, row.alias, row.layout)
        tables.append(table)
    if review.layouts:
        table = _table(
            pluralize_with_number(len(review.layouts), "layout"),
            ["Change", "Name", "Alias"],
        )
        for row in review.layouts:
            table.add_row(_status_cell(row.status), row.name, row.alias)
        tables.append(table)
    return Group(*tables)


def review_summary(review: PushReview) -> str:
    parts = []
    if review.templates:
        parts.append(pluralize_with_number(len(review.templates), "template"))
    if review.layouts:
        parts.append(pluralize_with_number(len(review.layouts), "layout"))
    return f"{' and '.join(parts)} will be pushed."
