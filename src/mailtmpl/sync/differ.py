"""Field-level comparison between a remote record and its local counterpart."""

from __future__ import annotations

from typing import FrozenSet, Optional

from ..models import StandardTemplate, TemplateRecord

HTML = "html"
TEXT = "text"
SUBJECT = "subject"
NAME = "name"
LAYOUT = "layout"


def same_content(a: Optional[str], b: Optional[str]) -> bool:
    """True if both values match, treating None and "" as no content."""
    return (a or "") == (b or "")


def diff(remote: TemplateRecord, local: TemplateRecord) -> FrozenSet[str]:
    """Return the tags of the fields that differ; empty means unchanged.

    Subject and layout are compared only for standard templates.
    """
    changed = set()
    if not same_content(remote.html_body, local.html_body):
        changed.add(HTML)
    if not same_content(remote.text_body, local.text_body):
        changed.add(TEXT)
    if not same_content(remote.name, local.name):
        changed.add(NAME)

    if isinstance(local, StandardTemplate):
        remote_subject = getattr(remote, "subject", None)
        remote_layout = getattr(remote, "layout_template", None)
        if not same_content(remote_subject, local.subject):
            changed.add(SUBJECT)
        if not same_content(remote_layout, local.layout_template):
            changed.add(LAYOUT)

    return frozenset(changed)
