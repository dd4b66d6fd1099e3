"""Classify local templates against the remote catalog."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Set

from ..models import ChangeSetItem, ChangeStatus, TemplateRecord
from .differ import diff

logger = logging.getLogger(__name__)


def index_by_alias(records: Sequence[TemplateRecord]) -> Dict[str, TemplateRecord]:
    """Map alias -> record, keeping the first record for a repeated alias."""
    index: Dict[str, TemplateRecord] = {}
    for record in records:
        if record.alias and record.alias not in index:
            index[record.alias] = record
    return index


def find_match(
    remote_index: Dict[str, TemplateRecord], local: TemplateRecord
) -> Optional[TemplateRecord]:
    if not local.alias:
        return None
    return remote_index.get(local.alias)


def reconcile(
    remote_catalog: Sequence[TemplateRecord],
    manifest: Sequence[TemplateRecord],
    push_all: bool = False,
) -> List[ChangeSetItem]:
    """Build the change-set for a push.

    Added and Modified records are always included; Unmodified ones only when
    push_all is set. Manifest order is preserved.
    """
    remote_index = index_by_alias(remote_catalog)
    seen: Set[str] = set()
    change_set: List[ChangeSetItem] = []

    for local in manifest:
        if not local.alias:
            logger.warning("Skipping %r: template has no alias", local.name)
            continue
        if local.alias in seen:
            logger.warning("Alias %r appears more than once locally", local.alias)
        seen.add(local.alias)

        remote = find_match(remote_index, local)
        if remote is None:
            change_set.append(ChangeSetItem(record=local, status=ChangeStatus.ADDED))
            continue

        changes = diff(remote, local)
        if changes:
            status = ChangeStatus.MODIFIED
        elif push_all:
            status = ChangeStatus.UNMODIFIED
        else:
            continue
        change_set.append(
            ChangeSetItem(record=local, status=status, remote=remote, changes=changes)
        )

    return change_set
