"""Apply a change-set to the remote store."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from ..client import TemplatesClient
from ..errors import MissingAliasError
from ..models import ChangeSetItem, PushResult

logger = logging.getLogger(__name__)

BeforeEach = Callable[[ChangeSetItem], None]
OnError = Callable[[ChangeSetItem, Exception], None]
OnComplete = Callable[[int], None]


def order_for_push(change_set: Sequence[ChangeSetItem]) -> List[ChangeSetItem]:
    """Layouts first so templates can reference them; stable within each type."""
    layouts = [item for item in change_set if item.record.is_layout]
    templates = [item for item in change_set if not item.record.is_layout]
    return layouts + templates


def _check_aliases(items: Sequence[ChangeSetItem]) -> None:
    for item in items:
        if not item.new and not item.record.alias:
            raise MissingAliasError(
                f"Cannot edit {item.record.name!r}: template has no alias"
            )


def push_template(client: TemplatesClient, item: ChangeSetItem) -> None:
    payload = item.record.to_api()
    if item.new:
        client.create_template(payload)
    else:
        client.edit_template(item.record.alias, payload)


def push_templates(
    client: TemplatesClient,
    change_set: Sequence[ChangeSetItem],
    on_before_each: Optional[BeforeEach] = None,
    on_error: Optional[OnError] = None,
    on_complete: Optional[OnComplete] = None,
) -> PushResult:
    """Push every item, one at a time, continuing past per-item failures.

    on_complete is called once with the number of failures.
    """
    ordered = order_for_push(change_set)
    _check_aliases(ordered)

    result = PushResult()
    for item in ordered:
        if on_before_each is not None:
            on_before_each(item)
        try:
            push_template(client, item)
        except Exception as exc:
            logger.debug("Push failed for %s", item.record.label, exc_info=True)
            result.failed.append((item, exc))
            if on_error is not None:
                on_error(item, exc)
            continue
        result.pushed.append(item)

    if on_complete is not None:
        on_complete(result.failure_count)
    return result
