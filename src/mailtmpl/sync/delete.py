"""Delete templates from the remote store."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence, Tuple

from ..client import TemplatesClient
from ..config import DEFAULT_SETTINGS
from ..errors import ApiError, NoTemplatesError
from .catalog import list_all_summaries, summary_key

logger = logging.getLogger(__name__)


@dataclass
class DeleteResult:
    deleted: List[Any] = field(default_factory=list)
    failed: List[Tuple[Any, Exception]] = field(default_factory=list)

    @property
    def failure_count(self) -> int:
        return len(self.failed)


def delete_templates(
    client: TemplatesClient,
    ids_or_aliases: Sequence[Any] = (),
    template_type: Optional[str] = None,
    page_size: int = DEFAULT_SETTINGS["page_size"],
    on_before_each: Optional[Callable[[Any], None]] = None,
    on_error: Optional[Callable[[Any, Exception], None]] = None,
) -> DeleteResult:
    """Delete the given templates, or every template of template_type.

    Explicit targets are sent as given; listed templates are deleted by id.
    """
    targets: List[Any] = [str(t).strip() for t in ids_or_aliases if str(t).strip()]
    if not targets:
        summaries = list_all_summaries(client, page_size, template_type=template_type)
        targets = [summary_key(s) for s in summaries]
    if not targets:
        raise NoTemplatesError("There are no templates on this server.")

    result = DeleteResult()
    for target in targets:
        if on_before_each is not None:
            on_before_each(target)
        try:
            client.delete_template(target)
        except ApiError as exc:
            logger.warning("Could not delete template %s: %s", target, exc)
            result.failed.append((target, exc))
            if on_error is not None:
                on_error(target, exc)
            continue
        result.deleted.append(target)
    return result
