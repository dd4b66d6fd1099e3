"""Download remote templates into the local folder layout."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from ..client import TemplatesClient
from ..config import Settings, get_settings
from ..errors import ApiError, NoTemplatesError
from ..models import TemplateRecord, record_from_dict
from .catalog import Summary, list_all_summaries, summary_key
from .manifest import write_template

logger = logging.getLogger(__name__)


@dataclass
class PullResult:
    saved: List[TemplateRecord] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)  # names without an alias
    failed: List[Tuple[Summary, Exception]] = field(default_factory=list)

    @property
    def failure_count(self) -> int:
        return len(self.failed)


def pull_templates(
    client: TemplatesClient,
    output_dir: Union[str, Path],
    settings: Optional[Settings] = None,
    on_saved: Optional[Callable[[TemplateRecord, Path], None]] = None,
    on_error: Optional[Callable[[Summary, Exception], None]] = None,
) -> PullResult:
    """Save every aliased remote template under output_dir.

    Raises NoTemplatesError when the server has no templates and
    RemoteFetchError when the list cannot be retrieved.
    """
    settings = settings or get_settings()
    summaries = list_all_summaries(client, settings["page_size"])
    if not summaries:
        raise NoTemplatesError("There are no templates on this server.")

    result = PullResult()
    for summary in summaries:
        if not summary.get("Alias"):
            result.skipped.append(str(summary.get("Name") or summary_key(summary)))
            continue
        try:
            record = record_from_dict(client.get_template(summary_key(summary)))
            folder = write_template(output_dir, record, settings)
        except (ApiError, OSError, ValueError) as exc:
            logger.warning("Could not save template %s: %s", summary.get("Alias"), exc)
            result.failed.append((summary, exc))
            if on_error is not None:
                on_error(summary, exc)
            continue
        result.saved.append(record)
        if on_saved is not None:
            on_saved(record, folder)

    if result.skipped:
        logger.warning(
            "Templates without an alias were not downloaded: %s",
            ", ".join(result.skipped),
        )
    return result
