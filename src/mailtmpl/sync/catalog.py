"""Fetch the remote template catalog with full bodies."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from ..client import TemplatesClient
from ..config import DEFAULT_SETTINGS
from ..errors import ApiError, RemoteFetchError
from ..models import TemplateRecord, record_from_dict

logger = logging.getLogger(__name__)

Summary = Dict[str, Any]


def list_all_summaries(
    client: TemplatesClient,
    page_size: int = DEFAULT_SETTINGS["page_size"],
    template_type: Optional[str] = None,
) -> List[Summary]:
    """Page through the template list until TotalCount summaries are collected.

    Raises RemoteFetchError if any page cannot be listed.
    """
    summaries: List[Summary] = []
    offset = 0
    while True:
        try:
            page = client.list_templates(
                count=page_size, offset=offset, template_type=template_type
            )
        except ApiError as exc:
            raise RemoteFetchError(f"Could not list templates: {exc}") from exc

        items = page.get("Templates") or []
        total = int(page.get("TotalCount") or 0)
        summaries.extend(items)
        offset += len(items)
        logger.debug("Listed %d/%d templates", len(summaries), total)
        if not items or len(summaries) >= total:
            return summaries


def summary_key(summary: Summary) -> Any:
    """Identifier used to fetch a summary's full record."""
    template_id = summary.get("TemplateId")
    return template_id if template_id is not None else summary.get("Alias")


def fetch_remote_catalog(
    client: TemplatesClient,
    page_size: int = DEFAULT_SETTINGS["page_size"],
    on_error: Optional[Callable[[Summary, Exception], None]] = None,
) -> List[TemplateRecord]:
    """Return every remote template and layout with bodies populated.

    A failed body fetch drops that template from the result; the batch goes on.
    """
    catalog: List[TemplateRecord] = []
    for summary in list_all_summaries(client, page_size):
        key = summary_key(summary)
        try:
            catalog.append(record_from_dict(client.get_template(key)))
        except (ApiError, ValueError) as exc:
            logger.warning(
                "Could not fetch template %s: %s", summary.get("Alias") or key, exc
            )
            if on_error is not None:
                on_error(summary, exc)
    return catalog
