"""Synchronization engine for mailtmpl."""

from .catalog import fetch_remote_catalog, list_all_summaries
from .delete import DeleteResult, delete_templates
from .differ import diff, same_content
from .manifest import build_manifest, write_template
from .pull import PullResult, pull_templates
from .push import order_for_push, push_templates
from .reconcile import reconcile

__all__ = [
    "fetch_remote_catalog",
    "list_all_summaries",
    "DeleteResult",
    "delete_templates",
    "diff",
    "same_content",
    "build_manifest",
    "write_template",
    "PullResult",
    "pull_templates",
    "order_for_push",
    "push_templates",
    "reconcile",
]
