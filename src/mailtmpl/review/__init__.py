"""Change-set review output."""

from .table import (
    PushReview,
    ReviewRow,
    build_review,
    layout_used_label,
    render_review,
    review_summary,
)

__all__ = [
    "PushReview",
    "ReviewRow",
    "build_review",
    "layout_used_label",
    "render_review",
    "review_summary",
]
