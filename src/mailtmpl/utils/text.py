"""Small text helpers for console messages."""

from __future__ import annotations

from typing import Optional


def pluralize(count: int, singular: str, plural: Optional[str] = None) -> str:
    if count == 1:
        return singular
    return plural if plural is not None else f"{singular}s"


def pluralize_with_number(count: int, singular: str, plural: Optional[str] = None) -> str:
    return f"{count} {pluralize(count, singular, plural)}"
