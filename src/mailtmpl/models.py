"""Template records and change-set types shared by the sync engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, FrozenSet, List, Optional, Tuple


class TemplateType(str, Enum):
    STANDARD = "Standard"
    LAYOUT = "Layout"


class ChangeStatus(str, Enum):
    ADDED = "Added"
    MODIFIED = "Modified"
    UNMODIFIED = "Unmodified"


@dataclass
class TemplateRecord:
    """Fields common to templates and layouts, local or remote."""

    template_type: ClassVar[TemplateType]

    name: str
    alias: Optional[str] = None
    html_body: Optional[str] = None
    text_body: Optional[str] = None
    # Only set for records fetched from the remote store
    template_id: Optional[int] = None

    @property
    def is_layout(self) -> bool:
        return self.template_type is TemplateType.LAYOUT

    @property
    def label(self) -> str:
        return self.alias or self.name

    def to_api(self) -> Dict[str, Any]:
        """Payload for create/edit calls."""
        return {
            "Name": self.name,
            "Alias": self.alias,
            "HtmlBody": self.html_body or "",
            "TextBody": self.text_body or "",
            "TemplateType": self.template_type.value,
        }

    def to_meta(self) -> Dict[str, Any]:
        """Metadata file contents, bodies excluded."""
        return {
            "Name": self.name,
            "Alias": self.alias or "",
            "TemplateType": self.template_type.value,
        }


@dataclass
class StandardTemplate(TemplateRecord):
    template_type: ClassVar[TemplateType] = TemplateType.STANDARD

    subject: Optional[str] = None
    layout_template: Optional[str] = None

    def to_api(self) -> Dict[str, Any]:
        payload = super().to_api()
        payload["Subject"] = self.subject or ""
        payload["LayoutTemplate"] = self.layout_template or None
        return payload

    def to_meta(self) -> Dict[str, Any]:
        meta: Dict[str, Any] = {"Name": self.name, "Alias": self.alias or ""}
        if self.subject:
            meta["Subject"] = self.subject
        meta["TemplateType"] = self.template_type.value
        meta["LayoutTemplate"] = self.layout_template or None
        return meta


@dataclass
class LayoutTemplate(TemplateRecord):
    template_type: ClassVar[TemplateType] = TemplateType.LAYOUT


STRING_FIELDS = ("Name", "Alias", "Subject", "LayoutTemplate", "HtmlBody", "TextBody")


def _template_id(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    raise ValueError(f"TemplateId must be an integer, got {value!r}")


def record_from_dict(data: Dict[str, Any]) -> TemplateRecord:
    """Build a typed record from an API response or a metadata dict.

    `TemplateType` defaults to Standard. Raises ValueError for an unknown type
    or for a field of the wrong type.
    """
    raw_type = data.get("TemplateType") or TemplateType.STANDARD.value
    if not isinstance(raw_type, str):
        raise ValueError(f"TemplateType must be a string, got {raw_type!r}")
    template_type = TemplateType(raw_type)

    for key in STRING_FIELDS:
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            raise ValueError(f"{key} must be a string, got {value!r}")

    common: Dict[str, Any] = {
        "name": data.get("Name") or "",
        "alias": data.get("Alias") or None,
        "html_body": data.get("HtmlBody"),
        "text_body": data.get("TextBody"),
        "template_id": _template_id(data.get("TemplateId")),
    }
    if template_type is TemplateType.LAYOUT:
        return LayoutTemplate(**common)
    return StandardTemplate(
        subject=data.get("Subject"),
        layout_template=data.get("LayoutTemplate") or None,
        **common,
    )


@dataclass
class ChangeSetItem:
    """A local record classified against the remote catalog."""

    record: TemplateRecord
    status: ChangeStatus
    remote: Optional[TemplateRecord] = None
    changes: FrozenSet[str] = frozenset()

    @property
    def new(self) -> bool:
        return self.status is ChangeStatus.ADDED


@dataclass
class PushResult:
    """Outcome of one push batch."""

    pushed: List[ChangeSetItem] = field(default_factory=list)
    failed: List[Tuple[ChangeSetItem, Exception]] = field(default_factory=list)

    @property
    def failure_count(self) -> int:
        return len(self.failed)

    @property
    def total(self) -> int:
        return len(self.pushed) + len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed
