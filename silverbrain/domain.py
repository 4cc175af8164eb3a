"""Domain objects: entries, their attachments and properties, and links."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _rfc3339(moment: datetime) -> str:
    """Format a moment as RFC 3339, writing a zero offset as ``Z``."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = moment.isoformat()
    if text.endswith("+00:00"):
        return text[: -len("+00:00")] + "Z"
    return text


@dataclass
class Attachment:
    """A file that belongs to an entry."""

    id: str = ""
    name: str = ""
    file_path: str = ""
    size: int = 0
    create_time: datetime = field(default_factory=_now_utc)
    update_time: datetime = field(default_factory=_now_utc)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping of this attachment."""
        return {
            "id": self.id,
            "name": self.name,
            "file_path": str(self.file_path),
            "size": self.size,
            "create_time": _rfc3339(self.create_time),
            "update_time": _rfc3339(self.update_time),
        }


@dataclass
class EntryProperty:
    """A named value attached to an entry."""

    id: str
    name: str
    value: str

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping of this property."""
        return {"id": self.id, "name": self.name, "value": self.value}


@dataclass
class Entry:
    """A note in the brain; optional parts are left out when not loaded."""

    id: str = ""
    name: str = ""
    content_type: str | None = None
    content: str | None = None
    attachments: list[Attachment] | None = None
    properties: list[EntryProperty] | None = None
    parents: list[Entry] | None = None
    children: list[Entry] | None = None
    friends: list[Entry] | None = None
    create_time: datetime | None = None
    update_time: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping, omitting every part that is ``None``."""
        result: dict[str, Any] = {"id": self.id, "name": self.name}
        if self.content_type is not None:
            result["content_type"] = self.content_type
        if self.content is not None:
            result["content"] = self.content
        if self.attachments is not None:
            result["attachments"] = [item.to_dict() for item in self.attachments]
        if self.properties is not None:
            result["properties"] = [item.to_dict() for item in self.properties]
        for name in ("parents", "children", "friends"):
            related = getattr(self, name)
            if related is not None:
                result[name] = [item.to_dict() for item in related]
        if self.create_time is not None:
            result["create_time"] = _rfc3339(self.create_time)
        if self.update_time is not None:
            result["update_time"] = _rfc3339(self.update_time)
        return result


@dataclass
class Link:
    """An annotated connection from one entry to another."""

    id: str = ""
    source: str = ""
    target: str = ""
    annotation: str = ""
    create_time: datetime = field(default_factory=_now_utc)
    update_time: datetime = field(default_factory=_now_utc)