"""Service contracts: request context, errors, requests and the service interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

from silverbrain.domain import Entry

DEFAULT_STORE_NAME = "default"


@dataclass(frozen=True)
class RequestContext:
    """Per-request information, such as which store to work on."""

    store_name: str = DEFAULT_STORE_NAME


class ServiceError(Exception):
    """A service operation failed."""


class NotFoundError(ServiceError):
    """The requested item does not exist."""


class BadArgumentsError(ServiceError):
    """The arguments of a request are malformed."""


class InvalidStoreNameError(ServiceError):
    """The store name is missing or cannot be used."""


class InvalidAttachmentFilePathError(ServiceError):
    """The attachment file path does not name an existing file."""


@dataclass(frozen=True)
class EntryLoadOptions:
    """Which optional parts of an entry to load."""

    load_content: bool = False
    load_attachments: bool = False
    load_times: bool = False

    @classmethod
    def from_load_param(cls, value: str | None) -> EntryLoadOptions:
        """Build options from a comma separated list such as ``contents,times``."""
        parts = set((value or "").split(","))
        return cls(
            load_content="contents" in parts,
            load_attachments="attachments" in parts,
            load_times="times" in parts,
        )


def _optional_string(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise BadArgumentsError(f"field {key!r} must be a string")
    return value


@dataclass(frozen=True)
class EntryCreateRequest:
    """The data needed to create an entry."""

    name: str
    content_type: str | None = None
    content: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> EntryCreateRequest:
        """Build a request from decoded JSON, ignoring unknown fields."""
        if not isinstance(data, dict):
            raise BadArgumentsError("request body must be a JSON object")
        name = data.get("name")
        if not isinstance(name, str):
            raise BadArgumentsError("field 'name' is required and must be a string")
        return cls(
            name=name,
            content_type=_optional_string(data, "content_type"),
            content=_optional_string(data, "content"),
        )


@dataclass(frozen=True)
class EntryUpdateRequest:
    """Changes to an entry; fields left as ``None`` stay as they are."""

    id: str
    name: str | None = None
    content_type: str | None = None
    content: str | None = None


@dataclass(frozen=True)
class AttachmentCreateRequest:
    """The data needed to attach a file to an entry."""

    entry_id: str
    name: str
    file_path: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "file_path", Path(self.file_path))


@dataclass(frozen=True)
class AttachmentUpdateRequest:
    """Changes to an attachment; fields left as ``None`` stay as they are."""

    id: str
    entry_id: str | None = None
    name: str | None = None


class StoreService(ABC):
    """Manages named stores."""

    @abstractmethod
    def create_store(self, name: str) -> None:
        """Create the store if it does not exist yet."""

    @abstractmethod
    def list_stores(self) -> list[str]:
        """Return the names of all stores."""

    @abstractmethod
    def delete_store(self, name: str) -> None:
        """Delete the store if it exists."""


class EntryService(ABC):
    """Manages entries and their attachments within a store."""

    @abstractmethod
    def count_entries(self, context: RequestContext) -> int:
        """Return the number of entries."""

    @abstractmethod
    def create_entry(self, context: RequestContext, request: EntryCreateRequest) -> str:
        """Create an entry and return its ID."""

    @abstractmethod
    def get_entry(
        self, context: RequestContext, entry_id: str, options: EntryLoadOptions
    ) -> Entry:
        """Return one entry, raising NotFoundError if it does not exist."""

    @abstractmethod
    def get_entries(
        self, context: RequestContext, ids: Sequence[str], options: EntryLoadOptions
    ) -> list[Entry]:
        """Return the entries with the given IDs."""

    @abstractmethod
    def update_entry(self, context: RequestContext, request: EntryUpdateRequest) -> None:
        """Apply the changes of the request to an entry."""

    @abstractmethod
    def delete_entry(self, context: RequestContext, entry_id: str) -> None:
        """Delete an entry."""

    @abstractmethod
    def create_attachment(
        self, context: RequestContext, request: AttachmentCreateRequest
    ) -> str:
        """Create an attachment and return its ID."""

    @abstractmethod
    def update_attachment(
        self, context: RequestContext, request: AttachmentUpdateRequest
    ) -> None:
        """Apply the changes of the request to an attachment."""

    @abstractmethod
    def delete_attachment(self, context: RequestContext, attachment_id: str) -> None:
        """Delete an attachment."""