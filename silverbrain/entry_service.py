"""Entry service backed by a store's SQLite database."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Iterator, Sequence

from silverbrain.domain import Attachment, Entry
from silverbrain.ksuid import new_ksuid
from silverbrain.service import (
    AttachmentCreateRequest,
    AttachmentUpdateRequest,
    EntryCreateRequest,
    EntryLoadOptions,
    EntryService,
    EntryUpdateRequest,
    InvalidAttachmentFilePathError,
    NotFoundError,
    RequestContext,
    ServiceError,
)
from silverbrain.store import SqliteStore
from silverbrain.timestamps import from_iso8601, now_utc, to_iso8601


class SqlEntryService(EntryService):
    """Reads and writes entries and attachments in the store named by each request."""

    def __init__(self, store: SqliteStore) -> None:
        self.store = store

    @contextmanager
    def _session(self, context: RequestContext) -> Iterator[sqlite3.Connection]:
        conn = self.store.connect(context.store_name)
        try:
            with conn:
                yield conn
        except sqlite3.Error as error:
            raise ServiceError(str(error)) from error
        finally:
            conn.close()

    def count_entries(self, context: RequestContext) -> int:
        with self._session(context) as conn:
            (count,) = conn.execute('SELECT COUNT(*) FROM "entry"').fetchone()
        return count

    def create_entry(self, context: RequestContext, request: EntryCreateRequest) -> str:
        with self._session(context) as conn:
            now = now_utc()
            entry_id = new_ksuid(now)
            stamp = to_iso8601(now)
            conn.execute(
                'INSERT INTO "entry" ("id", "name", "content_type", "content", '
                '"create_time", "update_time") VALUES (?, ?, ?, ?, ?, ?)',
                (
                    entry_id,
                    request.name,
                    request.content_type or "",
                    request.content or "",
                    stamp,
                    stamp,
                ),
            )
        return entry_id

    @staticmethod
    def _load_entry(
        conn: sqlite3.Connection, entry_id: str, options: EntryLoadOptions
    ) -> Entry:
        row = conn.execute(
            'SELECT "id", "name", "content_type", "content", "create_time", "update_time" '
            'FROM "entry" WHERE "id" = ?',
            (entry_id,),
        ).fetchone()
        if row is None:
            raise NotFoundError(f"entry {entry_id!r} not found")
        found_id, name, content_type, content, create_time, update_time = row
        entry = Entry(id=found_id, name=name)

        if options.load_attachments:
            rows = conn.execute(
                'SELECT "id", "name", "file_path", "size", "create_time", "update_time" '
                'FROM "attachment" WHERE "entry_id" = ? ORDER BY "id"',
                (found_id,),
            )
            entry.attachments = [
                Attachment(
                    id=att_id,
                    name=att_name,
                    file_path=file_path,
                    size=size,
                    create_time=from_iso8601(att_created),
                    update_time=from_iso8601(att_updated),
                )
                for att_id, att_name, file_path, size, att_created, att_updated in rows
            ]

        if options.load_content:
            entry.content_type = content_type
            entry.content = content

        if options.load_times:
            entry.create_time = from_iso8601(create_time)
            entry.update_time = from_iso8601(update_time)

        return entry

    def get_entry(
        self, context: RequestContext, entry_id: str, options: EntryLoadOptions
    ) -> Entry:
        with self._session(context) as conn:
            return self._load_entry(conn, entry_id, options)

    def get_entries(
        self, context: RequestContext, ids: Sequence[str], options: EntryLoadOptions
    ) -> list[Entry]:
        with self._session(context) as conn:
            return [self._load_entry(conn, entry_id, options) for entry_id in ids]

    def update_entry(self, context: RequestContext, request: EntryUpdateRequest) -> None:
        with self._session(context) as conn:
            row = conn.execute(
                'SELECT "name", "content_type", "content" FROM "entry" WHERE "id" = ?',
                (request.id,),
            ).fetchone()
            if row is None:
                raise NotFoundError(f"entry {request.id!r} not found")
            name, content_type, content = row
            conn.execute(
                'UPDATE "entry" SET "name" = ?, "content_type" = ?, "content" = ?, '
                '"update_time" = ? WHERE "id" = ?',
                (
                    request.name if request.name is not None else name,
                    request.content_type if request.content_type is not None else content_type,
                    request.content if request.content is not None else content,
                    to_iso8601(now_utc()),
                    request.id,
                ),
            )

    def delete_entry(self, context: RequestContext, entry_id: str) -> None:
        with self._session(context) as conn:
            conn.execute('DELETE FROM "entry" WHERE "id" = ?', (entry_id,))

    def create_attachment(
        self, context: RequestContext, request: AttachmentCreateRequest
    ) -> str:
        if not request.file_path.is_file():
            raise InvalidAttachmentFilePathError(
                f"not an existing file: {request.file_path}"
            )
        path = str(request.file_path)
        with self._session(context) as conn:
            now = now_utc()
            stamp = to_iso8601(now)
            attachment_id = new_ksuid(now)
            conn.execute(
                'INSERT INTO "attachment" ("id", "entry_id", "name", "file_path", "size", '
                '"create_time", "update_time") VALUES (?, ?, ?, ?, ?, ?, ?)',
                (attachment_id, request.entry_id, request.name, path, 0, stamp, stamp),
            )
        return attachment_id

    def update_attachment(
        self, context: RequestContext, request: AttachmentUpdateRequest
    ) -> None:
        with self._session(context) as conn:
            row = conn.execute(
                'SELECT "entry_id", "name" FROM "attachment" WHERE "id" = ?', (request.id,)
            ).fetchone()
            if row is None:
                raise NotFoundError(f"attachment {request.id!r} not found")
            entry_id, name = row
            conn.execute(
                'UPDATE "attachment" SET "entry_id" = ?, "name" = ?, "update_time" = ? '
                'WHERE "id" = ?',
                (
                    request.entry_id if request.entry_id is not None else entry_id,
                    request.name if request.name is not None else name,
                    to_iso8601(now_utc()),
                    request.id,
                ),
            )

    def delete_attachment(self, context: RequestContext, attachment_id: str) -> None:
        with self._session(context) as conn:
            conn.execute('DELETE FROM "attachment" WHERE "id" = ?', (attachment_id,))