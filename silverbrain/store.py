"""Stores kept as directories, each holding its own SQLite database."""

from __future__ import annotations

import logging
import os
import shutil
import sqlite3
from contextlib import closing
from pathlib import Path

from silverbrain.schema import migrate
from silverbrain.service import ServiceError, StoreService

_log = logging.getLogger(__name__)

_STORE_DIR = "store"
_ATTACHMENTS_DIR = "attachments"
_SQLITE_FILE = "data.sqlite"


class SqliteStore(StoreService):
    """Keeps every store under ``<data_path>/store/<name>``."""

    def __init__(self, data_path: str | os.PathLike[str]) -> None:
        self.data_path = Path(data_path)
        if self.data_path.exists():
            if not self.data_path.is_dir():
                raise NotADirectoryError(f"Data path is not a directory: {self.data_path}")
            if not os.access(self.data_path, os.W_OK):
                raise PermissionError(f"Data path is not writable: {self.data_path}")
        else:
            _log.debug("Creating data directory %s", self.data_path)
            try:
                self.data_path.mkdir(parents=True, exist_ok=True)
            except OSError as error:
                raise ServiceError(str(error)) from error

    def store_path(self, store_name: str) -> Path:
        """Return the directory of a store."""
        return self.data_path / _STORE_DIR / store_name

    def sqlite_path(self, store_name: str) -> Path:
        """Return the SQLite database file of a store."""
        return self.store_path(store_name) / _SQLITE_FILE

    def connect(self, store_name: str) -> sqlite3.Connection:
        """Open a connection to a store's database, with foreign keys enforced."""
        try:
            conn = sqlite3.connect(self.sqlite_path(store_name))
        except sqlite3.Error as error:
            raise ServiceError(f"cannot open store {store_name!r}: {error}") from error
        try:
            conn.execute("PRAGMA foreign_keys = ON")
        except sqlite3.Error as error:
            conn.close()
            raise ServiceError(f"cannot open store {store_name!r}: {error}") from error
        return conn

    def create_store(self, name: str) -> None:
        """Create the store and its schema unless its directory already exists."""
        store_path = self.store_path(name)
        if store_path.exists():
            return
        try:
            store_path.mkdir(parents=True)
            (store_path / _ATTACHMENTS_DIR).mkdir()
            self.sqlite_path(name).touch()
        except OSError as error:
            raise ServiceError(str(error)) from error
        with closing(self.connect(name)) as conn:
            try:
                migrate(conn)
            except sqlite3.Error as error:
                raise ServiceError(str(error)) from error

    def list_stores(self) -> list[str]:
        """Return the names of all stores, sorted."""
        try:
            return sorted(path.name for path in (self.data_path / _STORE_DIR).iterdir())
        except OSError as error:
            raise ServiceError(str(error)) from error

    def delete_store(self, name: str) -> None:
        """Remove the store directory if it exists."""
        path = self.store_path(name)
        try:
            if path.exists():
                shutil.rmtree(path)
        except OSError as error:
            raise ServiceError(str(error)) from error