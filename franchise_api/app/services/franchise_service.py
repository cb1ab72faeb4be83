"""
Service layer for franchise records.

``FranchiseStore`` is the single point of translation between the API
operations and the ``franchises`` table.  It keeps one SQLite
connection open for the lifetime of the process: ``connect`` is called
when the application starts and ``close`` when it stops.  The store is
created by ``create_app`` and handed to the endpoints as a FastAPI
dependency.

``sqlite3`` is synchronous, so each public operation runs its queries
in a worker thread with ``asyncio.to_thread`` and the event loop keeps
serving other requests meanwhile.  A lock lets only one thread at a
time use the shared connection; each operation is therefore atomic
with respect to the others.

Every failure is reported with one of the exceptions from
``services.exceptions``.  Operations are not retried.

All queries use parameterized statements.
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, List, Optional

from franchise_api.app.core.db import get_connection, get_database_path, init_db
from franchise_api.app.schemas.franchise import (
    REQUIRED_FIELDS,
    TEXT_FIELDS,
    FranchiseCreate,
    FranchiseRead,
    FranchiseUpdate,
    new_franchise_id,
    parse_franchise_id,
)
from franchise_api.app.services.exceptions import (
    FranchiseNotFound,
    FranchiseValidationError,
    InvalidFranchiseId,
    StoreUnavailable,
)

logger = logging.getLogger(__name__)

# Python attribute -> column name.
COLUMNS = {
    "name": "name",
    "company": "company",
    "contact_name": "contact_name",
    "contact_email": "contact_email",
    "contact_phone": "contact_phone",
}

# Python attribute -> JSON name, used in validation messages.
JSON_NAMES = {
    "name": "name",
    "company": "company",
    "contact_name": "contactName",
    "contact_email": "contactEmail",
    "contact_phone": "contactPhone",
}

ORDER_BY = "ORDER BY created_at DESC, rowid DESC"


class FranchiseStore:
    """Store adapter for franchise records."""

    def __init__(self, database_url: str, *, fail_fast: bool = False) -> None:
        self.database_url = database_url
        self.fail_fast = fail_fast
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def connected(self) -> bool:
        return self._conn is not None

    def connect(self) -> None:
        """Open the connection and apply migrations.

        A failure is logged and leaves the store disconnected; every
        later operation then raises ``StoreUnavailable``.  With
        ``fail_fast`` the failure is raised as ``StoreUnavailable``
        instead.
        """
        if self._conn is not None:
            return
        conn = None
        try:
            conn = get_connection(self.database_url)
            version = init_db(conn)
        except (sqlite3.Error, OSError) as exc:
            if conn is not None:
                conn.close()
            logger.error("Franchise store connection error: %s", exc)
            if self.fail_fast:
                raise StoreUnavailable(f"Cannot connect to franchise store: {exc}") from exc
            return
        self._conn = conn
        logger.info(
            "Franchise store connected (%s, schema version %s)",
            get_database_path(self.database_url),
            version,
        )

    def close(self) -> None:
        with self._lock:
            if self._conn is None:
                return
            self._conn.close()
            self._conn = None
        logger.info("Franchise store closed")

    async def ping(self) -> bool:
        """Return ``True`` if the store answers a trivial query."""
        try:
            await asyncio.to_thread(self._ping)
        except StoreUnavailable:
            return False
        return True

    @contextmanager
    def _cursor(self) -> Iterator[sqlite3.Cursor]:
        """Hold the connection lock and yield a cursor.

        Commits on success and translates driver errors into
        ``StoreUnavailable``.
        """
        with self._lock:
            if self._conn is None:
                raise StoreUnavailable("Franchise store is not connected")
            cursor = self._conn.cursor()
            try:
                yield cursor
                self._conn.commit()
            except sqlite3.Error as exc:
                self._conn.rollback()
                logger.error("Franchise store query failed: %s", exc)
                raise StoreUnavailable(str(exc)) from exc
            finally:
                cursor.close()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    async def list_franchises(self) -> List[FranchiseRead]:
        """Return every franchise, newest first."""
        return await asyncio.to_thread(self._list_franchises)

    async def get_franchise(self, franchise_id: str) -> FranchiseRead:
        fid = self._parse_id(franchise_id)
        return await asyncio.to_thread(self._get_franchise, fid)

    async def create_franchise(self, data: FranchiseCreate) -> FranchiseRead:
        """Validate and insert a new franchise.

        The id and the creation time are generated here; values supplied
        by the client for them never reach this method.
        """
        values = {attr: getattr(data, attr) for attr in TEXT_FIELDS}
        self._validate(values)
        return await asyncio.to_thread(self._create_franchise, values)

    async def update_franchise(self, franchise_id: str, data: FranchiseUpdate) -> FranchiseRead:
        """Apply the fields present in ``data`` to an existing franchise.

        Omitted fields keep their values.  Required fields are validated
        again after the merge.
        """
        fid = self._parse_id(franchise_id)
        changes = {
            attr: value
            for attr, value in data.model_dump(exclude_unset=True).items()
            if attr in COLUMNS
        }
        return await asyncio.to_thread(self._update_franchise, fid, changes)

    async def delete_franchise(self, franchise_id: str) -> None:
        fid = self._parse_id(franchise_id)
        await asyncio.to_thread(self._delete_franchise, fid)

    async def search_franchises(self, term: str) -> List[FranchiseRead]:
        """Return franchises where any text field contains ``term``.

        Matching is a case-insensitive literal substring test, so an
        empty term matches every record.
        """
        return await asyncio.to_thread(self._search_franchises, term)

    # ------------------------------------------------------------------
    # Queries, run in a worker thread
    # ------------------------------------------------------------------
    def _ping(self) -> None:
        with self._cursor() as cursor:
            cursor.execute("SELECT 1")

    def _list_franchises(self) -> List[FranchiseRead]:
        with self._cursor() as cursor:
            rows = cursor.execute(f"SELECT * FROM franchises {ORDER_BY}").fetchall()
        return [self._row_to_read(row) for row in rows]

    def _get_franchise(self, fid: str) -> FranchiseRead:
        with self._cursor() as cursor:
            row = cursor.execute("SELECT * FROM franchises WHERE id = ?", (fid,)).fetchone()
        if row is None:
            raise FranchiseNotFound(fid)
        return self._row_to_read(row)

    def _create_franchise(self, values: dict) -> FranchiseRead:
        fid = new_franchise_id()
        created_at = datetime.now(timezone.utc).isoformat(timespec="microseconds")
        with self._cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO franchises (id, name, company, contact_name, contact_email, contact_phone, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    fid,
                    values["name"],
                    values["company"],
                    values["contact_name"],
                    values["contact_email"],
                    values["contact_phone"],
                    created_at,
                ),
            )
            row = cursor.execute("SELECT * FROM franchises WHERE id = ?", (fid,)).fetchone()
        logger.info("Created franchise %s", fid)
        return self._row_to_read(row)

    def _update_franchise(self, fid: str, changes: dict) -> FranchiseRead:
        # Read, merge and write under one lock so the update is atomic.
        with self._cursor() as cursor:
            row = cursor.execute("SELECT * FROM franchises WHERE id = ?", (fid,)).fetchone()
            if row is None:
                raise FranchiseNotFound(fid)
            if not changes:
                return self._row_to_read(row)
            merged = {attr: row[column] for attr, column in COLUMNS.items()}
            merged.update(changes)
            self._validate(merged)
            assignments = ", ".join(f"{COLUMNS[attr]} = ?" for attr in changes)
            cursor.execute(
                f"UPDATE franchises SET {assignments} WHERE id = ?",
                (*changes.values(), fid),
            )
            row = cursor.execute("SELECT * FROM franchises WHERE id = ?", (fid,)).fetchone()
        logger.info("Updated franchise %s (%s)", fid, ", ".join(changes))
        return self._row_to_read(row)

    def _delete_franchise(self, fid: str) -> None:
        with self._cursor() as cursor:
            cursor.execute("DELETE FROM franchises WHERE id = ?", (fid,))
            affected = cursor.rowcount
        if not affected:
            raise FranchiseNotFound(fid)
        logger.info("Deleted franchise %s", fid)

    def _search_franchises(self, term: str) -> List[FranchiseRead]:
        condition = " OR ".join(f"icontains({column}, :term)" for column in COLUMNS.values())
        with self._cursor() as cursor:
            rows = cursor.execute(
                f"SELECT * FROM franchises WHERE {condition} {ORDER_BY}",
                {"term": term},
            ).fetchall()
        return [self._row_to_read(row) for row in rows]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _parse_id(franchise_id: str) -> str:
        try:
            return parse_franchise_id(franchise_id)
        except ValueError as exc:
            raise InvalidFranchiseId(str(exc)) from exc

    @staticmethod
    def _validate(values: dict) -> None:
        errors = {}
        for attr in REQUIRED_FIELDS:
            value = values.get(attr)
            if value is None:
                errors[JSON_NAMES[attr]] = "is required"
            elif value == "":
                errors[JSON_NAMES[attr]] = "must not be empty"
        if errors:
            raise FranchiseValidationError(errors)

    @staticmethod
    def _row_to_read(row: sqlite3.Row) -> FranchiseRead:
        """Convert a database row to a FranchiseRead schema instance."""
        return FranchiseRead(
            id=row["id"],
            name=row["name"],
            company=row["company"],
            contact_name=row["contact_name"],
            contact_email=row["contact_email"],
            contact_phone=row["contact_phone"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
