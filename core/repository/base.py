"""Shared repository helpers, the SQLite engine, and the generic record store.

Every record collection is a SQLite table holding the JSON payload of each
record plus one column per secondary index. :class:`RecordStore` offers
single-record CRUD (each call is its own transaction) and index-ordered
iteration; multi-record workflows are composed from those calls by the
repositories built on top of it.

Updates:
  v0.3.1 - 2026-01-18 - Let equals=None select records whose indexed field is null.
  v0.3.0 - 2026-01-11 - Track schema version with PRAGMA user_version.
  v0.2.0 - 2025-12-20 - Keep one lazily opened connection per engine guarded by an RLock.
  v0.1.0 - 2025-12-13 - Introduce RecordStore with index-ordered iteration.
"""

from __future__ import annotations

import json
import logging
import re
import sqlite3
import threading
import time
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

from ..exceptions import NotFoundError, PromptEnhancerError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

logger = logging.getLogger("prompt_enhancer.repository")

SCHEMA_VERSION = 1
MEMORY_DATABASE = ":memory:"

Direction = Literal["asc", "desc"]
_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class RepositoryError(PromptEnhancerError):
    """Base exception for repository failures."""


class RepositoryNotFoundError(RepositoryError, NotFoundError):
    """Raised when a requested record cannot be located."""


def ensure_directory(path: Path) -> None:
    """Ensure the directory for the SQLite database exists."""
    path.parent.mkdir(parents=True, exist_ok=True)


def connect(db_path: Path | str) -> sqlite3.Connection:
    """Return a configured SQLite connection."""
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode = WAL;")
    conn.execute("PRAGMA synchronous = NORMAL;")
    return conn


def now_ms() -> int:
    """Return the current epoch time in milliseconds."""
    return time.time_ns() // 1_000_000


def new_record_id() -> str:
    """Return a new opaque record identifier."""
    return str(uuid.uuid4())


def _check_identifier(value: str) -> str:
    if not _IDENTIFIER.match(value):
        raise ValueError(f"Invalid SQLite identifier: {value!r}")
    return value


# Default for ``equals``: no filter, so that ``None`` can select null index values.
_UNFILTERED: Any = object()


def _index_value(value: Any) -> Any:
    """Normalise a field value for storage in an index column."""
    if isinstance(value, bool):
        return int(value)
    return value


def _filter_clause(column: str, equals: Any) -> tuple[str, list[Any]]:
    if equals is _UNFILTERED:
        return "", []
    if equals is None:
        return f" WHERE {column} IS NULL", []
    return f" WHERE {column} = ?", [_index_value(equals)]


class SQLiteEngine:
    """Process-wide SQLite connection shared by every record store.

    The connection is opened on first use and kept until :meth:`close`. Each
    :meth:`transaction` holds the engine lock and commits or rolls back as a
    unit.
    """

    def __init__(self, db_path: str | Path) -> None:
        self._db_path: Path | str = (
            db_path if str(db_path) == MEMORY_DATABASE else Path(db_path).expanduser()
        )
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.RLock()
        self._tables: dict[str, tuple[str, ...]] = {}

    @property
    def db_path(self) -> Path | str:
        return self._db_path

    def register(self, name: str, indexes: Sequence[str]) -> None:
        """Declare a record collection and its secondary indexes."""
        table = _check_identifier(name)
        fields = tuple(_check_identifier(field) for field in indexes)
        with self._lock:
            self._tables[table] = fields
            if self._conn is not None:
                self._create_table(self._conn, table, fields)
                self._conn.commit()

    def connection(self) -> sqlite3.Connection:
        """Return the shared connection, opening it and applying the schema lazily."""
        with self._lock:
            if self._conn is not None:
                return self._conn
            try:
                if isinstance(self._db_path, Path):
                    ensure_directory(self._db_path)
                conn = connect(self._db_path)
                self._ensure_schema(conn)
            except (OSError, sqlite3.Error) as exc:
                raise RepositoryError(f"Failed to open database {self._db_path}") from exc
            self._conn = conn
            logger.debug("Opened SQLite database", extra={"db_path": str(self._db_path)})
            return conn

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Yield the connection inside an atomic transaction."""
        with self._lock:
            conn = self.connection()
            try:
                yield conn
            except BaseException:
                conn.rollback()
                raise
            else:
                conn.commit()

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def _ensure_schema(self, conn: sqlite3.Connection) -> None:
        for table, fields in self._tables.items():
            self._create_table(conn, table, fields)
        version = int(conn.execute("PRAGMA user_version;").fetchone()[0])
        if version < SCHEMA_VERSION:
            conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION};")
        conn.commit()

    @staticmethod
    def _create_table(conn: sqlite3.Connection, table: str, fields: Sequence[str]) -> None:
        index_columns = "".join(f", ix_{field}" for field in fields)
        conn.execute(
            f"CREATE TABLE IF NOT EXISTS {table} "
            f"(id TEXT PRIMARY KEY, data TEXT NOT NULL{index_columns});"
        )
        for field in fields:
            conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_{table}_{field} ON {table} (ix_{field});"
            )


class RecordCursor:
    """Restartable, index-ordered view over a record collection.

    The query runs when iteration starts; iterating again re-runs it.
    """

    def __init__(self, store: RecordStore, query: str, params: Sequence[Any]) -> None:
        self._store = store
        self._query = query
        self._params = tuple(params)

    def __iter__(self) -> Iterator[dict[str, Any]]:
        rows = self._store._fetch(self._query, self._params)
        for row in rows:
            yield json.loads(row["data"])

    def first(self) -> dict[str, Any] | None:
        """Return the first record in index order, if any."""
        return next(iter(self), None)


class RecordStore:
    """Transactional CRUD and index-ordered iteration over one record collection."""

    def __init__(
        self,
        engine: SQLiteEngine,
        name: str,
        indexes: Sequence[str] = (),
        *,
        key: Callable[[dict[str, Any]], str] | None = None,
    ) -> None:
        self._engine = engine
        self._name = _check_identifier(name)
        self._indexes = tuple(indexes)
        self._key = key or (lambda record: str(record["id"]))
        engine.register(self._name, self._indexes)

    @property
    def name(self) -> str:
        return self._name

    @property
    def indexes(self) -> tuple[str, ...]:
        return self._indexes

    def add(self, record: dict[str, Any]) -> dict[str, Any]:
        """Insert *record*; fails when its key already exists."""
        key = self._key(record)
        columns, values = self._row(key, record)
        placeholders = ", ".join("?" for _ in columns)
        query = f"INSERT INTO {self._name} ({', '.join(columns)}) VALUES ({placeholders});"
        try:
            with self._engine.transaction() as conn:
                conn.execute(query, values)
        except sqlite3.IntegrityError as exc:
            raise RepositoryError(f"Record {key} already exists in {self._name}") from exc
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to insert record {key} into {self._name}") from exc
        return record

    def put(self, record: dict[str, Any]) -> dict[str, Any]:
        """Insert or replace *record* by key."""
        key = self._key(record)
        columns, values = self._row(key, record)
        placeholders = ", ".join("?" for _ in columns)
        assignments = ", ".join(f"{column} = excluded.{column}" for column in columns[1:])
        query = (
            f"INSERT INTO {self._name} ({', '.join(columns)}) VALUES ({placeholders}) "
            f"ON CONFLICT(id) DO UPDATE SET {assignments};"
        )
        try:
            with self._engine.transaction() as conn:
                conn.execute(query, values)
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to store record {key} in {self._name}") from exc
        return record

    def get(self, key: str) -> dict[str, Any] | None:
        rows = self._fetch(f"SELECT data FROM {self._name} WHERE id = ?;", (key,))
        if not rows:
            return None
        return json.loads(rows[0]["data"])

    def delete(self, key: str) -> None:
        """Delete the record stored under *key*; missing keys are ignored."""
        try:
            with self._engine.transaction() as conn:
                conn.execute(f"DELETE FROM {self._name} WHERE id = ?;", (key,))
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to delete record {key} from {self._name}") from exc

    def clear(self) -> None:
        try:
            with self._engine.transaction() as conn:
                conn.execute(f"DELETE FROM {self._name};")
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to clear {self._name}") from exc

    def iterate(
        self,
        index: str,
        *,
        equals: Any = _UNFILTERED,
        direction: Direction = "asc",
    ) -> RecordCursor:
        """Return records ordered by *index*, optionally restricted to ``index == equals``.

        Passing ``equals=None`` selects records whose *index* field is missing or null.
        """
        column = self._index_column(index)
        if direction not in ("asc", "desc"):
            raise ValueError(f"Unsupported iteration direction: {direction!r}")
        order = direction.upper()
        query = f"SELECT data FROM {self._name}"
        clause, params = _filter_clause(column, equals)
        query += clause
        query += f" ORDER BY {column} {order}, rowid {order};"
        return RecordCursor(self, query, params)

    def count(self, index: str | None = None, *, equals: Any = _UNFILTERED) -> int:
        """Return the number of records, optionally where ``index == equals``."""
        query = f"SELECT COUNT(*) AS total FROM {self._name}"
        params: list[Any] = []
        if index is not None:
            clause, params = _filter_clause(self._index_column(index), equals)
            query += clause
        rows = self._fetch(query + ";", params)
        return int(rows[0]["total"])

    def _index_column(self, index: str) -> str:
        if index not in self._indexes:
            raise ValueError(f"Unknown index {index!r} for {self._name}")
        return f"ix_{index}"

    def _row(self, key: str, record: dict[str, Any]) -> tuple[list[str], list[Any]]:
        columns = ["id", "data"] + [f"ix_{field}" for field in self._indexes]
        values = [key, json.dumps(record, ensure_ascii=False)] + [
            _index_value(record.get(field)) for field in self._indexes
        ]
        return columns, values

    def _fetch(self, query: str, params: Sequence[Any]) -> list[sqlite3.Row]:
        try:
            with self._engine.transaction() as conn:
                return conn.execute(query, tuple(params)).fetchall()
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to read from {self._name}") from exc


__all__ = [
    "Direction",
    "MEMORY_DATABASE",
    "RecordCursor",
    "RecordStore",
    "RepositoryError",
    "RepositoryNotFoundError",
    "SQLiteEngine",
    "connect",
    "ensure_directory",
    "logger",
    "new_record_id",
    "now_ms",
]
