from __future__ import annotations

import json
import os
import secrets
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator

from app.core.config import settings

COLLECTIONS = ("users", "referrals", "sessions")

_conn: sqlite3.Connection | None = None
_conn_lock = threading.RLock()
_tx_state = threading.local()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _check_collection(collection: str) -> None:
    if collection not in COLLECTIONS:
        raise ValueError(f"Unknown collection '{collection}'. Expected one of: {', '.join(COLLECTIONS)}")


def _get_connection() -> sqlite3.Connection:
    global _conn
    with _conn_lock:
        if _conn is not None:
            return _conn

        db_path = settings.document_db_path
        directory = os.path.dirname(db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        _conn = sqlite3.connect(
            db_path,
            check_same_thread=False,
            timeout=5,
            isolation_level=None,
        )
        _conn.execute("PRAGMA journal_mode=WAL;")
        _conn.execute("PRAGMA synchronous=NORMAL;")
        _conn.execute("PRAGMA busy_timeout=5000;")
        _conn.execute(
            """
            CREATE TABLE IF NOT EXISTS documents (
                collection TEXT NOT NULL,
                doc_id TEXT NOT NULL,
                payload_json TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                PRIMARY KEY (collection, doc_id)
            );
            """
        )
        return _conn


def init_store() -> None:
    _get_connection()


def close_store() -> None:
    global _conn
    with _conn_lock:
        if _conn is not None:
            _conn.close()
            _conn = None


def new_document_id() -> str:
    return secrets.token_hex(12)


@contextmanager
def transaction() -> Iterator[None]:
    """Serialize a read-modify-write across threads and processes sharing the db file."""
    conn = _get_connection()
    with _conn_lock:
        depth = getattr(_tx_state, "depth", 0)
        if depth:
            _tx_state.depth = depth + 1
            try:
                yield
            finally:
                _tx_state.depth -= 1
            return

        conn.execute("BEGIN IMMEDIATE")
        _tx_state.depth = 1
        try:
            yield
            conn.execute("COMMIT")
        except BaseException:
            conn.execute("ROLLBACK")
            raise
        finally:
            _tx_state.depth = 0


def get_document(collection: str, doc_id: str) -> dict[str, Any] | None:
    _check_collection(collection)
    conn = _get_connection()
    with _conn_lock:
        row = conn.execute(
            "SELECT payload_json FROM documents WHERE collection = ? AND doc_id = ?",
            (collection, doc_id),
        ).fetchone()
    if not row:
        return None
    return json.loads(row[0])


def put_document(collection: str, doc_id: str, payload: dict[str, Any]) -> None:
    _check_collection(collection)
    conn = _get_connection()
    now_iso = _utc_now().isoformat()
    payload_json = json.dumps(payload, ensure_ascii=False)
    with _conn_lock:
        conn.execute(
            """
            INSERT INTO documents (collection, doc_id, payload_json, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT (collection, doc_id)
            DO UPDATE SET payload_json = excluded.payload_json, updated_at = excluded.updated_at
            """,
            (collection, doc_id, payload_json, now_iso, now_iso),
        )


def list_documents(collection: str) -> list[dict[str, Any]]:
    _check_collection(collection)
    conn = _get_connection()
    with _conn_lock:
        rows = conn.execute(
            "SELECT payload_json FROM documents WHERE collection = ? ORDER BY created_at, rowid",
            (collection,),
        ).fetchall()
    return [json.loads(row[0]) for row in rows]


def delete_document(collection: str, doc_id: str) -> bool:
    _check_collection(collection)
    conn = _get_connection()
    with _conn_lock:
        cur = conn.execute(
            "DELETE FROM documents WHERE collection = ? AND doc_id = ?",
            (collection, doc_id),
        )
    return cur.rowcount > 0


def clear_documents() -> None:
    conn = _get_connection()
    with _conn_lock:
        conn.execute("DELETE FROM documents")
