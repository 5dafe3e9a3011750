"""SQLite-backed memory tools.

This provider needs a writable database file, so it only contributes to the
full catalog tier. If the database cannot be opened during setup, the whole
tier is demoted and the reduced tier is tried without it.
"""

from __future__ import annotations

import datetime as dt
import sqlite3
from collections.abc import Iterable
from contextlib import closing
from pathlib import Path
from typing import Any

from toolhub.capabilities.catalog import ProviderContext
from toolhub.core.console import get_logger

logger = get_logger(__name__)

DEFAULT_RECALL_LIMIT = 5


class MemoryStore:
    """Small fact store; each call opens its own connection so worker threads never share one."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path).expanduser()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.path)

    def init(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with closing(self._connect()) as conn, conn:
            conn.execute("PRAGMA journal_mode=WAL;")
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS memories (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp TEXT NOT NULL,
                    content TEXT NOT NULL,
                    tags TEXT NOT NULL DEFAULT ''
                )
                """
            )

    def remember(self, fact: str, tags: list[str]) -> dict[str, Any]:
        timestamp = dt.datetime.now(dt.UTC).isoformat(timespec="seconds")
        with closing(self._connect()) as conn, conn:
            cursor = conn.execute(
                "INSERT INTO memories (timestamp, content, tags) VALUES (?, ?, ?)",
                (timestamp, fact, ",".join(tags)),
            )
            row_id = cursor.lastrowid
        return {"id": row_id, "timestamp": timestamp, "content": fact, "tags": tags}

    def recall(self, query: str, limit: int = DEFAULT_RECALL_LIMIT) -> list[dict[str, Any]]:
        pattern = f"%{query.lower()}%"
        with closing(self._connect()) as conn, conn:
            rows = conn.execute(
                """
                SELECT id, timestamp, content, tags FROM memories
                WHERE lower(content) LIKE ? OR lower(tags) LIKE ?
                ORDER BY id DESC LIMIT ?
                """,
                (pattern, pattern, limit),
            ).fetchall()
        return [
            {
                "id": row[0],
                "timestamp": row[1],
                "content": row[2],
                "tags": [t for t in row[3].split(",") if t],
            }
            for row in rows
        ]


def _tag_list(raw: Any) -> list[str]:
    if isinstance(raw, str):
        return [t.strip() for t in raw.split(",") if t.strip()]
    if isinstance(raw, (list, tuple)):
        return [str(t).strip() for t in raw if str(t).strip()]
    return []


class MemoryProvider:
    name = "memory"
    requires_resources = True

    def setup(self, context: ProviderContext) -> Iterable[object]:
        store = MemoryStore(context.config.catalog.memory_database)
        store.init()
        logger.debug("Memory database ready at %s", store.path)

        def remember(params: dict[str, Any]) -> dict[str, Any]:
            fact = str(params.get("fact") or "").strip()
            if not fact:
                raise ValueError("Missing required parameter: fact")
            return store.remember(fact, _tag_list(params.get("tags")))

        def recall(params: dict[str, Any]) -> dict[str, Any]:
            query = str(params.get("query") or "")
            limit = int(params.get("limit") or DEFAULT_RECALL_LIMIT)
            matches = store.recall(query, limit)
            return {"query": query, "count": len(matches), "memories": matches}

        return [
            {
                "name": "memory_remember",
                "description": "Save a fact or lesson to persistent memory",
                "parameters": [
                    {"name": "fact", "type": "string", "description": "Fact to remember", "required": True},
                    {"name": "tags", "type": "string", "description": "Comma-separated tags"},
                ],
                "execute": remember,
            },
            {
                "name": "memory_recall",
                "description": "Recall saved facts matching a query",
                "parameters": [
                    {"name": "query", "type": "string", "description": "Text to match", "required": True},
                    {"name": "limit", "type": "number", "description": "Maximum results", "default": DEFAULT_RECALL_LIMIT},
                ],
                "execute": recall,
            },
        ]


PROVIDER = MemoryProvider()

__all__ = ["PROVIDER", "MemoryProvider", "MemoryStore"]
