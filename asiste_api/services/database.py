"""Data store client — a pooled SQLAlchemy async engine running raw SQL.

All statements are string templates with named bind parameters (``:name``)
executed through ``sqlalchemy.text``; values are never interpolated into
SQL. Each call checks out one pooled connection and commits on its own.
"""

import logging
from collections.abc import Collection, Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from asiste_api.services.schema import metadata

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryResult:
    """Outcome of a write statement."""

    rowcount: int
    lastrowid: int | None


class Database:
    """Thin wrapper over a fixed-size connection pool.

    ``pool_size`` connections are opened at most; further callers wait for
    one to be released (no overflow, no rejection).
    """

    def __init__(self, url: str, pool_size: int = 10) -> None:
        engine_kwargs: dict[str, Any] = {"pool_pre_ping": True}
        if not url.startswith("sqlite"):
            engine_kwargs.update(pool_size=pool_size, max_overflow=0, pool_recycle=3600)
        self._engine: AsyncEngine = create_async_engine(url, **engine_kwargs)

    async def fetch_all(
        self, sql: str, params: Mapping[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """Run a SELECT and return every row as a column → value dict."""
        async with self._engine.connect() as conn:
            result = await conn.execute(text(sql), dict(params or {}))
            return [dict(row) for row in result.mappings()]

    async def fetch_one(
        self, sql: str, params: Mapping[str, Any] | None = None
    ) -> dict[str, Any] | None:
        """Run a SELECT and return the first row, or None when empty."""
        async with self._engine.connect() as conn:
            result = await conn.execute(text(sql), dict(params or {}))
            row = result.mappings().first()
            return dict(row) if row is not None else None

    async def execute(
        self, sql: str, params: Mapping[str, Any] | None = None
    ) -> QueryResult:
        """Run a single INSERT/UPDATE/DELETE and commit it."""
        async with self._engine.begin() as conn:
            result = await conn.execute(text(sql), dict(params or {}))
            return QueryResult(rowcount=result.rowcount, lastrowid=result.lastrowid)

    async def ping(self) -> bool:
        """Run ``SELECT 1``; False when the store is unreachable."""
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception:
            logger.warning("Database ping failed", exc_info=True)
            return False

    async def create_schema(self) -> None:
        """Create any missing tables."""
        async with self._engine.begin() as conn:
            await conn.run_sync(metadata.create_all)

    async def dispose(self) -> None:
        await self._engine.dispose()


def build_update(
    table: str,
    changes: Mapping[str, Any],
    *,
    allowed: Collection[str],
    key_value: Any,
    key_column: str = "id",
    touch_column: str | None = "updatedAt",
) -> tuple[str, dict[str, Any]]:
    """Build a parameterized partial UPDATE from a column → value mapping.

    Only columns listed in ``allowed`` may appear in ``changes``; column
    names come from that whitelist, values always travel as bind parameters.
    ``touch_column`` is set to the current timestamp on every update.

    Returns ``(sql, params)`` ready for ``Database.execute``.
    """
    unknown = set(changes) - set(allowed)
    if unknown:
        raise ValueError(f"Columns not updatable on {table}: {sorted(unknown)}")

    assignments = [f"{column} = :{column}" for column in changes]
    if touch_column:
        assignments.append(f"{touch_column} = CURRENT_TIMESTAMP")
    if not assignments:
        raise ValueError(f"No columns to update on {table}")

    sql = f"UPDATE {table} SET {', '.join(assignments)} WHERE {key_column} = :pk"
    params = {**changes, "pk": key_value}
    return sql, params
