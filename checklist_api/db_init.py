from __future__ import annotations

import logging

from sqlalchemy import text as sql_text
from sqlalchemy.exc import SQLAlchemyError

from checklist_api.db import get_engine

logger = logging.getLogger(__name__)

USERS_TABLE = "users"
TODOS_TABLE = "todos"
COMMENTS_TABLE = "todo_comments"


async def init_db():
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {USERS_TABLE} (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL UNIQUE,
                    created_at TEXT NOT NULL
                )
                """
            )
        )
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {TODOS_TABLE} (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL REFERENCES {USERS_TABLE}(id),
                    text TEXT NOT NULL,
                    is_mandatory INTEGER NOT NULL DEFAULT 0,
                    completed INTEGER NOT NULL DEFAULT 0,
                    date TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    completed_at TEXT,
                    image_url TEXT
                )
                """
            )
        )
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {COMMENTS_TABLE} (
                    id TEXT PRIMARY KEY,
                    todo_id TEXT NOT NULL,
                    user_name TEXT NOT NULL,
                    comment TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
                """
            )
        )

    async def ensure_column(table_name: str, column_name: str, column_ddl: str) -> None:
        try:
            async with engine.begin() as conn:
                await conn.execute(
                    sql_text(f"ALTER TABLE {table_name} ADD COLUMN {column_name} {column_ddl}")
                )
        except SQLAlchemyError:
            logger.debug("Column %s.%s already present.", table_name, column_name)

    async def ensure_index(index_sql: str) -> None:
        try:
            async with engine.begin() as conn:
                await conn.execute(sql_text(index_sql))
        except SQLAlchemyError as exc:
            logger.warning("Index creation failed: %s", exc)

    await ensure_column(TODOS_TABLE, "catalog_key", "TEXT")

    await ensure_index(
        f"CREATE INDEX IF NOT EXISTS idx_{TODOS_TABLE}_user_date "
        f"ON {TODOS_TABLE} (user_id, date, created_at)"
    )
    await ensure_index(
        f"CREATE UNIQUE INDEX IF NOT EXISTS uq_{TODOS_TABLE}_user_date_catalog "
        f"ON {TODOS_TABLE} (user_id, date, catalog_key)"
    )
    await ensure_index(
        f"CREATE INDEX IF NOT EXISTS idx_{TODOS_TABLE}_completed_at "
        f"ON {TODOS_TABLE} (completed, completed_at)"
    )
    await ensure_index(
        f"CREATE INDEX IF NOT EXISTS idx_{COMMENTS_TABLE}_todo "
        f"ON {COMMENTS_TABLE} (todo_id, created_at)"
    )
