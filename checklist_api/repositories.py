from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from uuid import uuid4
from zoneinfo import ZoneInfo

from sqlalchemy import text as sql_text

from checklist_api.db import get_sessionmaker
from checklist_api.settings import get_settings

USERS_TABLE = "users"
TODOS_TABLE = "todos"
COMMENTS_TABLE = "todo_comments"

# Rows written by generate_mandatory_todos; the client keeps its own catalog
# with detail text and joins on the key.
MANDATORY_TODOS = [
    ("tidur", "Tidur cukup"),
    ("makan", "Makan anti-inflamasi"),
    ("minum", "Minum air putih cukup"),
    ("gerak", "Gerak ringan tiap hari"),
    ("stres", "Kelola stres"),
    ("kimia", "Hindari paparan bahan kimia ringan"),
    ("obat", "Jangan minum obat/booster sembarangan"),
]

TODO_SELECT_COLUMNS = [
    "id",
    "user_id",
    "text",
    "is_mandatory",
    "completed",
    "date",
    "created_at",
    "completed_at",
    "image_url",
    "catalog_key",
]


class UnknownUserError(LookupError):
    pass


def _new_id() -> str:
    return uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _iso(value: datetime) -> str:
    return value.isoformat(timespec="microseconds")


def today_iso() -> str:
    settings = get_settings()
    try:
        tzinfo = ZoneInfo(settings.app_timezone)
    except (KeyError, ValueError):
        return date.today().isoformat()
    return datetime.now(tzinfo).date().isoformat()


def _normalize_todo_row(row) -> dict:
    if not row:
        return {}
    payload = dict(row)
    for key in ("is_mandatory", "completed"):
        payload[key] = bool(payload.get(key))
    day = payload.get("date")
    if isinstance(day, date):
        payload["date"] = day.isoformat()
    return payload


def _owner_clause(user_id: str | None) -> str:
    return " AND user_id = :user_id" if user_id else ""


async def get_user_by_name(name: str) -> dict | None:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        row = (await session.execute(
            sql_text(f"SELECT id, name, created_at FROM {USERS_TABLE} WHERE name = :name"),
            {"name": name},
        )).mappings().fetchone()
    return dict(row) if row else None


async def create_user(name: str) -> dict:
    """Insert a user; a taken name surfaces as the driver's IntegrityError."""
    record = {"id": _new_id(), "name": name, "created_at": _iso(_utcnow())}
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(
                f"INSERT INTO {USERS_TABLE} (id, name, created_at) VALUES (:id, :name, :created_at)"
            ),
            record,
        )
        await session.commit()
    return record


async def list_todos(user_id: str, day_iso: str | None = None) -> list[dict]:
    params = {"user_id": user_id}
    date_clause = ""
    if day_iso:
        date_clause = " AND date = :date"
        params["date"] = day_iso
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        rows = (await session.execute(
            sql_text(
                f"""
                SELECT {', '.join(TODO_SELECT_COLUMNS)}
                FROM {TODOS_TABLE}
                WHERE user_id = :user_id{date_clause}
                ORDER BY is_mandatory DESC, created_at ASC
                """
            ),
            params,
        )).mappings().all()
    return [_normalize_todo_row(row) for row in rows]


async def get_todo(todo_id: str, user_id: str | None = None) -> dict:
    params = {"id": todo_id}
    if user_id:
        params["user_id"] = user_id
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        row = (await session.execute(
            sql_text(
                f"SELECT {', '.join(TODO_SELECT_COLUMNS)} FROM {TODOS_TABLE} "
                f"WHERE id = :id{_owner_clause(user_id)}"
            ),
            params,
        )).mappings().fetchone()
    return _normalize_todo_row(row) if row else {}


async def create_todo(user_id: str, text: str, day_iso: str | None = None) -> dict:
    clean_text = " ".join(str(text or "").split())
    if not clean_text:
        raise ValueError("Todo text cannot be empty")
    record = {
        "id": _new_id(),
        "user_id": user_id,
        "text": clean_text,
        "is_mandatory": 0,
        "completed": 0,
        "date": day_iso or today_iso(),
        "created_at": _iso(_utcnow()),
        "completed_at": None,
        "image_url": None,
        "catalog_key": None,
    }
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(
                f"""
                INSERT INTO {TODOS_TABLE}
                ({', '.join(TODO_SELECT_COLUMNS)})
                VALUES
                (:id, :user_id, :text, :is_mandatory, :completed, :date,
                 :created_at, :completed_at, :image_url, :catalog_key)
                """
            ),
            record,
        )
        await session.commit()
    return _normalize_todo_row(record)


async def set_todo_completed(todo_id: str, completed: bool, user_id: str | None = None) -> dict:
    params = {
        "id": todo_id,
        "completed": int(bool(completed)),
        "completed_at": _iso(_utcnow()) if completed else None,
    }
    if user_id:
        params["user_id"] = user_id
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        result = await session.execute(
            sql_text(
                f"UPDATE {TODOS_TABLE} SET completed = :completed, completed_at = :completed_at "
                f"WHERE id = :id{_owner_clause(user_id)}"
            ),
            params,
        )
        await session.commit()
    if not result.rowcount:
        return {}
    return await get_todo(todo_id, user_id)


async def set_todo_image(todo_id: str, image_url: str | None, user_id: str | None = None) -> dict:
    params = {"id": todo_id, "image_url": image_url}
    if user_id:
        params["user_id"] = user_id
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        result = await session.execute(
            sql_text(
                f"UPDATE {TODOS_TABLE} SET image_url = :image_url "
                f"WHERE id = :id{_owner_clause(user_id)}"
            ),
            params,
        )
        await session.commit()
    if not result.rowcount:
        return {}
    return await get_todo(todo_id, user_id)


async def delete_todo(todo_id: str, user_id: str | None = None) -> bool:
    params = {"id": todo_id}
    if user_id:
        params["user_id"] = user_id
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        result = await session.execute(
            sql_text(f"DELETE FROM {TODOS_TABLE} WHERE id = :id{_owner_clause(user_id)}"),
            params,
        )
        deleted = bool(result.rowcount)
        # Comments go only with their todo; a rejected delete leaves both.
        if deleted:
            await session.execute(
                sql_text(f"DELETE FROM {COMMENTS_TABLE} WHERE todo_id = :id"),
                {"id": todo_id},
            )
        await session.commit()
    return deleted


async def generate_mandatory_todos(user_name: str, day_iso: str | None = None) -> int:
    """Insert today's mandatory rows for ``user_name`` unless they already exist.

    Returns the number of rows created, so a second call for the same day
    returns 0.
    """
    user = await get_user_by_name(user_name)
    if not user:
        raise UnknownUserError(user_name)
    day_iso = day_iso or today_iso()
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        existing = (await session.execute(
            sql_text(
                f"""
                SELECT COUNT(*) FROM {TODOS_TABLE}
                WHERE user_id = :user_id AND date = :date AND is_mandatory = 1
                """
            ),
            {"user_id": user["id"], "date": day_iso},
        )).scalar_one()
        if int(existing or 0) > 0:
            return 0
        base = _utcnow()
        created = 0
        for index, (catalog_key, text) in enumerate(MANDATORY_TODOS):
            result = await session.execute(
                sql_text(
                    f"""
                    INSERT INTO {TODOS_TABLE}
                    ({', '.join(TODO_SELECT_COLUMNS)})
                    VALUES
                    (:id, :user_id, :text, 1, 0, :date, :created_at, NULL, NULL, :catalog_key)
                    ON CONFLICT DO NOTHING
                    """
                ),
                {
                    "id": _new_id(),
                    "user_id": user["id"],
                    "text": text,
                    "date": day_iso,
                    # Distinct stamps keep catalog order under created_at sorting.
                    "created_at": _iso(base + timedelta(microseconds=index)),
                    "catalog_key": catalog_key,
                },
            )
            created += int(result.rowcount or 0)
        await session.commit()
    return created


async def list_public_todos(limit: int | None = None) -> list[dict]:
    settings = get_settings()
    cap = settings.public_feed_limit
    limit = cap if limit is None else max(0, min(int(limit), cap))
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        rows = (await session.execute(
            sql_text(
                f"""
                SELECT t.id, t.text, t.is_mandatory, t.completed, t.date, t.created_at,
                       t.completed_at, t.image_url, u.name AS user_name
                FROM {TODOS_TABLE} t
                JOIN {USERS_TABLE} u ON u.id = t.user_id
                WHERE t.completed = 1
                ORDER BY t.completed_at DESC
                LIMIT :limit
                """
            ),
            {"limit": limit},
        )).mappings().all()
    return [_normalize_todo_row(row) for row in rows]


async def list_comments(todo_id: str) -> list[dict]:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        rows = (await session.execute(
            sql_text(
                f"""
                SELECT id, todo_id, user_name, comment, created_at
                FROM {COMMENTS_TABLE}
                WHERE todo_id = :todo_id
                ORDER BY created_at ASC
                """
            ),
            {"todo_id": todo_id},
        )).mappings().all()
    return [dict(row) for row in rows]


async def add_comment(todo_id: str, user_name: str, comment: str) -> dict:
    clean_comment = (comment or "").strip()
    if not clean_comment:
        raise ValueError("Comment cannot be empty")
    clean_name = (user_name or "").strip()
    if not clean_name:
        raise ValueError("Comment author cannot be empty")
    payload = {
        "id": _new_id(),
        "todo_id": todo_id,
        "user_name": clean_name,
        "comment": clean_comment,
        "created_at": _iso(_utcnow()),
    }
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(
                f"""
                INSERT INTO {COMMENTS_TABLE} (id, todo_id, user_name, comment, created_at)
                VALUES (:id, :todo_id, :user_name, :comment, :created_at)
                """
            ),
            payload,
        )
        await session.commit()
    return payload
