from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class User:
    id: str
    name: str
    created_at: str = ""

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "User":
        return cls(
            id=str(row["id"]),
            name=str(row["name"]),
            created_at=str(row.get("created_at") or ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Todo:
    id: str
    user_id: str
    text: str
    is_mandatory: bool
    completed: bool
    date: str
    created_at: str
    completed_at: Optional[str] = None
    image_url: Optional[str] = None
    catalog_key: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Todo":
        return cls(
            id=str(row["id"]),
            user_id=str(row.get("user_id") or ""),
            text=str(row.get("text") or ""),
            is_mandatory=bool(row.get("is_mandatory")),
            completed=bool(row.get("completed")),
            date=str(row.get("date") or ""),
            created_at=str(row.get("created_at") or ""),
            completed_at=row.get("completed_at") or None,
            image_url=row.get("image_url") or None,
            catalog_key=row.get("catalog_key") or None,
        )

    def with_completion(self, completed: bool, completed_at: Optional[str]) -> "Todo":
        return replace(self, completed=completed, completed_at=completed_at if completed else None)

    def with_image(self, image_url: Optional[str]) -> "Todo":
        return replace(self, image_url=image_url)


@dataclass(frozen=True)
class PublicTodo:
    id: str
    text: str
    is_mandatory: bool
    completed: bool
    date: str
    created_at: str
    user_name: str
    completed_at: Optional[str] = None
    image_url: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "PublicTodo":
        return cls(
            id=str(row["id"]),
            text=str(row.get("text") or ""),
            is_mandatory=bool(row.get("is_mandatory")),
            completed=bool(row.get("completed")),
            date=str(row.get("date") or ""),
            created_at=str(row.get("created_at") or ""),
            user_name=str(row.get("user_name") or ""),
            completed_at=row.get("completed_at") or None,
            image_url=row.get("image_url") or None,
        )


@dataclass(frozen=True)
class Comment:
    id: str
    todo_id: str
    user_name: str
    comment: str
    created_at: str

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Comment":
        return cls(
            id=str(row["id"]),
            todo_id=str(row.get("todo_id") or ""),
            user_name=str(row.get("user_name") or ""),
            comment=str(row.get("comment") or ""),
            created_at=str(row.get("created_at") or ""),
        )
