from __future__ import annotations

from datetime import date as dt_date
from typing import Optional, List

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=80)


class UserResponse(BaseModel):
    id: str
    name: str
    created_at: str


class TodoCreate(BaseModel):
    user_id: str
    text: str = Field(..., min_length=1, max_length=500)
    date: Optional[dt_date] = None


class TodoPatch(BaseModel):
    completed: bool


class TodoResponse(BaseModel):
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


class TodoListResponse(BaseModel):
    items: List[TodoResponse]


class GenerateMandatoryPayload(BaseModel):
    user_name: str
    date: Optional[dt_date] = None


class GenerateMandatoryResponse(BaseModel):
    user_name: str
    date: str
    created: int


class PublicTodoResponse(BaseModel):
    id: str
    text: str
    is_mandatory: bool
    completed: bool
    date: str
    created_at: str
    completed_at: Optional[str] = None
    image_url: Optional[str] = None
    user_name: str


class PublicTodoListResponse(BaseModel):
    items: List[PublicTodoResponse]


class CommentCreate(BaseModel):
    user_name: str = Field(..., min_length=1, max_length=80)
    comment: str = Field(..., min_length=1, max_length=1000)


class CommentResponse(BaseModel):
    id: str
    todo_id: str
    user_name: str
    comment: str
    created_at: str


class CommentListResponse(BaseModel):
    items: List[CommentResponse]


class ImageResponse(BaseModel):
    todo_id: str
    image_url: Optional[str] = None
