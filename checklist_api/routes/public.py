from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.encoders import jsonable_encoder

from checklist_api.auth import require_backend_token
from checklist_api.schemas import (
    CommentCreate,
    CommentListResponse,
    CommentResponse,
    PublicTodoListResponse,
)
from checklist_api import repositories

router = APIRouter(dependencies=[Depends(require_backend_token)])


@router.get("/v1/public_todos", response_model=PublicTodoListResponse)
async def list_public_todos(limit: int | None = Query(default=None, ge=0)):
    items = await repositories.list_public_todos(limit)
    return {"items": jsonable_encoder(items)}


@router.get("/v1/todos/{todo_id}/comments", response_model=CommentListResponse)
async def list_comments(todo_id: str):
    return {"items": await repositories.list_comments(todo_id)}


@router.post("/v1/todos/{todo_id}/comments", response_model=CommentResponse, status_code=201)
async def add_comment(todo_id: str, payload: CommentCreate):
    todo = await repositories.get_todo(todo_id)
    if not todo:
        raise HTTPException(status_code=404, detail="Todo not found")
    try:
        return await repositories.add_comment(todo_id, payload.user_name, payload.comment)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
