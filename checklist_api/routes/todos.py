from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.encoders import jsonable_encoder

from checklist_api.auth import acting_user_id, require_backend_token
from checklist_api.schemas import TodoCreate, TodoPatch, TodoResponse, TodoListResponse
from checklist_api import repositories

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_backend_token)])


@router.get("/v1/todos", response_model=TodoListResponse)
async def list_todos(
    user_id: str = Query(...),
    day: date | None = Query(default=None, alias="date"),
):
    items = await repositories.list_todos(user_id, day.isoformat() if day else None)
    return {"items": jsonable_encoder(items)}


@router.post("/v1/todos", response_model=TodoResponse, status_code=201)
async def create_todo(payload: TodoCreate):
    try:
        record = await repositories.create_todo(
            payload.user_id,
            payload.text,
            payload.date.isoformat() if payload.date else None,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return jsonable_encoder(record)


@router.patch("/v1/todos/{todo_id}", response_model=TodoResponse)
async def patch_todo(
    todo_id: str,
    payload: TodoPatch,
    user_id: str | None = Depends(acting_user_id),
):
    record = await repositories.set_todo_completed(todo_id, payload.completed, user_id)
    if not record:
        raise HTTPException(status_code=404, detail="Todo not found")
    return jsonable_encoder(record)


@router.delete("/v1/todos/{todo_id}")
async def delete_todo(todo_id: str, user_id: str | None = Depends(acting_user_id)):
    deleted = await repositories.delete_todo(todo_id, user_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Todo not found")
    return {"ok": True}
