from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import FileResponse

from checklist_api.auth import acting_user_id, require_backend_token
from checklist_api.schemas import ImageResponse
from checklist_api.services import image_store
from checklist_api.settings import get_settings
from checklist_api import repositories

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/v1/todos/{todo_id}/image",
    response_model=ImageResponse,
    dependencies=[Depends(require_backend_token)],
)
async def upload_image(
    todo_id: str,
    file: UploadFile = File(...),
    user_id: str | None = Depends(acting_user_id),
):
    todo = await repositories.get_todo(todo_id, user_id)
    if not todo:
        raise HTTPException(status_code=404, detail="Todo not found")
    data = await file.read()
    try:
        file_name = await image_store.save_image(todo_id, file.filename, file.content_type, data)
    except image_store.ImageRejected as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail)
    image_url = get_settings().image_url(file_name)
    record = await repositories.set_todo_image(todo_id, image_url, user_id)
    if not record:
        await image_store.delete_image(file_name)
        raise HTTPException(status_code=404, detail="Todo not found")
    previous = image_store.file_name_from_url(todo.get("image_url"))
    if previous and previous != file_name:
        await image_store.delete_image(previous)
    return {"todo_id": todo_id, "image_url": image_url}


@router.delete(
    "/v1/todos/{todo_id}/image",
    response_model=ImageResponse,
    dependencies=[Depends(require_backend_token)],
)
async def delete_image(todo_id: str, user_id: str | None = Depends(acting_user_id)):
    todo = await repositories.get_todo(todo_id, user_id)
    if not todo:
        raise HTTPException(status_code=404, detail="Todo not found")
    await image_store.delete_image(image_store.file_name_from_url(todo.get("image_url")))
    await repositories.set_todo_image(todo_id, None, user_id)
    return {"todo_id": todo_id, "image_url": None}


# Public so stored image URLs resolve without the backend token.
@router.get("/v1/images/{file_name}")
async def get_image(file_name: str):
    path = image_store.resolve_path(file_name)
    if path is None:
        raise HTTPException(status_code=404, detail="Image not found")
    return FileResponse(path)
