from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError

from checklist_api.auth import require_backend_token
from checklist_api.schemas import UserCreate, UserResponse
from checklist_api import repositories

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_backend_token)])


@router.post("/v1/users", response_model=UserResponse, status_code=201)
async def register_user(payload: UserCreate):
    name = payload.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Name cannot be empty")
    try:
        return await repositories.create_user(name)
    except IntegrityError:
        logger.info("Registration rejected, name already taken: %s", name)
        raise HTTPException(status_code=409, detail="Name already taken")


@router.get("/v1/users/by-name/{name}", response_model=UserResponse)
async def get_user_by_name(name: str):
    user = await repositories.get_user_by_name(name.strip())
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user
