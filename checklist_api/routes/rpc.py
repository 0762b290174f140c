from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from checklist_api.auth import require_backend_token
from checklist_api.schemas import GenerateMandatoryPayload, GenerateMandatoryResponse
from checklist_api import repositories

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_backend_token)])


@router.post("/v1/rpc/generate_mandatory_todos", response_model=GenerateMandatoryResponse)
async def generate_mandatory_todos(payload: GenerateMandatoryPayload):
    day_iso = payload.date.isoformat() if payload.date else repositories.today_iso()
    try:
        created = await repositories.generate_mandatory_todos(payload.user_name, day_iso)
    except repositories.UnknownUserError:
        raise HTTPException(status_code=404, detail="User not found")
    if created:
        logger.info("Generated %d mandatory todos for %s on %s", created, payload.user_name, day_iso)
    return {"user_name": payload.user_name, "date": day_iso, "created": created}
