from __future__ import annotations

import asyncio
import logging
import os
import re
import time
from pathlib import Path

from checklist_api.settings import get_settings

logger = logging.getLogger(__name__)

_SAFE_NAME = re.compile(r"^[A-Za-z0-9_-]+-\d+\.[A-Za-z0-9]+$")


class ImageRejected(ValueError):
    def __init__(self, status_code: int, detail: str):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


def image_dir() -> Path:
    path = Path(get_settings().image_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def validate_image(content_type: str | None, size: int) -> None:
    if not str(content_type or "").startswith("image/"):
        raise ImageRejected(415, "File must be an image")
    if size > get_settings().max_image_bytes:
        raise ImageRejected(413, "Image exceeds the maximum upload size")


def build_file_name(todo_id: str, original_name: str | None, content_type: str | None) -> str:
    ext = ""
    if original_name and "." in original_name:
        ext = original_name.rsplit(".", 1)[-1]
    ext = re.sub(r"[^A-Za-z0-9]", "", ext).lower()
    if not ext:
        ext = str(content_type or "image/bin").split("/", 1)[-1]
        ext = re.sub(r"[^A-Za-z0-9]", "", ext).lower() or "bin"
    return f"{todo_id}-{int(time.time() * 1000)}.{ext}"


def resolve_path(file_name: str) -> Path | None:
    if not _SAFE_NAME.match(file_name or ""):
        return None
    path = image_dir() / file_name
    return path if path.is_file() else None


def file_name_from_url(image_url: str | None) -> str | None:
    if not image_url:
        return None
    return image_url.rstrip("/").rsplit("/", 1)[-1] or None


async def save_image(todo_id: str, original_name: str | None, content_type: str | None, data: bytes) -> str:
    validate_image(content_type, len(data))
    file_name = build_file_name(todo_id, original_name, content_type)
    target = image_dir() / file_name
    await asyncio.to_thread(target.write_bytes, data)
    logger.info("Stored image %s (%d bytes)", file_name, len(data))
    return file_name


async def delete_image(file_name: str | None) -> bool:
    if not file_name:
        return False
    path = resolve_path(file_name)
    if path is None:
        return False
    await asyncio.to_thread(os.remove, path)
    return True
