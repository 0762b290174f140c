from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from checklist_app.constants import SESSION_USER_KEY
from checklist_app.models import User

logger = logging.getLogger(__name__)


class SessionStore:
    """Small persisted key-value file holding the signed-in identity."""

    def __init__(self, path):
        self.path = Path(path)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, ValueError):
            logger.warning("Session file %s is unreadable, ignoring it.", self.path)
            return {}
        return payload if isinstance(payload, dict) else {}

    def _write(self, payload: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp_path, self.path)

    def load_user(self) -> User | None:
        raw = self._read().get(SESSION_USER_KEY)
        if raw is None:
            return None
        try:
            user = User.from_row(json.loads(raw) if isinstance(raw, str) else raw)
        except (ValueError, TypeError, KeyError, AttributeError):
            logger.warning("Discarding corrupt persisted session identity.")
            self.clear_user()
            return None
        if not user.id or not user.name:
            self.clear_user()
            return None
        return user

    def save_user(self, user: User) -> None:
        payload = self._read()
        payload[SESSION_USER_KEY] = json.dumps(user.to_dict(), ensure_ascii=False)
        self._write(payload)

    def clear_user(self) -> None:
        payload = self._read()
        if SESSION_USER_KEY not in payload:
            return
        del payload[SESSION_USER_KEY]
        self._write(payload)
