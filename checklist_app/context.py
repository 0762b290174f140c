from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, Optional

from checklist_app.models import User
from checklist_app.scheduler import MidnightScheduler

logger = logging.getLogger(__name__)


@dataclass
class SessionContext:
    """Everything a signed-in screen needs; created on login, closed on logout."""

    user: User
    today: Callable[[], date]
    now: Callable[[], datetime]
    scheduler: Optional[MidnightScheduler] = None
    active: bool = field(default=True)
    needs_reload: bool = field(default=False)

    @property
    def user_id(self) -> str:
        return self.user.id

    @property
    def user_name(self) -> str:
        return self.user.name

    def start_midnight_rollover(self, todo_repository) -> None:
        def _rollover():
            if not self.active:
                return
            todo_repository.generate_mandatory_todos(self.user.name, self.today())
            self.needs_reload = True

        self.scheduler = MidnightScheduler(_rollover, self.now, name=self.user.name)
        self.scheduler.start()

    def close(self) -> None:
        self.active = False
        if self.scheduler is not None:
            self.scheduler.cancel()
            self.scheduler = None
        logger.info("Session closed for %s", self.user.name)
