import threading
from datetime import datetime, timedelta, timezone

from checklist_app.clock import resolve_timezone, seconds_until_midnight
from checklist_app.context import SessionContext
from checklist_app.models import User
from checklist_app.scheduler import MidnightScheduler

JAKARTA = resolve_timezone("Asia/Jakarta")


def test_seconds_until_midnight_uses_local_clock():
    now = datetime(2024, 5, 1, 23, 0, tzinfo=JAKARTA)
    assert seconds_until_midnight(now) == 3600


def test_seconds_until_midnight_right_after_midnight():
    now = datetime(2024, 5, 1, 0, 0, 1, tzinfo=JAKARTA)
    assert seconds_until_midnight(now) == 24 * 3600 - 1


def test_unknown_timezone_falls_back_to_utc():
    assert resolve_timezone("Not/AZone").key == "UTC"


def _almost_midnight():
    return datetime(2024, 5, 1, tzinfo=timezone.utc) + timedelta(days=1) - timedelta(milliseconds=50)


def test_scheduler_fires_at_midnight_and_cancels():
    fired = threading.Event()
    scheduler = MidnightScheduler(fired.set, _almost_midnight, name="test")

    scheduler.start()
    assert fired.wait(2)
    scheduler.cancel()

    assert not scheduler.running


def test_callback_errors_do_not_kill_the_thread():
    calls = []

    def callback():
        calls.append(1)
        raise RuntimeError("boom")

    scheduler = MidnightScheduler(callback, _almost_midnight, name="test")
    scheduler.start()
    scheduler._stop.wait(0.3)

    assert calls == [1]
    assert scheduler.running
    scheduler.cancel()


class _RecordingRepository:
    def __init__(self):
        self.calls = []
        self.called = threading.Event()

    def generate_mandatory_todos(self, user_name, day=None):
        self.calls.append((user_name, day))
        self.called.set()


def test_rollover_generates_for_new_day_and_flags_reload():
    repository = _RecordingRepository()
    session = SessionContext(
        user=User(id="u1", name="Ana"),
        today=lambda: datetime(2024, 5, 2).date(),
        now=_almost_midnight,
    )

    session.start_midnight_rollover(repository)
    assert repository.called.wait(2)
    session.close()

    assert repository.calls == [("Ana", datetime(2024, 5, 2).date())]
    assert session.needs_reload
    assert session.scheduler is None


def test_closed_session_never_rolls_over():
    repository = _RecordingRepository()
    session = SessionContext(
        user=User(id="u1", name="Ana"),
        today=lambda: datetime(2024, 5, 2).date(),
        now=lambda: datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
    )
    session.start_midnight_rollover(repository)
    session.close()

    assert not repository.called.wait(0.1)
    assert not session.active
