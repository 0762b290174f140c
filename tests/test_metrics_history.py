from checklist_app.errors import StoreError
from checklist_app.history import build_history, get_history, group_feed_by_date
from checklist_app.metrics import completion_stats, motivation_message, round_half_up_percent

from tests.factories import make_todo


def test_percentage_rounds_half_up():
    assert round_half_up_percent(1, 8) == 13
    assert round_half_up_percent(1, 3) == 33
    assert round_half_up_percent(2, 3) == 67
    assert round_half_up_percent(1, 200) == 1
    assert round_half_up_percent(0, 0) == 0
    assert round_half_up_percent(8, 8) == 100


def test_completion_stats_for_empty_list():
    assert completion_stats([]) == (0, 0, 0)


def test_motivation_thresholds():
    assert motivation_message(100).startswith("🏆")
    assert motivation_message(80).startswith("🌟")
    assert motivation_message(50).startswith("💪")
    assert motivation_message(30).startswith("🚀")
    assert motivation_message(0).startswith("✨")


def test_history_groups_on_stored_date_newest_first():
    todos = [
        make_todo("a", day="2024-05-01", completed=True),
        make_todo("b", day="2024-05-03", created_at="2024-05-03T09:00:00+00:00"),
        make_todo("c", day="2024-05-02"),
        make_todo("d", day="2024-05-03", created_at="2024-05-03T07:00:00+00:00", completed=True),
        # Late-evening UTC stamp still belongs to its stored day.
        make_todo("e", day="2024-05-02", created_at="2024-05-01T23:30:00+00:00"),
    ]

    history = build_history(todos)

    assert [day.date for day in history] == ["2024-05-03", "2024-05-02", "2024-05-01"]
    assert [todo.id for todo in history[0].todos] == ["d", "b"]
    assert [todo.id for todo in history[1].todos] == ["e", "c"]
    assert (history[0].completed_count, history[0].total_count, history[0].percentage) == (1, 2, 50)
    assert history[2].percentage == 100


def test_feed_grouping_keeps_arrival_order():
    todos = [
        make_todo("late", day="2024-05-02", created_at="2024-05-02T10:00:00+00:00"),
        make_todo("early", day="2024-05-02", created_at="2024-05-02T08:00:00+00:00"),
    ]

    grouped = group_feed_by_date(todos)

    assert [todo.id for todo in grouped[0][1]] == ["late", "early"]


class _FailingRepository:
    def list_todos(self, user_id, day=None):
        raise StoreError("boom")


def test_history_is_empty_when_store_fails():
    assert get_history(_FailingRepository(), "user-1") == []
