import pytest

from checklist_app.board import TodoBoard
from checklist_app.constants import MESSAGES
from checklist_app.errors import Conflict, NotFound, ValidationError
from checklist_app.history import get_history
from checklist_app.state.navigation import View


def _sign_in(services, name="Ana", register=True):
    user = services.accounts.register(name) if register else services.accounts.login(name)
    session = services.router.login(user)
    board = TodoBoard(session, services.todos, services.images)
    assert board.reload().ok
    return board


def test_register_add_toggle_and_relogin(services):
    board = _sign_in(services)
    assert len(board.todos) == 7
    assert not any(todo.completed for todo in board.todos)

    added = board.add("Baca buku")
    assert added.ok
    assert len(board.todos) == 8
    assert len(board.custom_todos) == 1

    assert board.toggle(added.todo.id, True).ok
    assert board.stats() == (1, 8, 13)

    services.router.logout()
    assert services.router.view == View.AUTH

    board = _sign_in(services, register=False)
    assert len(board.todos) == 8
    assert board.stats() == (1, 8, 13)


def test_checklist_is_backed_by_generated_rows(services):
    board = _sign_in(services)
    items = board.checklist()

    assert len(items) == 7
    assert all(item.can_toggle for item in items)

    assert board.toggle_item(items[0]).ok
    assert board.checklist()[0].is_completed


def test_login_unknown_user_and_duplicate_register(services):
    with pytest.raises(NotFound) as not_found:
        services.accounts.login("Budi")
    assert not_found.value.message == MESSAGES["user_not_found"]

    services.accounts.register("Ana")
    with pytest.raises(Conflict) as conflict:
        services.accounts.register("Ana")
    assert conflict.value.message == MESSAGES["name_taken"]

    with pytest.raises(ValidationError):
        services.accounts.register("   ")


def test_login_name_with_spaces(services):
    services.accounts.register("Ana Maria")
    assert services.accounts.login("  Ana Maria ").name == "Ana Maria"


def test_mandatory_todos_cannot_be_deleted(services):
    board = _sign_in(services)
    result = board.delete(board.mandatory_todos[0].id)

    assert not result.ok
    assert result.message == MESSAGES["delete_mandatory"]
    assert len(board.todos) == 7


def test_delete_custom_todo_twice(services):
    board = _sign_in(services)
    todo = board.add("Baca buku").todo

    assert board.delete(todo.id).ok
    second = board.delete(todo.id)
    assert not second.ok
    assert second.message == MESSAGES["delete_failed"]


def test_blank_todo_is_rejected_locally(services):
    board = _sign_in(services)
    result = board.add("   ")

    assert not result.ok
    assert result.message == MESSAGES["empty_text"]


def test_results_after_logout_do_not_touch_the_board(services):
    board = _sign_in(services)
    todo = board.add("Baca buku").todo
    services.router.logout()

    result = board.toggle(todo.id, True)

    assert result.message == MESSAGES["stale_session"]
    assert not board._find(todo.id).completed


def test_photo_proof_round_trip(services):
    board = _sign_in(services)
    todo = board.add("Makan sayur").todo

    attached = board.attach_image(todo.id, "bukti.jpg", "image/jpeg", b"jpeg-bytes")
    assert attached.ok
    assert attached.todo.image_url

    assert board.remove_image(todo.id).ok
    assert board._find(todo.id).image_url is None


def test_public_feed_and_comments(services):
    board = _sign_in(services)
    todo = board.add("Baca buku").todo
    board.toggle(todo.id, True)

    feed = services.feed.list_public_todos()
    assert [(item.text, item.user_name) for item in feed] == [("Baca buku", "Ana")]

    services.comments.add_comment(todo.id, "Ana", "mantap")
    services.comments.add_comment(todo.id, "Budi", "keren")
    comments = services.comments.list_comments(todo.id)
    assert [comment.comment for comment in comments] == ["mantap", "keren"]

    with pytest.raises(ValidationError):
        services.comments.add_comment(todo.id, "Ana", "  ")


def test_history_groups_today(services):
    board = _sign_in(services)
    todo = board.add("Baca buku").todo
    board.toggle(todo.id, True)

    history = get_history(services.todos, board.session.user_id)

    assert len(history) == 1
    assert history[0].date == board.day
    assert (history[0].completed_count, history[0].total_count, history[0].percentage) == (1, 8, 13)


def test_restore_from_persisted_identity(services, tmp_path):
    _sign_in(services)

    from checklist_app.services import build_services
    from tests.conftest import TOKEN

    again = build_services(
        "http://testserver",
        TOKEN,
        "Asia/Jakarta",
        tmp_path / "session.json",
        http_session=services.client.session,
        start_scheduler=False,
    )
    assert again.router.restore() == View.TODO
    assert again.router.session.user_name == "Ana"
