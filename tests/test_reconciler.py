from checklist_app.constants import MANDATORY_CATALOG
from checklist_app.reconciler import completed_count, reconcile

from tests.factories import make_todo


def test_rows_join_on_catalog_key():
    todos = [
        make_todo(f"m{index}", entry.text, mandatory=True, catalog_key=entry.key, completed=index == 2)
        for index, entry in enumerate(MANDATORY_CATALOG)
    ]

    items = reconcile(todos)

    assert [item.todo.id for item in items] == [f"m{index}" for index in range(7)]
    assert completed_count(items) == 1
    assert items[2].is_completed


def test_missing_rows_leave_entries_untoggleable():
    items = reconcile([make_todo("m0", "Tidur cukup", mandatory=True, catalog_key="tidur")])

    assert items[0].can_toggle
    assert not any(item.can_toggle for item in items[1:])
    assert not any(item.is_completed for item in items[1:])


def test_legacy_rows_match_on_text():
    todos = [
        make_todo("a", "Makan makanan anti-inflamasi", mandatory=True, completed=True),
        make_todo("b", "Tidur cukup", mandatory=True),
        make_todo("c", "Hindari bahan kimia", mandatory=True),
    ]

    items = {item.entry.key: item for item in reconcile(todos)}

    assert items["makan"].todo.id == "a"
    assert items["makan"].is_completed
    assert items["tidur"].todo.id == "b"
    assert items["kimia"].todo.id == "c"
    assert items["obat"].todo is None


def test_custom_rows_never_back_the_checklist():
    items = reconcile([make_todo("x", "Tidur siang", mandatory=False)])

    assert all(item.todo is None for item in items)


def test_a_row_backs_at_most_one_entry():
    todos = [make_todo("g", "Makan anti-inflamasi lalu kelola stres", mandatory=True)]

    matched = [item for item in reconcile(todos) if item.todo is not None]

    assert [item.entry.key for item in matched] == ["makan"]
