from checklist_app.models import Todo


def make_todo(todo_id, text="Todo", *, mandatory=False, completed=False, day="2024-05-01",
              created_at=None, catalog_key=None):
    return Todo(
        id=todo_id,
        user_id="user-1",
        text=text,
        is_mandatory=mandatory,
        completed=completed,
        date=day,
        created_at=created_at or f"{day}T08:00:00.000000+00:00",
        catalog_key=catalog_key,
    )
