from __future__ import annotations

from checklist_app.constants import MOTIVATION_MESSAGES


def round_half_up_percent(completed, total):
    """Integer percentage rounded half up, e.g. 1 of 8 -> 13."""
    if total <= 0:
        return 0
    return (200 * completed + total) // (2 * total)


def completion_stats(todos):
    total = len(todos)
    completed = sum(1 for todo in todos if todo.completed)
    return completed, total, round_half_up_percent(completed, total)


def motivation_message(percentage):
    for threshold, message in MOTIVATION_MESSAGES:
        if percentage >= threshold:
            return message
    return MOTIVATION_MESSAGES[-1][1]
