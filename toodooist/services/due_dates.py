"""
Due-Date Status.

Maps a note's optional due date to an urgency category relative to today.
Recomputed on every render since "today" moves independently of the notes.
"""

from datetime import date, datetime
from enum import Enum

DUE_SOON_DAYS = 2
APPROACHING_DAYS = 7


class DueStatus(str, Enum):
    NONE = "none"
    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    DUE_SOON = "due_soon"
    APPROACHING = "approaching"


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def classify(due_date: date | datetime | None, today: date | datetime) -> DueStatus:
    """
    Classify a due date against today. Time of day is ignored.

    Args:
        due_date: Deadline, or None for no deadline
        today: Reference day

    Returns:
        The urgency category
    """
    if due_date is None:
        return DueStatus.NONE

    diff_days = (_as_date(due_date) - _as_date(today)).days
    if diff_days < 0:
        return DueStatus.OVERDUE
    if diff_days == 0:
        return DueStatus.DUE_TODAY
    if diff_days <= DUE_SOON_DAYS:
        return DueStatus.DUE_SOON
    if diff_days <= APPROACHING_DAYS:
        return DueStatus.APPROACHING
    return DueStatus.NONE


def format_due_date(due_date: date | None) -> str:
    """Badge text for a due date, dd/mm/yyyy. Empty when there is none."""
    if due_date is None:
        return ""
    return due_date.strftime("%d/%m/%Y")
