from __future__ import annotations

from ..core.constants import ATTENDANCE_RANK_FLOOR, ATTENDANCE_RANKS
from ..users.model import AttendanceSnapshot


def attendance_percentage(snapshot: AttendanceSnapshot) -> float:
    return snapshot.percentage


def rank_label(percentage: float) -> str:
    """Map an attendance percentage to its label (Excellent/Good/Average/Below Average)."""

    for lower_bound, label in ATTENDANCE_RANKS:
        if percentage >= lower_bound:
            return label
    return ATTENDANCE_RANK_FLOOR
