"""
Wall-clock session status helpers.

The backend stores an explicit status, but the portal shows the status
implied by the session window so that a session scheduled for later reads
as draft and an elapsed one as completed.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from syntegra.models.session import Session, SessionStatus, SessionStatusInfo, parse_timestamp


_STATUS_INFO = {
    SessionStatus.DRAFT: ("Draft", "secondary", "Sesi belum dimulai"),
    SessionStatus.ACTIVE: ("Active", "success", "Sesi sedang berlangsung"),
    SessionStatus.COMPLETED: ("Completed", "default", "Sesi telah selesai"),
}


def _now(now: datetime | None) -> datetime:
    return now or datetime.now(timezone.utc)


def _parse(value: Any) -> datetime:
    return parse_timestamp(value, "Format waktu tidak valid")


def get_session_status(start: Any, end: Any, now: datetime | None = None) -> SessionStatus:
    """Draft before the window, active inside it, completed after it."""
    current = _now(now)
    if current < _parse(start):
        return SessionStatus.DRAFT
    if current > _parse(end):
        return SessionStatus.COMPLETED
    return SessionStatus.ACTIVE


def status_info(start: Any, end: Any, now: datetime | None = None) -> SessionStatusInfo:
    status = get_session_status(start, end, now)
    label, variant, description = _STATUS_INFO[status]
    return SessionStatusInfo(status=status, label=label, variant=variant, description=description)


def has_started(start: Any, now: datetime | None = None) -> bool:
    return _now(now) >= _parse(start)


def has_ended(end: Any, now: datetime | None = None) -> bool:
    return _now(now) > _parse(end)


def is_active(start: Any, end: Any, now: datetime | None = None) -> bool:
    return get_session_status(start, end, now) == SessionStatus.ACTIVE


def time_until_start(start: Any, now: datetime | None = None) -> timedelta:
    """Negative once the session has started."""
    return _parse(start) - _now(now)


def time_until_end(end: Any, now: datetime | None = None) -> timedelta:
    """Negative once the session has ended."""
    return _parse(end) - _now(now)


def duration_hours(start: Any, end: Any) -> float:
    return (_parse(end) - _parse(start)).total_seconds() / 3600


def with_schedule(session: Session, now: datetime | None = None) -> Session:
    """
    Fill the derived timing fields of a session record.

    Values the backend already sent are kept. Cancelled sessions get no
    status badge since their window no longer applies.

    Args:
        session: Session as returned by the backend
        now: Reference instant (defaults to the current time)

    Returns:
        Session: Copy with duration, minutes remaining and status badge
    """
    update: dict[str, Any] = {}
    if session.session_duration_hours is None:
        update["session_duration_hours"] = round(duration_hours(session.start_time, session.end_time), 2)
    if session.time_remaining is None:
        remaining = time_until_end(session.end_time, now).total_seconds() / 60
        update["time_remaining"] = max(0.0, round(remaining, 1))
    if session.status != SessionStatus.CANCELLED:
        update["status_info"] = status_info(session.start_time, session.end_time, now)
    return session.model_copy(update=update)
