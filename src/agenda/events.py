"""Financial calendar projection.

Turns deposits, withdrawal schedules, meetings and marketing posters into a
single flat list of dated :class:`CalendarEvent` objects for one displayed
month. Nothing here touches the database: callers pass in rows (model
instances or any object with the same attributes) and get events back.

Deposit events are projections, recomputed for every month on display and
never stored: an open deposit shows up every month from its origination
month onwards, on its original day-of-month capped to the month length.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass
from datetime import date
from decimal import Decimal

from core.periods import days_in_month

EVENT_WITHDRAW = "withdraw"
EVENT_DEPOSIT = "deposit"
EVENT_MEETING = "meeting"
EVENT_POSTER = "poster"
EVENT_TYPES = (EVENT_WITHDRAW, EVENT_DEPOSIT, EVENT_MEETING, EVENT_POSTER)

STATUS_DONE = "done"
STATUS_UPCOMING = "upcoming"
STATUS_LATE = "late"
EVENT_STATUSES = (STATUS_DONE, STATUS_UPCOMING, STATUS_LATE)

# Deposit statuses that stop the monthly projection.
CLOSED_DEPOSIT_STATUSES = frozenset({"completed", "cancelled"})

UNKNOWN_CLIENT = "Client inconnu"
UNASSIGNED_EMPLOYEE = "Non precise"


@dataclass(frozen=True)
class CalendarEvent:
    id: str
    date: date
    type: str
    status: str | None = None
    amount: Decimal | None = None
    title: str | None = None
    description: str | None = None
    client: str | None = None
    client_code: str | None = None
    client_phone: str | None = None
    responsible_employee: str | None = None
    deposit_id: str | None = None
    deposit_number: str | None = None
    deposit_amount: Decimal | None = None
    profit_rate: Decimal | None = None
    deposit_date: date | None = None
    deposit_status: str | None = None

    def as_dict(self) -> dict:
        return {key: value for key, value in asdict(self).items() if value is not None}


def _client_fields(client) -> dict:
    if client is None:
        return {"client": UNKNOWN_CLIENT}
    return {
        "client": getattr(client, "name", None) or UNKNOWN_CLIENT,
        "client_code": getattr(client, "code", None) or None,
        "client_phone": getattr(client, "phone", None) or None,
    }


def _deposit_fields(deposit) -> dict:
    return {
        "deposit_id": str(deposit.id),
        "deposit_number": getattr(deposit, "deposit_number", None),
        "deposit_amount": getattr(deposit, "amount", None),
        "profit_rate": getattr(deposit, "profit_rate", None),
        "deposit_date": getattr(deposit, "deposit_date", None),
        "deposit_status": getattr(deposit, "status", None),
    }


# ---------------------------------------------------------------------------
# Deposits
# ---------------------------------------------------------------------------

def project_deposit_day(deposit_date: date, year: int, month: int) -> date | None:
    """Day on which a deposit made on *deposit_date* recurs in ``year-month``.

    ``None`` when the displayed month is before the origination month.
    """
    if deposit_date.year * 12 + deposit_date.month > year * 12 + month:
        return None
    return date(year, month, min(deposit_date.day, days_in_month(year, month)))


def project_deposit_events(deposits, year: int, month: int) -> list[CalendarEvent]:
    """One ``deposit`` event per open deposit for the displayed month."""
    events = []
    for deposit in deposits:
        if deposit.deposit_date is None or deposit.status in CLOSED_DEPOSIT_STATUSES:
            continue
        day = project_deposit_day(deposit.deposit_date, year, month)
        if day is None:
            continue
        events.append(
            CalendarEvent(
                id=f"contract-{deposit.id}",
                date=day,
                type=EVENT_DEPOSIT,
                status=STATUS_DONE,
                amount=deposit.amount,
                **_client_fields(getattr(deposit, "client", None)),
                **_deposit_fields(deposit),
            )
        )
    return events


# ---------------------------------------------------------------------------
# Withdrawals
# ---------------------------------------------------------------------------

def withdrawal_event_status(status: str, due_date: date, today: date) -> str:
    """Calendar status of a withdrawal schedule.

    ``completed`` is always ``done``; a stored ``overdue``, or an unpaid
    schedule whose due date is before *today*, is ``late``; anything else is
    ``upcoming``.
    """
    if status == "completed":
        return STATUS_DONE
    if status == "overdue" or due_date < today:
        return STATUS_LATE
    return STATUS_UPCOMING


def withdrawal_events(schedules, today: date) -> list[CalendarEvent]:
    events = []
    for schedule in schedules:
        deposit = getattr(schedule, "deposit", None)
        extra = _client_fields(getattr(deposit, "client", None) if deposit is not None else None)
        if deposit is not None:
            extra.update(_deposit_fields(deposit))
        events.append(
            CalendarEvent(
                id=f"withdraw-{schedule.id}",
                date=schedule.due_date,
                type=EVENT_WITHDRAW,
                status=withdrawal_event_status(schedule.status, schedule.due_date, today),
                amount=schedule.amount,
                **extra,
            )
        )
    return events


# ---------------------------------------------------------------------------
# Meetings & posters
# ---------------------------------------------------------------------------

def meeting_events(meetings) -> list[CalendarEvent]:
    return [
        CalendarEvent(
            id=f"meeting-{meeting.id}",
            date=meeting.meeting_date,
            type=EVENT_MEETING,
            status=STATUS_UPCOMING,
            title=meeting.title,
            description=meeting.description or None,
            responsible_employee=meeting.responsible_employee or UNASSIGNED_EMPLOYEE,
        )
        for meeting in meetings
    ]


def poster_events(posters) -> list[CalendarEvent]:
    return [
        CalendarEvent(
            id=f"poster-{poster.id}",
            date=poster.poster_date,
            type=EVENT_POSTER,
            status=STATUS_UPCOMING,
            title=poster.title,
        )
        for poster in posters
    ]


# ---------------------------------------------------------------------------
# Merge & filter
# ---------------------------------------------------------------------------

def merge_events(withdrawals=(), deposits=(), meetings=(), posters=()) -> list[CalendarEvent]:
    """Flat concatenation: withdrawals, then deposits, meetings, posters."""
    return [*withdrawals, *deposits, *meetings, *posters]


def filter_events(events, *, event_type=None, status=None, on=None) -> list[CalendarEvent]:
    """Apply the same type / status / day filter to every event kind.

    ``None`` or ``"all"`` disables a filter.
    """
    result = []
    for event in events:
        if event_type not in (None, "all") and event.type != event_type:
            continue
        if status not in (None, "all") and event.status != status:
            continue
        if on is not None and event.date != on:
            continue
        result.append(event)
    return result


def summarize_events(events) -> dict:
    """Counts per type and status, plus the withdrawal amount still to pay."""
    by_type = Counter(event.type for event in events)
    by_status = Counter(event.status for event in events if event.status)
    due = sum(
        (
            event.amount
            for event in events
            if event.type == EVENT_WITHDRAW and event.status != STATUS_DONE and event.amount is not None
        ),
        Decimal("0"),
    )
    return {
        "total": len(events),
        "by_type": {event_type: by_type.get(event_type, 0) for event_type in EVENT_TYPES},
        "by_status": {event_status: by_status.get(event_status, 0) for event_status in EVENT_STATUSES},
        "withdrawals_due": due,
    }
