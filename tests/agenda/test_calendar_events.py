from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from agenda.events import (
    CalendarEvent,
    filter_events,
    merge_events,
    project_deposit_day,
    project_deposit_events,
    summarize_events,
    withdrawal_event_status,
    withdrawal_events,
)

CLIENT = SimpleNamespace(name="Mona Adel", code="CL-0001", phone="+201000000001")


def _deposit(deposit_date, status="active", **extra):
    return SimpleNamespace(
        id=extra.pop("id", 1),
        deposit_number="DEP-0001",
        amount=Decimal("10000.00"),
        profit_rate=Decimal("12.50"),
        deposit_date=deposit_date,
        status=status,
        client=CLIENT,
        **extra,
    )


def _schedule(due_date, status="upcoming", **extra):
    return SimpleNamespace(
        id=extra.pop("id", 7),
        due_date=due_date,
        status=status,
        amount=Decimal("500.00"),
        deposit=extra.pop("deposit", _deposit(date(2024, 1, 31))),
        **extra,
    )


@pytest.mark.parametrize(
    "year, expected",
    [(2024, date(2024, 2, 29)), (2023, date(2023, 2, 28))],
)
def test_deposit_on_31st_projects_to_last_day_of_february(year, expected):
    events = project_deposit_events([_deposit(date(year, 1, 31))], year, 2)

    assert len(events) == 1
    assert events[0].date == expected
    assert events[0].type == "deposit"
    assert events[0].status == "done"
    assert events[0].id == "contract-1"


@pytest.mark.parametrize("status", ["completed", "cancelled"])
def test_closed_deposit_projects_no_events(status):
    for month in range(1, 13):
        assert project_deposit_events([_deposit(date(2024, 1, 15), status=status)], 2024, month) == []


def test_deposit_is_not_projected_before_its_origination_month():
    assert project_deposit_day(date(2024, 5, 10), 2024, 4) is None
    assert project_deposit_day(date(2024, 5, 10), 2024, 5) == date(2024, 5, 10)
    assert project_deposit_day(date(2023, 5, 10), 2025, 1) == date(2025, 1, 10)


def test_withdrawal_event_status_rules():
    today = date(2024, 3, 10)
    yesterday = date(2024, 3, 9)

    assert withdrawal_event_status("upcoming", yesterday, today) == "late"
    assert withdrawal_event_status("upcoming", today, today) == "upcoming"
    assert withdrawal_event_status("completed", yesterday, today) == "done"
    assert withdrawal_event_status("completed", date(2024, 4, 1), today) == "done"
    assert withdrawal_event_status("overdue", date(2024, 4, 1), today) == "late"


def test_withdrawal_events_carry_client_and_deposit_details():
    [event] = withdrawal_events([_schedule(date(2024, 2, 10))], today=date(2024, 2, 1))

    assert event.id == "withdraw-7"
    assert event.status == "upcoming"
    assert event.client == "Mona Adel"
    assert event.client_code == "CL-0001"
    assert event.deposit_number == "DEP-0001"
    assert event.deposit_amount == Decimal("10000.00")


def test_withdrawal_without_client_uses_placeholder_name():
    orphan_deposit = _deposit(date(2024, 1, 1))
    orphan_deposit.client = None

    [event] = withdrawal_events([_schedule(date(2024, 2, 10), deposit=orphan_deposit)], today=date(2024, 2, 1))

    assert event.client == "Client inconnu"
    assert "client_code" not in event.as_dict()


def _event(event_id, event_type, status, day=date(2024, 2, 10), amount=None):
    return CalendarEvent(id=event_id, date=day, type=event_type, status=status, amount=amount)


def test_merge_keeps_source_order():
    merged = merge_events(
        withdrawals=[_event("w", "withdraw", "late")],
        deposits=[_event("d", "deposit", "done")],
        meetings=[_event("m", "meeting", "upcoming")],
        posters=[_event("p", "poster", "upcoming")],
    )

    assert [event.id for event in merged] == ["w", "d", "m", "p"]


def test_filters_apply_uniformly_across_event_kinds():
    events = [
        _event("w1", "withdraw", "late"),
        _event("w2", "withdraw", "upcoming", day=date(2024, 2, 11)),
        _event("d1", "deposit", "done"),
        _event("m1", "meeting", "upcoming"),
    ]

    assert [e.id for e in filter_events(events, event_type="withdraw")] == ["w1", "w2"]
    assert [e.id for e in filter_events(events, status="upcoming")] == ["w2", "m1"]
    assert [e.id for e in filter_events(events, on=date(2024, 2, 10))] == ["w1", "d1", "m1"]
    assert filter_events(events, event_type="all", status="all") == events


def test_summary_counts_and_amount_still_due():
    events = [
        _event("w1", "withdraw", "late", amount=Decimal("100")),
        _event("w2", "withdraw", "done", amount=Decimal("250")),
        _event("w3", "withdraw", "upcoming", amount=Decimal("50")),
        _event("d1", "deposit", "done", amount=Decimal("9999")),
    ]

    summary = summarize_events(events)

    assert summary["total"] == 4
    assert summary["by_type"]["withdraw"] == 3
    assert summary["by_type"]["poster"] == 0
    assert summary["by_status"] == {"done": 2, "upcoming": 1, "late": 1}
    assert summary["withdrawals_due"] == Decimal("150")
