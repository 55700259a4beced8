from datetime import datetime
from decimal import Decimal

import pytest
from django.utils import timezone

from reports.aggregation import (
    compute_dashboard_stats,
    one_month_before,
    percent_change,
    rank_employees_by_achievement,
    rank_employees_by_investments,
    top_n,
)


def _aware(*args):
    return timezone.make_aware(datetime(*args))


NOW = _aware(2024, 3, 31, 15, 30)
LONG_AGO = _aware(2023, 12, 1, 9, 0)
RECENT = _aware(2024, 3, 20, 9, 0)


@pytest.mark.parametrize(
    "current, prior, expected",
    [
        (120, 100, 20),
        (100, 100, 0),
        (50, 100, -50),
        (5, 0, 0),
        (0, 0, 0),
        (41, 40, 3),  # 2.5 rounds up
        (39, 40, -2),  # -2.5 rounds up as well
        (Decimal("3000.00"), Decimal("1000.00"), 200),
    ],
)
def test_percent_change(current, prior, expected):
    assert percent_change(current, prior) == expected


def test_one_month_before_caps_day_and_starts_at_local_midnight():
    cutoff = one_month_before(NOW)

    local = timezone.localtime(cutoff)
    assert local.date().isoformat() == "2024-02-29"
    assert (local.hour, local.minute, local.second) == (0, 0, 0)


def test_late_clients_are_counted_by_status():
    clients = [
        {"status": "late", "created_at": RECENT},
        {"status": "active", "created_at": RECENT},
        {"status": "late", "created_at": RECENT},
    ]

    stats = compute_dashboard_stats([], clients, [], now=NOW)

    assert stats.late_clients == 2
    assert stats.total_clients == 3


def test_investments_without_prior_rows_report_zero_change():
    deposits = [
        {"amount": Decimal("1000"), "created_at": RECENT},
        {"amount": Decimal("2000"), "created_at": RECENT},
    ]

    stats = compute_dashboard_stats([], [], deposits, now=NOW)

    assert stats.total_investments == Decimal("3000")
    assert stats.investments_change == 0


def test_changes_compare_against_rows_older_than_one_month():
    profiles = [
        {"is_active": True, "created_at": LONG_AGO},
        {"is_active": True, "created_at": RECENT},
        {"is_active": False, "created_at": LONG_AGO},
    ]
    clients = [
        {"status": "active", "created_at": LONG_AGO},
        {"status": "active", "created_at": LONG_AGO},
        {"status": "active", "created_at": RECENT},
    ]
    deposits = [
        {"amount": Decimal("1000"), "created_at": LONG_AGO},
        {"amount": Decimal("500"), "created_at": RECENT},
    ]

    stats = compute_dashboard_stats(profiles, clients, deposits, now=NOW, monthly_commissions=Decimal("75.50"))

    assert stats.total_employees == 2
    assert stats.employees_change == 100
    assert stats.clients_change == 50
    assert stats.investments_change == 50
    assert stats.monthly_commissions == Decimal("75.50")
    assert stats.as_dict()["total_investments"] == Decimal("1500")


def test_top_n_breaks_ties_deterministically():
    entries = [
        {"employee_id": "b", "total": Decimal("10")},
        {"employee_id": "c", "total": Decimal("30")},
        {"employee_id": "a", "total": Decimal("10")},
    ]

    ranked = top_n(entries, metric=lambda e: e["total"], limit=3, tie_key=lambda e: e["employee_id"])

    assert [entry["employee_id"] for entry in ranked] == ["c", "a", "b"]


def test_top_n_length_is_bounded_by_limit_and_groups():
    entries = [{"employee_id": str(i), "total": i} for i in range(3)]

    assert len(top_n(entries, metric=lambda e: e["total"], limit=5)) == 3
    assert len(top_n(entries, metric=lambda e: e["total"], limit=2)) == 2
    assert top_n(entries, metric=lambda e: e["total"], limit=0) == []


def test_rank_employees_by_investments_sums_assigned_clients():
    clients = [
        {"id": 1, "assigned_to_id": "emp-a"},
        {"id": 2, "assigned_to_id": "emp-a"},
        {"id": 3, "assigned_to_id": "emp-b"},
        {"id": 4, "assigned_to_id": None},
    ]
    deposits = [
        {"client_id": 1, "amount": Decimal("1000")},
        {"client_id": 2, "amount": Decimal("250")},
        {"client_id": 3, "amount": Decimal("5000")},
        {"client_id": 4, "amount": Decimal("9999")},
    ]

    ranked = rank_employees_by_investments(clients, deposits, limit=5)

    assert [entry["employee_id"] for entry in ranked] == ["emp-b", "emp-a"]
    assert ranked[1]["clients_count"] == 2
    assert ranked[1]["total_investments"] == Decimal("1250")


def test_rank_employees_by_achievement_rate():
    targets = [
        {"employee_id": "emp-a", "status": "achieved"},
        {"employee_id": "emp-a", "status": "pending"},
        {"employee_id": "emp-b", "status": "achieved"},
        {"employee_id": "emp-c", "status": "in_progress"},
    ]

    ranked = rank_employees_by_achievement(targets, limit=10)

    assert [entry["employee_id"] for entry in ranked] == ["emp-b", "emp-a", "emp-c"]
    assert ranked[1]["achievement_rate"] == Decimal("50.00")
    assert ranked[1]["total_targets"] == 2
