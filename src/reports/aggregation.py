"""Pure aggregation helpers for the dashboard and the rankings.

Functions here receive rows that were already fetched (model instances,
``values()`` dicts, or plain objects) and only do arithmetic, so they can
be tested without a database.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from decimal import ROUND_FLOOR, Decimal

from django.utils import timezone

from core.periods import shift_month, start_of_day

ZERO = Decimal("0")


def _get(row, name, default=None):
    if isinstance(row, dict):
        return row.get(name, default)
    return getattr(row, name, default)


def _as_decimal(value) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


# ---------------------------------------------------------------------------
# Period comparison
# ---------------------------------------------------------------------------

def percent_change(current, prior_total) -> int:
    """Whole-number percentage change from *prior_total* to *current*.

    Rounds half up (``2.5 -> 3``, ``-2.5 -> -2``). A zero prior total
    reports ``0`` instead of an infinite change.
    """
    prior = _as_decimal(prior_total)
    if prior == 0:
        return 0
    ratio = (_as_decimal(current) - prior) / prior * 100
    return int((ratio + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))


def one_month_before(moment: datetime) -> datetime:
    """Midnight, local time, of the same day one calendar month before *moment*.

    The day is capped to the length of the previous month, so March 31
    compares against February 28 (or 29).
    """
    if timezone.is_aware(moment):
        moment = timezone.localtime(moment)
    return start_of_day(shift_month(moment.date(), -1))


def _older_than(rows, cutoff):
    return [row for row in rows if _get(row, "created_at") is not None and _get(row, "created_at") < cutoff]


def _amount_total(rows) -> Decimal:
    return sum((_as_decimal(_get(row, "amount")) for row in rows), ZERO)


@dataclass(frozen=True)
class DashboardStats:
    total_employees: int
    total_clients: int
    total_investments: Decimal
    monthly_commissions: Decimal
    late_clients: int
    employees_change: int
    clients_change: int
    investments_change: int

    def as_dict(self) -> dict:
        return asdict(self)


def compute_dashboard_stats(profiles, clients, deposits, *, now, monthly_commissions=ZERO) -> DashboardStats:
    """Head-line figures with their change against one month ago.

    The change compares today's cumulative totals with the totals made of
    rows that already existed one month ago; it is not a rolling-window
    delta.
    """
    cutoff = one_month_before(now)
    profiles = [row for row in profiles if _get(row, "is_active", True)]
    clients = list(clients)
    deposits = list(deposits)

    total_employees = len(profiles)
    total_clients = len(clients)
    total_investments = _amount_total(deposits)

    return DashboardStats(
        total_employees=total_employees,
        total_clients=total_clients,
        total_investments=total_investments,
        monthly_commissions=_as_decimal(monthly_commissions),
        late_clients=sum(1 for row in clients if _get(row, "status") == "late"),
        employees_change=percent_change(total_employees, len(_older_than(profiles, cutoff))),
        clients_change=percent_change(total_clients, len(_older_than(clients, cutoff))),
        investments_change=percent_change(total_investments, _amount_total(_older_than(deposits, cutoff))),
    )


# ---------------------------------------------------------------------------
# Top-N ranking
# ---------------------------------------------------------------------------

def group_by_key(rows, key) -> dict:
    """Group *rows* by ``key(row)`` in first-seen order; rows without a key are dropped."""
    groups = {}
    for row in rows:
        group_key = key(row)
        if group_key is None:
            continue
        groups.setdefault(group_key, []).append(row)
    return groups


def top_n(entries, *, metric, limit, tie_key=None) -> list:
    """Highest *metric* first, truncated to *limit* entries.

    Equal metrics are ordered by ``tie_key`` (ascending) so the output does
    not depend on the order rows came back from the database.
    """
    if limit is not None and limit <= 0:
        return []
    tie_key = tie_key or (lambda entry: "")
    ranked = sorted(entries, key=lambda entry: (-metric(entry), tie_key(entry)))
    return ranked if limit is None else ranked[:limit]


def rank_employees_by_investments(clients, deposits, limit) -> list[dict]:
    """Employees ranked by the total invested by the clients assigned to them.

    *clients* carry ``id`` and ``assigned_to_id``; *deposits* carry
    ``client_id`` and ``amount``. Unassigned clients are ignored.
    """
    invested_by_client = {}
    for deposit in deposits:
        client_id = _get(deposit, "client_id")
        invested_by_client[client_id] = invested_by_client.get(client_id, ZERO) + _as_decimal(_get(deposit, "amount"))

    entries = []
    for employee_id, employee_clients in group_by_key(clients, lambda row: _get(row, "assigned_to_id")).items():
        entries.append(
            {
                "employee_id": employee_id,
                "clients_count": len(employee_clients),
                "total_investments": sum(
                    (invested_by_client.get(_get(client, "id"), ZERO) for client in employee_clients),
                    ZERO,
                ),
            }
        )
    return top_n(
        entries,
        metric=lambda entry: entry["total_investments"],
        limit=limit,
        tie_key=lambda entry: str(entry["employee_id"]),
    )


def rank_employees_by_achievement(targets, limit) -> list[dict]:
    """Employees ranked by the share of their targets marked ``achieved``.

    *targets* carry ``employee_id`` and ``status``.
    """
    entries = []
    for employee_id, employee_targets in group_by_key(targets, lambda row: _get(row, "employee_id")).items():
        total = len(employee_targets)
        achieved = sum(1 for target in employee_targets if _get(target, "status") == "achieved")
        entries.append(
            {
                "employee_id": employee_id,
                "achieved_count": achieved,
                "total_targets": total,
                "achievement_rate": (Decimal(achieved) / Decimal(total) * 100).quantize(Decimal("0.01")),
            }
        )
    return top_n(
        entries,
        metric=lambda entry: entry["achievement_rate"],
        limit=limit,
        tie_key=lambda entry: str(entry["employee_id"]),
    )
