"""Service functions for the dashboard.

These functions run the reads and hand the rows to the pure helpers in
:mod:`reports.aggregation`, so views stay thin and the arithmetic can be
tested on its own. Every function is all-or-nothing: a failed read raises
:class:`core.errors.ApiError` and no partial figures are returned.
"""
import logging
from datetime import date
from decimal import Decimal

from django.conf import settings
from django.db.models import DecimalField, F, Sum, Value
from django.db.models.functions import Coalesce
from django.utils import timezone

from core.errors import store_operation
from core.periods import shift_month, start_of_day

from .aggregation import compute_dashboard_stats, rank_employees_by_investments

logger = logging.getLogger("investdesk")

ZERO = Decimal("0.00")
UNKNOWN_CLIENT = "Client inconnu"


def _money_total(qs, field="amount"):
    return qs.aggregate(
        total=Coalesce(
            Sum(field),
            Value(ZERO),
            output_field=DecimalField(max_digits=15, decimal_places=2),
        )
    )["total"]


# ---------------------------------------------------------------------------
# Dashboard KPIs
# ---------------------------------------------------------------------------

@store_operation("Impossible de charger les statistiques du tableau de bord.")
def get_dashboard_stats(now=None):
    """Head-line figures of the dashboard and their change over one month.

    Returns
    -------
    reports.aggregation.DashboardStats
    """
    from accounts.models import User
    from clients.models import Client, ClientDeposit
    from commissions.services import total_for_period

    now = now or timezone.now()
    today = timezone.localtime(now).date()

    profiles = list(User.objects.filter(is_active=True).values("is_active", created_at=F("date_joined")))
    clients = list(Client.objects.values("status", "created_at"))
    deposits = list(ClientDeposit.objects.values("amount", "created_at"))

    return compute_dashboard_stats(
        profiles,
        clients,
        deposits,
        now=now,
        monthly_commissions=total_for_period(today.month, today.year),
    )


@store_operation("Impossible de charger la performance du mois.")
def get_monthly_performance(today=None) -> dict:
    """Activity since the first day of the current month.

    Completed withdrawals are reported both as ``profits_paid`` and
    ``withdrawals``: every payout made to a client is a profit payout.
    """
    from clients.models import Client, ClientDeposit, WithdrawalSchedule

    today = today or date.today()
    month_start = today.replace(day=1)
    since = start_of_day(month_start)

    paid_out = _money_total(
        WithdrawalSchedule.objects.filter(
            status=WithdrawalSchedule.Status.COMPLETED,
            due_date__gte=month_start,
        )
    )
    return {
        "new_clients": Client.objects.filter(created_at__gte=since).count(),
        "new_investments": _money_total(ClientDeposit.objects.filter(created_at__gte=since)),
        "profits_paid": paid_out,
        "withdrawals": paid_out,
    }


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------

@store_operation("Impossible de charger le classement des employes.")
def get_top_employees(limit=None) -> list:
    """Employees ranked by the total invested by their assigned clients."""
    from accounts.services import attach_employee_details
    from clients.models import Client, ClientDeposit

    limit = settings.DASHBOARD_TOP_EMPLOYEES_LIMIT if limit is None else limit
    clients = Client.objects.filter(assigned_to__isnull=False).values("id", "assigned_to_id")
    deposits = ClientDeposit.objects.filter(client__assigned_to__isnull=False).values("client_id", "amount")

    ranked = rank_employees_by_investments(clients, deposits, limit)
    return attach_employee_details(ranked)


@store_operation("Impossible de charger les derniers clients.")
def get_recent_clients(limit=None):
    from clients.models import Client

    limit = settings.DASHBOARD_RECENT_CLIENTS_LIMIT if limit is None else limit
    return list(Client.objects.select_related("assigned_to").order_by("-created_at")[:limit])


@store_operation("Impossible de charger les retraits a venir.")
def get_upcoming_withdrawals(limit=10, today=None) -> list:
    """``upcoming`` payouts due between today and one month ahead."""
    from clients.models import WithdrawalSchedule

    today = today or date.today()
    schedules = (
        WithdrawalSchedule.objects.filter(
            status=WithdrawalSchedule.Status.UPCOMING,
            due_date__gte=today,
            due_date__lte=shift_month(today, 1),
        )
        .select_related("deposit", "deposit__client")
        .order_by("due_date")[:limit]
    )
    rows = []
    for schedule in schedules:
        client = schedule.deposit.client if schedule.deposit_id else None
        rows.append(
            {
                "id": schedule.pk,
                "client_name": client.name if client else UNKNOWN_CLIENT,
                "amount": schedule.amount,
                "scheduled_date": schedule.due_date,
                "status": schedule.status,
                "deposit_id": schedule.deposit_id,
            }
        )
    return rows
