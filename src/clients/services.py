"""Business logic for deposits and their withdrawal schedules.

Status-changing operations lock the affected row with ``select_for_update()``
so two back-office users cannot settle the same payout twice.
"""
import logging
from datetime import date, timedelta
from decimal import Decimal

from django.conf import settings
from django.db import transaction
from django.db.models import Count, DecimalField, Q, Sum, Value
from django.db.models.functions import Coalesce

from core.errors import ApiError, InvalidTransitionError, store_operation

from .models import ClientDeposit, WithdrawalSchedule

logger = logging.getLogger("investdesk")

ZERO = Decimal("0.00")
CENT = Decimal("0.01")


def _format_money(value) -> str:
    return str(Decimal(value).quantize(CENT))


def _money_sum(field, **filter_kwargs):
    condition = Q(**filter_kwargs) if filter_kwargs else None
    return Coalesce(
        Sum(field, filter=condition),
        Value(ZERO),
        output_field=DecimalField(max_digits=15, decimal_places=2),
    )


# ---------------------------------------------------------------------------
# Schedule lifecycle
# ---------------------------------------------------------------------------

@store_operation("Impossible de planifier le retrait.")
@transaction.atomic
def schedule_withdrawal(deposit, due_date, amount, notes="") -> WithdrawalSchedule:
    """Plan a payout on *deposit*.

    Parameters
    ----------
    deposit : ClientDeposit
        Deposit the payout is drawn from.
    due_date : date
        Date the client should be paid.
    amount : Decimal
        Payout amount; must be positive.

    Returns
    -------
    WithdrawalSchedule
        The new ``upcoming`` schedule.

    Raises
    ------
    ApiError
        When the amount is not positive, the deposit is closed, or the
        schedules of the deposit would add up to more than its principal.
    """
    if amount is None or amount <= 0:
        raise ApiError("Le montant du retrait doit etre positif.", code="23514")

    locked_deposit = ClientDeposit.objects.select_for_update().get(pk=deposit.pk)
    if locked_deposit.status in (ClientDeposit.Status.CANCELLED, ClientDeposit.Status.COMPLETED):
        raise ApiError("Ce depot est cloture : aucun retrait ne peut etre planifie.", code="23514")

    already_scheduled = locked_deposit.withdrawal_schedules.aggregate(
        total=_money_sum("amount"),
    )["total"]
    if already_scheduled + amount > locked_deposit.amount:
        raise ApiError(
            "Le total des retraits planifies depasse le montant du depot.",
            code="23514",
            details={
                "deposit_amount": _format_money(locked_deposit.amount),
                "already_scheduled": _format_money(already_scheduled),
                "requested": _format_money(amount),
            },
        )

    schedule = WithdrawalSchedule.objects.create(
        deposit=locked_deposit,
        due_date=due_date,
        amount=amount,
        notes=notes,
    )
    logger.info(
        "Withdrawal %s scheduled on deposit %s for %s (due %s)",
        schedule.pk,
        locked_deposit.deposit_number,
        amount,
        due_date,
    )
    return schedule


@store_operation("Impossible de valider le retrait.")
@transaction.atomic
def mark_withdrawal_completed(schedule_id, paid_date=None) -> WithdrawalSchedule:
    """Record that the payout was made; ``paid_date`` defaults to today."""
    schedule = WithdrawalSchedule.objects.select_for_update().get(pk=schedule_id)
    if schedule.status == WithdrawalSchedule.Status.COMPLETED:
        raise InvalidTransitionError(
            "Ce retrait est deja marque comme effectue.",
            details={"completed_date": str(schedule.completed_date)},
        )

    schedule.status = WithdrawalSchedule.Status.COMPLETED
    schedule.completed_date = paid_date or date.today()
    schedule.save(update_fields=["status", "completed_date", "updated_at"])
    logger.info("Withdrawal %s completed on %s", schedule.pk, schedule.completed_date)
    return schedule


def flag_overdue(today=None) -> int:
    """Move ``upcoming`` schedules whose due date has passed to ``overdue``."""
    today = today or date.today()
    return WithdrawalSchedule.objects.filter(
        status=WithdrawalSchedule.Status.UPCOMING,
        due_date__lt=today,
    ).update(status=WithdrawalSchedule.Status.OVERDUE)


# ---------------------------------------------------------------------------
# Listings
# ---------------------------------------------------------------------------

@store_operation("Impossible de charger les retraits a venir.")
def list_upcoming_withdrawals(today=None, days=None):
    """``upcoming`` schedules due from *today* to *days* ahead, soonest first."""
    today = today or date.today()
    days = settings.UPCOMING_WITHDRAWALS_DAYS if days is None else days
    return list(
        WithdrawalSchedule.objects.filter(
            status=WithdrawalSchedule.Status.UPCOMING,
            due_date__gte=today,
            due_date__lte=today + timedelta(days=days),
        )
        .select_related("deposit", "deposit__client")
        .order_by("due_date")
    )


@store_operation("Impossible de charger les retraits en retard.")
def list_overdue_withdrawals(today=None):
    """Unpaid schedules whose due date is before *today*, oldest first."""
    today = today or date.today()
    return list(
        WithdrawalSchedule.objects.filter(
            status__in=[WithdrawalSchedule.Status.UPCOMING, WithdrawalSchedule.Status.OVERDUE],
            due_date__lt=today,
        )
        .select_related("deposit", "deposit__client")
        .order_by("due_date")
    )


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

@store_operation("Impossible de charger les statistiques des retraits.")
def get_withdrawal_stats(today=None) -> dict:
    today = today or date.today()
    Status = WithdrawalSchedule.Status
    agg = WithdrawalSchedule.objects.aggregate(
        total=Count("id"),
        pending=Count("id", filter=Q(status=Status.UPCOMING)),
        completed=Count("id", filter=Q(status=Status.COMPLETED)),
        overdue=Count(
            "id",
            filter=Q(status=Status.OVERDUE) | Q(status=Status.UPCOMING, due_date__lt=today),
        ),
        total_amount=_money_sum("amount"),
        pending_amount=_money_sum("amount", status=Status.UPCOMING),
    )
    return agg


def deposit_withdrawal_summary(deposit) -> dict:
    """Totals of a deposit's schedules by status, and what is left to pay out.

    ``available_amount`` is the principal minus completed payouts, never
    below zero.
    """
    Status = WithdrawalSchedule.Status
    agg = deposit.withdrawal_schedules.aggregate(
        total_scheduled=_money_sum("amount"),
        total_completed=_money_sum("amount", status=Status.COMPLETED),
        total_upcoming=_money_sum("amount", status=Status.UPCOMING),
        total_overdue=_money_sum("amount", status=Status.OVERDUE),
    )
    agg["deposit_amount"] = deposit.amount
    agg["available_amount"] = max(deposit.amount - agg["total_completed"], ZERO)
    return agg
