"""Commission calculation and approval workflow.

A commission moves ``pending -> approved -> paid``. Each transition locks
the row with ``select_for_update()`` and checks the current status, so two
managers cannot approve or pay the same commission twice.
"""
import logging
from decimal import ROUND_HALF_UP, Decimal

from django.db import transaction
from django.db.models import Count, DecimalField, Q, Sum, Value
from django.db.models.functions import Coalesce
from django.utils import timezone

from core.errors import ApiError, InvalidTransitionError, store_operation
from core.periods import month_bounds

from .models import EmployeeCommission

logger = logging.getLogger("investdesk")

ZERO = Decimal("0.00")
CENT = Decimal("0.01")


def commission_amount(total_investments, rate) -> Decimal:
    """``total_investments * rate / 100`` rounded half-up to the cent."""
    return (Decimal(str(total_investments)) * Decimal(str(rate)) / 100).quantize(CENT, rounding=ROUND_HALF_UP)


def _check_period(month, year):
    if not 1 <= int(month) <= 12:
        raise ApiError("Le mois doit etre compris entre 1 et 12.", code="22003")
    if int(year) < 2000:
        raise ApiError("Annee invalide.", code="22003")


# ---------------------------------------------------------------------------
# Calculation
# ---------------------------------------------------------------------------

@store_operation("Impossible de calculer la commission.")
def calculate_commission(employee_id, month, year, rate) -> dict:
    """Commission earned by an employee on deposits dated in ``month/year``.

    Only deposits of clients currently assigned to the employee count;
    cancelled deposits are ignored.

    Returns
    -------
    dict
        ``total_clients`` (distinct clients), ``total_investments``,
        ``commission_rate`` and ``commission_amount``.
    """
    from clients.models import ClientDeposit

    _check_period(month, year)
    rate = Decimal(str(rate))
    if rate < 0 or rate > 100:
        raise ApiError("Le taux de commission doit etre compris entre 0 et 100.", code="22003")

    first_day, last_day = month_bounds(int(year), int(month))
    agg = (
        ClientDeposit.objects.filter(
            client__assigned_to_id=employee_id,
            deposit_date__gte=first_day,
            deposit_date__lte=last_day,
        )
        .exclude(status=ClientDeposit.Status.CANCELLED)
        .aggregate(
            total_clients=Count("client_id", distinct=True),
            total_investments=Coalesce(
                Sum("amount"),
                Value(ZERO),
                output_field=DecimalField(max_digits=15, decimal_places=2),
            ),
        )
    )
    return {
        "employee_id": employee_id,
        "period_month": int(month),
        "period_year": int(year),
        "total_clients": agg["total_clients"],
        "total_investments": agg["total_investments"],
        "commission_rate": rate,
        "commission_amount": commission_amount(agg["total_investments"], rate),
    }


@store_operation("Impossible d'enregistrer la commission.")
@transaction.atomic
def generate_commission(employee_id, month, year, rate, notes="") -> EmployeeCommission:
    """Persist the calculated commission as ``pending``.

    Recalculating a still-pending commission overwrites it; an approved or
    paid commission is left untouched and an error is raised.
    """
    existing = (
        EmployeeCommission.objects.select_for_update()
        .filter(employee_id=employee_id, period_month=month, period_year=year)
        .first()
    )
    if existing is not None and existing.status not in (
        EmployeeCommission.Status.PENDING,
        EmployeeCommission.Status.CANCELLED,
    ):
        raise InvalidTransitionError(
            "Cette commission a deja ete approuvee ou payee.",
            details={"status": existing.status},
        )

    figures = calculate_commission(employee_id, month, year, rate)
    values = {
        "total_clients": figures["total_clients"],
        "total_investments": figures["total_investments"],
        "commission_rate": figures["commission_rate"],
        "commission_amount": figures["commission_amount"],
        "status": EmployeeCommission.Status.PENDING,
        "notes": notes,
    }
    if existing is None:
        commission = EmployeeCommission.objects.create(
            employee_id=employee_id,
            period_month=figures["period_month"],
            period_year=figures["period_year"],
            **values,
        )
    else:
        for field, value in values.items():
            setattr(existing, field, value)
        existing.save()
        commission = existing

    logger.info(
        "Commission %s for employee %s %02d/%s: %s",
        commission.pk,
        employee_id,
        commission.period_month,
        commission.period_year,
        commission.commission_amount,
    )
    return commission


# ---------------------------------------------------------------------------
# Workflow
# ---------------------------------------------------------------------------

def _transition(commission_id, *, expected, target, actor, by_field, at_field, message):
    commission = EmployeeCommission.objects.select_for_update().get(pk=commission_id)
    if commission.status != expected:
        raise InvalidTransitionError(message, details={"status": commission.status})

    commission.status = target
    setattr(commission, by_field, actor)
    setattr(commission, at_field, timezone.now())
    commission.save(update_fields=["status", by_field, at_field, "updated_at"])
    logger.info(
        "Commission %s %s -> %s by %s",
        commission.pk,
        expected,
        target,
        getattr(actor, "email", None),
    )
    return commission


@store_operation("Impossible d'approuver la commission.")
@transaction.atomic
def approve_commission(commission_id, actor) -> EmployeeCommission:
    return _transition(
        commission_id,
        expected=EmployeeCommission.Status.PENDING,
        target=EmployeeCommission.Status.APPROVED,
        actor=actor,
        by_field="approved_by",
        at_field="approved_at",
        message="Seule une commission en attente peut etre approuvee.",
    )


@store_operation("Impossible de marquer la commission comme payee.")
@transaction.atomic
def mark_commission_paid(commission_id, actor) -> EmployeeCommission:
    return _transition(
        commission_id,
        expected=EmployeeCommission.Status.APPROVED,
        target=EmployeeCommission.Status.PAID,
        actor=actor,
        by_field="paid_by",
        at_field="paid_at",
        message="Seule une commission approuvee peut etre payee.",
    )


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

@store_operation("Impossible de charger les statistiques des commissions.")
def get_commission_stats(employee_id=None) -> dict:
    qs = EmployeeCommission.objects.all()
    if employee_id:
        qs = qs.filter(employee_id=employee_id)

    aggregates = {}
    for status in (
        EmployeeCommission.Status.PENDING,
        EmployeeCommission.Status.APPROVED,
        EmployeeCommission.Status.PAID,
    ):
        condition = Q(status=status)
        aggregates[f"{status.value}_count"] = Count("id", filter=condition)
        aggregates[f"{status.value}_amount"] = Coalesce(
            Sum("commission_amount", filter=condition),
            Value(ZERO),
            output_field=DecimalField(max_digits=15, decimal_places=2),
        )
    return qs.aggregate(**aggregates)


def total_for_period(month, year) -> Decimal:
    """Commission amount for a period, cancelled commissions excluded."""
    return (
        EmployeeCommission.objects.filter(period_month=month, period_year=year)
        .exclude(status=EmployeeCommission.Status.CANCELLED)
        .aggregate(
            total=Coalesce(
                Sum("commission_amount"),
                Value(ZERO),
                output_field=DecimalField(max_digits=15, decimal_places=2),
            )
        )["total"]
    )
