"""Service functions for employee targets."""
import logging
from decimal import Decimal

from django.conf import settings
from django.db import transaction
from django.db.models import Count, Q

from core.errors import ApiError, store_operation

from .models import EmployeeTarget

logger = logging.getLogger("investdesk")


# ---------------------------------------------------------------------------
# Progress updates
# ---------------------------------------------------------------------------

@store_operation("Impossible de mettre a jour l'objectif.")
@transaction.atomic
def update_target_progress(target_id, current_value) -> EmployeeTarget:
    """Store a new ``current_value`` and the status derived from it.

    The target row is locked for the whole update, so two concurrent
    updates are serialized and the stored status always matches the stored
    value.
    """
    if current_value is None or current_value < 0:
        raise ApiError("La valeur actuelle doit etre positive ou nulle.", code="23514")

    target = EmployeeTarget.objects.select_for_update().get(pk=target_id)
    previous_status = target.status
    target.current_value = current_value
    target.save(update_fields=["current_value", "updated_at"])

    if target.status != previous_status:
        logger.info(
            "Target %s for employee %s moved %s -> %s",
            target.pk,
            target.employee_id,
            previous_status,
            target.status,
        )
    return target


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

@store_operation("Impossible de charger les statistiques des objectifs.")
def get_target_stats(employee_id=None, month=None) -> dict:
    qs = EmployeeTarget.objects.all()
    if employee_id:
        qs = qs.filter(employee_id=employee_id)
    if month:
        qs = qs.filter(month=month)

    Status = EmployeeTarget.Status
    stats = qs.aggregate(
        total=Count("id"),
        achieved=Count("id", filter=Q(status=Status.ACHIEVED)),
        in_progress=Count("id", filter=Q(status=Status.IN_PROGRESS)),
        pending=Count("id", filter=Q(status=Status.PENDING)),
    )
    if stats["total"]:
        rate = Decimal(stats["achieved"]) / Decimal(stats["total"]) * 100
        stats["achievement_rate"] = rate.quantize(Decimal("0.01"))
    else:
        stats["achievement_rate"] = Decimal("0.00")
    return stats


@store_operation("Impossible de charger le classement des objectifs.")
def get_top_performers(month=None, limit=None) -> list:
    """Employees with the highest share of achieved targets."""
    from accounts.services import attach_employee_details
    from reports.aggregation import rank_employees_by_achievement

    limit = settings.TOP_PERFORMERS_LIMIT if limit is None else limit
    qs = EmployeeTarget.objects.all()
    if month:
        qs = qs.filter(month=month)

    ranked = rank_employees_by_achievement(qs.values("employee_id", "status"), limit)
    return attach_employee_details(ranked)
