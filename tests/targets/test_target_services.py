import uuid
from decimal import Decimal

import pytest

from core.errors import ApiError, NotFoundError
from targets.models import EmployeeTarget
from targets.services import get_target_stats, get_top_performers, update_target_progress


def _target(employee, target_type=EmployeeTarget.TargetType.CALLS, month="2024-02", target_value="100", current_value="0"):
    return EmployeeTarget.objects.create(
        employee=employee,
        month=month,
        target_type=target_type,
        target_value=Decimal(target_value),
        current_value=Decimal(current_value),
    )


@pytest.mark.django_db
def test_status_is_derived_on_save_not_trusted(sales_user):
    target = EmployeeTarget(
        employee=sales_user,
        month="2024-02",
        target_type=EmployeeTarget.TargetType.CLIENTS,
        target_value=Decimal("10"),
        current_value=Decimal("10"),
        status=EmployeeTarget.Status.PENDING,
    )
    target.save()

    target.refresh_from_db()
    assert target.status == EmployeeTarget.Status.ACHIEVED


@pytest.mark.django_db
def test_update_target_progress_recomputes_status(sales_user):
    target = _target(sales_user)

    updated = update_target_progress(target.pk, Decimal("85"))

    target.refresh_from_db()
    assert updated.status == EmployeeTarget.Status.IN_PROGRESS
    assert target.status == EmployeeTarget.Status.IN_PROGRESS
    assert target.current_value == Decimal("85")
    assert target.progress == Decimal("85.00")


@pytest.mark.django_db
def test_update_target_progress_with_zero_target(sales_user):
    target = _target(sales_user, target_value="0")

    assert update_target_progress(target.pk, Decimal("0")).status == EmployeeTarget.Status.PENDING
    assert update_target_progress(target.pk, Decimal("2")).status == EmployeeTarget.Status.ACHIEVED


@pytest.mark.django_db
def test_update_target_progress_rejects_negative_values(sales_user):
    target = _target(sales_user)

    with pytest.raises(ApiError) as excinfo:
        update_target_progress(target.pk, Decimal("-1"))
    assert excinfo.value.code == "23514"


@pytest.mark.django_db
def test_update_target_progress_unknown_target():
    with pytest.raises(NotFoundError):
        update_target_progress(uuid.uuid4(), Decimal("1"))


@pytest.mark.django_db
def test_target_stats(sales_user, other_sales_user):
    _target(sales_user, EmployeeTarget.TargetType.CALLS, current_value="100")
    _target(sales_user, EmployeeTarget.TargetType.CLIENTS, current_value="90")
    _target(sales_user, EmployeeTarget.TargetType.DEPOSITS, current_value="10")
    _target(other_sales_user, EmployeeTarget.TargetType.CALLS, month="2024-03", current_value="100")

    stats = get_target_stats(employee_id=sales_user.pk)

    assert stats == {
        "total": 3,
        "achieved": 1,
        "in_progress": 1,
        "pending": 1,
        "achievement_rate": Decimal("33.33"),
    }
    assert get_target_stats(month="2024-03")["achievement_rate"] == Decimal("100.00")
    assert get_target_stats(month="2030-01")["achievement_rate"] == Decimal("0.00")


@pytest.mark.django_db
def test_top_performers_ranked_by_achievement_rate(sales_user, other_sales_user):
    _target(sales_user, EmployeeTarget.TargetType.CALLS, current_value="100")
    _target(sales_user, EmployeeTarget.TargetType.CLIENTS, current_value="0")
    _target(other_sales_user, EmployeeTarget.TargetType.CALLS, current_value="100")

    ranked = get_top_performers(month="2024-02")

    assert [entry["employee_id"] for entry in ranked] == [other_sales_user.pk, sales_user.pk]
    assert ranked[0]["achievement_rate"] == Decimal("100.00")
    assert ranked[1]["achieved_count"] == 1
    assert ranked[1]["email"] == "sales@test.com"
    assert len(get_top_performers(month="2024-02", limit=1)) == 1
