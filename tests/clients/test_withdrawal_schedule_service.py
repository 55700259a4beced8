import uuid
from datetime import date, timedelta
from decimal import Decimal

import pytest

from clients.models import ClientDeposit, WithdrawalSchedule
from clients.services import (
    deposit_withdrawal_summary,
    flag_overdue,
    get_withdrawal_stats,
    list_overdue_withdrawals,
    list_upcoming_withdrawals,
    mark_withdrawal_completed,
    schedule_withdrawal,
)
from clients.tasks import flag_overdue_withdrawals
from core.errors import ApiError, InvalidTransitionError, NotFoundError


@pytest.mark.django_db
def test_schedule_withdrawal_creates_upcoming_schedule(deposit):
    schedule = schedule_withdrawal(deposit, date(2024, 2, 29), Decimal("1250.00"), notes="Premier versement")

    assert schedule.status == WithdrawalSchedule.Status.UPCOMING
    assert schedule.deposit_id == deposit.pk
    assert schedule.notes == "Premier versement"


@pytest.mark.django_db
def test_schedule_withdrawal_cannot_exceed_principal(deposit):
    schedule_withdrawal(deposit, date(2024, 2, 29), Decimal("6000.00"))

    with pytest.raises(ApiError) as excinfo:
        schedule_withdrawal(deposit, date(2024, 3, 31), Decimal("4000.01"))

    assert excinfo.value.code == "23514"
    assert excinfo.value.details["already_scheduled"] == "6000.00"
    assert deposit.withdrawal_schedules.count() == 1


@pytest.mark.django_db
def test_schedule_overflow_details_keep_two_decimals(deposit):
    WithdrawalSchedule.objects.create(deposit=deposit, due_date=date(2024, 2, 29), amount=Decimal("9000"))

    with pytest.raises(ApiError) as excinfo:
        schedule_withdrawal(deposit, date(2024, 3, 31), Decimal("1001"))

    assert excinfo.value.details == {
        "deposit_amount": "10000.00",
        "already_scheduled": "9000.00",
        "requested": "1001.00",
    }


@pytest.mark.django_db
@pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5")])
def test_schedule_withdrawal_rejects_non_positive_amounts(deposit, amount):
    with pytest.raises(ApiError):
        schedule_withdrawal(deposit, date(2024, 2, 29), amount)


@pytest.mark.django_db
def test_schedule_withdrawal_refuses_closed_deposit(deposit):
    deposit.status = ClientDeposit.Status.CANCELLED
    deposit.save(update_fields=["status", "updated_at"])

    with pytest.raises(ApiError):
        schedule_withdrawal(deposit, date(2024, 2, 29), Decimal("100.00"))


@pytest.mark.django_db
def test_mark_withdrawal_completed_only_once(deposit):
    schedule = schedule_withdrawal(deposit, date(2024, 2, 29), Decimal("100.00"))

    completed = mark_withdrawal_completed(schedule.pk, paid_date=date(2024, 3, 1))
    assert completed.status == WithdrawalSchedule.Status.COMPLETED
    assert completed.completed_date == date(2024, 3, 1)

    with pytest.raises(InvalidTransitionError):
        mark_withdrawal_completed(schedule.pk)


@pytest.mark.django_db
def test_mark_unknown_withdrawal_completed():
    with pytest.raises(NotFoundError):
        mark_withdrawal_completed(uuid.uuid4())


@pytest.mark.django_db
def test_flag_overdue_and_task(deposit):
    today = date.today()
    past = WithdrawalSchedule.objects.create(deposit=deposit, due_date=today - timedelta(days=2), amount=Decimal("100"))
    WithdrawalSchedule.objects.create(deposit=deposit, due_date=today + timedelta(days=2), amount=Decimal("100"))
    WithdrawalSchedule.objects.create(
        deposit=deposit,
        due_date=today - timedelta(days=5),
        amount=Decimal("100"),
        status=WithdrawalSchedule.Status.COMPLETED,
    )

    assert flag_overdue_withdrawals.delay().get() == 1
    past.refresh_from_db()
    assert past.status == WithdrawalSchedule.Status.OVERDUE
    assert flag_overdue(today) == 0


@pytest.mark.django_db
def test_upcoming_and_overdue_listings(deposit):
    today = date(2024, 3, 10)
    late = WithdrawalSchedule.objects.create(deposit=deposit, due_date=date(2024, 3, 1), amount=Decimal("100"))
    soon = WithdrawalSchedule.objects.create(deposit=deposit, due_date=date(2024, 3, 20), amount=Decimal("100"))
    WithdrawalSchedule.objects.create(deposit=deposit, due_date=date(2024, 6, 1), amount=Decimal("100"))

    assert [s.pk for s in list_upcoming_withdrawals(today=today, days=30)] == [soon.pk]
    assert [s.pk for s in list_overdue_withdrawals(today=today)] == [late.pk]


@pytest.mark.django_db
def test_withdrawal_stats(deposit):
    today = date(2024, 3, 10)
    WithdrawalSchedule.objects.create(deposit=deposit, due_date=date(2024, 3, 1), amount=Decimal("100"))
    WithdrawalSchedule.objects.create(deposit=deposit, due_date=date(2024, 3, 20), amount=Decimal("200"))
    WithdrawalSchedule.objects.create(
        deposit=deposit,
        due_date=date(2024, 2, 1),
        amount=Decimal("300"),
        status=WithdrawalSchedule.Status.COMPLETED,
    )

    stats = get_withdrawal_stats(today=today)

    assert stats["total"] == 3
    assert stats["pending"] == 2
    assert stats["completed"] == 1
    assert stats["overdue"] == 1
    assert stats["total_amount"] == Decimal("600")
    assert stats["pending_amount"] == Decimal("300")


@pytest.mark.django_db
def test_deposit_withdrawal_summary(deposit):
    WithdrawalSchedule.objects.create(
        deposit=deposit,
        due_date=date(2024, 2, 1),
        amount=Decimal("1500"),
        status=WithdrawalSchedule.Status.COMPLETED,
    )
    WithdrawalSchedule.objects.create(deposit=deposit, due_date=date(2024, 3, 1), amount=Decimal("500"))
    WithdrawalSchedule.objects.create(
        deposit=deposit,
        due_date=date(2024, 1, 1),
        amount=Decimal("250"),
        status=WithdrawalSchedule.Status.OVERDUE,
    )

    summary = deposit_withdrawal_summary(deposit)

    assert summary["total_scheduled"] == Decimal("2250")
    assert summary["total_completed"] == Decimal("1500")
    assert summary["total_upcoming"] == Decimal("500")
    assert summary["total_overdue"] == Decimal("250")
    assert summary["available_amount"] == Decimal("8500")
