from datetime import date
from decimal import Decimal

import pytest

from agenda.models import MarketingPoster, Meeting
from agenda.services import build_month_calendar
from clients.models import Client, ClientDeposit, WithdrawalSchedule


@pytest.mark.django_db
def test_month_calendar_merges_all_sources(deposit):
    WithdrawalSchedule.objects.create(deposit=deposit, due_date=date(2024, 2, 5), amount=Decimal("400.00"))
    WithdrawalSchedule.objects.create(deposit=deposit, due_date=date(2024, 3, 5), amount=Decimal("400.00"))
    Meeting.objects.create(title="Comite d'investissement", meeting_date=date(2024, 2, 12))
    MarketingPoster.objects.create(title="Campagne printemps", poster_date=date(2024, 2, 20))

    events = build_month_calendar(2024, 2, today=date(2024, 2, 10))

    assert [event.type for event in events] == ["withdraw", "deposit", "meeting", "poster"]
    withdraw, projected, meeting, poster = events
    assert withdraw.status == "late"
    assert projected.date == date(2024, 2, 29)
    assert meeting.responsible_employee == "Non precise"
    assert poster.title == "Campagne printemps"


@pytest.mark.django_db
def test_month_calendar_skips_closed_and_future_deposits(deposit):
    deposit.status = ClientDeposit.Status.COMPLETED
    deposit.save(update_fields=["status", "updated_at"])
    ClientDeposit.objects.create(
        client=deposit.client,
        deposit_number="DEP-FUTURE",
        amount=Decimal("2000.00"),
        deposit_date=date(2024, 6, 1),
    )

    assert build_month_calendar(2024, 2, today=date(2024, 2, 1)) == []


@pytest.mark.django_db
def test_month_calendar_narrowed_to_one_client(deposit):
    other = Client.objects.create(code="CL-0100", name="Hany Magdy")
    ClientDeposit.objects.create(
        client=other,
        deposit_number="DEP-0100",
        amount=Decimal("3000.00"),
        deposit_date=date(2024, 1, 10),
    )
    Meeting.objects.create(title="Point hebdomadaire", meeting_date=date(2024, 2, 2), responsible_employee="Sara Hassan")

    events = build_month_calendar(2024, 2, client_id=other.pk, today=date(2024, 2, 1))

    assert [(event.type, event.client) for event in events] == [("deposit", "Hany Magdy"), ("meeting", None)]
    assert events[0].date == date(2024, 2, 10)
