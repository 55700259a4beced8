from datetime import date, timedelta
from decimal import Decimal

import pytest

from agenda.models import Meeting
from clients.models import WithdrawalSchedule


@pytest.mark.django_db
def test_dashboard_requires_authentication(api_client):
    response = api_client.get("/api/v1/dashboard/stats/")

    assert response.status_code == 401


@pytest.mark.django_db
def test_dashboard_stats_payload(sales_api_client, deposit):
    response = sales_api_client.get("/api/v1/dashboard/stats/")

    assert response.status_code == 200
    assert response.data["total_clients"] == 1
    assert response.data["total_investments"] == "10000.00"
    assert response.data["investments_change"] == 0
    assert set(response.data) == {
        "total_employees",
        "total_clients",
        "total_investments",
        "monthly_commissions",
        "late_clients",
        "employees_change",
        "clients_change",
        "investments_change",
    }


@pytest.mark.django_db
def test_monthly_performance_payload(sales_api_client, deposit):
    response = sales_api_client.get("/api/v1/dashboard/monthly-performance/")

    assert response.status_code == 200
    assert response.data["new_clients"] == 1
    assert response.data["new_investments"] == "10000.00"


@pytest.mark.django_db
def test_top_employees_and_recent_clients(sales_api_client, sales_user, deposit):
    top = sales_api_client.get("/api/v1/dashboard/top-employees/", {"limit": 3})
    recent = sales_api_client.get("/api/v1/dashboard/recent-clients/", {"limit": "abc"})

    assert top.status_code == 200
    assert top.data[0]["employee_id"] == str(sales_user.pk)
    assert top.data[0]["total_investments"] == "10000.00"
    assert recent.status_code == 200
    assert recent.data[0]["code"] == "CL-0001"
    assert recent.data[0]["assigned_to_name"] == "Sara Hassan"


@pytest.mark.django_db
def test_upcoming_withdrawals_endpoint(sales_api_client, deposit):
    schedule = WithdrawalSchedule.objects.create(
        deposit=deposit,
        due_date=date.today() + timedelta(days=3),
        amount=Decimal("750.00"),
    )

    response = sales_api_client.get("/api/v1/dashboard/upcoming-withdrawals/")

    assert response.status_code == 200
    assert response.data[0]["id"] == str(schedule.pk)
    assert response.data[0]["client_name"] == "Mona Adel"
    assert response.data[0]["amount"] == "750.00"


@pytest.mark.django_db
def test_calendar_endpoint_filters_and_summarizes(sales_api_client, deposit):
    WithdrawalSchedule.objects.create(deposit=deposit, due_date=date(2024, 2, 5), amount=Decimal("400.00"))
    Meeting.objects.create(title="Comite", meeting_date=date(2024, 2, 7))

    response = sales_api_client.get("/api/v1/calendar/", {"year": 2024, "month": 2})
    filtered = sales_api_client.get("/api/v1/calendar/", {"year": 2024, "month": 2, "type": "deposit"})

    assert response.status_code == 200
    assert [event["type"] for event in response.data["events"]] == ["withdraw", "deposit", "meeting"]
    assert response.data["summary"]["total"] == 3
    assert response.data["summary"]["withdrawals_due"] == "400.00"
    assert "description" not in response.data["events"][2]

    assert [event["date"] for event in filtered.data["events"]] == ["2024-02-29"]
    assert filtered.data["events"][0]["id"] == f"contract-{deposit.pk}"


@pytest.mark.django_db
def test_calendar_rejects_invalid_month(sales_api_client):
    response = sales_api_client.get("/api/v1/calendar/", {"year": 2024, "month": 13})

    assert response.status_code == 400


@pytest.mark.django_db
def test_api_responses_are_never_cached(sales_api_client):
    response = sales_api_client.get("/api/v1/dashboard/monthly-performance/")

    assert "no-store" in response["Cache-Control"]
    assert response["Pragma"] == "no-cache"
