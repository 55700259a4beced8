from datetime import date
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from accounts.models import User, UserRole
from clients.models import Client, ClientDeposit


@pytest.fixture
def admin_user(db):
    user = User.objects.create_user(
        email="admin@test.com",
        password="testpass123",
        first_name="Admin",
        last_name="User",
        department=User.Department.ADMIN,
    )
    UserRole.objects.create(user=user, role=UserRole.Role.ADMIN)
    return user


@pytest.fixture
def sales_user(db):
    user = User.objects.create_user(
        email="sales@test.com",
        password="testpass123",
        first_name="Sara",
        last_name="Hassan",
        department=User.Department.TELE_SALES,
    )
    UserRole.objects.create(user=user, role=UserRole.Role.TELE_SALES)
    return user


@pytest.fixture
def other_sales_user(db):
    user = User.objects.create_user(
        email="omar@test.com",
        password="testpass123",
        first_name="Omar",
        last_name="Farid",
        department=User.Department.TELE_SALES,
    )
    UserRole.objects.create(user=user, role=UserRole.Role.TELE_SALES)
    return user


@pytest.fixture
def client_record(db, sales_user):
    return Client.objects.create(
        code="CL-0001",
        name="Mona Adel",
        phone="+201000000001",
        email="mona.adel@test.com",
        assigned_to=sales_user,
    )


@pytest.fixture
def deposit(client_record):
    return ClientDeposit.objects.create(
        client=client_record,
        deposit_number="DEP-0001",
        amount=Decimal("10000.00"),
        deposit_date=date(2024, 1, 31),
        profit_rate=Decimal("12.50"),
    )


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_api_client(api_client, admin_user):
    api_client.force_authenticate(user=admin_user)
    return api_client


@pytest.fixture
def sales_api_client(sales_user):
    api_client = APIClient()
    api_client.force_authenticate(user=sales_user)
    return api_client
