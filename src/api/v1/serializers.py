"""DRF serializers for API v1."""
from __future__ import annotations

from django.contrib.auth import password_validation
from rest_framework import serializers

from accounts.models import User, UserRole
from agenda.events import EVENT_STATUSES, EVENT_TYPES
from clients.models import Client, ClientDeposit, WithdrawalSchedule
from commissions.models import EmployeeCommission
from targets.models import EmployeeTarget


def _money(**kwargs):
    return serializers.DecimalField(max_digits=15, decimal_places=2, **kwargs)


# ────────────────────────────────────────────────────────────
# Employees
# ────────────────────────────────────────────────────────────

class EmployeeSerializer(serializers.ModelSerializer):
    full_name = serializers.SerializerMethodField()
    roles = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id", "email", "first_name", "last_name", "full_name", "phone",
            "department", "employee_code", "avatar_url", "roles", "is_active",
            "date_joined",
        ]
        read_only_fields = fields

    def get_full_name(self, obj) -> str:
        return obj.get_full_name()

    def get_roles(self, obj) -> list:
        return sorted(obj.role_codes)


class EmployeeCreateSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})
    first_name = serializers.CharField(max_length=150)
    last_name = serializers.CharField(max_length=150)
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True)
    department = serializers.ChoiceField(choices=User.Department.choices, required=False, allow_blank=True)
    employee_code = serializers.CharField(max_length=30, required=False, allow_null=True, allow_blank=True)
    avatar_url = serializers.URLField(required=False, allow_blank=True)
    roles = serializers.ListField(
        child=serializers.ChoiceField(choices=UserRole.Role.choices),
        allow_empty=False,
    )

    def validate_password(self, value):
        password_validation.validate_password(value)
        return value

    def validate_employee_code(self, value):
        return value or None


# ────────────────────────────────────────────────────────────
# Clients, deposits & withdrawals
# ────────────────────────────────────────────────────────────

class ClientSerializer(serializers.ModelSerializer):
    assigned_to_name = serializers.SerializerMethodField()

    class Meta:
        model = Client
        fields = [
            "id", "code", "name", "phone", "email", "status",
            "assigned_to", "assigned_to_name", "created_at",
        ]
        read_only_fields = fields

    def get_assigned_to_name(self, obj) -> str | None:
        if obj.assigned_to is None:
            return None
        return obj.assigned_to.get_full_name() or obj.assigned_to.email


class ClientDepositSerializer(serializers.ModelSerializer):
    client_name = serializers.CharField(source="client.name", read_only=True)

    class Meta:
        model = ClientDeposit
        fields = [
            "id", "client", "client_name", "deposit_number", "amount",
            "deposit_date", "profit_rate", "status", "created_at",
        ]
        read_only_fields = fields


class DepositWithdrawalSummarySerializer(serializers.Serializer):
    deposit_amount = _money()
    total_scheduled = _money()
    total_completed = _money()
    total_upcoming = _money()
    total_overdue = _money()
    available_amount = _money()


class WithdrawalScheduleSerializer(serializers.ModelSerializer):
    deposit_number = serializers.CharField(source="deposit.deposit_number", read_only=True)
    client_name = serializers.CharField(source="deposit.client.name", read_only=True)

    class Meta:
        model = WithdrawalSchedule
        fields = [
            "id", "deposit", "deposit_number", "client_name", "due_date",
            "amount", "status", "completed_date", "notes", "created_at",
        ]
        read_only_fields = ["id", "status", "completed_date", "created_at"]


class WithdrawalCompleteSerializer(serializers.Serializer):
    paid_date = serializers.DateField(required=False, allow_null=True)


class WithdrawalStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    pending = serializers.IntegerField()
    completed = serializers.IntegerField()
    overdue = serializers.IntegerField()
    total_amount = _money()
    pending_amount = _money()


# ────────────────────────────────────────────────────────────
# Dashboard
# ────────────────────────────────────────────────────────────

class DashboardStatsSerializer(serializers.Serializer):
    total_employees = serializers.IntegerField()
    total_clients = serializers.IntegerField()
    total_investments = _money()
    monthly_commissions = _money()
    late_clients = serializers.IntegerField()
    employees_change = serializers.IntegerField()
    clients_change = serializers.IntegerField()
    investments_change = serializers.IntegerField()


class MonthlyPerformanceSerializer(serializers.Serializer):
    new_clients = serializers.IntegerField()
    new_investments = _money()
    profits_paid = _money()
    withdrawals = _money()


class TopEmployeeSerializer(serializers.Serializer):
    employee_id = serializers.UUIDField()
    name = serializers.CharField()
    email = serializers.EmailField()
    avatar_url = serializers.CharField(allow_blank=True)
    clients_count = serializers.IntegerField()
    total_investments = _money()


class UpcomingWithdrawalSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    client_name = serializers.CharField()
    amount = _money()
    scheduled_date = serializers.DateField()
    status = serializers.CharField()
    deposit_id = serializers.UUIDField()


# ────────────────────────────────────────────────────────────
# Calendar
# ────────────────────────────────────────────────────────────

class CalendarQuerySerializer(serializers.Serializer):
    year = serializers.IntegerField(min_value=2000, max_value=2100, required=False)
    month = serializers.IntegerField(min_value=1, max_value=12, required=False)
    type = serializers.ChoiceField(choices=("all", *EVENT_TYPES), required=False)
    status = serializers.ChoiceField(choices=("all", *EVENT_STATUSES), required=False)
    date = serializers.DateField(required=False)
    client = serializers.UUIDField(required=False)


class CalendarEventSerializer(serializers.Serializer):
    id = serializers.CharField()
    date = serializers.DateField()
    type = serializers.CharField()
    status = serializers.CharField(allow_null=True)
    amount = _money(allow_null=True)
    title = serializers.CharField(allow_null=True)
    description = serializers.CharField(allow_null=True)
    client = serializers.CharField(allow_null=True)
    client_code = serializers.CharField(allow_null=True)
    client_phone = serializers.CharField(allow_null=True)
    responsible_employee = serializers.CharField(allow_null=True)
    deposit_id = serializers.CharField(allow_null=True)
    deposit_number = serializers.CharField(allow_null=True)
    deposit_amount = _money(allow_null=True)
    profit_rate = serializers.DecimalField(max_digits=5, decimal_places=2, allow_null=True)
    deposit_date = serializers.DateField(allow_null=True)
    deposit_status = serializers.CharField(allow_null=True)


# ────────────────────────────────────────────────────────────
# Targets
# ────────────────────────────────────────────────────────────

class EmployeeTargetSerializer(serializers.ModelSerializer):
    employee_name = serializers.SerializerMethodField()
    # Uncapped percentage: no digit limit.
    progress = serializers.DecimalField(max_digits=None, decimal_places=2, read_only=True)

    class Meta:
        model = EmployeeTarget
        fields = [
            "id", "employee", "employee_name", "month", "target_type",
            "target_value", "current_value", "status", "progress", "notes",
            "created_at",
        ]
        read_only_fields = ["id", "status", "progress", "created_at"]

    def get_employee_name(self, obj) -> str:
        return obj.employee.get_full_name() or obj.employee.email


class TargetProgressSerializer(serializers.Serializer):
    current_value = serializers.DecimalField(max_digits=15, decimal_places=2, min_value=0)


class TargetStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    achieved = serializers.IntegerField()
    in_progress = serializers.IntegerField()
    pending = serializers.IntegerField()
    achievement_rate = serializers.DecimalField(max_digits=5, decimal_places=2)


class TopPerformerSerializer(serializers.Serializer):
    employee_id = serializers.UUIDField()
    name = serializers.CharField()
    email = serializers.EmailField()
    avatar_url = serializers.CharField(allow_blank=True)
    achieved_count = serializers.IntegerField()
    total_targets = serializers.IntegerField()
    achievement_rate = serializers.DecimalField(max_digits=5, decimal_places=2)


# ────────────────────────────────────────────────────────────
# Commissions
# ────────────────────────────────────────────────────────────

class EmployeeCommissionSerializer(serializers.ModelSerializer):
    employee_name = serializers.SerializerMethodField()

    class Meta:
        model = EmployeeCommission
        fields = [
            "id", "employee", "employee_name", "period_month", "period_year",
            "total_clients", "total_investments", "commission_rate",
            "commission_amount", "status", "approved_by", "approved_at",
            "paid_by", "paid_at", "notes", "created_at",
        ]
        read_only_fields = fields

    def get_employee_name(self, obj) -> str:
        return obj.employee.get_full_name() or obj.employee.email


class CommissionRequestSerializer(serializers.Serializer):
    employee = serializers.PrimaryKeyRelatedField(queryset=User.objects.all())
    month = serializers.IntegerField(min_value=1, max_value=12)
    year = serializers.IntegerField(min_value=2000, max_value=2100)
    rate = serializers.DecimalField(max_digits=5, decimal_places=2, min_value=0, max_value=100)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class CommissionCalculationSerializer(serializers.Serializer):
    employee_id = serializers.UUIDField()
    period_month = serializers.IntegerField()
    period_year = serializers.IntegerField()
    total_clients = serializers.IntegerField()
    total_investments = _money()
    commission_rate = serializers.DecimalField(max_digits=5, decimal_places=2)
    commission_amount = _money()


class CommissionStatsSerializer(serializers.Serializer):
    pending_count = serializers.IntegerField()
    pending_amount = _money()
    approved_count = serializers.IntegerField()
    approved_amount = _money()
    paid_count = serializers.IntegerField()
    paid_amount = _money()
