"""ViewSets and endpoints for API v1."""
from __future__ import annotations

from datetime import date

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.services import create_employee
from agenda.events import filter_events, summarize_events
from agenda.services import build_month_calendar
from api.v1.pagination import StandardResultsSetPagination, parse_limit
from api.v1.permissions import IsAdminOrOwner, IsAdminOrReadOnly, IsAdminRole, session_context
from api.v1.serializers import (
    CalendarEventSerializer,
    CalendarQuerySerializer,
    ClientDepositSerializer,
    ClientSerializer,
    CommissionCalculationSerializer,
    CommissionRequestSerializer,
    CommissionStatsSerializer,
    DashboardStatsSerializer,
    DepositWithdrawalSummarySerializer,
    EmployeeCommissionSerializer,
    EmployeeCreateSerializer,
    EmployeeSerializer,
    EmployeeTargetSerializer,
    MonthlyPerformanceSerializer,
    TargetProgressSerializer,
    TargetStatsSerializer,
    TopEmployeeSerializer,
    TopPerformerSerializer,
    UpcomingWithdrawalSerializer,
    WithdrawalCompleteSerializer,
    WithdrawalScheduleSerializer,
    WithdrawalStatsSerializer,
)
from clients.models import ClientDeposit, WithdrawalSchedule
from clients.services import (
    deposit_withdrawal_summary,
    get_withdrawal_stats,
    list_overdue_withdrawals,
    list_upcoming_withdrawals,
    mark_withdrawal_completed,
    schedule_withdrawal,
)
from commissions.models import EmployeeCommission
from commissions.services import (
    approve_commission,
    calculate_commission,
    generate_commission,
    get_commission_stats,
    mark_commission_paid,
)
from core.errors import ApiError
from core.periods import parse_period, period_key
from reports.services import (
    get_dashboard_stats,
    get_monthly_performance,
    get_recent_clients,
    get_top_employees,
    get_upcoming_withdrawals,
)
from targets.models import EmployeeTarget
from targets.services import get_target_stats, get_top_performers, update_target_progress


# ────────────────────────────────────────────────────────────
# Dashboard
# ────────────────────────────────────────────────────────────

class DashboardStatsView(APIView):
    """GET /api/v1/dashboard/stats/"""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        stats = get_dashboard_stats()
        return Response(DashboardStatsSerializer(stats.as_dict()).data)


class MonthlyPerformanceView(APIView):
    """GET /api/v1/dashboard/monthly-performance/"""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(MonthlyPerformanceSerializer(get_monthly_performance()).data)


class TopEmployeesView(APIView):
    """GET /api/v1/dashboard/top-employees/?limit=5"""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        limit = parse_limit(request.query_params.get("limit"), settings.DASHBOARD_TOP_EMPLOYEES_LIMIT)
        return Response(TopEmployeeSerializer(get_top_employees(limit), many=True).data)


class RecentClientsView(APIView):
    """GET /api/v1/dashboard/recent-clients/?limit=10"""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        limit = parse_limit(request.query_params.get("limit"), settings.DASHBOARD_RECENT_CLIENTS_LIMIT)
        return Response(ClientSerializer(get_recent_clients(limit), many=True).data)


class UpcomingWithdrawalsView(APIView):
    """GET /api/v1/dashboard/upcoming-withdrawals/?limit=10"""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        limit = parse_limit(request.query_params.get("limit"), 10)
        return Response(UpcomingWithdrawalSerializer(get_upcoming_withdrawals(limit), many=True).data)


# ────────────────────────────────────────────────────────────
# Calendar
# ────────────────────────────────────────────────────────────

class CalendarView(APIView):
    """GET /api/v1/calendar/?year=2024&month=2&type=withdraw&status=late&date=&client="""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        query = CalendarQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        today = timezone.localdate()
        year = params.get("year", today.year)
        month = params.get("month", today.month)

        events = build_month_calendar(year, month, client_id=params.get("client"), today=today)
        events = filter_events(
            events,
            event_type=params.get("type"),
            status=params.get("status"),
            on=params.get("date"),
        )
        rows = [
            {key: value for key, value in row.items() if value is not None}
            for row in CalendarEventSerializer(events, many=True).data
        ]
        summary = summarize_events(events)
        summary["withdrawals_due"] = f"{summary['withdrawals_due']:.2f}"
        return Response({"year": year, "month": month, "events": rows, "summary": summary})


# ────────────────────────────────────────────────────────────
# Deposits & withdrawals
# ────────────────────────────────────────────────────────────

class DepositViewSet(viewsets.ReadOnlyModelViewSet):
    """Read-only deposits with their payout summary."""

    queryset = ClientDeposit.objects.select_related("client").all()
    serializer_class = ClientDepositSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["client", "status"]
    search_fields = ["deposit_number", "client__name", "client__code"]
    ordering_fields = ["deposit_date", "amount", "created_at"]
    pagination_class = StandardResultsSetPagination

    @action(detail=True, methods=["get"])
    def summary(self, request, pk=None):
        deposit = self.get_object()
        return Response(DepositWithdrawalSummarySerializer(deposit_withdrawal_summary(deposit)).data)


class WithdrawalScheduleViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    """Payout schedules: listing, planning and settlement."""

    queryset = WithdrawalSchedule.objects.select_related("deposit", "deposit__client").all()
    serializer_class = WithdrawalScheduleSerializer
    permission_classes = [IsAuthenticated, IsAdminOrReadOnly]
    filterset_fields = {
        "status": ["exact"],
        "deposit": ["exact"],
        "due_date": ["gte", "lte"],
    }
    search_fields = ["deposit__deposit_number", "deposit__client__name"]
    ordering_fields = ["due_date", "amount", "created_at"]
    pagination_class = StandardResultsSetPagination

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        schedule = schedule_withdrawal(
            serializer.validated_data["deposit"],
            serializer.validated_data["due_date"],
            serializer.validated_data["amount"],
            notes=serializer.validated_data.get("notes", ""),
        )
        return Response(self.get_serializer(schedule).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"])
    def complete(self, request, pk=None):
        payload = WithdrawalCompleteSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        schedule = mark_withdrawal_completed(self.get_object().pk, paid_date=payload.validated_data.get("paid_date"))
        return Response(self.get_serializer(schedule).data)

    @action(detail=False, methods=["get"])
    def stats(self, request):
        return Response(WithdrawalStatsSerializer(get_withdrawal_stats()).data)

    @action(detail=False, methods=["get"])
    def upcoming(self, request):
        days = parse_limit(request.query_params.get("days"), settings.UPCOMING_WITHDRAWALS_DAYS, maximum=366)
        schedules = list_upcoming_withdrawals(days=days)
        return Response(self.get_serializer(schedules, many=True).data)

    @action(detail=False, methods=["get"])
    def overdue(self, request):
        return Response(self.get_serializer(list_overdue_withdrawals(), many=True).data)


# ────────────────────────────────────────────────────────────
# Targets
# ────────────────────────────────────────────────────────────

def _month_param(request):
    """Normalized ``"YYYY-MM"`` from ``?month=``, or ``None`` when absent."""
    value = request.query_params.get("month")
    if not value:
        return None
    try:
        year, month = parse_period(value)
        return period_key(date(year, month, 1))
    except ValueError:
        raise ValidationError({"month": "Format de mois invalide. Utilisez YYYY-MM."})


class EmployeeTargetViewSet(viewsets.ModelViewSet):
    """Monthly targets. Employees only see their own."""

    queryset = EmployeeTarget.objects.select_related("employee").all()
    serializer_class = EmployeeTargetSerializer
    permission_classes = [IsAuthenticated, IsAdminOrReadOnly]
    filterset_fields = ["employee", "month", "status", "target_type"]
    ordering_fields = ["month", "created_at", "target_value", "current_value"]
    pagination_class = StandardResultsSetPagination

    def get_permissions(self):
        if self.action == "progress":
            return [IsAuthenticated(), IsAdminOrOwner()]
        return super().get_permissions()

    def get_queryset(self):
        qs = super().get_queryset()
        context = session_context(self.request)
        if context.is_admin:
            return qs
        return qs.filter(employee=context.user)

    def perform_create(self, serializer):
        try:
            with transaction.atomic():
                serializer.save(created_by=session_context(self.request).user)
        except IntegrityError as exc:
            raise ApiError.from_database_error(exc) from exc

    def perform_update(self, serializer):
        try:
            with transaction.atomic():
                serializer.save()
        except IntegrityError as exc:
            raise ApiError.from_database_error(exc) from exc

    @action(detail=True, methods=["post"])
    def progress(self, request, pk=None):
        target = self.get_object()
        payload = TargetProgressSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        target = update_target_progress(target.pk, payload.validated_data["current_value"])
        return Response(self.get_serializer(target).data)

    @action(detail=False, methods=["get"])
    def stats(self, request):
        context = session_context(request)
        employee_id = request.query_params.get("employee") if context.is_admin else context.user.pk
        stats = get_target_stats(employee_id=employee_id, month=_month_param(request))
        return Response(TargetStatsSerializer(stats).data)

    @action(detail=False, methods=["get"], url_path="top-performers")
    def top_performers(self, request):
        limit = parse_limit(request.query_params.get("limit"), settings.TOP_PERFORMERS_LIMIT)
        ranked = get_top_performers(month=_month_param(request), limit=limit)
        return Response(TopPerformerSerializer(ranked, many=True).data)


# ────────────────────────────────────────────────────────────
# Commissions
# ────────────────────────────────────────────────────────────

class EmployeeCommissionViewSet(viewsets.ReadOnlyModelViewSet):
    """Commission records and their approval workflow."""

    queryset = EmployeeCommission.objects.select_related("employee").all()
    serializer_class = EmployeeCommissionSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["employee", "status", "period_month", "period_year"]
    ordering_fields = ["period_year", "period_month", "commission_amount", "created_at"]
    pagination_class = StandardResultsSetPagination

    def get_permissions(self):
        if self.action in ("calculate", "generate", "approve", "pay"):
            return [IsAuthenticated(), IsAdminRole()]
        return super().get_permissions()

    def get_queryset(self):
        qs = super().get_queryset()
        context = session_context(self.request)
        if context.is_admin:
            return qs
        return qs.filter(employee=context.user)

    def _request_payload(self, request):
        payload = CommissionRequestSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        return payload.validated_data

    @action(detail=False, methods=["post"])
    def calculate(self, request):
        data = self._request_payload(request)
        figures = calculate_commission(data["employee"].pk, data["month"], data["year"], data["rate"])
        return Response(CommissionCalculationSerializer(figures).data)

    @action(detail=False, methods=["post"])
    def generate(self, request):
        data = self._request_payload(request)
        commission = generate_commission(
            data["employee"].pk,
            data["month"],
            data["year"],
            data["rate"],
            notes=data.get("notes", ""),
        )
        return Response(self.get_serializer(commission).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):
        commission = approve_commission(self.get_object().pk, actor=session_context(request).user)
        return Response(self.get_serializer(commission).data)

    @action(detail=True, methods=["post"])
    def pay(self, request, pk=None):
        commission = mark_commission_paid(self.get_object().pk, actor=session_context(request).user)
        return Response(self.get_serializer(commission).data)

    @action(detail=False, methods=["get"])
    def stats(self, request):
        context = session_context(request)
        employee_id = request.query_params.get("employee") if context.is_admin else context.user.pk
        return Response(CommissionStatsSerializer(get_commission_stats(employee_id=employee_id)).data)


# ────────────────────────────────────────────────────────────
# Employees
# ────────────────────────────────────────────────────────────

class EmployeeCreateView(APIView):
    """POST /api/v1/employees/"""

    permission_classes = [IsAuthenticated, IsAdminRole]

    def post(self, request):
        serializer = EmployeeCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        employee = create_employee(
            email=data.pop("email"),
            password=data.pop("password"),
            first_name=data.pop("first_name"),
            last_name=data.pop("last_name"),
            roles=data.pop("roles"),
            actor=session_context(request).user,
            **data,
        )
        return Response(EmployeeSerializer(employee).data, status=status.HTTP_201_CREATED)
