from django.contrib import admin

from .models import EmployeeCommission


@admin.register(EmployeeCommission)
class EmployeeCommissionAdmin(admin.ModelAdmin):
    list_display = (
        "employee",
        "period_month",
        "period_year",
        "total_investments",
        "commission_rate",
        "commission_amount",
        "status",
    )
    list_filter = ("status", "period_year", "period_month")
    search_fields = ("employee__email", "employee__first_name", "employee__last_name")
    readonly_fields = ("approved_by", "approved_at", "paid_by", "paid_at")
    raw_id_fields = ("employee",)
