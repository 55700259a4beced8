from django.contrib import admin

from .models import EmployeeTarget


@admin.register(EmployeeTarget)
class EmployeeTargetAdmin(admin.ModelAdmin):
    list_display = ("employee", "month", "target_type", "target_value", "current_value", "status")
    list_filter = ("status", "target_type", "month")
    search_fields = ("employee__email", "employee__first_name", "employee__last_name")
    readonly_fields = ("status",)
    raw_id_fields = ("employee", "created_by")
