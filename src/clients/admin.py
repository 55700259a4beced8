from django.contrib import admin

from .models import Client, ClientDeposit, WithdrawalSchedule


class ClientDepositInline(admin.TabularInline):
    model = ClientDeposit
    extra = 0
    fields = ("deposit_number", "amount", "deposit_date", "profit_rate", "status")


class WithdrawalScheduleInline(admin.TabularInline):
    model = WithdrawalSchedule
    extra = 0
    fields = ("due_date", "amount", "status", "completed_date")


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "phone", "status", "assigned_to", "created_at")
    list_filter = ("status",)
    search_fields = ("code", "name", "phone", "national_id")
    raw_id_fields = ("assigned_to", "created_by")
    inlines = (ClientDepositInline,)


@admin.register(ClientDeposit)
class ClientDepositAdmin(admin.ModelAdmin):
    list_display = ("deposit_number", "client", "amount", "deposit_date", "profit_rate", "status")
    list_filter = ("status",)
    search_fields = ("deposit_number", "client__name", "client__code")
    date_hierarchy = "deposit_date"
    raw_id_fields = ("client", "created_by")
    inlines = (WithdrawalScheduleInline,)


@admin.register(WithdrawalSchedule)
class WithdrawalScheduleAdmin(admin.ModelAdmin):
    list_display = ("deposit", "due_date", "amount", "status", "completed_date")
    list_filter = ("status",)
    search_fields = ("deposit__deposit_number", "deposit__client__name")
    date_hierarchy = "due_date"
    raw_id_fields = ("deposit",)
