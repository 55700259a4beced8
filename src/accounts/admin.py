from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from .models import User, UserRole


class UserRoleInline(admin.TabularInline):
    model = UserRole
    fk_name = "user"
    extra = 0
    fields = ("role", "created_by", "created_at")
    readonly_fields = ("created_by", "created_at")


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin configuration for employees."""

    # ------------------------------------------------------------------
    # List view
    # ------------------------------------------------------------------
    list_display = (
        "email",
        "first_name",
        "last_name",
        "department",
        "employee_code",
        "is_active",
        "date_joined",
    )
    list_filter = ("department", "is_active", "is_staff", "is_superuser")
    search_fields = ("email", "first_name", "last_name", "phone", "employee_code")
    ordering = ("last_name", "first_name")
    inlines = (UserRoleInline,)

    # ------------------------------------------------------------------
    # Detail / edit view
    # ------------------------------------------------------------------
    fieldsets = (
        (None, {"fields": ("email", "password")}),
        (
            _("Informations personnelles"),
            {"fields": ("first_name", "last_name", "phone", "avatar_url")},
        ),
        (
            _("Poste"),
            {"fields": ("department", "employee_code")},
        ),
        (
            _("Permissions"),
            {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")},
        ),
        (
            _("Dates importantes"),
            {"fields": ("last_login", "date_joined")},
        ),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "first_name", "last_name", "department", "password1", "password2"),
            },
        ),
    )
