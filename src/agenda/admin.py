from django.contrib import admin

from .models import MarketingPoster, Meeting


@admin.register(Meeting)
class MeetingAdmin(admin.ModelAdmin):
    list_display = ("title", "meeting_date", "responsible_employee", "created_by")
    search_fields = ("title", "responsible_employee")
    date_hierarchy = "meeting_date"


@admin.register(MarketingPoster)
class MarketingPosterAdmin(admin.ModelAdmin):
    list_display = ("title", "poster_date", "file_name", "uploaded_by")
    search_fields = ("title", "file_name")
    date_hierarchy = "poster_date"
