from django.contrib import admin

from .models import Brief


@admin.register(Brief)
class BriefAdmin(admin.ModelAdmin):
    list_display = ["__str__", "client", "design_category", "timeline_type", "budget_range", "status", "created_at"]
    list_filter = ["status", "design_category", "timeline_type", "budget_range"]
    search_fields = ["client__email", "project_description", "requirements"]
    raw_id_fields = ["client"]
