from django.contrib import admin

from apps.briefs.models import Brief

from .models import Client


class BriefInline(admin.TabularInline):
    model = Brief
    extra = 0
    fields = ["design_category", "timeline_type", "budget_range", "status"]
    show_change_link = True


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ["__str__", "email", "company_name", "match_credits", "created_at"]
    search_fields = ["name", "email", "company_name"]
    raw_id_fields = ["user"]
    inlines = [BriefInline]
