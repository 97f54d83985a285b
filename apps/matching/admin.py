from django.contrib import admin

from .models import Match


@admin.register(Match)
class MatchAdmin(admin.ModelAdmin):
    list_display = ["brief", "designer", "client", "score", "confidence", "status", "ai_analyzed", "created_at"]
    list_filter = ["status", "confidence", "ai_analyzed"]
    search_fields = ["client__name", "client__email", "designer__email", "designer__last_name"]
    readonly_fields = ["score_breakdown", "match_data", "created_at", "unlocked_at"]
    raw_id_fields = ["brief", "client", "designer"]
