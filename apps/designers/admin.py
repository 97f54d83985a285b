from django.contrib import admin, messages

from .models import DesignerProfile
from .services import approve_designer, reject_designer


@admin.register(DesignerProfile)
class DesignerProfileAdmin(admin.ModelAdmin):
    list_display = [
        "__str__", "email", "title", "rating", "total_projects",
        "is_verified", "is_approved", "created_at",
    ]
    list_filter = ["is_verified", "is_approved", "collaboration_style"]
    search_fields = ["first_name", "last_name", "email", "title"]
    readonly_fields = ["approved_at", "created_at", "updated_at"]
    actions = ["approve_selected", "reject_selected"]

    @admin.action(description="Approve selected designers")
    def approve_selected(self, request, queryset):
        for designer in queryset:
            approve_designer(designer)
        self.message_user(request, f"{queryset.count()} designer(s) approved.", messages.SUCCESS)

    @admin.action(description="Reject selected designers (profile incomplete)")
    def reject_selected(self, request, queryset):
        for designer in queryset:
            reject_designer(designer, "Your profile is incomplete. Please add portfolio details.")
        self.message_user(request, f"{queryset.count()} designer(s) rejected.", messages.WARNING)
