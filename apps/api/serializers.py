"""DRF serializers."""
from rest_framework import serializers

from apps.briefs.models import Brief
from apps.core.utils import normalize_keywords
from apps.designers.models import DesignerProfile
from apps.matching import catalog
from apps.matching.models import Match


class MatchRequestSerializer(serializers.Serializer):
    briefId = serializers.CharField(max_length=64)


class DesignerPreviewSerializer(serializers.Serializer):
    """Designer as a client sees it before unlocking: no contact details."""

    id = serializers.UUIDField(read_only=True)
    firstName = serializers.CharField(source="first_name")
    lastInitial = serializers.CharField(source="last_initial")
    title = serializers.CharField()
    city = serializers.CharField()
    country = serializers.CharField()
    yearsExperience = serializers.IntegerField(source="years_experience")
    rating = serializers.DecimalField(max_digits=3, decimal_places=2, coerce_to_string=False)
    totalProjects = serializers.IntegerField(source="total_projects")
    styleKeywords = serializers.ListField(source="style_keywords", child=serializers.CharField())
    primaryCategories = serializers.ListField(source="primary_categories", child=serializers.CharField())


class RankedMatchSerializer(serializers.Serializer):
    """A scored candidate (``ScoreResult``)."""

    designer = DesignerPreviewSerializer()
    score = serializers.FloatField()
    confidence = serializers.CharField()
    reasons = serializers.ListField(child=serializers.CharField())
    personalizedReasons = serializers.ListField(source="personalized_reasons", child=serializers.CharField())
    matchSummary = serializers.CharField(source="summary")
    scoreBreakdown = serializers.DictField(source="breakdown")
    aiAnalyzed = serializers.BooleanField(source="ai_analyzed")


class BriefDataSerializer(serializers.Serializer):
    """Canonical brief echoed back to the caller."""

    briefId = serializers.CharField(source="brief_id")
    category = serializers.CharField()
    categoryName = serializers.SerializerMethodField()
    timeline = serializers.CharField(source="timeline_bucket")
    budget = serializers.CharField(source="budget_bucket")
    description = serializers.CharField()
    styleKeywords = serializers.ListField(source="style_keywords", child=serializers.CharField())
    industry = serializers.CharField()

    def get_categoryName(self, obj):
        return catalog.category_name(obj.category)


class BriefSerializer(serializers.ModelSerializer):
    design_category = serializers.ChoiceField(choices=list(catalog.DESIGN_CATEGORIES))
    timeline_type = serializers.ChoiceField(choices=list(catalog.TIMELINE_DAYS))
    budget_range = serializers.ChoiceField(choices=list(catalog.BUDGET_LABELS))
    involvement_level = serializers.ChoiceField(
        choices=list(catalog.INVOLVEMENT_TO_COLLABORATION), required=False, allow_blank=True
    )
    design_style_keywords = serializers.ListField(
        child=serializers.CharField(max_length=50), required=False, default=list
    )

    class Meta:
        model = Brief
        fields = [
            "id", "client", "design_category", "timeline_type", "budget_range",
            "project_description", "design_style_keywords", "industry",
            "involvement_level", "communication_preference", "target_audience",
            "project_goal", "avoid_colors_styles", "status", "created_at",
        ]
        read_only_fields = ["id", "client", "status", "created_at"]
        extra_kwargs = {"project_description": {"required": True, "allow_blank": False}}

    def validate_design_style_keywords(self, value):
        return normalize_keywords(value)


class MatchSerializer(serializers.ModelSerializer):
    designer = DesignerPreviewSerializer(read_only=True)
    designer_email = serializers.SerializerMethodField()

    class Meta:
        model = Match
        fields = [
            "id", "brief", "designer", "designer_email", "score", "confidence",
            "reasons", "personalized_reasons", "score_breakdown", "ai_analyzed",
            "status", "unlocked_at", "created_at",
        ]
        read_only_fields = fields

    def get_designer_email(self, obj):
        # contact details are revealed only once unlocked
        if obj.status == Match.Status.UNLOCKED:
            return obj.designer.email
        return None


class DesignerSerializer(serializers.ModelSerializer):
    collaboration_style = serializers.ChoiceField(
        choices=catalog.COLLABORATION_STYLES, required=False, allow_blank=True
    )

    class Meta:
        model = DesignerProfile
        fields = [
            "id", "first_name", "last_name", "email", "title", "city", "country",
            "primary_categories", "secondary_categories", "style_keywords",
            "preferred_industries", "preferred_project_sizes", "turnaround_times",
            "collaboration_style", "years_experience", "rating", "total_projects",
            "is_verified", "is_approved", "approved_at", "rejection_reason", "created_at",
        ]
        read_only_fields = ["is_approved", "approved_at", "rejection_reason", "created_at"]

    def validate_turnaround_times(self, value):
        """``{"<category slug>": <days>}`` with whole, positive day counts."""
        if not isinstance(value, dict):
            raise serializers.ValidationError("Expected an object of category -> days.")
        cleaned = {}
        for category, days in value.items():
            if category not in catalog.DESIGN_CATEGORIES:
                raise serializers.ValidationError(f"Unknown category: {category}")
            if isinstance(days, bool) or not isinstance(days, int) or days < 1:
                raise serializers.ValidationError(
                    f"Turnaround for {category} must be a positive number of days."
                )
            cleaned[category] = days
        return cleaned


class RejectDesignerSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=2000, trim_whitespace=True)
